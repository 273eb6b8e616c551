"""Entry point that hands shared attachments over to the host app."""

from __future__ import annotations

import argparse
import asyncio
import logging
import tempfile
from pathlib import Path
import sys

from dotenv import load_dotenv

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from share_handoff.codec import deserialize_items, item_to_dict
from share_handoff.config import Settings
from share_handoff.errors import ShareError
from share_handoff.extension import ShareExtension
from share_handoff.host import app_group, host_bundle_id
from share_handoff.loader import ManifestLoader, load_manifest
from share_handoff.shared_store import SharedStore

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify shared attachments and hand them to the host app.")
    parser.add_argument("--manifest", type=Path, help="JSON list of attachment descriptors")
    parser.add_argument("--bundle-id", help="Override SHARE_EXTENSION_BUNDLE_ID")
    parser.add_argument(
        "--include-text",
        action="store_true",
        help="Classify plain-text attachments (skipped by default)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Classify in a scratch container without publishing or waking the host",
    )
    parser.add_argument(
        "--show-pending",
        action="store_true",
        help="Print the payload currently waiting for the host app",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.bundle_id:
        overrides["extension_bundle_id"] = args.bundle_id
    if args.include_text:
        overrides["classify_text"] = True
    return Settings(**overrides)


def show_pending(settings: Settings) -> None:
    host = host_bundle_id(settings.extension_bundle_id)
    store = SharedStore(settings.shared_store_db)
    payload = store.get(app_group(host), settings.shared_items_key)
    if payload is None:
        logging.info("No pending shared items for %s", host)
        return
    for item in deserialize_items(payload):
        print(item_to_dict(item))


async def run(args: argparse.Namespace, settings: Settings) -> None:
    descriptors = load_manifest(args.manifest)

    if args.dry_run:
        # Copies and previews land in a scratch container that is discarded afterwards.
        with tempfile.TemporaryDirectory(prefix="share-dry-run-") as scratch:
            scratch_settings = settings.model_copy(
                update={
                    "container_root": Path(scratch) / "containers",
                    "shared_store_db": Path(scratch) / "shared.db",
                }
            )
            extension = ShareExtension.from_settings(scratch_settings, ManifestLoader())
            items = await extension.pipeline.run(descriptors)
            for item in items:
                logging.info("[DRY-RUN] Would share %s", item_to_dict(item))
    else:
        extension = ShareExtension.from_settings(settings, ManifestLoader())
        items = await extension.handle(descriptors)

    logging.info(
        "Run complete: attachments=%s shared=%s failed=%s",
        len(descriptors),
        len(items),
        len(extension.pipeline.failures),
    )


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    settings = load_settings(args)
    configure_logging(settings.log_level)

    try:
        if args.show_pending:
            show_pending(settings)
            return
        if not args.manifest:
            parser.error("--manifest is required unless --show-pending is given")
        asyncio.run(run(args, settings))
    except ShareError as exc:
        logging.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()

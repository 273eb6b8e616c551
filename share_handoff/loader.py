"""Payload loading for attachment descriptors."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from .errors import LoadFailed
from .models import AttachmentDescriptor, LoadedLocation, LoadedText, LoadedValue
from .type_identifiers import TEXT, conforms_to

logger = logging.getLogger(__name__)


class PayloadLoader(Protocol):
    async def load_item(
        self, descriptor: AttachmentDescriptor, type_identifier: str
    ) -> LoadedValue: ...


class ManifestLoader:
    """Resolve payloads that were captured alongside the descriptor.

    A payload entry is either a plain string, interpreted by the requested
    identifier (text identifiers yield text, everything else a location), or
    an object with exactly one of ``text``, ``location`` or ``path``.
    """

    async def load_item(
        self, descriptor: AttachmentDescriptor, type_identifier: str
    ) -> LoadedValue:
        raw = self._lookup(descriptor, type_identifier)
        if raw is None:
            raise LoadFailed(f"No payload registered for {type_identifier}")
        return self._to_value(raw, type_identifier)

    @staticmethod
    def _lookup(descriptor: AttachmentDescriptor, type_identifier: str) -> Any:
        if type_identifier in descriptor.payloads:
            return descriptor.payloads[type_identifier]
        for registered, raw in descriptor.payloads.items():
            if conforms_to(registered, type_identifier):
                return raw
        return None

    @staticmethod
    def _to_value(raw: Any, type_identifier: str) -> LoadedValue:
        if isinstance(raw, str):
            if conforms_to(type_identifier, TEXT):
                return LoadedText(type_identifier, raw)
            return LoadedLocation(type_identifier, raw)
        if isinstance(raw, dict):
            if "text" in raw:
                return LoadedText(type_identifier, str(raw["text"]))
            if "location" in raw:
                return LoadedLocation(type_identifier, str(raw["location"]))
            if "path" in raw:
                return LoadedLocation(type_identifier, Path(raw["path"]).resolve().as_uri())
        raise LoadFailed(f"Unrecognized payload for {type_identifier}: {raw!r}")


def load_manifest(path: Path) -> list[AttachmentDescriptor]:
    """Read descriptors from a JSON list; relative ``path`` payloads resolve against the manifest."""
    try:
        entries = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise LoadFailed(f"Unable to read manifest {path}: {exc}") from exc
    if not isinstance(entries, list):
        raise LoadFailed(f"Manifest {path} must contain a JSON list")

    base = path.resolve().parent
    descriptors: list[AttachmentDescriptor] = []
    for entry in entries:
        payloads: dict[str, Any] = {}
        for type_identifier, raw in (entry.get("payloads") or {}).items():
            if isinstance(raw, dict) and "path" in raw:
                raw = {"path": str(base / raw["path"])}
            payloads[type_identifier] = raw
        descriptors.append(
            AttachmentDescriptor(
                registered_type_identifiers=list(entry.get("types") or payloads.keys()),
                suggested_name=entry.get("name"),
                payloads=payloads,
            )
        )
    logger.debug("Loaded %s descriptors from %s", len(descriptors), path)
    return descriptors

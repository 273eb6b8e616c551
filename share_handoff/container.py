"""App-group file container readable by both the extension and the host."""

from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path

from .errors import CopyFailed
from .host import app_group, host_bundle_id

logger = logging.getLogger(__name__)


class SharedContainer:
    """Directory ``<root>/group.<host>`` that outlives the extension process."""

    def __init__(self, root: Path, extension_bundle_id: str | None) -> None:
        self.root = root.resolve()
        self.extension_bundle_id = extension_bundle_id

    @property
    def path(self) -> Path:
        # Raises MissingHostIdentity; callers treat it like any other share failure.
        host = host_bundle_id(self.extension_bundle_id)
        return self.root / app_group(host)

    def location_for(self, name: str) -> Path:
        directory = self.path
        directory.mkdir(parents=True, exist_ok=True)
        return directory / name

    def exists(self, path: Path) -> bool:
        return path.exists()

    def remove(self, path: Path) -> None:
        path.unlink()

    def copy(self, src: Path, dest: Path) -> None:
        shutil.copyfile(src, dest)

    def copy_file_to_host(self, source: Path, file_name: str | None = None) -> Path:
        """Copy ``source`` into the container, replacing any file with the same name."""
        name = file_name or source.name or str(uuid.uuid4()).upper()
        destination = self.path / name
        try:
            destination = self.location_for(name)
            if self.exists(destination):
                logger.debug("Replacing stale shared file %s", destination)
                self.remove(destination)
            self.copy(source, destination)
        except OSError as exc:
            raise CopyFailed(f"Unable to copy {source} to {destination}: {exc}") from exc
        return destination

"""Typed containers shared across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Optional, Union
from urllib.parse import unquote, urlparse

from .type_identifiers import conforms_to


@dataclass(frozen=True)
class AttachmentDescriptor:
    """Opaque handle for one shared attachment."""

    registered_type_identifiers: list[str]
    suggested_name: Optional[str] = None
    payloads: dict[str, Any] = field(default_factory=dict)

    def has_item_conforming_to(self, type_identifier: str) -> bool:
        return any(
            conforms_to(registered, type_identifier)
            for registered in self.registered_type_identifiers
        )


@dataclass(frozen=True)
class LoadedText:
    """Loader result for text identifiers."""

    type_identifier: str
    text: str


@dataclass(frozen=True)
class LoadedLocation:
    """Loader result for URL-shaped identifiers."""

    type_identifier: str
    location: str

    @property
    def is_file_url(self) -> bool:
        return urlparse(self.location).scheme == "file"

    @property
    def path(self) -> Path:
        """Local filesystem path of a ``file://`` location."""
        return Path(unquote(urlparse(self.location).path))


LoadedValue = Union[LoadedText, LoadedLocation]


@dataclass(frozen=True)
class VideoInfo:
    """Copied video plus its still preview."""

    video_location: str
    preview_location: str
    duration_millis: float


@dataclass(frozen=True)
class TextItem:
    kind: ClassVar[str] = "text"
    text: str


@dataclass(frozen=True)
class URLItem:
    kind: ClassVar[str] = "url"
    location: str


@dataclass(frozen=True)
class FileItem:
    kind: ClassVar[str] = "file"
    location: str


@dataclass(frozen=True)
class ImageItem:
    kind: ClassVar[str] = "image"
    location: str


@dataclass(frozen=True)
class VideoItem:
    kind: ClassVar[str] = "video"
    info: VideoInfo


SharedItem = Union[TextItem, URLItem, FileItem, ImageItem, VideoItem]

"""Turn loaded attachment values into durable shared items."""

from __future__ import annotations

import logging

from .container import SharedContainer
from .errors import TypeMismatch
from .models import (
    FileItem,
    ImageItem,
    LoadedLocation,
    LoadedText,
    LoadedValue,
    SharedItem,
    TextItem,
    URLItem,
    VideoInfo,
    VideoItem,
)
from .thumbnail import ThumbnailDeriver, round_millis

logger = logging.getLogger(__name__)

LOCATION_KINDS = ("url", "file", "image", "video")


class ContentNormalizer:
    """Copy file-backed content into the shared container and tag the result."""

    def __init__(self, container: SharedContainer, thumbnails: ThumbnailDeriver) -> None:
        self.container = container
        self.thumbnails = thumbnails

    def normalize(self, raw_value: LoadedValue, kind: str) -> SharedItem:
        if kind == "text":
            if not isinstance(raw_value, LoadedText):
                raise TypeMismatch(f"Expected text for {raw_value.type_identifier}, got a location")
            return TextItem(raw_value.text)

        if kind not in LOCATION_KINDS:
            raise TypeMismatch(f"Unknown item kind {kind!r}")
        if not isinstance(raw_value, LoadedLocation):
            raise TypeMismatch(f"Expected a location for {raw_value.type_identifier}, got text")

        if not raw_value.is_file_url:
            return URLItem(raw_value.location)

        copied = self.container.copy_file_to_host(raw_value.path)
        logger.debug("Copied %s to %s", raw_value.path, copied)
        location = copied.as_uri()

        if kind == "image":
            return ImageItem(location)
        if kind == "video":
            seconds = self.thumbnails.duration_seconds(copied)
            preview = self.thumbnails.derive(copied, seconds)
            return VideoItem(
                VideoInfo(
                    video_location=location,
                    preview_location=preview.as_uri(),
                    duration_millis=round_millis(seconds),
                )
            )
        # file-backed url and file kinds are both generic files once copied
        return FileItem(location)

"""Video preview extraction."""

from __future__ import annotations

import logging
import math
import uuid
from pathlib import Path
from typing import Protocol

import cv2
from PIL import Image

from .container import SharedContainer
from .errors import ThumbnailFailed

logger = logging.getLogger(__name__)

PREVIEW_FORMAT = "PNG"


def round_millis(seconds: float) -> float:
    """Seconds to whole milliseconds, halves rounded up."""
    return float(math.floor(seconds * 1000 + 0.5))


class VideoProbe(Protocol):
    def duration_seconds(self, path: Path) -> float: ...

    def frame_at(self, path: Path, seconds: float) -> Image.Image: ...


class OpenCVVideoProbe:
    """Reads duration and frames through ``cv2.VideoCapture``."""

    def _open(self, path: Path):
        capture = cv2.VideoCapture(str(path))
        if not capture.isOpened():
            capture.release()
            raise ThumbnailFailed(f"Cannot open video: {path}")
        return capture

    def duration_seconds(self, path: Path) -> float:
        capture = self._open(path)
        try:
            fps = capture.get(cv2.CAP_PROP_FPS)
            frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT)
        finally:
            capture.release()
        if fps <= 0 or frame_count <= 0:
            return 0.0
        return frame_count / fps

    def frame_at(self, path: Path, seconds: float) -> Image.Image:
        capture = self._open(path)
        try:
            capture.set(cv2.CAP_PROP_POS_MSEC, seconds * 1000)
            ok, frame = capture.read()
        finally:
            capture.release()
        if not ok or frame is None:
            raise ThumbnailFailed(f"No frame decoded at {seconds:.3f}s in {path}")
        return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))


class ThumbnailDeriver:
    """Write a bounded PNG still for a video into the shared container."""

    def __init__(
        self,
        container: SharedContainer,
        probe: VideoProbe | None = None,
        seek_seconds: float = 1.0,
        max_dimension: int = 360,
    ) -> None:
        self.container = container
        self.probe = probe or OpenCVVideoProbe()
        self.seek_seconds = seek_seconds
        self.max_dimension = max_dimension

    def duration_seconds(self, video_path: Path) -> float:
        return max(self.probe.duration_seconds(video_path), 0.0)

    def derive(self, video_path: Path, duration_seconds: float | None = None) -> Path:
        """Write the preview; pass ``duration_seconds`` when already probed."""
        if duration_seconds is None:
            duration_seconds = self.duration_seconds(video_path)
        if duration_seconds <= 0:
            raise ThumbnailFailed(f"Video has no duration: {video_path}")

        # Leading frames are often black; clamp so short clips still land inside the media.
        offset = min(self.seek_seconds, duration_seconds / 2)
        frame = self.probe.frame_at(video_path, offset)

        preview = frame.copy()
        preview.thumbnail((self.max_dimension, self.max_dimension))
        destination = self.container.location_for(f"{str(uuid.uuid4()).upper()}.png")
        try:
            preview.save(destination, format=PREVIEW_FORMAT)
        except OSError as exc:
            raise ThumbnailFailed(f"Unable to write preview {destination}: {exc}") from exc

        logger.debug(
            "Derived %sx%s preview for %s at %.3fs", preview.width, preview.height, video_path, offset
        )
        return destination

"""JSON wire format for shared items.

Each item is a single-key object naming its kind, wrapping the payload under
``_0``. Videos carry ``videoURL``, ``previewURL`` and ``duration`` (ms)::

    [{"text": {"_0": "hello"}},
     {"video": {"_0": {"videoURL": "file:///...", "previewURL": "file:///...", "duration": 2500.0}}}]
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from .errors import SerializationFailed
from .models import FileItem, ImageItem, SharedItem, TextItem, URLItem, VideoInfo, VideoItem

_LOCATION_TYPES = {"url": URLItem, "file": FileItem, "image": ImageItem}


def item_to_dict(item: SharedItem) -> dict[str, Any]:
    if isinstance(item, TextItem):
        value: Any = item.text
    elif isinstance(item, VideoItem):
        value = {
            "videoURL": item.info.video_location,
            "previewURL": item.info.preview_location,
            "duration": item.info.duration_millis,
        }
    elif isinstance(item, (URLItem, FileItem, ImageItem)):
        value = item.location
    else:
        raise SerializationFailed(f"Not a shared item: {item!r}")
    return {item.kind: {"_0": value}}


def item_from_dict(raw: Any) -> SharedItem:
    if not isinstance(raw, dict) or len(raw) != 1:
        raise SerializationFailed(f"Expected a single-key object, got {raw!r}")
    (kind, wrapper), = raw.items()
    if not isinstance(wrapper, dict) or "_0" not in wrapper:
        raise SerializationFailed(f"Missing payload for {kind!r}")
    value = wrapper["_0"]

    if kind == "text" and isinstance(value, str):
        return TextItem(value)
    if kind in _LOCATION_TYPES and isinstance(value, str):
        return _LOCATION_TYPES[kind](value)
    if kind == "video" and isinstance(value, dict):
        try:
            return VideoItem(
                VideoInfo(
                    video_location=str(value["videoURL"]),
                    preview_location=str(value["previewURL"]),
                    duration_millis=float(value["duration"]),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SerializationFailed(f"Malformed video payload: {value!r}") from exc
    raise SerializationFailed(f"Unknown or malformed item {kind!r}")


def serialize_items(items: Iterable[SharedItem]) -> bytes:
    try:
        return json.dumps([item_to_dict(item) for item in items], allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationFailed(f"Unable to encode shared items: {exc}") from exc


def deserialize_items(payload: bytes) -> list[SharedItem]:
    try:
        raw = json.loads(payload)
    except ValueError as exc:
        raise SerializationFailed(f"Unable to decode shared items: {exc}") from exc
    if not isinstance(raw, list):
        raise SerializationFailed("Shared items payload must be a JSON list")
    return [item_from_dict(entry) for entry in raw]

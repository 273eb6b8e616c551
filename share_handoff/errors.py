"""Failures raised while classifying and handing off shared content."""

from __future__ import annotations


class ShareError(Exception):
    """Base class for every handoff failure."""


class UnsupportedType(ShareError):
    """No classifier rule matched the attachment's type identifiers."""


class TypeMismatch(ShareError):
    """A loaded value does not have the shape its kind requires."""


class LoadFailed(ShareError):
    """The payload loader could not produce a value."""


class CopyFailed(ShareError):
    """A file could not be materialized into the shared container."""


class ThumbnailFailed(ShareError):
    """No preview frame could be extracted from a video."""


class MissingHostIdentity(ShareError):
    """The host bundle id could not be derived from the extension's."""


class SerializationFailed(ShareError):
    """Shared items could not be encoded or decoded."""


class PublishFailed(ShareError):
    """Writing to the shared store or waking the host failed."""

"""Naming conventions that tie the extension to its host app."""

from __future__ import annotations

from .errors import MissingHostIdentity

WAKE_URL_TEMPLATE = "ShareMedia-{host}://newData"


def host_bundle_id(extension_bundle_id: str | None) -> str:
    """Strip the trailing component: ``com.example.app.Share`` -> ``com.example.app``."""
    if not extension_bundle_id or "." not in extension_bundle_id:
        raise MissingHostIdentity(f"Cannot derive host bundle id from {extension_bundle_id!r}")
    host, _, _ = extension_bundle_id.rpartition(".")
    if not host:
        raise MissingHostIdentity(f"Cannot derive host bundle id from {extension_bundle_id!r}")
    return host


def app_group(host: str) -> str:
    """Namespace shared by the extension and the host."""
    return f"group.{host}"


def wake_url(host: str) -> str:
    return WAKE_URL_TEMPLATE.format(host=host)

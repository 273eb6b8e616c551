"""Publish classified items to the host app and wake it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from .codec import serialize_items
from .errors import ShareError
from .host import app_group, host_bundle_id, wake_url
from .models import SharedItem
from .shared_store import SharedStore
from .wake import WakeSignal

if TYPE_CHECKING:
    from .extension import ExtensionContext

logger = logging.getLogger(__name__)


class HandoffPublisher:
    """Best-effort handoff: failures are logged, the request always completes."""

    def __init__(
        self,
        *,
        extension_bundle_id: str | None,
        store: SharedStore,
        wake_signal: WakeSignal,
        context: "ExtensionContext",
        key: str,
    ) -> None:
        self.extension_bundle_id = extension_bundle_id
        self.store = store
        self.wake_signal = wake_signal
        self.context = context
        self.key = key

    def publish(self, items: Sequence[SharedItem]) -> None:
        try:
            self._handoff(items)
        except ShareError as exc:
            logger.error("Handoff to host app failed: %s", exc)
        except Exception:
            logger.exception("Handoff to host app failed")
        finally:
            self.context.complete_request()

    def _handoff(self, items: Sequence[SharedItem]) -> None:
        host = host_bundle_id(self.extension_bundle_id)
        payload = serialize_items(items)

        namespace = app_group(host)
        self.store.set(namespace, self.key, payload)
        logger.info("Stored %s shared items under %s/%s", len(items), namespace, self.key)

        url = wake_url(host)
        self.wake_signal.open_url(url)
        logger.debug("Sent wake signal %s", url)

"""Extension request lifecycle and top-level wiring."""

from __future__ import annotations

import logging
from typing import Sequence

from .classifier import AttachmentClassifier
from .config import Settings
from .container import SharedContainer
from .loader import PayloadLoader
from .models import AttachmentDescriptor, SharedItem
from .normalizer import ContentNormalizer
from .pipeline import BatchPipeline
from .publisher import HandoffPublisher
from .shared_store import SharedStore
from .thumbnail import ThumbnailDeriver, VideoProbe
from .wake import HttpWakeRelay, SystemUrlOpener, WakeSignal

logger = logging.getLogger(__name__)


class ExtensionContext:
    """Tracks whether the share request has been handed back to the OS."""

    def __init__(self) -> None:
        self.completed = False

    def complete_request(self) -> None:
        if self.completed:
            logger.debug("Share request already completed")
            return
        self.completed = True
        logger.info("Share request completed")


class ShareExtension:
    """Classify every attachment, then publish the batch to the host."""

    def __init__(
        self,
        pipeline: BatchPipeline,
        publisher: HandoffPublisher,
        context: ExtensionContext,
    ) -> None:
        self.pipeline = pipeline
        self.publisher = publisher
        self.context = context

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        loader: PayloadLoader,
        *,
        wake_signal: WakeSignal | None = None,
        probe: VideoProbe | None = None,
        context: ExtensionContext | None = None,
    ) -> "ShareExtension":
        container = SharedContainer(settings.container_root, settings.extension_bundle_id)
        thumbnails = ThumbnailDeriver(
            container,
            probe=probe,
            seek_seconds=settings.thumbnail_seek_seconds,
            max_dimension=settings.thumbnail_max_dimension,
        )
        classifier = AttachmentClassifier(
            loader,
            ContentNormalizer(container, thumbnails),
            include_text=settings.classify_text,
        )
        if wake_signal is None:
            if settings.wake_relay_url:
                wake_signal = HttpWakeRelay(str(settings.wake_relay_url))
            else:
                wake_signal = SystemUrlOpener()
        context = context or ExtensionContext()
        publisher = HandoffPublisher(
            extension_bundle_id=settings.extension_bundle_id,
            store=SharedStore(settings.shared_store_db),
            wake_signal=wake_signal,
            context=context,
            key=settings.shared_items_key,
        )
        return cls(BatchPipeline(classifier), publisher, context)

    async def handle(self, descriptors: Sequence[AttachmentDescriptor]) -> list[SharedItem]:
        items: list[SharedItem] = []
        try:
            items = await self.pipeline.run(descriptors)
            self.publisher.publish(items)
        finally:
            self.context.complete_request()
        return items

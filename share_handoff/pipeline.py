"""Sequential classification over an ordered batch of attachments."""

from __future__ import annotations

import logging
from typing import Iterable

from .classifier import AttachmentClassifier
from .errors import ShareError
from .models import AttachmentDescriptor, SharedItem

logger = logging.getLogger(__name__)


class BatchPipeline:
    """Classify descriptors one at a time, dropping the ones that fail."""

    def __init__(self, classifier: AttachmentClassifier) -> None:
        self.classifier = classifier
        self.failures: list[tuple[int, Exception]] = []

    async def run(self, descriptors: Iterable[AttachmentDescriptor]) -> list[SharedItem]:
        items: list[SharedItem] = []
        self.failures = []
        for index, descriptor in enumerate(descriptors):
            try:
                item = await self.classifier.classify(descriptor)
            except ShareError as exc:
                logger.warning("Failed to parse attachment %s: %s", index, exc)
                self.failures.append((index, exc))
                continue
            except Exception as exc:
                logger.warning("Failed to parse attachment %s: %s", index, exc, exc_info=True)
                self.failures.append((index, exc))
                continue
            items.append(item)
        logger.info("Classified %s of %s attachments", len(items), len(items) + len(self.failures))
        return items

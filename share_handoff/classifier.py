"""Pick one content kind per attachment and normalize it."""

from __future__ import annotations

import logging
from typing import NamedTuple

from . import type_identifiers as uti
from .errors import UnsupportedType
from .loader import PayloadLoader
from .models import AttachmentDescriptor, SharedItem
from .normalizer import ContentNormalizer

logger = logging.getLogger(__name__)


class Rule(NamedTuple):
    type_identifier: str
    kind: str


# Image and video file URLs also conform to the file-url/url identifiers,
# so the specific kinds must be tried first.
DEFAULT_RULES: tuple[Rule, ...] = (
    Rule(uti.IMAGE, "image"),
    Rule(uti.MOVIE, "video"),
    Rule(uti.FILE_URL, "file"),
    Rule(uti.URL, "url"),
)
TEXT_RULE = Rule(uti.TEXT, "text")


class AttachmentClassifier:
    """First matching rule wins; the loader is asked once, for that rule's identifier."""

    def __init__(
        self,
        loader: PayloadLoader,
        normalizer: ContentNormalizer,
        include_text: bool = False,
    ) -> None:
        self.loader = loader
        self.normalizer = normalizer
        self.rules = DEFAULT_RULES + ((TEXT_RULE,) if include_text else ())

    def match(self, descriptor: AttachmentDescriptor) -> Rule:
        for rule in self.rules:
            if descriptor.has_item_conforming_to(rule.type_identifier):
                return rule
        raise UnsupportedType(
            f"No rule for type identifiers {descriptor.registered_type_identifiers}"
        )

    async def classify(self, descriptor: AttachmentDescriptor) -> SharedItem:
        rule = self.match(descriptor)
        logger.debug(
            "Attachment %s matched %s as %s",
            descriptor.suggested_name or descriptor.registered_type_identifiers,
            rule.type_identifier,
            rule.kind,
        )
        raw_value = await self.loader.load_item(descriptor, rule.type_identifier)
        return self.normalizer.normalize(raw_value, rule.kind)

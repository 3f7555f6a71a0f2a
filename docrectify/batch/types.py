"""
Data types for batch processing of document groups.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from docrectify.batch.messages import translate


class ItemKind(Enum):
    """Kind of a document group item. Only images are rectified."""

    IMAGE = "image"
    PDF = "pdf"


@dataclass
class ImageItem:
    """
    One page source inside a document group.

    Attributes:
        id: Unique item id.
        name: Display name (usually the source file name).
        kind: IMAGE or PDF.
        url: Current image location in the image store.
        original_url: Location of the untouched source.
        backup_url: Location before the last batch operation, if any.
    """

    id: str
    name: str
    kind: ItemKind
    url: str
    original_url: str
    backup_url: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return self.kind is ItemKind.IMAGE


@dataclass
class DocumentGroup:
    """An ordered group of items that becomes one PDF."""

    id: str
    title: str
    items: List[ImageItem] = field(default_factory=list)
    selected: bool = False


@dataclass
class BatchFailure:
    """A batch item that could not be processed."""

    group_id: str
    item_id: str
    item_name: str
    reason: str

    def message(self, language: str = "en") -> str:
        """Localized user-facing message identifying the failed item."""
        return translate("item_failed", language, name=self.item_name, reason=self.reason)


@dataclass
class BatchReport:
    """
    Outcome of a batch auto-crop.

    Attributes:
        processed: Image items processed without error.
        changed: Items whose image was replaced by a rectified page.
        skipped: Non-image items left untouched.
        failures: Items that failed; the batch continued past them.
    """

    processed: int = 0
    changed: int = 0
    skipped: int = 0
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.changed > 0

    def summary(self, language: str = "en") -> str:
        """Localized one-line summary of the batch."""
        key = "batch_done" if self.succeeded else "batch_nothing_found"
        return translate(key, language)

"""
Batch auto-crop over document groups.

Orchestrates detection + rectification over every image item of the
selected groups:
1. Snapshot the whole working set (single-level undo)
2. Process image items strictly one at a time
3. Record per-item failures and keep going

Peak memory stays bounded by one image: each item's decoded source and
intermediate buffers go out of scope before the next item starts.
"""

import copy
import logging
from typing import List, Optional, Tuple

from docrectify.batch.image_store import ImageStore, decode_image
from docrectify.batch.types import (
    BatchFailure,
    BatchReport,
    DocumentGroup,
    ImageItem,
)
from docrectify.common.types import RasterImage
from docrectify.detection.boundary_detector import BoundaryDetector
from docrectify.rectification.rectifier import Rectifier

logger = logging.getLogger(__name__)


def auto_crop_image(
    image: RasterImage, detector: BoundaryDetector, rectifier: Rectifier
) -> Tuple[RasterImage, bool]:
    """
    Detect the page boundary and rectify it.

    Returns:
        Tuple of (resulting image, whether it differs from ``image``). When no
        boundary is found, or the rectifier refuses a degenerate boundary, the
        input image is returned unchanged.
    """
    quad = detector.detect(image)
    if quad is None:
        return image, False
    result = rectifier.rectify(image, quad)
    return result, result is not image


class BatchSession:
    """
    Working set of document groups with batch auto-crop and undo.

    Example:
        >>> session = BatchSession(groups, store)
        >>> report = session.auto_crop()
        >>> print(report.summary("en"))
        Crop complete!
        >>> session.undo()
    """

    def __init__(
        self,
        groups: List[DocumentGroup],
        store: ImageStore,
        detector: Optional[BoundaryDetector] = None,
        rectifier: Optional[Rectifier] = None,
    ):
        self.groups = groups
        self.store = store
        self.detector = detector if detector is not None else BoundaryDetector()
        self.rectifier = rectifier if rectifier is not None else Rectifier()
        self._snapshot: Optional[List[DocumentGroup]] = None

    @property
    def can_undo(self) -> bool:
        return self._snapshot is not None

    def find_item(self, group_id: str, item_id: str) -> ImageItem:
        """
        Raises:
            KeyError: If the group or item does not exist.
        """
        for group in self.groups:
            if group.id != group_id:
                continue
            for item in group.items:
                if item.id == item_id:
                    return item
        raise KeyError(f"Item {item_id} not found in group {group_id}")

    def auto_crop(self) -> BatchReport:
        """
        Auto-crop every image item of every selected group.

        Non-image items are skipped. Failures are recorded in the report and
        never stop the batch.

        Returns:
            BatchReport. Empty (and no undo snapshot taken) when no group is
            selected.
        """
        selected = [group for group in self.groups if group.selected]
        report = BatchReport()
        if not selected:
            logger.info("Batch auto-crop: no group selected")
            return report

        self._snapshot = copy.deepcopy(self.groups)

        tasks = []
        for group in selected:
            for item in group.items:
                if item.is_image:
                    tasks.append((group, item))
                else:
                    report.skipped += 1

        logger.info(
            f"Batch auto-crop: {len(tasks)} images in {len(selected)} groups "
            f"({report.skipped} non-image items skipped)"
        )

        for index, (group, item) in enumerate(tasks, start=1):
            logger.info(f"[{index}/{len(tasks)}] {item.name}")
            item.backup_url = item.url
            try:
                changed = self._process_item(item)
            except MemoryError:
                raise
            except Exception as e:
                logger.error(f"Failed to process {item.name}: {e}")
                report.failures.append(
                    BatchFailure(
                        group_id=group.id,
                        item_id=item.id,
                        item_name=item.name,
                        reason=str(e),
                    )
                )
                continue

            report.processed += 1
            if changed:
                report.changed += 1

        logger.info(
            f"Batch auto-crop finished: {report.changed} cropped, "
            f"{len(report.failures)} failed"
        )
        return report

    def _process_item(self, item: ImageItem) -> bool:
        source = decode_image(self.store.load(item.url))
        result, changed = auto_crop_image(source, self.detector, self.rectifier)
        if not changed:
            logger.info(f"No usable boundary for {item.name}, keeping original")
            return False
        item.url = self.store.save(result)
        return True

    def undo(self) -> bool:
        """
        Restore the working set saved before the last batch.

        Single level: the snapshot is consumed.

        Returns:
            True if a snapshot was restored.
        """
        if self._snapshot is None:
            return False
        self.groups, self._snapshot = self._snapshot, None
        logger.info("Batch undone")
        return True

    def restore_item(self, group_id: str, item_id: str) -> bool:
        """Put back the image an item had before the last batch."""
        item = self.find_item(group_id, item_id)
        if item.backup_url is None:
            return False
        item.url, item.backup_url = item.backup_url, None
        return True

    def reset_item(self, group_id: str, item_id: str) -> None:
        """Return an item to its original source image."""
        item = self.find_item(group_id, item_id)
        item.url = item.original_url
        item.backup_url = None

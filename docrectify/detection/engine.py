"""
Vision engine readiness gate.

Detection must not start before the underlying vision engine (OpenCV) is
usable. Readiness is established by bounded polling: the probe is retried
every ``retry_interval_s`` up to ``max_retries`` times before the engine is
declared unavailable.
"""

import logging
import time
from typing import Callable, Optional

import cv2

from docrectify.common.config import EngineConfig
from docrectify.common.errors import EngineUnavailable

logger = logging.getLogger(__name__)

# OpenCV entry points the boundary detector relies on
REQUIRED_FUNCTIONS = (
    "resize",
    "cvtColor",
    "GaussianBlur",
    "Canny",
    "dilate",
    "getStructuringElement",
    "findContours",
    "contourArea",
    "arcLength",
    "approxPolyDP",
    "minAreaRect",
    "boxPoints",
    "adaptiveThreshold",
    "bitwise_not",
)


def opencv_probe() -> bool:
    """Return True when every required OpenCV function is available."""
    return all(callable(getattr(cv2, name, None)) for name in REQUIRED_FUNCTIONS)


class VisionEngine:
    """
    Gate in front of the vision engine.

    One instance is owned by a detector; a successful readiness check is
    remembered on the instance so later detections skip the polling.

    Example:
        >>> engine = VisionEngine()
        >>> engine.wait_until_ready()
        >>> engine.ready
        True
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        probe: Callable[[], bool] = opencv_probe,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config if config is not None else EngineConfig()
        self._probe = probe
        self._sleep = sleep
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def _check(self) -> bool:
        try:
            return bool(self._probe())
        except Exception as e:
            logger.debug(f"Engine probe raised: {e}")
            return False

    def wait_until_ready(self) -> None:
        """
        Block until the engine is ready.

        Raises:
            EngineUnavailable: If the probe still fails after
                ``max_retries`` retries.
        """
        if self._ready:
            return

        retries = self.config.max_retries
        while not self._check():
            if retries <= 0:
                raise EngineUnavailable(
                    f"Vision engine not ready after {self.config.max_retries} retries "
                    f"({self.config.max_retries * self.config.retry_interval_s:.1f}s)"
                )
            self._sleep(self.config.retry_interval_s)
            retries -= 1

        logger.debug(
            f"Vision engine ready after {self.config.max_retries - retries} retries"
        )
        self._ready = True

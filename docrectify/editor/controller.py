"""
Interactive correction controller.

State machine behind the page editor: lets the user verify and adjust the
detected boundary (corner drags), pan and zoom the view, tune
brightness/contrast/rotation and finally save.

One controller is one editor session: it is created when the editor opens
and torn down with ``close()``. No state is kept at module level.
"""

import logging
import math
from dataclasses import replace
from typing import Optional

from docrectify.common.config import EditorConfig
from docrectify.common.types import Point, Quadrilateral, RasterImage
from docrectify.config_loader import default_config
from docrectify.detection.boundary_detector import BoundaryDetector
from docrectify.editor.types import (
    DragMode,
    DragSession,
    ImageLayout,
    ScreenPoint,
    Tool,
    ViewportState,
)
from docrectify.enhancement.enhancer import Enhancer
from docrectify.enhancement.types import EnhancementParams
from docrectify.geometry.quadrilateral import default_quadrilateral
from docrectify.rectification.rectifier import Rectifier

logger = logging.getLogger(__name__)

MIN_LEVEL = 0
MAX_LEVEL = 200


class CorrectionController:
    """
    Editor session for one image.

    Tool selection:
        ``tool`` is one of NONE, CROP, ADJUST. Entering CROP without a
        quadrilateral runs boundary detection (with the default inset
        fallback) as soon as the image is available.

    Pointer handling:
        pointer-down in CROP mode picks a corner handle within a constant
        screen-space radius; pointer-down with the NONE tool, or with the
        pan modifier held, starts panning. Moves update the dragged corner
        (clamped to the image) or the scroll offset; pointer-up ends the
        session.

    Save:
        CROP with a quadrilateral rectifies (pending enhancement is
        discarded); otherwise non-default enhancement params are applied;
        otherwise the image passes through. The two are never combined.

    Example:
        >>> editor = CorrectionController(image)
        >>> editor.on_pointer_down(130, 95, layout)
        >>> editor.on_pointer_move(110, 80, layout)
        >>> editor.on_pointer_up()
        >>> page = editor.save()
        >>> editor.close()
    """

    def __init__(
        self,
        image: Optional[RasterImage] = None,
        detector: Optional[BoundaryDetector] = None,
        rectifier: Optional[Rectifier] = None,
        enhancer: Optional[Enhancer] = None,
        config: Optional[EditorConfig] = None,
        initial_tool: Tool = Tool.CROP,
    ):
        self.config = config if config is not None else default_config().editor
        self.detector = detector if detector is not None else BoundaryDetector()
        self.rectifier = rectifier if rectifier is not None else Rectifier()
        self.enhancer = enhancer if enhancer is not None else Enhancer()

        self._tool = initial_tool
        self._image: Optional[RasterImage] = None
        self._quad: Optional[Quadrilateral] = None
        self._params = EnhancementParams()
        self._viewport = ViewportState()
        self._session: Optional[DragSession] = None
        self._closed = False

        if image is not None:
            self.on_image_loaded(image)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def drag_mode(self) -> DragMode:
        return self._session.mode if self._session else DragMode.IDLE

    @property
    def quadrilateral(self) -> Optional[Quadrilateral]:
        return self._quad

    @property
    def params(self) -> EnhancementParams:
        return self._params

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    @property
    def image(self) -> Optional[RasterImage]:
        return self._image

    @property
    def is_closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Editor session is closed")

    def on_image_loaded(self, image: RasterImage) -> None:
        """Record the working image; auto-detect if cropping without a boundary."""
        self._ensure_open()
        self._image = image
        logger.debug(f"Editor image loaded: {image.width}x{image.height}")
        if self._tool is Tool.CROP and self._quad is None:
            self.auto_detect()

    def close(self) -> None:
        """Tear down the session, dropping image, boundary and drag state."""
        self._session = None
        self._image = None
        self._quad = None
        self._closed = True
        logger.debug("Editor session closed")

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def auto_detect(self) -> Quadrilateral:
        """
        (Re)run boundary detection on the working image.

        The result, or the default inset quadrilateral when nothing is
        found, becomes the working quadrilateral.
        """
        self._ensure_open()
        if self._image is None:
            raise ValueError("No image loaded")

        quad = self.detector.detect(self._image)
        if quad is None:
            logger.info("No boundary detected, using default inset quadrilateral")
            quad = default_quadrilateral(
                self._image.width, self._image.height, self.config.default_inset
            )
        self._quad = quad
        return quad

    def select_tool(self, tool: Tool) -> None:
        self._ensure_open()
        self._session = None
        self._tool = tool
        logger.debug(f"Tool selected: {tool.value}")
        if tool is Tool.CROP and self._quad is None and self._image is not None:
            self.auto_detect()

    def toggle_tool(self, tool: Tool) -> None:
        """Select ``tool``, or fall back to NONE if it is already active."""
        self.select_tool(Tool.NONE if self._tool is tool else tool)

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float, layout: ImageLayout) -> Optional[int]:
        """
        Index of the first corner handle under the pointer, or None.

        Handle positions are derived from native coordinates with the live
        layout; the radius is divided by the zoom so the pick tolerance stays
        constant on screen.
        """
        if self._quad is None:
            return None
        radius = self.config.handle_radius_px / self._viewport.zoom
        for index, corner in enumerate(self._quad):
            sx, sy = layout.to_screen(corner)
            if math.hypot(x - sx, y - sy) < radius:
                return index
        return None

    def on_pointer_down(
        self, x: float, y: float, layout: ImageLayout, pan_modifier: bool = False
    ) -> DragMode:
        """
        Start a corner drag or a pan.

        Returns:
            The drag mode now in effect (IDLE if nothing started).
        """
        self._ensure_open()
        if self._image is None or self._session is not None:
            return self.drag_mode

        start: ScreenPoint = (x, y)
        if pan_modifier or self._tool is Tool.NONE:
            self._session = DragSession(
                mode=DragMode.PANNING,
                start=start,
                scroll_snapshot=self._viewport.scroll_offset,
            )
        elif self._tool is Tool.CROP:
            index = self.hit_test(x, y, layout)
            if index is not None:
                self._session = DragSession(
                    mode=DragMode.DRAGGING_CORNER,
                    start=start,
                    corner_index=index,
                    quad_snapshot=self._quad,
                )
                logger.debug(f"Dragging corner {index}")

        return self.drag_mode

    def on_pointer_move(self, x: float, y: float, layout: ImageLayout) -> bool:
        """
        Continue the active drag.

        Returns:
            True if the quadrilateral or the scroll offset changed.
        """
        self._ensure_open()
        session = self._session
        if session is None:
            return False

        dx, dy = x - session.start[0], y - session.start[1]

        if session.mode is DragMode.PANNING:
            sx, sy = session.scroll_snapshot
            self._viewport = replace(self._viewport, scroll_offset=(sx - dx, sy - dy))
            return True

        scale = layout.native_scale
        origin = session.quad_snapshot[session.corner_index]
        moved = Point(x=origin.x + dx * scale, y=origin.y + dy * scale)
        moved = moved.clamped(layout.natural_width, layout.natural_height)
        self._quad = self._quad.replace(session.corner_index, moved)
        return True

    def on_pointer_up(self) -> None:
        """End the active drag and discard its snapshot."""
        if self._session is not None:
            logger.debug(f"Drag ended ({self._session.mode.value})")
        self._session = None

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------

    def on_zoom_change(self, steps: int) -> float:
        """
        Change zoom by ``steps`` fixed increments, clamped to the zoom range.

        Returns:
            The new zoom factor.
        """
        self._ensure_open()
        zoom = round(self._viewport.zoom + steps * self.config.zoom_step, 2)
        zoom = min(max(zoom, self.config.zoom_min), self.config.zoom_max)
        self._viewport = replace(self._viewport, zoom=zoom)
        return zoom

    def zoom_in(self) -> float:
        return self.on_zoom_change(1)

    def zoom_out(self) -> float:
        return self.on_zoom_change(-1)

    # ------------------------------------------------------------------
    # Adjustments
    # ------------------------------------------------------------------

    def set_brightness(self, value: int) -> None:
        self._ensure_open()
        value = int(min(max(value, MIN_LEVEL), MAX_LEVEL))
        self._params = self._params.with_levels(brightness=value)

    def set_contrast(self, value: int) -> None:
        self._ensure_open()
        value = int(min(max(value, MIN_LEVEL), MAX_LEVEL))
        self._params = self._params.with_levels(contrast=value)

    def rotate_left(self) -> None:
        self._ensure_open()
        self._params = self._params.rotated(-90)

    def rotate_right(self) -> None:
        self._ensure_open()
        self._params = self._params.rotated(90)

    def reset_adjustments(self) -> None:
        self._ensure_open()
        self._params = EnhancementParams()

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self) -> RasterImage:
        """
        Produce the edited image.

        Raises:
            ValueError: If no image is loaded.
        """
        self._ensure_open()
        if self._image is None:
            raise ValueError("No image loaded")

        # TODO: compose crop and enhancement once the editor UI shows both previews
        if self._tool is Tool.CROP and self._quad is not None:
            logger.info("Saving: perspective crop")
            result = self.rectifier.rectify(self._image, self._quad)
            self._params = EnhancementParams()
        elif not self._params.is_default():
            logger.info("Saving: enhancement")
            result = self.enhancer.enhance(self._image, self._params)
        else:
            logger.info("Saving: no changes")
            result = self._image

        return result

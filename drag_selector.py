# drag_selector.py
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, NamedTuple, Tuple
from events import EventBus
from selection_controller import SelectionController

DRAG_UPDATED = "drag:updated"
DRAG_ENDED = "drag:ended"

class Point(NamedTuple):
    x: float
    y: float

class BoundingBox(NamedTuple):
    """An item's box in content coordinates."""
    left: float
    top: float
    right: float
    bottom: float

@dataclass(frozen=True)
class Rect:
    """Axis-aligned drag rectangle in content coordinates."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @classmethod
    def from_points(cls, a: Point, b: Point) -> "Rect":
        return cls(min(a.x, b.x), min(a.y, b.y), abs(a.x - b.x), abs(a.y - b.y))

    def intersects(self, box: BoundingBox) -> bool:
        """Separating-axis test; only a strictly positive gap separates, touching edges intersect."""
        return not (box.right < self.left or box.left > self.right
                    or box.bottom < self.top or box.top > self.bottom)

@dataclass
class _DragState:
    origin: Point
    pointer: Point
    boxes: Dict[int, BoundingBox]
    rect: Rect

class DragSelector:
    """
    Rectangle (rubber-band) selection over a frozen table of item boxes.

    Every update re-evaluates all items against the current rectangle: items
    inside are selected, items outside are deselected. The box table is taken
    once at begin_drag and never re-measured mid-drag.

    Pointer positions are viewport coordinates. The optional scroll_offset
    callable returns the host's current (dx, dy) scroll, so that an update
    triggered by scrolling alone can reuse the last pointer position and still
    produce the correct content-space rectangle.
    """
    def __init__(self, controller: SelectionController, event_bus: EventBus,
                 scroll_offset: Callable[[], Tuple[float, float]] | None = None):
        self.controller = controller
        self.event_bus = event_bus
        self.scroll_offset = scroll_offset or (lambda: (0.0, 0.0))
        self._state: _DragState | None = None

    @property
    def is_active(self) -> bool:
        return self._state is not None

    @property
    def rect(self) -> Rect | None:
        return self._state.rect if self._state else None

    def begin_drag(self, origin: Point, item_boxes: Mapping[int, BoundingBox | tuple]) -> bool:
        """Starts a drag at origin. Returns False without touching state if one is already active."""
        if self._state is not None:
            logging.debug("begin_drag ignored: a drag is already active.")
            return False

        origin = Point(*origin)
        boxes = {index: BoundingBox(*box) for index, box in item_boxes.items()}
        content_origin = self._to_content(origin)
        self._state = _DragState(origin=content_origin, pointer=origin, boxes=boxes,
                                 rect=Rect.from_points(content_origin, content_origin))
        logging.debug(f"Drag started at {tuple(origin)} over {len(boxes)} items.")
        return True

    def update_drag(self, point: Point | None = None) -> Rect | None:
        """
        Recomputes the rectangle and the selection. With point=None the last
        known pointer position is reused against the current scroll offset.
        """
        state = self._state
        if state is None:
            return None
        if point is not None:
            state.pointer = Point(*point)

        state.rect = Rect.from_points(state.origin, self._to_content(state.pointer))
        hits, misses = [], []
        item_count = self.controller.item_count
        for index, box in state.boxes.items():
            if not 0 <= index < item_count:
                continue  # dropped by set_item_count mid-drag
            (hits if state.rect.intersects(box) else misses).append(index)

        self.controller.update(select=hits, deselect=misses)
        self.event_bus.publish(DRAG_UPDATED, state.rect)
        return state.rect

    def end_drag(self) -> bool:
        """Discards the drag state. Returns False if no drag was active."""
        if self._state is None:
            return False
        self._state = None
        logging.debug("Drag ended.")
        self.event_bus.publish(DRAG_ENDED)
        return True

    def _to_content(self, point: Point) -> Point:
        dx, dy = self.scroll_offset()
        return Point(point.x + dx, point.y + dy)

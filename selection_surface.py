# selection_surface.py
import logging
from typing import Callable, Mapping, Tuple
from events import EventBus
from gestures import GestureGuard, GestureSession, Modifiers, NO_MODIFIERS, PRIMARY_BUTTON
from selection_controller import SelectionController
from drag_selector import BoundingBox, DragSelector, Point
from selection_options import SelectionOptions

CLICK_GESTURE = "click"
DRAG_GESTURE = "drag"

class SelectionSurface:
    """
    The inbound side of a selectable collection: turns pointer notifications
    from the host into selection gestures.

    Each surface has its own GestureGuard, so surfaces living side by side never
    see each other's gestures. The host should call on_pointer_up from its
    outermost scope (e.g. a bind_all handler) so that a drag started here is
    released wherever the pointer goes up.
    """
    def __init__(self, event_bus: EventBus, item_count: int = 0,
                 options: SelectionOptions | None = None,
                 geometry: Callable[[], Mapping[int, BoundingBox | tuple]] | None = None,
                 scroll_offset: Callable[[], Tuple[float, float]] | None = None):
        self.event_bus = event_bus
        self.options = options or SelectionOptions()
        self.geometry = geometry or dict
        self.controller = SelectionController(event_bus, item_count, multi_select=self.options.multi_select)
        self.drag_selector = DragSelector(self.controller, event_bus, scroll_offset)
        self.guard = GestureGuard()

    def configure(self, options: SelectionOptions):
        """Applies new options. Turning drag-select or multi-select off releases any active drag."""
        self.options = options
        self.controller.multi_select = options.multi_select
        if self.drag_selector.is_active and not (options.drag_select_enabled and options.multi_select):
            self.drag_selector.end_drag()
            self.guard.disarm(DRAG_GESTURE)
        logging.info(f"Selection options: multi-select={options.multi_select}, "
                     f"drag-select={options.drag_select_enabled}")

    def on_pointer_down(self, index: int | None, modifiers: Modifiers = NO_MODIFIERS,
                        button: int = PRIMARY_BUTTON, point: Point | None = None) -> GestureSession | None:
        """
        Handles one observation of a pointer press. index is the item under the
        pointer, or None for empty space. Returns the gesture session, or None
        when this press was already handled by an earlier observation.
        """
        if index is not None:
            self.controller.validate_index(index)
        session = self.guard.arm(CLICK_GESTURE)
        if session is None:
            return None

        if index is not None:
            self.controller.handle_click(index, modifiers)
        elif not modifiers.any:
            self.controller.clear()

        if self._starts_drag(modifiers, button, point) and self.guard.arm(DRAG_GESTURE):
            self.drag_selector.begin_drag(point, self.geometry())
        return session

    def on_pointer_move(self, point: Point):
        if self.drag_selector.is_active:
            self.drag_selector.update_drag(point)

    def on_scroll(self):
        """Recomputes an active drag after the host scrolled without the pointer moving."""
        if self.drag_selector.is_active:
            self.drag_selector.update_drag(None)

    def on_pointer_up(self):
        """Terminates the current gesture. Safe to call repeatedly."""
        self.guard.disarm(CLICK_GESTURE)
        if self.guard.disarm(DRAG_GESTURE):
            self.drag_selector.end_drag()

    def _starts_drag(self, modifiers: Modifiers, button: int, point: Point | None) -> bool:
        return (self.options.drag_select_enabled and self.options.multi_select
                and button == PRIMARY_BUTTON
                and point is not None and not modifiers.any)

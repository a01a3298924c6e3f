# selection_controller.py
import logging
from dataclasses import dataclass, field
from typing import Iterable, List
from events import EventBus
from gestures import Modifiers, NO_MODIFIERS

SELECTION_CHANGED = "selection:changed"

class InvalidIndexError(ValueError):
    """Raised when an index outside [0, item_count) reaches the controller."""

@dataclass
class SelectionChange:
    """The outcome of one selection mutation."""
    selected: List[int] = field(default_factory=list)
    added: set[int] = field(default_factory=set)
    removed: set[int] = field(default_factory=set)

    def __bool__(self):
        return bool(self.added or self.removed)

class SelectionController:
    """
    Owns the selection state of an ordered, index-addressable collection and
    implements OSX-style plain, toggle (meta/ctrl) and range (shift) selection.

    Besides the selected set it tracks the shift anchor, the range controlled by
    the current shift gesture, and the anchor that range was computed from. The
    last one decides whether a later shift-click flips the range (anchor unmoved,
    the old tail is released) or grows it (anchor moved, the old range stays).

    Every call that changes membership publishes one SELECTION_CHANGED event
    carrying (selected, added, removed).
    """
    def __init__(self, event_bus: EventBus, item_count: int = 0, multi_select: bool = True):
        if item_count < 0:
            raise ValueError(f"item_count must be non-negative, got {item_count}")
        self.event_bus = event_bus
        self.multi_select = multi_select
        self._item_count = item_count
        self._selected: set[int] = set()
        self._shift_anchor = 0
        self._shift_range: set[int] = set()
        self._prev_shift_anchor: int | None = None

    # --- Read-only state ---

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def shift_anchor(self) -> int:
        return self._shift_anchor

    @property
    def shift_range(self) -> frozenset[int]:
        return frozenset(self._shift_range)

    @property
    def prev_shift_anchor(self) -> int | None:
        return self._prev_shift_anchor

    def get_selected_indexes(self) -> List[int]:
        """Returns the selected indices in ascending order."""
        return sorted(self._selected)

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    # --- Gestures ---

    def handle_click(self, index: int, modifiers: Modifiers = NO_MODIFIERS) -> SelectionChange:
        """
        Entry point for a click on an item. Meta/ctrl toggles, shift selects a
        range, anything else is a plain select. With multi-select disabled every
        click is a plain select.
        """
        if self.multi_select and modifiers.toggles:
            return self.handle_toggle_select(index)
        if self.multi_select and modifiers.extends_range:
            return self.handle_range_select(index)
        return self.handle_plain_select(index)

    def handle_plain_select(self, index: int) -> SelectionChange:
        """Selects only the clicked item and makes it the new anchor."""
        self.validate_index(index)
        change = self._apply(select=[index], deselect=self._selected - {index})
        self._shift_anchor = index
        self._shift_range = {index}
        logging.debug(f"Plain select at {index}")
        return change

    def handle_toggle_select(self, index: int) -> SelectionChange:
        """Adds the item to, or removes it from, the selection."""
        self.validate_index(index)
        if not self.multi_select:
            logging.debug(f"Toggle select at {index} ignored: multi-select disabled")
            return self._unchanged()

        if index in self._selected:
            change = self._apply(deselect=[index])
            self._shift_range.discard(index)
            if self._shift_anchor == index:
                self._shift_anchor = 0
        else:
            change = self._apply(select=[index])
            self._shift_anchor = index
        logging.debug(f"Toggle select at {index}, anchor now {self._shift_anchor}")
        return change

    def handle_range_select(self, index: int) -> SelectionChange:
        """Selects the closed range between the shift anchor and the clicked item."""
        self.validate_index(index)
        if not self.multi_select:
            logging.debug(f"Range select at {index} ignored: multi-select disabled")
            return self._unchanged()

        anchor = self._shift_anchor
        new_range = set(range(min(anchor, index), max(anchor, index) + 1))
        old_range = self._shift_range

        if not old_range:
            change = self._apply(select=new_range)
        elif self._prev_shift_anchor == anchor:
            # Anchor unchanged since the last range: flip, release the old tail.
            change = self._apply(select=new_range - old_range, deselect=old_range - new_range)
        else:
            change = self._apply(select=new_range - old_range)

        self._prev_shift_anchor = anchor
        self._shift_range = new_range
        logging.debug(f"Range select {min(anchor, index)}..{max(anchor, index)} from anchor {anchor}")
        return change

    # --- Primitives ---

    def select(self, indices: Iterable[int]) -> SelectionChange:
        """Adds indices to the selection. Already selected indices are left alone."""
        return self.update(select=indices)

    def deselect(self, indices: Iterable[int]) -> SelectionChange:
        """Removes indices from the selection. Unselected indices are left alone."""
        return self.update(deselect=indices)

    def update(self, select: Iterable[int] = (), deselect: Iterable[int] = ()) -> SelectionChange:
        """Applies a select and a deselect set together, publishing a single change."""
        select, deselect = list(select), list(deselect)
        self.validate_index(*select, *deselect)
        return self._apply(select=select, deselect=deselect)

    def select_all(self) -> SelectionChange:
        """Selects all items."""
        return self._apply(select=range(self._item_count))

    def clear(self) -> SelectionChange:
        """Clears the selection and forgets the current shift range."""
        change = self._apply(deselect=self._selected)
        self._shift_range = set()
        return change

    def set_item_count(self, item_count: int) -> SelectionChange:
        """
        Resizes the index domain. Indices that fall outside it are dropped from
        the selection and the shift range; an anchor outside it returns home.
        """
        if item_count < 0:
            raise ValueError(f"item_count must be non-negative, got {item_count}")
        self._item_count = item_count
        stale = {i for i in self._selected if i >= item_count}
        change = self._apply(deselect=stale)
        self._shift_range = {i for i in self._shift_range if i < item_count}
        if self._shift_anchor >= item_count:
            self._shift_anchor = 0
        if self._prev_shift_anchor is not None and self._prev_shift_anchor >= item_count:
            self._prev_shift_anchor = None
        return change

    def validate_index(self, *indices):
        """Raises InvalidIndexError unless every index is an int in [0, item_count)."""
        for index in indices:
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self._item_count:
                logging.warning(f"Rejected index {index!r}; valid range is [0, {self._item_count})")
                raise InvalidIndexError(f"Index {index!r} is outside [0, {self._item_count})")

    # --- Internals ---

    def _apply(self, select: Iterable[int] = (), deselect: Iterable[int] = ()) -> SelectionChange:
        select = set(select)
        added = select - self._selected
        removed = (set(deselect) - select) & self._selected
        self._selected |= added
        self._selected -= removed
        change = SelectionChange(self.get_selected_indexes(), added, removed)
        if change:
            self.event_bus.publish(SELECTION_CHANGED, change.selected, change.added, change.removed)
        return change

    def _unchanged(self) -> SelectionChange:
        return SelectionChange(self.get_selected_indexes())

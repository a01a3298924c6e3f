import pytest

from drag_selector import BoundingBox, Point
from gestures import Modifiers
from selection_controller import InvalidIndexError
from selection_options import SelectionOptions
from selection_surface import SelectionSurface

BOXES = {i: BoundingBox(i * 20, 0, i * 20 + 10, 10) for i in range(5)}
DRAG = SelectionOptions(drag_select_enabled=True)


@pytest.fixture
def surface(bus):
    return SelectionSurface(bus, item_count=5, options=DRAG, geometry=lambda: BOXES)


def selected(surface):
    return surface.controller.get_selected_indexes()


def test_duplicate_pointer_down_is_one_transition(bus, changes):
    surface = SelectionSurface(bus, item_count=5)
    surface.on_pointer_down(1)
    surface.on_pointer_down(3, Modifiers(ctrl=True))

    assert surface.on_pointer_down(3, Modifiers(ctrl=True)) is None
    assert selected(surface) == [1]
    assert len(changes.calls) == 1


def test_guard_resets_only_after_pointer_up(bus):
    surface = SelectionSurface(bus, item_count=5)
    first = surface.on_pointer_down(2, Modifiers(meta=True))
    assert surface.on_pointer_down(2, Modifiers(meta=True)) is None
    surface.on_pointer_up()
    second = surface.on_pointer_down(2, Modifiers(meta=True))

    assert first is not None and second is not None
    assert first != second
    assert selected(surface) == []


def test_item_binding_wins_over_background_duplicate(bus):
    surface = SelectionSurface(bus, item_count=5)
    surface.on_pointer_down(4)
    surface.on_pointer_down(None)
    assert selected(surface) == [4]


def test_background_press_clears_selection(bus):
    surface = SelectionSurface(bus, item_count=5)
    surface.on_pointer_down(1); surface.on_pointer_up()
    surface.on_pointer_down(None); surface.on_pointer_up()
    assert selected(surface) == []


def test_background_press_with_modifier_keeps_selection(bus):
    surface = SelectionSurface(bus, item_count=5)
    surface.on_pointer_down(1); surface.on_pointer_up()
    surface.on_pointer_down(None, Modifiers(shift=True)); surface.on_pointer_up()
    assert selected(surface) == [1]


def test_click_gestures_through_surface(bus):
    surface = SelectionSurface(bus, item_count=5)
    for index, mods in [(1, Modifiers()), (3, Modifiers(shift=True)), (0, Modifiers(ctrl=True))]:
        surface.on_pointer_down(index, mods)
        surface.on_pointer_up()
    assert selected(surface) == [0, 1, 2, 3]


def test_drag_selects_and_pointer_up_releases_lock(surface):
    surface.on_pointer_down(None, point=Point(15, 5))
    surface.on_pointer_move(Point(55, 8))
    assert selected(surface) == [1, 2]
    assert surface.drag_selector.is_active

    surface.on_pointer_up()
    assert not surface.drag_selector.is_active
    surface.on_pointer_move(Point(95, 8))
    assert selected(surface) == [1, 2]

    surface.on_pointer_up()


def test_drag_starting_on_item_selects_it_first(surface):
    surface.on_pointer_down(0, point=Point(5, 5))
    assert selected(surface) == [0]
    surface.on_pointer_move(Point(25, 5))
    assert selected(surface) == [0, 1]
    surface.on_pointer_up()


def test_duplicate_press_does_not_restart_drag(surface):
    surface.on_pointer_down(None, point=Point(0, 0))
    surface.on_pointer_down(None, point=Point(80, 0))
    surface.on_pointer_move(Point(12, 12))
    assert selected(surface) == [0]


def test_no_drag_when_disabled(bus):
    surface = SelectionSurface(bus, item_count=5, geometry=lambda: BOXES)
    surface.on_pointer_down(None, point=Point(0, 0))
    surface.on_pointer_move(Point(100, 10))
    assert not surface.drag_selector.is_active
    assert selected(surface) == []


def test_no_drag_for_secondary_button(surface):
    surface.on_pointer_down(2, button=3, point=Point(45, 5))
    surface.on_pointer_move(Point(100, 10))
    assert not surface.drag_selector.is_active
    assert selected(surface) == [2]


def test_no_drag_with_modifier_held(surface):
    surface.on_pointer_down(2, Modifiers(ctrl=True), point=Point(45, 5))
    surface.on_pointer_move(Point(100, 10))
    assert selected(surface) == [2]


def test_scroll_recomputes_active_drag(bus):
    offset = [0, 0]
    surface = SelectionSurface(bus, item_count=5, options=DRAG, geometry=lambda: BOXES,
                               scroll_offset=lambda: tuple(offset))
    surface.on_pointer_down(None, point=Point(0, 0))
    surface.on_pointer_move(Point(12, 12))
    assert selected(surface) == [0]

    offset[0] = 40
    surface.on_scroll()
    assert selected(surface) == [0, 1, 2]


def test_scroll_without_drag_is_ignored(surface, changes):
    surface.on_scroll()
    assert changes.calls == []


def test_pointer_up_is_idempotent(surface):
    surface.on_pointer_up()
    surface.on_pointer_up()
    assert surface.on_pointer_down(1) is not None


def test_configure_disabling_drag_ends_active_drag(surface, bus):
    ended = []
    bus.subscribe("drag:ended", lambda: ended.append(True))
    surface.on_pointer_down(None, point=Point(0, 0))

    surface.configure(SelectionOptions(multi_select=True, drag_select_enabled=False))

    assert not surface.drag_selector.is_active
    assert ended == [True]


def test_configure_multi_select_off_applies_to_controller(surface):
    surface.configure(SelectionOptions(multi_select=False))
    surface.on_pointer_down(1); surface.on_pointer_up()
    surface.on_pointer_down(3, Modifiers(ctrl=True)); surface.on_pointer_up()
    assert selected(surface) == [3]


def test_surfaces_do_not_share_guards(bus):
    a = SelectionSurface(bus, item_count=5)
    b = SelectionSurface(bus, item_count=5)
    assert a.on_pointer_down(1) is not None
    assert b.on_pointer_down(2) is not None


def test_drag_disabled_when_multi_select_off(bus):
    options = SelectionOptions(multi_select=False, drag_select_enabled=True)
    surface = SelectionSurface(bus, item_count=5, options=options, geometry=lambda: BOXES)

    surface.on_pointer_down(None, point=Point(0, 0))
    surface.on_pointer_move(Point(70, 10))

    assert not surface.drag_selector.is_active
    assert selected(surface) == []


def test_press_on_item_with_multi_select_off_selects_one(bus):
    options = SelectionOptions(multi_select=False, drag_select_enabled=True)
    surface = SelectionSurface(bus, item_count=5, options=options, geometry=lambda: BOXES)

    surface.on_pointer_down(1, point=Point(25, 5))
    surface.on_pointer_move(Point(70, 10))

    assert selected(surface) == [1]


def test_configure_multi_select_off_ends_active_drag(surface):
    surface.on_pointer_down(None, point=Point(0, 0))
    surface.configure(SelectionOptions(multi_select=False, drag_select_enabled=True))
    assert not surface.drag_selector.is_active


def test_rejected_index_does_not_arm_guard(surface, changes):
    with pytest.raises(InvalidIndexError):
        surface.on_pointer_down(9, point=Point(0, 0))

    assert not surface.drag_selector.is_active
    assert changes.calls == []
    assert surface.on_pointer_down(2) is not None
    assert selected(surface) == [2]


def test_shrinking_items_mid_drag_keeps_drag_working(surface):
    surface.on_pointer_down(None, point=Point(0, 0))
    surface.on_pointer_move(Point(90, 10))
    assert selected(surface) == [0, 1, 2, 3, 4]

    surface.controller.set_item_count(3)
    surface.on_pointer_move(Point(25, 10))

    assert selected(surface) == [0, 1]

import pytest

from events import EventBus
from selection_controller import SelectionController


class Recorder:
    """Collects the arguments of every event published on one topic."""
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def changes(bus):
    recorder = Recorder()
    bus.subscribe("selection:changed", recorder)
    return recorder


@pytest.fixture
def controller(bus):
    return SelectionController(bus, item_count=12)

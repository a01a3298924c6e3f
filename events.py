# events.py
from typing import Callable, Dict, List
import logging

class EventBus:
    """A synchronous publisher-subscriber event bus shared by one selection surface and its host."""

    def __init__(self):
        self.listeners: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, fn: Callable):
        """
        Register a function to be called when an event of event_type is published.

        Args:
            event_type (str): The name of the event, e.g. "selection:changed".
            fn (Callable): The function (callback) to execute.
        """
        self.listeners.setdefault(event_type, []).append(fn)

    def publish(self, event_type: str, *args, **kwargs):
        """
        Publish an event, calling all subscribed functions in subscription order.
        A failing handler is logged and does not stop the remaining handlers.

        Args:
            event_type (str): The name of the event to publish.
            *args: Positional arguments to pass to the callback functions.
            **kwargs: Keyword arguments to pass to the callback functions.
        """
        for fn in list(self.listeners.get(event_type, [])):
            try:
                fn(*args, **kwargs)
            except Exception as e:
                logging.error(f"Error in event handler for '{event_type}': {e}", exc_info=True)

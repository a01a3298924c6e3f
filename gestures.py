# gestures.py
import sys
import itertools
import logging
from dataclasses import dataclass
from typing import Dict

PRIMARY_BUTTON = 1

# Tk event.state bits
TK_SHIFT_MASK = 0x0001
TK_CONTROL_MASK = 0x0004
TK_COMMAND_MASK = 0x0008  # Mod1; Command on macOS, Alt elsewhere

@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held during a pointer press."""
    meta: bool = False
    ctrl: bool = False
    shift: bool = False

    @property
    def toggles(self) -> bool:
        return self.meta or self.ctrl

    @property
    def extends_range(self) -> bool:
        return self.shift

    @property
    def any(self) -> bool:
        return self.meta or self.ctrl or self.shift

    @classmethod
    def from_tk_state(cls, state: int, platform: str = sys.platform) -> "Modifiers":
        """Decodes the modifier mask carried by a tkinter event."""
        return cls(
            meta=platform == "darwin" and (state & TK_COMMAND_MASK) != 0,
            ctrl=(state & TK_CONTROL_MASK) != 0,
            shift=(state & TK_SHIFT_MASK) != 0,
        )

NO_MODIFIERS = Modifiers()

@dataclass(frozen=True)
class GestureSession:
    """Token identifying one physical gesture, from its first pointer-down to its pointer-up."""
    kind: str
    serial: int

class GestureGuard:
    """
    Per-surface re-entrancy guard.

    One physical press can reach several overlapping listeners (a canvas item
    binding and the canvas binding, for instance). Only the first observation
    arms the guard for that gesture kind; later ones are ignored until the
    terminating pointer-up disarms it.
    """
    def __init__(self):
        self._armed: Dict[str, GestureSession] = {}
        self._serials = itertools.count(1)

    def arm(self, kind: str) -> GestureSession | None:
        """Returns a new session for the first observation, None for duplicates."""
        if kind in self._armed:
            logging.debug(f"Ignoring duplicate '{kind}' observation for session {self._armed[kind].serial}.")
            return None
        session = GestureSession(kind, next(self._serials))
        self._armed[kind] = session
        return session

    def disarm(self, kind: str) -> bool:
        """Clears the armed flag for kind. Returns False if nothing was armed."""
        return self._armed.pop(kind, None) is not None


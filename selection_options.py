# selection_options.py
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict

# Option name as stored in config.json -> attribute name
_OPTION_KEYS = {
    "multiSelect": "multi_select",
    "dragSelectEnabled": "drag_select_enabled",
}

@dataclass(frozen=True)
class SelectionOptions:
    """The recognised options of a selection surface."""
    multi_select: bool = True
    drag_select_enabled: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "SelectionOptions":
        """
        Builds options from a config mapping. Accepts the camelCase names used in
        config.json as well as the attribute names. Bad values keep the default.
        """
        options = cls()
        for key, value in (data or {}).items():
            attr = _OPTION_KEYS.get(key, key)
            if attr not in _OPTION_KEYS.values():
                logging.warning(f"Ignoring unknown selection option '{key}'.")
                continue
            if not isinstance(value, bool):
                logging.warning(f"Selection option '{key}' must be true or false, got {value!r}; using default.")
                continue
            options = replace(options, **{attr: value})
        return options

    def to_dict(self) -> Dict[str, bool]:
        return {key: getattr(self, attr) for key, attr in _OPTION_KEYS.items()}

# utils.py
import os
import json
import logging
from collections import deque
from logging import Handler, LogRecord
from selection_options import SelectionOptions

# --- Centralized Logging System ---

class AppLogHandler(Handler):
    """Keeps the most recent formatted log lines in memory for the status bar."""
    def __init__(self, maxlen=200):
        super().__init__()
        self.log_records = deque(maxlen=maxlen)

    def emit(self, record: LogRecord):
        self.log_records.append(self.format(record))

    def get_logs(self):
        return list(self.log_records)

    def last(self) -> str | None:
        return self.log_records[-1] if self.log_records else None

    def clear(self):
        self.log_records.clear()

app_log_handler = AppLogHandler()

def setup_logging():
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', datefmt='%H:%M:%S')

    app_log_handler.setLevel(logging.INFO)
    app_log_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        logger.addHandler(app_log_handler)
        logger.addHandler(console_handler)

# --- Configuration ---

CONFIG_FILE = "config.json"
DEFAULT_ITEM_COUNT = 60

def load_config(path=CONFIG_FILE):
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
            if isinstance(config, dict):
                return config
            logging.error(f"Config file {path} does not contain a JSON object; ignoring it.")
        except (OSError, json.JSONDecodeError) as e:
            logging.error(f"Error loading config: {e}")
    return {}

def save_config(config, path=CONFIG_FILE):
    existing_config = load_config(path)
    existing_config.update(config)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(existing_config, f, indent=2)
    except (OSError, TypeError) as e:
        logging.error(f"Error saving config: {e}")
        return False
    return True

def load_selection_options(path=CONFIG_FILE) -> SelectionOptions:
    section = load_config(path).get("selection")
    if section is not None and not isinstance(section, dict):
        logging.warning("Config key 'selection' is not an object; using default options.")
        section = None
    return SelectionOptions.from_dict(section)

def save_selection_options(options: SelectionOptions, path=CONFIG_FILE):
    return save_config({"selection": options.to_dict()}, path)

def load_item_count(path=CONFIG_FILE) -> int:
    count = load_config(path).get("item_count", DEFAULT_ITEM_COUNT)
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        logging.warning(f"Invalid item_count {count!r} in config; using {DEFAULT_ITEM_COUNT}.")
        return DEFAULT_ITEM_COUNT
    return count

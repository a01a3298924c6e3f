# app.py
import logging
import customtkinter as ctk
import pyperclip

from events import EventBus
from selection_options import SelectionOptions
from ui.main_window import AppUI
import utils

class OsxSelectApp:
    def __init__(self, root: ctk.CTk):
        self.root = root

        # --- Core Architecture ---
        self.event_bus = EventBus()
        self.options = utils.load_selection_options()
        item_count = utils.load_item_count()

        # --- UI (owns the selection surface) ---
        self.ui = AppUI(root, self.event_bus, item_count, self.options)
        self.surface = self.ui.grid_view.surface

        self._register_event_listeners()
        logging.info(f"Loaded {item_count} items (multi-select={self.options.multi_select}, "
                     f"drag-select={self.options.drag_select_enabled}).")

    def _register_event_listeners(self):
        bus = self.event_bus
        bus.subscribe("ui:select_all_clicked", self.surface.controller.select_all)
        bus.subscribe("ui:deselect_all_clicked", self.surface.controller.clear)
        bus.subscribe("ui:copy_selection_clicked", self.copy_selection)
        bus.subscribe("ui:options_changed", self.on_options_changed)
        bus.subscribe("ui:item_count_changed", self.on_item_count_changed)

    def on_options_changed(self, options: SelectionOptions):
        self.options = options
        self.surface.configure(options)
        utils.save_selection_options(options)
        self.event_bus.publish("state:options_applied", options)

    def on_item_count_changed(self, item_count: int):
        self.ui.grid_view.set_item_count(item_count)
        utils.save_config({"item_count": item_count})
        logging.info(f"Showing {item_count} items.")

    def copy_selection(self):
        selected = self.surface.controller.get_selected_indexes()
        if not selected:
            self.event_bus.publish("state:status_changed", "Nothing selected to copy.")
            return
        try:
            pyperclip.copy(", ".join(map(str, selected)))
        except pyperclip.PyperclipException as e:
            logging.error(f"Could not copy selection to clipboard: {e}")
            return
        logging.info(f"Copied {len(selected)} selected indexes to the clipboard.")

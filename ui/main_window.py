# ui/main_window.py
import customtkinter as ctk
from .selectable_grid import SelectableGridView
from events import EventBus
from selection_options import SelectionOptions
import utils

class AppUI:
    def __init__(self, root: ctk.CTk, event_bus: EventBus, item_count: int, options: SelectionOptions):
        self.root = root; self.event_bus = event_bus
        self.options = options

        self._setup_ui(item_count)
        self._subscribe_to_events()

    def _setup_ui(self, item_count: int):
        self.root.title("OsxSelect"); self.root.geometry("900x650")
        self.root.grid_columnconfigure(0, weight=1); self.root.grid_rowconfigure(1, weight=1)

        toolbar = ctk.CTkFrame(self.root); toolbar.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 0))
        self._create_toolbar(toolbar, item_count)

        self.grid_view = SelectableGridView(self.root, self.event_bus, item_count, self.options)
        self.grid_view.grid(row=1, column=0, sticky="nsew", padx=10, pady=10)

        status_frame = ctk.CTkFrame(self.root); status_frame.grid(row=2, column=0, sticky="ew", padx=10, pady=(0, 10))
        status_frame.grid_columnconfigure(0, weight=1)
        self.status_var = ctk.StringVar(value="Nothing selected.")
        ctk.CTkLabel(status_frame, textvariable=self.status_var, anchor="w").grid(row=0, column=0, sticky="ew", padx=10, pady=5)
        self.log_var = ctk.StringVar(value="")
        ctk.CTkLabel(status_frame, textvariable=self.log_var, anchor="e", text_color="gray").grid(row=0, column=1, sticky="e", padx=10, pady=5)

    def _create_toolbar(self, parent, item_count: int):
        b1 = ctk.CTkButton(parent, text="Select All", width=100, command=lambda: self.event_bus.publish("ui:select_all_clicked"))
        b1.pack(side="left", padx=(10, 5), pady=10)
        b2 = ctk.CTkButton(parent, text="Deselect All", width=100, command=lambda: self.event_bus.publish("ui:deselect_all_clicked"))
        b2.pack(side="left", padx=5, pady=10)
        b3 = ctk.CTkButton(parent, text="Copy Selection", width=120, command=lambda: self.event_bus.publish("ui:copy_selection_clicked"))
        b3.pack(side="left", padx=5, pady=10)

        ctk.CTkLabel(parent, text="Items:").pack(side="left", padx=(20, 5), pady=10)
        self.item_count_var = ctk.StringVar(value=str(item_count))
        count_entry = ctk.CTkEntry(parent, textvariable=self.item_count_var, width=60)
        count_entry.pack(side="left", padx=5, pady=10)
        count_entry.bind("<Return>", lambda e: self._publish_item_count())
        ctk.CTkButton(parent, text="Apply", width=60, command=self._publish_item_count).pack(side="left", padx=5, pady=10)

        self.drag_var = ctk.BooleanVar(value=self.options.drag_select_enabled)
        ctk.CTkSwitch(parent, text="Drag Select", variable=self.drag_var, command=self._publish_options).pack(side="right", padx=(5, 10))
        self.multi_var = ctk.BooleanVar(value=self.options.multi_select)
        ctk.CTkSwitch(parent, text="Multi Select", variable=self.multi_var, command=self._publish_options).pack(side="right", padx=5)

    def _subscribe_to_events(self):
        bus = self.event_bus
        bus.subscribe("selection:changed", self._update_selection_status)
        bus.subscribe("state:status_changed", lambda msg: self.status_var.set(msg))
        bus.subscribe("state:options_applied", lambda options: self._refresh_log_line())

    def _publish_options(self):
        self.options = SelectionOptions(multi_select=self.multi_var.get(), drag_select_enabled=self.drag_var.get())
        self.event_bus.publish("ui:options_changed", self.options)

    def _publish_item_count(self):
        try:
            item_count = int(self.item_count_var.get())
        except ValueError:
            self.status_var.set(f"'{self.item_count_var.get()}' is not a valid item count.")
            return
        if item_count < 0:
            self.status_var.set("Item count cannot be negative.")
            return
        self.event_bus.publish("ui:item_count_changed", item_count)

    def _update_selection_status(self, selected: list[int], added: set[int], removed: set[int]):
        if not selected:
            self.status_var.set("Nothing selected.")
        elif len(selected) <= 12:
            self.status_var.set(f"Selected ({len(selected)}): {', '.join(map(str, selected))}")
        else:
            self.status_var.set(f"Selected ({len(selected)}): {', '.join(map(str, selected[:12]))}, ...")

    def _refresh_log_line(self):
        self.log_var.set(utils.app_log_handler.last() or "")

# ui/selectable_grid.py
import customtkinter as ctk
import tkinter as tk
from events import EventBus
from gestures import Modifiers
from drag_selector import BoundingBox, Point, Rect
from selection_surface import SelectionSurface
from selection_options import SelectionOptions

TILE_WIDTH = 120
TILE_HEIGHT = 80
PADDING = 10

class SelectableGridView(ctk.CTkFrame):
    """
    A scrollable canvas of numbered tiles wired to a SelectionSurface.

    Tiles carry a tag binding and the canvas carries its own binding, so one
    press on a tile is observed twice; the surface's gesture guard keeps only
    the first. Pointer release is bound application-wide so a drag is released
    even when the pointer leaves the canvas.
    """
    def __init__(self, parent, event_bus: EventBus, item_count: int, options: SelectionOptions):
        super().__init__(parent)
        self.event_bus = event_bus
        self.tile_ids: list[int] = []
        self.reflow_job_id = None
        self.last_known_cols = -1
        self.drag_rect_id = None

        self.grid_rowconfigure(0, weight=1); self.grid_columnconfigure(0, weight=1)
        self.canvas = tk.Canvas(self, highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.scrollbar = ctk.CTkScrollbar(self, command=self.canvas.yview)
        self.scrollbar.grid(row=0, column=1, sticky="ns")
        self.canvas.configure(yscrollcommand=self.scrollbar.set)

        self.surface = SelectionSurface(event_bus, item_count, options,
                                        geometry=self.item_boxes, scroll_offset=self.scroll_offset)

        self._set_appearance()
        self._create_tiles(item_count)
        self._bind_events()

        self.event_bus.subscribe("selection:changed", self._on_selection_changed)
        self.event_bus.subscribe("drag:updated", self._draw_drag_rect)
        self.event_bus.subscribe("drag:ended", self._clear_drag_rect)

    def _set_appearance(self, event=None):
        dark = ctk.get_appearance_mode() == "Dark"
        self.color_bg = "#242424" if dark else "#f0f0f0"
        self.color_tile = "#3a3a3a" if dark else "#dcdcdc"
        self.color_text = "#e0e0e0" if dark else "#202020"
        self.color_selected = ctk.ThemeManager.theme["CTkButton"]["fg_color"][1 if dark else 0]
        self.canvas.configure(background=self.color_bg)

    def _bind_events(self):
        self.canvas.tag_bind("tile", "<ButtonPress-1>", self._on_tile_press)
        self.canvas.bind("<ButtonPress-1>", self._on_canvas_press)
        self.canvas.bind("<B1-Motion>", self._on_motion)
        self.bind_all("<ButtonRelease-1>", self._on_release, "+")
        self.canvas.bind("<Configure>", self._debounce_reflow)
        self.canvas.bind("<MouseWheel>", self._on_mouse_scroll)
        self.canvas.bind("<Button-4>", self._on_mouse_scroll)
        self.canvas.bind("<Button-5>", self._on_mouse_scroll)

    # --- Tiles and layout ---

    def _create_tiles(self, item_count: int):
        self.canvas.delete("tile")
        self.tile_ids = []
        for index in range(item_count):
            rect_id = self.canvas.create_rectangle(0, 0, TILE_WIDTH, TILE_HEIGHT, fill=self.color_tile,
                                                   outline="", tags=("tile", f"item:{index}", "tile_body"))
            self.canvas.create_text(TILE_WIDTH / 2, TILE_HEIGHT / 2, text=f"Item {index}", fill=self.color_text,
                                    tags=("tile", f"item:{index}", "tile_label"))
            self.tile_ids.append(rect_id)
        self.last_known_cols = -1
        self._debounce_reflow()

    def set_item_count(self, item_count: int):
        controller = self.surface.controller
        controller.set_item_count(item_count)
        self._create_tiles(item_count)
        selected = controller.get_selected_indexes()
        self._on_selection_changed(selected, set(selected), set())

    def _debounce_reflow(self, event=None):
        if self.reflow_job_id: self.after_cancel(self.reflow_job_id)
        self.reflow_job_id = self.after(100, self._reflow_tiles)

    def _reflow_tiles(self):
        self.reflow_job_id = None
        canvas_width = self.canvas.winfo_width()
        if canvas_width < 2:
            return

        cols = max(1, (canvas_width - PADDING) // (TILE_WIDTH + PADDING))
        if cols == self.last_known_cols:
            return
        self.last_known_cols = cols

        for index in range(len(self.tile_ids)):
            row, col = divmod(index, cols)
            x = PADDING + col * (TILE_WIDTH + PADDING)
            y = PADDING + row * (TILE_HEIGHT + PADDING)
            self.canvas.coords(f"item:{index}&&tile_body", x, y, x + TILE_WIDTH, y + TILE_HEIGHT)
            self.canvas.coords(f"item:{index}&&tile_label", x + TILE_WIDTH / 2, y + TILE_HEIGHT / 2)

        rows = -(-len(self.tile_ids) // cols)
        height = PADDING + rows * (TILE_HEIGHT + PADDING)
        self.canvas.configure(scrollregion=(0, 0, canvas_width, height))

    # --- Geometry feed ---

    def item_boxes(self) -> dict[int, BoundingBox]:
        """Current tile boxes in canvas (content) coordinates."""
        return {index: BoundingBox(*self.canvas.coords(rect_id)) for index, rect_id in enumerate(self.tile_ids)}

    def scroll_offset(self) -> tuple[float, float]:
        return self.canvas.canvasx(0), self.canvas.canvasy(0)

    def _index_at(self, event) -> int | None:
        x, y = self.canvas.canvasx(event.x), self.canvas.canvasy(event.y)
        for item in reversed(self.canvas.find_overlapping(x, y, x, y)):
            for tag in self.canvas.gettags(item):
                if tag.startswith("item:"):
                    return int(tag.split(":", 1)[1])
        return None

    # --- Pointer events ---

    def _on_tile_press(self, event):
        self.canvas.focus_set()
        self.surface.on_pointer_down(self._index_at(event), Modifiers.from_tk_state(event.state),
                                     button=event.num, point=Point(event.x, event.y))

    def _on_canvas_press(self, event):
        # Also fires after _on_tile_press for the same press; the surface ignores the repeat.
        self.surface.on_pointer_down(None, Modifiers.from_tk_state(event.state),
                                     button=event.num, point=Point(event.x, event.y))

    def _on_motion(self, event):
        self.surface.on_pointer_move(Point(event.x, event.y))

    def _on_release(self, event=None):
        self.surface.on_pointer_up()

    def _on_mouse_scroll(self, event):
        if event.num == 4 or event.delta > 0:
            self.canvas.yview_scroll(-3, "units")
        elif event.num == 5 or event.delta < 0:
            self.canvas.yview_scroll(3, "units")
        self.surface.on_scroll()

    # --- Rendering ---

    def _on_selection_changed(self, selected: list[int], added: set[int], removed: set[int]):
        for index in added:
            self.canvas.itemconfigure(f"item:{index}&&tile_body", fill=self.color_selected)
        for index in removed:
            self.canvas.itemconfigure(f"item:{index}&&tile_body", fill=self.color_tile)

    def _draw_drag_rect(self, rect: Rect):
        if self.drag_rect_id is None:
            self.drag_rect_id = self.canvas.create_rectangle(0, 0, 0, 0, outline=self.color_selected,
                                                             dash=(4, 2), width=1)
        self.canvas.coords(self.drag_rect_id, rect.left, rect.top, rect.right, rect.bottom)
        self.canvas.tag_raise(self.drag_rect_id)

    def _clear_drag_rect(self):
        if self.drag_rect_id is not None:
            self.canvas.delete(self.drag_rect_id)
            self.drag_rect_id = None

"""Interactive window for editing a task network and computing its float."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from typing import Any

from .render import CRITICAL_PEN, CRITICAL_PEN_WIDTH, Measure, TaskLayout, layout
from .storage import TaskFileError, load_tasks, save_tasks, with_project_suffix
from .task import UINT_MAX
from .taskman import CyclicGraphError, TaskManager

TITLE = "Project Float Calculator"
FILE_TYPES = [("Task Float Calculator File", "*.PFT")]
MAX_NUMBER_TEXT = 31
DRAG_THRESHOLD = 4
SELECTION_MARGIN = 2
LOSE_WORK_PROMPT = (
    "If you haven't saved your progress, you will lose your work.\n\n"
    "Do you wish to continue?"
)
CYCLE_MESSAGE = "Cyclic Graph Detected.\n\nPlease remove cyclic dependencies."


def parse_unit_time(text: str) -> int:
    """Read a completion time the way an unsigned decimal field is read.

    Leading whitespace and a sign are accepted, parsing stops at the first
    non-digit, text without digits gives 0, values too large saturate and
    negative values wrap around.  Raises ValueError for text longer than
    31 characters.
    """
    if len(text) > MAX_NUMBER_TEXT:
        raise ValueError("Edit field number is too long.")
    rest = text.lstrip()
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    digits = ""
    for ch in rest:
        if not ("0" <= ch <= "9"):
            break
        digits += ch
    if not digits:
        return 0
    value = int(digits)
    if value > UINT_MAX:
        return UINT_MAX
    return (-value) & UINT_MAX if negative else value


def _fixed_measure(text: str) -> tuple[int, int]:
    return (8 * len(text), 16)


def _colour(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


class App:
    """The main window: draws the network and turns input into edits."""

    def __init__(
        self,
        manager: TaskManager | None = None,
        measure: Measure | None = None,
        canvas: Any = None,
    ) -> None:
        self.manager = manager if manager is not None else TaskManager()
        self.measure: Measure = measure if measure is not None else _fixed_measure
        self.canvas = canvas
        self._root: Any = None
        self._click = (0, 0)
        self._dragging = False

    # -- drawing ----------------------------------------------------------

    def redraw(self) -> list[TaskLayout]:
        """Lay out every task and, with a canvas, draw tasks, edges and selection."""
        layouts = [
            layout(task, name, self.measure)
            for name, task in self.manager.tasks.items()
        ]
        canvas = self.canvas
        if canvas is None:
            return layouts

        canvas.delete("all")
        for item in layouts:
            text_fill = _colour(item.text_color)
            for cell in item.cells:
                canvas.create_rectangle(*cell.rect, fill=_colour(cell.fill),
                                        outline="black")
                left, top, right, _ = cell.text_rect
                canvas.create_text((left + right) // 2, top, text=cell.text,
                                   fill=text_fill, anchor="n")

        for source, target in self.manager.edges():
            if source.critical and target.critical:
                pen = {"fill": _colour(CRITICAL_PEN), "width": CRITICAL_PEN_WIDTH}
            else:
                pen = {"fill": "black", "width": 1}
            canvas.create_line(*source.out_point, *target.in_point, **pen)

        for task in self.manager.selected:
            left, top, right, bottom = task.bounds()
            canvas.create_rectangle(
                left - SELECTION_MARGIN, top - SELECTION_MARGIN,
                right + SELECTION_MARGIN, bottom + SELECTION_MARGIN,
                fill="", outline="black",
            )
        return layouts

    # -- main loop --------------------------------------------------------

    def run(self) -> None:
        """Open the window and process events until it is closed."""
        import tkinter as tk
        import tkinter.font as tkfont

        root = tk.Tk()
        root.title(TITLE)
        self._root = root

        font = tkfont.nametofont("TkDefaultFont")
        self.measure = lambda text: (font.measure(text), font.metrics("linespace"))

        menubar = tk.Menu(root)
        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="New", command=self._new_project)
        file_menu.add_command(label="Open...", command=self._open_project)
        file_menu.add_command(label="Save...", command=self._save_project)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=root.destroy)
        menubar.add_cascade(label="File", menu=file_menu)
        add_menu = tk.Menu(menubar, tearoff=False)
        add_menu.add_command(label="Task...", command=self._add_task_dialog)
        menubar.add_cascade(label="Add", menu=add_menu)
        help_menu = tk.Menu(menubar, tearoff=False)
        help_menu.add_command(label="About...", command=self._about)
        menubar.add_cascade(label="Help", menu=help_menu)
        root.config(menu=menubar)

        canvas = tk.Canvas(root, width=800, height=600, background="white")
        canvas.pack(fill="both", expand=True)
        self.canvas = canvas

        canvas.bind("<ButtonPress-1>", self._on_left_press)
        canvas.bind("<B1-Motion>", self._on_left_motion)
        canvas.bind("<ButtonRelease-1>", self._on_left_release)
        canvas.bind("<ButtonRelease-3>", self._on_right_release)
        root.bind("<KeyRelease-Delete>", self._on_delete)
        root.bind("<KeyRelease-space>", self._on_space)

        self.redraw()
        root.mainloop()
        self.canvas = None
        self._root = None

    # -- event handlers ---------------------------------------------------

    def _on_left_press(self, event: Any) -> None:
        self._click = (event.x_root, event.y_root)
        self._dragging = False

    def _on_left_motion(self, event: Any) -> None:
        dx = event.x_root - self._click[0]
        dy = event.y_root - self._click[1]
        if abs(dx) <= DRAG_THRESHOLD and abs(dy) <= DRAG_THRESHOLD:
            return
        if not self._dragging:
            self._dragging = True
        else:
            self.manager.mouse_drag(dx, dy)

    def _on_left_release(self, event: Any) -> None:
        if self._dragging:
            self._dragging = False
            self.manager.commit_drag()
        if event.state & 0x0001:
            self.manager.mouse_select(event.x, event.y)
        else:
            self.manager.mouse_highlight(event.x, event.y)
        self.redraw()

    def _on_right_release(self, event: Any) -> None:
        self.manager.mouse_graph(event.x, event.y)
        self.redraw()

    def _on_delete(self, _event: Any = None) -> None:
        self.manager.delete_selected()
        self.redraw()

    def _on_space(self, _event: Any = None) -> None:
        try:
            self.manager.calculate()
        except CyclicGraphError:
            self._error(CYCLE_MESSAGE)
        self.redraw()

    # -- commands ---------------------------------------------------------

    def _confirm_discard(self) -> bool:
        from tkinter import messagebox

        return messagebox.askyesno("New Project", LOSE_WORK_PROMPT,
                                   parent=self._root)

    def _error(self, message: str) -> None:
        from tkinter import messagebox

        messagebox.showerror("Error", message, parent=self._root)

    def _new_project(self) -> None:
        if self._confirm_discard():
            self.manager.clear()
            self.redraw()

    def _open_project(self) -> None:
        from tkinter import filedialog

        if not self._confirm_discard():
            return
        filename = filedialog.askopenfilename(
            parent=self._root, title="Open Task Float Project",
            filetypes=FILE_TYPES, defaultextension=".PFT",
        )
        if not filename:
            return
        self._run_file_action(load_tasks, filename)

    def _save_project(self) -> None:
        from tkinter import filedialog

        filename = filedialog.asksaveasfilename(
            parent=self._root, title="Save Task Float Project",
            filetypes=FILE_TYPES, defaultextension=".PFT",
        )
        if not filename:
            return
        self._run_file_action(save_tasks, filename)

    def _run_file_action(
        self, action: Callable[[TaskManager, str], None], filename: str
    ) -> None:
        try:
            action(self.manager, with_project_suffix(filename))
        except (TaskFileError, ValueError) as exc:
            self._error(str(exc))
        self.redraw()

    def _about(self) -> None:
        from tkinter import messagebox

        messagebox.showinfo("About", TITLE, parent=self._root)

    def _add_task_dialog(self) -> None:
        import tkinter as tk

        dialog = tk.Toplevel(self._root)
        dialog.title("New Task")
        dialog.transient(self._root)
        tk.Label(dialog, text="Task name:").grid(row=0, column=0, sticky="w")
        name_entry = tk.Entry(dialog)
        name_entry.grid(row=0, column=1)
        tk.Label(dialog, text="Unit time:").grid(row=1, column=0, sticky="w")
        time_entry = tk.Entry(dialog)
        time_entry.grid(row=1, column=1)

        def add() -> None:
            try:
                time = parse_unit_time(time_entry.get())
            except ValueError as exc:
                self._error(str(exc))
                time = 0
            try:
                self.manager.add_task(name_entry.get(), time)
            except ValueError:
                pass
            dialog.destroy()
            self.redraw()

        tk.Button(dialog, text="Add", command=add).grid(row=2, column=0)
        tk.Button(dialog, text="Cancel", command=dialog.destroy).grid(row=2, column=1)
        name_entry.focus_set()
        dialog.grab_set()
        dialog.wait_window()


def main(argv: list[str] | None = None) -> int:
    """Start the editor, optionally opening a project file first."""
    parser = argparse.ArgumentParser(prog="floatplan", description=TITLE)
    parser.add_argument("project", nargs="?", help="project file to open")
    args = parser.parse_args(argv)

    app = App()
    if args.project:
        try:
            load_tasks(app.manager, args.project)
        except TaskFileError as exc:
            print(f"{args.project}: {exc}", file=sys.stderr)
            return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
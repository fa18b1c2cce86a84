"""Geometry and colouring of task boxes for drawing."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .task import Task

Measure = Callable[[str], "tuple[int, int]"]
Colour = tuple[int, int, int]
Rect = tuple[int, int, int, int]

PADDING = 16
HALF_PAD = PADDING >> 1

LIGHT_FILL: Colour = (128, 64, 0)
DARK_FILL: Colour = (64, 32, 0)
GREEN_FILL: Colour = (0, 128, 0)
CRITICAL_FILL: Colour = (192, 64, 0)
CRITICAL_PEN: Colour = (192, 64, 0)
CRITICAL_PEN_WIDTH = 5

TEXT_NORMAL: Colour = (255, 255, 255)
TEXT_CRITICAL: Colour = (32, 0, 0)
TEXT_TERMINAL: Colour = (64, 255, 64)

START = "Start"
FINISH = "Finish"


@dataclass(frozen=True)
class Cell:
    """A filled rectangle with centred text inside ``text_rect``."""

    rect: Rect
    fill: Colour
    text: str
    text_rect: Rect


@dataclass(frozen=True)
class TaskLayout:
    """All cells making up a task box, plus its outer bounds."""

    cells: tuple[Cell, ...]
    text_color: Colour
    bounds: Rect
    critical: bool = False


def _inset(rect: Rect) -> Rect:
    left, top, right, bottom = rect
    return (left + HALF_PAD, top + HALF_PAD, right - HALF_PAD, bottom - HALF_PAD)


def layout_task(task: Task, name: str, measure: Measure) -> TaskLayout:
    """Lay out an ordinary task as a 3x3 checker table; updates the task's extents."""
    rows = [
        (str(task.start), str(task.time), str(task.end)),
        ("IN", name, "OUT"),
        (str(task.late_start), str(task.slack), str(task.late_finish)),
    ]
    cols = [0, 0, 0]
    heights = [0, 0, 0]
    for r, row in enumerate(rows):
        for c, text in enumerate(row):
            w, h = measure(text)
            cols[c] = max(cols[c], w)
            heights[r] = max(heights[r], h)

    xs = [task.x]
    for width in cols:
        xs.append(xs[-1] + width + PADDING)
    ys = [task.y]
    for height in heights:
        ys.append(ys[-1] + height + PADDING)

    task.out_x = xs[3]
    task.mid_y = ys[1] + ((heights[1] + PADDING) >> 1)
    task.bottom_y = ys[3]

    critical = task.slack == 0
    cells = []
    for r, row in enumerate(rows):
        for c, text in enumerate(row):
            light = (r + c) % 2 == 0
            if critical:
                fill = CRITICAL_FILL
            else:
                fill = LIGHT_FILL if light else DARK_FILL
            rect = (xs[c], ys[r], xs[c + 1], ys[r + 1])
            cells.append(Cell(rect, fill, text, _inset(rect)))

    return TaskLayout(
        cells=tuple(cells),
        text_color=TEXT_CRITICAL if critical else TEXT_NORMAL,
        bounds=(task.x, task.y, xs[3], ys[3]),
        critical=critical,
    )


def layout_start(task: Task, measure: Measure) -> TaskLayout:
    """Lay out the start node as a single green box."""
    w, h = measure(START)
    left, top = task.x, task.y
    right, bottom = task.x + w + PADDING, task.y + h + PADDING

    task.out_x = right
    task.mid_y = (top + bottom) >> 1
    task.bottom_y = bottom

    rect = (left, top, right, bottom)
    cell = Cell(rect, GREEN_FILL, START, (left, top + HALF_PAD, right, bottom))
    return TaskLayout(cells=(cell,), text_color=TEXT_TERMINAL, bounds=rect)


def layout_finish(task: Task, measure: Measure) -> TaskLayout:
    """Lay out the finish node: a title box above a box holding the end time."""
    label_w, label_h = measure(FINISH)
    end_text = str(task.end)
    end_w, end_h = measure(end_text)
    col = max(PADDING + label_w, PADDING + end_w)
    row1 = PADDING + label_h
    row2 = PADDING + end_h

    left, top = task.x, task.y
    right, bottom = left + col, top + row1 + row2

    task.out_x = right
    task.mid_y = (top + bottom) >> 1
    task.bottom_y = bottom

    split = top + row1
    cells = (
        Cell((left, top, right, split), GREEN_FILL, FINISH,
             (left, top + HALF_PAD, right, split)),
        Cell((left, split, right, bottom), GREEN_FILL, end_text,
             (left, split + HALF_PAD, right, bottom)),
    )
    return TaskLayout(cells=cells, text_color=TEXT_TERMINAL,
                      bounds=(left, top, right, bottom))


def layout(task: Task, name: str, measure: Measure) -> TaskLayout:
    """Lay out a task, choosing the special forms for Start and Finish."""
    if name == START:
        return layout_start(task, measure)
    if name == FINISH:
        return layout_finish(task, measure)
    return layout_task(task, name, measure)
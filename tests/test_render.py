from floatplan.render import (
    CRITICAL_FILL,
    DARK_FILL,
    GREEN_FILL,
    LIGHT_FILL,
    TEXT_CRITICAL,
    TEXT_NORMAL,
    TEXT_TERMINAL,
    layout,
    layout_finish,
    layout_start,
    layout_task,
)
from floatplan.task import Task

CHAR_W = 8
LINE_H = 16


def measure(text):
    return (len(text) * CHAR_W, LINE_H)


def _slack_task():
    t = Task(5, 100, 50)
    t.clear()
    t.set_start(0)
    t.set_backfloat(10)
    return t


def test_task_layout_has_nine_cells_in_reading_order():
    t = _slack_task()
    lay = layout_task(t, "Build", measure)
    texts = [c.text for c in lay.cells]
    assert texts[3:6] == ["IN", "Build", "OUT"]
    assert texts[0] == str(t.start)
    assert texts[1] == str(t.time)
    assert texts[7] == str(t.slack)
    assert len(lay.cells) == 9


def test_task_layout_updates_task_extents():
    t = _slack_task()
    lay = layout_task(t, "Build", measure)
    assert lay.bounds == t.bounds()
    assert lay.bounds[0] == t.x and lay.bounds[1] == t.y
    assert t.bounds()[1] < t.mid_y < t.bottom_y
    middle = lay.cells[4].rect
    assert middle[1] <= t.mid_y <= middle[3]


def test_non_critical_checker_colours():
    t = _slack_task()
    lay = layout_task(t, "Build", measure)
    assert not lay.critical
    assert lay.text_color == TEXT_NORMAL
    fills = [c.fill for c in lay.cells]
    assert fills[0::2] == [LIGHT_FILL] * 5
    assert fills[1::2] == [DARK_FILL] * 4


def test_critical_task_uses_critical_fill():
    t = Task(5)
    t.clear()
    t.set_start(0)
    t.set_backfloat(5)
    lay = layout_task(t, "Crit", measure)
    assert lay.critical
    assert lay.text_color == TEXT_CRITICAL
    assert {c.fill for c in lay.cells} == {CRITICAL_FILL}


def test_cells_tile_the_box():
    t = _slack_task()
    lay = layout_task(t, "Build", measure)
    left, top, right, bottom = lay.bounds
    area = sum((r[2] - r[0]) * (r[3] - r[1]) for r in (c.rect for c in lay.cells))
    assert area == (right - left) * (bottom - top)
    for cell in lay.cells:
        l, tp, r, b = cell.rect
        tl, tt, tr, tb = cell.text_rect
        assert (tl - l, tt - tp, r - tr, b - tb) == (8, 8, 8, 8)


def test_column_widths_follow_widest_text():
    t = _slack_task()
    lay = layout_task(t, "A-very-long-name", measure)
    mid = lay.cells[4].rect
    assert mid[2] - mid[0] == len("A-very-long-name") * CHAR_W + 16
    assert lay.cells[1].rect[2] - lay.cells[1].rect[0] == mid[2] - mid[0]


def test_start_layout():
    t = Task(0, 10, 20)
    lay = layout_start(t, measure)
    w, h = measure("Start")
    assert lay.bounds == (10, 20, 10 + w + 16, 20 + h + 16)
    assert t.out_x == lay.bounds[2]
    assert t.mid_y == (lay.bounds[1] + lay.bounds[3]) >> 1
    assert lay.cells[0].fill == GREEN_FILL
    assert lay.text_color == TEXT_TERMINAL
    assert lay.cells[0].text_rect[1] == lay.bounds[1] + 8


def test_finish_layout_shows_end_time():
    t = Task(0, 512, 0)
    t.set_start(1234567)
    lay = layout_finish(t, measure)
    assert [c.text for c in lay.cells] == ["Finish", "1234567"]
    assert lay.cells[0].rect[3] == lay.cells[1].rect[1]
    assert lay.bounds == t.bounds()
    width = lay.bounds[2] - lay.bounds[0]
    assert width == max(measure("Finish")[0], measure("1234567")[0]) + 16


def test_layout_dispatches_on_name():
    assert layout(Task(0), "Start", measure).cells[0].text == "Start"
    assert layout(Task(0), "Finish", measure).cells[0].text == "Finish"
    assert len(layout(Task(3), "Other", measure).cells) == 9
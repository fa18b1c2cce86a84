import pytest

from floatplan.app import App, main, parse_unit_time
from floatplan.render import CRITICAL_PEN_WIDTH
from floatplan.task import UINT_MAX
from floatplan.taskman import TaskManager


class FakeCanvas:
    def __init__(self):
        self.calls = []

    def delete(self, tag):
        self.calls.append(("delete", (tag,), {}))

    def create_rectangle(self, *coords, **kw):
        self.calls.append(("rectangle", coords, kw))

    def create_text(self, *coords, **kw):
        self.calls.append(("text", coords, kw))

    def create_line(self, *coords, **kw):
        self.calls.append(("line", coords, kw))

    def of(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("  7 days", 7),
        ("+5", 5),
        ("abc", 0),
        ("", 0),
        ("12x34", 12),
    ],
)
def test_parse_unit_time_values(text, expected):
    assert parse_unit_time(text) == expected


def test_parse_unit_time_saturates():
    assert parse_unit_time("99999999999") == UINT_MAX
    assert parse_unit_time("9" * 31) == UINT_MAX


def test_parse_unit_time_negative_wraps():
    assert parse_unit_time("-1") == UINT_MAX
    assert (parse_unit_time("-5") + 5) & UINT_MAX == 0


def test_parse_unit_time_too_long():
    with pytest.raises(ValueError):
        parse_unit_time("1" * 32)


def test_default_app_has_terminals():
    app = App()
    assert set(app.manager.tasks) == {"Start", "Finish"}


def test_redraw_without_canvas_lays_out_every_task():
    manager = TaskManager()
    manager.add_task("Dig", 3)
    app = App(manager)
    layouts = app.redraw()
    assert len(layouts) == len(manager.tasks)
    dig = manager.find("Dig")
    assert dig.out_x > dig.x
    assert dig.bottom_y > dig.y
    assert manager.task_at(dig.x + 1, dig.y + 1) is dig


def test_redraw_draws_one_line_per_edge():
    manager = TaskManager()
    manager.add_task("Dig", 3)
    manager.graph("Start", "Dig")
    manager.graph("Dig", "Finish")
    canvas = FakeCanvas()
    App(manager, canvas=canvas).redraw()
    assert canvas.calls[0] == ("delete", ("all",), {})
    assert len(canvas.of("line")) == len(manager.edges())


def test_critical_edges_drawn_wide_after_calculation():
    manager = TaskManager()
    manager.add_task("Dig", 3)
    manager.graph("Start", "Dig")
    manager.graph("Dig", "Finish")
    manager.calculate()
    canvas = FakeCanvas()
    App(manager, canvas=canvas).redraw()
    widths = [kw["width"] for _, _, kw in canvas.of("line")]
    assert widths.count(CRITICAL_PEN_WIDTH) == len(manager.critical_edges())
    assert len(manager.critical_edges()) > 0


def test_selection_outline_surrounds_task():
    manager = TaskManager()
    manager.add_task("Dig", 3)
    app = App(manager)
    app.redraw()
    dig = manager.find("Dig")
    dig.move(300, 300)
    app.redraw()
    assert manager.mouse_highlight(dig.x + 1, dig.y + 1)
    canvas = FakeCanvas()
    app.canvas = canvas
    app.redraw()
    left, top, right, bottom = dig.bounds()
    outlines = [c for c in canvas.of("rectangle") if c[2].get("fill") == ""]
    assert outlines == [
        ("rectangle", (left - 2, top - 2, right + 2, bottom + 2),
         {"fill": "", "outline": "black"})
    ]


def test_redraw_uses_given_measure():
    seen = []

    def measure(text):
        seen.append(text)
        return (10, 10)

    app = App(measure=measure)
    layouts = app.redraw()
    assert len(layouts) == 2
    assert "Start" in seen
    assert "Finish" in seen
    start = app.manager.find("Start")
    # Start box is the measured text plus 16 units of padding each way.
    assert start.out_x - start.x == 26
    assert start.bottom_y - start.y == 26


def test_main_reports_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.PFT"
    assert main([str(missing)]) == 1
    assert "Error opening file." in capsys.readouterr().err
# floatplan

floatplan is a small editor for project task networks. You place tasks, give
each one a duration, link them in the order they must happen, and it works out
when each task can start and end, how much float (slack) each one has, and
which tasks lie on the critical path.

Every project holds two fixed tasks, `Start` and `Finish`, which cannot be
removed. Links never lead out of `Finish` or into `Start`. When the schedule
is calculated, a task with no incoming link is tied to `Start` and a task with
no outgoing link is tied to `Finish`. A network with a cycle reachable from
`Start` cannot be scheduled.

## Installing

```
pip install .
```

The window uses Tk (`tkinter`), which comes with most Python installations.
Nothing else is needed.

## Running the editor

```
floatplan
floatplan plan.PFT
```

The optional argument is a project file to open at start-up. If it cannot be
read, the error is printed and the command exits with status 1.

In the window:

- **File → New** clears the project and **File → Open...** loads a project
  file, both after asking whether to discard unsaved work. **File → Save...**
  writes the project. The chosen file name always has everything from its last
  period replaced by `.PFT` (or `.PFT` appended if it has none).
- **Add → Task...** asks for a name and a duration in whole time units. The
  duration is read like an unsigned decimal number: text after the digits is
  ignored, text with no digits gives 0, and more than 31 characters is an
  error. A name that is already taken is ignored.
- Left click a task to highlight it alone; Shift + left click adds it to or
  removes it from the selection.
- Drag with the left button to move the selected tasks. A drag only moves
  them when it goes both across and down (or up).
- Right click a task to link every selected task to it, or to remove that
  link if it already exists.
- **Delete** removes the selected tasks together with their links.
- **Space** calculates the schedule. Each task then shows its start, duration
  and end on the top row, and its latest start, float and latest finish on the
  bottom row. Tasks with no float, and links between two such tasks, are drawn
  in the critical colour. `Finish` shows the project's end time.

## Using it from Python

```python
from floatplan.taskman import CyclicGraphError, TaskManager
from floatplan.storage import load_tasks, save_tasks

tasks = TaskManager()
tasks.add_task("Design", 3)
tasks.add_task("Build", 5)
tasks.add_task("Test", 2)
tasks.graph("Design", "Build")
tasks.graph("Build", "Test")

try:
    tasks.calculate()
except CyclicGraphError:
    print("remove the cyclic dependency first")

for name, task in tasks.tasks.items():
    print(name, task.start, task.end, task.slack, task.critical)

save_tasks(tasks, "plan.PFT")

other = TaskManager()
load_tasks(other, "plan.PFT")
```

The pieces:

- `floatplan.task.Task` holds a duration (`time`), a position (`x`, `y`) and
  the computed `start`, `end`, `late_start`, `late_finish` and `slack`.
  Times are unsigned 32-bit values and wrap around.
- `floatplan.taskman.TaskManager` keeps the named tasks and their links:
  `add_task` (raises `ValueError` on a duplicate name), `find`, `graph`,
  `ungraph`, `toggle_graph`, `remove`, `delete_task`, `clear`, `edges`,
  `critical_edges`, `has_cycle` and `calculate` (raises `CyclicGraphError`).
  `delete_task` only removes a task that has at least one outgoing link;
  `remove` takes a `Task` and removes it with all its links. The mouse
  methods (`task_at`, `mouse_highlight`, `mouse_select`, `mouse_graph`,
  `mouse_drag`, `commit_drag`, `delete_selected`) work on the selection
  using each task's last laid-out box.
- `floatplan.render.layout(task, name, measure)` computes the cells, colours
  and bounds of a task box, given a `measure(text) -> (width, height)`
  function, and records the box's extents on the task.
- `floatplan.storage` has `save_tasks`, `load_tasks` and
  `with_project_suffix`. `load_tasks` clears the manager first. Both raise
  `TaskFileError` when a file cannot be opened, read or written, is not a
  task file, or is corrupted; `with_project_suffix` raises `ValueError` for a
  name too long to take the suffix.
- `floatplan.app.App` is the window; `App.redraw()` lays out every task and
  returns the layouts, drawing them only when a canvas is attached.
  `floatplan.app.parse_unit_time` reads a duration field.

## Project files

All values are little-endian. A project file holds:

1. the eight-byte signature `TASKFILE`;
2. two unsigned 16-bit counts: tasks, then links;
3. each task name as NUL-terminated UTF-16, in name order;
4. for each task, in name order, three unsigned 32-bit values: duration, x
   and y;
5. each link as two unsigned 16-bit task numbers, source then target.

A project can hold at most 65535 tasks and 65535 links.
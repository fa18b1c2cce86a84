"""A project's task network: tasks, dependencies, selection and scheduling."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from .render import FINISH, START
from .task import Task


class CyclicGraphError(Exception):
    """Raised when the dependency graph reachable from Start has a cycle."""


_VISITING = 1
_DONE = 2


class TaskManager:
    """Holds named tasks joined by dependency edges.

    Every manager owns a Start and a Finish node which can never be removed.
    Edges never lead out of Finish or into Start.
    """

    def __init__(self) -> None:
        self.start = Task(0)
        self.finish = Task(0, 512, 0)
        self._tasks: dict[str, Task] = {START: self.start, FINISH: self.finish}
        self._out: dict[Task, list[Task]] = {}
        self._in: dict[Task, list[Task]] = {}
        self._selected: dict[Task, None] = {}
        self._drag = (0, 0)
        self.graph(START, FINISH)

    # -- inspection -------------------------------------------------------

    @property
    def tasks(self) -> dict[str, Task]:
        """All tasks keyed by name, in name order."""
        return dict(sorted(self._tasks.items()))

    @property
    def selected(self) -> tuple[Task, ...]:
        """The currently selected tasks."""
        return tuple(self._selected)

    def find(self, name: str) -> Task | None:
        """Return the task called ``name``, or None."""
        return self._tasks.get(name)

    def edges(self) -> list[tuple[Task, Task]]:
        """Every dependency edge as ``(source, target)``."""
        return [(a, b) for a, targets in self._out.items() for b in targets]

    def critical_edges(self) -> list[tuple[Task, Task]]:
        """Edges whose both ends have zero slack."""
        return [(a, b) for a, b in self.edges() if a.critical and b.critical]

    # -- editing ----------------------------------------------------------

    def add_task(self, name: str, time: int) -> Task:
        """Create a task; raises ValueError if the name is already taken."""
        if name in self._tasks:
            raise ValueError(f"task {name!r} already exists")
        task = Task(time)
        self._tasks[name] = task
        return task

    def delete_task(self, name: str) -> bool:
        """Remove a named task that has at least one outgoing edge.

        Start, Finish, unknown names and tasks without successors are left
        alone and False is returned.
        """
        if name in (START, FINISH):
            return False
        task = self._tasks.get(name)
        if task is None or not self._out.get(task):
            return False
        return self.remove(task)

    def remove(self, task: Task) -> bool:
        """Remove ``task`` and every edge touching it."""
        if task is self.start or task is self.finish:
            return False
        name = next((n for n, t in self._tasks.items() if t is task), None)
        if name is None:
            return False
        del self._tasks[name]
        self._purge(task)
        self._selected.pop(task, None)
        return True

    def clear(self) -> None:
        """Drop every task but Start and Finish, all edges and the selection."""
        self._tasks = {START: self.start, FINISH: self.finish}
        self._out.clear()
        self._in.clear()
        self._selected.clear()

    def graph(self, source: str, target: str) -> bool:
        """Add the edge ``source -> target`` by name; True if it now exists."""
        a, b = self._tasks.get(source), self._tasks.get(target)
        if a is None or b is None or a is b:
            return False
        if a is self.finish or b is self.start:
            return False
        if self._has_edge(a, b):
            return True
        return self._link(a, b)

    def ungraph(self, source: str, target: str) -> bool:
        """Remove the edge ``source -> target`` by name; True if removed."""
        a, b = self._tasks.get(source), self._tasks.get(target)
        if a is None or b is None or a is b:
            return False
        if not self._has_edge(a, b):
            return False
        self._unlink(a, b)
        return True

    def toggle_graph(self, a: Task, b: Task) -> bool:
        """Remove the edge ``a -> b`` if present, otherwise add it."""
        if a is b:
            return False
        if self._has_edge(a, b):
            self._unlink(a, b)
            return True
        return self._link(a, b)

    # -- scheduling -------------------------------------------------------

    def has_cycle(self) -> bool:
        """Whether a cycle is reachable from Start."""
        state = {self.start: _VISITING}
        stack = [(self.start, iter(self._out.get(self.start, ())))]
        while stack:
            node, successors = stack[-1]
            for nxt in successors:
                seen = state.get(nxt)
                if seen == _VISITING:
                    return True
                if seen is None:
                    state[nxt] = _VISITING
                    stack.append((nxt, iter(self._out.get(nxt, ()))))
                    break
            else:
                state[node] = _DONE
                stack.pop()
        return False

    def calculate(self) -> None:
        """Run the critical path calculation over all tasks.

        Tasks lacking predecessors are joined to Start and tasks lacking
        successors to Finish first.  Raises CyclicGraphError on a cycle.
        """
        self._prepare()
        if self.has_cycle():
            raise CyclicGraphError(
                "Cyclic graph detected; please remove cyclic dependencies."
            )
        self.start.set_start(0)
        for task in self._ordered(self._out, self._in):
            for nxt in self._out.get(task, ()):
                nxt.set_start(task.end)
        self.finish.set_backfloat(self.finish.end)
        for task in self._ordered(self._in, self._out):
            for prev in self._in.get(task, ()):
                prev.set_backfloat(task.late_start)

    # -- mouse interaction ------------------------------------------------

    def task_at(self, x: int, y: int) -> Task | None:
        """The first task, in name order, whose box contains the point."""
        for _, task in sorted(self._tasks.items()):
            if task.contains(x, y):
                return task
        return None

    def mouse_highlight(self, x: int, y: int) -> bool:
        """Replace the selection with the task under the point, if any."""
        self._selected.clear()
        task = self.task_at(x, y)
        if task is None:
            return False
        self._selected[task] = None
        return True

    def mouse_select(self, x: int, y: int) -> bool:
        """Toggle the task under the point in the selection."""
        task = self.task_at(x, y)
        if task is None:
            return False
        if task in self._selected:
            del self._selected[task]
        else:
            self._selected[task] = None
        return True

    def mouse_graph(self, x: int, y: int) -> None:
        """Toggle edges from every selected task to the task under the point."""
        if not self._selected:
            return
        target = self.task_at(x, y)
        if target is None:
            return
        for task in list(self._selected):
            self.toggle_graph(task, target)

    def delete_selected(self) -> None:
        """Remove every selected task that may be removed."""
        for task in list(self._selected):
            self.remove(task)

    def mouse_drag(self, dx: int, dy: int) -> None:
        """Record the pending drag offset."""
        self._drag = (dx, dy)

    def commit_drag(self) -> bool:
        """Move the selection by the pending offset; both parts must be non-zero."""
        dx, dy = self._drag
        if not dx or not dy:
            return False
        for task in self._selected:
            task.move_by(dx, dy)
        self._drag = (0, 0)
        return True

    # -- internals --------------------------------------------------------

    def _has_edge(self, a: Task, b: Task) -> bool:
        return any(t is b for t in self._out.get(a, ()))

    def _link(self, a: Task, b: Task) -> bool:
        if a is self.finish or b is self.start:
            return False
        self._out.setdefault(a, []).append(b)
        self._in.setdefault(b, []).append(a)
        return True

    def _unlink(self, a: Task, b: Task) -> None:
        for adjacency, key, value in ((self._out, a, b), (self._in, b, a)):
            targets = adjacency.get(key)
            if targets is not None and value in targets:
                targets.remove(value)
                if not targets:
                    del adjacency[key]

    def _purge(self, task: Task) -> None:
        for adjacency in (self._out, self._in):
            adjacency.pop(task, None)
            for key in list(adjacency):
                kept = [t for t in adjacency[key] if t is not task]
                if kept:
                    adjacency[key] = kept
                else:
                    del adjacency[key]

    def _prepare(self) -> None:
        for _, task in sorted(self._tasks.items()):
            task.clear()
            if task is not self.start and not self._in.get(task):
                self._link(self.start, task)
            if task is not self.finish and not self._out.get(task):
                self._link(task, self.finish)

    def _ordered(
        self,
        forward: dict[Task, list[Task]],
        backward: dict[Task, list[Task]],
    ) -> Iterable[Task]:
        pending = {task: len(backward.get(task, ())) for task in self._tasks.values()}
        queue = deque(task for task, count in pending.items() if count == 0)
        while queue:
            task = queue.popleft()
            yield task
            for nxt in forward.get(task, ()):
                pending[nxt] -= 1
                if pending[nxt] == 0:
                    queue.append(nxt)
"""A single schedulable task and its forward/backward pass figures."""

from __future__ import annotations

from dataclasses import dataclass, field

UINT_MAX = 0xFFFFFFFF


def _u32(value: int) -> int:
    return value & UINT_MAX


@dataclass(eq=False)
class Task:
    """A task with a completion time, a position and computed schedule data.

    Times are unsigned 32-bit quantities, so differences wrap around.
    The drawn extents (``out_x``, ``mid_y``, ``bottom_y``) are filled in
    when the task is laid out.
    """

    time: int = 0
    x: int = 0
    y: int = 0
    start: int = field(default=0, init=False)
    end: int = field(default=0, init=False)
    late_start: int = field(default=0, init=False)
    late_finish: int = field(default=0, init=False)
    slack: int = field(default=0, init=False)
    out_x: int = field(default=0, init=False)
    mid_y: int = field(default=0, init=False)
    bottom_y: int = field(default=0, init=False)

    def move(self, x: int, y: int) -> None:
        """Place the task's top-left corner at ``(x, y)``."""
        self.x = x
        self.y = y

    def move_by(self, dx: int, dy: int) -> None:
        """Shift the task by ``(dx, dy)``."""
        self.x += dx
        self.y += dy

    def clear(self) -> None:
        """Reset the schedule figures ahead of a new calculation."""
        self.start = self.end = self.late_start = self.slack = 0
        self.late_finish = UINT_MAX

    def set_start(self, value: int) -> None:
        """Raise the earliest start to ``value`` if it is not below the current one."""
        if value >= self.start:
            self.start = value
            self.end = _u32(value + self.time)

    def set_backfloat(self, value: int) -> None:
        """Lower the latest finish to ``value`` if it is below the current one."""
        if value < self.late_finish:
            self.late_finish = value
            self.late_start = _u32(value - self.time)
            self.slack = _u32(self.late_start - self.start)

    @property
    def critical(self) -> bool:
        return self.slack == 0

    @property
    def in_point(self) -> tuple[int, int]:
        return (self.x, self.mid_y)

    @property
    def out_point(self) -> tuple[int, int]:
        return (self.out_x, self.mid_y)

    def bounds(self) -> tuple[int, int, int, int]:
        """Return ``(left, top, right, bottom)`` of the last laid-out box."""
        return (self.x, self.y, self.out_x, self.bottom_y)

    def contains(self, x: int, y: int) -> bool:
        """Whether the point lies within the box, edges included."""
        left, top, right, bottom = self.bounds()
        return left <= x <= right and top <= y <= bottom
"""Reading and writing task networks in the binary task file format.

Layout (little-endian):

* the 8-byte signature ``TASKFILE``;
* two unsigned 16-bit counts: tasks, then edges;
* each task name as NUL-terminated UTF-16, in name order;
* for each task, in name order, three unsigned 32-bit values:
  completion time, x and y;
* each edge as two unsigned 16-bit task indices, source then target.
"""

from __future__ import annotations

import os
import struct
from typing import BinaryIO

from .render import FINISH, START
from .taskman import TaskManager

SIGNATURE = b"TASKFILE"
PROJECT_SUFFIX = ".PFT"
MAX_FILENAME = 1024
MAX_COUNT = 0xFFFF

_COUNT = struct.Struct("<H")
_PROPS = struct.Struct("<III")
_EDGE = struct.Struct("<HH")


class TaskFileError(Exception):
    """Raised when a task file cannot be read or written."""


def _read(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise TaskFileError("Error reading file.")
    return data


def _read_name(stream: BinaryIO) -> str:
    units = bytearray()
    while True:
        unit = _read(stream, 2)
        if unit == b"\0\0":
            return units.decode("utf-16-le", errors="surrogatepass")
        units += unit


def save_tasks(manager: TaskManager, path: str | os.PathLike[str]) -> None:
    """Write every task, its properties and all edges of ``manager`` to ``path``."""
    tasks = manager.tasks
    edges = manager.edges()
    if len(tasks) > MAX_COUNT:
        raise TaskFileError("Too many tasks to store.")
    if len(edges) > MAX_COUNT:
        raise TaskFileError("Too many graphs to store.")

    ids = {id(task): index for index, task in enumerate(tasks.values())}

    parts = [SIGNATURE, _COUNT.pack(len(tasks)), _COUNT.pack(len(edges))]
    for name in tasks:
        encoded = name.encode("utf-16-le", errors="surrogatepass")
        if len(encoded) // 2 + 1 > MAX_COUNT:
            raise TaskFileError(f"Task name {name[:32]!r}... is too long to store.")
        parts.append(encoded + b"\0\0")
    for task in tasks.values():
        parts.append(_PROPS.pack(task.time, task.x, task.y))
    for source, target in edges:
        parts.append(_EDGE.pack(ids[id(source)], ids[id(target)]))

    try:
        with open(path, "wb") as stream:
            stream.write(b"".join(parts))
    except OSError as exc:
        raise TaskFileError("File write error.") from exc


def load_tasks(manager: TaskManager, path: str | os.PathLike[str]) -> None:
    """Replace the contents of ``manager`` with the network stored at ``path``.

    The manager is cleared first, so on failure it is left partly loaded.
    """
    manager.clear()
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise TaskFileError("Error opening file.") from exc

    with stream:
        if _read(stream, len(SIGNATURE)) != SIGNATURE:
            raise TaskFileError("Not a tasks storage file.")
        (task_count,) = _COUNT.unpack(_read(stream, _COUNT.size))
        (edge_count,) = _COUNT.unpack(_read(stream, _COUNT.size))

        names: list[str] = []
        for _ in range(task_count):
            name = _read_name(stream)
            if name not in (START, FINISH):
                try:
                    manager.add_task(name, 0)
                except ValueError as exc:
                    raise TaskFileError("Error adding task from file.") from exc
            names.append(name)

        for task in manager.tasks.values():
            time, x, y = _PROPS.unpack(_read(stream, _PROPS.size))
            task.time = time
            task.move(x, y)

        for _ in range(edge_count):
            source_id, target_id = _EDGE.unpack(_read(stream, _EDGE.size))
            if source_id >= len(names) or target_id >= len(names):
                raise TaskFileError("File is corrupted.")
            if not manager.graph(names[source_id], names[target_id]):
                raise TaskFileError("Error adding graph from file.")


def with_project_suffix(filename: str) -> str:
    """Replace everything from the last period with ``.PFT``, or append it.

    Raises ValueError when the result would not fit the file name limit.
    """
    dot = filename.rfind(".")
    stem = filename if dot < 0 else filename[:dot]
    if len(stem) >= MAX_FILENAME - len(PROJECT_SUFFIX) - 1:
        raise ValueError("file name is too long for the project suffix")
    return stem + PROJECT_SUFFIX
"""Buffer list and per-file view state."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from vim_init.errors import VimInitError

Cursor = Tuple[int, int]  # (row, column)
Fold = Tuple[int, int]  # (first row, last row)


@dataclass(slots=True)
class BufferInfo:
    """A listed buffer with the view state the host tracks for it."""

    id: int
    name: str
    cursor: Cursor = (0, 0)
    folds: tuple[Fold, ...] = ()

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)


class BufferList:
    """Ordered buffers with a current pointer; cycling wraps around."""

    def __init__(self) -> None:
        self._buffers: Dict[int, BufferInfo] = {}
        self._current: Optional[int] = None
        self._next_id = 1

    def add(self, name: str) -> BufferInfo:
        existing = self.find(name)
        if existing is not None:
            return existing
        info = BufferInfo(id=self._next_id, name=name)
        self._next_id += 1
        self._buffers[info.id] = info
        if self._current is None:
            self._current = info.id
        return info

    def find(self, name: str) -> Optional[BufferInfo]:
        for info in self._buffers.values():
            if info.name == name:
                return info
        return None

    def get(self, buffer_id: int) -> BufferInfo:
        try:
            return self._buffers[buffer_id]
        except KeyError as exc:
            raise KeyError(f"Invalid buffer id: {buffer_id}") from exc

    def remove(self, buffer_id: int) -> BufferInfo:
        info = self._buffers.pop(buffer_id)
        if self._current == buffer_id:
            self._current = next(iter(self._buffers), None)
        return info

    @property
    def current(self) -> Optional[BufferInfo]:
        if self._current is None:
            return None
        return self._buffers[self._current]

    def set_current(self, buffer_id: int) -> BufferInfo:
        info = self.get(buffer_id)
        self._current = buffer_id
        return info

    def next_id(self, step: int = 1) -> Optional[int]:
        """Id ``step`` places after the current buffer, wrapping around."""

        ids = list(self._buffers)
        if not ids:
            return None
        if self._current is None:
            return ids[0]
        index = ids.index(self._current)
        return ids[(index + step) % len(ids)]

    def previous_id(self) -> Optional[int]:
        return self.next_id(-1)

    def __len__(self) -> int:
        return len(self._buffers)

    def names(self) -> tuple[str, ...]:
        return tuple(info.name for info in self._buffers.values())


@dataclass(frozen=True, slots=True)
class View:
    """Saved cursor position and folds for one file."""

    cursor: Cursor = (0, 0)
    folds: tuple[Fold, ...] = field(default_factory=tuple)

    def to_json(self) -> dict[str, object]:
        return {"cursor": list(self.cursor), "folds": [list(f) for f in self.folds]}

    @classmethod
    def from_json(cls, data: dict[str, object]) -> "View":
        row, col = data.get("cursor", (0, 0))  # type: ignore[misc]
        folds = tuple(
            (int(start), int(end))
            for start, end in data.get("folds", ())  # type: ignore[union-attr]
        )
        return cls(cursor=(int(row), int(col)), folds=folds)


class ViewStore:
    """Per-file view state keyed by path.

    Views always live in memory; with a ``directory`` they are also
    written as one JSON file per path, named the way Vim names view files
    (``=`` doubled, then ``/`` replaced by ``=+``).
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self._views: Dict[str, View] = {}
        self._directory = Path(directory) if directory else None

    def save(self, path: str, view: View) -> None:
        self._views[path] = view
        if self._directory is not None:
            self._directory.mkdir(parents=True, exist_ok=True)
            target = self._file_for(path)
            target.write_text(json.dumps(view.to_json()), encoding="utf-8")

    def load(self, path: str) -> View:
        """Return the saved view for ``path``; ``KeyError`` if there is none."""

        view = self._views.get(path)
        if view is not None:
            return view
        if self._directory is not None:
            target = self._file_for(path)
            if target.exists():
                try:
                    data = json.loads(target.read_text(encoding="utf-8"))
                    view = View.from_json(data)
                except (ValueError, TypeError, AttributeError) as exc:
                    raise VimInitError(f"Corrupt view file {target}: {exc}") from exc
                self._views[path] = view
                return view
        raise KeyError(f"No view saved for '{path}'")

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        if path in self._views:
            return True
        return self._directory is not None and self._file_for(path).exists()

    def _file_for(self, path: str) -> Path:
        assert self._directory is not None
        name = path.replace("=", "==").replace("/", "=+")
        return self._directory / (name + "=")


__all__ = ["BufferInfo", "BufferList", "Cursor", "Fold", "View", "ViewStore"]

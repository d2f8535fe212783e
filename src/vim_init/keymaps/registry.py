"""Keymap registry: the host's dispatch table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, Optional

from vim_init.runtime.telemetry import span

from .models import ActionRef, Binding
from .notation import expand_modes, parse_keys

BindingKey = tuple[str, str, Optional[int]]


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    buffer_local_count: int
    modes: tuple[str, ...]


class KeymapRegistry:
    """Stores bindings keyed by (mode, key signature, buffer).

    Registering the same key again replaces the earlier binding without
    complaint. ``leader`` is consulted on every ``set`` so a change to
    ``mapleader`` affects mappings declared afterwards only.
    """

    def __init__(
        self,
        *,
        leader: Callable[[], str] | None = None,
        logger_name: str | None = None,
    ) -> None:
        self._bindings: Dict[BindingKey, Binding] = {}
        self._leader = leader or (lambda: "\\")
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def set(
        self,
        modes: str | Iterable[str],
        lhs: str,
        rhs: str | Callable[..., object],
        *,
        desc: str = "",
        buffer: int | None = None,
    ) -> list[Binding]:
        """Map ``lhs`` to ``rhs`` in every mode of ``modes``."""

        expanded = expand_modes(modes)
        with span(
            "keymaps::set",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"lhs": lhs, "modes": ",".join(expanded), "buffer": buffer},
        ) as handle:
            sequence = parse_keys(lhs, leader=self._leader())
            action = ActionRef(rhs, description=desc)
            registered: list[Binding] = []
            replaced = 0
            for mode in expanded:
                binding = Binding(
                    mode=mode,
                    lhs=lhs,
                    sequence=sequence,
                    action=action,
                    description=desc,
                    buffer=buffer,
                )
                if binding.key in self._bindings:
                    # Re-insert so iteration order follows registration order.
                    del self._bindings[binding.key]
                    replaced += 1
                self._bindings[binding.key] = binding
                registered.append(binding)
            if replaced:
                handle.add_metadata("replaced", replaced)
            self._touch()
            return registered

    def delete(
        self,
        modes: str | Iterable[str],
        lhs: str,
        *,
        buffer: int | None = None,
    ) -> list[Binding]:
        signature = parse_keys(lhs, leader=self._leader()).signature
        removed: list[Binding] = []
        with span(
            "keymaps::delete",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"lhs": lhs, "buffer": buffer},
        ):
            for mode in expand_modes(modes):
                binding = self._bindings.pop((mode, signature, buffer), None)
                if binding is not None:
                    removed.append(binding)
            if removed:
                self._touch()
        return removed

    def clear_buffer(self, buffer: int) -> int:
        """Drop every mapping local to ``buffer``; returns how many went."""

        keys = [key for key in self._bindings if key[2] == buffer]
        for key in keys:
            del self._bindings[key]
        if keys:
            self._touch()
        return len(keys)

    def get(
        self, mode: str, lhs: str, *, buffer: int | None = None
    ) -> Optional[Binding]:
        signature = parse_keys(lhs, leader=self._leader()).signature
        return self._bindings.get((mode, signature, buffer))

    def iter_bindings(
        self, mode: Optional[str] = None, *, buffer: int | None = None
    ) -> Iterator[Binding]:
        """Yield global bindings, plus those local to ``buffer`` if given."""

        for binding in self._bindings.values():
            if mode is not None and binding.mode != mode:
                continue
            if binding.buffer is not None and binding.buffer != buffer:
                continue
            yield binding

    def all_bindings(self) -> tuple[Binding, ...]:
        return tuple(self._bindings.values())

    def stats(self) -> RegistryStats:
        modes = sorted({binding.mode for binding in self._bindings.values()})
        local = sum(1 for b in self._bindings.values() if b.buffer is not None)
        return RegistryStats(
            binding_count=len(self._bindings),
            buffer_local_count=local,
            modes=tuple(modes),
        )

    def _touch(self) -> None:
        self._revision += 1


__all__ = ["KeymapRegistry", "RegistryStats"]

"""Trie-based keymap resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from vim_init.runtime.telemetry import span

from .models import Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    """Single trie node holding at most one global and one local binding."""

    global_binding: Optional[Binding] = None
    local_binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))

    @property
    def binding(self) -> Optional[Binding]:
        return self.local_binding or self.global_binding


@dataclass(slots=True)
class KeymapTrie:
    """Trie built for one (mode, buffer) view of the registry."""

    mode: str
    buffer: Optional[int]
    root: TrieNode = field(default_factory=TrieNode)

    def add_binding(self, binding: Binding) -> None:
        node = self.root
        for token in binding.sequence.tokens:
            node = node.child(token)
        if binding.buffer is None:
            node.global_binding = binding
        else:
            node.local_binding = binding


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "pending", "miss"]
    binding: Optional[Binding] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Resolves token sequences against the registry, caching one trie per view."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[tuple[str, Optional[int]], tuple[int, KeymapTrie]] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        buffer: Optional[int] = None,
    ) -> ResolutionResult:
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(normalized), "buffer": buffer},
        ) as handle:
            node = self._ensure_trie(mode, buffer).root
            consumed = 0
            for token in normalized:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            if consumed and node.binding is not None:
                handle.add_metadata("status", "match")
                return ResolutionResult(
                    status="match", binding=node.binding, consumed=consumed
                )

            next_expected = node.next_tokens()
            if next_expected:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=consumed,
                    next_expected=next_expected,
                    timeout_ms=self._pending_timeout(node),
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def reset(self) -> None:
        self._cache.clear()

    def _ensure_trie(self, mode: str, buffer: Optional[int]) -> KeymapTrie:
        revision = self._registry.revision()
        cached = self._cache.get((mode, buffer))
        if cached and cached[0] == revision:
            return cached[1]

        trie = KeymapTrie(mode=mode, buffer=buffer)
        for binding in self._registry.iter_bindings(mode, buffer=buffer):
            trie.add_binding(binding)
        self._cache[(mode, buffer)] = (revision, trie)
        return trie

    def _pending_timeout(self, node: TrieNode) -> Optional[int]:
        timeouts: list[int] = []
        stack = list(node.children.values())
        while stack:
            current = stack.pop()
            if current.binding is not None:
                timeouts.append(current.binding.sequence.timeout_ms)
            stack.extend(current.children.values())
        return min(timeouts) if timeouts else None


__all__ = ["KeymapResolver", "KeymapTrie", "ResolutionResult"]

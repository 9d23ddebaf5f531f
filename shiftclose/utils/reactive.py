"""Mini README: Dependency-tracked values used by the closing form.

Structure:
    * Signal - writable value that notifies dependents when it changes.
    * Computed - memoised derivation that records what it reads.

A ``Computed`` evaluates lazily. While its function runs, every ``Signal`` or
``Computed`` it reads is recorded as a dependency. Writing a signal marks its
transitive dependents stale; the next read recomputes them. Nothing is
recomputed on write, and a write of an equal value invalidates nothing.
"""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, Set, TypeVar

T = TypeVar("T")

_EVALUATION_STACK: List["Computed"] = []


class _Node:
    """Shared bookkeeping for anything a computed value can depend on."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._dependents: Set["Computed"] = set()

    def _track(self) -> None:
        if _EVALUATION_STACK:
            reader = _EVALUATION_STACK[-1]
            self._dependents.add(reader)
            reader._sources.add(self)

    def _invalidate_dependents(self) -> None:
        for dependent in list(self._dependents):
            dependent._mark_stale()


class Signal(_Node, Generic[T]):
    """Writable value at the root of the dependency graph."""

    def __init__(self, value: T, *, name: str = "signal") -> None:
        super().__init__(name)
        self._value = value

    def get(self) -> T:
        self._track()
        return self._value

    def set(self, value: T) -> None:
        if value == self._value and type(value) is type(self._value):
            return
        self._value = value
        self._invalidate_dependents()

    def update(self, func: Callable[[T], T]) -> None:
        """Replace the value with ``func(current)``; reads are not tracked."""

        self.set(func(self._value))

    def __repr__(self) -> str:
        return f"Signal({self.name}={self._value!r})"


class Computed(_Node, Generic[T]):
    """Lazily evaluated value memoised until one of its sources changes."""

    def __init__(self, func: Callable[[], T], *, name: str = "computed") -> None:
        super().__init__(name)
        self._func = func
        self._sources: Set[_Node] = set()
        self._value: Optional[T] = None
        self._stale = True
        self._evaluating = False
        self.evaluations = 0

    @property
    def stale(self) -> bool:
        return self._stale

    def get(self) -> T:
        self._track()
        if self._stale:
            self._recompute()
        return self._value  # type: ignore[return-value]

    def _recompute(self) -> None:
        if self._evaluating:
            raise RuntimeError(f"Computed value '{self.name}' depends on itself")
        for source in self._sources:
            source._dependents.discard(self)
        self._sources = set()
        self._evaluating = True
        _EVALUATION_STACK.append(self)
        try:
            self._value = self._func()
        finally:
            _EVALUATION_STACK.pop()
            self._evaluating = False
        self._stale = False
        self.evaluations += 1

    def _mark_stale(self) -> None:
        if self._stale:
            return
        self._stale = True
        self._invalidate_dependents()

    def __repr__(self) -> str:
        state = "stale" if self._stale else repr(self._value)
        return f"Computed({self.name}={state})"

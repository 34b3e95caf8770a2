"""Memoizing suspensions, the substrate of every amortized bound in sloth.

A `Lazy` holds either an unevaluated computation or its cached result. The
computation runs at most once no matter how many structures share the
suspension, which is what keeps already-paid-for work from being redone
when old versions of a persistent structure are reused.

Suspensions built with `map` form chains (each link depends on the one
before it). Forcing walks such a chain iteratively, so structures that
pile up thousands of pending links do not hit the interpreter's
recursion limit.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, Optional

from sloth.common import Impossible

__all__ = ["Lazy"]


class _State(Enum):
    Pending = 0
    Forcing = 1
    Done = 2


class Lazy[T]:
    """A suspended computation evaluated at most once."""

    __slots__ = ("_state", "_value", "_thunk", "_source", "_fn")

    def __init__(
        self,
        state: _State,
        value: Any = None,
        thunk: Optional[Callable[[], T]] = None,
        source: Optional[Lazy[Any]] = None,
        fn: Optional[Callable[[Any], T]] = None,
    ):
        self._state = state
        self._value = value
        self._thunk = thunk
        self._source = source
        self._fn = fn

    @staticmethod
    def delay(thunk: Callable[[], T]) -> Lazy[T]:
        """Suspend a computation.

        Args:
            thunk: Zero-argument function producing the value.

        Returns:
            An unevaluated suspension.
        """
        return Lazy(_State.Pending, thunk=thunk)

    @staticmethod
    def now(value: T) -> Lazy[T]:
        """Wrap an already-known value as an evaluated suspension."""
        return Lazy(_State.Done, value=value)

    @property
    def forced(self) -> bool:
        """True once the value has been computed and cached."""
        return self._state is _State.Done

    def map[U](self, fn: Callable[[T], U]) -> Lazy[U]:
        """Suspend `fn` applied to the value of this suspension.

        Neither this suspension nor `fn` is evaluated until the result is forced.
        """
        return Lazy(_State.Pending, source=self, fn=fn)

    def force(self) -> T:
        """Evaluate the suspension if necessary and return its value.

        Raises:
            Impossible: If the suspension is forced again while its own
                computation is still running.
        """
        if self._state is _State.Done:
            return self._value
        chain: List[Lazy[Any]] = []
        root: Lazy[Any] = self
        while root._state is _State.Pending and root._source is not None:
            chain.append(root)
            root = root._source
        chain.reverse()
        for link in chain:
            link._state = _State.Forcing
        try:
            value = root._evaluate()
            for link in chain:
                if link._fn is None:
                    raise Impossible("mapped suspension lost its function")
                value = link._fn(value)
                link._resolve(value)
        except Exception:
            for link in chain:
                if link._state is _State.Forcing:
                    link._state = _State.Pending
            raise
        return value

    def _evaluate(self) -> Any:
        match self._state:
            case _State.Done:
                return self._value
            case _State.Forcing:
                raise Impossible("suspension forced while being evaluated")
            case _State.Pending if self._thunk is not None:
                self._state = _State.Forcing
                try:
                    value = self._thunk()
                except Exception:
                    self._state = _State.Pending
                    raise
                self._resolve(value)
                return value
            case _:
                raise Impossible

    def _resolve(self, value: Any) -> None:
        self._value = value
        self._state = _State.Done
        # Drop captured closures so shared prefixes can be collected
        self._thunk = None
        self._source = None
        self._fn = None

    def __repr__(self) -> str:
        if self._state is _State.Done:
            return f"Lazy.now({self._value!r})"
        else:
            return "Lazy(<pending>)"

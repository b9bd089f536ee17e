from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator, Sequence, TypeAlias, TypeVar

T = TypeVar("T")

SetState: TypeAlias = Callable[[Any], None]
Rerender: TypeAlias = Callable[[], None]

_EMPTY = object()


def _deps_changed(prev: Sequence[Any], deps: Sequence[Any]) -> bool:
    if len(prev) != len(deps):
        return True
    return any(d != p for d, p in zip(deps, prev))


class HookContext:
    """Ordered hook slots for one render root.

    Slot ``i`` belongs to the ``i``-th hook call since the last ``reset()``.
    Components must call hooks in the same order on every pass; nothing
    checks this, and a reordered call silently reads another hook's slot.
    """

    slots: list[Any]
    index: int
    _rerender: Rerender | None

    def __init__(self) -> None:
        self.slots = []
        self.index = 0
        self._rerender = None

    def reset(self) -> None:
        self.index = 0

    def set_rerender(self, fn: Rerender | None) -> None:
        self._rerender = fn

    def rerender(self) -> None:
        if self._rerender is not None:
            self._rerender()

    @contextmanager
    def active(self) -> Iterator["HookContext"]:
        token = _current.set(self)
        try:
            yield self
        finally:
            _current.reset(token)

    def _claim(self) -> int:
        i = self.index
        if i == len(self.slots):
            self.slots.append(_EMPTY)
        self.index += 1
        return i

    def use_state(self, initial: T) -> tuple[T, SetState]:
        i = self._claim()
        if self.slots[i] is _EMPTY:
            self.slots[i] = initial

        def set_state(value: Any) -> None:
            self.slots[i] = value(self.slots[i]) if callable(value) else value
            self.rerender()

        return (self.slots[i], set_state)

    def use_effect(
        self, fn: Callable[[], Any], deps: Sequence[Any] | None = None
    ) -> None:
        i = self._claim()
        prev = self.slots[i]
        if (
            prev is _EMPTY
            or prev is None
            or deps is None
            or _deps_changed(prev, deps)
        ):
            fn()
        self.slots[i] = None if deps is None else tuple(deps)


_default = HookContext()
_current: ContextVar[HookContext | None] = ContextVar("nemp_hooks", default=None)


def current() -> HookContext:
    """The context of the render pass in progress, or the process-wide one."""
    ctx = _current.get()
    return ctx if ctx is not None else _default


def reset_hooks() -> None:
    current().reset()


def set_rerender(fn: Rerender | None) -> None:
    current().set_rerender(fn)


def rerender() -> None:
    current().rerender()


def use_state(initial: T) -> tuple[T, SetState]:
    return current().use_state(initial)


def use_effect(fn: Callable[[], Any], deps: Sequence[Any] | None = None) -> None:
    current().use_effect(fn, deps)

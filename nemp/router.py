import logging
import re
from typing import Any, Callable, Protocol, TypeAlias

from nemp import hooks
from nemp.errors import NempError
from nemp.hooks import HookContext
from nemp.vdom import CHILDREN, Component, Props, VNode, h

logger = logging.getLogger(__name__)

CATCH_ALL = "*"

_PARAM = re.compile(r"/:([^/]+)")

ComponentFn: TypeAlias = Callable[[Props], VNode]
PopListener: TypeAlias = Callable[[], None]


class History(Protocol):
    @property
    def path(self) -> str:
        ...

    def push(self, path: str) -> None:
        ...

    def on_pop(self, listener: PopListener) -> None:
        ...


class MemoryHistory(History):
    _entries: list[str]
    _position: int
    _listeners: list[PopListener]

    def __init__(self, path: str = "/") -> None:
        self._entries = [path]
        self._position = 0
        self._listeners = []

    @property
    def path(self) -> str:
        return self._entries[self._position] or "/"

    def push(self, path: str) -> None:
        del self._entries[self._position + 1 :]
        self._entries.append(path)
        self._position += 1

    def on_pop(self, listener: PopListener) -> None:
        self._listeners.append(listener)

    def back(self) -> None:
        self._go(-1)

    def forward(self) -> None:
        self._go(1)

    def _go(self, delta: int) -> None:
        position = self._position + delta
        if not 0 <= position < len(self._entries):
            return
        self._position = position
        for listener in self._listeners:
            listener()


class Route:
    """A path pattern bound to a component.

    ``/:name`` segments capture one path segment into ``params["name"]``;
    the pattern ``"*"`` matches anything and serves as the not-found page.
    """

    path: str
    component: ComponentFn
    keys: list[str]
    regex: re.Pattern[str] | None

    def __init__(self, path: str, component: ComponentFn) -> None:
        self.path = path
        self.component = component
        self.keys = []
        self.regex = None
        if path != CATCH_ALL:
            self.regex = re.compile(self._compile(path))

    def _compile(self, path: str) -> str:
        parts = _PARAM.split(path)
        pattern = re.escape(parts[0])
        for key, literal in zip(parts[1::2], parts[2::2]):
            self.keys.append(key)
            pattern += "/([^/]+)" + re.escape(literal)
        return "^" + pattern + "$"

    @property
    def is_catch_all(self) -> bool:
        return self.regex is None

    def match(self, path: str) -> dict[str, str] | None:
        if self.regex is None:
            return {}
        m = self.regex.match(path)
        if m is None:
            return None
        return dict(zip(self.keys, m.groups()))

    def __repr__(self) -> str:
        return f"Route({self.path!r}, {self.component!r})"


def default_not_found(props: Props) -> VNode:
    return h("div", {"class": "not-found"}, "404 Not Found")


class Router:
    """Resolves the current location to a component invocation.

    Used as a component tag, it reads its ``Route`` children on every
    render, like::

        h(router, {}, h(Route, {"path": "/users/:id", "component": User}))
    """

    _history: History
    _routes: list[Route]
    _catch_all: Route | None
    _not_found: ComponentFn
    _hooks: HookContext | None

    def __init__(
        self,
        history: History | None = None,
        not_found: ComponentFn = default_not_found,
    ) -> None:
        self._history = history if history is not None else MemoryHistory()
        self._routes = []
        self._catch_all = None
        self._not_found = not_found
        self._hooks = None
        self._history.on_pop(self._refresh)

    @property
    def history(self) -> History:
        return self._history

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    def add(self, path: str, component: ComponentFn) -> Route:
        route = Route(path, component)
        if route.is_catch_all:
            self._catch_all = route
        else:
            self._routes.append(route)
        return route

    def route(self, path: str) -> Callable[[ComponentFn], ComponentFn]:
        def _register(component: ComponentFn) -> ComponentFn:
            self.add(path, component)
            return component

        return _register

    def clear(self) -> None:
        self._routes = []
        self._catch_all = None

    def resolve(self, path: str | None = None) -> VNode:
        current = path if path is not None else self._history.path
        for route in self._routes:
            params = route.match(current)
            if params is not None:
                return h(route.component, {"params": params})
        logger.info("no route matches %r", current)
        if self._catch_all is not None:
            return h(self._catch_all.component, {"params": {}})
        return h(self._not_found, {"params": {}})

    def navigate(self, path: str) -> None:
        logger.debug("navigate to %r", path)
        self._history.push(path)
        self._refresh()

    def _refresh(self) -> None:
        ctx = self._hooks if self._hooks is not None else hooks.current()
        ctx.reset()
        ctx.rerender()

    def __call__(self, props: Props) -> VNode:
        global _active
        _active = self
        self._hooks = hooks.current()
        children = props.get(CHILDREN, ())
        if any(_is_route(c) for c in children):
            self.clear()
            for child in children:
                if _is_route(child):
                    self.add(child.props["path"], child.props["component"])
        return self.resolve()


def _is_route(node: Any) -> bool:
    return isinstance(node, Component) and node.fn is Route


_active: Router | None = None


def navigate(path: str) -> None:
    """Navigate the most recently rendered router."""
    if _active is None:
        raise NempError("no router has been rendered yet")
    _active.navigate(path)


def Link(props: Props) -> VNode:
    to = props["to"]
    router: Router | None = props.get("router")

    def onclick(event: Any) -> None:
        if event is not None:
            event.preventDefault()
        if router is not None:
            router.navigate(to)
        else:
            navigate(to)

    attrs = {"href": to, "onclick": onclick}
    if (cls := props.get("class")) is not None:
        attrs["class"] = cls
    return h("a", attrs, *props.get(CHILDREN, ()))

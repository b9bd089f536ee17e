from typing import Any

import pytest

from nemp import App, MemoryHost, h, use_state
from nemp import router as router_module
from nemp.errors import NempError
from nemp.host import MemoryNode
from nemp.materialize import materialize
from nemp.router import Link, MemoryHistory, Route, Router, default_not_found
from nemp.vdom import Component


def Home(props):
    return h("h1", {}, "home")


def User(props):
    return h("h1", {}, f"user {props['params']['id']}")


def Missing(props):
    return h("h1", {}, "missing")


@pytest.mark.parametrize(
    "path, url, expected",
    [
        ("/", "/", {}),
        ("/", "/x", None),
        ("/users/:id", "/users/42", {"id": "42"}),
        ("/users/:id", "/users", None),
        ("/users/:id", "/users/42/posts", None),
        ("/users/:id/posts/:post", "/users/1/posts/9", {"id": "1", "post": "9"}),
        ("/files/a.txt", "/files/a.txt", {}),
        ("/files/a.txt", "/files/aXtxt", None),
        ("*", "/anything/at/all", {}),
    ],
)
def test_route_match(path: str, url: str, expected: dict[str, str] | None) -> None:
    assert Route(path, Home).match(url) == expected


def test_resolve_first_match_wins() -> None:
    router = Router(MemoryHistory("/users/new"))
    router.add("/users/new", Home)
    router.add("/users/:id", User)

    vnode = router.resolve()

    assert isinstance(vnode, Component)
    assert vnode.fn is Home
    assert vnode.props["params"] == {}


def test_resolve_falls_back_to_catch_all_then_default() -> None:
    router = Router(MemoryHistory("/nowhere"))
    router.add("/", Home)

    fallback = router.resolve()
    assert isinstance(fallback, Component)
    assert fallback.fn is default_not_found

    host = MemoryHost()
    assert materialize(host, fallback).to_html() == (
        '<div class="not-found">404 Not Found</div>'
    )

    router.add("*", Missing)
    catch_all = router.resolve()
    assert isinstance(catch_all, Component)
    assert catch_all.fn is Missing


def test_route_decorator() -> None:
    router = Router(MemoryHistory("/users/5"))

    @router.route("/users/:id")
    def Profile(props):
        return h("p", {}, props["params"]["id"])

    vnode = router.resolve()
    assert isinstance(vnode, Component)
    assert vnode.fn is Profile
    assert [r.path for r in router.routes] == ["/users/:id"]


def mount_routed(router: Router, *extra: Any) -> tuple[App[MemoryNode], MemoryNode]:
    host = MemoryHost()
    container = host.create_node("main")
    app = App(container, host)
    app.mount(
        lambda: h(
            "div",
            {},
            *extra,
            h(
                router,
                {},
                h(Route, {"path": "/", "component": Home}),
                h(Route, {"path": "/users/:id", "component": User}),
                h(Route, {"path": "*", "component": Missing}),
            ),
        )
    )
    return (app, container)


def test_navigation_rerenders() -> None:
    history = MemoryHistory("/")
    router = Router(history)
    (_, container) = mount_routed(router)
    assert container.to_html() == "<main><div><h1>home</h1></div></main>"

    router.navigate("/users/7")
    assert container.to_html() == "<main><div><h1>user 7</h1></div></main>"

    router.navigate("/nope")
    assert container.to_html() == "<main><div><h1>missing</h1></div></main>"

    history.back()
    assert history.path == "/users/7"
    assert container.to_html() == "<main><div><h1>user 7</h1></div></main>"

    history.forward()
    assert container.to_html() == "<main><div><h1>missing</h1></div></main>"


def test_navigation_resets_hook_cursor() -> None:
    history = MemoryHistory("/")
    router = Router(history)
    (app, _) = mount_routed(router)

    router.navigate("/users/1")

    assert app.hooks.index == 0


def test_link_navigates() -> None:
    history = MemoryHistory("/")
    router = Router(history)
    (_, container) = mount_routed(
        router, h(Link, {"to": "/users/3", "router": router, "class": "nav"}, "go")
    )
    link = container.children[0].children[0]
    assert link.to_html() == '<a href="/users/3" class="nav">go</a>'

    event = link.dispatch("click")

    assert event is not None
    assert event.default_prevented
    assert history.path == "/users/3"
    assert container.children[0].children[1].to_html() == "<h1>user 3</h1>"


def test_link_uses_last_rendered_router() -> None:
    history = MemoryHistory("/")
    router = Router(history)
    (_, container) = mount_routed(router, h(Link, {"to": "/users/8"}, "go"))

    container.children[0].children[0].dispatch("click")

    assert history.path == "/users/8"


def test_navigate_without_router(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(router_module, "_active", None)
    with pytest.raises(NempError):
        router_module.navigate("/")


def test_navigation_keeps_slot_values() -> None:
    history = MemoryHistory("/a")
    router = Router(history)

    def Page(props):
        (value, _) = use_state(props["params"].get("name", "none"))
        return h("p", {}, value)

    router.add("/a", Page)
    router.add("/:name", Page)
    host = MemoryHost()
    container = host.create_node("main")
    app = App(container, host)
    app.mount(lambda: h(router, {}))
    assert container.to_html() == "<main><p>none</p></main>"

    router.navigate("/b")

    # The slot is reused positionally, so the first page's state carries over.
    assert container.to_html() == "<main><p>none</p></main>"

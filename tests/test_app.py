from typing import Any, Callable

import pytest

from nemp import App, Fragment, HookContext, MemoryHost, h, use_effect, use_state
from nemp.reconcile import resolve
from nemp.errors import RenderLoopError
from nemp.host import MemoryNode
from nemp.vdom import Element


def make_app(**kwargs: Any) -> tuple[App[MemoryNode], MemoryNode]:
    host = MemoryHost()
    container = host.create_node("main")
    return (App(container, host, **kwargs), container)


def test_resolve_expands_components_and_fragments() -> None:
    def Pair(props):
        return h(
            Fragment, {}, h("dt", {}, props["term"]), h("dd", {}, *props["children"])
        )

    tree = resolve(h("dl", {}, h(Pair, {"term": "a"}, "1"), None))

    assert tree == (
        Element(
            tag="dl",
            props={},
            children=(
                Element(tag="dt", props={}, children=("a",)),
                Element(tag="dd", props={}, children=("1",)),
                "",
            ),
        ),
    )


def test_first_render_replaces_container_contents() -> None:
    (app, container) = make_app()
    container.children.append(MemoryNode(text="stale"))

    app.render(h("div", {}, "hello"))

    assert container.to_html() == "<main><div>hello</div></main>"


def test_rerender_patches_in_place() -> None:
    (app, container) = make_app()
    app.render(h("div", {}, "hello"))
    div = container.children[0]

    app.render(h("div", {}, "world"))

    assert container.children[0] is div
    assert len(container.children) == 1
    assert div.children[0].text == "world"


def test_fragment_root() -> None:
    (app, container) = make_app()
    app.render(h(Fragment, {}, h("li", {}, "a"), h("li", {}, "b"), h("li", {}, "c")))
    first = container.children[0]

    app.render(h(Fragment, {}, h("li", {}, "a")))

    assert container.to_html() == "<main><li>a</li></main>"
    assert container.children[0] is first


def test_render_does_not_reset_hook_cursor() -> None:
    (app, _) = make_app()

    def Counter(props):
        (count, _) = use_state(0)
        return str(count)

    app.render(h(Counter, {}))
    app.render(h(Counter, {}))
    assert app.hooks.index == 2

    app.hooks.reset()
    app.render(h(Counter, {}))
    assert app.hooks.index == 1


def Counter(props):
    (count, set_count) = use_state(0)
    return h(
        "button",
        {"onclick": lambda _: set_count(lambda c: c + 1)},
        f"count: {count}",
    )


def test_state_update_rerenders() -> None:
    (app, container) = make_app()
    app.mount(lambda: h(Counter, {}))
    button = container.children[0]

    button.dispatch("click")
    button.dispatch("click")

    assert container.to_html() == "<main><button>count: 2</button></main>"
    assert container.children[0] is button


def test_apps_keep_separate_state() -> None:
    (left, left_container) = make_app()
    (right, right_container) = make_app()
    left.mount(lambda: h(Counter, {}))
    right.mount(lambda: h(Counter, {}))

    left_container.children[0].dispatch("click")

    assert left_container.to_html() == "<main><button>count: 1</button></main>"
    assert right_container.to_html() == "<main><button>count: 0</button></main>"


def test_set_state_during_render_is_trampolined() -> None:
    (app, container) = make_app()
    seen: list[int] = []
    depth = 0

    def Settle(props):
        nonlocal depth
        depth += 1
        assert depth == 1
        (count, set_count) = use_state(0)
        seen.append(count)
        if count < 3:
            set_count(count + 1)
        depth -= 1
        return h("p", {}, str(count))

    app.mount(lambda: h(Settle, {}))

    assert seen == [0, 1, 2, 3]
    assert container.to_html() == "<main><p>3</p></main>"


def test_effect_setting_state() -> None:
    (app, container) = make_app()
    loads: list[str] = []

    def Loader(props):
        (data, set_data) = use_state(None)

        def load() -> None:
            loads.append("load")
            set_data("loaded")

        use_effect(load, [])
        return h("p", {}, data or "loading")

    app.mount(lambda: h(Loader, {}))

    assert loads == ["load"]
    assert container.to_html() == "<main><p>loaded</p></main>"


def test_runaway_render_loop() -> None:
    (app, _) = make_app(max_passes=5)

    def Runaway(props):
        (n, set_n) = use_state(0)
        set_n(n + 1)
        return str(n)

    with pytest.raises(RenderLoopError) as e:
        app.mount(lambda: h(Runaway, {}))
    assert e.value.passes == 5


def test_enqueue() -> None:
    queue: list[Callable[[], None]] = []
    (app, container) = make_app(enqueue=queue.append)
    renders: list[int] = []

    def View(props):
        (count, set_count) = use_state(0)
        renders.append(count)

        def twice(_: Any) -> None:
            set_count(lambda c: c + 1)
            set_count(lambda c: c + 1)

        return h("button", {"onclick": twice}, str(count))

    app.mount(lambda: h(View, {}))
    assert container.children == []
    assert len(queue) == 1

    queue.pop()()
    assert container.to_html() == "<main><button>0</button></main>"

    container.children[0].dispatch("click")
    while queue:
        queue.pop(0)()

    assert container.to_html() == "<main><button>2</button></main>"
    assert renders == [0, 2]


def test_unmount() -> None:
    (app, container) = make_app()
    app.mount(lambda: h(Counter, {}))
    button = container.children[0]

    app.unmount()
    button.dispatch("click")

    assert container.children == []
    assert app.tree is None


def test_shared_hook_context() -> None:
    ctx = HookContext()
    (app, _) = make_app(hooks=ctx)
    app.mount(lambda: h(Counter, {}))

    assert app.hooks is ctx
    assert ctx.slots == [0]


def test_handler_cleared_after_first_click() -> None:
    (app, container) = make_app()
    calls: list[int] = []

    def Once(props):
        (clicks, set_clicks) = use_state(0)

        def click(_: Any) -> None:
            calls.append(1)
            set_clicks(clicks + 1)

        return h("button", {"onclick": click if clicks == 0 else None}, "x")

    app.mount(lambda: h(Once, {}))
    button = container.children[0]

    button.dispatch("click")
    button.dispatch("click")

    assert calls == [1]
    assert button.listeners == {}
    assert container.to_html() == "<main><button>x</button></main>"


def test_state_set_during_direct_render_is_drained() -> None:
    (app, container) = make_app()
    setters: list[Callable[[Any], None]] = []

    def Shown(props):
        (value, set_value) = use_state(0)
        setters.append(set_value)
        return h("p", {}, str(value))

    def Poke(props):
        setters[0](5)
        return h("p", {}, "poked")

    app.mount(lambda: h(Shown, {}))
    assert container.to_html() == "<main><p>0</p></main>"

    app.render(h(Poke, {}))

    assert container.to_html() == "<main><p>5</p></main>"

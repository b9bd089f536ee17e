import logging
from typing import Any

from nemp import App, MemoryHost, h, use_effect, use_state
from nemp.host import MemoryNode

history: list[int] = []


def Button(props: dict[str, Any]) -> Any:
    return h(
        "button", {"id": props["id"], "onclick": props["onclick"]}, props["label"]
    )


def Counter(props: dict[str, Any]) -> Any:
    (count, set_count) = use_state(0)
    use_effect(lambda: history.append(count), [count])

    def inc(c: int) -> int:
        return c + 1

    def dec(c: int) -> int:
        return c - 1

    return h(
        "div",
        {"class": "counter"},
        h(Button, {"id": "down", "label": "-", "onclick": lambda _: set_count(dec)}),
        h("span", {}, f"Count: {count}"),
        h(Button, {"id": "up", "label": "+", "onclick": lambda _: set_count(inc)}),
        h("p", {}, "negative!") if count < 0 else None,
    )


def find(node: MemoryNode, node_id: str) -> MemoryNode | None:
    if node.attributes.get("id") == node_id:
        return node
    for child in node.children:
        if (found := find(child, node_id)) is not None:
            return found
    return None


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    host = MemoryHost()
    root = host.create_node("body")
    app = App(root, host)
    app.mount(lambda: h(Counter, {}))

    keys = {"u": "up", "d": "down"}
    while True:
        print(root.to_html())
        c = input("'u' - up, 'd' - down, 'q' - quit: ").strip()
        if c == "q":
            break
        if (target := keys.get(c)) and (button := find(root, target)):
            button.dispatch("click")
    print(f"counts seen: {history}")


if __name__ == "__main__":
    main()

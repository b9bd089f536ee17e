from typing import Any

from browser import DOMNode, document, window  # type: ignore

from nemp.app import App, View
from nemp.host import Handler, HostAdapter, event_name
from nemp.router import PopListener


class DomHost(HostAdapter):
    def create_node(self, tag: str) -> "DOMNode":
        return document.createElement(tag)

    def create_text_node(self, value: str) -> "DOMNode":
        return document.createTextNode(str(value))

    def create_fragment_container(self) -> "DOMNode":
        return document.createDocumentFragment()

    def set_attribute(self, node: "DOMNode", key: str, value: Any) -> None:
        node.setAttribute(key, value)

    def remove_attribute(self, node: "DOMNode", key: str) -> None:
        node.removeAttribute(key)
        if (event := event_name(key)) is not None and node.events(event):
            node.unbind(event)

    def add_event_subscription(
        self, node: "DOMNode", event: str, handler: Handler
    ) -> None:
        if node.events(event):
            node.unbind(event)
        node.bind(event, handler)

    def append_child(self, parent: "DOMNode", child: "DOMNode") -> None:
        parent.appendChild(child)

    def remove_child(self, parent: "DOMNode", child: "DOMNode") -> None:
        parent.removeChild(child)

    def replace_child(
        self, parent: "DOMNode", old_child: "DOMNode", new_child: "DOMNode"
    ) -> None:
        parent.replaceChild(new_child, old_child)

    def clear_contents(self, container: "DOMNode") -> None:
        container.innerHTML = ""

    def child_at(self, parent: "DOMNode", index: int) -> "DOMNode | None":
        nodes = parent.childNodes
        if 0 <= index < len(nodes):
            return nodes[index]
        return None


class BrowserHistory:
    @property
    def path(self) -> str:
        return window.location.pathname or "/"

    def push(self, path: str) -> None:
        window.history.pushState({}, "", path)

    def on_pop(self, listener: PopListener) -> None:
        window.bind("popstate", lambda _: listener())


def mount(view: View, root: str) -> App["DOMNode"]:
    app = App(document[root], DomHost())
    app.mount(view)
    return app

from html import escape
from typing import Any, Callable, Protocol, TypeAlias

HostNode: TypeAlias = Any
Handler: TypeAlias = Callable[[Any], Any]

EVENT_PREFIX = "on"
FRAGMENT_TAG = "#fragment"


def event_name(key: str) -> str | None:
    """Event name for an ``on<event>`` prop key, ``None`` for plain attributes."""
    if key.startswith(EVENT_PREFIX) and len(key) > len(EVENT_PREFIX):
        return key[len(EVENT_PREFIX) :].lower()
    return None


class HostAdapter(Protocol):
    def create_node(self, tag: str) -> HostNode:
        ...

    def create_text_node(self, value: str) -> HostNode:
        ...

    def create_fragment_container(self) -> HostNode:
        ...

    def set_attribute(self, node: HostNode, key: str, value: Any) -> None:
        ...

    def remove_attribute(self, node: HostNode, key: str) -> None:
        ...

    def add_event_subscription(
        self, node: HostNode, event: str, handler: Handler
    ) -> None:
        ...

    def append_child(self, parent: HostNode, child: HostNode) -> None:
        ...

    def remove_child(self, parent: HostNode, child: HostNode) -> None:
        ...

    def replace_child(
        self, parent: HostNode, old_child: HostNode, new_child: HostNode
    ) -> None:
        ...

    def clear_contents(self, container: HostNode) -> None:
        ...

    def child_at(self, parent: HostNode, index: int) -> HostNode | None:
        ...


class MemoryEvent:
    type: str
    target: "MemoryNode"
    detail: Any
    default_prevented: bool

    def __init__(self, type: str, target: "MemoryNode", detail: Any = None) -> None:
        self.type = type
        self.target = target
        self.detail = detail
        self.default_prevented = False

    # DOM spelling, so handlers written for the browser run unchanged.
    def preventDefault(self) -> None:
        self.default_prevented = True


class MemoryNode:
    tag: str | None
    text: str | None
    attributes: dict[str, Any]
    listeners: dict[str, Handler]
    children: list["MemoryNode"]
    parent: "MemoryNode | None"

    def __init__(self, tag: str | None = None, text: str | None = None) -> None:
        self.tag = tag
        self.text = text
        self.attributes = {}
        self.listeners = {}
        self.children = []
        self.parent = None

    @property
    def is_text(self) -> bool:
        return self.tag is None

    @property
    def is_fragment(self) -> bool:
        return self.tag == FRAGMENT_TAG

    def dispatch(self, event: str, detail: Any = None) -> MemoryEvent | None:
        handler = self.listeners.get(event)
        if handler is None:
            return None
        ev = MemoryEvent(event, self, detail)
        handler(ev)
        return ev

    def to_html(self) -> str:
        if self.is_text:
            return escape(self.text or "")
        inner = "".join(c.to_html() for c in self.children)
        if self.is_fragment:
            return inner
        attrs = "".join(
            f' {k}="{escape(str(v))}"' for k, v in self.attributes.items()
        )
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"

    def __repr__(self) -> str:
        if self.is_text:
            return f"MemoryNode(text={self.text!r})"
        return f"MemoryNode(tag={self.tag!r}, children={len(self.children)})"


class MemoryHost(HostAdapter):
    """Host tree kept in plain Python objects, for tests and headless rendering."""

    def create_node(self, tag: str) -> MemoryNode:
        return MemoryNode(tag=tag)

    def create_text_node(self, value: str) -> MemoryNode:
        return MemoryNode(text=str(value))

    def create_fragment_container(self) -> MemoryNode:
        return MemoryNode(tag=FRAGMENT_TAG)

    def set_attribute(self, node: MemoryNode, key: str, value: Any) -> None:
        node.attributes[key] = value

    def remove_attribute(self, node: MemoryNode, key: str) -> None:
        node.attributes.pop(key, None)
        if (event := event_name(key)) is not None:
            node.listeners.pop(event, None)

    def add_event_subscription(
        self, node: MemoryNode, event: str, handler: Handler
    ) -> None:
        node.listeners[event] = handler

    def append_child(self, parent: MemoryNode, child: MemoryNode) -> None:
        for c in self._take(child):
            c.parent = parent
            parent.children.append(c)

    def remove_child(self, parent: MemoryNode, child: MemoryNode) -> None:
        parent.children.remove(child)
        child.parent = None

    def replace_child(
        self, parent: MemoryNode, old_child: MemoryNode, new_child: MemoryNode
    ) -> None:
        index = parent.children.index(old_child)
        incoming = self._take(new_child)
        for c in incoming:
            c.parent = parent
        parent.children[index : index + 1] = incoming
        old_child.parent = None

    def clear_contents(self, container: MemoryNode) -> None:
        for c in container.children:
            c.parent = None
        container.children.clear()

    def child_at(self, parent: MemoryNode, index: int) -> MemoryNode | None:
        if 0 <= index < len(parent.children):
            return parent.children[index]
        return None

    @classmethod
    def _take(cls, node: MemoryNode) -> list[MemoryNode]:
        # Fragment containers hand their children over and stay empty.
        if node.is_fragment:
            taken = list(node.children)
            node.children.clear()
            return taken
        if node.parent is not None:
            node.parent.children.remove(node)
        return [node]

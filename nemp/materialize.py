from typing import Any

from nemp.host import HostAdapter, HostNode, event_name
from nemp.vdom import CHILDREN, Component, Element, Fragment, VNode, is_hole, is_text


def set_prop(adapter: HostAdapter, node: HostNode, key: str, value: Any) -> None:
    event = event_name(key)
    if event is not None and callable(value):
        adapter.add_event_subscription(node, event, value)
    elif event is not None or value is None:
        # A non-callable handler or a None value clears the prop entirely.
        adapter.remove_attribute(node, key)
    else:
        adapter.set_attribute(node, key, value)


def remove_prop(adapter: HostAdapter, node: HostNode, key: str) -> None:
    adapter.remove_attribute(node, key)


def materialize(adapter: HostAdapter, vnode: VNode) -> HostNode:
    """Build a fresh host subtree for ``vnode``.

    Holes (``None``/``False``/``True``) become empty text nodes so that they
    keep their position among siblings. Components are expanded in place and
    contribute no host node of their own.
    """
    match vnode:
        case _ if is_hole(vnode):
            return adapter.create_text_node("")
        case _ if is_text(vnode):
            return adapter.create_text_node(str(vnode))
        case Component(fn, props):
            return materialize(adapter, fn(dict(props)))
        case Fragment(children):
            container = adapter.create_fragment_container()
            for child in children:
                adapter.append_child(container, materialize(adapter, child))
            return container
        case Element(tag, props, children):
            node = adapter.create_node(tag)
            for k, v in props.items():
                if k == CHILDREN:
                    continue
                set_prop(adapter, node, k, v)
            for child in children:
                adapter.append_child(node, materialize(adapter, child))
            return node
        case _:
            raise ValueError(f"Unknown virtual node: {vnode!r}")

from typing import Sequence

from nemp.host import HostAdapter, HostNode
from nemp.materialize import materialize, remove_prop, set_prop
from nemp.vdom import (
    CHILDREN,
    Component,
    Create,
    Element,
    Fragment,
    Patch,
    PropPatch,
    Props,
    Remove,
    RemoveProp,
    Replace,
    SetProp,
    Update,
    VNode,
    is_hole,
    is_text,
)


def _placeholder(node: VNode) -> VNode:
    # Booleans render like None inside a child list: an empty text node.
    return "" if isinstance(node, bool) else node


def _props(node: VNode) -> Props:
    match node:
        case Element(_, props, _) | Component(_, props):
            return props
        case _:
            return {}


def _changed(old: VNode, new: VNode) -> bool:
    if type(old) is not type(new):
        return True
    match (old, new):
        case (Element() as a, Element() as b):
            return a.tag != b.tag
        case (Component() as a, Component() as b):
            return a.fn is not b.fn
        case (Fragment(), Fragment()):
            return False
        case _:
            return old != new


def diff_props(old_props: Props, new_props: Props) -> tuple[PropPatch, ...]:
    sets: list[PropPatch] = [
        SetProp(key=k, value=v)
        for k, v in new_props.items()
        if k != CHILDREN and (k not in old_props or old_props[k] != v)
    ]
    removes: list[PropPatch] = [
        RemoveProp(key=k)
        for k in old_props
        if k != CHILDREN and k not in new_props
    ]
    return tuple(sets + removes)


def diff_children(
    old_children: Sequence[VNode], new_children: Sequence[VNode]
) -> tuple[Patch | None, ...]:
    """Index-aligned diff of two child lists.

    A position past the end of a list is absent; a hole inside a list is the
    empty placeholder text. Nothing is matched out of position, so an insert
    in the middle turns into replacements of every later sibling.
    """

    def at(children: Sequence[VNode], i: int) -> VNode:
        if i >= len(children):
            return None
        child = children[i]
        return "" if is_hole(child) else child

    return tuple(
        diff(at(old_children, i), at(new_children, i))
        for i in range(max(len(old_children), len(new_children)))
    )


def diff(old: VNode, new: VNode) -> Patch | None:
    old = _placeholder(old)
    new = _placeholder(new)

    if old is None:
        return None if new is None else Create(node=new)
    if new is None:
        return Remove()
    if _changed(old, new):
        return Replace(node=new)

    match new:
        case Element() | Fragment() | Component():
            return Update(
                props=diff_props(_props(old), _props(new)),
                children=diff_children(old.children, new.children),  # type: ignore
            )
        case _:
            return None


def apply_children(
    adapter: HostAdapter, parent: HostNode, patches: Sequence[Patch | None]
) -> None:
    # Removals run last-to-first; trailing positions would shift otherwise.
    for i, p in enumerate(patches):
        if not isinstance(p, Remove):
            apply_patch(adapter, parent, p, i)
    for i in reversed(range(len(patches))):
        if isinstance(patches[i], Remove):
            apply_patch(adapter, parent, patches[i], i)


def _target(
    adapter: HostAdapter, parent: HostNode, patch: Patch, index: int
) -> HostNode:
    target = adapter.child_at(parent, index)
    if target is None:
        raise ValueError(f"No host node at index {index} for {patch}")
    return target


def apply_patch(
    adapter: HostAdapter, parent: HostNode, patch: Patch | None, index: int = 0
) -> None:
    match patch:
        case None:
            return
        case Create(node):
            adapter.append_child(parent, materialize(adapter, node))
        case Remove():
            child = adapter.child_at(parent, index)
            if child is not None:
                adapter.remove_child(parent, child)
        case Replace(node):
            target = _target(adapter, parent, patch, index)
            adapter.replace_child(parent, target, materialize(adapter, node))
        case Update(props, children):
            target = _target(adapter, parent, patch, index)
            for p in props:
                match p:
                    case SetProp(key, value):
                        set_prop(adapter, target, key, value)
                    case RemoveProp(key):
                        remove_prop(adapter, target, key)
            apply_children(adapter, target, children)
        case _:
            raise ValueError(f"Unknown patch: {patch}")


def resolve(vnode: VNode) -> tuple[VNode, ...]:
    """Expand components and splice fragments into their parent's children.

    The result holds only elements and text, laid out one-to-one with the
    host nodes that materializing it produces.
    """
    match vnode:
        case _ if is_hole(vnode):
            return ("",)
        case _ if is_text(vnode):
            return (vnode,)
        case Component(fn, props):
            return resolve(fn(dict(props)))
        case Fragment(children):
            return _resolve_children(children)
        case Element(tag, props, children):
            return (
                Element(tag=tag, props=props, children=_resolve_children(children)),
            )
        case _:
            raise ValueError(f"Unknown virtual node: {vnode!r}")


def _resolve_children(children: tuple[VNode, ...]) -> tuple[VNode, ...]:
    return tuple(r for c in children for r in resolve(c))


def reconcile(
    adapter: HostAdapter, parent: HostNode, old: VNode, new: VNode
) -> tuple[VNode, ...]:
    """Patch the children of ``parent``, materialized from ``old``, into ``new``.

    Both trees are resolved first, so components re-run and fragments line up
    with the host nodes they were spliced into. ``diff`` and ``apply_patch``
    on their own only handle trees of elements and text. Returns the resolved
    ``new`` tree, to be passed back as ``old`` next time.
    """
    tree = resolve(new)
    apply_children(adapter, parent, diff_children(resolve(old), tree))
    return tree

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, TypeAlias

Props: TypeAlias = Mapping[str, Any]
Text: TypeAlias = str | int | float

CHILDREN = "children"


@dataclass(slots=True, frozen=True)
class Element:
    tag: str
    props: Props
    children: tuple["VNode", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", MappingProxyType(dict(self.props)))
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(slots=True, frozen=True)
class Fragment:
    children: tuple["VNode", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(slots=True, frozen=True)
class Component:
    fn: Callable[[Props], "VNode"]
    props: Props

    def __post_init__(self) -> None:
        props = dict(self.props)
        props[CHILDREN] = tuple(props.get(CHILDREN, ()))
        object.__setattr__(self, "props", MappingProxyType(props))

    @property
    def children(self) -> tuple["VNode", ...]:
        return self.props[CHILDREN]


VNode: TypeAlias = Element | Fragment | Component | Text | bool | None
Tag: TypeAlias = str | type[Fragment] | Callable[[Props], VNode]


@dataclass(slots=True, frozen=True)
class SetProp:
    key: str
    value: Any


@dataclass(slots=True, frozen=True)
class RemoveProp:
    key: str


PropPatch = SetProp | RemoveProp


@dataclass(slots=True, frozen=True)
class Create:
    node: VNode


@dataclass(slots=True, frozen=True)
class Remove:
    ...


@dataclass(slots=True, frozen=True)
class Replace:
    node: VNode


@dataclass(slots=True, frozen=True)
class Update:
    props: tuple[PropPatch, ...]
    children: tuple["Patch | None", ...]


Patch = Create | Remove | Replace | Update


def is_hole(node: Any) -> bool:
    return node is None or isinstance(node, bool)


def is_text(node: Any) -> bool:
    return isinstance(node, (str, int, float)) and not isinstance(node, bool)


def is_noop(patch: Patch | None) -> bool:
    """True when applying ``patch`` would leave the host tree untouched."""
    match patch:
        case None:
            return True
        case Update(props, children):
            return not props and all(is_noop(c) for c in children)
        case _:
            return False


def _flatten(children: Iterable[Any]) -> Iterator[VNode]:
    for child in children:
        if isinstance(child, (list, tuple)):
            yield from _flatten(child)
        else:
            yield child


def h(tag: Tag, props: Props | None = None, *children: Any) -> VNode:
    flat = tuple(_flatten(children))
    props = {k: v for k, v in (props or {}).items() if k != CHILDREN}

    if tag is Fragment:
        return Fragment(children=flat)
    if isinstance(tag, str):
        return Element(tag=tag, props=props, children=flat)
    if callable(tag):
        props[CHILDREN] = flat
        return Component(fn=tag, props=props)
    raise TypeError(f"Invalid tag: {tag!r}")

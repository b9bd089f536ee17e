from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:
    __version__: str = "unknown"

from .app import App
from .errors import NempError, RenderLoopError
from .hooks import (
    HookContext,
    rerender,
    reset_hooks,
    set_rerender,
    use_effect,
    use_state,
)
from .host import HostAdapter, MemoryHost
from .materialize import materialize
from .reconcile import (
    apply_patch,
    diff,
    diff_children,
    diff_props,
    reconcile,
    resolve,
)
from .router import Link, MemoryHistory, Route, Router, navigate
from .vdom import Component, Element, Fragment, h

__all__ = [
    "App",
    "Component",
    "Element",
    "Fragment",
    "HookContext",
    "HostAdapter",
    "Link",
    "MemoryHistory",
    "MemoryHost",
    "NempError",
    "RenderLoopError",
    "Route",
    "Router",
    "apply_patch",
    "diff",
    "diff_children",
    "diff_props",
    "h",
    "materialize",
    "navigate",
    "reconcile",
    "rerender",
    "reset_hooks",
    "resolve",
    "set_rerender",
    "use_effect",
    "use_state",
]

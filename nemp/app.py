import logging
from typing import Callable, Generic, TypeAlias, TypeVar

from nemp.errors import RenderLoopError
from nemp.hooks import HookContext
from nemp.host import HostAdapter
from nemp.materialize import materialize
from nemp.reconcile import apply_children, diff_children, resolve
from nemp.vdom import VNode

logger = logging.getLogger(__name__)

N = TypeVar("N")

View: TypeAlias = Callable[[], VNode]
Enqueue: TypeAlias = Callable[[Callable[[], None]], None]

DEFAULT_MAX_PASSES = 100


class App(Generic[N]):
    _container: N
    _adapter: HostAdapter
    _hooks: HookContext
    _enqueue: Enqueue
    _max_passes: int
    _tree: tuple[VNode, ...] | None
    _view: View | None

    def __init__(
        self,
        container: N,
        adapter: HostAdapter,
        hooks: HookContext | None = None,
        enqueue: Enqueue = lambda render: render(),
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> None:
        self._container = container
        self._adapter = adapter
        self._hooks = hooks if hooks is not None else HookContext()
        self._enqueue = enqueue
        self._max_passes = max_passes
        self._tree = None
        self._view = None
        self._rendering = False
        self._draining = False
        self._requested = False

    @property
    def hooks(self) -> HookContext:
        return self._hooks

    @property
    def container(self) -> N:
        return self._container

    @property
    def tree(self) -> tuple[VNode, ...] | None:
        return self._tree

    def render(self, vnode: VNode) -> None:
        """Bring the container in line with ``vnode``.

        The hook cursor is left alone; call ``hooks.reset()`` first when
        starting a new pass over the same components. State set during a
        direct call on a mounted app is picked up by a follow-up drain.
        """
        self._rendering = True
        try:
            with self._hooks.active():
                tree = resolve(vnode)
            if self._tree is None:
                self._adapter.clear_contents(self._container)
                for node in tree:
                    self._adapter.append_child(
                        self._container, materialize(self._adapter, node)
                    )
            else:
                apply_children(
                    self._adapter, self._container, diff_children(self._tree, tree)
                )
            self._tree = tree
        finally:
            self._rendering = False
        # A setter fired inside a direct render call on a mounted app.
        if self._requested and self._view is not None and not self._draining:
            self._enqueue(self._drain)

    def mount(self, view: View) -> None:
        self._view = view
        self._hooks.set_rerender(self.request_render)
        self.request_render()

    def unmount(self) -> None:
        self._hooks.set_rerender(None)
        self._view = None
        self._tree = None
        self._requested = False
        self._adapter.clear_contents(self._container)

    def request_render(self) -> None:
        self._requested = True
        if self._view is None:
            logger.debug("render requested with no view mounted")
            return
        if not self._rendering and not self._draining:
            self._enqueue(self._drain)

    def _drain(self) -> None:
        if self._draining or self._view is None:
            return
        self._draining = True
        passes = 0
        try:
            while self._requested and self._view is not None:
                if passes >= self._max_passes:
                    self._requested = False
                    raise RenderLoopError(passes)
                self._requested = False
                passes += 1
                logger.debug("render pass %d", passes)
                self._hooks.reset()
                with self._hooks.active():
                    vnode = self._view()
                self.render(vnode)
        finally:
            self._draining = False

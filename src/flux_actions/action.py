from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from flux_actions.core.events import EventBus
from flux_actions.core.scheduler import Scheduler
from flux_actions.errors import ChildNameConflict
from flux_actions.hooks import Hooks
from flux_actions.publisher import Callback, Publisher, Subscription

ChildEntry = Union[str, Sequence[Any]]


class Action(Publisher):
    """
    A publisher that can be composed into a tree of named child actions.

        save_all = Action().with_children(["save", ("load", shared_load)])
        save_all.save.listen(on_save)
        save_all.as_function.save(42)   # same as save_all.save.trigger(42)
    """

    def __init__(
        self,
        hooks: Optional[Hooks] = None,
        *,
        bus: Optional[EventBus] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        super().__init__(hooks, bus=bus, scheduler=scheduler)
        self._children: Dict[str, Action] = {}

    @property
    def is_action(self) -> bool:
        return True

    @property
    def children(self) -> Mapping[str, "Action"]:
        return MappingProxyType(self._children)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; children are the fallback.
        children = self.__dict__.get("_children")
        if children is not None and name in children:
            return children[name]
        raise AttributeError("%s has no attribute or child %r" % (type(self).__name__, name))

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__.get("_children", ()):
            raise AttributeError("child action %r is read-only" % name)
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in self.__dict__.get("_children", ()):
            raise AttributeError("child action %r is read-only" % name)
        super().__delattr__(name)

    def with_children(self, entries: Iterable[ChildEntry]) -> "Action":
        """
        Add children from bare names (a new Action each) or `(name, action)` pairs
        (an existing Action, which may be shared between parents).
        Entries of any other shape are skipped.

        All names are checked before any is bound; on `ChildNameConflict` the
        children are left as they were.
        """
        batch: Dict[str, Action] = {}
        for entry in entries:
            if isinstance(entry, str):
                name, child = entry, Action(scheduler=self._scheduler)
            elif (
                isinstance(entry, (list, tuple))
                and len(entry) == 2
                and isinstance(entry[0], str)
                and isinstance(entry[1], Action)
            ):
                name, child = entry[0], entry[1]
            else:
                self._log.debug("child_skipped", child=entry)
                continue
            if name in batch or name in self._children or _is_reserved(self, name):
                raise ChildNameConflict(name)
            batch[name] = child

        self._children.update(batch)
        for name in batch:
            self._log.debug("child_added", child=name)
        return self

    def create_functor(self) -> "Functor":
        """
        Build a callable view of this action and, recursively, of its children.
        Never cached: every call returns a new graph.
        """
        return Functor(self)

    @property
    def as_function(self) -> "Functor":
        return self.create_functor()


class Functor:
    """
    Callable snapshot of an Action.

    Calling it triggers the action; `listen`/`listen_once` subscribe to it; child
    functors are reachable by name (`functor.save.load(...)`) or via `children`.
    """

    __slots__ = ("action", "_children")

    is_action_functor = True

    def __init__(self, action: Action) -> None:
        object.__setattr__(self, "action", action)
        object.__setattr__(
            self,
            "_children",
            MappingProxyType({name: child.create_functor() for name, child in action.children.items()}),
        )

    @property
    def children(self) -> Mapping[str, "Functor"]:
        return self._children

    def __call__(self, *args: Any) -> None:
        self.action.trigger(*args)

    def listen(self, callback: Callback) -> Subscription:
        return self.action.listen(callback)

    def listen_once(self, callback: Callback) -> Subscription:
        return self.action.listen_once(callback)

    def __getattr__(self, name: str) -> "Functor":
        if name == "_children":
            raise AttributeError(name)
        try:
            return self._children[name]
        except KeyError:
            raise AttributeError("functor has no child %r" % name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Functor is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Functor is immutable")

    def __repr__(self) -> str:
        return "Functor(%s, children=%r)" % (type(self.action).__name__, sorted(self._children))


def _is_reserved(action: Action, name: str) -> bool:
    # Names the child accessors would shadow, on the action or on its functors.
    return hasattr(type(action), name) or name in action.__dict__ or hasattr(Functor, name)

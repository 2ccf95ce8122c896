"""
Keyed Event Store
─────────────────
The backbone of the desk: every stage is a store holding the latest
record per key and fanning each update out to its listeners.

Propagation is synchronous and depth-first. `update()` stores the value,
then calls every listener's `process_add` inline, in subscription order.
A listener may update another store, so one ingested record can run the
whole pipeline before `update()` returns to the caller.

Nothing queues or retries, so a subscription cycle would recurse without
bound; `validate_acyclic` checks the wiring graph before any data flows.
"""

import logging
from typing import (
    Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar,
)

from ..errors import ObserverCycleError

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class ServiceListener(Generic[V]):
    """
    Observer of a store. `downstream` is the store this listener feeds,
    if any; it is only used to check the wiring graph.
    """

    downstream: Optional["KeyedEventStore"] = None

    def process_add(self, data: V) -> None:
        raise NotImplementedError

    def process_remove(self, data: V) -> None:
        pass

    def process_update(self, data: V) -> None:
        pass

    @property
    def name(self) -> str:
        return type(self).__name__


class CallbackListener(ServiceListener[V]):
    """Adapts a plain callable into a listener."""

    def __init__(self, fn: Callable[[V], Any], name: Optional[str] = None):
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "callback")

    def process_add(self, data: V) -> None:
        self._fn(data)

    @property
    def name(self) -> str:
        return self._name


class KeyedEventStore(Generic[K, V]):
    """
    Latest value per key plus an ordered list of listeners.
    Subclasses override `key_for` when the key is not the record's
    `persist_key`.
    """

    def __init__(self, name: str):
        self.name = name
        self._data: Dict[K, V] = {}
        self._listeners: List[ServiceListener[V]] = []
        self._update_count = 0
        self._notification_count = 0

    def key_for(self, data: V) -> K:
        return data.persist_key

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._data.get(key, default)

    def update(self, data: V) -> None:
        """Store `data` under its key (full overwrite), then notify listeners."""
        self._store(data)
        self._notify(data)

    def subscribe(self, listener: ServiceListener[V]) -> None:
        self._listeners.append(listener)
        logger.debug(f"[{self.name}] listener added: {listener.name}")

    @property
    def listeners(self) -> List[ServiceListener[V]]:
        return list(self._listeners)

    def _store(self, data: V) -> K:
        key = self.key_for(data)
        self._data[key] = data
        self._update_count += 1
        return key

    def _notify(self, data: V) -> None:
        for listener in self._listeners:
            self._notification_count += 1
            listener.process_add(data)

    def keys(self) -> List[K]:
        return list(self._data)

    def values(self) -> List[V]:
        return list(self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._data))

    def get_stats(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "records": len(self._data),
            "updates": self._update_count,
            "notifications": self._notification_count,
            "listeners": [l.name for l in self._listeners],
        }


def validate_acyclic(stores: Iterable[KeyedEventStore]) -> None:
    """
    Raise ObserverCycleError if following store → listener → downstream
    edges from any of `stores` leads back to a store already on the path.
    """
    done: set = set()

    def visit(store: KeyedEventStore, path: List[KeyedEventStore]):
        if id(store) in done:
            return
        if any(s is store for s in path):
            start = next(i for i, s in enumerate(path) if s is store)
            raise ObserverCycleError([s.name for s in path[start:]] + [store.name])

        path.append(store)
        for listener in store.listeners:
            target = listener.downstream
            if isinstance(target, KeyedEventStore):
                visit(target, path)
        path.pop()
        done.add(id(store))

    for store in stores:
        visit(store, [])

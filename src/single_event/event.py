"""Single-topic events with derived children and async awaiting.

Usage:
    event, trigger = create_single_event(sender="clock")

    def on_tick(value, sender):
        print(f"{sender} ticked {value}")

    event.listen(on_tick)
    trigger(1)

    # Derived events re-fire filtered or transformed values.
    doubled = event.filter(lambda v: v > 0).map(lambda v: v * 2)

    # Await the next occurrence from a coroutine.
    value = await doubled.next()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Callable, Coroutine
import logging
from typing import Any, Generic, TypeVar

from .exceptions import InvalidTakeCountError

LOGGER = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")

Listener = Callable[[Any, Any], None]
Hook = Callable[[], None]
Trigger = Callable[[Any], None]


def _noop() -> None:
    return None


class SingleEvent(ABC, Generic[A]):
    """Event node owning listeners, derived children and lifecycle hooks.

    ``on_connect`` runs when the node goes from no listeners and no children
    to at least one of either; ``on_disconnect`` runs on the way back. Every
    listener registered on the node is called as ``listener(value, sender)``.
    """

    def __init__(
        self,
        sender: Any = None,
        on_connect: Hook | None = None,
        on_disconnect: Hook | None = None,
    ) -> None:
        # Insertion order is delivery order.
        self._listeners: dict[Listener, None] = {}
        self._children: dict[SingleEvent[Any], None] = {}
        self._on_connect: Hook = on_connect or _noop
        self._on_disconnect: Hook = on_disconnect or _noop
        self._sender = sender
        self._connected = False

    @property
    def sender(self) -> Any:
        """Value passed as the second argument to every listener."""
        return self._sender

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def child_count(self) -> int:
        return len(self._children)

    @property
    def is_connected(self) -> bool:
        """True between an ``on_connect`` call and the matching ``on_disconnect``."""
        return self._connected

    def listen(self, listener: Listener) -> None:
        """Register ``listener``; registering it twice has no extra effect.

        Listeners are stored as dict keys, so they must be hashable. Two
        listeners that compare equal count as one registration.
        """
        self._connect_if_idle()
        self._listeners[listener] = None

    def unlisten(self, listener: Listener) -> None:
        """Remove ``listener`` from this node and, recursively, its children.

        Removing a listener that was never registered is a no-op.
        """
        self._listeners.pop(listener, None)
        for child in list(self._children):
            if child in self._children:
                child.unlisten(listener)
        self._disconnect_if_empty()

    def next(self) -> asyncio.Future[A]:
        """Return a future resolved with the next value fired on this node.

        Must be called with a running event loop. The internal listener
        removes itself after the first delivery.
        """
        future: asyncio.Future[A] = asyncio.get_running_loop().create_future()

        def once(value: A, sender: Any) -> None:
            if not future.done():
                future.set_result(value)
            self.unlisten(once)

        self.listen(once)
        return future

    def take(self, count: int) -> Coroutine[Any, Any, list[A]]:
        """Return a coroutine collecting the next ``count`` values in order.

        Each value is awaited with :meth:`next` only after the previous one
        arrived. ``count`` is validated immediately.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidTakeCountError(
                f"take() count must be a non-negative integer, got {count!r}"
            )
        return self._take(count)

    async def _take(self, count: int) -> list[A]:
        values: list[A] = []
        if count:
            LOGGER.debug(
                "event.take.start",
                extra={"event": "event.take.start", "count": count},
            )
        for _ in range(count):
            values.append(await self.next())
        return values

    def filter(self, predicate: Callable[[A], bool]) -> SingleEvent[A]:
        """Derive an event that re-fires only values accepted by ``predicate``."""
        child: FilterEvent[A]
        child = FilterEvent(
            predicate,
            sender=self._sender,
            on_connect=lambda: self._add_child(child),
            on_disconnect=lambda: self._remove_child(child),
        )
        return child

    def map(self, transform: Callable[[A], B]) -> SingleEvent[B]:
        """Derive an event that re-fires ``transform(value)``."""
        child: MapEvent[B]
        child = MapEvent(
            transform,
            sender=self._sender,
            on_connect=lambda: self._add_child(child),
            on_disconnect=lambda: self._remove_child(child),
        )
        return child

    @abstractmethod
    def _fire(self, value: Any) -> None:
        """Deliver a value arriving from the trigger or from the parent node."""

    def _notify(self, value: A) -> None:
        # Snapshots are taken before any delivery: entries added during the
        # pass wait for the next one, entries removed during it are skipped.
        listeners = list(self._listeners)
        children = list(self._children)
        for listener in listeners:
            if listener in self._listeners:
                listener(value, self._sender)
        for child in children:
            if child in self._children:
                child._fire(value)

    def _add_child(self, child: SingleEvent[Any]) -> None:
        self._connect_if_idle()
        self._children[child] = None

    def _remove_child(self, child: SingleEvent[Any]) -> None:
        self._children.pop(child, None)
        self._disconnect_if_empty()

    def _connect_if_idle(self) -> None:
        if self._connected:
            return
        self._connected = True
        LOGGER.debug(
            "event.connect",
            extra={"event": "event.connect", "sender": repr(self._sender)},
        )
        try:
            self._on_connect()
        except BaseException:
            # Left empty, so the next listen must retry the hook.
            if not self._listeners and not self._children:
                self._connected = False
            raise

    def _disconnect_if_empty(self) -> None:
        if not self._connected or self._listeners or self._children:
            return
        self._connected = False
        LOGGER.debug(
            "event.disconnect",
            extra={"event": "event.disconnect", "sender": repr(self._sender)},
        )
        self._on_disconnect()


class SourceEvent(SingleEvent[A]):
    """Root event; values come from the trigger returned by the factory."""

    def _fire(self, value: A) -> None:
        self._notify(value)


class FilterEvent(SingleEvent[A]):
    """Derived event passing through values accepted by a predicate."""

    def __init__(
        self,
        predicate: Callable[[A], bool],
        sender: Any = None,
        on_connect: Hook | None = None,
        on_disconnect: Hook | None = None,
    ) -> None:
        super().__init__(sender, on_connect, on_disconnect)
        self._predicate = predicate

    def _fire(self, value: A) -> None:
        if self._predicate(value):
            self._notify(value)


class MapEvent(SingleEvent[B]):
    """Derived event re-firing the transformed value."""

    def __init__(
        self,
        transform: Callable[[Any], B],
        sender: Any = None,
        on_connect: Hook | None = None,
        on_disconnect: Hook | None = None,
    ) -> None:
        super().__init__(sender, on_connect, on_disconnect)
        self._transform = transform

    def _fire(self, value: Any) -> None:
        self._notify(self._transform(value))


def create_single_event(
    sender: Any = None,
    on_connect: Hook | None = None,
    on_disconnect: Hook | None = None,
) -> tuple[SingleEvent[Any], Trigger]:
    """Create a source event and the trigger that fires it.

    Args:
        sender: Value passed to every listener of the event and of any event
            derived from it. Defaults to ``None``.
        on_connect: Called when the event gains its first observer.
        on_disconnect: Called when the event loses its last observer.

    Returns:
        ``(event, trigger)`` where ``trigger(value)`` synchronously runs the
        full propagation pass.
    """
    event: SourceEvent[Any] = SourceEvent(sender, on_connect, on_disconnect)

    def trigger(value: Any) -> None:
        event._fire(value)

    return event, trigger

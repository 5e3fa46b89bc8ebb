"""Typed event channels with an explicit unsubscribe contract."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Subscription:
    def __init__(self, channel: EventChannel, handler: Callable):
        self._channel = channel
        self._handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        """Idempotent; after this call the handler is never invoked again."""
        if self.active:
            self.active = False
            self._channel._remove(self._handler)


class EventChannel(Generic[T]):
    """One event kind, many listeners. Handlers run synchronously in subscription order."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def emit(self, payload: T) -> None:
        # копия списка: обработчик может отписаться во время рассылки
        for handler in list(self._handlers):
            handler(payload)

    def _remove(self, handler: Callable) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def __len__(self) -> int:
        return len(self._handlers)

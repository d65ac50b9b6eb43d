"""Publish/subscribe fan-out for real-time fleet updates."""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class Subscriber(Protocol):
    def send(self, event: dict) -> None:
        ...


def make_event(event_type: str, data: Any) -> dict:
    return {
        "type": event_type,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class Broadcaster:
    """Owns the set of connected subscribers and delivers events to each of them."""

    def __init__(self) -> None:
        self._subscribers: set[Subscriber] = set()
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.add(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.discard(subscriber)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event_type: str, data: Any) -> dict:
        """Send an event to every subscriber; subscribers that fail are dropped."""
        event = make_event(event_type, data)
        with self._lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            try:
                subscriber.send(event)
            except Exception as exc:
                logger.warning("Dropping subscriber after failed %s delivery: %s", event_type, exc)
                self.unsubscribe(subscriber)
        return event


class QueueSubscriber:
    """Hands events to an asyncio queue owned by the event loop that created it.

    ``send`` may be called from worker threads. A subscriber whose queue is full
    raises from ``send`` and is dropped by the broadcaster.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self.queue: asyncio.Queue[dict] = asyncio.Queue(maxsize=maxsize)

    def send(self, event: dict) -> None:
        if self._loop.is_closed():
            raise RuntimeError("subscriber event loop is closed")
        if self.queue.full():
            raise asyncio.QueueFull(f"subscriber queue full ({self.queue.maxsize} events pending)")
        self._loop.call_soon_threadsafe(self._put, event)

    def _put(self, event: dict) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("Subscriber queue full, discarding %s event", event.get("type"))

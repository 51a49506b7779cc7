from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ..core.enums import PunchAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchEvent:
    type: PunchAction
    employee_id: str
    timestamp: datetime

    def to_payload(self) -> dict:
        return {
            "type": self.type.value,
            "employeeId": self.employee_id,
            "timestamp": self.timestamp.isoformat(),
        }


class Subscriber(Protocol):
    def send(self, event: PunchEvent) -> None:
        raise NotImplementedError


class Notifier(Protocol):
    def broadcast(self, event: PunchEvent) -> int:
        raise NotImplementedError


class RealtimeNotifier(Notifier):
    """Registry of connected subscribers with best-effort fan-out.

    Subscribers only live as long as their connection; there is no replay, so a
    client connecting after a broadcast has to re-fetch the summary instead.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []
        self._registry_lock = threading.Lock()
        # Serializes broadcasts so every connection sees events in issue order.
        self._delivery_lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._registry_lock:
            return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber) -> Subscriber:
        with self._registry_lock:
            if subscriber not in self._subscribers:
                self._subscribers.append(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> bool:
        with self._registry_lock:
            try:
                self._subscribers.remove(subscriber)
            except ValueError:
                return False
            return True

    def broadcast(self, event: PunchEvent) -> int:
        delivered = 0
        with self._delivery_lock:
            with self._registry_lock:
                snapshot = list(self._subscribers)

            for subscriber in snapshot:
                try:
                    subscriber.send(event)
                except Exception:
                    logger.warning("Dropping subscriber %r after failed delivery", subscriber, exc_info=True)
                    self.unsubscribe(subscriber)
                    continue
                delivered += 1

        logger.debug("Broadcast %s for employee %s to %d subscriber(s)", event.type.value, event.employee_id, delivered)
        return delivered

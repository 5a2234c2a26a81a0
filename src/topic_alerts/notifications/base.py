"""Notifier abstraction used by the orchestrator and the app."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Abstract interface for all notification channels."""

    @abstractmethod
    async def send(self, text: str, recipient_id: str | None = None) -> bool:
        """Deliver *text*. Returns True on success."""

    async def close(self) -> None:
        return None

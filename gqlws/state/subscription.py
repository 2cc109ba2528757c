"""Subscription lifecycle states."""

from __future__ import annotations

from enum import Enum


class SubscriptionState(str, Enum):
    PENDING = "pending"
    HANDSHAKE_IN_FLIGHT = "handshake_in_flight"
    STREAMING = "streaming"
    CLOSED = "closed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SubscriptionState.CLOSED, SubscriptionState.FAILED)


__all__ = ["SubscriptionState"]

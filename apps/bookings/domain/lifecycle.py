"""
Booking Lifecycle

Finite state machine for a booking's status:
- PENDING -> APPROVED | REJECTED (admin)
- PENDING -> CANCELLED (owner or admin)
- APPROVED -> ACTIVE (admin)
- APPROVED -> CANCELLED (owner or admin)
- ACTIVE -> COMPLETED (admin)
- COMPLETED, REJECTED, CANCELLED are terminal

Only APPROVED and ACTIVE bookings occupy a vehicle's calendar.
"""

from __future__ import annotations

from shared.exceptions import InvalidStateError

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
ACTIVE = "active"
COMPLETED = "completed"
CANCELLED = "cancelled"

TRANSITIONS: dict[str, frozenset[str]] = {
    PENDING: frozenset({APPROVED, REJECTED, CANCELLED}),
    APPROVED: frozenset({ACTIVE, CANCELLED}),
    ACTIVE: frozenset({COMPLETED}),
    COMPLETED: frozenset(),
    REJECTED: frozenset(),
    CANCELLED: frozenset(),
}

# Statuses that make a booking conflict with an overlapping one.
BLOCKING_STATUSES = frozenset({APPROVED, ACTIVE})

# Pending bookings also hold their dates while a new booking is written.
HOLDING_STATUSES = BLOCKING_STATUSES | {PENDING}

CANCELLABLE_STATUSES = frozenset({PENDING, APPROVED})

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """Raise InvalidStateError unless ``current -> target`` is in the table."""

    if target not in TRANSITIONS:
        raise InvalidStateError(f"Unknown booking status '{target}'")
    if not can_transition(current, target):
        raise InvalidStateError(f"Cannot change booking status from {current} to {target}")


def ensure_cancellable(current: str) -> None:
    if current not in CANCELLABLE_STATUSES:
        raise InvalidStateError("Booking cannot be cancelled in current status")

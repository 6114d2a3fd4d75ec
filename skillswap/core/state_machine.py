"""
Exchange and session state machines.

Allowed (current, requested) pairs are declared as data; everything
else is rejected with ConflictError. Requesting the current state is a
no-op and reported as such so callers can stay idempotent.

Dependencies: skillswap.core.exceptions
System role: Transition validation for exchanges and sessions
"""

import enum

from skillswap.core.exceptions import ConflictError


class ExchangeStatus(str, enum.Enum):
    """
    Exchange lifecycle states.

    PENDING: Requested, awaiting the counterpart
    ACTIVE: Accepted; sessions are being held
    COMPLETED: All sessions done or closed by a participant (terminal)
    CANCELLED: Abandoned (terminal)
    """

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionStatus(str, enum.Enum):
    """
    Session states.

    SCHEDULED: Planned meeting
    COMPLETED: Meeting took place (terminal, counts towards the exchange)
    CANCELLED: Meeting dropped (terminal)
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


EXCHANGE_TRANSITIONS: dict[ExchangeStatus, frozenset[ExchangeStatus]] = {
    ExchangeStatus.PENDING: frozenset({ExchangeStatus.ACTIVE, ExchangeStatus.CANCELLED}),
    ExchangeStatus.ACTIVE: frozenset({ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED}),
    ExchangeStatus.COMPLETED: frozenset(),
    ExchangeStatus.CANCELLED: frozenset(),
}

SESSION_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.SCHEDULED: frozenset({SessionStatus.COMPLETED, SessionStatus.CANCELLED}),
    SessionStatus.COMPLETED: frozenset(),
    SessionStatus.CANCELLED: frozenset(),
}

TERMINAL_EXCHANGE_STATUSES = frozenset(
    status for status, targets in EXCHANGE_TRANSITIONS.items() if not targets
)
OPEN_EXCHANGE_STATUSES = frozenset(ExchangeStatus) - TERMINAL_EXCHANGE_STATUSES


def validate_exchange_transition(current: ExchangeStatus, requested: ExchangeStatus) -> bool:
    """
    Check an exchange status change.

    Args:
        current: Status stored on the exchange
        requested: Status the caller asked for

    Returns:
        bool: True if the status changes, False for a same-status no-op

    Raises:
        ConflictError: If the pair is not an allowed transition
    """
    if current == requested:
        return False
    if requested not in EXCHANGE_TRANSITIONS[current]:
        raise ConflictError(
            f"Exchange cannot move from {current.value} to {requested.value}",
            current_state=current.value,
            requested_state=requested.value,
        )
    return True


def validate_session_transition(current: SessionStatus, requested: SessionStatus) -> bool:
    """
    Check a session status change.

    Args:
        current: Status stored on the session
        requested: Status the caller asked for

    Returns:
        bool: True if the status changes, False for a same-status no-op

    Raises:
        ConflictError: If the pair is not an allowed transition
    """
    if current == requested:
        return False
    if requested not in SESSION_TRANSITIONS[current]:
        raise ConflictError(
            f"Session cannot move from {current.value} to {requested.value}",
            current_state=current.value,
            requested_state=requested.value,
        )
    return True

"""
Custom exceptions for the state machine engine.
"""
from typing import Optional


class StateMachineError(Exception):
    """Base exception for state machine errors."""

    pass


class UnknownStateError(StateMachineError):
    """Raised when a state has no descriptor in the registry."""

    def __init__(self, state: Optional[str], message: Optional[str] = None):
        self.state = state
        self.message = message or f"{state!r} does not exist"
        super().__init__(self.message)


class NoCurrentStateError(StateMachineError):
    """Raised when an event is processed before any state was set."""

    def __init__(self, message="no current state is set"):
        self.message = message
        super().__init__(self.message)


class NoTransitionsError(StateMachineError):
    """Raised when the current state has no outgoing transitions."""

    def __init__(self, state: str):
        self.state = state
        self.message = f"{state!r} does not have transitions"
        super().__init__(self.message)


class EventNotAcceptedError(StateMachineError):
    """Raised when the current state has no transition for the event."""

    def __init__(self, state: str, event: str):
        self.state = state
        self.event = event
        self.message = f"{state!r} does not accept event {event!r}"
        super().__init__(self.message)

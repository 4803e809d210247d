"""
A small, embeddable finite state machine engine.

Host applications declare states, events and transitions, then drive the
machine with events while it runs entry and exit actions. All operations on a
machine are serialized by a single lock.
"""

from .exceptions import (
    EventNotAcceptedError,
    NoCurrentStateError,
    NoTransitionsError,
    StateMachineError,
    UnknownStateError,
)
from .models import NOOP, Action, Data, Event, State, StateDescriptor
from .state_machine import StateMachine
from .template_helpers import render, render_dot

__version__ = "0.1.0"
__author__ = "fsmachine Contributors"
__license__ = "MIT"

__all__ = [
    "StateMachine",
    "State",
    "Event",
    "Action",
    "Data",
    "StateDescriptor",
    "NOOP",
    "StateMachineError",
    "UnknownStateError",
    "NoCurrentStateError",
    "NoTransitionsError",
    "EventNotAcceptedError",
    "render",
    "render_dot",
]

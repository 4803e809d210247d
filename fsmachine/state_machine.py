"""
Thread-safe finite state machine with entry/exit actions.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from .exceptions import (
    EventNotAcceptedError,
    NoCurrentStateError,
    NoTransitionsError,
    UnknownStateError,
)
from .models import Action, Data, Event, State, StateDescriptor

# Set up logger for this module
logger = logging.getLogger(__name__)


class StateMachine:
    """Event-driven state machine built from a transition table.

    States are created lazily the first time they are referenced, whether as a
    transition source or target, by setting a hook, or by accessing their data.
    The machine starts with no current state; ``set_state`` places it
    unconditionally and ``process`` moves it along the transition table.

    Every operation runs under a single lock, including the entry and exit
    actions invoked during a transition. The lock is not reentrant: an action
    that calls back into the same machine will deadlock.
    """

    def __init__(self, name: str = "fsm"):
        self.name = name
        self._lock = threading.Lock()
        self._state: Optional[State] = None
        self._states: Dict[State, StateDescriptor] = {}

    def __repr__(self) -> str:
        # unlocked read so repr stays usable from inside an action
        return f"<StateMachine {self.name!r} state={self._state!r}>"

    @property
    def state(self) -> Optional[State]:
        """The current state, or None if no state has been set yet."""
        with self._lock:
            return self._state

    @property
    def is_active(self) -> bool:
        """Whether a current state has been set."""
        with self._lock:
            return self._state is not None

    def states(self) -> List[State]:
        """Return every state that is the source or target of a transition.

        States known only through hooks or data are not included.
        """
        with self._lock:
            return self._edge_states()

    def out_states(self, source: State) -> List[State]:
        """Return the states directly reachable from ``source``."""
        with self._lock:
            descriptor = self._states.get(source)
            if descriptor is None:
                return []
            return sorted(set(descriptor.transitions.values()))

    def transitions(self) -> List[Tuple[State, Event, State]]:
        """Return every transition as ``(source, event, target)``."""
        with self._lock:
            return self._edges()

    def valid_events(self, state: State) -> List[Event]:
        """Return the events accepted by ``state``, in ascending order."""
        with self._lock:
            descriptor = self._states.get(state)
            if descriptor is None:
                return []
            return sorted(descriptor.transitions)

    def is_valid_event(self, state: State, event: Event) -> bool:
        with self._lock:
            descriptor = self._states.get(state)
            return descriptor is not None and event in descriptor.transitions

    def add_transition(self, source: State, event: Event, target: State) -> None:
        """Register ``source --event--> target``, replacing any previous target."""
        with self._lock:
            self._get_or_create_state(target)
            descriptor = self._get_or_create_state(source)
            previous = descriptor.transitions.get(event)
            descriptor.transitions[event] = target
            if previous is not None and previous != target:
                logger.debug(
                    f"{self.name}: replaced transition {source!r} --{event!r}--> "
                    f"{previous!r} with {target!r}"
                )
            else:
                logger.debug(f"{self.name}: transition {source!r} --{event!r}--> {target!r}")

    def set_on_entry(self, state: State, action: Optional[Action]) -> None:
        """Set the action run when entering ``state``. None keeps the current one."""
        with self._lock:
            descriptor = self._get_or_create_state(state)
            if action is not None:
                descriptor.on_entry = action
                logger.debug(f"{self.name}: entry action set for {state!r}")

    def set_on_exit(self, state: State, action: Optional[Action]) -> None:
        """Set the action run when leaving ``state``. None keeps the current one."""
        with self._lock:
            descriptor = self._get_or_create_state(state)
            if action is not None:
                descriptor.on_exit = action
                logger.debug(f"{self.name}: exit action set for {state!r}")

    def data(self, state: State) -> Data:
        """Return the live data bag of ``state``.

        The bag is returned by reference. Changes made to it afterwards are not
        synchronized by the machine.
        """
        with self._lock:
            return self._get_or_create_state(state).data

    def set_state(self, state: Optional[State]) -> None:
        """Move to ``state`` without consulting the transition table.

        Does nothing if ``state`` is already current. Otherwise runs the exit
        action of the current state, switches, then runs the entry action of
        the new state.

        Raises:
            UnknownStateError: If ``state`` was never registered.
        """
        with self._lock:
            if state == self._state:
                return
            target = self._states.get(state)
            if target is None:
                logger.warning(f"{self.name}: cannot set unknown state {state!r}")
                raise UnknownStateError(state)

            previous = self._state
            if previous is not None:
                self._states[previous].on_exit()
            self._state = state
            target.on_entry()
            logger.debug(f"{self.name}: state set {previous!r} -> {state!r}")

    def process(self, event: Event) -> None:
        """Follow the transition for ``event`` from the current state.

        A transition whose target is the current state still runs both the
        exit and entry actions.

        Raises:
            NoCurrentStateError: If no state has been set.
            NoTransitionsError: If the current state has no transitions.
            EventNotAcceptedError: If the current state does not accept ``event``.
            UnknownStateError: If the current or target state is missing from
                the registry.
        """
        with self._lock:
            if self._state is None:
                logger.warning(f"{self.name}: event {event!r} received with no current state")
                raise NoCurrentStateError()

            current = self._states.get(self._state)
            if current is None:
                logger.warning(f"{self.name}: current state {self._state!r} is not registered")
                raise UnknownStateError(self._state)
            if not current.transitions:
                logger.warning(f"{self.name}: {current.name!r} has no transitions")
                raise NoTransitionsError(current.name)

            target_name = current.transitions.get(event)
            if target_name is None:
                logger.warning(f"{self.name}: {current.name!r} rejected event {event!r}")
                raise EventNotAcceptedError(current.name, event)
            target = self._states.get(target_name)
            if target is None:
                logger.warning(f"{self.name}: target state {target_name!r} is not registered")
                raise UnknownStateError(target_name)

            current.on_exit()
            self._state = target_name
            target.on_entry()
            logger.debug(f"{self.name}: {current.name!r} -> {target_name!r} on {event!r}")

    def _snapshot(
        self,
    ) -> Tuple[List[State], List[Tuple[State, Event, State]], Optional[State]]:
        """Return ``(states, transitions, current)`` read under one lock."""
        with self._lock:
            return self._edge_states(), self._edges(), self._state

    def _edge_states(self) -> List[State]:
        # callers must hold the lock
        found = set()
        for source, descriptor in self._states.items():
            if descriptor.transitions:
                found.add(source)
            found.update(descriptor.transitions.values())
        return sorted(found)

    def _edges(self) -> List[Tuple[State, Event, State]]:
        # callers must hold the lock
        return sorted(
            (source, event, target)
            for source, descriptor in self._states.items()
            for event, target in descriptor.transitions.items()
        )

    def _get_or_create_state(self, state: State) -> StateDescriptor:
        """Return the descriptor for ``state``, creating it on first use.

        Callers must hold the lock.
        """
        descriptor = self._states.get(state)
        if descriptor is None:
            descriptor = StateDescriptor(name=state)
            self._states[state] = descriptor
            logger.debug(f"{self.name}: created state {state!r}")
        return descriptor

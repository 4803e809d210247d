"""
Shared fixtures for state machine tests.
"""

import pytest

from fsmachine import StateMachine


@pytest.fixture
def player():
    """A two-state playback machine: idle --PLAY--> playing --STOP--> idle."""
    machine = StateMachine(name="player")
    machine.add_transition("idle", "PLAY", "playing")
    machine.add_transition("playing", "STOP", "idle")
    return machine


@pytest.fixture
def calls():
    """List that recording actions append to, in call order."""
    return []


@pytest.fixture
def record(calls):
    """Factory for actions that append a label to ``calls``."""
    def make(label):
        def action():
            calls.append(label)
        return action
    return make

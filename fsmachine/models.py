"""
Core data models for the state machine engine.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

State = str
Event = str
Action = Callable[[], None]


def NOOP() -> None:
    """Default entry/exit action that does nothing."""


class Data(Dict[str, Any]):
    """Free-form per-state metadata.

    Typed accessors return the zero value of the requested type when the key is
    missing or the stored value has a different type. They never raise.
    """

    def get_string(self, key: str) -> str:
        value = self.get(key)
        if isinstance(value, str):
            return value
        return ""

    def get_strings(self, key: str) -> List[str]:
        value = self.get(key)
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
        return []

    def get_int(self, key: str) -> int:
        value = self.get(key)
        # bool is an int subclass but not an int value here
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def get_ints(self, key: str) -> List[int]:
        value = self.get(key)
        if isinstance(value, list) and all(
            isinstance(item, int) and not isinstance(item, bool) for item in value
        ):
            return value
        return []

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        if isinstance(value, bool):
            return value
        return False


@dataclass
class StateDescriptor:
    """Internal record of a state's transitions, hooks and data."""

    name: State
    transitions: Dict[Event, State] = field(default_factory=dict)
    data: Data = field(default_factory=Data)
    on_entry: Action = NOOP
    on_exit: Action = NOOP

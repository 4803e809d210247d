#!/usr/bin/env python3
"""
Example of a playback lifecycle driven by fsmachine, with logging enabled.

Log levels used by the library:
- DEBUG: state creation, transitions added, and every state change
- WARNING: rejected events and unknown states
"""

import logging

from fsmachine import StateMachine, StateMachineError, render_dot


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_player():
    """Create a media player lifecycle machine."""
    player = StateMachine(name="player")
    player.add_transition("idle", "PLAY", "playing")
    player.add_transition("playing", "PAUSE", "paused")
    player.add_transition("paused", "PLAY", "playing")
    player.add_transition("playing", "STOP", "idle")
    player.add_transition("paused", "STOP", "idle")

    player.set_on_entry("playing", lambda: print(f"now playing {player.data('playing').get_string('track')}"))
    player.set_on_exit("playing", lambda: print("playback halted"))
    player.data("playing")["track"] = "intro.mp3"
    return player


if __name__ == "__main__":
    setup_logging()

    player = create_player()
    player.set_state("idle")

    for event in ["PLAY", "PAUSE", "PUSH", "PLAY", "STOP"]:
        try:
            player.process(event)
        except StateMachineError as e:
            print(f"rejected: {e}")

    print(render_dot(player))

"""Persistence contract and action log replay.

A stored game is either a JSON snapshot of its GameState (which carries the
full generator state) or its GameConfig plus the accepted action log. Both
restore the same state.
"""

import logging
from typing import Any

from citadels.schemas.game_engine import GameConfig, GameState

from .engine import acting_player_index, build_action_from_payload, process_action
from .start_game import initialize_game

logger = logging.getLogger(__name__)


class ReplayError(Exception):
    """Raised when a stored action log no longer applies to its game."""

    def __init__(self, position: int, message: str):
        super().__init__(f"Action {position}: {message}")
        self.position = position


def serialize_game(state: GameState) -> str:
    return state.model_dump_json()


def deserialize_game(data: str | bytes) -> GameState:
    """Load a snapshot written by :func:`serialize_game`.

    Raises:
        pydantic.ValidationError: If the data is not a valid game state.
    """
    return GameState.model_validate_json(data)


def replay_game(config: GameConfig, action_log: list[dict[str, Any]]) -> GameState:
    """Rebuild a game by applying its action log to a fresh game.

    Each entry is submitted on behalf of whoever is expected to act at that
    point, so the log needs no player ids.

    Raises:
        ValueError: If the config is invalid.
        ReplayError: If an entry can't be parsed or is rejected.
    """
    state = initialize_game(config)
    for position, payload in enumerate(action_log):
        try:
            action = build_action_from_payload(payload)
        except ValueError as e:
            raise ReplayError(position, str(e)) from e

        acting = acting_player_index(state)
        if acting is None:
            raise ReplayError(position, "The game is already over")

        result = process_action(state, action, state.players[acting].id)
        if not result.success:
            raise ReplayError(position, f"{result.error_code.value}: {result.error_message}")
        state = result.state

    logger.info("Replayed %d actions, round=%d", len(action_log), state.round)
    return state

"""Game service module.

Provides:
- Game initialization (start_game.py)
- Snapshots and action log replay (serialization.py)
- Game engine processing (engine/)
"""

# Re-export from engine for convenience
from .engine import (
    ErrorCode,
    InMemoryNotifier,
    Notifier,
    PlayerAction,
    ProcessResult,
    allowed_actions,
    build_action_from_payload,
    process_action,
)
from .serialization import ReplayError, deserialize_game, replay_game, serialize_game
from .start_game import initialize_game, validate_game_config

__all__ = [
    # Initialization
    "initialize_game",
    "validate_game_config",
    # Persistence
    "serialize_game",
    "deserialize_game",
    "replay_game",
    "ReplayError",
    # Engine
    "ErrorCode",
    "PlayerAction",
    "ProcessResult",
    "Notifier",
    "InMemoryNotifier",
    "allowed_actions",
    "process_action",
    "build_action_from_payload",
]

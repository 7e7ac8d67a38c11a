"""Game engine module - deterministic rules for the role-drafting card game.

This module provides the core game engine with:
- Action types for explicit player inputs
- A handler registry with one handler per action tag
- The Draft / Call / GameOver turn machine
- ProcessResult pattern for error handling

Usage:
    from citadels.services.game.engine import (
        process_action,
        allowed_actions,
        build_action_from_payload,
    )

    action = build_action_from_payload({"action_type": "gather_resource_gold"})
    result = process_action(state, action, player_id, notifier, room_id)

    if result.success:
        state = result.state
    else:
        print(f"Error: {result.error_code} - {result.error_message}")
"""

# Actions - explicit player inputs
from .actions import (
    BuildAction,
    CityDistrictTarget,
    PlayerAction,
    action_tag,
    build_action_from_payload,
)

# Legal actions
from .legal_actions import allowed_actions, available_actions

# Notifications
from .notifications import InMemoryNotifier, Notification, Notifier

# Main processing
from .process import process_action

# State queries
from .state import (
    GameStateCorrupted,
    acting_player_index,
    card_population,
    has_completed_city,
)

# Result types
from .validation import ErrorCode, ProcessResult, ValidationResult, validate_action

__all__ = [
    # Actions
    "PlayerAction",
    "BuildAction",
    "CityDistrictTarget",
    "action_tag",
    "build_action_from_payload",
    # Legal actions
    "allowed_actions",
    "available_actions",
    # Notifications
    "Notification",
    "Notifier",
    "InMemoryNotifier",
    # Processing
    "process_action",
    # State queries
    "GameStateCorrupted",
    "acting_player_index",
    "card_population",
    "has_completed_city",
    # Validation
    "ErrorCode",
    "ProcessResult",
    "ValidationResult",
    "validate_action",
]

"""Validation layer for game actions and ProcessResult pattern.

Separates validation from processing logic:
- validate_action() checks if an action is legal given current state
- ProcessResult and ActionOutput replace exceptions for control flow
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from citadels.schemas.game_engine import Followup, GameState

from .actions import PlayerAction, action_tag
from .legal_actions import available_actions
from .notifications import Notification
from .state import acting_player_index, is_game_over, player_by_id

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    # Action doesn't match the current turn or followup
    ILLEGAL_STATE = "ILLEGAL_STATE"
    # Target fails a role-specific precondition
    ILLEGAL_TARGET = "ILLEGAL_TARGET"
    # Referenced role, player or card is absent
    NOT_FOUND = "NOT_FOUND"


@dataclass
class ProcessResult:
    """Result of processing a game action.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes suitable for client localization.
    """

    state: GameState | None = None
    notifications: list[Notification] = field(default_factory=list)
    success: bool = True
    error_code: ErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(
        cls,
        state: GameState,
        notifications: list[Notification] | None = None,
    ) -> "ProcessResult":
        """Create a successful result with new state and notifications."""
        return cls(
            state=state,
            notifications=notifications or [],
            success=True,
        )

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "ProcessResult":
        """Create a failure result with error details."""
        return cls(
            state=None,
            notifications=[],
            success=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ValidationResult:
    """Result of validating an action before processing."""

    is_valid: bool = True
    error_code: ErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: ErrorCode, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ActionOutput:
    """What a handler hands back to the dispatcher.

    ``log`` is the public one-line summary, ``followup`` replaces the pending
    followup (None clears it) and ``end_turn`` advances the turn machine.
    """

    log: str = ""
    followup: Followup | None = None
    end_turn: bool = False
    notifications: list[Notification] = field(default_factory=list)
    error_code: ErrorCode | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.error_code is None

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "ActionOutput":
        return cls(error_code=code, error_message=message)


def validate_action(
    state: GameState,
    action: PlayerAction,
    player_id: str,
) -> ValidationResult:
    """Validate an action before processing.

    Checks:
    - The game is not over
    - The player is part of the game and is the one expected to act
    - The action is among the currently available actions (a pending
      followup restricts these to its own responses)

    Target-specific checks are left to the handlers.
    """
    tag = action_tag(action)
    logger.debug("Validating action: type=%s, player=%s", tag.value, player_id)

    if is_game_over(state):
        logger.warning("Validation failed: GAME_FINISHED")
        return ValidationResult.error(ErrorCode.ILLEGAL_STATE, "Game has already finished")

    player = player_by_id(state, player_id)
    if player is None:
        logger.warning("Validation failed: unknown player=%s", player_id)
        return ValidationResult.error(ErrorCode.NOT_FOUND, "Player is not part of this game")

    acting = acting_player_index(state)
    if acting != player.index:
        logger.warning(
            "Validation failed: NOT_YOUR_TURN, current=%s, attempted=%s",
            acting,
            player.index,
        )
        return ValidationResult.error(ErrorCode.ILLEGAL_STATE, "It's not your turn")

    allowed = available_actions(state)
    if tag not in allowed:
        logger.warning(
            "Validation failed: %s not available, allowed=%s",
            tag.value,
            [t.value for t in allowed],
        )
        return ValidationResult.error(
            ErrorCode.ILLEGAL_STATE,
            f"Cannot {tag.value.replace('_', ' ')} right now",
        )

    logger.debug("Action %s validated successfully", tag.value)
    return ValidationResult.ok()

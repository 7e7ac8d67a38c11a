"""Main entry point for game action processing.

This module provides the primary interface for processing game actions:
- process_action(): Validates and applies any player action
- Dispatches to the handler registered for the action's tag
- Returns ProcessResult with the new state and notifications
"""

import logging

from citadels.schemas.game_engine import CallTurn, GameState

from .actions import PlayerAction, action_tag
from .handlers import get_handler
from .notifications import Notification, Notifier, deliver_notifications
from .turn import end_turn, record_log, yield_bewitched_turn
from .validation import ProcessResult, validate_action

logger = logging.getLogger(__name__)


def process_action(
    state: GameState,
    action: PlayerAction,
    player_id: str,
    notifier: Notifier | None = None,
    room_id: str | None = None,
) -> ProcessResult:
    """Process a player action and return the result.

    This is the only way the game state changes. It:
    1. Validates the action against the current turn and followup
    2. Runs the handler on a deep copy of the state
    3. Records the log line, the action and the next followup
    4. Advances the turn machine when the handler ends the turn
    5. Delivers notifications through ``notifier`` when one is given

    The input state is never mutated; a rejected action leaves no trace.

    Args:
        state: Current game state.
        action: The action to process.
        player_id: Id of the player submitting the action.
        notifier: Optional messaging channel for the room.
        room_id: Room the notifications are addressed to.

    Returns:
        ProcessResult containing:
        - success: Whether the action was applied
        - state: The new game state (if successful)
        - notifications: Room-wide log lines and private messages
        - error_code/error_message: Error details (if failed)

    Example:
        >>> result = process_action(state, GatherResourceGoldAction(), "alice")
        >>> if result.success:
        ...     state = result.state
        ... else:
        ...     send_error(result.error_code, result.error_message)
    """
    tag = action_tag(action)
    logger.info(
        "Processing action: type=%s, player=%s, turn=%s",
        tag.value,
        player_id,
        state.active_turn.turn_type,
    )
    logger.debug("Action details: %s", action)

    validation = validate_action(state, action, player_id)
    if not validation.is_valid:
        return ProcessResult.failure(validation.error_code, validation.error_message)

    new_state = state.model_copy(deep=True)
    logs_before = len(new_state.logs)

    output = get_handler(tag)(new_state, action)
    if not output.success:
        logger.warning(
            "Action rejected by handler: type=%s, player=%s, code=%s, message=%s",
            tag.value,
            player_id,
            output.error_code.value,
            output.error_message,
        )
        return ProcessResult.failure(output.error_code, output.error_message)

    new_state.turn_actions.append(tag)
    if isinstance(new_state.active_turn, CallTurn):
        new_state.characters[new_state.active_turn.index].performed.append(tag)
    if output.log:
        record_log(new_state, output.log)
    new_state.action_log.append(action.model_dump(mode="json"))
    new_state.followup = output.followup

    if output.end_turn:
        end_turn(new_state)
    else:
        yield_bewitched_turn(new_state)

    notifications = [Notification(message=line) for line in new_state.logs[logs_before:]]
    notifications.extend(output.notifications)

    if notifier is not None and room_id is not None:
        deliver_notifications(new_state, notifications, notifier, room_id)

    logger.info(
        "Action processed successfully: type=%s, player=%s, notifications=%d",
        tag.value,
        player_id,
        len(notifications),
    )
    return ProcessResult.ok(new_state, notifications)

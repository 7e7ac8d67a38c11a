"""Draft handlers: picking and discarding roles, and the Theater swap."""

import logging

from citadels.schemas.game_engine import ActionTag, Draft, DraftTurn, GameState, RoleName

from .. import rng
from ..actions import DraftDiscardAction, DraftPickAction, TheaterAction, TheaterPassAction
from ..notifications import Notification
from ..roles import role_data, sort_by_rank
from ..state import active_player, character_for, character_index, corrupted
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _current_draft(state: GameState) -> Draft:
    turn = state.active_turn
    if not isinstance(turn, DraftTurn):
        raise corrupted("Draft action outside of the draft")
    return turn.draft


def _check_remaining(state: GameState, draft: Draft, role: RoleName) -> ActionOutput | None:
    if character_index(state, role) is None:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, f"{role.value} is not in this game")
    if role not in draft.remaining:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"{role.value} is not available")
    return None


@handler(ActionTag.DRAFT_PICK)
def handle_draft_pick(state: GameState, action: DraftPickAction) -> ActionOutput:
    draft = _current_draft(state)
    error = _check_remaining(state, draft, action.role)
    if error is not None:
        return error

    draft.remaining.remove(action.role)
    player = state.players[draft.player_index]
    character = character_for(state, action.role)
    character.player_index = player.index
    player.roles = sort_by_rank([*player.roles, action.role])

    # Two players pick twice in a row before each of their discards
    keeps_turn = len(state.players) == 2 and len(draft.remaining) in (5, 3)
    logger.debug("Player %d drafted %s", player.index, action.role.value)
    return ActionOutput(
        log=f"{player.name} drafts a role.",
        end_turn=not keeps_turn,
        notifications=[
            Notification(
                message=f"You drafted the {role_data(action.role).display_name}.",
                player_index=player.index,
            )
        ],
    )


@handler(ActionTag.DRAFT_DISCARD)
def handle_draft_discard(state: GameState, action: DraftDiscardAction) -> ActionOutput:
    draft = _current_draft(state)
    error = _check_remaining(state, draft, action.role)
    if error is not None:
        return error

    draft.remaining.remove(action.role)
    player = state.players[draft.player_index]
    return ActionOutput(log=f"{player.name} discards a role face down.", end_turn=True)


@handler(ActionTag.THEATER)
def handle_theater(state: GameState, action: TheaterAction) -> ActionOutput:
    player = active_player(state)
    if action.role not in player.roles:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "You don't have that role")
    if action.player >= len(state.players):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "No such player")
    if action.player == player.index:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot swap with yourself")
    target = state.players[action.player]
    if not target.roles:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"{target.name} has no role to swap")

    theirs = rng.choice(state.prng, target.roles)
    player.roles = sort_by_rank([r for r in player.roles if r != action.role] + [theirs])
    target.roles = sort_by_rank([r for r in target.roles if r != theirs] + [action.role])
    character_for(state, action.role).player_index = target.index
    character_for(state, theirs).player_index = player.index

    return ActionOutput(
        log=f"{player.name} uses the Theater to swap roles with {target.name}.",
        end_turn=True,
        notifications=[
            Notification(
                message=f"You swapped your {role_data(action.role).display_name} "
                f"for the {role_data(theirs).display_name}.",
                player_index=player.index,
            ),
            Notification(
                message=f"{player.name} took your {role_data(theirs).display_name} "
                f"and gave you the {role_data(action.role).display_name}.",
                player_index=target.index,
            ),
        ],
    )


@handler(ActionTag.THEATER_PASS)
def handle_theater_pass(state: GameState, action: TheaterPassAction) -> ActionOutput:
    player = active_player(state)
    return ActionOutput(log=f"{player.name} does not use their Theater.", end_turn=True)

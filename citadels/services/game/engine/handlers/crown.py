"""Crown handlers for the King, the Patrician and the Emperor."""

import logging

from citadels.schemas.game_engine import ActionTag, GameState, Player, Resource, RoleName

from .. import rng
from ..actions import EmperorGiveCrownAction, EmperorHeirGiveCrownAction, TakeCrownAction
from ..state import active_character, active_player
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _recipient(
    state: GameState, giver: Player, index: int
) -> tuple[Player | None, ActionOutput | None]:
    if index >= len(state.players):
        return None, ActionOutput.failure(ErrorCode.NOT_FOUND, "No such player")
    if index == giver.index:
        return None, ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "Cannot give the crown to yourself."
        )
    if index == state.crowned:
        return None, ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"{state.players[index].name} already has the crown."
        )
    return state.players[index], None


@handler(ActionTag.TAKE_CROWN)
def handle_take_crown(state: GameState, action: TakeCrownAction) -> ActionOutput:
    character = active_character(state)
    if character.role not in (RoleName.KING, RoleName.PATRICIAN) or character.player_index is None:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_STATE, "Only the King or Patrician takes the crown."
        )
    # The owner keeps the crown even when the Witch plays the turn
    state.crowned = character.player_index
    return ActionOutput(log=f"{state.players[state.crowned].name} takes the crown.")


@handler(ActionTag.EMPEROR_GIVE_CROWN)
def handle_emperor_give_crown(state: GameState, action: EmperorGiveCrownAction) -> ActionOutput:
    player = active_player(state)
    target, error = _recipient(state, player, action.player)
    if error is not None:
        return error

    state.crowned = target.index
    if action.resource == Resource.GOLD and target.gold > 0:
        target.gold -= 1
        player.gold += 1
        payment = "1 gold"
    elif action.resource == Resource.CARDS and target.hand:
        card = target.hand.pop(rng.randrange(state.prng, len(target.hand)))
        player.hand.append(card)
        payment = "1 card"
    else:
        payment = "nothing"
    logger.debug("Emperor crowned player %d", target.index)
    return ActionOutput(log=f"{player.name} gives the crown to {target.name} and takes {payment}.")


@handler(ActionTag.EMPEROR_HEIR_GIVE_CROWN)
def handle_emperor_heir_give_crown(
    state: GameState, action: EmperorHeirGiveCrownAction
) -> ActionOutput:
    player = active_player(state)
    target, error = _recipient(state, player, action.player)
    if error is not None:
        return error
    state.crowned = target.index
    return ActionOutput(
        log=f"{player.name} gives the Emperor's crown to {target.name}.",
        end_turn=True,
    )

"""Action availability for the current turn and followup.

available_actions() lists what the acting player may submit next;
allowed_actions() answers the same question for any given player.
"""

import logging

from citadels.schemas.game_engine import ActionTag, CallTurn, DraftTurn, GameState, RoleName

from .building import buildable_districts
from .districts import DISTRICT_ACTIONS
from .followups import followup_actions
from .roles import role_data
from .state import (
    acting_player_index,
    active_character,
    active_player,
    city_has,
    forced_to_gather,
    has_gathered_resources,
    player_by_id,
)

logger = logging.getLogger(__name__)

GATHER_ACTIONS = [ActionTag.GATHER_RESOURCE_GOLD, ActionTag.GATHER_RESOURCE_CARDS]


def _draft_actions(state: GameState, turn: DraftTurn) -> list[ActionTag]:
    if turn.draft.theater_step:
        return [ActionTag.THEATER, ActionTag.THEATER_PASS]
    if ActionTag.DRAFT_PICK in state.turn_actions:
        return [ActionTag.DRAFT_DISCARD]
    return [ActionTag.DRAFT_PICK]


def _call_actions(state: GameState, turn: CallTurn) -> list[ActionTag]:
    if turn.end_of_round:
        return [ActionTag.EMPEROR_HEIR_GIVE_CROWN]
    if forced_to_gather(state):
        return list(GATHER_ACTIONS)

    character = active_character(state)
    player = active_player(state)
    gathered = has_gathered_resources(state)
    actions: list[ActionTag] = [] if gathered else list(GATHER_ACTIONS)

    for count, tag in role_data(character.role).actions:
        if state.turn_actions.count(tag) < count:
            actions.append(tag)

    for data in DISTRICT_ACTIONS:
        if city_has(player, data.name) and data.action not in state.turn_actions:
            actions.append(data.action)

    if gathered:
        if character.role != RoleName.NAVIGATOR and buildable_districts(state):
            actions.append(ActionTag.BUILD)
        # Gathering is the only mandatory step of a turn
        actions.append(ActionTag.END_TURN)
    return actions


def available_actions(state: GameState) -> list[ActionTag]:
    """Actions the acting player may submit next.

    A pending followup overrides everything else. The game over state has no
    actions at all.
    """
    if state.followup is not None:
        return followup_actions(state.followup)
    turn = state.active_turn
    if isinstance(turn, DraftTurn):
        return _draft_actions(state, turn)
    if isinstance(turn, CallTurn):
        return _call_actions(state, turn)
    return []


def allowed_actions(state: GameState, player_id: str) -> list[ActionTag]:
    """Actions ``player_id`` may submit now; empty when it isn't their move."""
    player = player_by_id(state, player_id)
    if player is None or acting_player_index(state) != player.index:
        return []
    return available_actions(state)

"""Handlers that act on cities: rank 8 abilities, beautifying and district actions."""

import logging

from citadels.schemas.game_engine import ActionTag, DistrictName, GameState, Player

from .. import museum
from ..actions import (
    ArmoryAction,
    BeautifyAction,
    CityDistrictTarget,
    DiplomatTradeAction,
    LaboratoryAction,
    MarshalSeizeAction,
    MuseumAction,
    SmithyAction,
    WarlordDestroyAction,
)
from ..building import destroy_district, discard_district, find_city_district, place_district
from ..deck import discard_to_bottom, draw_many
from ..districts import district_data
from ..state import (
    active_player,
    city_has,
    effective_cost,
    has_bishop_protection,
    has_completed_city,
)
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _display(district: DistrictName) -> str:
    return district_data(district).display_name


def _locate(
    state: GameState, target: CityDistrictTarget
) -> tuple[Player | None, int | None, ActionOutput | None]:
    if target.player >= len(state.players):
        return None, None, ActionOutput.failure(ErrorCode.NOT_FOUND, "No such player")
    owner = state.players[target.player]
    position = find_city_district(owner, target)
    if position is None:
        return owner, None, ActionOutput.failure(
            ErrorCode.NOT_FOUND,
            f"{owner.name} has no {_display(target.district)}",
        )
    return owner, position, None


def _attack_error(
    state: GameState, owner: Player, district: DistrictName, bishop: bool
) -> ActionOutput | None:
    """Shared restrictions on districts taken from another city."""
    if district == DistrictName.KEEP:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "The Keep cannot be targeted.")
    if bishop and has_bishop_protection(state, owner.index):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"{owner.name}'s city is protected by the Bishop."
        )
    if has_completed_city(state, owner):
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot target a completed city.")
    return None


def _great_wall_surcharge(owner: Player, district: DistrictName) -> int:
    if district == DistrictName.GREAT_WALL:
        return 0
    return 1 if city_has(owner, DistrictName.GREAT_WALL) else 0


# Rank 8


@handler(ActionTag.WARLORD_DESTROY)
def handle_warlord_destroy(state: GameState, action: WarlordDestroyAction) -> ActionOutput:
    player = active_player(state)
    owner, position, error = _locate(state, action.district)
    if error is not None:
        return error
    target = owner.city[position]
    error = _attack_error(state, owner, target.name, bishop=True)
    if error is not None:
        return error

    cost = effective_cost(target) - 1 + _great_wall_surcharge(owner, target.name)
    if player.gold < cost:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"Not enough gold: {cost} needed")

    player.gold -= cost
    destroy_district(state, owner, position)
    logger.debug("Destroyed %s of player %d", target.name.value, owner.index)
    return ActionOutput(
        log=f"{player.name} destroys {owner.name}'s {_display(target.name)} for {cost} gold."
    )


@handler(ActionTag.MARSHAL_SEIZE)
def handle_marshal_seize(state: GameState, action: MarshalSeizeAction) -> ActionOutput:
    player = active_player(state)
    owner, position, error = _locate(state, action.district)
    if error is not None:
        return error
    if owner.index == player.index:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot seize from your own city.")
    target = owner.city[position]
    error = _attack_error(state, owner, target.name, bishop=True)
    if error is not None:
        return error
    if effective_cost(target) > 3:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "Only districts costing 3 or less can be seized."
        )
    if city_has(player, target.name):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"You already have a {_display(target.name)}."
        )

    cost = effective_cost(target) + _great_wall_surcharge(owner, target.name)
    if player.gold < cost:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"Not enough gold: {cost} needed")

    player.gold -= cost
    owner.gold += cost
    seized = owner.city.pop(position)
    completed = place_district(state, player.index, seized)
    log = f"{player.name} seizes {owner.name}'s {_display(seized.name)} for {cost} gold."
    return ActionOutput(log=f"{log} {completed}" if completed else log)


@handler(ActionTag.DIPLOMAT_TRADE)
def handle_diplomat_trade(state: GameState, action: DiplomatTradeAction) -> ActionOutput:
    player = active_player(state)
    if action.district.player != player.index:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "You must give a district from your city."
        )
    if action.theirs.player == player.index:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot trade with your own city.")

    _, mine_position, error = _locate(state, action.district)
    if error is not None:
        return error
    owner, theirs_position, error = _locate(state, action.theirs)
    if error is not None:
        return error
    mine = player.city[mine_position]
    theirs = owner.city[theirs_position]
    error = _attack_error(state, owner, theirs.name, bishop=True)
    if error is not None:
        return error
    if mine.name != theirs.name and (city_has(player, theirs.name) or city_has(owner, mine.name)):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "A city cannot hold two copies of a district."
        )

    cost = max(0, effective_cost(theirs) - effective_cost(mine))
    cost += _great_wall_surcharge(owner, theirs.name)
    if player.gold < cost:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"Not enough gold: {cost} needed")

    player.gold -= cost
    owner.gold += cost
    player.city[mine_position] = theirs
    owner.city[theirs_position] = mine
    return ActionOutput(
        log=f"{player.name} trades their {_display(mine.name)} for {owner.name}'s "
        f"{_display(theirs.name)}, paying {cost} gold."
    )


# Artist


@handler(ActionTag.BEAUTIFY)
def handle_beautify(state: GameState, action: BeautifyAction) -> ActionOutput:
    player = active_player(state)
    if action.district.player != player.index:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "You can only beautify your own city."
        )
    position = next(
        (
            i
            for i, d in enumerate(player.city)
            if d.name == action.district.district and not d.beautified
        ),
        None,
    )
    if position is None:
        if city_has(player, action.district.district):
            return ActionOutput.failure(
                ErrorCode.ILLEGAL_TARGET, "That district is already beautified."
            )
        return ActionOutput.failure(
            ErrorCode.NOT_FOUND, f"You have no {_display(action.district.district)}"
        )
    if player.gold < 1:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Not enough gold: 1 needed")

    player.gold -= 1
    player.city[position].beautified = True
    return ActionOutput(log=f"{player.name} beautifies their {_display(action.district.district)}.")


# District actions


@handler(ActionTag.SMITHY)
def handle_smithy(state: GameState, action: SmithyAction) -> ActionOutput:
    player = active_player(state)
    if player.gold < 2:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Not enough gold: 2 needed")
    player.gold -= 2
    drawn = draw_many(state.deck, state.prng, 3)
    player.hand.extend(drawn)
    return ActionOutput(
        log=f"{player.name} pays 2 gold at the Smithy and draws {len(drawn)} cards."
    )


@handler(ActionTag.LABORATORY)
def handle_laboratory(state: GameState, action: LaboratoryAction) -> ActionOutput:
    player = active_player(state)
    if action.district not in player.hand:
        return ActionOutput.failure(
            ErrorCode.NOT_FOUND, f"You don't hold a {_display(action.district)}"
        )
    player.hand.remove(action.district)
    discard_to_bottom(state.deck, action.district)
    player.gold += 2
    return ActionOutput(log=f"{player.name} discards a card at the Laboratory for 2 gold.")


@handler(ActionTag.MUSEUM)
def handle_museum(state: GameState, action: MuseumAction) -> ActionOutput:
    player = active_player(state)
    if action.district not in player.hand:
        return ActionOutput.failure(
            ErrorCode.NOT_FOUND, f"You don't hold a {_display(action.district)}"
        )
    player.hand.remove(action.district)
    museum.tuck(state.museum, action.district, state.prng)
    return ActionOutput(log=f"{player.name} tucks a card under the Museum.")


@handler(ActionTag.ARMORY)
def handle_armory(state: GameState, action: ArmoryAction) -> ActionOutput:
    player = active_player(state)
    armory = next((i for i, d in enumerate(player.city) if d.name == DistrictName.ARMORY), None)
    if armory is None:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "You don't have an Armory")
    if action.district.district == DistrictName.ARMORY and action.district.player == player.index:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "The Armory cannot destroy itself.")
    owner, position, error = _locate(state, action.district)
    if error is not None:
        return error
    error = _attack_error(state, owner, owner.city[position].name, bishop=False)
    if error is not None:
        return error

    player.city.pop(armory)
    discard_district(state, DistrictName.ARMORY)
    position = find_city_district(owner, action.district)
    destroyed = destroy_district(state, owner, position)
    return ActionOutput(
        log=f"{player.name} destroys their Armory and {owner.name}'s {_display(destroyed.name)}."
    )

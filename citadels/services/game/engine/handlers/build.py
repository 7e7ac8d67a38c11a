"""Build handlers: the regular build action and the Wizard's hand raid.

Payment goes through one of the alternative methods (Framework, Necropolis,
Thieves' Den, Cardinal exchange) or plain gold. A character holding a
Warrant pauses its first build so the Magistrate can answer.
"""

import logging

from citadels.schemas.game_engine import (
    ActionTag,
    DistrictName,
    GameState,
    MarkerType,
    Player,
    RoleName,
    WarrantFollowup,
    WizardPickFollowup,
)

from ..actions import (
    BuildAction,
    CardinalBuild,
    CityDistrictTarget,
    FrameworkBuild,
    NecropolisBuild,
    RegularBuild,
    ThievesDenBuild,
    WizardBuild,
    WizardFrameworkBuild,
    WizardKeep,
    WizardNecropolisBuild,
    WizardPeekAction,
    WizardPickAction,
    WizardThievesDenBuild,
)
from ..building import (
    build_cost,
    collect_tax,
    complete_build,
    destroy_district,
    find_city_district,
    is_free_build,
    placement_error,
)
from ..deck import discard_to_bottom
from ..districts import district_data
from ..notifications import Notification
from ..state import (
    active_character,
    active_player,
    active_role,
    corrupted,
    find_marker,
    has_gathered_resources,
    player_of_role,
)
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _holds(hand: list[DistrictName], cards: list[DistrictName], keep: DistrictName | None) -> bool:
    """Whether ``hand`` contains every card of ``cards`` besides ``keep``."""
    remaining = list(hand)
    if keep is not None:
        if keep not in remaining:
            return False
        remaining.remove(keep)
    for card in cards:
        if card not in remaining:
            return False
        remaining.remove(card)
    return True


def _display(district: DistrictName) -> str:
    return district_data(district).display_name


def _pay_gold(player: Player, cost: int) -> ActionOutput | None:
    if player.gold < cost:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"Not enough gold: {cost} needed")
    player.gold -= cost
    return None


def _pay_framework(state: GameState, player: Player, district: DistrictName) -> ActionOutput | None:
    if district == DistrictName.FRAMEWORK:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "The Framework cannot pay for itself."
        )
    position = next(
        (i for i, d in enumerate(player.city) if d.name == DistrictName.FRAMEWORK), None
    )
    if position is None:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "You don't have a Framework")
    destroy_district(state, player, position)
    return None


def _pay_necropolis(
    state: GameState, player: Player, sacrifice: CityDistrictTarget
) -> ActionOutput | None:
    if sacrifice.player != player.index:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "The Necropolis needs a district from your own city."
        )
    position = find_city_district(player, sacrifice)
    if position is None:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "That district is not in your city")
    destroy_district(state, player, position)
    return None


def _pay_thieves_den(
    state: GameState,
    player: Player,
    cost: int,
    discard: list[DistrictName],
    keep: DistrictName | None,
) -> tuple[int, ActionOutput | None]:
    if not _holds(player.hand, discard, keep):
        return 0, ActionOutput.failure(ErrorCode.NOT_FOUND, "You don't hold those cards")
    if len(discard) > cost:
        return 0, ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"Discard at most {cost} cards for the Thieves' Den."
        )
    gold = cost - len(discard)
    error = _pay_gold(player, gold)
    if error is not None:
        return 0, error
    for card in discard:
        player.hand.remove(card)
        discard_to_bottom(state.deck, card)
    return gold, None


def _pay_cardinal(
    state: GameState, player: Player, cost: int, method: CardinalBuild
) -> ActionOutput | None:
    if active_role(state) != RoleName.CARDINAL:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "Only the Cardinal can exchange cards."
        )
    if method.player >= len(state.players):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "No such player")
    if method.player == player.index:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "Cannot exchange cards with yourself."
        )
    if not _holds(player.hand, method.discard, method.district):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "You don't hold those cards")

    shortfall = max(0, cost - player.gold)
    if len(method.discard) != shortfall:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"You must exchange exactly {shortfall} cards."
        )
    target = state.players[method.player]
    if target.gold < shortfall:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"{target.name} doesn't have {shortfall} gold."
        )

    for card in method.discard:
        player.hand.remove(card)
        target.hand.append(card)
    target.gold -= shortfall
    player.gold += shortfall
    player.gold -= cost
    return None


def _finish_build(
    state: GameState,
    player: Player,
    district: DistrictName,
    spent: int,
    counts_toward_limit: bool,
) -> ActionOutput:
    if counts_toward_limit:
        state.remaining_builds -= 1
    first_build = state.turn_builds == 0
    state.turn_builds += 1
    tax = collect_tax(state, player)

    warrant = find_marker(active_character(state), MarkerType.WARRANT)
    if warrant is not None and first_build:
        magistrate = player_of_role(state, RoleName.MAGISTRATE)
        if magistrate is None:
            raise corrupted("Warrant marker without a Magistrate player")
        log = f"{player.name} wants to build a {_display(district)}."
        logger.debug("Build of %s held by a warrant", district.value)
        return ActionOutput(
            log=f"{log} {tax}" if tax else log,
            followup=WarrantFollowup(
                signed=warrant.signed,
                magistrate=magistrate,
                gold=spent,
                district=district,
            ),
        )

    lines = [f"{player.name} builds a {_display(district)}."]
    if tax:
        lines.append(tax)
    completed = complete_build(state, player.index, spent, district)
    if completed:
        lines.append(completed)
    return ActionOutput(log=" ".join(lines))


@handler(ActionTag.BUILD)
def handle_build(state: GameState, action: BuildAction) -> ActionOutput:
    player = active_player(state)
    if not has_gathered_resources(state):
        return ActionOutput.failure(ErrorCode.ILLEGAL_STATE, "Gather resources before building.")

    method = action.build
    if isinstance(method, NecropolisBuild):
        district = DistrictName.NECROPOLIS
    elif isinstance(method, ThievesDenBuild):
        district = DistrictName.THIEVES_DEN
    else:
        district = method.district

    if district not in player.hand:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, f"You don't hold a {_display(district)}")
    reason = placement_error(state, player, district)
    if reason is not None:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, reason)

    cost = build_cost(player, district)
    spent = 0
    if isinstance(method, RegularBuild):
        error = _pay_gold(player, cost)
        spent = cost
    elif isinstance(method, FrameworkBuild):
        error = _pay_framework(state, player, district)
    elif isinstance(method, NecropolisBuild):
        error = _pay_necropolis(state, player, method.sacrifice)
    elif isinstance(method, ThievesDenBuild):
        spent, error = _pay_thieves_den(state, player, cost, method.discard, district)
    else:
        error = _pay_cardinal(state, player, cost, method)
        spent = cost
    if error is not None:
        return error

    player.hand.remove(district)
    return _finish_build(
        state, player, district, spent, counts_toward_limit=not is_free_build(state, district)
    )


# Wizard


@handler(ActionTag.WIZARD_PEEK)
def handle_wizard_peek(state: GameState, action: WizardPeekAction) -> ActionOutput:
    player = active_player(state)
    if action.player >= len(state.players):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "No such player")
    if action.player == player.index:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot look at your own hand.")
    target = state.players[action.player]
    if not target.hand:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, f"{target.name} has no cards.")

    cards = ", ".join(_display(card) for card in target.hand)
    return ActionOutput(
        log=f"{player.name} looks at {target.name}'s hand.",
        followup=WizardPickFollowup(player=target.index),
        notifications=[
            Notification(message=f"{target.name}'s hand: {cards}.", player_index=player.index)
        ],
    )


@handler(ActionTag.WIZARD_PICK)
def handle_wizard_pick(state: GameState, action: WizardPickAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, WizardPickFollowup):
        raise corrupted("Wizard pick without a peeked hand")

    player = active_player(state)
    target = state.players[followup.player]
    method = action.pick

    if isinstance(method, WizardNecropolisBuild):
        district = DistrictName.NECROPOLIS
    elif isinstance(method, WizardThievesDenBuild):
        district = DistrictName.THIEVES_DEN
    else:
        district = method.district
    if district not in target.hand:
        return ActionOutput.failure(
            ErrorCode.NOT_FOUND, f"{target.name} doesn't hold a {_display(district)}"
        )

    if isinstance(method, WizardKeep):
        target.hand.remove(district)
        player.hand.append(district)
        return ActionOutput(log=f"{player.name} takes a card from {target.name}.")

    reason = placement_error(state, player, district, ignore_limit=True)
    if reason is not None:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, reason)

    cost = build_cost(player, district)
    spent = 0
    if isinstance(method, WizardBuild):
        error = _pay_gold(player, cost)
        spent = cost
    elif isinstance(method, WizardFrameworkBuild):
        error = _pay_framework(state, player, district)
    elif isinstance(method, WizardNecropolisBuild):
        error = _pay_necropolis(state, player, method.sacrifice)
    else:
        spent, error = _pay_thieves_den(state, player, cost, method.discard, None)
    if error is not None:
        return error

    target.hand.remove(district)
    return _finish_build(state, player, district, spent, counts_toward_limit=False)

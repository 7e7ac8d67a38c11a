"""Resource handlers: gathering, role income and ending the turn."""

import logging

from citadels.schemas.game_engine import (
    ActionTag,
    CardSuit,
    DistrictName,
    GameState,
    GatherCardsPickFollowup,
    Player,
    Rank,
    Resource,
)

from .. import rng
from ..actions import (
    ArchitectGainCardsAction,
    CardsFromNobilityAction,
    CardsFromReligionAction,
    CollectTaxesAction,
    EndTurnAction,
    GatherCardsPickAction,
    GatherResourceCardsAction,
    GatherResourceGoldAction,
    GoldFromMilitaryAction,
    GoldFromNobilityAction,
    GoldFromReligionAction,
    GoldFromTradeAction,
    MerchantGainOneGoldAction,
    NavigatorGainAction,
    QueenGainGoldAction,
    ResourcesFromReligionAction,
)
from ..deck import discard_to_bottom, draw_many
from ..districts import district_data
from ..followups import after_gather_resources
from ..notifications import Notification
from ..roles import rank_of
from ..state import active_player, city_has, corrupted, count_suit_for_resource_gain
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _draw_into_hand(state: GameState, player: Player, count: int) -> list[DistrictName]:
    drawn = draw_many(state.deck, state.prng, count)
    player.hand.extend(drawn)
    return drawn


def _card_list(cards: list[DistrictName]) -> str:
    return ", ".join(district_data(card).display_name for card in cards)


# Gathering


@handler(ActionTag.GATHER_RESOURCE_GOLD)
def handle_gather_gold(state: GameState, action: GatherResourceGoldAction) -> ActionOutput:
    player = active_player(state)
    if city_has(player, DistrictName.GOLD_MINE):
        player.gold += 3
        log = f"{player.name} gathers 3 gold (1 extra from their Gold Mine)."
    else:
        player.gold += 2
        log = f"{player.name} gathers 2 gold."
    return ActionOutput(log=log, followup=after_gather_resources(state))


@handler(ActionTag.GATHER_RESOURCE_CARDS)
def handle_gather_cards(state: GameState, action: GatherResourceCardsAction) -> ActionOutput:
    player = active_player(state)
    count = 3 if city_has(player, DistrictName.OBSERVATORY) else 2
    drawn = draw_many(state.deck, state.prng, count)

    if city_has(player, DistrictName.LIBRARY) or not drawn:
        player.hand.extend(drawn)
        return ActionOutput(
            log=f"{player.name} gathers {len(drawn)} cards.",
            followup=after_gather_resources(state),
            notifications=[
                Notification(message=f"You drew: {_card_list(drawn)}.", player_index=player.index)
            ]
            if drawn
            else [],
        )

    return ActionOutput(
        log=f"{player.name} reveals {len(drawn)} cards from the deck.",
        followup=GatherCardsPickFollowup(revealed=drawn),
        notifications=[
            Notification(
                message=f"Choose 1 card to keep: {_card_list(drawn)}.",
                player_index=player.index,
            )
        ],
    )


@handler(ActionTag.GATHER_CARDS_PICK)
def handle_gather_cards_pick(state: GameState, action: GatherCardsPickAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, GatherCardsPickFollowup):
        raise corrupted("Card pick without revealed cards")
    if action.district not in followup.revealed:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "That card was not revealed")

    player = active_player(state)
    rest = list(followup.revealed)
    rest.remove(action.district)
    rng.shuffle(state.prng, rest)
    for card in rest:
        discard_to_bottom(state.deck, card)
    player.hand.append(action.district)

    return ActionOutput(
        log=f"{player.name} keeps 1 card.",
        followup=after_gather_resources(state),
    )


@handler(ActionTag.END_TURN)
def handle_end_turn(state: GameState, action: EndTurnAction) -> ActionOutput:
    player = active_player(state)
    return ActionOutput(log=f"{player.name} ends their turn.", end_turn=True)


# Suit income


def _gold_from_suit(state: GameState, suit: CardSuit) -> ActionOutput:
    player = active_player(state)
    amount = count_suit_for_resource_gain(player, suit)
    player.gold += amount
    return ActionOutput(log=f"{player.name} gains {amount} gold from their {suit.value} districts.")


def _cards_from_suit(state: GameState, suit: CardSuit) -> ActionOutput:
    player = active_player(state)
    drawn = _draw_into_hand(state, player, count_suit_for_resource_gain(player, suit))
    return ActionOutput(
        log=f"{player.name} gains {len(drawn)} cards from their {suit.value} districts."
    )


@handler(ActionTag.GOLD_FROM_NOBILITY)
def handle_gold_from_nobility(state: GameState, action: GoldFromNobilityAction) -> ActionOutput:
    return _gold_from_suit(state, CardSuit.NOBLE)


@handler(ActionTag.GOLD_FROM_RELIGION)
def handle_gold_from_religion(state: GameState, action: GoldFromReligionAction) -> ActionOutput:
    return _gold_from_suit(state, CardSuit.RELIGIOUS)


@handler(ActionTag.GOLD_FROM_TRADE)
def handle_gold_from_trade(state: GameState, action: GoldFromTradeAction) -> ActionOutput:
    return _gold_from_suit(state, CardSuit.TRADE)


@handler(ActionTag.GOLD_FROM_MILITARY)
def handle_gold_from_military(state: GameState, action: GoldFromMilitaryAction) -> ActionOutput:
    return _gold_from_suit(state, CardSuit.MILITARY)


@handler(ActionTag.CARDS_FROM_NOBILITY)
def handle_cards_from_nobility(state: GameState, action: CardsFromNobilityAction) -> ActionOutput:
    return _cards_from_suit(state, CardSuit.NOBLE)


@handler(ActionTag.CARDS_FROM_RELIGION)
def handle_cards_from_religion(state: GameState, action: CardsFromReligionAction) -> ActionOutput:
    return _cards_from_suit(state, CardSuit.RELIGIOUS)


@handler(ActionTag.RESOURCES_FROM_RELIGION)
def handle_resources_from_religion(
    state: GameState, action: ResourcesFromReligionAction
) -> ActionOutput:
    player = active_player(state)
    count = count_suit_for_resource_gain(player, CardSuit.RELIGIOUS)
    if action.gold + action.cards != count:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET,
            f"Gold and cards must add up to {count}",
        )
    player.gold += action.gold
    drawn = _draw_into_hand(state, player, action.cards)
    return ActionOutput(
        log=f"{player.name} gains {action.gold} gold and {len(drawn)} cards "
        "from their religious districts."
    )


# Role income


@handler(ActionTag.MERCHANT_GAIN_ONE_GOLD)
def handle_merchant_gain(state: GameState, action: MerchantGainOneGoldAction) -> ActionOutput:
    player = active_player(state)
    player.gold += 1
    return ActionOutput(log=f"{player.name} gains 1 extra gold.")


@handler(ActionTag.ARCHITECT_GAIN_CARDS)
def handle_architect_gain(state: GameState, action: ArchitectGainCardsAction) -> ActionOutput:
    player = active_player(state)
    drawn = _draw_into_hand(state, player, 2)
    return ActionOutput(log=f"{player.name} gains {len(drawn)} extra cards.")


@handler(ActionTag.NAVIGATOR_GAIN)
def handle_navigator_gain(state: GameState, action: NavigatorGainAction) -> ActionOutput:
    player = active_player(state)
    if action.resource == Resource.GOLD:
        player.gold += 4
        return ActionOutput(log=f"{player.name} gains 4 extra gold.")
    drawn = _draw_into_hand(state, player, 4)
    return ActionOutput(log=f"{player.name} gains {len(drawn)} extra cards.")


@handler(ActionTag.COLLECT_TAXES)
def handle_collect_taxes(state: GameState, action: CollectTaxesAction) -> ActionOutput:
    player = active_player(state)
    taxes = state.tax_collector
    player.gold += taxes
    state.tax_collector = 0
    return ActionOutput(log=f"{player.name} collects {taxes} gold in taxes.")


@handler(ActionTag.QUEEN_GAIN_GOLD)
def handle_queen_gain(state: GameState, action: QueenGainGoldAction) -> ActionOutput:
    player = active_player(state)
    count = len(state.players)
    neighbours = {(player.index - 1) % count, (player.index + 1) % count}
    next_to_rank_four = any(
        c.player_index in neighbours
        for c in state.characters
        if rank_of(c.role) == Rank.FOUR and c.player_index is not None
    )
    if not next_to_rank_four:
        return ActionOutput(log=f"{player.name} is not seated next to the rank 4 character.")
    player.gold += 3
    return ActionOutput(log=f"{player.name} gains 3 gold for sitting next to the rank 4 character.")

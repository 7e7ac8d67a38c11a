"""Handlers that move cards between hands, the deck and other players."""

import logging
from collections import Counter

from citadels.schemas.game_engine import (
    ActionTag,
    DistrictName,
    GameState,
    ScholarPickFollowup,
    SeerDistributeFollowup,
    SpyAcknowledgeFollowup,
)

from .. import rng
from ..actions import (
    MagicAction,
    MagicTargetPlayer,
    ScholarPickAction,
    ScholarRevealAction,
    SeerDistributeAction,
    SeerTakeAction,
    SpyAcknowledgeAction,
    SpyAction,
    TakeFromRichAction,
)
from ..deck import discard_to_bottom, draw_many, shuffle_deck
from ..districts import district_data
from ..notifications import Notification
from ..state import active_player, corrupted, count_suit_in_hand
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _card_list(cards: list[DistrictName]) -> str:
    return ", ".join(district_data(card).display_name for card in cards) or "nothing"


def _holds_all(hand: list[DistrictName], cards: list[DistrictName]) -> bool:
    held = Counter(hand)
    return all(held[card] >= count for card, count in Counter(cards).items())


def _other_player_error(state: GameState, index: int) -> ActionOutput | None:
    if index >= len(state.players):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "No such player")
    if index == active_player(state).index:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "You must target another player.")
    return None


# Spy


@handler(ActionTag.SPY)
def handle_spy(state: GameState, action: SpyAction) -> ActionOutput:
    error = _other_player_error(state, action.player)
    if error is not None:
        return error

    player = active_player(state)
    target = state.players[action.player]
    matches = count_suit_in_hand(target, action.suit)
    taken = min(target.gold, matches)
    target.gold -= taken
    player.gold += taken
    drawn = draw_many(state.deck, state.prng, matches)
    player.hand.extend(drawn)

    return ActionOutput(
        log=f"{player.name} spies on {target.name} for {action.suit.value} districts, "
        f"taking {taken} gold and {len(drawn)} cards.",
        followup=SpyAcknowledgeFollowup(player=target.index, revealed=list(target.hand)),
        notifications=[
            Notification(
                message=f"{target.name}'s hand: {_card_list(target.hand)}.",
                player_index=player.index,
            )
        ],
    )


@handler(ActionTag.SPY_ACKNOWLEDGE)
def handle_spy_acknowledge(state: GameState, action: SpyAcknowledgeAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, SpyAcknowledgeFollowup):
        raise corrupted("Spy acknowledgement without a revealed hand")
    player = active_player(state)
    return ActionOutput(
        log=f"{player.name} is done looking at {state.players[followup.player].name}'s hand."
    )


# Magician


@handler(ActionTag.MAGIC)
def handle_magic(state: GameState, action: MagicAction) -> ActionOutput:
    player = active_player(state)
    magic = action.magic

    if isinstance(magic, MagicTargetPlayer):
        error = _other_player_error(state, magic.player)
        if error is not None:
            return error
        target = state.players[magic.player]
        player.hand, target.hand = target.hand, player.hand
        return ActionOutput(log=f"{player.name} exchanges hands with {target.name}.")

    if not _holds_all(player.hand, magic.districts):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "You don't hold those cards")
    for card in magic.districts:
        player.hand.remove(card)
        discard_to_bottom(state.deck, card)
    drawn = draw_many(state.deck, state.prng, len(magic.districts))
    player.hand.extend(drawn)
    return ActionOutput(
        log=f"{player.name} discards {len(magic.districts)} cards and draws {len(drawn)}."
    )


# Seer


@handler(ActionTag.SEER_TAKE)
def handle_seer_take(state: GameState, action: SeerTakeAction) -> ActionOutput:
    player = active_player(state)
    count = len(state.players)
    taken_from: list[int] = []
    for offset in range(1, count):
        other = state.players[(player.index + offset) % count]
        if not other.hand:
            continue
        card = other.hand.pop(rng.randrange(state.prng, len(other.hand)))
        player.hand.append(card)
        taken_from.append(other.index)

    log = f"{player.name} takes a random card from {len(taken_from)} players."
    if not taken_from:
        return ActionOutput(log=log)
    return ActionOutput(log=log, followup=SeerDistributeFollowup(players=taken_from))


@handler(ActionTag.SEER_DISTRIBUTE)
def handle_seer_distribute(state: GameState, action: SeerDistributeAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, SeerDistributeFollowup):
        raise corrupted("Seer distribution without taken cards")

    recipients = [gift.player for gift in action.seer]
    if sorted(recipients) != sorted(followup.players):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET,
            "Give exactly one card to each player you took a card from.",
        )
    player = active_player(state)
    cards = [gift.district for gift in action.seer]
    if not _holds_all(player.hand, cards):
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "You don't hold those cards")

    for gift in action.seer:
        player.hand.remove(gift.district)
        state.players[gift.player].hand.append(gift.district)
    return ActionOutput(log=f"{player.name} gives a card back to {len(action.seer)} players.")


# Scholar


@handler(ActionTag.SCHOLAR_REVEAL)
def handle_scholar_reveal(state: GameState, action: ScholarRevealAction) -> ActionOutput:
    player = active_player(state)
    drawn = draw_many(state.deck, state.prng, 7)
    if not drawn:
        return ActionOutput(log=f"{player.name} finds no cards to study.")
    return ActionOutput(
        log=f"{player.name} draws {len(drawn)} cards to study.",
        followup=ScholarPickFollowup(revealed=drawn),
        notifications=[
            Notification(
                message=f"Choose 1 card to keep: {_card_list(drawn)}.",
                player_index=player.index,
            )
        ],
    )


@handler(ActionTag.SCHOLAR_PICK)
def handle_scholar_pick(state: GameState, action: ScholarPickAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, ScholarPickFollowup):
        raise corrupted("Scholar pick without revealed cards")
    if action.district not in followup.revealed:
        return ActionOutput.failure(ErrorCode.NOT_FOUND, "That card was not revealed")

    player = active_player(state)
    rest = list(followup.revealed)
    rest.remove(action.district)
    player.hand.append(action.district)
    for card in rest:
        discard_to_bottom(state.deck, card)
    shuffle_deck(state.deck, state.prng)
    return ActionOutput(log=f"{player.name} keeps 1 card and shuffles the rest into the deck.")


# Abbot


@handler(ActionTag.TAKE_FROM_RICH)
def handle_take_from_rich(state: GameState, action: TakeFromRichAction) -> ActionOutput:
    error = _other_player_error(state, action.player)
    if error is not None:
        return error

    player = active_player(state)
    target = state.players[action.player]
    richest = max(p.gold for p in state.players if p.index != player.index)
    if target.gold <= player.gold or target.gold != richest:
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET,
            "You can only take from one of the richest players, and they must be richer than you.",
        )
    target.gold -= 1
    player.gold += 1
    return ActionOutput(log=f"{player.name} takes 1 gold from {target.name}.")

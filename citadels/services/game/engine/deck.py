"""Draw pile and discard pile of district cards.

The top of the draw pile is the end of ``draw_pile``. Cards discarded to the
bottom of the deck wait in ``discard_pile`` until the draw pile runs out; they
are then shuffled and become the new draw pile.
"""

import logging

from citadels.schemas.game_engine import Deck, DistrictName, Prng

from . import rng

logger = logging.getLogger(__name__)


def create_deck(cards: list[DistrictName], prng: Prng) -> Deck:
    """Create a deck from ``cards`` and shuffle it."""
    deck = Deck(draw_pile=list(cards))
    rng.shuffle(prng, deck.draw_pile)
    return deck


def deck_size(deck: Deck) -> int:
    return len(deck.draw_pile) + len(deck.discard_pile)


def draw(deck: Deck, prng: Prng) -> DistrictName | None:
    """Draw the top card, recycling the discard pile when the draw pile is empty.

    Returns:
        The drawn district, or None if both piles are empty.
    """
    if not deck.draw_pile:
        if not deck.discard_pile:
            logger.debug("Deck exhausted, nothing to draw")
            return None
        logger.debug("Reshuffling %d discarded cards into the draw pile", len(deck.discard_pile))
        deck.draw_pile, deck.discard_pile = deck.discard_pile, []
        rng.shuffle(prng, deck.draw_pile)
    return deck.draw_pile.pop()


def draw_many(deck: Deck, prng: Prng, count: int) -> list[DistrictName]:
    """Draw up to ``count`` cards; fewer are returned when the deck runs dry."""
    drawn: list[DistrictName] = []
    for _ in range(count):
        card = draw(deck, prng)
        if card is None:
            break
        drawn.append(card)
    return drawn


def discard_to_bottom(deck: Deck, card: DistrictName) -> None:
    deck.discard_pile.append(card)


def shuffle_deck(deck: Deck, prng: Prng) -> None:
    """Merge the discard pile back in and shuffle the whole deck."""
    deck.draw_pile.extend(deck.discard_pile)
    deck.discard_pile = []
    rng.shuffle(prng, deck.draw_pile)

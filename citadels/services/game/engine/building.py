"""Shared rules for putting districts into cities and taking them out.

Used by the build handlers, the wizard's pick, the rank 8 abilities and the
legal action listing.
"""

import logging

from citadels.schemas.game_engine import (
    CardSuit,
    CityDistrict,
    DistrictName,
    GameState,
    Museum,
    Player,
    RoleName,
)

from . import rng
from .actions import CityDistrictTarget
from .deck import discard_to_bottom
from .districts import district_data
from .state import (
    active_player,
    active_role,
    character_for,
    city_has,
    has_completed_city,
)

logger = logging.getLogger(__name__)


def is_free_build(state: GameState, district: DistrictName) -> bool:
    """Builds that don't count toward the build limit."""
    if district == DistrictName.STABLES:
        return True
    return active_role(state) == RoleName.TRADER and district_data(district).suit == CardSuit.TRADE


def build_cost(player: Player, district: DistrictName) -> int:
    data = district_data(district)
    cost = data.cost
    factory = district != DistrictName.FACTORY and city_has(player, DistrictName.FACTORY)
    if data.is_unique and factory:
        cost -= 1
    return cost


def placement_error(
    state: GameState,
    player: Player,
    district: DistrictName,
    ignore_limit: bool = False,
) -> str | None:
    """Reason ``district`` can't go into ``player``'s city this turn, if any."""
    if district == DistrictName.SECRET_VAULT:
        return "The Secret Vault cannot be built."
    if (
        city_has(player, district)
        and not city_has(player, DistrictName.QUARRY)
        and active_role(state) != RoleName.WIZARD
    ):
        return "You already have that district."
    if district == DistrictName.MONUMENT and len(player.city) >= 5:
        return "You can only build the Monument if you have fewer than 5 districts."
    if not ignore_limit and not is_free_build(state, district) and state.remaining_builds <= 0:
        return "You have no builds left this turn."
    return None


def _cardinal_reach(state: GameState, player: Player) -> int:
    spare_cards = max(0, len(player.hand) - 1)
    richest_other = max((p.gold for p in state.players if p.index != player.index), default=0)
    return player.gold + min(spare_cards, richest_other)


def can_afford(state: GameState, player: Player, district: DistrictName) -> bool:
    """Whether any build method lets ``player`` pay for ``district`` from hand."""
    cost = build_cost(player, district)
    if player.gold >= cost:
        return True
    if city_has(player, DistrictName.FRAMEWORK) and district != DistrictName.FRAMEWORK:
        return True
    if district == DistrictName.NECROPOLIS and player.city:
        return True
    if district == DistrictName.THIEVES_DEN and player.gold + len(player.hand) - 1 >= cost:
        return True
    return active_role(state) == RoleName.CARDINAL and _cardinal_reach(state, player) >= cost


def buildable_districts(state: GameState) -> list[DistrictName]:
    """Distinct hand districts the active player could build right now."""
    player = active_player(state)
    return [
        card
        for card in dict.fromkeys(player.hand)
        if placement_error(state, player, card) is None and can_afford(state, player, card)
    ]


def collect_tax(state: GameState, player: Player) -> str | None:
    """Move 1 gold onto the Tax Collector after a build by any other role."""
    if active_role(state) == RoleName.TAX_COLLECTOR:
        return None
    if character_for(state, RoleName.TAX_COLLECTOR) is None or player.gold <= 0:
        return None
    player.gold -= 1
    state.tax_collector += 1
    return f"{player.name} pays 1 gold in taxes."


def place_district(state: GameState, player_index: int, district: CityDistrict) -> str | None:
    """Put ``district`` into a city and record a completed city.

    Returns:
        A log line when the city was completed by this placement.
    """
    player = state.players[player_index]
    player.city.append(district)
    if state.first_to_complete is None and has_completed_city(state, player):
        state.first_to_complete = player_index
        logger.info("Player %s completed their city", player.name)
        return f"{player.name} completes their city!"
    return None


def complete_build(
    state: GameState, player_index: int, spent: int, district: DistrictName
) -> str | None:
    """Finish building ``district``; the Alchemist keeps track of the gold spent."""
    if active_role(state) == RoleName.ALCHEMIST and player_index == active_player(state).index:
        state.alchemist += spent
    logger.debug("Player %d built %s for %d gold", player_index, district.value, spent)
    return place_district(state, player_index, CityDistrict(name=district))


def find_city_district(player: Player, target: CityDistrictTarget) -> int | None:
    """Position of the targeted district, preferring an exact beautified match."""
    exact = next(
        (
            i
            for i, d in enumerate(player.city)
            if d.name == target.district and d.beautified == target.beautified
        ),
        None,
    )
    if exact is not None:
        return exact
    return next((i for i, d in enumerate(player.city) if d.name == target.district), None)


def discard_district(state: GameState, district: DistrictName) -> None:
    """Send a district leaving play to the bottom of the deck.

    A Museum takes every card tucked under it along, in random order.
    """
    if district != DistrictName.MUSEUM:
        discard_to_bottom(state.deck, district)
        return
    cards = [*state.museum.cards, DistrictName.MUSEUM]
    rng.shuffle(state.prng, cards)
    for card in cards:
        discard_to_bottom(state.deck, card)
    state.museum = Museum()


def destroy_district(state: GameState, player: Player, position: int) -> CityDistrict:
    district = player.city.pop(position)
    discard_district(state, district.name)
    return district

"""Static district catalog.

Normal districts come in several physical copies (``multiplicity``); unique
districts exist once and are selected per game according to the
``district_options`` of the game config.
"""

from dataclasses import dataclass

from citadels.schemas.game_engine import ActionTag, CardSet, CardSuit, DistrictName


@dataclass(frozen=True)
class DistrictData:
    name: DistrictName
    display_name: str
    suit: CardSuit
    cost: int
    set: CardSet = CardSet.BASE
    multiplicity: int = 1
    description: str | None = None
    # Once-per-turn action granted to the owner
    action: ActionTag | None = None

    @property
    def is_unique(self) -> bool:
        return self.suit == CardSuit.UNIQUE


def _normal(
    name: DistrictName, display_name: str, suit: CardSuit, cost: int, multiplicity: int
) -> DistrictData:
    return DistrictData(
        name=name,
        display_name=display_name,
        suit=suit,
        cost=cost,
        multiplicity=multiplicity,
    )


def _unique(
    name: DistrictName,
    display_name: str,
    card_set: CardSet,
    cost: int,
    description: str,
    action: ActionTag | None = None,
) -> DistrictData:
    return DistrictData(
        name=name,
        display_name=display_name,
        suit=CardSuit.UNIQUE,
        cost=cost,
        set=card_set,
        description=description,
        action=action,
    )


NORMAL_DISTRICTS: tuple[DistrictData, ...] = (
    _normal(DistrictName.TEMPLE, "Temple", CardSuit.RELIGIOUS, 1, 3),
    _normal(DistrictName.CHURCH, "Church", CardSuit.RELIGIOUS, 2, 3),
    _normal(DistrictName.MONASTERY, "Monastery", CardSuit.RELIGIOUS, 3, 3),
    _normal(DistrictName.CATHEDRAL, "Cathedral", CardSuit.RELIGIOUS, 5, 2),
    _normal(DistrictName.WATCHTOWER, "Watchtower", CardSuit.MILITARY, 1, 3),
    _normal(DistrictName.PRISON, "Prison", CardSuit.MILITARY, 2, 3),
    _normal(DistrictName.BARRACKS, "Barracks", CardSuit.MILITARY, 3, 3),
    _normal(DistrictName.FORTRESS, "Fortress", CardSuit.MILITARY, 5, 2),
    _normal(DistrictName.MANOR, "Manor", CardSuit.NOBLE, 3, 5),
    _normal(DistrictName.CASTLE, "Castle", CardSuit.NOBLE, 4, 4),
    _normal(DistrictName.PALACE, "Palace", CardSuit.NOBLE, 5, 3),
    _normal(DistrictName.TAVERN, "Tavern", CardSuit.TRADE, 1, 5),
    _normal(DistrictName.MARKET, "Market", CardSuit.TRADE, 2, 4),
    _normal(DistrictName.TRADING_POST, "Trading Post", CardSuit.TRADE, 2, 3),
    _normal(DistrictName.DOCKS, "Docks", CardSuit.TRADE, 3, 3),
    _normal(DistrictName.HARBOR, "Harbor", CardSuit.TRADE, 4, 3),
    _normal(DistrictName.TOWN_HALL, "Town Hall", CardSuit.TRADE, 5, 2),
)

UNIQUE_DISTRICTS: tuple[DistrictData, ...] = (
    _unique(
        DistrictName.SMITHY, "Smithy", CardSet.BASE, 5,
        "Once during your turn, you may pay 2 gold to draw 3 cards.",
        ActionTag.SMITHY,
    ),
    _unique(
        DistrictName.LABORATORY, "Laboratory", CardSet.BASE, 5,
        "Once during your turn, you may discard 1 card from your hand to gain 2 gold.",
        ActionTag.LABORATORY,
    ),
    _unique(
        DistrictName.SCHOOL_OF_MAGIC, "School of Magic", CardSet.BASE, 6,
        "For the purpose of income, the School of Magic is treated as the district type of your choice.",
    ),
    _unique(
        DistrictName.KEEP, "Keep", CardSet.BASE, 3,
        "The Keep cannot be destroyed by the Warlord.",
    ),
    _unique(
        DistrictName.DRAGON_GATE, "Dragon Gate", CardSet.BASE, 6,
        "At the end of the game score 2 extra points.",
    ),
    _unique(
        DistrictName.HAUNTED_QUARTER, "Haunted Quarter", CardSet.BASE, 2,
        "For the purpose of final scoring, the Haunted Quarter is treated as the district type of your choice.",
    ),
    _unique(
        DistrictName.GREAT_WALL, "Great Wall", CardSet.BASE, 6,
        "The cost to destroy any of your other districts is increased by 1.",
    ),
    _unique(
        DistrictName.OBSERVATORY, "Observatory", CardSet.BASE, 4,
        "If you choose to draw cards when gathering resources, you draw 3 cards instead of 2 and keep 1 of your choice.",
    ),
    _unique(
        DistrictName.LIBRARY, "Library", CardSet.BASE, 6,
        "If you choose to draw cards when gathering resources, you keep all of the cards you draw.",
    ),
    _unique(
        DistrictName.QUARRY, "Quarry", CardSet.DARK_CITY, 5,
        "You can build districts that are identical to districts in your city.",
    ),
    _unique(
        DistrictName.ARMORY, "Armory", CardSet.DARK_CITY, 3,
        "During your turn, destroy the Armory to destroy 1 district of your choice.",
        ActionTag.ARMORY,
    ),
    _unique(
        DistrictName.FACTORY, "Factory", CardSet.DARK_CITY, 5,
        "The cost to build other unique districts is reduced by 1 gold.",
    ),
    _unique(
        DistrictName.PARK, "Park", CardSet.DARK_CITY, 6,
        "If there are no cards in your hand at the end of your turn, gain 2 cards.",
    ),
    _unique(
        DistrictName.MUSEUM, "Museum", CardSet.DARK_CITY, 4,
        "Once during your turn, you may place a card from your hand face down under the Museum.",
        ActionTag.MUSEUM,
    ),
    _unique(
        DistrictName.POOR_HOUSE, "Poor House", CardSet.DARK_CITY, 4,
        "If you have no gold in your stash at the end of your turn, gain 1 gold.",
    ),
    _unique(
        DistrictName.MAP_ROOM, "Map Room", CardSet.DARK_CITY, 5,
        "At the end of the game, score 1 extra point for each card in your hand.",
    ),
    _unique(
        DistrictName.WISHING_WELL, "Wishing Well", CardSet.DARK_CITY, 5,
        "At the end of the game, score 1 extra point for each UNIQUE district in your city.",
    ),
    _unique(
        DistrictName.IMPERIAL_TREASURY, "Imperial Treasury", CardSet.DARK_CITY, 5,
        "At the end of the game, score 1 extra point for each gold in your stash.",
    ),
    _unique(
        DistrictName.FRAMEWORK, "Framework", CardSet.CITADELS_2016, 3,
        "You can build a district by destroying the Framework instead of paying that district's cost.",
    ),
    _unique(
        DistrictName.STATUE, "Statue", CardSet.CITADELS_2016, 3,
        "If you have the crown at the end of the game, score 5 extra points.",
    ),
    _unique(
        DistrictName.GOLD_MINE, "Gold Mine", CardSet.CITADELS_2016, 6,
        "If you choose to gain gold when gathering resources, gain 1 extra gold.",
    ),
    _unique(
        DistrictName.IVORY_TOWER, "Ivory Tower", CardSet.CITADELS_2016, 5,
        "If the Ivory Tower is the only UNIQUE district in your city at the end of the game, score 5 extra points.",
    ),
    _unique(
        DistrictName.NECROPOLIS, "Necropolis", CardSet.CITADELS_2016, 5,
        "You can build the Necropolis by destroying 1 district in your city instead of paying its cost.",
    ),
    _unique(
        DistrictName.THIEVES_DEN, "Thieves' Den", CardSet.CITADELS_2016, 6,
        "Pay some or all of the Thieves' Den cost with cards from your hand instead of gold at a rate of 1 card to 1 gold.",
    ),
    _unique(
        DistrictName.THEATER, "Theater", CardSet.CITADELS_2016, 6,
        "At the end of each selection phase, you may exchange your chosen character card with an opponent's character card.",
    ),
    _unique(
        DistrictName.STABLES, "Stables", CardSet.CITADELS_2016, 2,
        "Building the Stables does not count toward your building limit for the turn.",
    ),
    _unique(
        DistrictName.BASILICA, "Basilica", CardSet.CITADELS_2016, 4,
        "At the end of the game, score 1 extra point for each district in your city with an odd-numbered cost.",
    ),
    _unique(
        DistrictName.SECRET_VAULT, "Secret Vault", CardSet.CITADELS_2016, 1_000_000,
        "The Secret Vault cannot be built. At the end of the game, reveal it from your hand to score 3 extra points.",
    ),
    _unique(
        DistrictName.CAPITOL, "Capitol", CardSet.CITADELS_2016, 5,
        "If you have at least 3 districts of the same type at the end of the game, score 3 extra points.",
    ),
    _unique(
        DistrictName.MONUMENT, "Monument", CardSet.CITADELS_2016, 4,
        "You cannot build the Monument if you have 5 or more districts in your city. "
        "Treat the Monument as being 2 districts toward your completed city.",
    ),
)

DISTRICTS: dict[DistrictName, DistrictData] = {
    data.name: data for data in NORMAL_DISTRICTS + UNIQUE_DISTRICTS
}

# Districts whose once-per-turn action is offered to their owner
DISTRICT_ACTIONS: tuple[DistrictData, ...] = tuple(
    data for data in UNIQUE_DISTRICTS if data.action is not None
)


def district_data(name: DistrictName) -> DistrictData:
    return DISTRICTS[name]


def normal_deck() -> list[DistrictName]:
    """Every physical copy of the normal districts, in catalog order."""
    return [data.name for data in NORMAL_DISTRICTS for _ in range(data.multiplicity)]

"""Static role catalog: 27 roles, three variants for each of the nine ranks.

``actions`` are the abilities a player chooses to use during the role's turn,
each with the number of times it may be used per turn. ``on_call`` abilities
have no choice to make and are applied by the engine when the role is called.
"""

from dataclasses import dataclass

from citadels.schemas.game_engine import ActionTag, CardSet, CardSuit, Rank, RoleName


@dataclass(frozen=True)
class RoleData:
    name: RoleName
    display_name: str
    rank: Rank
    set: CardSet
    description: str
    suit: CardSuit | None = None
    actions: tuple[tuple[int, ActionTag], ...] = ()
    on_call: tuple[ActionTag, ...] = ()
    min_players: int = 0
    build_limit: int = 1


ROLES: tuple[RoleData, ...] = (
    # Rank 1
    RoleData(
        name=RoleName.ASSASSIN,
        display_name="Assassin",
        rank=Rank.ONE,
        set=CardSet.BASE,
        description="Call a character you wish to kill. The killed character skips their turn.",
        actions=((1, ActionTag.ASSASSINATE),),
    ),
    RoleData(
        name=RoleName.WITCH,
        display_name="Witch",
        rank=Rank.ONE,
        set=CardSet.DARK_CITY,
        description=(
            "Gather resources, call a character you wish to bewitch, then put your turn on hold. "
            "The bewitched character gathers resources, then you take over the rest of "
            "their turn."
        ),
    ),
    RoleData(
        name=RoleName.MAGISTRATE,
        display_name="Magistrate",
        rank=Rank.ONE,
        set=CardSet.CITADELS_2016,
        description=(
            "Assign warrants to character cards. Reveal the signed warrant to confiscate "
            "the first district that player builds."
        ),
        actions=((1, ActionTag.SEND_WARRANTS),),
    ),
    # Rank 2
    RoleData(
        name=RoleName.THIEF,
        display_name="Thief",
        rank=Rank.TWO,
        set=CardSet.BASE,
        description="Call a character you wish to rob. When the robbed character is revealed you take all their gold.",
        actions=((1, ActionTag.STEAL),),
    ),
    RoleData(
        name=RoleName.SPY,
        display_name="Spy",
        rank=Rank.TWO,
        set=CardSet.DARK_CITY,
        description=(
            "Name a district type and look at another player's hand. For each card of that type, "
            "take 1 of their gold and gain 1 card."
        ),
        actions=((1, ActionTag.SPY),),
    ),
    RoleData(
        name=RoleName.BLACKMAILER,
        display_name="Blackmailer",
        rank=Rank.TWO,
        set=CardSet.CITADELS_2016,
        description=(
            "Assign threats facedown to character cards. A threatened player can bribe you to remove "
            "their threat. If you reveal the flower, you take all their gold."
        ),
        actions=((1, ActionTag.BLACKMAIL),),
    ),
    # Rank 3
    RoleData(
        name=RoleName.MAGICIAN,
        display_name="Magician",
        rank=Rank.THREE,
        set=CardSet.BASE,
        description=(
            "Either exchange hands of cards with another player or discard any number of cards "
            "to gain an equal number of cards."
        ),
        actions=((1, ActionTag.MAGIC),),
    ),
    RoleData(
        name=RoleName.WIZARD,
        display_name="Wizard",
        rank=Rank.THREE,
        set=CardSet.DARK_CITY,
        description=(
            "Look at another player's hand and choose 1 card. Either pay to build it immediately "
            "or add it to your hand. You can build identical districts."
        ),
        actions=((1, ActionTag.WIZARD_PEEK),),
    ),
    RoleData(
        name=RoleName.SEER,
        display_name="Seer",
        rank=Rank.THREE,
        set=CardSet.CITADELS_2016,
        description=(
            "Randomly take 1 card from each player's hand. Then give each player you took a card "
            "from 1 card from your hand. You can build up to 2 districts."
        ),
        actions=((1, ActionTag.SEER_TAKE),),
        build_limit=2,
    ),
    # Rank 4
    RoleData(
        name=RoleName.KING,
        display_name="King",
        rank=Rank.FOUR,
        set=CardSet.BASE,
        suit=CardSuit.NOBLE,
        description="Take the crown. Gain 1 gold for each of your NOBLE districts.",
        on_call=(ActionTag.TAKE_CROWN, ActionTag.GOLD_FROM_NOBILITY),
    ),
    RoleData(
        name=RoleName.EMPEROR,
        display_name="Emperor",
        rank=Rank.FOUR,
        set=CardSet.DARK_CITY,
        suit=CardSuit.NOBLE,
        description=(
            "Give the crown to another player and take 1 of their gold or 1 of their cards. "
            "Gain 1 gold for each of your NOBLE districts."
        ),
        actions=((1, ActionTag.EMPEROR_GIVE_CROWN),),
        on_call=(ActionTag.GOLD_FROM_NOBILITY,),
        min_players=3,
    ),
    RoleData(
        name=RoleName.PATRICIAN,
        display_name="Patrician",
        rank=Rank.FOUR,
        set=CardSet.CITADELS_2016,
        suit=CardSuit.NOBLE,
        description="Take the crown. Gain 1 card for each of your NOBLE districts.",
        on_call=(ActionTag.TAKE_CROWN, ActionTag.CARDS_FROM_NOBILITY),
    ),
    # Rank 5
    RoleData(
        name=RoleName.BISHOP,
        display_name="Bishop",
        rank=Rank.FIVE,
        set=CardSet.BASE,
        suit=CardSuit.RELIGIOUS,
        description=(
            "The rank 8 character cannot use its ability on your districts. "
            "Gain 1 gold for each of your RELIGIOUS districts."
        ),
        on_call=(ActionTag.GOLD_FROM_RELIGION,),
    ),
    RoleData(
        name=RoleName.ABBOT,
        display_name="Abbot",
        rank=Rank.FIVE,
        set=CardSet.DARK_CITY,
        suit=CardSuit.RELIGIOUS,
        description=(
            "Take 1 gold from the richest player. "
            "Gain 1 gold or 1 card for each of your RELIGIOUS districts."
        ),
        actions=((1, ActionTag.RESOURCES_FROM_RELIGION), (1, ActionTag.TAKE_FROM_RICH)),
    ),
    RoleData(
        name=RoleName.CARDINAL,
        display_name="Cardinal",
        rank=Rank.FIVE,
        set=CardSet.CITADELS_2016,
        suit=CardSuit.RELIGIOUS,
        description=(
            "If you do not have enough gold to build, exchange your cards for another player's gold "
            "at 1 card to 1 gold. Gain 1 card for each of your RELIGIOUS districts."
        ),
        on_call=(ActionTag.CARDS_FROM_RELIGION,),
    ),
    # Rank 6
    RoleData(
        name=RoleName.MERCHANT,
        display_name="Merchant",
        rank=Rank.SIX,
        set=CardSet.BASE,
        suit=CardSuit.TRADE,
        description="Gain 1 extra gold. Gain 1 gold for each of your TRADE districts.",
        on_call=(ActionTag.GOLD_FROM_TRADE, ActionTag.MERCHANT_GAIN_ONE_GOLD),
    ),
    RoleData(
        name=RoleName.ALCHEMIST,
        display_name="Alchemist",
        rank=Rank.SIX,
        set=CardSet.DARK_CITY,
        description="At the end of your turn, you get back all the gold you paid to build districts this turn.",
    ),
    RoleData(
        name=RoleName.TRADER,
        display_name="Trader",
        rank=Rank.SIX,
        set=CardSet.CITADELS_2016,
        suit=CardSuit.TRADE,
        description="You can build any number of TRADE districts. Gain 1 gold for each of your TRADE districts.",
        on_call=(ActionTag.GOLD_FROM_TRADE,),
    ),
    # Rank 7
    RoleData(
        name=RoleName.ARCHITECT,
        display_name="Architect",
        rank=Rank.SEVEN,
        set=CardSet.BASE,
        description="Gain 2 extra cards. You can build up to 3 districts.",
        on_call=(ActionTag.ARCHITECT_GAIN_CARDS,),
        build_limit=3,
    ),
    RoleData(
        name=RoleName.NAVIGATOR,
        display_name="Navigator",
        rank=Rank.SEVEN,
        set=CardSet.DARK_CITY,
        description="Gain either 4 extra gold or 4 extra cards. You cannot build any districts.",
        actions=((1, ActionTag.NAVIGATOR_GAIN),),
        build_limit=0,
    ),
    RoleData(
        name=RoleName.SCHOLAR,
        display_name="Scholar",
        rank=Rank.SEVEN,
        set=CardSet.CITADELS_2016,
        description=(
            "Draw 7 cards, choose 1 to keep, then shuffle the rest back into the deck. "
            "You can build up to 2 districts."
        ),
        actions=((1, ActionTag.SCHOLAR_REVEAL),),
        build_limit=2,
    ),
    # Rank 8
    RoleData(
        name=RoleName.WARLORD,
        display_name="Warlord",
        rank=Rank.EIGHT,
        set=CardSet.BASE,
        suit=CardSuit.MILITARY,
        description=(
            "Destroy 1 district by paying 1 fewer gold than its cost. "
            "Gain 1 gold for each of your MILITARY districts."
        ),
        actions=((1, ActionTag.WARLORD_DESTROY),),
        on_call=(ActionTag.GOLD_FROM_MILITARY,),
    ),
    RoleData(
        name=RoleName.DIPLOMAT,
        display_name="Diplomat",
        rank=Rank.EIGHT,
        set=CardSet.DARK_CITY,
        suit=CardSuit.MILITARY,
        description=(
            "Exchange 1 of your districts for another player's district, giving them gold equal to "
            "the difference in their costs. Gain 1 gold for each of your MILITARY districts."
        ),
        actions=((1, ActionTag.DIPLOMAT_TRADE),),
        on_call=(ActionTag.GOLD_FROM_MILITARY,),
    ),
    RoleData(
        name=RoleName.MARSHAL,
        display_name="Marshal",
        rank=Rank.EIGHT,
        set=CardSet.CITADELS_2016,
        suit=CardSuit.MILITARY,
        description=(
            "Seize 1 district with a cost of 3 or less from another player's city, giving that player "
            "gold equal to its cost. Gain 1 gold for each of your MILITARY districts."
        ),
        actions=((1, ActionTag.MARSHAL_SEIZE),),
        on_call=(ActionTag.GOLD_FROM_MILITARY,),
    ),
    # Rank 9
    RoleData(
        name=RoleName.QUEEN,
        display_name="Queen",
        rank=Rank.NINE,
        set=CardSet.DARK_CITY,
        description="If you are sitting next to the rank 4 character, gain 3 gold.",
        on_call=(ActionTag.QUEEN_GAIN_GOLD,),
        min_players=5,
    ),
    RoleData(
        name=RoleName.ARTIST,
        display_name="Artist",
        rank=Rank.NINE,
        set=CardSet.CITADELS_2016,
        description=(
            "Beautify up to 2 of your districts by assigning each of them 1 of your gold. "
            "A district can be beautified only once."
        ),
        actions=((2, ActionTag.BEAUTIFY),),
        min_players=3,
    ),
    RoleData(
        name=RoleName.TAX_COLLECTOR,
        display_name="Tax Collector",
        rank=Rank.NINE,
        set=CardSet.CITADELS_2016,
        description=(
            "After each player builds, they place 1 of their gold on the Tax Collector's card. "
            "Take all gold from the card."
        ),
        actions=((1, ActionTag.COLLECT_TAXES),),
        min_players=3,
    ),
)

_ROLES_BY_NAME: dict[RoleName, RoleData] = {data.name: data for data in ROLES}

# Rank whose roles hold or grant the crown; never discarded face up
CROWN_RANK = Rank.FOUR


def role_data(name: RoleName) -> RoleData:
    return _ROLES_BY_NAME[name]


def rank_of(name: RoleName) -> Rank:
    return _ROLES_BY_NAME[name].rank


def sort_by_rank(roles: list[RoleName]) -> list[RoleName]:
    """Sort roles by rank, keeping catalog order within a rank."""
    order = {data.name: position for position, data in enumerate(ROLES)}
    return sorted(roles, key=lambda role: order[role])


def is_eligible(name: RoleName, num_players: int) -> bool:
    return num_players >= _ROLES_BY_NAME[name].min_players

from enum import Enum, IntEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


# Card suits
class CardSuit(str, Enum):
    RELIGIOUS = "religious"
    MILITARY = "military"
    NOBLE = "noble"
    TRADE = "trade"
    UNIQUE = "unique"


# Box the card was printed in
class CardSet(str, Enum):
    BASE = "base"
    DARK_CITY = "dark_city"
    CITADELS_2016 = "citadels_2016"


class Rank(IntEnum):
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9


class RoleName(str, Enum):
    ASSASSIN = "assassin"
    WITCH = "witch"
    MAGISTRATE = "magistrate"
    THIEF = "thief"
    SPY = "spy"
    BLACKMAILER = "blackmailer"
    MAGICIAN = "magician"
    WIZARD = "wizard"
    SEER = "seer"
    KING = "king"
    EMPEROR = "emperor"
    PATRICIAN = "patrician"
    BISHOP = "bishop"
    ABBOT = "abbot"
    CARDINAL = "cardinal"
    MERCHANT = "merchant"
    ALCHEMIST = "alchemist"
    TRADER = "trader"
    ARCHITECT = "architect"
    NAVIGATOR = "navigator"
    SCHOLAR = "scholar"
    WARLORD = "warlord"
    DIPLOMAT = "diplomat"
    MARSHAL = "marshal"
    QUEEN = "queen"
    ARTIST = "artist"
    TAX_COLLECTOR = "tax_collector"


class DistrictName(str, Enum):
    # Normal districts
    TEMPLE = "temple"
    CHURCH = "church"
    MONASTERY = "monastery"
    CATHEDRAL = "cathedral"
    WATCHTOWER = "watchtower"
    PRISON = "prison"
    BARRACKS = "barracks"
    FORTRESS = "fortress"
    MANOR = "manor"
    CASTLE = "castle"
    PALACE = "palace"
    TAVERN = "tavern"
    MARKET = "market"
    TRADING_POST = "trading_post"
    DOCKS = "docks"
    HARBOR = "harbor"
    TOWN_HALL = "town_hall"
    # Unique districts
    SMITHY = "smithy"
    LABORATORY = "laboratory"
    SCHOOL_OF_MAGIC = "school_of_magic"
    KEEP = "keep"
    DRAGON_GATE = "dragon_gate"
    HAUNTED_QUARTER = "haunted_quarter"
    GREAT_WALL = "great_wall"
    OBSERVATORY = "observatory"
    LIBRARY = "library"
    QUARRY = "quarry"
    ARMORY = "armory"
    FACTORY = "factory"
    PARK = "park"
    MUSEUM = "museum"
    POOR_HOUSE = "poor_house"
    MAP_ROOM = "map_room"
    WISHING_WELL = "wishing_well"
    IMPERIAL_TREASURY = "imperial_treasury"
    FRAMEWORK = "framework"
    STATUE = "statue"
    GOLD_MINE = "gold_mine"
    IVORY_TOWER = "ivory_tower"
    NECROPOLIS = "necropolis"
    THIEVES_DEN = "thieves_den"
    THEATER = "theater"
    STABLES = "stables"
    BASILICA = "basilica"
    SECRET_VAULT = "secret_vault"
    CAPITOL = "capitol"
    MONUMENT = "monument"


# How often a unique district is put into the deck
class ConfigOption(str, Enum):
    ALWAYS = "always"
    SOMETIMES = "sometimes"
    NEVER = "never"


class Resource(str, Enum):
    GOLD = "gold"
    CARDS = "cards"


class MarkerType(str, Enum):
    KILLED = "killed"
    BEWITCHED = "bewitched"
    ROBBED = "robbed"
    DISCARDED = "discarded"
    BLACKMAIL = "blackmail"
    WARRANT = "warrant"


# Player input kinds; every value has exactly one registered handler
class ActionTag(str, Enum):
    # Draft
    DRAFT_PICK = "draft_pick"
    DRAFT_DISCARD = "draft_discard"
    THEATER = "theater"
    THEATER_PASS = "theater_pass"
    # Core turn
    GATHER_RESOURCE_GOLD = "gather_resource_gold"
    GATHER_RESOURCE_CARDS = "gather_resource_cards"
    GATHER_CARDS_PICK = "gather_cards_pick"
    BUILD = "build"
    END_TURN = "end_turn"
    PASS = "pass"
    # Income
    GOLD_FROM_NOBILITY = "gold_from_nobility"
    GOLD_FROM_RELIGION = "gold_from_religion"
    GOLD_FROM_TRADE = "gold_from_trade"
    GOLD_FROM_MILITARY = "gold_from_military"
    CARDS_FROM_NOBILITY = "cards_from_nobility"
    CARDS_FROM_RELIGION = "cards_from_religion"
    RESOURCES_FROM_RELIGION = "resources_from_religion"
    MERCHANT_GAIN_ONE_GOLD = "merchant_gain_one_gold"
    ARCHITECT_GAIN_CARDS = "architect_gain_cards"
    NAVIGATOR_GAIN = "navigator_gain"
    COLLECT_TAXES = "collect_taxes"
    QUEEN_GAIN_GOLD = "queen_gain_gold"
    # Markers and their responses
    ASSASSINATE = "assassinate"
    BEWITCH = "bewitch"
    SEND_WARRANTS = "send_warrants"
    REVEAL_WARRANT = "reveal_warrant"
    STEAL = "steal"
    BLACKMAIL = "blackmail"
    PAY_BRIBE = "pay_bribe"
    IGNORE_BLACKMAIL = "ignore_blackmail"
    REVEAL_BLACKMAIL = "reveal_blackmail"
    # Hands
    SPY = "spy"
    SPY_ACKNOWLEDGE = "spy_acknowledge"
    MAGIC = "magic"
    WIZARD_PEEK = "wizard_peek"
    WIZARD_PICK = "wizard_pick"
    SEER_TAKE = "seer_take"
    SEER_DISTRIBUTE = "seer_distribute"
    SCHOLAR_REVEAL = "scholar_reveal"
    SCHOLAR_PICK = "scholar_pick"
    TAKE_FROM_RICH = "take_from_rich"
    # Crown
    TAKE_CROWN = "take_crown"
    EMPEROR_GIVE_CROWN = "emperor_give_crown"
    EMPEROR_HEIR_GIVE_CROWN = "emperor_heir_give_crown"
    # City
    WARLORD_DESTROY = "warlord_destroy"
    MARSHAL_SEIZE = "marshal_seize"
    DIPLOMAT_TRADE = "diplomat_trade"
    BEAUTIFY = "beautify"
    SMITHY = "smithy"
    LABORATORY = "laboratory"
    MUSEUM = "museum"
    ARMORY = "armory"


# Data models supplied by the caller before the game exists
class PlayerConfig(BaseModel):
    id: str
    name: str


def _all_roles() -> set[RoleName]:
    return set(RoleName)


class RoleOptions(BaseModel):
    anarchy: bool = False
    enabled_roles: set[RoleName] = Field(default_factory=_all_roles)
    # Unique districts missing from the map behave as SOMETIMES
    district_options: dict[DistrictName, ConfigOption] = {}


class GameConfig(BaseModel):
    players: list[PlayerConfig]
    role_options: RoleOptions = Field(default_factory=RoleOptions)
    seed: int


# Runtime entities
class CityDistrict(BaseModel):
    name: DistrictName
    beautified: bool = False


class Player(BaseModel):
    index: int
    id: str
    name: str
    gold: int = 0
    hand: list[DistrictName] = []
    city: list[CityDistrict] = []
    roles: list[RoleName] = []


class Marker(BaseModel):
    marker_type: MarkerType
    flowered: bool = False  # Blackmail only
    signed: bool = False  # Warrant only


class Character(BaseModel):
    role: RoleName
    player_index: int | None = None
    markers: list[Marker] = []
    revealed: bool = False
    # Witch's player while a bewitched character's turn is played for its owner
    controlled_by: int | None = None
    performed: list[ActionTag] = []
    logs: list[str] = []


class Prng(BaseModel):
    """Serializable Mersenne Twister state.

    ``internal`` is the 625-word state vector of :class:`random.Random`, so the
    generator resumes exactly where it stopped after a save/load.
    """

    seed: int
    internal: list[int] = []


class Deck(BaseModel):
    draw_pile: list[DistrictName] = []
    discard_pile: list[DistrictName] = []


class Museum(BaseModel):
    cards: list[DistrictName] = []
    artifacts: list[str] = []


# Turn pointer
class Draft(BaseModel):
    player_count: int
    player_index: int
    remaining: list[RoleName]
    theater_step: bool = False
    initial_discard: RoleName | None = None
    faceup_discard: list[RoleName] = []


class DraftTurn(BaseModel):
    turn_type: Literal["draft"] = "draft"
    draft: Draft


class CallTurn(BaseModel):
    turn_type: Literal["call"] = "call"
    index: int
    end_of_round: bool = False


class GameOverTurn(BaseModel):
    turn_type: Literal["game_over"] = "game_over"


Turn = Annotated[
    DraftTurn | CallTurn | GameOverTurn,
    Field(discriminator="turn_type"),
]


# Pending cross-player interactions, at most one at a time
class BewitchFollowup(BaseModel):
    followup_type: Literal["bewitch"] = "bewitch"


class GatherCardsPickFollowup(BaseModel):
    followup_type: Literal["gather_cards_pick"] = "gather_cards_pick"
    revealed: list[DistrictName]


class ScholarPickFollowup(BaseModel):
    followup_type: Literal["scholar_pick"] = "scholar_pick"
    revealed: list[DistrictName]


class WizardPickFollowup(BaseModel):
    followup_type: Literal["wizard_pick"] = "wizard_pick"
    player: int


class SeerDistributeFollowup(BaseModel):
    followup_type: Literal["seer_distribute"] = "seer_distribute"
    players: list[int]


class SpyAcknowledgeFollowup(BaseModel):
    followup_type: Literal["spy_acknowledge"] = "spy_acknowledge"
    player: int
    revealed: list[DistrictName]


class WarrantFollowup(BaseModel):
    followup_type: Literal["warrant"] = "warrant"
    signed: bool
    magistrate: int
    gold: int
    district: DistrictName


class BlackmailFollowup(BaseModel):
    followup_type: Literal["blackmail"] = "blackmail"
    blackmailer: int


class HandleBlackmailFollowup(BaseModel):
    followup_type: Literal["handle_blackmail"] = "handle_blackmail"


Followup = Annotated[
    BewitchFollowup
    | GatherCardsPickFollowup
    | ScholarPickFollowup
    | WizardPickFollowup
    | SeerDistributeFollowup
    | SpyAcknowledgeFollowup
    | WarrantFollowup
    | BlackmailFollowup
    | HandleBlackmailFollowup,
    Field(discriminator="followup_type"),
]


# Game state for persistence and replay
class GameState(BaseModel):
    """Aggregate root of a match.

    Every change goes through process_action in
    citadels.services.game.engine, which works on a deep copy and hands the
    new state back in its ProcessResult.
    """

    config: GameConfig
    players: list[Player]
    characters: list[Character]
    deck: Deck
    museum: Museum = Field(default_factory=Museum)
    prng: Prng
    crowned: int = 0
    first_to_complete: int | None = None
    heir: int | None = None  # Owner of a killed crown role, crowned at round end
    tax_collector: int = 0
    alchemist: int = 0
    active_turn: Turn
    followup: Followup | None = None
    turn_actions: list[ActionTag] = []
    remaining_builds: int = 0
    turn_builds: int = 0
    round: int = 0
    logs: list[str] = []
    # Raw action payloads in the order they were accepted
    action_log: list[dict[str, Any]] = []

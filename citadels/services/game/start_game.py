import logging

from citadels.config import get_settings
from citadels.schemas.game_engine import (
    Character,
    ConfigOption,
    DistrictName,
    Draft,
    DraftTurn,
    GameConfig,
    GameState,
    Player,
    Prng,
    Rank,
    RoleName,
    RoleOptions,
)

from .engine import rng
from .engine.deck import create_deck, draw_many
from .engine.districts import UNIQUE_DISTRICTS, normal_deck
from .engine.roles import ROLES, is_eligible, rank_of, sort_by_rank
from .engine.turn import begin_draft

logger = logging.getLogger(__name__)

STARTING_GOLD = 2
STARTING_HAND = 4
UNIQUE_DISTRICT_COUNT = 14


def _eligible_roles(options: RoleOptions, num_players: int) -> list[RoleName]:
    return [
        data.name
        for data in ROLES
        if data.name in options.enabled_roles and is_eligible(data.name, num_players)
    ]


def role_count(options: RoleOptions, num_players: int) -> int:
    """Number of characters in play: 8, or 9 when rank 9 joins the game.

    Rank 9 is always played with 3 and 8 players, never with 2, and with
    4 to 7 players only when one of its roles is enabled.
    """
    if num_players == 2:
        return 8
    if num_players in (3, 8):
        return 9
    rank_nine = [r for r in _eligible_roles(options, num_players) if rank_of(r) == Rank.NINE]
    return 9 if rank_nine else 8


def validate_game_config(config: GameConfig) -> None:
    """Validate a game config before initializing a game."""
    settings = get_settings()
    num_players = len(config.players)
    if num_players < settings.MIN_PLAYERS:
        raise ValueError(
            f"A minimum of {settings.MIN_PLAYERS} players is required to start the game."
        )
    if num_players > settings.MAX_PLAYERS:
        raise ValueError(f"At most {settings.MAX_PLAYERS} players can play.")

    # Ensure each player has unique id and name
    player_ids: set[str] = set()
    player_names: set[str] = set()
    for player in config.players:
        if player.id in player_ids:
            raise ValueError(f"Duplicate player ID found: {player.id}")
        if player.name in player_names:
            raise ValueError(f"Duplicate player name found: {player.name}")
        player_ids.add(player.id)
        player_names.add(player.name)

    options = config.role_options
    count = role_count(options, num_players)
    eligible = _eligible_roles(options, num_players)
    if options.anarchy:
        if len(eligible) < count:
            raise ValueError(f"Anarchy needs {count} eligible roles, only {len(eligible)} enabled.")
    else:
        for rank in list(Rank)[:count]:
            if not any(rank_of(role) == rank for role in eligible):
                raise ValueError(f"No eligible role enabled for rank {rank.value}.")

    always = [
        name for name, option in options.district_options.items() if option == ConfigOption.ALWAYS
    ]
    if len(always) > UNIQUE_DISTRICT_COUNT:
        raise ValueError(
            f"At most {UNIQUE_DISTRICT_COUNT} unique districts can be always included."
        )


def select_roles(options: RoleOptions, prng: Prng, num_players: int) -> list[RoleName]:
    """Pick the roles of a game, ordered by rank.

    Without anarchy one role is drawn for each rank; with anarchy any
    eligible roles are drawn regardless of rank.
    """
    count = role_count(options, num_players)
    eligible = _eligible_roles(options, num_players)
    if options.anarchy:
        return sort_by_rank(rng.sample(prng, eligible, count))
    return [
        rng.choice(prng, [role for role in eligible if rank_of(role) == rank])
        for rank in list(Rank)[:count]
    ]


def select_unique_districts(options: RoleOptions, prng: Prng) -> list[DistrictName]:
    """Always-included unique districts, topped up with shuffled optional ones."""
    always: list[DistrictName] = []
    sometimes: list[DistrictName] = []
    for data in UNIQUE_DISTRICTS:
        option = options.district_options.get(data.name, ConfigOption.SOMETIMES)
        if option == ConfigOption.ALWAYS:
            always.append(data.name)
        elif option == ConfigOption.SOMETIMES:
            sometimes.append(data.name)
    rng.shuffle(prng, sometimes)
    return always + sometimes[: max(0, UNIQUE_DISTRICT_COUNT - len(always))]


def initialize_game(config: GameConfig) -> GameState:
    """
    Validate the game config and return a game waiting for its first draft pick.

    Args:
        config: Players, role and district options, and the seed every random
                decision of the match derives from.

    Returns:
        A GameState in the draft of round 1. Player 0 (after the seating
        shuffle) holds the crown.

    Raises:
        ValueError: If the game config is invalid.
    """
    validate_game_config(config)
    prng = rng.create_prng(config.seed)
    num_players = len(config.players)

    roles = select_roles(config.role_options, prng, num_players)
    uniques = select_unique_districts(config.role_options, prng)

    seating = list(config.players)
    rng.shuffle(prng, seating)
    deck = create_deck(normal_deck() + uniques, prng)

    players = []
    for index, player_config in enumerate(seating):
        players.append(
            Player(
                index=index,
                id=player_config.id,
                name=player_config.name,
                gold=STARTING_GOLD,
                hand=draw_many(deck, prng, STARTING_HAND),
            )
        )

    state = GameState(
        config=config,
        players=players,
        characters=[Character(role=role) for role in roles],
        deck=deck,
        prng=prng,
        active_turn=DraftTurn(
            draft=Draft(player_count=num_players, player_index=0, remaining=[])
        ),
    )
    begin_draft(state, 0)

    logger.info(
        "Game initialized: players=%d, roles=%s, unique_districts=%d",
        num_players,
        [role.value for role in roles],
        len(uniques),
    )
    return state

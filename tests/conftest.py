"""Shared fixtures and state builders for game engine tests."""

import pytest

from citadels.schemas.game_engine import (
    ActionTag,
    CallTurn,
    Character,
    CityDistrict,
    Deck,
    DistrictName,
    GameConfig,
    GameState,
    Marker,
    Player,
    PlayerConfig,
    RoleName,
    RoleOptions,
)
from citadels.services.game.engine import PlayerAction, acting_player_index, process_action
from citadels.services.game.engine.actions import (
    BewitchAction,
    BuildAction,
    DraftDiscardAction,
    DraftPickAction,
    EmperorHeirGiveCrownAction,
    EndTurnAction,
    GatherCardsPickAction,
    GatherResourceCardsAction,
    GatherResourceGoldAction,
    PassAction,
    PayBribeAction,
    RegularBuild,
    TheaterPassAction,
)
from citadels.services.game.engine.building import build_cost, buildable_districts
from citadels.services.game.engine.legal_actions import available_actions
from citadels.services.game.engine.rng import create_prng
from citadels.services.game.engine.roles import role_data, sort_by_rank
from citadels.services.game.engine.state import active_player
from citadels.services.game.engine.validation import ProcessResult
from citadels.services.game.start_game import initialize_game

PLAYER_IDS = ["alice", "bob", "carol", "dave", "erin", "frank", "gina", "hugo"]
PLAYER_NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Gina", "Hugo"]

# One role per rank from the base set
BASE_ROLES = [
    RoleName.ASSASSIN,
    RoleName.THIEF,
    RoleName.MAGICIAN,
    RoleName.KING,
    RoleName.BISHOP,
    RoleName.MERCHANT,
    RoleName.ARCHITECT,
    RoleName.WARLORD,
]

RANK_NINE = {RoleName.QUEEN, RoleName.ARTIST, RoleName.TAX_COLLECTOR}

# Top of the draw pile is the end of the list
DEFAULT_DRAW_PILE = [
    DistrictName.TEMPLE,
    DistrictName.CHURCH,
    DistrictName.WATCHTOWER,
    DistrictName.PRISON,
    DistrictName.TAVERN,
    DistrictName.MARKET,
    DistrictName.MANOR,
    DistrictName.CASTLE,
]


def create_config(num_players: int = 4, seed: int = 42, **role_options) -> GameConfig:
    """Helper to create a game config for the first ``num_players`` test players."""
    return GameConfig(
        players=[
            PlayerConfig(id=PLAYER_IDS[i], name=PLAYER_NAMES[i]) for i in range(num_players)
        ],
        role_options=RoleOptions(**role_options),
        seed=seed,
    )


def create_city(*districts: DistrictName) -> list[CityDistrict]:
    return [CityDistrict(name=d) for d in districts]


def create_player(
    index: int,
    gold: int = 0,
    hand: list[DistrictName] | None = None,
    city: list[DistrictName] | None = None,
) -> Player:
    """Helper to create a seated player."""
    return Player(
        index=index,
        id=PLAYER_IDS[index],
        name=PLAYER_NAMES[index],
        gold=gold,
        hand=list(hand or []),
        city=create_city(*(city or [])),
    )


def create_call_state(
    owners: dict[RoleName, int],
    active: RoleName,
    players: list[Player] | None = None,
    roles: list[RoleName] | None = None,
    markers: dict[RoleName, list[Marker]] | None = None,
    draw_pile: list[DistrictName] | None = None,
    gathered: bool = True,
    crowned: int = 0,
) -> GameState:
    """Game in the call phase with ``active`` taking its turn.

    Characters called before ``active`` are revealed. With ``gathered`` the
    active character has already taken gold this turn.
    """
    if players is None:
        players = [create_player(i) for i in range(4)]
    ordered = sort_by_rank(list(roles or BASE_ROLES))
    active_index = ordered.index(active)
    markers = markers or {}

    characters = [
        Character(
            role=role,
            player_index=owners.get(role),
            markers=list(markers.get(role, [])),
            revealed=owners.get(role) is not None and position <= active_index,
        )
        for position, role in enumerate(ordered)
    ]
    for player in players:
        owned = [role for role, index in owners.items() if index == player.index]
        player.roles = sort_by_rank(owned)

    return GameState(
        config=create_config(len(players)),
        players=players,
        characters=characters,
        deck=Deck(draw_pile=list(DEFAULT_DRAW_PILE if draw_pile is None else draw_pile)),
        prng=create_prng(0),
        crowned=crowned,
        active_turn=CallTurn(index=active_index),
        turn_actions=[ActionTag.GATHER_RESOURCE_GOLD] if gathered else [],
        remaining_builds=role_data(active).build_limit,
        round=1,
    )


def perform(
    state: GameState, action: PlayerAction, player_index: int | None = None, **kwargs
) -> ProcessResult:
    """Submit ``action`` for ``player_index``, or for whoever is expected to act."""
    if player_index is None:
        player_index = acting_player_index(state)
    return process_action(state, action, state.players[player_index].id, **kwargs)


def perform_ok(
    state: GameState, action: PlayerAction, player_index: int | None = None
) -> GameState:
    """Submit ``action`` and return the new state, failing the test on rejection."""
    result = perform(state, action, player_index)
    assert result.success, f"{result.error_code}: {result.error_message}"
    return result.state


def autoplay_action(state: GameState) -> PlayerAction:
    """A legal action that keeps the game moving, building whatever gold allows.

    Players with fewer than two cards draw cards, everyone else takes gold.
    Pending warrants and blackmail are answered as meekly as possible.
    """
    allowed = available_actions(state)
    if ActionTag.DRAFT_PICK in allowed:
        return DraftPickAction(role=state.active_turn.draft.remaining[0])
    if ActionTag.DRAFT_DISCARD in allowed:
        return DraftDiscardAction(role=state.active_turn.draft.remaining[0])
    if ActionTag.THEATER_PASS in allowed:
        return TheaterPassAction()
    if ActionTag.GATHER_CARDS_PICK in allowed:
        return GatherCardsPickAction(district=state.followup.revealed[0])
    if ActionTag.PAY_BRIBE in allowed:
        return PayBribeAction()
    if ActionTag.PASS in allowed:
        return PassAction()
    if ActionTag.GATHER_RESOURCE_GOLD in allowed:
        if len(active_player(state).hand) < 2:
            return GatherResourceCardsAction()
        return GatherResourceGoldAction()
    if ActionTag.BEWITCH in allowed:
        target = next(c.role for c in state.characters if c.role != RoleName.WITCH)
        return BewitchAction(role=target)
    if ActionTag.EMPEROR_HEIR_GIVE_CROWN in allowed:
        acting = acting_player_index(state)
        target = next(
            p.index for p in state.players if p.index not in (acting, state.crowned)
        )
        return EmperorHeirGiveCrownAction(player=target)
    if ActionTag.BUILD in allowed:
        player = active_player(state)
        affordable = [
            card for card in buildable_districts(state) if player.gold >= build_cost(player, card)
        ]
        if affordable:
            return BuildAction(build=RegularBuild(district=affordable[0]))
    if ActionTag.END_TURN in allowed:
        return EndTurnAction()
    raise AssertionError(f"No autoplay action among {allowed}")


@pytest.fixture
def four_player_game() -> GameState:
    """Fresh four-player game with every role enabled."""
    return initialize_game(create_config(4, seed=42))


@pytest.fixture
def two_player_game() -> GameState:
    """Fresh two-player game."""
    return initialize_game(create_config(2, seed=7))

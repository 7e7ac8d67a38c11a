"""Read-only queries over GameState shared by the turn machine and handlers."""

import logging

from citadels.schemas.game_engine import (
    ActionTag,
    BlackmailFollowup,
    CallTurn,
    Character,
    CardSuit,
    CityDistrict,
    DistrictName,
    DraftTurn,
    GameOverTurn,
    GameState,
    GatherCardsPickFollowup,
    Marker,
    MarkerType,
    Player,
    RoleName,
    ScholarPickFollowup,
    WarrantFollowup,
)

from .deck import deck_size
from .districts import district_data
from .roles import role_data

logger = logging.getLogger(__name__)


class GameStateCorrupted(RuntimeError):
    """Raised when the state breaks an invariant the engine relies on."""


def corrupted(message: str) -> GameStateCorrupted:
    logger.error("Corrupted game state: %s", message)
    return GameStateCorrupted(message)


# Turn pointer


def is_game_over(state: GameState) -> bool:
    return isinstance(state.active_turn, GameOverTurn)


def active_character(state: GameState) -> Character:
    turn = state.active_turn
    if not isinstance(turn, CallTurn):
        raise corrupted(f"No character is active during {turn.turn_type}")
    return state.characters[turn.index]


def active_role(state: GameState) -> RoleName:
    return active_character(state).role


def active_player_index(state: GameState) -> int:
    """Index of the player whose turn it is.

    During the draft this is the drafting player; during a call it is the
    owner of the called character, or the Witch's player when the character
    was bewitched. The heir of an Emperor acts at the end of the round.
    """
    turn = state.active_turn
    if isinstance(turn, DraftTurn):
        return turn.draft.player_index
    if isinstance(turn, CallTurn):
        character = state.characters[turn.index]
        if character.player_index is None:
            raise corrupted(f"Called character {character.role.value} has no player")
        if character.controlled_by is not None and not turn.end_of_round:
            return character.controlled_by
        return character.player_index
    raise corrupted("No active player once the game is over")


def active_player(state: GameState) -> Player:
    return state.players[active_player_index(state)]


def responding_player_index(state: GameState) -> int:
    """Index of the player who must answer the pending followup."""
    followup = state.followup
    if isinstance(followup, WarrantFollowup):
        return followup.magistrate
    if isinstance(followup, BlackmailFollowup):
        return followup.blackmailer
    return active_player_index(state)


def acting_player_index(state: GameState) -> int | None:
    """Index of the only player allowed to submit the next action."""
    if is_game_over(state):
        return None
    if state.followup is not None:
        return responding_player_index(state)
    return active_player_index(state)


def player_by_id(state: GameState, player_id: str) -> Player | None:
    return next((p for p in state.players if p.id == player_id), None)


# Characters and markers


def character_index(state: GameState, role: RoleName) -> int | None:
    return next(
        (index for index, c in enumerate(state.characters) if c.role == role),
        None,
    )


def character_for(state: GameState, role: RoleName) -> Character | None:
    index = character_index(state, role)
    return None if index is None else state.characters[index]


def has_marker(character: Character, marker_type: MarkerType) -> bool:
    return any(m.marker_type == marker_type for m in character.markers)


def find_marker(character: Character, marker_type: MarkerType) -> Marker | None:
    return next((m for m in character.markers if m.marker_type == marker_type), None)


def remove_marker(character: Character, marker_type: MarkerType) -> bool:
    before = len(character.markers)
    character.markers = [m for m in character.markers if m.marker_type != marker_type]
    return len(character.markers) != before


def clear_markers_everywhere(state: GameState, marker_type: MarkerType) -> None:
    for character in state.characters:
        remove_marker(character, marker_type)


def player_of_role(state: GameState, role: RoleName) -> int | None:
    character = character_for(state, role)
    return None if character is None else character.player_index


# Cities


def city_has(player: Player, district: DistrictName) -> bool:
    return any(d.name == district for d in player.city)


def city_size(player: Player) -> int:
    """Number of districts toward a completed city; the Monument counts twice."""
    return sum(2 if d.name == DistrictName.MONUMENT else 1 for d in player.city)


def complete_city_size(state: GameState) -> int:
    return 8 if len(state.players) <= 3 else 7


def has_completed_city(state: GameState, player: Player) -> bool:
    return city_size(player) >= complete_city_size(state)


def effective_cost(district: CityDistrict) -> int:
    return district_data(district.name).cost + (1 if district.beautified else 0)


def count_suit_for_resource_gain(player: Player, suit: CardSuit) -> int:
    """Districts of ``suit`` in the city; the School of Magic counts for any suit."""
    return sum(
        1
        for d in player.city
        if district_data(d.name).suit == suit or d.name == DistrictName.SCHOOL_OF_MAGIC
    )


def count_suit_in_hand(player: Player, suit: CardSuit) -> int:
    return sum(1 for card in player.hand if district_data(card).suit == suit)


def has_bishop_protection(state: GameState, player_index: int) -> bool:
    """Whether the rank 8 abilities cannot target ``player_index``'s city.

    Only a revealed Bishop protects. A bewitched Bishop protects the Witch's
    player instead of its owner.
    """
    bishop = character_for(state, RoleName.BISHOP)
    if bishop is None or not bishop.revealed:
        return False
    protected = bishop.controlled_by if bishop.controlled_by is not None else bishop.player_index
    return protected == player_index


# Turn progress


def has_gathered_resources(state: GameState) -> bool:
    return (
        ActionTag.GATHER_RESOURCE_GOLD in state.turn_actions
        or ActionTag.GATHER_RESOURCE_CARDS in state.turn_actions
    )


def forced_to_gather(state: GameState) -> bool:
    """The Witch, bewitched and blackmailed characters gather before anything else."""
    if has_gathered_resources(state):
        return False
    character = active_character(state)
    return (
        character.role == RoleName.WITCH
        or has_marker(character, MarkerType.BEWITCHED)
        or has_marker(character, MarkerType.BLACKMAIL)
    )


def build_limit(state: GameState) -> int:
    return role_data(active_role(state)).build_limit


def card_population(state: GameState) -> int:
    """Every district card of the match, wherever it currently is."""
    held = 0
    followup = state.followup
    if isinstance(followup, (GatherCardsPickFollowup, ScholarPickFollowup)):
        held = len(followup.revealed)
    elif isinstance(followup, WarrantFollowup):
        held = 1
    return (
        deck_size(state.deck)
        + sum(len(p.hand) + len(p.city) for p in state.players)
        + len(state.museum.cards)
        + held
    )

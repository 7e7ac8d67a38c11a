"""Turn state machine: Draft, Call and GameOver.

A round starts with a draft seated from the crowned player. Once every
player holds their roles (and a Theater owner had the chance to swap), the
characters are called in rank order. After the last character, an Emperor
who never handed the crown over gets one more end-of-round call for their
heir, then the round ends: either the game is over or a new draft begins.
"""

import logging

from citadels.schemas.game_engine import (
    ActionTag,
    CallTurn,
    DistrictName,
    Draft,
    DraftTurn,
    GameOverTurn,
    GameState,
    Marker,
    MarkerType,
    Player,
    RoleName,
)

from . import rng
from .actions import build_action_from_payload
from .deck import draw_many
from .handlers import get_handler
from .roles import CROWN_RANK, rank_of, role_data, sort_by_rank
from .state import (
    active_character,
    active_player,
    character_index,
    city_has,
    corrupted,
    find_marker,
    has_gathered_resources,
    player_of_role,
    remove_marker,
)

logger = logging.getLogger(__name__)

# Roles whose owner inherits the crown when the role is killed
CROWN_TAKERS = (RoleName.KING, RoleName.PATRICIAN)


def record_log(state: GameState, line: str) -> None:
    """Append a public log line to the game log and to the active character."""
    state.logs.append(line)
    if isinstance(state.active_turn, CallTurn):
        state.characters[state.active_turn.index].logs.append(line)


def roles_per_player(player_count: int) -> int:
    return 2 if player_count <= 3 else 1


def _reset_turn(state: GameState) -> None:
    state.turn_actions = []
    state.turn_builds = 0
    state.remaining_builds = 0


# Draft


def create_draft(state: GameState, player_index: int) -> Draft:
    """Lay out the roles for a new draft.

    With 4+ players some roles are discarded face up, never from the crown
    rank. One more role is always discarded face down.
    """
    player_count = len(state.players)
    remaining = [c.role for c in state.characters]
    faceup: list[RoleName] = []

    if player_count >= 4:
        for _ in range(max(0, len(remaining) - (player_count + 2))):
            candidates = [i for i, role in enumerate(remaining) if rank_of(role) != CROWN_RANK]
            if not candidates:
                break
            faceup.append(remaining.pop(rng.choice(state.prng, candidates)))

    initial_discard = remaining.pop(rng.randrange(state.prng, len(remaining)))

    return Draft(
        player_count=player_count,
        player_index=player_index,
        remaining=sort_by_rank(remaining),
        initial_discard=initial_discard,
        faceup_discard=sort_by_rank(faceup),
    )


def begin_draft(state: GameState, player_index: int) -> None:
    draft = create_draft(state, player_index)
    for character in state.characters:
        if character.role in draft.faceup_discard:
            character.markers.append(Marker(marker_type=MarkerType.DISCARDED))
            character.revealed = True

    state.round += 1
    state.active_turn = DraftTurn(draft=draft)
    state.followup = None
    _reset_turn(state)
    record_log(state, f"Round {state.round}: {state.players[player_index].name} drafts first.")
    logger.info(
        "Draft started: round=%d, first_player=%d, faceup=%s",
        state.round,
        player_index,
        [r.value for r in draft.faceup_discard],
    )


def _theater_owner(state: GameState) -> int | None:
    return next(
        (p.index for p in state.players if city_has(p, DistrictName.THEATER)),
        None,
    )


def _end_draft_turn(state: GameState, draft: Draft) -> None:
    player_count = len(state.players)
    role_count = len(state.characters)

    if player_count == 3 and role_count == 9 and len(draft.remaining) == 5:
        draft.remaining.pop(rng.randrange(state.prng, len(draft.remaining)))
        record_log(state, "A role is discarded face down.")

    if (
        player_count + 1 == role_count
        and len(draft.remaining) == 1
        and draft.initial_discard is not None
    ):
        draft.remaining = sort_by_rank([*draft.remaining, draft.initial_discard])
        draft.initial_discard = None
        logger.debug("Face down discard returned to the draft")

    if not all(len(p.roles) >= roles_per_player(player_count) for p in state.players):
        draft.player_index = (draft.player_index + 1) % player_count
        return

    theater_owner = _theater_owner(state)
    if theater_owner is not None and not draft.theater_step:
        draft.theater_step = True
        draft.player_index = theater_owner
        record_log(state, f"{state.players[theater_owner].name} may use their Theater.")
        return

    logger.info("Draft finished: round=%d", state.round)
    _call_from(state, 0)


# Call


def _apply_on_call(state: GameState, tag: ActionTag) -> None:
    output = get_handler(tag)(state, build_action_from_payload({"action_type": tag.value}))
    if not output.success:
        raise corrupted(f"Automatic {tag.value} failed: {output.error_message}")
    active_character(state).performed.append(tag)
    if output.log:
        record_log(state, output.log)


def _witch_player(state: GameState) -> Player:
    witch_player = player_of_role(state, RoleName.WITCH)
    if witch_player is None:
        raise corrupted("Bewitched character without a Witch player")
    return state.players[witch_player]


def yield_bewitched_turn(state: GameState) -> None:
    """Hand a bewitched character to the Witch's player once it has gathered.

    The owner only gathers resources. The rest of the turn, automatic income
    included, is played by the Witch's player.
    """
    if not isinstance(state.active_turn, CallTurn) or state.followup is not None:
        return
    character = active_character(state)
    if not has_gathered_resources(state) or not remove_marker(character, MarkerType.BEWITCHED):
        return

    witch = _witch_player(state)
    character.controlled_by = witch.index
    owner = state.players[character.player_index]
    record_log(state, f"{owner.name} yields their turn to the Witch ({witch.name}).")
    logger.info(
        "Bewitched turn yielded: role=%s, owner=%d, witch=%d",
        character.role.value,
        owner.index,
        witch.index,
    )
    for tag in role_data(character.role).on_call:
        _apply_on_call(state, tag)


def _start_turn(state: GameState) -> bool:
    """Reveal the called character.

    Returns:
        False when the character is skipped: nobody drafted it or it was
        killed. Killed markers are consumed here, Bewitched ones once the
        owner has gathered resources.
    """
    character = active_character(state)
    data = role_data(character.role)

    if character.player_index is None:
        record_log(state, f"{data.display_name}: no one responds.")
        return False

    owner = state.players[character.player_index]
    if remove_marker(character, MarkerType.KILLED):
        if character.role in CROWN_TAKERS:
            state.heir = owner.index
        record_log(state, f"{data.display_name}: {owner.name} was killed!")
        return False

    character.revealed = True
    _reset_turn(state)
    state.remaining_builds = data.build_limit

    record_log(state, f"{data.display_name}: {owner.name} starts their turn.")
    bewitched = find_marker(character, MarkerType.BEWITCHED) is not None
    if bewitched:
        record_log(
            state,
            "They are bewitched! After gathering resources, their turn will be yielded "
            f"to the Witch ({_witch_player(state).name}).",
        )

    if find_marker(character, MarkerType.ROBBED) is not None:
        remove_marker(character, MarkerType.ROBBED)
        thief_index = player_of_role(state, RoleName.THIEF)
        if thief_index is None:
            raise corrupted("Robbed character without a Thief player")
        stolen = owner.gold
        owner.gold = 0
        state.players[thief_index].gold += stolen
        record_log(state, f"{state.players[thief_index].name} robs {owner.name} of {stolen} gold.")

    if not bewitched:
        for tag in data.on_call:
            _apply_on_call(state, tag)

    logger.info("Character called: role=%s, player=%d", character.role.value, owner.index)
    return True


def _emperor_pending(state: GameState) -> int | None:
    """Index of an Emperor whose crown still has to be handed over."""
    index = character_index(state, RoleName.EMPEROR)
    if index is None:
        return None
    emperor = state.characters[index]
    if emperor.player_index is None or ActionTag.EMPEROR_GIVE_CROWN in emperor.performed:
        return None
    return index


def _call_from(state: GameState, index: int) -> None:
    while index < len(state.characters):
        state.active_turn = CallTurn(index=index)
        if _start_turn(state):
            return
        index += 1

    emperor_index = _emperor_pending(state)
    if emperor_index is not None:
        state.active_turn = CallTurn(index=emperor_index, end_of_round=True)
        _reset_turn(state)
        record_log(state, "The Emperor's heir must give away the crown.")
        return
    end_round(state)


def call_next(state: GameState) -> None:
    turn = state.active_turn
    if not isinstance(turn, CallTurn):
        raise corrupted("call_next outside of the call phase")
    _call_from(state, turn.index + 1)


def _end_call_turn(state: GameState) -> None:
    """Passive effects that trigger when a character's turn ends.

    The Witch's own turn is on hold after bewitching, so nothing triggers
    for it.
    """
    character = active_character(state)
    player = active_player(state)

    if character.role != RoleName.WITCH:
        if city_has(player, DistrictName.POOR_HOUSE) and player.gold == 0:
            player.gold += 1
            record_log(state, f"{player.name} gains 1 gold from their Poor House.")
        if city_has(player, DistrictName.PARK) and not player.hand:
            drawn = draw_many(state.deck, state.prng, 2)
            player.hand.extend(drawn)
            record_log(state, f"{player.name} gains {len(drawn)} cards from their Park.")

    if state.alchemist > 0:
        player.gold += state.alchemist
        record_log(state, f"{player.name} is refunded {state.alchemist} gold spent building.")
        state.alchemist = 0


def end_turn(state: GameState) -> None:
    """Advance past the current turn."""
    turn = state.active_turn
    if isinstance(turn, DraftTurn):
        state.turn_actions = []
        _end_draft_turn(state, turn.draft)
    elif isinstance(turn, CallTurn):
        if turn.end_of_round:
            end_round(state)
            return
        _end_call_turn(state)
        call_next(state)
    else:
        raise corrupted("Cannot end a turn once the game is over")


# Round end


def end_round(state: GameState) -> None:
    if state.heir is not None:
        state.crowned = state.heir
        state.heir = None
        record_log(state, f"{state.players[state.crowned].name} is the heir and takes the crown.")

    if state.first_to_complete is not None:
        state.active_turn = GameOverTurn()
        state.followup = None
        _reset_turn(state)
        record_log(state, "The game is over.")
        logger.info(
            "Game over: round=%d, first_to_complete=%d",
            state.round,
            state.first_to_complete,
        )
        return

    for character in state.characters:
        character.player_index = None
        character.markers = []
        character.revealed = False
        character.controlled_by = None
        character.performed = []
        character.logs = []
    for player in state.players:
        player.roles = []

    begin_draft(state, state.crowned)

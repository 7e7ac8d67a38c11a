"""Handlers that place markers on characters and resolve them.

Killed, Bewitched and Robbed markers take effect when the marked character
is called. Warrants and blackmail threats are resolved through followups
answered by the magistrate, the blackmailed player and the blackmailer.
"""

import logging

from citadels.schemas.game_engine import (
    ActionTag,
    BlackmailFollowup,
    Character,
    GameState,
    Marker,
    MarkerType,
    RoleName,
    WarrantFollowup,
)

from ..actions import (
    AssassinateAction,
    BewitchAction,
    BlackmailAction,
    IgnoreBlackmailAction,
    PassAction,
    PayBribeAction,
    RevealBlackmailAction,
    RevealWarrantAction,
    SendWarrantsAction,
    StealAction,
)
from ..building import complete_build
from ..deck import discard_to_bottom
from ..districts import district_data
from ..roles import role_data
from ..state import (
    active_character,
    active_player,
    character_for,
    city_has,
    clear_markers_everywhere,
    corrupted,
    find_marker,
    has_marker,
    player_of_role,
    remove_marker,
)
from ..validation import ActionOutput, ErrorCode
from . import handler

logger = logging.getLogger(__name__)


def _name(role: RoleName) -> str:
    return role_data(role).display_name


def _missing(role: RoleName) -> ActionOutput:
    return ActionOutput.failure(ErrorCode.NOT_FOUND, f"The {_name(role)} is not in this game")


def _is_disabled(character: Character) -> bool:
    return has_marker(character, MarkerType.KILLED) or has_marker(character, MarkerType.BEWITCHED)


@handler(ActionTag.ASSASSINATE)
def handle_assassinate(state: GameState, action: AssassinateAction) -> ActionOutput:
    if action.role == active_character(state).role:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot kill self.")
    target = character_for(state, action.role)
    if target is None:
        return _missing(action.role)

    target.markers.append(Marker(marker_type=MarkerType.KILLED))
    player = active_player(state)
    logger.debug("Marked %s as killed", action.role.value)
    return ActionOutput(log=f"{player.name} kills the {_name(action.role)}.")


@handler(ActionTag.BEWITCH)
def handle_bewitch(state: GameState, action: BewitchAction) -> ActionOutput:
    if action.role == active_character(state).role:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot bewitch self.")
    target = character_for(state, action.role)
    if target is None:
        return _missing(action.role)

    target.markers.append(Marker(marker_type=MarkerType.BEWITCHED))
    player = active_player(state)
    return ActionOutput(
        log=f"{player.name} bewitches the {_name(action.role)} and puts their turn on hold.",
        end_turn=True,
    )


@handler(ActionTag.STEAL)
def handle_steal(state: GameState, action: StealAction) -> ActionOutput:
    if action.role == active_character(state).role:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot rob self.")
    target = character_for(state, action.role)
    if target is None:
        return _missing(action.role)
    if target.revealed:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot rob a revealed character.")
    if _is_disabled(target):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "Cannot rob a killed or bewitched character."
        )

    target.markers.append(Marker(marker_type=MarkerType.ROBBED))
    player = active_player(state)
    return ActionOutput(log=f"{player.name} robs the {_name(action.role)}.")


# Warrants


@handler(ActionTag.SEND_WARRANTS)
def handle_send_warrants(state: GameState, action: SendWarrantsAction) -> ActionOutput:
    roles = [action.signed, *action.unsigned]
    if len(set(roles)) != len(roles):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, "Each warrant must go to a different role."
        )
    if RoleName.MAGISTRATE in roles:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot send a warrant to yourself.")
    targets = [character_for(state, role) for role in roles]
    for role, target in zip(roles, targets):
        if target is None:
            return _missing(role)

    for role, target in zip(roles, targets):
        target.markers.append(Marker(marker_type=MarkerType.WARRANT, signed=role == action.signed))
    player = active_player(state)
    return ActionOutput(log=f"{player.name} sends out warrants.")


@handler(ActionTag.REVEAL_WARRANT)
def handle_reveal_warrant(state: GameState, action: RevealWarrantAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, WarrantFollowup):
        raise corrupted("Warrant reveal without a pending warrant")

    magistrate = state.players[followup.magistrate]
    builder = active_player(state)
    district = district_data(followup.district).display_name

    if followup.signed:
        discard_to_bottom(state.deck, followup.district)
        clear_markers_everywhere(state, MarkerType.WARRANT)
        return ActionOutput(
            log=f"{magistrate.name} reveals a signed warrant. "
            f"The {district} is confiscated from {builder.name}.",
        )

    if city_has(magistrate, followup.district):
        return ActionOutput.failure(
            ErrorCode.ILLEGAL_TARGET, f"{magistrate.name} already has a {district}."
        )
    magistrate.gold += followup.gold
    remove_marker(active_character(state), MarkerType.WARRANT)
    completed = complete_build(state, magistrate.index, 0, followup.district)
    log = (
        f"{magistrate.name} reveals an unsigned warrant and takes "
        f"{followup.gold} gold and the {district}."
    )
    return ActionOutput(log=f"{log} {completed}" if completed else log)


@handler(ActionTag.PASS)
def handle_pass(state: GameState, action: PassAction) -> ActionOutput:
    followup = state.followup
    if isinstance(followup, WarrantFollowup):
        builder = active_player(state)
        magistrate = state.players[followup.magistrate]
        completed = complete_build(state, builder.index, followup.gold, followup.district)
        log = (
            f"{magistrate.name} does not reveal the warrant. "
            f"{builder.name} builds a {district_data(followup.district).display_name}."
        )
        return ActionOutput(log=f"{log} {completed}" if completed else log)
    if isinstance(followup, BlackmailFollowup):
        blackmailer = state.players[followup.blackmailer]
        return ActionOutput(log=f"{blackmailer.name} does not reveal the threat.")
    raise corrupted("Pass without a warrant or blackmail to pass on")


# Blackmail


@handler(ActionTag.BLACKMAIL)
def handle_blackmail(state: GameState, action: BlackmailAction) -> ActionOutput:
    if action.flowered == action.unmarked:
        return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Threats must go to different roles.")
    for role in (action.flowered, action.unmarked):
        if role == RoleName.BLACKMAILER:
            return ActionOutput.failure(ErrorCode.ILLEGAL_TARGET, "Cannot blackmail yourself.")
        target = character_for(state, role)
        if target is None:
            return _missing(role)
        if target.revealed:
            return ActionOutput.failure(
                ErrorCode.ILLEGAL_TARGET, f"The {_name(role)} has already been revealed."
            )
        if _is_disabled(target):
            return ActionOutput.failure(
                ErrorCode.ILLEGAL_TARGET, "Cannot blackmail a killed or bewitched character."
            )

    character_for(state, action.flowered).markers.append(
        Marker(marker_type=MarkerType.BLACKMAIL, flowered=True)
    )
    character_for(state, action.unmarked).markers.append(
        Marker(marker_type=MarkerType.BLACKMAIL, flowered=False)
    )
    player = active_player(state)
    return ActionOutput(
        log=f"{player.name} threatens the {_name(action.flowered)} "
        f"and the {_name(action.unmarked)}."
    )


def _blackmailer_index(state: GameState) -> int:
    index = player_of_role(state, RoleName.BLACKMAILER)
    if index is None:
        raise corrupted("Blackmail marker without a Blackmailer player")
    return index


@handler(ActionTag.PAY_BRIBE)
def handle_pay_bribe(state: GameState, action: PayBribeAction) -> ActionOutput:
    player = active_player(state)
    blackmailer = state.players[_blackmailer_index(state)]
    bribe = player.gold // 2
    player.gold -= bribe
    blackmailer.gold += bribe
    remove_marker(active_character(state), MarkerType.BLACKMAIL)
    return ActionOutput(log=f"{player.name} pays a bribe of {bribe} gold to {blackmailer.name}.")


@handler(ActionTag.IGNORE_BLACKMAIL)
def handle_ignore_blackmail(state: GameState, action: IgnoreBlackmailAction) -> ActionOutput:
    player = active_player(state)
    blackmailer = _blackmailer_index(state)
    return ActionOutput(
        log=f"{player.name} ignores the threat.",
        followup=BlackmailFollowup(blackmailer=blackmailer),
    )


@handler(ActionTag.REVEAL_BLACKMAIL)
def handle_reveal_blackmail(state: GameState, action: RevealBlackmailAction) -> ActionOutput:
    followup = state.followup
    if not isinstance(followup, BlackmailFollowup):
        raise corrupted("Blackmail reveal without a pending threat")

    target = active_player(state)
    blackmailer = state.players[followup.blackmailer]
    marker = find_marker(active_character(state), MarkerType.BLACKMAIL)
    if marker is not None and marker.flowered:
        taken = target.gold
        target.gold = 0
        blackmailer.gold += taken
        log = (
            f"{blackmailer.name} reveals the flowered threat "
            f"and takes all {taken} gold from {target.name}."
        )
    else:
        log = f"{blackmailer.name} reveals an empty threat."
    clear_markers_everywhere(state, MarkerType.BLACKMAIL)
    return ActionOutput(log=log)

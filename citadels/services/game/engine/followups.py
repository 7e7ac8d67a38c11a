"""Single-slot followup rules.

While ``GameState.followup`` is set, the only legal actions are the responses
listed by :func:`followup_actions`, and only the responding player may submit
them (the magistrate for a warrant, the blackmailer for a blackmail reveal,
otherwise the active player).
"""

import logging

from citadels.schemas.game_engine import (
    ActionTag,
    BewitchFollowup,
    BlackmailFollowup,
    Followup,
    GameState,
    GatherCardsPickFollowup,
    HandleBlackmailFollowup,
    MarkerType,
    RoleName,
    ScholarPickFollowup,
    SeerDistributeFollowup,
    SpyAcknowledgeFollowup,
    WarrantFollowup,
    WizardPickFollowup,
)

from .state import active_character, has_marker

logger = logging.getLogger(__name__)


def followup_actions(followup: Followup) -> list[ActionTag]:
    """Actions that resolve ``followup``."""
    if isinstance(followup, BewitchFollowup):
        return [ActionTag.BEWITCH]
    if isinstance(followup, HandleBlackmailFollowup):
        return [ActionTag.PAY_BRIBE, ActionTag.IGNORE_BLACKMAIL]
    if isinstance(followup, BlackmailFollowup):
        return [ActionTag.REVEAL_BLACKMAIL, ActionTag.PASS]
    if isinstance(followup, WarrantFollowup):
        return [ActionTag.REVEAL_WARRANT, ActionTag.PASS]
    if isinstance(followup, GatherCardsPickFollowup):
        return [ActionTag.GATHER_CARDS_PICK]
    if isinstance(followup, ScholarPickFollowup):
        return [ActionTag.SCHOLAR_PICK]
    if isinstance(followup, WizardPickFollowup):
        return [ActionTag.WIZARD_PICK]
    if isinstance(followup, SeerDistributeFollowup):
        return [ActionTag.SEER_DISTRIBUTE]
    if isinstance(followup, SpyAcknowledgeFollowup):
        return [ActionTag.SPY_ACKNOWLEDGE]
    raise TypeError(f"Unknown followup: {followup!r}")


def after_gather_resources(state: GameState) -> Followup | None:
    """Followup owed once the active character has gathered resources.

    The Witch must name a character to bewitch; a blackmailed character must
    decide whether to bribe the blackmailer.
    """
    character = active_character(state)
    if character.controlled_by is not None or has_marker(character, MarkerType.BEWITCHED):
        return None
    if character.role == RoleName.WITCH:
        logger.debug("Witch gathered resources, awaiting bewitch target")
        return BewitchFollowup()
    if has_marker(character, MarkerType.BLACKMAIL):
        logger.debug(
            "Blackmailed %s gathered resources, awaiting bribe decision", character.role.value
        )
        return HandleBlackmailFollowup()
    return None

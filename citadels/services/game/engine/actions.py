"""Game action types - explicit player inputs separated from game state.

Every model carries an ``action_type`` literal whose value is an
:class:`ActionTag`. The accepted payloads are stored verbatim in
``GameState.action_log`` and can be rebuilt with
:func:`build_action_from_payload` for replay.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from citadels.schemas.game_engine import ActionTag, CardSuit, DistrictName, Resource, RoleName


class CityDistrictTarget(BaseModel):
    """A district in someone's city."""

    player: int = Field(..., ge=0, description="Index of the city owner")
    district: DistrictName
    beautified: bool = False


# Draft
class DraftPickAction(BaseModel):
    action_type: Literal["draft_pick"] = "draft_pick"
    role: RoleName


class DraftDiscardAction(BaseModel):
    action_type: Literal["draft_discard"] = "draft_discard"
    role: RoleName


class TheaterAction(BaseModel):
    """Swap one of your roles with a random role of another player."""

    action_type: Literal["theater"] = "theater"
    role: RoleName
    player: int = Field(..., ge=0)


class TheaterPassAction(BaseModel):
    action_type: Literal["theater_pass"] = "theater_pass"


# Core turn
class GatherResourceGoldAction(BaseModel):
    action_type: Literal["gather_resource_gold"] = "gather_resource_gold"


class GatherResourceCardsAction(BaseModel):
    action_type: Literal["gather_resource_cards"] = "gather_resource_cards"


class GatherCardsPickAction(BaseModel):
    action_type: Literal["gather_cards_pick"] = "gather_cards_pick"
    district: DistrictName


class RegularBuild(BaseModel):
    method: Literal["regular"] = "regular"
    district: DistrictName


class FrameworkBuild(BaseModel):
    """Destroy your Framework instead of paying for ``district``."""

    method: Literal["framework"] = "framework"
    district: DistrictName


class NecropolisBuild(BaseModel):
    """Destroy a district of your own city instead of paying for the Necropolis."""

    method: Literal["necropolis"] = "necropolis"
    sacrifice: CityDistrictTarget


class ThievesDenBuild(BaseModel):
    """Pay part of the Thieves' Den with cards from hand, 1 card per gold."""

    method: Literal["thieves_den"] = "thieves_den"
    discard: list[DistrictName] = []


class CardinalBuild(BaseModel):
    """Give cards to ``player`` and take 1 gold per card to cover the cost."""

    method: Literal["cardinal"] = "cardinal"
    district: DistrictName
    discard: list[DistrictName] = []
    player: int = Field(..., ge=0)


BuildMethod = Annotated[
    RegularBuild | FrameworkBuild | NecropolisBuild | ThievesDenBuild | CardinalBuild,
    Field(discriminator="method"),
]


class BuildAction(BaseModel):
    action_type: Literal["build"] = "build"
    build: BuildMethod


class EndTurnAction(BaseModel):
    action_type: Literal["end_turn"] = "end_turn"


class PassAction(BaseModel):
    """Decline to act on a pending warrant or blackmail."""

    action_type: Literal["pass"] = "pass"


# Income
class GoldFromNobilityAction(BaseModel):
    action_type: Literal["gold_from_nobility"] = "gold_from_nobility"


class GoldFromReligionAction(BaseModel):
    action_type: Literal["gold_from_religion"] = "gold_from_religion"


class GoldFromTradeAction(BaseModel):
    action_type: Literal["gold_from_trade"] = "gold_from_trade"


class GoldFromMilitaryAction(BaseModel):
    action_type: Literal["gold_from_military"] = "gold_from_military"


class CardsFromNobilityAction(BaseModel):
    action_type: Literal["cards_from_nobility"] = "cards_from_nobility"


class CardsFromReligionAction(BaseModel):
    action_type: Literal["cards_from_religion"] = "cards_from_religion"


class ResourcesFromReligionAction(BaseModel):
    """Split the religious income between gold and cards."""

    action_type: Literal["resources_from_religion"] = "resources_from_religion"
    gold: int = Field(..., ge=0)
    cards: int = Field(..., ge=0)


class MerchantGainOneGoldAction(BaseModel):
    action_type: Literal["merchant_gain_one_gold"] = "merchant_gain_one_gold"


class ArchitectGainCardsAction(BaseModel):
    action_type: Literal["architect_gain_cards"] = "architect_gain_cards"


class NavigatorGainAction(BaseModel):
    action_type: Literal["navigator_gain"] = "navigator_gain"
    resource: Resource


class CollectTaxesAction(BaseModel):
    action_type: Literal["collect_taxes"] = "collect_taxes"


class QueenGainGoldAction(BaseModel):
    action_type: Literal["queen_gain_gold"] = "queen_gain_gold"


# Markers and responses
class AssassinateAction(BaseModel):
    action_type: Literal["assassinate"] = "assassinate"
    role: RoleName


class BewitchAction(BaseModel):
    action_type: Literal["bewitch"] = "bewitch"
    role: RoleName


class SendWarrantsAction(BaseModel):
    action_type: Literal["send_warrants"] = "send_warrants"
    signed: RoleName
    unsigned: list[RoleName] = Field(..., min_length=2, max_length=2)


class RevealWarrantAction(BaseModel):
    action_type: Literal["reveal_warrant"] = "reveal_warrant"


class StealAction(BaseModel):
    action_type: Literal["steal"] = "steal"
    role: RoleName


class BlackmailAction(BaseModel):
    action_type: Literal["blackmail"] = "blackmail"
    flowered: RoleName
    unmarked: RoleName


class PayBribeAction(BaseModel):
    action_type: Literal["pay_bribe"] = "pay_bribe"


class IgnoreBlackmailAction(BaseModel):
    action_type: Literal["ignore_blackmail"] = "ignore_blackmail"


class RevealBlackmailAction(BaseModel):
    action_type: Literal["reveal_blackmail"] = "reveal_blackmail"


# Hands
class SpyAction(BaseModel):
    action_type: Literal["spy"] = "spy"
    player: int = Field(..., ge=0)
    suit: CardSuit


class SpyAcknowledgeAction(BaseModel):
    action_type: Literal["spy_acknowledge"] = "spy_acknowledge"


class MagicTargetPlayer(BaseModel):
    """Exchange your whole hand with another player's."""

    target: Literal["player"] = "player"
    player: int = Field(..., ge=0)


class MagicTargetDeck(BaseModel):
    """Discard cards from hand and draw the same number."""

    target: Literal["deck"] = "deck"
    districts: list[DistrictName] = []


MagicTarget = Annotated[
    MagicTargetPlayer | MagicTargetDeck,
    Field(discriminator="target"),
]


class MagicAction(BaseModel):
    action_type: Literal["magic"] = "magic"
    magic: MagicTarget


class WizardPeekAction(BaseModel):
    action_type: Literal["wizard_peek"] = "wizard_peek"
    player: int = Field(..., ge=0)


class WizardKeep(BaseModel):
    method: Literal["pick"] = "pick"
    district: DistrictName


class WizardBuild(BaseModel):
    method: Literal["build"] = "build"
    district: DistrictName


class WizardFrameworkBuild(BaseModel):
    method: Literal["framework"] = "framework"
    district: DistrictName


class WizardNecropolisBuild(BaseModel):
    method: Literal["necropolis"] = "necropolis"
    sacrifice: CityDistrictTarget


class WizardThievesDenBuild(BaseModel):
    method: Literal["thieves_den"] = "thieves_den"
    discard: list[DistrictName] = []


WizardMethod = Annotated[
    WizardKeep
    | WizardBuild
    | WizardFrameworkBuild
    | WizardNecropolisBuild
    | WizardThievesDenBuild,
    Field(discriminator="method"),
]


class WizardPickAction(BaseModel):
    action_type: Literal["wizard_pick"] = "wizard_pick"
    pick: WizardMethod


class SeerTakeAction(BaseModel):
    action_type: Literal["seer_take"] = "seer_take"


class SeerGift(BaseModel):
    player: int = Field(..., ge=0)
    district: DistrictName


class SeerDistributeAction(BaseModel):
    action_type: Literal["seer_distribute"] = "seer_distribute"
    seer: list[SeerGift]


class ScholarRevealAction(BaseModel):
    action_type: Literal["scholar_reveal"] = "scholar_reveal"


class ScholarPickAction(BaseModel):
    action_type: Literal["scholar_pick"] = "scholar_pick"
    district: DistrictName


class TakeFromRichAction(BaseModel):
    action_type: Literal["take_from_rich"] = "take_from_rich"
    player: int = Field(..., ge=0)


# Crown
class TakeCrownAction(BaseModel):
    action_type: Literal["take_crown"] = "take_crown"


class EmperorGiveCrownAction(BaseModel):
    action_type: Literal["emperor_give_crown"] = "emperor_give_crown"
    player: int = Field(..., ge=0)
    resource: Resource


class EmperorHeirGiveCrownAction(BaseModel):
    action_type: Literal["emperor_heir_give_crown"] = "emperor_heir_give_crown"
    player: int = Field(..., ge=0)


# City
class WarlordDestroyAction(BaseModel):
    action_type: Literal["warlord_destroy"] = "warlord_destroy"
    district: CityDistrictTarget


class MarshalSeizeAction(BaseModel):
    action_type: Literal["marshal_seize"] = "marshal_seize"
    district: CityDistrictTarget


class DiplomatTradeAction(BaseModel):
    """Exchange ``district`` from your city for ``theirs``."""

    action_type: Literal["diplomat_trade"] = "diplomat_trade"
    district: CityDistrictTarget
    theirs: CityDistrictTarget


class BeautifyAction(BaseModel):
    action_type: Literal["beautify"] = "beautify"
    district: CityDistrictTarget


class SmithyAction(BaseModel):
    action_type: Literal["smithy"] = "smithy"


class LaboratoryAction(BaseModel):
    action_type: Literal["laboratory"] = "laboratory"
    district: DistrictName


class MuseumAction(BaseModel):
    action_type: Literal["museum"] = "museum"
    district: DistrictName


class ArmoryAction(BaseModel):
    action_type: Literal["armory"] = "armory"
    district: CityDistrictTarget


# Union type for all player actions
PlayerAction = Annotated[
    DraftPickAction
    | DraftDiscardAction
    | TheaterAction
    | TheaterPassAction
    | GatherResourceGoldAction
    | GatherResourceCardsAction
    | GatherCardsPickAction
    | BuildAction
    | EndTurnAction
    | PassAction
    | GoldFromNobilityAction
    | GoldFromReligionAction
    | GoldFromTradeAction
    | GoldFromMilitaryAction
    | CardsFromNobilityAction
    | CardsFromReligionAction
    | ResourcesFromReligionAction
    | MerchantGainOneGoldAction
    | ArchitectGainCardsAction
    | NavigatorGainAction
    | CollectTaxesAction
    | QueenGainGoldAction
    | AssassinateAction
    | BewitchAction
    | SendWarrantsAction
    | RevealWarrantAction
    | StealAction
    | BlackmailAction
    | PayBribeAction
    | IgnoreBlackmailAction
    | RevealBlackmailAction
    | SpyAction
    | SpyAcknowledgeAction
    | MagicAction
    | WizardPeekAction
    | WizardPickAction
    | SeerTakeAction
    | SeerDistributeAction
    | ScholarRevealAction
    | ScholarPickAction
    | TakeFromRichAction
    | TakeCrownAction
    | EmperorGiveCrownAction
    | EmperorHeirGiveCrownAction
    | WarlordDestroyAction
    | MarshalSeizeAction
    | DiplomatTradeAction
    | BeautifyAction
    | SmithyAction
    | LaboratoryAction
    | MuseumAction
    | ArmoryAction,
    Field(discriminator="action_type"),
]

_player_action_adapter: TypeAdapter[PlayerAction] = TypeAdapter(PlayerAction)


def action_tag(action: BaseModel) -> ActionTag:
    """Return the tag of a concrete action model."""
    return ActionTag(action.action_type)  # type: ignore[attr-defined]


def build_action_from_payload(payload: dict[str, Any]) -> PlayerAction:
    """Build a typed action from a raw payload dict.

    Args:
        payload: Dict with 'action_type' key and action-specific fields.

    Returns:
        The matching PlayerAction model.

    Raises:
        ValueError: If action_type is missing or unknown, or the fields don't
            match the action (pydantic's ValidationError is a ValueError).
    """
    action_type = payload.get("action_type")

    if action_type is None:
        raise ValueError("Missing action_type in payload")

    if action_type not in {tag.value for tag in ActionTag}:
        raise ValueError(f"Unknown action_type: {action_type}")

    return _player_action_adapter.validate_python(payload)

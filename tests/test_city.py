"""Tests for abilities that change cities.

Critical scenarios tested:
- Warlord destroys for 1 less than the cost; Keep, Bishop and Great Wall rules
- Marshal seizes cheap districts and pays their owner
- Diplomat exchanges districts and pays the difference
- Artist beautifies districts
- Smithy, Laboratory, Museum and Armory actions
- Crown handover by the Emperor
"""

from citadels.schemas.game_engine import (
    ActionTag,
    CityDistrict,
    DistrictName,
    Resource,
    RoleName,
)
from citadels.services.game.engine.actions import (
    ArmoryAction,
    BeautifyAction,
    CityDistrictTarget,
    DiplomatTradeAction,
    EmperorGiveCrownAction,
    EndTurnAction,
    LaboratoryAction,
    MarshalSeizeAction,
    MuseumAction,
    SmithyAction,
    WarlordDestroyAction,
)
from citadels.services.game.engine.legal_actions import available_actions
from citadels.services.game.engine.validation import ErrorCode

from .conftest import (
    BASE_ROLES,
    create_call_state,
    create_player,
    perform,
    perform_ok,
)


def _with(role: RoleName, replaced: RoleName) -> list[RoleName]:
    return [role if r == replaced else r for r in BASE_ROLES]


def _target(player: int, district: DistrictName, beautified: bool = False) -> CityDistrictTarget:
    return CityDistrictTarget(player=player, district=district, beautified=beautified)


def _rank_eight(active, gold=0, city=None, other_city=None, owners=None, roles=None):
    """Player 0 plays ``active``; player 1 owns the targeted city."""
    players = [create_player(0, gold=gold, city=city), create_player(1)]
    if other_city is not None:
        players[1].city = other_city
    return create_call_state(
        {active: 0, **(owners or {})},
        active=active,
        players=players,
        roles=roles,
    )


class TestWarlord:
    """Test destroying districts."""

    def test_destroy(self):
        """Destroying costs 1 less than the district."""
        state = _rank_eight(
            RoleName.WARLORD, gold=3, other_city=[CityDistrict(name=DistrictName.MANOR)]
        )
        state = perform_ok(state, WarlordDestroyAction(district=_target(1, DistrictName.MANOR)))

        assert state.players[0].gold == 1
        assert state.players[1].city == []
        assert state.deck.discard_pile == [DistrictName.MANOR]
        assert state.logs[-1] == "Alice destroys Bob's Manor for 2 gold."

    def test_beautified_costs_more(self):
        """A beautified district costs 1 more to destroy."""
        state = _rank_eight(
            RoleName.WARLORD,
            gold=2,
            other_city=[CityDistrict(name=DistrictName.MANOR, beautified=True)],
        )
        result = perform(
            state, WarlordDestroyAction(district=_target(1, DistrictName.MANOR, beautified=True))
        )
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_great_wall(self):
        """The Great Wall makes the other districts 1 more expensive."""
        city = [CityDistrict(name=DistrictName.MANOR), CityDistrict(name=DistrictName.GREAT_WALL)]
        state = _rank_eight(RoleName.WARLORD, gold=3, other_city=city)
        state = perform_ok(state, WarlordDestroyAction(district=_target(1, DistrictName.MANOR)))
        assert state.players[0].gold == 0

    def test_keep(self):
        """The Keep can't be destroyed."""
        state = _rank_eight(
            RoleName.WARLORD, gold=5, other_city=[CityDistrict(name=DistrictName.KEEP)]
        )
        result = perform(state, WarlordDestroyAction(district=_target(1, DistrictName.KEEP)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_bishop_protects(self):
        """A revealed Bishop protects its owner's city."""
        state = _rank_eight(
            RoleName.WARLORD,
            gold=5,
            other_city=[CityDistrict(name=DistrictName.MANOR)],
            owners={RoleName.BISHOP: 1},
        )
        result = perform(state, WarlordDestroyAction(district=_target(1, DistrictName.MANOR)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_unrevealed_bishop_does_not_protect(self):
        """A Bishop who never revealed (killed) protects nothing."""
        state = _rank_eight(
            RoleName.WARLORD,
            gold=5,
            other_city=[CityDistrict(name=DistrictName.MANOR)],
            owners={RoleName.BISHOP: 1},
        )
        next(c for c in state.characters if c.role == RoleName.BISHOP).revealed = False
        state = perform_ok(state, WarlordDestroyAction(district=_target(1, DistrictName.MANOR)))
        assert state.players[1].city == []

    def test_missing_district(self):
        """The target must be in that city."""
        state = _rank_eight(RoleName.WARLORD, gold=5)
        result = perform(state, WarlordDestroyAction(district=_target(1, DistrictName.MANOR)))
        assert result.error_code == ErrorCode.NOT_FOUND

    def test_destroyed_museum_takes_its_cards(self):
        """Cards under a destroyed Museum go to the deck with it."""
        state = _rank_eight(
            RoleName.WARLORD, gold=3, other_city=[CityDistrict(name=DistrictName.MUSEUM)]
        )
        state.museum.cards = [DistrictName.TEMPLE, DistrictName.CHURCH]
        state = perform_ok(state, WarlordDestroyAction(district=_target(1, DistrictName.MUSEUM)))

        assert sorted(state.deck.discard_pile) == sorted(
            [DistrictName.MUSEUM, DistrictName.TEMPLE, DistrictName.CHURCH]
        )
        assert state.museum.cards == []


class TestMarshal:
    """Test seizing districts."""

    ROLES = _with(RoleName.MARSHAL, RoleName.WARLORD)

    def test_seize(self):
        """The Marshal pays the owner and takes the district."""
        state = _rank_eight(
            RoleName.MARSHAL,
            gold=3,
            other_city=[CityDistrict(name=DistrictName.TAVERN, beautified=True)],
            roles=self.ROLES,
        )
        state = perform_ok(
            state,
            MarshalSeizeAction(district=_target(1, DistrictName.TAVERN, beautified=True)),
        )

        assert state.players[0].gold == 1
        assert state.players[1].gold == 2
        assert state.players[0].city == [CityDistrict(name=DistrictName.TAVERN, beautified=True)]
        assert state.players[1].city == []

    def test_expensive_district(self):
        """Districts costing more than 3 can't be seized."""
        state = _rank_eight(
            RoleName.MARSHAL,
            gold=5,
            other_city=[CityDistrict(name=DistrictName.CASTLE)],
            roles=self.ROLES,
        )
        result = perform(state, MarshalSeizeAction(district=_target(1, DistrictName.CASTLE)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_duplicate(self):
        """The Marshal can't seize a district already in their city."""
        state = _rank_eight(
            RoleName.MARSHAL,
            gold=5,
            city=[DistrictName.MANOR],
            other_city=[CityDistrict(name=DistrictName.MANOR)],
            roles=self.ROLES,
        )
        result = perform(state, MarshalSeizeAction(district=_target(1, DistrictName.MANOR)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_own_city(self):
        """The Marshal can't seize from their own city."""
        state = _rank_eight(
            RoleName.MARSHAL, gold=5, city=[DistrictName.MANOR], roles=self.ROLES
        )
        result = perform(state, MarshalSeizeAction(district=_target(0, DistrictName.MANOR)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET


class TestDiplomat:
    """Test exchanging districts."""

    ROLES = _with(RoleName.DIPLOMAT, RoleName.WARLORD)

    def test_trade_pays_difference(self):
        """The Diplomat pays the cost difference to the other player."""
        state = _rank_eight(
            RoleName.DIPLOMAT,
            gold=2,
            city=[DistrictName.TEMPLE],
            other_city=[CityDistrict(name=DistrictName.MANOR)],
            roles=self.ROLES,
        )
        state = perform_ok(
            state,
            DiplomatTradeAction(
                district=_target(0, DistrictName.TEMPLE),
                theirs=_target(1, DistrictName.MANOR),
            ),
        )

        assert [d.name for d in state.players[0].city] == [DistrictName.MANOR]
        assert [d.name for d in state.players[1].city] == [DistrictName.TEMPLE]
        assert state.players[0].gold == 0
        assert state.players[1].gold == 2

    def test_trade_down_is_free(self):
        """Giving a more expensive district costs nothing."""
        state = _rank_eight(
            RoleName.DIPLOMAT,
            city=[DistrictName.PALACE],
            other_city=[CityDistrict(name=DistrictName.TEMPLE)],
            roles=self.ROLES,
        )
        state = perform_ok(
            state,
            DiplomatTradeAction(
                district=_target(0, DistrictName.PALACE),
                theirs=_target(1, DistrictName.TEMPLE),
            ),
        )
        assert state.players[1].gold == 0
        assert [d.name for d in state.players[0].city] == [DistrictName.TEMPLE]

    def test_must_give_own_district(self):
        """The given district comes from the Diplomat's city."""
        state = _rank_eight(
            RoleName.DIPLOMAT,
            city=[DistrictName.PALACE],
            other_city=[CityDistrict(name=DistrictName.TEMPLE)],
            roles=self.ROLES,
        )
        result = perform(
            state,
            DiplomatTradeAction(
                district=_target(1, DistrictName.TEMPLE),
                theirs=_target(0, DistrictName.PALACE),
            ),
        )
        assert result.error_code == ErrorCode.ILLEGAL_TARGET


class TestArtist:
    """Test beautifying districts."""

    ROLES = [*BASE_ROLES, RoleName.ARTIST]

    def _artist_state(self, gold=2, city=None):
        players = [create_player(0, gold=gold, city=city), create_player(1)]
        return create_call_state(
            {RoleName.ARTIST: 0}, active=RoleName.ARTIST, players=players, roles=self.ROLES
        )

    def test_beautify(self):
        """Beautifying costs 1 gold."""
        state = self._artist_state(city=[DistrictName.MANOR])
        state = perform_ok(state, BeautifyAction(district=_target(0, DistrictName.MANOR)))

        assert state.players[0].gold == 1
        assert state.players[0].city[0].beautified

    def test_beautify_once(self):
        """A district can be beautified only once."""
        state = self._artist_state(city=[DistrictName.MANOR])
        state = perform_ok(state, BeautifyAction(district=_target(0, DistrictName.MANOR)))
        result = perform(state, BeautifyAction(district=_target(0, DistrictName.MANOR)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_two_per_turn(self):
        """The Artist beautifies at most two districts per turn."""
        state = self._artist_state(
            gold=5, city=[DistrictName.MANOR, DistrictName.TEMPLE, DistrictName.CHURCH]
        )
        state = perform_ok(state, BeautifyAction(district=_target(0, DistrictName.MANOR)))
        assert ActionTag.BEAUTIFY in available_actions(state)
        state = perform_ok(state, BeautifyAction(district=_target(0, DistrictName.TEMPLE)))
        assert ActionTag.BEAUTIFY not in available_actions(state)

    def test_other_city(self):
        """Only the Artist's own city can be beautified."""
        state = self._artist_state(city=[DistrictName.MANOR])
        result = perform(state, BeautifyAction(district=_target(1, DistrictName.MANOR)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET


class TestDistrictActions:
    """Test once-per-turn district actions."""

    def _owner_state(self, gold=0, hand=None, city=None, other_city=None):
        players = [create_player(0, gold=gold, hand=hand, city=city), create_player(1)]
        if other_city is not None:
            players[1].city = other_city
        return create_call_state(
            {RoleName.MERCHANT: 0, RoleName.BISHOP: 1}, active=RoleName.MERCHANT, players=players
        )

    def test_smithy(self):
        """Pay 2 gold to draw 3 cards, once per turn."""
        state = self._owner_state(gold=4, city=[DistrictName.SMITHY])
        state = perform_ok(state, SmithyAction())

        assert state.players[0].gold == 2
        assert len(state.players[0].hand) == 3
        assert ActionTag.SMITHY not in available_actions(state)

    def test_smithy_needs_gold(self):
        """The Smithy costs 2 gold."""
        state = self._owner_state(gold=1, city=[DistrictName.SMITHY])
        assert perform(state, SmithyAction()).error_code == ErrorCode.ILLEGAL_TARGET

    def test_district_action_needs_district(self):
        """District actions are only offered to their owner."""
        state = self._owner_state(gold=4)
        assert ActionTag.SMITHY not in available_actions(state)
        assert perform(state, SmithyAction()).error_code == ErrorCode.ILLEGAL_STATE

    def test_laboratory(self):
        """Discard a card for 2 gold."""
        state = self._owner_state(hand=[DistrictName.TEMPLE], city=[DistrictName.LABORATORY])
        state = perform_ok(state, LaboratoryAction(district=DistrictName.TEMPLE))

        assert state.players[0].gold == 2
        assert state.players[0].hand == []
        assert state.deck.discard_pile == [DistrictName.TEMPLE]

    def test_museum(self):
        """A card tucked under the Museum gets an artifact."""
        state = self._owner_state(hand=[DistrictName.TEMPLE], city=[DistrictName.MUSEUM])
        state = perform_ok(state, MuseumAction(district=DistrictName.TEMPLE))

        assert state.museum.cards == [DistrictName.TEMPLE]
        assert len(state.museum.artifacts) == 19
        assert state.players[0].hand == []

    def test_armory_ignores_bishop(self):
        """The Armory destroys itself and any district, even under the Bishop."""
        state = self._owner_state(
            city=[DistrictName.ARMORY],
            other_city=[CityDistrict(name=DistrictName.PALACE)],
        )
        state = perform_ok(state, ArmoryAction(district=_target(1, DistrictName.PALACE)))

        assert state.players[0].city == []
        assert state.players[1].city == []
        assert state.deck.discard_pile == [DistrictName.ARMORY, DistrictName.PALACE]

    def test_armory_cannot_target_itself(self):
        """The Armory is not its own target."""
        state = self._owner_state(city=[DistrictName.ARMORY])
        result = perform(state, ArmoryAction(district=_target(0, DistrictName.ARMORY)))
        assert result.error_code == ErrorCode.ILLEGAL_TARGET


class TestEmperor:
    """Test handing the crown over during the Emperor's turn."""

    ROLES = _with(RoleName.EMPEROR, RoleName.KING)

    def _emperor_state(self):
        players = [
            create_player(0),
            create_player(1),
            create_player(2, gold=2, hand=[DistrictName.TEMPLE]),
            create_player(3),
        ]
        return create_call_state(
            {RoleName.EMPEROR: 1}, active=RoleName.EMPEROR, players=players, roles=self.ROLES
        )

    def test_take_gold(self):
        """The new crown holder pays 1 gold."""
        state = perform_ok(
            self._emperor_state(), EmperorGiveCrownAction(player=2, resource=Resource.GOLD)
        )
        assert state.crowned == 2
        assert state.players[2].gold == 1
        assert state.players[1].gold == 1

    def test_take_card(self):
        """The new crown holder gives a random card."""
        state = perform_ok(
            self._emperor_state(), EmperorGiveCrownAction(player=2, resource=Resource.CARDS)
        )
        assert state.players[1].hand == [DistrictName.TEMPLE]
        assert state.players[2].hand == []

    def test_nothing_to_take(self):
        """A player with nothing to give still gets the crown."""
        state = perform_ok(
            self._emperor_state(), EmperorGiveCrownAction(player=3, resource=Resource.GOLD)
        )
        assert state.crowned == 3
        assert state.logs[-1].endswith("takes nothing.")

    def test_no_heir_call_after_handover(self):
        """An Emperor who handed the crown over gets no end of round call."""
        state = perform_ok(
            self._emperor_state(), EmperorGiveCrownAction(player=2, resource=Resource.GOLD)
        )
        state = perform_ok(state, EndTurnAction())
        assert state.active_turn.turn_type == "draft"
        assert state.active_turn.draft.player_index == 2

    def test_crown_to_self(self):
        """The Emperor can't keep the crown."""
        result = perform(
            self._emperor_state(), EmperorGiveCrownAction(player=1, resource=Resource.GOLD)
        )
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

"""Tests for whole games played out by autoplay.

Critical scenarios tested:
- Within a round, characters are activated in strictly increasing rank
- Killed and Bewitched markers are gone once the next round starts
- Districts get built and games reach the game over state
- The action log of a finished game replays to the same state
"""

from citadels.schemas.game_engine import (
    CallTurn,
    DraftTurn,
    GameOverTurn,
    Marker,
    MarkerType,
    RoleName,
)
from citadels.services.game import replay_game
from citadels.services.game.engine import acting_player_index
from citadels.services.game.engine.actions import BewitchAction, GatherResourceGoldAction
from citadels.services.game.engine.roles import rank_of

from .conftest import BASE_ROLES, autoplay_action, create_call_state, perform_ok

FULL_GAME_ACTIONS = 600
ONE_SHOT_MARKERS = (MarkerType.KILLED, MarkerType.BEWITCHED)


def _play(state, count=FULL_GAME_ACTIONS):
    """Every state seen while autoplaying, stopping early at game over."""
    states = [state]
    for _ in range(count):
        if acting_player_index(state) is None:
            break
        state = perform_ok(state, autoplay_action(state))
        states.append(state)
    return states


def _ranks_by_round(states) -> dict[int, list[int]]:
    ranks: dict[int, list[int]] = {}
    for state in states:
        turn = state.active_turn
        if not isinstance(turn, CallTurn) or turn.end_of_round:
            continue
        rank = int(rank_of(state.characters[turn.index].role))
        called = ranks.setdefault(state.round, [])
        if not called or called[-1] != rank:
            called.append(rank)
    return ranks


class TestRankOrder:
    """Test the order characters are activated in over many rounds."""

    def test_ranks_increase_within_each_round(self, four_player_game):
        """No round ever goes back to a lower rank."""
        ranks = _ranks_by_round(_play(four_player_game))

        assert len(ranks) >= 3
        for called in ranks.values():
            assert all(a < b for a, b in zip(called, called[1:])), called

    def test_two_player_ranks(self, two_player_game):
        """Two player rounds, with two roles each, also call in rank order."""
        ranks = _ranks_by_round(_play(two_player_game))

        assert len(ranks) >= 3
        for called in ranks.values():
            assert all(a < b for a, b in zip(called, called[1:])), called


class TestOneShotMarkers:
    """Test that Killed and Bewitched markers never outlive their round."""

    def test_markers_cleared_at_next_round(self):
        """A killed King and a bewitched Merchant start the next round clean."""
        state = create_call_state(
            {RoleName.WITCH: 0, RoleName.MERCHANT: 1, RoleName.KING: 2, RoleName.WARLORD: 3},
            active=RoleName.WITCH,
            roles=[RoleName.WITCH if r == RoleName.ASSASSIN else r for r in BASE_ROLES],
            markers={RoleName.KING: [Marker(marker_type=MarkerType.KILLED)]},
            gathered=False,
        )
        state = perform_ok(state, GatherResourceGoldAction())
        state = perform_ok(state, BewitchAction(role=RoleName.MERCHANT))

        states = _play(state, 40)
        controlled = [
            s.characters[s.active_turn.index].controlled_by
            for s in states
            if isinstance(s.active_turn, CallTurn)
            and s.characters[s.active_turn.index].role == RoleName.MERCHANT
        ]
        assert 0 in controlled

        next_round = next(s for s in states if s.round == 2)
        assert isinstance(next_round.active_turn, DraftTurn)
        for character in next_round.characters:
            assert all(m.marker_type not in ONE_SHOT_MARKERS for m in character.markers)
            assert character.controlled_by is None
        assert next_round.crowned == 2

    def test_markers_cleared_every_round(self, four_player_game):
        """Each new draft starts without any Killed or Bewitched marker."""
        states = _play(four_player_game)
        drafts = [
            s
            for previous, s in zip(states, states[1:])
            if s.round > previous.round
        ]

        assert drafts
        for state in drafts:
            for character in state.characters:
                assert all(m.marker_type not in ONE_SHOT_MARKERS for m in character.markers)


class TestFinishedGame:
    """Test games played until someone completes their city."""

    def test_game_reaches_game_over(self, four_player_game):
        """Autoplay builds districts until the game ends."""
        final = _play(four_player_game)[-1]

        assert isinstance(final.active_turn, GameOverTurn)
        assert final.first_to_complete is not None
        assert any(len(p.city) >= 7 for p in final.players)
        assert "The game is over." in final.logs

    def test_finished_game_replays(self, two_player_game):
        """The full action log of a finished game replays to the same state."""
        final = _play(two_player_game)[-1]

        replayed = replay_game(final.config, final.action_log)
        assert replayed.model_dump() == final.model_dump()

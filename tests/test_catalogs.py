"""Tests for the static role and district catalogs.

Critical scenarios tested:
- 27 roles, three per rank
- 17 normal and 30 unique districts
- Every action tag has a handler
"""

from collections import Counter

from citadels.schemas.game_engine import ActionTag, CardSuit, DistrictName, Rank, RoleName
from citadels.services.game.engine.districts import (
    DISTRICT_ACTIONS,
    NORMAL_DISTRICTS,
    UNIQUE_DISTRICTS,
    district_data,
)
from citadels.services.game.engine.handlers import get_handler
from citadels.services.game.engine.roles import ROLES, rank_of, role_data, sort_by_rank


class TestRoles:
    """Test the role catalog."""

    def test_every_role_is_listed(self):
        """Each RoleName appears exactly once."""
        assert len(ROLES) == 27
        assert {data.name for data in ROLES} == set(RoleName)

    def test_three_roles_per_rank(self):
        """Every rank has three variants."""
        counts = Counter(data.rank for data in ROLES)
        assert counts == {rank: 3 for rank in Rank}

    def test_sort_by_rank(self):
        """Roles sort by rank regardless of input order."""
        roles = [RoleName.WARLORD, RoleName.ASSASSIN, RoleName.KING]
        assert sort_by_rank(roles) == [RoleName.ASSASSIN, RoleName.KING, RoleName.WARLORD]

    def test_build_limits(self):
        """Most roles build once; a few differ."""
        assert role_data(RoleName.ARCHITECT).build_limit == 3
        assert role_data(RoleName.NAVIGATOR).build_limit == 0
        assert role_data(RoleName.SEER).build_limit == 2
        assert role_data(RoleName.SCHOLAR).build_limit == 2
        assert role_data(RoleName.KING).build_limit == 1

    def test_rank_nine_roles(self):
        """The Queen needs five players, the others three."""
        assert rank_of(RoleName.QUEEN) == Rank.NINE
        assert role_data(RoleName.QUEEN).min_players == 5
        assert role_data(RoleName.ARTIST).min_players == 3
        assert role_data(RoleName.TAX_COLLECTOR).min_players == 3


class TestDistricts:
    """Test the district catalog."""

    def test_catalog_sizes(self):
        """17 normal and 30 unique districts."""
        assert len(NORMAL_DISTRICTS) == 17
        assert len(UNIQUE_DISTRICTS) == 30
        names = {d.name for d in NORMAL_DISTRICTS + UNIQUE_DISTRICTS}
        assert names == set(DistrictName)

    def test_unique_districts_have_unique_suit(self):
        """Only unique districts carry the unique suit."""
        assert all(d.is_unique for d in UNIQUE_DISTRICTS)
        assert not any(d.is_unique for d in NORMAL_DISTRICTS)

    def test_district_actions(self):
        """Four districts grant a once-per-turn action."""
        assert {d.name for d in DISTRICT_ACTIONS} == {
            DistrictName.SMITHY,
            DistrictName.LABORATORY,
            DistrictName.MUSEUM,
            DistrictName.ARMORY,
        }

    def test_costs(self):
        """Spot check printed costs and suits."""
        assert district_data(DistrictName.MANOR).cost == 3
        assert district_data(DistrictName.MANOR).suit == CardSuit.NOBLE
        assert district_data(DistrictName.STABLES).cost == 2
        assert district_data(DistrictName.THIEVES_DEN).cost == 6


class TestHandlerRegistry:
    """Test the action handler registry."""

    def test_every_tag_has_a_handler(self):
        """Looking up any tag returns a callable."""
        for tag in ActionTag:
            assert callable(get_handler(tag))

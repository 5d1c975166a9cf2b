"""
Tests for stack validation and the foldability predicate.
"""

from itertools import permutations

import pytest
from hypothesis import given, settings
import hypothesis.strategies as st

from folding import (
    CompletenessError,
    FoldingError,
    Joint,
    MapFolding,
    Parity,
    RangeError,
    joints_cross,
)


stacks = st.integers(min_value=1, max_value=12).flatmap(
    lambda n: st.permutations(list(range(1, n + 1)))
)


class TestFromStack:
    def test_zigzag_8(self):
        created = MapFolding.from_stack([1, 2, 3, 4, 5, 6, 7, 8])
        assert created.stack == (1, 2, 3, 4, 5, 6, 7, 8)

    def test_accepts_any_iterable(self):
        assert MapFolding.from_stack(iter([2, 1, 3])).stack == (2, 1, 3)

    def test_empty_stack(self):
        empty = MapFolding.from_stack([])
        assert empty.stack == ()
        assert len(empty) == 0
        assert empty.positions() == [0]

    def test_range_error_min_not_one(self):
        with pytest.raises(RangeError):
            MapFolding.from_stack([2, 5, 4, 3])

    def test_range_error_zero_based(self):
        with pytest.raises(RangeError):
            MapFolding.from_stack([0, 1, 2, 3, 4])

    def test_range_error_too_long(self):
        # six values but the largest is 5
        with pytest.raises(RangeError):
            MapFolding.from_stack([5, 3, 4, 5, 2, 1])

    def test_range_error_too_short(self):
        with pytest.raises(RangeError):
            MapFolding.from_stack([1, 2, 4])

    def test_completeness_error_duplicate(self):
        with pytest.raises(CompletenessError) as exc:
            MapFolding.from_stack([5, 3, 1, 2, 1])
        assert "[4]" in str(exc.value)

    def test_errors_share_base_class(self):
        assert issubclass(RangeError, FoldingError)
        assert issubclass(CompletenessError, FoldingError)
        assert issubclass(FoldingError, ValueError)

    def test_non_integer_values(self):
        with pytest.raises(TypeError):
            MapFolding.from_stack([1.0, 2.0])

    def test_direct_construction_is_validated(self):
        with pytest.raises(CompletenessError):
            MapFolding((1, 1, 2))
        with pytest.raises(RangeError):
            MapFolding((0, 1))

    def test_direct_construction_stores_tuple(self):
        f = MapFolding([2, 1])
        assert f.stack == (2, 1)
        assert hash(f) == hash(MapFolding((2, 1)))

    def test_immutable(self):
        f = MapFolding.from_stack([1, 2])
        with pytest.raises(AttributeError):
            f.stack = (2, 1)

    @given(stack=stacks)
    @settings(max_examples=200)
    def test_stack_round_trip(self, stack):
        assert MapFolding.from_stack(stack).stack == tuple(stack)


class TestPositions:
    def test_known_positions(self):
        f = MapFolding.from_stack([3, 1, 2])
        assert f.positions() == [0, 1, 2, 0]

    @given(stack=stacks)
    @settings(max_examples=200)
    def test_positions_invert_stack(self, stack):
        f = MapFolding.from_stack(stack)
        pos = f.positions()
        for layer, segment in enumerate(f.stack):
            assert pos[segment] == layer

    def test_positions_returns_fresh_list(self):
        f = MapFolding.from_stack([2, 1])
        pos = f.positions()
        pos[1] = 99
        assert f.positions() == [0, 1, 0]


class TestJoints:
    def test_joint_normalises_order(self):
        assert Joint.between(5, 2) == Joint(2, 5)

    def test_joint_rejects_degenerate_span(self):
        with pytest.raises(ValueError):
            Joint(3, 3)

    def test_crossing_is_exclusive_or(self):
        assert joints_cross(Joint(0, 2), Joint(1, 3))
        assert joints_cross(Joint(1, 3), Joint(0, 2))
        # nested
        assert not joints_cross(Joint(0, 3), Joint(1, 2))
        assert not joints_cross(Joint(1, 2), Joint(0, 3))
        # disjoint
        assert not joints_cross(Joint(0, 1), Joint(2, 3))
        # shared endpoint
        assert not joints_cross(Joint(0, 2), Joint(2, 4))

    def test_joints_by_parity(self):
        f = MapFolding.from_stack([1, 2, 3, 4, 5])
        assert f.joints(Parity.ODD) == [Joint(0, 1), Joint(2, 3)]
        assert f.joints(Parity.EVEN) == [Joint(1, 2), Joint(3, 4)]

    def test_parity_of_crease(self):
        assert Parity.of_crease(1) is Parity.ODD
        assert Parity.of_crease(2) is Parity.EVEN
        assert Parity.of_crease(7) is Parity.ODD


class TestIsFoldable:
    @pytest.mark.parametrize("n", range(1, 12))
    def test_zigzag_is_foldable(self, n):
        assert MapFolding.from_stack(range(1, n + 1)).is_foldable()

    def test_known_infeasible_8(self):
        assert not MapFolding.from_stack([5, 4, 3, 6, 2, 7, 1, 8]).is_foldable()

    def test_crossing_odd_creases(self):
        # creases (1,2) and (3,4) interleave
        assert not MapFolding.from_stack([1, 3, 2, 4]).is_foldable()

    def test_crossing_across_parities_is_allowed(self):
        # odd crease (1,2) spans layers 0..2, even crease (2,3) spans 1..2
        f = MapFolding.from_stack([1, 3, 2])
        assert f.is_foldable()

    def test_empty_is_foldable(self):
        assert MapFolding.from_stack([]).is_foldable()

    def test_reversed_stack_has_same_verdict(self):
        for p in permutations(range(1, 7)):
            f = MapFolding.from_stack(p)
            assert f.is_foldable() == MapFolding.from_stack(reversed(p)).is_foldable()

    def test_merging_parity_classes_changes_verdicts(self):
        def merged(f):
            pos = f.positions()
            seen = []
            for s in range(1, len(f)):
                new = Joint.between(pos[s], pos[s + 1])
                if any(joints_cross(old, new) for old in seen):
                    return False
                seen.append(new)
            return True

        stacks4 = [MapFolding.from_stack(p) for p in permutations(range(1, 5))]
        assert sum(f.is_foldable() for f in stacks4) == 16
        assert sum(merged(f) for f in stacks4) != 16

    def test_str(self):
        assert str(MapFolding.from_stack([2, 1, 3])) == "[2,1,3]"

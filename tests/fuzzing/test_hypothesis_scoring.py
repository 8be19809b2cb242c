"""
Hypothesis-based property tests for the scoring engine.

Properties checked:
- unadjusted_total is invariant under reordering and equals the per-entry
  weight sum of the selected project
- totals of disjoint projects add up to the total of all entries
- compute_vaf stays within [0.65, 1.35] and follows the formula
- adjusted_total is 0 for an empty project and never exceeds 1.35x raw
- weight_for and compute_vaf are pure
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from fpa_engines.scoring import (
    adjusted_total,
    build_entry,
    compute_vaf,
    unadjusted_total,
    weight_for,
)
from fpa_kernel.domain.values import (
    CharacteristicCode,
    Complexity,
    FunctionType,
    GeneralCharacteristic,
)

PROJECT_IDS = ("1", "2", "3")

degrees = st.lists(st.integers(min_value=0, max_value=5), min_size=14, max_size=14)


@st.composite
def entries(draw, max_size=30):
    specs = draw(st.lists(
        st.tuples(
            st.sampled_from(list(FunctionType)),
            st.sampled_from(list(Complexity)),
            st.sampled_from(PROJECT_IDS),
        ),
        max_size=max_size,
    ))
    return [
        build_entry(ftype, f"Function {i}", tier, project_id)
        for i, (ftype, tier, project_id) in enumerate(specs)
    ]


def _characteristics(values):
    return tuple(
        GeneralCharacteristic(code, degree)
        for code, degree in zip(CharacteristicCode, values, strict=True)
    )


class TestUnadjustedTotalProperties:

    @given(items=entries(), data=st.data())
    @settings(max_examples=100, deadline=None)
    def test_reordering_invariant(self, items, data):
        shuffled = data.draw(st.permutations(items))
        for project_id in PROJECT_IDS:
            assert unadjusted_total(shuffled, project_id) == unadjusted_total(items, project_id)

    @given(items=entries())
    @settings(max_examples=100, deadline=None)
    def test_matches_weight_sum(self, items):
        expected = sum(
            weight_for(e.function_type, e.complexity)
            for e in items if e.project_id == "1"
        )
        assert unadjusted_total(items, "1") == expected

    @given(items=entries())
    @settings(max_examples=100, deadline=None)
    def test_projects_partition_the_total(self, items):
        per_project = sum(unadjusted_total(items, p) for p in PROJECT_IDS)
        assert per_project == sum(e.points for e in items)

    @given(items=entries())
    @settings(max_examples=50, deadline=None)
    def test_unknown_project_is_zero(self, items):
        assert unadjusted_total(items, "absent") == 0


class TestVAFProperties:

    @given(values=degrees)
    @settings(max_examples=200, deadline=None)
    def test_range(self, values):
        vaf = compute_vaf(_characteristics(values))
        assert Decimal("0.65") <= vaf <= Decimal("1.35")

    @given(values=degrees)
    @settings(max_examples=200, deadline=None)
    def test_formula(self, values):
        vaf = compute_vaf(_characteristics(values))
        assert vaf == Decimal(sum(values)) * Decimal("0.01") + Decimal("0.65")

    @given(values=degrees)
    @settings(max_examples=50, deadline=None)
    def test_pure(self, values):
        characteristics = _characteristics(values)
        assert compute_vaf(characteristics) == compute_vaf(characteristics)


class TestAdjustedTotalProperties:

    @given(values=degrees)
    @settings(max_examples=50, deadline=None)
    def test_zero_unadjusted(self, values):
        assert adjusted_total(0, compute_vaf(_characteristics(values))) == 0

    @given(raw=st.integers(min_value=0, max_value=100_000), values=degrees)
    @settings(max_examples=200, deadline=None)
    def test_bounded_by_vaf_range(self, raw, values):
        adjusted = adjusted_total(raw, compute_vaf(_characteristics(values)))
        assert raw * Decimal("0.65") <= adjusted <= raw * Decimal("1.35")

    @given(
        ftype=st.sampled_from(list(FunctionType)),
        tier=st.sampled_from(list(Complexity)),
    )
    def test_weight_pure(self, ftype, tier):
        assert weight_for(ftype, tier) == weight_for(ftype, tier)

"""
Tests for the FPA Scoring Engine.

Covers:
- Weight table lookup for all fifteen (type, complexity) pairs
- Entry construction with derived points
- Unadjusted totals per project
- Value Adjustment Factor and its precondition checks
- Adjusted totals and the rounding rule
- Project totals and multi-project summaries
"""

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from itertools import product

import pytest

from fpa_engines.scoring import (
    COMPLEXITY_WEIGHTS,
    adjusted_total,
    build_entry,
    compute_vaf,
    project_totals,
    summarize_projects,
    unadjusted_total,
    weight_for,
)
from fpa_kernel.domain.values import (
    CharacteristicCode,
    Complexity,
    FunctionType,
    GeneralCharacteristic,
    Project,
)
from fpa_kernel.exceptions import (
    CharacteristicCountError,
    CharacteristicNotFoundError,
    DegreeOfInfluenceOutOfRangeError,
    DuplicateCharacteristicError,
    EmptyNameError,
    InvalidComplexityError,
    InvalidFunctionTypeError,
    ValidationError,
)

ILF = FunctionType.INTERNAL_LOGICAL_FILE
EIF = FunctionType.EXTERNAL_INTERFACE_FILE
EI = FunctionType.EXTERNAL_INPUT
EO = FunctionType.EXTERNAL_OUTPUT
EQ = FunctionType.EXTERNAL_QUERY
LOW, MEDIUM, HIGH = Complexity.LOW, Complexity.MEDIUM, Complexity.HIGH


class TestWeightFor:
    """Tests for the complexity-to-weight lookup."""

    @pytest.mark.parametrize(
        "function_type, complexity, expected",
        [
            (ILF, LOW, 7),
            (ILF, MEDIUM, 10),
            (ILF, HIGH, 15),
            (EIF, LOW, 5),
            (EIF, MEDIUM, 7),
            (EIF, HIGH, 10),
            (EI, LOW, 3),
            (EI, MEDIUM, 4),
            (EI, HIGH, 6),
            (EO, LOW, 4),
            (EO, MEDIUM, 5),
            (EO, HIGH, 7),
            (EQ, LOW, 3),
            (EQ, MEDIUM, 4),
            (EQ, HIGH, 6),
        ],
    )
    def test_table_value(self, function_type, complexity, expected):
        assert weight_for(function_type, complexity) == expected

    def test_table_is_total(self):
        """Every pair of the Cartesian product resolves to a positive weight."""
        for function_type, complexity in product(FunctionType, Complexity):
            assert weight_for(function_type, complexity) > 0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            COMPLEXITY_WEIGHTS[ILF] = {}
        with pytest.raises(TypeError):
            COMPLEXITY_WEIGHTS[ILF][LOW] = 99

    def test_accepts_codes(self):
        assert weight_for("ILF", "medium") == 10
        assert weight_for("eq", "HIGH") == 6

    def test_invalid_function_type_raises(self):
        with pytest.raises(InvalidFunctionTypeError, match="Invalid function type"):
            weight_for("ALI", LOW)

    def test_invalid_complexity_raises(self):
        with pytest.raises(InvalidComplexityError) as exc_info:
            weight_for(ILF, "baixa")
        assert exc_info.value.code == "INVALID_COMPLEXITY"
        assert exc_info.value.value == "baixa"

    def test_validation_errors_share_base(self):
        with pytest.raises(ValidationError):
            weight_for(None, LOW)

    def test_repeated_calls_identical(self):
        assert weight_for(EIF, HIGH) == weight_for(EIF, HIGH) == 10


class TestBuildEntry:
    """Tests for entry construction with derived points."""

    def test_points_derived_from_table(self):
        entry = build_entry(ILF, "Customer Table", MEDIUM, "1")

        assert entry.points == 10
        assert entry.function_type is ILF
        assert entry.complexity is MEDIUM
        assert entry.project_id == "1"

    def test_codes_are_parsed(self):
        entry = build_entry("EO", "Stock Inquiry", "medium", "2")

        assert entry.function_type is EO
        assert entry.points == 5

    def test_name_is_stripped(self):
        entry = build_entry(EI, "  Product Registration  ", LOW, "1")
        assert entry.name == "Product Registration"

    def test_blank_name_rejected(self):
        with pytest.raises(EmptyNameError):
            build_entry(EI, "   ", LOW, "1")

    def test_invalid_type_rejected_before_construction(self):
        with pytest.raises(InvalidFunctionTypeError):
            build_entry("XYZ", "Anything", LOW, "1")


class TestUnadjustedTotal:
    """Tests for per-project unadjusted totals."""

    def test_empty_sequence_is_zero(self):
        assert unadjusted_total([], "1") == 0

    def test_project_without_entries_is_zero(self):
        entries = [build_entry(ILF, "Table", LOW, "1")]
        assert unadjusted_total(entries, "other") == 0

    def test_filters_by_project(self):
        entries = [
            build_entry(ILF, "Customer Table", MEDIUM, "1"),
            build_entry(EIF, "External API Integration", HIGH, "1"),
            build_entry(EI, "Product Registration", LOW, "1"),
            build_entry(EQ, "Sales Report", HIGH, "2"),
            build_entry(EO, "Stock Inquiry", MEDIUM, "2"),
        ]

        assert unadjusted_total(entries, "1") == 23
        assert unadjusted_total(entries, "2") == 11

    def test_order_does_not_matter(self):
        entries = [
            build_entry(ILF, "A", HIGH, "1"),
            build_entry(EO, "B", LOW, "1"),
            build_entry(EQ, "C", MEDIUM, "1"),
        ]
        assert unadjusted_total(entries, "1") == unadjusted_total(
            list(reversed(entries)), "1"
        ) == 23

    def test_accepts_generator(self):
        entries = (build_entry(EI, f"Input {i}", LOW, "1") for i in range(4))
        assert unadjusted_total(entries, "1") == 12


class TestComputeVAF:
    """Tests for the Value Adjustment Factor."""

    def test_all_zero_is_lower_bound(self, make_characteristics):
        assert compute_vaf(make_characteristics([0] * 14)) == Decimal("0.65")

    def test_all_five_is_upper_bound(self, make_characteristics):
        assert compute_vaf(make_characteristics([5] * 14)) == Decimal("1.35")

    def test_default_ratings(self, default_characteristics):
        assert compute_vaf(default_characteristics) == Decimal("0.90")

    def test_returns_decimal(self, default_characteristics):
        assert isinstance(compute_vaf(default_characteristics), Decimal)

    def test_too_few_characteristics_raises(self, default_characteristics):
        with pytest.raises(CharacteristicCountError) as exc_info:
            compute_vaf(default_characteristics[:13])

        assert exc_info.value.expected == 14
        assert exc_info.value.actual == 13
        assert exc_info.value.code == "CHARACTERISTIC_COUNT"

    def test_too_many_characteristics_raises(self, default_characteristics):
        extra = default_characteristics + (
            GeneralCharacteristic(CharacteristicCode.PERFORMANCE, 1),
        )
        with pytest.raises(CharacteristicCountError):
            compute_vaf(extra)

    def test_empty_raises(self):
        with pytest.raises(CharacteristicCountError):
            compute_vaf([])

    def test_duplicate_characteristic_raises(self, default_characteristics):
        duplicated = (default_characteristics[0],) + default_characteristics[:13]
        with pytest.raises(DuplicateCharacteristicError, match="data_communications"):
            compute_vaf(duplicated)

    def test_out_of_range_degree_raises(self, default_characteristics):
        class _Rating:
            code = CharacteristicCode.FACILITATE_CHANGE
            degree_of_influence = 6

        ratings = default_characteristics[:13] + (_Rating(),)
        with pytest.raises(DegreeOfInfluenceOutOfRangeError):
            compute_vaf(ratings)

    def test_unknown_code_raises(self, default_characteristics):
        class _Rating:
            code = "bogus"
            degree_of_influence = 1

        ratings = default_characteristics[:13] + (_Rating(),)
        with pytest.raises(CharacteristicNotFoundError) as exc_info:
            compute_vaf(ratings)
        assert isinstance(exc_info.value, ValidationError)

    def test_repeated_calls_identical(self, default_characteristics):
        assert compute_vaf(default_characteristics) == compute_vaf(default_characteristics)


class TestAdjustedTotal:
    """Tests for applying the VAF."""

    def test_end_to_end_example(self):
        assert adjusted_total(23, Decimal("0.90")) == Decimal("20.70")

    def test_zero_unadjusted_is_zero(self):
        assert adjusted_total(0, Decimal("1.35")) == Decimal("0")
        assert adjusted_total(0, Decimal("0.65")) == Decimal("0")

    def test_rounds_to_two_places(self):
        result = adjusted_total(7, Decimal("0.93"))
        assert result == Decimal("6.51")
        assert result.as_tuple().exponent == -2

    def test_float_vaf_is_converted_exactly(self):
        assert adjusted_total(23, 0.9) == Decimal("20.70")

    def test_half_up_is_default(self):
        # 1 x 0.125 sits exactly on the 2-decimal boundary
        assert adjusted_total(1, Decimal("0.125")) == Decimal("0.13")

    def test_half_even_rounding(self):
        assert adjusted_total(1, Decimal("0.125"), ROUND_HALF_EVEN) == Decimal("0.12")
        assert adjusted_total(1, Decimal("0.135"), ROUND_HALF_EVEN) == Decimal("0.14")


class TestProjectTotals:
    """Tests for project totals and summaries."""

    def setup_method(self):
        self.sales = Project(id="1", name="Sales System")
        self.portal = Project(id="2", name="Customer Portal")
        self.entries = (
            build_entry(ILF, "Customer Table", MEDIUM, "1"),
            build_entry(EIF, "External API Integration", HIGH, "1"),
            build_entry(EI, "Product Registration", LOW, "1"),
            build_entry(EQ, "Sales Report", HIGH, "2"),
            build_entry(EO, "Stock Inquiry", MEDIUM, "2"),
        )

    def test_project_totals(self, default_characteristics):
        totals = project_totals(self.sales, self.entries, default_characteristics)

        assert totals.project_id == "1"
        assert totals.project_name == "Sales System"
        assert totals.unadjusted == 23
        assert totals.vaf == Decimal("0.90")
        assert totals.adjusted == Decimal("20.70")

    def test_summary_in_registration_order(self, default_characteristics):
        summary = summarize_projects(
            [self.sales, self.portal], self.entries, default_characteristics
        )

        assert [t.project_id for t in summary] == ["1", "2"]
        assert summary[1].unadjusted == 11
        assert summary[1].adjusted == Decimal("9.90")

    def test_summary_of_no_projects(self, default_characteristics):
        assert summarize_projects([], self.entries, default_characteristics) == ()

    def test_summary_honours_rounding(self, make_characteristics):
        # sum 0 -> VAF 0.65; 23 x 0.65 = 14.95 exactly, no tie
        ratings = make_characteristics([0] * 14)
        half_up = summarize_projects([self.sales], self.entries, ratings, ROUND_HALF_UP)
        half_even = summarize_projects([self.sales], self.entries, ratings, ROUND_HALF_EVEN)
        assert half_up[0].adjusted == half_even[0].adjusted == Decimal("14.95")

    def test_totals_logged(self, default_characteristics, captured_logs):
        project_totals(self.sales, self.entries, default_characteristics)

        logs = captured_logs()
        record = next(r for r in logs if r["message"] == "project_totals_calculated")
        assert record["unadjusted"] == 23
        assert record["adjusted"] == "20.70"

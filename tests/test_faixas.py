from decimal import Decimal

import pytest

from motor_ferias.errors import ValidationError
from motor_ferias.models import TaxBracket
from motor_ferias.services.faixas import (
    calculate_employer_inss,
    calculate_fgts,
    calculate_inss,
    calculate_irrf,
    find_bracket,
    inss_bracket_rate,
    resolve_bracket,
)


def D(x):
    return Decimal(str(x))


SIMPLE = (
    TaxBracket(min="0", max="100", rate="10", deduction="0"),
    TaxBracket(min="100.01", max=None, rate="20", deduction="10"),
)


class TestResolveBracket:
    def test_first_bracket(self):
        assert resolve_bracket(50, SIMPLE) == D("5.00")

    def test_open_bracket(self):
        assert resolve_bracket(200, SIMPLE) == D("30.00")

    @pytest.mark.parametrize("value", [0, -3, "-0.01"])
    def test_non_positive_short_circuits(self, value):
        assert resolve_bracket(value, SIMPLE) == D("0.00")

    def test_value_above_closed_table_is_zero(self, caplog):
        closed = (TaxBracket(min="0", max="100", rate="10", deduction="0"),)
        assert resolve_bracket(150, closed) == D("0.00")
        assert "acima da última faixa" in caplog.text

    def test_negative_result_clamped(self):
        table = (TaxBracket(min="0", max=None, rate="10", deduction="50"),)
        assert resolve_bracket(100, table) == D("0.00")

    def test_cent_gap_goes_to_next_bracket(self):
        assert find_bracket("100.005", SIMPLE) is SIMPLE[1]

    def test_result_is_quantized(self):
        assert resolve_bracket("33.333", SIMPLE).as_tuple().exponent == -2


class TestINSS:
    @pytest.mark.parametrize("value", [0, -1000])
    def test_non_positive(self, tables, value):
        assert calculate_inss(value, tables) == D("0.00")

    @pytest.mark.parametrize(
        "salary, expected",
        [
            ("1518", "113.85"),
            ("1518.01", "113.85"),
            ("2000", "157.23"),
            ("3500", "313.41"),
            ("4000", "373.41"),
            ("4190.83", "396.31"),
        ],
    )
    def test_progressive_formula(self, tables, salary, expected):
        assert calculate_inss(salary, tables) == D(expected)

    @pytest.mark.parametrize(
        "salary, expected",
        [
            ("4190.84", "586.72"),
            ("5000", "700.00"),
            ("8157.41", "1142.04"),
            ("10000", "1400.00"),
        ],
    )
    def test_flat_rate_above_threshold(self, tables, salary, expected):
        # 14% sobre o total, sem parcela a deduzir e sem teto
        assert calculate_inss(salary, tables) == D(expected)

    def test_flat_branch_differs_from_table_top_bracket(self, tables):
        top = tables.inss.brackets[-1]
        assert calculate_inss(5000, tables) != resolve_bracket(5000, (top,))

    @pytest.mark.parametrize(
        "salary, rate",
        [(0, "0"), (-100, "0"), (1000, "7.5"), (1518, "7.5"), (2000, "9"), (2793.88, "9"),
         (3000, "12"), (4190.83, "12"), (4190.84, "14"), (10000, "14")],
    )
    def test_bracket_rate(self, tables, salary, rate):
        assert inss_bracket_rate(salary, tables) == D(rate)

    def test_uses_default_tables(self):
        assert calculate_inss(2000) == D("157.23")


class TestIRRF:
    @pytest.mark.parametrize(
        "base, dependents, expected",
        [
            ("2000", 0, "0.00"),
            ("2259.20", 0, "0.00"),
            ("3000", 0, "68.56"),
            ("3626.59", 0, "162.55"),
            ("5000", 0, "479.00"),
            ("3000", 2, "27.12"),
            ("300", 5, "0.00"),
            ("0", 0, "0.00"),
            ("-10", 0, "0.00"),
        ],
    )
    def test_values(self, tables, base, dependents, expected):
        assert calculate_irrf(base, dependents, tables) == D(expected)

    def test_negative_dependents_rejected(self, tables):
        with pytest.raises(ValidationError):
            calculate_irrf(3000, -1, tables)

    @pytest.mark.parametrize("base", ["2500", "3000", "3626.59", "4500", "6000", "12000"])
    def test_dependents_never_increase_tax(self, tables, base):
        taxes = [calculate_irrf(base, n, tables) for n in range(6)]
        assert taxes == sorted(taxes, reverse=True)


class TestEmployerCharges:
    def test_fgts(self, tables):
        assert calculate_fgts(4000, tables) == D("320.00")
        assert calculate_fgts("2666.6666667", tables) == D("213.33")

    @pytest.mark.parametrize("value", [0, -5])
    def test_fgts_non_positive(self, tables, value):
        assert calculate_fgts(value, tables) == D("0.00")

    def test_employer_inss(self, tables):
        assert calculate_employer_inss(1000, tables) == D("200.00")
        assert calculate_employer_inss(5000, tables) == D("1000.00")
        assert calculate_employer_inss(-1000, tables) == D("0.00")

from decimal import Decimal

import pandas as pd
import pytest

from motor_ferias.errors import ValidationError
from motor_ferias.services.lote import (
    calculate_batch,
    main,
    normalize_columns,
    read_batch,
    summarize_batch,
    write_batch,
)


def D(x):
    return Decimal(str(x))


@pytest.fixture
def folha():
    return pd.DataFrame(
        {
            "Matrícula": ["001", "002"],
            "Salário": ["3.000,00", "R$ 3000"],
            "Dias": [30, 30],
            "Dias vendidos": [0, ""],
            "Adiantar 13": ["não", "sim"],
            "Dependentes": [None, 0],
        }
    )


def test_normalize_columns():
    df = pd.DataFrame(columns=["Salário Mensal", "dias-ferias", "Abono", "adiantamento 13", "DEPENDENTES", "Nome"])
    assert list(normalize_columns(df).columns) == [
        "monthly_salary", "total_days", "sold_days", "advance_13th_salary", "dependents", "Nome",
    ]


@pytest.mark.parametrize(
    "headers",
    [
        ["salario", "Salário"],
        ["Salário Mensal", "monthly_salary"],
    ],
)
def test_headers_mapping_to_same_column(headers):
    df = pd.DataFrame([["3000", "5000"]], columns=headers)
    with pytest.raises(ValidationError, match="Colunas duplicadas") as exc:
        calculate_batch(df)
    for h in headers:
        assert repr(h) in str(exc.value)


def test_duplicated_day_columns():
    df = pd.DataFrame([["3000", "30", "20"]], columns=["salario", "dias", "dias_ferias"])
    with pytest.raises(ValidationError, match="total_days"):
        normalize_columns(df)


def test_calculate_batch(folha):
    out = calculate_batch(folha, year=2025)
    assert len(out) == 2
    assert list(out["Matrícula"]) == ["001", "002"]
    assert out.loc[0, "net_total"] == pytest.approx(3464.04)
    assert out.loc[1, "advance_13th"] == pytest.approx(1500.00)
    assert out.loc[1, "net_total"] == pytest.approx(4325.25)
    assert list(out["table_year"]) == [2025, 2025]


def test_summarize_batch(folha):
    s = summarize_batch(calculate_batch(folha))
    assert s["count"] == 2
    assert s["gross_total"] == D("9500.00")
    assert s["net_total"] == D("7789.29")
    assert s["fgts"] == D("760.00")
    assert s["employer_cost"] == D("10260.00")


def test_summarize_empty_batch():
    s = summarize_batch(calculate_batch(pd.DataFrame({"salario": []})))
    assert s == {
        "count": 0,
        "gross_total": D("0.00"),
        "total_deductions": D("0.00"),
        "net_total": D("0.00"),
        "fgts": D("0.00"),
        "employer_cost": D("0.00"),
    }


def test_missing_salary_column():
    with pytest.raises(ValidationError, match="salário"):
        calculate_batch(pd.DataFrame({"nome": ["Ana"]}))


@pytest.mark.parametrize(
    "row, match",
    [
        ({"salario": "-1"}, "Linha 3"),
        ({"salario": ""}, "Salário mensal não informado"),
        ({"salario": "3000", "dias": "12.5"}, "inteiro"),
        ({"salario": "3000", "adiantar_13": "talvez"}, "booleano"),
        ({"salario": "3000", "dias": "5", "dias_vendidos": "6"}, "Dias vendidos"),
    ],
)
def test_invalid_row_reports_line(row, match):
    df = pd.DataFrame([{"salario": "2000"}, row])
    with pytest.raises(ValidationError, match=match) as exc:
        calculate_batch(df)
    assert str(exc.value).startswith("Linha 3:")


def test_strict_batch():
    df = pd.DataFrame([{"salario": "3000", "dias_vendidos": "15"}])
    assert calculate_batch(df).loc[0, "vacation_days"] == 15
    with pytest.raises(ValidationError, match="Linha 2"):
        calculate_batch(df, strict=True)


def test_main_xlsx(tmp_path, folha):
    entrada = write_batch(folha, tmp_path / "entrada.xlsx")
    saida = tmp_path / "saida" / "ferias.xlsx"

    assert main([str(entrada), str(saida), "--ano", "2025"]) == 0

    out = read_batch(saida)
    assert list(out["net_total"]) == pytest.approx([3464.04, 4325.25])
    assert list(out["employer_cost"]) == pytest.approx([4320.00, 5940.00])


def test_main_csv(tmp_path):
    entrada = tmp_path / "entrada.csv"
    entrada.write_text("nome,salario,dias_vendidos\nAna,3000,10\n", encoding="utf-8")
    saida = tmp_path / "saida.csv"

    assert main([str(entrada), str(saida), "--limites-legais"]) == 0

    out = read_batch(saida)
    assert out.loc[0, "nome"] == "Ana"
    assert D(out.loc[0, "net_total"]) == D("3768.50")

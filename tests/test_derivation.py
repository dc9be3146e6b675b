"""Tests for net profit and fuel efficiency derivation."""

from datetime import UTC, datetime

import pytest

from driver_ledger.domain.errors import InvalidRecordInput
from driver_ledger.domain.records import FuelType, RecordForm, RecordInput
from driver_ledger.services.derivation import (
    compute_fuel_efficiency,
    compute_net_profit,
    derive_fields,
    parse_amount,
    parse_fuel_type,
    parse_record_form,
    price_per_liter,
)


def test_net_profit_is_exact_difference() -> None:
    assert compute_net_profit(250.5, 60.25, 15.25) == 175.0


def test_net_profit_can_be_negative() -> None:
    assert compute_net_profit(50.0, 80.0, 20.0) == -50.0


def test_fuel_efficiency_for_gasoline() -> None:
    efficiency = compute_fuel_efficiency(100.0, 20.0, FuelType.GASOLINE)

    assert efficiency == pytest.approx(29.45, abs=0.01)


def test_fuel_efficiency_uses_fuel_type_price() -> None:
    efficiency = compute_fuel_efficiency(100.0, 20.0, FuelType.ETHANOL)

    assert efficiency == pytest.approx(100 / (20 / 3.99))


@pytest.mark.parametrize(
    ("kilometers", "fuel"),
    [(0.0, 20.0), (-5.0, 20.0), (None, 20.0), (120.0, 0.0)],
)
def test_fuel_efficiency_absent_when_not_computable(
    kilometers: float | None, fuel: float
) -> None:
    assert compute_fuel_efficiency(kilometers, fuel, FuelType.GASOLINE) is None


def test_price_defaults_to_gasoline() -> None:
    assert price_per_liter(None) == price_per_liter(FuelType.GASOLINE) == 5.89
    assert price_per_liter(FuelType.CNG) == 4.50


def test_derive_fields_fills_derived_values() -> None:
    date = datetime(2024, 5, 15, 9, 0, tzinfo=UTC)

    fields = derive_fields(
        RecordInput(
            revenue=300.0,
            fuel=59.0,
            variable_costs=20.0,
            kilometers=150.0,
            fuel_type=None,
        ),
        date,
    )

    assert fields.date == date
    assert fields.net_profit == 221.0
    assert fields.fuel_efficiency == pytest.approx(150 / (59.0 / 5.89))


def test_lenient_parse_turns_bad_text_into_zero() -> None:
    assert parse_amount("abc", "revenue", strict=False) == 0.0
    assert parse_amount("", "revenue", strict=False) == 0.0
    assert parse_amount(None, "revenue", strict=False) == 0.0
    assert parse_amount("nan", "revenue", strict=False) == 0.0
    assert parse_amount("-5", "revenue", strict=False) == 0.0
    assert parse_amount(" 12.5 ", "revenue", strict=False) == 12.5
    assert parse_amount(7, "revenue", strict=False) == 7.0


@pytest.mark.parametrize(
    "raw", ["abc", "inf", "-1", "12abc", "1.234,5", "", "  ", None]
)
def test_strict_parse_rejects_bad_text(raw: str | None) -> None:
    with pytest.raises(InvalidRecordInput) as exc_info:
        parse_amount(raw, "fuel", strict=True)

    assert exc_info.value.field_name == "fuel"


def test_comma_is_read_as_decimal_separator() -> None:
    assert parse_amount("12,50", "revenue", strict=True) == 12.5
    assert parse_amount(" 0,5 ", "fuel", strict=False) == 0.5
    assert parse_amount("12abc", "revenue", strict=False) == 0.0


def test_derive_fields_rejects_overflowing_net_profit() -> None:
    with pytest.raises(InvalidRecordInput) as exc_info:
        derive_fields(
            RecordInput(revenue=0.0, fuel=1e308, variable_costs=1e308),
            datetime(2024, 5, 15, 9, 0, tzinfo=UTC),
        )

    assert exc_info.value.field_name == "net_profit"


def test_parse_fuel_type() -> None:
    assert parse_fuel_type("Ethanol") is FuelType.ETHANOL
    assert parse_fuel_type("diesel") is None
    assert parse_fuel_type(None) is None


def test_parse_record_form_keeps_kilometers_lenient_in_strict_mode() -> None:
    values = parse_record_form(
        RecordForm(
            revenue="200",
            fuel="40",
            variable_costs="5",
            kilometers="far",
            fuel_type="cng",
        ),
        strict=True,
    )

    assert values == RecordInput(
        revenue=200.0,
        fuel=40.0,
        variable_costs=5.0,
        kilometers=None,
        fuel_type=FuelType.CNG,
    )

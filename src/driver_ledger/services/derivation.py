"""Net profit and fuel efficiency derivation."""

import math
from datetime import datetime

from driver_ledger.domain.errors import InvalidRecordInput
from driver_ledger.domain.records import FuelType, RecordFields, RecordForm, RecordInput

FUEL_PRICES: dict[FuelType, float] = {
    FuelType.GASOLINE: 5.89,
    FuelType.ETHANOL: 3.99,
    FuelType.CNG: 4.50,
}
DEFAULT_FUEL_TYPE = FuelType.GASOLINE


def price_per_liter(fuel_type: FuelType | None) -> float:
    """Return the fixed price for a fuel type, falling back to gasoline."""
    return FUEL_PRICES[fuel_type or DEFAULT_FUEL_TYPE]


def compute_net_profit(revenue: float, fuel: float, variable_costs: float) -> float:
    """Return revenue minus all costs. Negative results are valid."""
    return revenue - fuel - variable_costs


def compute_fuel_efficiency(
    kilometers: float | None, fuel: float, fuel_type: FuelType | None
) -> float | None:
    """Return km per liter, or None when it cannot be computed.

    Liters are estimated from the money spent on fuel and the fixed price
    for the fuel type.
    """
    if kilometers is None or kilometers <= 0:
        return None
    liters = fuel / price_per_liter(fuel_type)
    if liters <= 0:
        return None
    efficiency = kilometers / liters
    if not math.isfinite(efficiency):
        return None
    return efficiency


def derive_fields(values: RecordInput, date: datetime) -> RecordFields:
    """Build a record's full contents from its inputs.

    Raises ``InvalidRecordInput`` when the amounts are too large for the net
    profit to stay finite.
    """
    net_profit = compute_net_profit(
        values.revenue, values.fuel, values.variable_costs
    )
    if not math.isfinite(net_profit):
        raise InvalidRecordInput("net_profit", net_profit)
    return RecordFields(
        date=date,
        revenue=values.revenue,
        fuel=values.fuel,
        variable_costs=values.variable_costs,
        net_profit=net_profit,
        fuel_type=values.fuel_type,
        kilometers=values.kilometers,
        fuel_efficiency=compute_fuel_efficiency(
            values.kilometers, values.fuel, values.fuel_type
        ),
    )


def parse_amount(raw: str | float | None, field_name: str, *, strict: bool) -> float:
    """Parse a non-negative decimal amount from user input.

    A lone comma is read as the decimal separator, so "12,50" is 12.5.
    Lenient mode turns empty or unusable input into zero. Strict mode raises
    ``InvalidRecordInput`` for it, empty input included.
    """
    text = "" if raw is None else str(raw).strip()
    if text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")
    try:
        value = float(text)
    except ValueError:
        value = math.nan
    if math.isfinite(value) and value >= 0:
        return value
    if strict:
        raise InvalidRecordInput(field_name, raw)
    return 0.0


def parse_fuel_type(raw: str | None) -> FuelType | None:
    """Return the matching fuel type, or None for empty/unknown values."""
    if raw is None:
        return None
    try:
        return FuelType(raw.strip().lower())
    except ValueError:
        return None


def parse_record_form(form: RecordForm, *, strict: bool) -> RecordInput:
    """Parse raw form text into numeric inputs.

    Kilometers are optional and always parsed leniently.
    """
    kilometers = parse_amount(form.kilometers, "kilometers", strict=False)
    return RecordInput(
        revenue=parse_amount(form.revenue, "revenue", strict=strict),
        fuel=parse_amount(form.fuel, "fuel", strict=strict),
        variable_costs=parse_amount(
            form.variable_costs, "variable_costs", strict=strict
        ),
        kilometers=kilometers if kilometers > 0 else None,
        fuel_type=parse_fuel_type(form.fuel_type),
    )

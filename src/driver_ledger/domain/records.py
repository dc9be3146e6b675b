"""Domain models for daily earnings records."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class FuelType(StrEnum):
    """Fuel options with a fixed per-liter price."""

    GASOLINE = "gasoline"
    ETHANOL = "ethanol"
    CNG = "cng"


@dataclass(frozen=True)
class RecordForm:
    """Raw text submitted by the entry or edit form."""

    revenue: str | float | None = None
    fuel: str | float | None = None
    variable_costs: str | float | None = None
    kilometers: str | float | None = None
    fuel_type: str | None = None


@dataclass(frozen=True)
class RecordInput:
    """Numeric inputs used to derive a record."""

    revenue: float
    fuel: float
    variable_costs: float
    kilometers: float | None = None
    fuel_type: FuelType | None = None


@dataclass(frozen=True)
class RecordFields:
    """A record's full contents before an id is assigned."""

    date: datetime
    revenue: float
    fuel: float
    variable_costs: float
    net_profit: float
    fuel_type: FuelType | None = None
    kilometers: float | None = None
    fuel_efficiency: float | None = None


@dataclass(frozen=True)
class DailyRecord:
    """A stored earnings entry."""

    id: UUID
    date: datetime
    revenue: float
    fuel: float
    variable_costs: float
    net_profit: float
    fuel_type: FuelType | None = None
    kilometers: float | None = None
    fuel_efficiency: float | None = None

    @property
    def total_costs(self) -> float:
        """Fuel plus variable costs."""
        return self.fuel + self.variable_costs

    @classmethod
    def from_fields(cls, record_id: UUID, fields: RecordFields) -> "DailyRecord":
        """Attach an id to a set of record fields."""
        return cls(
            id=record_id,
            date=fields.date,
            revenue=fields.revenue,
            fuel=fields.fuel,
            variable_costs=fields.variable_costs,
            net_profit=fields.net_profit,
            fuel_type=fields.fuel_type,
            kilometers=fields.kilometers,
            fuel_efficiency=fields.fuel_efficiency,
        )

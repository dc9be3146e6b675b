"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from driver_ledger.domain.records import RecordForm


class RecordPayload(BaseModel):
    """Entry or edit form payload. Amounts may be numbers or raw text."""

    model_config = ConfigDict(populate_by_name=True)

    revenue: float | str | None = None
    fuel: float | str | None = None
    variable_costs: float | str | None = Field(default=None, alias="variableCosts")
    kilometers: float | str | None = None
    fuel_type: str | None = Field(default=None, alias="fuelType")

    def to_form(self) -> RecordForm:
        return RecordForm(
            revenue=self.revenue,
            fuel=self.fuel,
            variable_costs=self.variable_costs,
            kilometers=self.kilometers,
            fuel_type=self.fuel_type,
        )


class SettingsPayload(BaseModel):
    """Settings dialog payload."""

    model_config = ConfigDict(populate_by_name=True)

    weekly_goal: float | str = Field(alias="weeklyGoal")
    day_off: int | str = Field(alias="dayOff")

"""Pydantic model for inspection records fed into the analysis.

Field names follow the upstream inspection feed (``ActualSpecification`` and
friends); snake_case names are accepted as well.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InspectionRecord(BaseModel):
    """A single inspection measurement with its specification limits.

    Values arrive as text and are parsed during extraction, so a record with
    unparseable fields is still a valid model instance; it is simply dropped
    from the analysis.

    Attributes:
        actual_specification: Measured value
        from_specification: Lower specification limit (LSL)
        to_specification: Upper specification limit (USL)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    actual_specification: str | None = Field(default=None, alias="ActualSpecification")
    from_specification: str | None = Field(default=None, alias="FromSpecification")
    to_specification: str | None = Field(default=None, alias="ToSpecification")

    @field_validator(
        "actual_specification", "from_specification", "to_specification", mode="before"
    )
    @classmethod
    def _coerce_to_text(cls, value: object) -> str | None:
        # numpy scalars, Decimal and the like become text; junk fails to parse later
        if value is None or isinstance(value, str):
            return value
        return str(value)

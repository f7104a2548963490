"""Persisted record format for NER changes."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChangeRecord(BaseModel):
    """
    Serialized form of an NER change.

    Written as one JSON line:
    {"column": 2, "services": [...], "terms": [[[...], ...], ...], "addedRows": [...]}
    """

    model_config = ConfigDict(strict=True, populate_by_name=True)

    column: int = Field(ge=0)  # Position where the destination columns begin
    services: list[str]
    terms: list[list[list[str]]]  # [row][service][term]
    added_rows: list[int] = Field(alias="addedRows")

    @model_validator(mode="after")
    def check_term_dimensions(self) -> "ChangeRecord":
        """Every row must hold one term list per service."""
        expected = len(self.services)
        for row, service_terms in enumerate(self.terms):
            if len(service_terms) != expected:
                raise ValueError(
                    f"terms[{row}] has {len(service_terms)} service lists, "
                    f"expected {expected}"
                )
        return self

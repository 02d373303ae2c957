"""Staff Schemas - create/update body for the roster endpoints.

Invariants:
    - Accepted keys: name, campus1, campus2, position, sector, tonumber
      (TONumber accepted as an alias); anything else ignored
    - Trimming, blank -> None and TONumber parsing happen in
      core/roster_filters.build_staff_fields so API and tests share one rule
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pdtracker.core.roster_filters import StaffFields, build_staff_fields


class StaffWrite(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, max_length=200)
    campus1: str | None = Field(None, max_length=100)
    campus2: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)
    sector: str | None = Field(None, max_length=50)
    tonumber: int | str | None = Field(
        None, validation_alias=AliasChoices("tonumber", "TONumber"),
    )

    def to_fields(self) -> StaffFields:
        return build_staff_fields(
            name=self.name,
            campus1=self.campus1,
            campus2=self.campus2,
            position=self.position,
            sector=self.sector,
            tonumber=self.tonumber,
        )

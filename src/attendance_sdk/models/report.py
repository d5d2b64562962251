"""Report request models"""

from datetime import date
from typing import Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


IdList = Union[str, Sequence[Union[int, str]]]
DateLike = Union[date, str]


def _join_ids(value: IdList) -> str:
    if isinstance(value, str):
        return value
    return ",".join(str(item) for item in value)


class ActivityAttendanceReportRequest(BaseModel):
    """Body of the activity attendance report call"""

    model_config = ConfigDict(populate_by_name=True)

    activities: str = Field(..., description="Comma-joined activity ids")
    site_prefix: str = Field(..., alias="sitePrefix", description="Site prefix")
    from_date: str = Field(..., alias="fromDate", description="Start date (ISO 8601)")
    to_date: str = Field(..., alias="toDate", description="End date (ISO 8601)")
    grades: str = Field(..., description="Comma-joined grade ids")

    @field_validator("activities", "grades", mode="before")
    @classmethod
    def join_ids(cls, v: IdList) -> str:
        return _join_ids(v)

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def format_date(cls, v: DateLike) -> str:
        if isinstance(v, date):
            return v.isoformat()
        return v

    def to_body(self) -> dict:
        """Serialize with the wire field names"""
        return self.model_dump(by_alias=True)

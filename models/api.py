"""
Pydantic models for the chart endpoint's requests and responses
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.astrology import BigThree, CelestialPoint


class ChartRequest(BaseModel):
    """Request model for computing placements (form field names as posted)"""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field("", alias="firstName", description="Subscriber's first name")
    email: str = Field(..., description="Subscriber email address")
    dob: str = Field(..., description="Birth date in format 'YYYY-MM-DD' (e.g., '1990-06-15')")
    tob: str = Field(..., description="Birth time in format 'HH:MM' (e.g., '14:30')")
    birthplace: str = Field(..., description="Birthplace, e.g. 'Melbourne, Australia'")


class ChartResponse(BaseModel):
    """Response model for computed placements"""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = Field(True, description="Whether placements were computed")
    placements: BigThree = Field(..., description="Sun, Moon and Rising signs")
    points: List[CelestialPoint] = Field(..., alias="list", description="Every placement with sign and house")
    chart: Dict[str, Any] = Field(default_factory=dict, description="Chart metadata")

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NormalizedEvent(BaseModel):
    """
    One event as handed to the serving layer.

    `date` is "YYYY-MM-DD" when the date text could be normalized, otherwise
    the cleaned date text itself (consumers must tolerate non-ISO values).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    date: str
    description: str = ""
    url: str
    venue: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    def to_public(self) -> Dict[str, Any]:
        """camelCase dict matching the EventData shape the app consumes."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SiteFailure(BaseModel):
    url: str
    error: str


class AggregateResult(BaseModel):
    events: List[NormalizedEvent] = Field(default_factory=list)
    failures: List[SiteFailure] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def count(self) -> int:
        return len(self.events)

    def to_public(self) -> Dict[str, Any]:
        return {
            "success": True,
            "events": [e.to_public() for e in self.events],
            "failures": [f.model_dump() for f in self.failures],
            "count": self.count,
            "timestamp": self.timestamp.isoformat(),
        }

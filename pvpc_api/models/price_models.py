"""
Domain models for hourly electricity prices.
"""

import datetime as dt
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceTuple(ApiModel):
    """One hour's spot price. Unique by (date, hour)."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    hour: int = Field(ge=0, le=23)
    price: float  # EUR/kWh


class PriceRecord(ApiModel):
    """Stored price as returned by the read endpoints."""
    date: dt.date
    hour: int
    price: float  # EUR/kWh
    is_fallback: bool = False
    # write time of the stored row (ISO 8601, UTC)
    timestamp: Optional[str] = None


class ParseFault(ApiModel):
    """A payload row the fetcher could not turn into a PriceTuple."""
    row: Any
    reason: str


class FetchBatch(ApiModel):
    """Outcome of one fetch: parsed tuples plus the rows that were rejected."""
    accepted: List[PriceTuple] = Field(default_factory=list)
    rejected: List[ParseFault] = Field(default_factory=list)


class FetchOutcome(ApiModel):
    """Result of a fetch-and-store run."""
    message: str
    saved: int
    accepted: int
    rejected: int

"""Typed records for the JSON payloads returned by the fixer.io API.

Every payload carries the generic ``{"success": ..., "error": {...}}``
envelope.  :class:`ResponseEnvelope` is decoded first to detect failures;
the remaining models describe the successful payload of each endpoint.

Fields missing from a payload fall back to zero values (``0``, ``""``,
``False`` or an empty mapping), so only type mismatches are rejected.
A ``null`` flag reads as ``False``.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _null_to_false(value: Any) -> Any:
    return False if value is None else value


# A boolean that reads a JSON null as false.
Flag = Annotated[bool, BeforeValidator(_null_to_false)]


class ErrorDetail(BaseModel):
    """Error object embedded in a failed response."""

    code: int = 0
    type: str = ""
    info: str = ""


class ResponseEnvelope(BaseModel):
    """The ``success``/``error`` pair present in every response."""

    success: Flag = False
    error: ErrorDetail = Field(default_factory=ErrorDetail)

    @field_validator("error", mode="before")
    @classmethod
    def _null_error(cls, value: Optional[dict]) -> dict:
        return {} if value is None else value

    @property
    def failed(self) -> bool:
        return not self.success and self.error.code != 0


class Symbols(BaseModel):
    success: Flag = False
    symbols: Dict[str, str] = Field(default_factory=dict)


class LatestRates(BaseModel):
    success: Flag = False
    timestamp: int = 0
    base: str = ""
    date: str = ""
    rates: Dict[str, float] = Field(default_factory=dict)


class HistoricalRates(BaseModel):
    success: Flag = False
    historical: Flag = False
    timestamp: int = 0
    base: str = ""
    date: str = ""
    rates: Dict[str, float] = Field(default_factory=dict)


class ConversionQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(default="", alias="from")
    to: str = ""
    amount: float = 0.0


class ConversionInfo(BaseModel):
    timestamp: int = 0
    rate: float = 0.0


class Conversion(BaseModel):
    """Result of ``/convert``: the echoed query, the rate used and the result."""

    success: Flag = False
    query: ConversionQuery = Field(default_factory=ConversionQuery)
    info: ConversionInfo = Field(default_factory=ConversionInfo)
    historical: Flag = False
    date: str = ""
    result: float = 0.0


class Timeseries(BaseModel):
    """Daily rates between two dates, keyed by date then currency code."""

    success: Flag = False
    timeseries: Flag = False
    start_date: str = ""
    end_date: str = ""
    base: str = ""
    rates: Dict[str, Dict[str, float]] = Field(default_factory=dict)


class Fluctuation(BaseModel):
    success: Flag = False
    fluctuation: Flag = False
    start_date: str = ""
    end_date: str = ""
    base: str = ""
    rates: Dict[str, Dict[str, float]] = Field(default_factory=dict)

"""Top level package for the fixer.io exchange rates client.

Importing from this module will expose the :class:`FixerAPI` class and its
errors directly for convenience:

>>> from fixer_rates import FixerAPI
>>> api = FixerAPI("your-access-key", base_currency="usd")
>>> latest = api.get_latest(["EUR", "GBP"])
>>> latest.rates["EUR"]

The client is implemented in :mod:`.api` and the response records in
:mod:`.models`.
"""

from .api import (  # noqa: F401
    APIError,
    ConfigurationError,
    DecodeError,
    FixerAPI,
    FixerError,
    TransportError,
)
from .models import (  # noqa: F401
    Conversion,
    ErrorDetail,
    Fluctuation,
    HistoricalRates,
    LatestRates,
    ResponseEnvelope,
    Symbols,
    Timeseries,
)

__all__ = [
    "FixerAPI",
    "FixerError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "APIError",
    "ErrorDetail",
    "ResponseEnvelope",
    "Symbols",
    "LatestRates",
    "HistoricalRates",
    "Conversion",
    "Timeseries",
    "Fluctuation",
]

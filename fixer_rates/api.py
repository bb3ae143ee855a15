"""A thin client for the fixer.io foreign exchange rates API.

This module exposes a :class:`FixerAPI` class wrapping the endpoints of
`fixer.io <https://fixer.io>`_:

* ``/symbols`` lists the supported currency codes and their names.
* ``/latest`` returns the most recent rates for a base currency.
* ``/YYYY-MM-DD`` returns the rates as of a past date.
* ``/convert`` converts an amount between two currencies.
* ``/timeseries`` and ``/fluctuation`` cover a range of dates.

Every request carries the access key and the client's base currency.  The
service reports failures inside the JSON body rather than through the HTTP
status, so each response is first checked for an error envelope before it
is decoded into the record type of the endpoint (see :mod:`.models`).

The client keeps no cache and never retries; each call is a single GET.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import quote

import pydantic
import requests

from .models import (
    Conversion,
    Fluctuation,
    HistoricalRates,
    LatestRates,
    ResponseEnvelope,
    Symbols,
    Timeseries,
)

logger = logging.getLogger(__name__)

Record = TypeVar("Record", bound=pydantic.BaseModel)


class FixerError(Exception):
    """Base class of every error raised by :class:`FixerAPI`."""


class ConfigurationError(FixerError):
    """Raised when the client is constructed with invalid settings."""


class TransportError(FixerError):
    """Raised when the API cannot be reached or its response cannot be read."""


class DecodeError(FixerError):
    """Raised when a response body is not JSON of the expected shape."""


class APIError(FixerError):
    """Raised when the API reports a failure in the response body.

    The message is the ``info`` text of the error object, falling back to
    its ``type`` and then to the numeric ``code``.
    """

    def __init__(self, message: str, code: int = 0, error_type: str = "", info: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.type = error_type
        self.info = info


class FixerAPI:
    """Client for the fixer.io exchange rates API.

    Parameters
    ----------
    api_key : str
        The access key issued by fixer.io.  Must not be empty.
    base_currency : str, optional
        Three-letter code of the currency all rates are expressed against.
        Stored upper case.  An empty string lets the API pick its default
        (EUR).  Defaults to ``""``.
    secure : bool, optional
        Use ``https`` instead of ``http``.  The free plan only serves plain
        HTTP, hence the default of ``False``.
    timeout : float or tuple, optional
        Passed directly to the transport's ``get``.  ``None`` (the default)
        leaves timeouts to the transport.
    session : requests.Session, optional
        Object used to issue the GET requests.  Defaults to the
        :mod:`requests` module itself.

    Notes
    -----
    The base currency is the only mutable setting.  It is not guarded by a
    lock, so changing it while another thread issues requests through the
    same instance is a race; use one client per thread instead.
    """

    HOST = "data.fixer.io"
    PATH_PREFIX = "/api"

    def __init__(
        self,
        api_key: str,
        base_currency: str = "",
        secure: bool = False,
        timeout: Union[None, float, Tuple[float, float]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("api_key is required")
        self.api_key = api_key
        self.secure = secure
        self.timeout = timeout
        self._base_currency = base_currency.upper()
        self._http = session if session is not None else requests

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def set_base_currency(self, code: str) -> "FixerAPI":
        """Use ``code`` as the base currency for all subsequent requests.

        The code is not validated here; an unknown currency is reported by
        the API on the next call.  Returns the client so calls can be
        chained::

            api.set_base_currency("usd").get_latest(["EUR"])
        """
        self._base_currency = code.upper()
        return self

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def get_symbols(self) -> Symbols:
        """Return the table of supported currency codes and their names."""
        url = self._build_url("symbols", {})
        return self._request(url, Symbols)

    def get_latest(self, symbols: Optional[Iterable[str]] = None) -> LatestRates:
        """Return the latest rates for ``symbols``, or for every currency.

        Parameters
        ----------
        symbols : iterable of str, optional
            Currency codes to restrict the result to.  Omitted or empty
            means all available currencies.  A single string is taken
            as one code.
        """
        url = self._build_url("latest", {"symbols": _join(symbols)})
        return self._request(url, LatestRates)

    def get_historical(self, date: str, symbols: Optional[Iterable[str]] = None) -> HistoricalRates:
        """Return the rates as of ``date`` (``YYYY-MM-DD``).

        The date is the endpoint itself, e.g. ``/api/2024-01-31``.
        """
        url = self._build_url(date, {"symbols": _join(symbols)})
        return self._request(url, HistoricalRates)

    def get_conversion(
        self,
        from_currency: str,
        to_currency: str,
        amount: Union[int, float],
        date: Optional[str] = None,
    ) -> Conversion:
        """Convert ``amount`` from one currency to another.

        Parameters
        ----------
        from_currency : str
            Code of the currency to convert from.
        to_currency : str
            Code of the currency to convert to.
        amount : float
            Amount in ``from_currency``.
        date : str, optional
            ``YYYY-MM-DD`` date whose rate should be applied.  The latest
            rate is used when omitted.

        Raises
        ------
        TypeError
            If ``amount`` is not a number.
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise TypeError("amount must be a numeric type")
        url = self._build_url(
            "convert",
            {
                "from": from_currency,
                "to": to_currency,
                "amount": format_amount(amount),
                "date": date or "",
            },
        )
        return self._request(url, Conversion)

    def get_timeseries(self, start_date: str, end_date: str) -> Timeseries:
        """Return daily rates between ``start_date`` and ``end_date``."""
        url = self._build_url("timeseries", _date_range(start_date, end_date))
        return self._request(url, Timeseries)

    def get_fluctuation(self, start_date: str, end_date: str) -> Fluctuation:
        """Return how rates changed between ``start_date`` and ``end_date``."""
        url = self._build_url("fluctuation", _date_range(start_date, end_date))
        return self._request(url, Fluctuation)

    # ------------------------------------------------------------------
    # Internal helper methods
    # ------------------------------------------------------------------
    def _build_url(self, method: str, params: Dict[str, str]) -> str:
        """Build the request URL for ``method``.

        ``access_key`` and ``base`` are always present, even when the base
        is empty.  Entries of ``params`` whose value is an empty string are
        left out.
        """
        scheme = "https" if self.secure else "http"
        url = (
            f"{scheme}://{self.HOST}{self.PATH_PREFIX}/{_escape(method)}"
            f"?access_key={_escape(self.api_key)}&base={_escape(self._base_currency)}"
        )
        for name, value in params.items():
            if value != "":
                url += f"&{name}={_escape(value)}"
        return url

    def _request(self, url: str, model: Type[Record]) -> Record:
        """GET ``url`` and decode the body into ``model``.

        Raises
        ------
        TransportError
            If the request fails or the body cannot be read.
        DecodeError
            If the body is not JSON or does not match ``model``.
        APIError
            If the API reports an error in the body.
        """
        logger.debug("GET %s", url.split("?", 1)[0])
        try:
            response = self._http.get(url, timeout=self.timeout)
            body = response.content
        except requests.RequestException as exc:
            raise TransportError(f"Request to {self.HOST} failed: {exc}") from exc

        try:
            envelope = ResponseEnvelope.model_validate_json(body)
        except pydantic.ValidationError as exc:
            raise DecodeError(f"Unexpected response from {self.HOST}: {exc}") from exc

        if envelope.failed:
            error = envelope.error
            message = error.info or error.type or str(error.code)
            raise APIError(message, code=error.code, error_type=error.type, info=error.info)

        try:
            return model.model_validate_json(body)
        except pydantic.ValidationError as exc:
            raise DecodeError(f"Unexpected {model.__name__} response from {self.HOST}: {exc}") from exc


def format_amount(amount: Union[int, float]) -> str:
    """Render ``amount`` as the shortest decimal that round-trips.

    No exponent and no trailing zeros: ``10.0`` gives ``"10"`` and
    ``1e-05`` gives ``"0.00001"``.
    """
    text = format(Decimal(repr(float(amount))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _join(symbols: Optional[Iterable[str]]) -> str:
    if isinstance(symbols, str):
        return symbols
    return ",".join(symbols or ())


def _date_range(start_date: str, end_date: str) -> Dict[str, str]:
    # The service expects ``end_data``, not ``end_date``.
    return {"start_date": start_date, "end_data": end_date}


def _escape(value: Any) -> str:
    return quote(str(value), safe=",")

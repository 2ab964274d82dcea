"""
Client for the REE PVPC tariff API.

This module downloads the day-ahead PVPC price file, parses each row into a
PriceTuple and reports the rows it could not parse instead of failing the
whole batch.
"""

import math
import logging
import requests
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from ...exceptions import FetchError
from ...models import FetchBatch, ParseFault, PriceTuple


class ReePriceFetcher:
    """
    Fetcher for REE PVPC price data.

    Features:
    - Downloads the PVPC JSON document over a persistent session
    - Bounded by a request timeout so a stuck call fails instead of hanging
    - Converts EUR/MWh strings with comma decimals into EUR/kWh
    - Collects per-row parse faults next to the accepted tuples
    """

    def __init__(self, url: str, timeout_seconds: float = 30.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            url: Address of the PVPC JSON document
            timeout_seconds: Connect/read timeout of the HTTP call
            session: Optional session, mainly for tests
        """
        self.logger = logging.getLogger(__name__)
        self.url = url
        self.timeout_seconds = timeout_seconds

        # Session for persistent connections
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': 'pvpc-price-api/1.0',
        })

    def fetch_payload(self) -> Dict[str, Any]:
        """
        Download the raw PVPC document.

        Returns:
            Decoded JSON payload

        Raises:
            FetchError: If the URL is missing, the request fails or times out,
                the status is not a success, or the body is not JSON
        """
        if not self.url:
            raise FetchError("REE API URL not configured")

        self.logger.info(f"Fetching prices from external API: {self.url}")
        try:
            response = self.session.get(self.url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"Error fetching from REE API: {e}")
            raise FetchError(f"REE API error: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"REE API returned a body that is not JSON: {e}")
            raise FetchError("REE API returned a body that is not JSON") from e

    def fetch(self) -> FetchBatch:
        """Download and parse the current PVPC document."""
        return self.transform(self.fetch_payload())

    def transform(self, payload: Any) -> FetchBatch:
        """
        Turn a PVPC payload into a batch of tuples and parse faults.

        Args:
            payload: Decoded document, expected as {"PVPC": [row, ...]}

        Raises:
            FetchError: If the payload does not carry a PVPC row list
        """
        rows = payload.get("PVPC") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            raise FetchError("Invalid REE API data format")

        batch = FetchBatch()
        for row in rows:
            result = self.parse_row(row)
            if isinstance(result, ParseFault):
                self.logger.warning(f"Invalid data format ({result.reason}): {row}")
                batch.rejected.append(result)
            else:
                batch.accepted.append(result)

        self.logger.info(
            f"Parsed {len(batch.accepted)} prices, rejected {len(batch.rejected)} rows")
        return batch

    def parse_row(self, row: Any) -> Union[PriceTuple, ParseFault]:
        """Parse one PVPC row ({"Dia", "Hora", "PCB"})."""
        if not isinstance(row, dict):
            return ParseFault(row=row, reason="row is not an object")

        price_date = self.parse_date(row.get("Dia"))
        if price_date is None:
            return ParseFault(row=row, reason=f"unparseable date {row.get('Dia')!r}")

        hour = self.parse_hour(row.get("Hora"))
        if hour is None:
            return ParseFault(row=row, reason=f"unparseable hour {row.get('Hora')!r}")

        price = self.parse_price(row.get("PCB"))
        if price is None:
            return ParseFault(row=row, reason=f"unparseable price {row.get('PCB')!r}")

        return PriceTuple(date=price_date, hour=hour, price=price)

    @staticmethod
    def parse_date(value: Any) -> Optional[date]:
        """
        Parse a PVPC day string.

        Args:
            value: Date string like "24/11/2023"

        Returns:
            date or None if parsing fails
        """
        if not isinstance(value, str):
            return None
        try:
            return datetime.strptime(value.strip(), "%d/%m/%Y").date()
        except ValueError:
            return None

    @staticmethod
    def parse_hour(value: Any) -> Optional[int]:
        """
        Parse a PVPC hour range; the first token is the hour.

        Args:
            value: Hour range like "00-01"

        Returns:
            Hour 0-23 or None if parsing fails
        """
        if not isinstance(value, str):
            return None
        try:
            hour = int(value.split("-")[0].strip())
        except ValueError:
            return None
        return hour if 0 <= hour <= 23 else None

    @staticmethod
    def parse_price(value: Any) -> Optional[float]:
        """
        Parse a PVPC price.

        Args:
            value: Price string in EUR/MWh like "113,87"

        Returns:
            Price in EUR/kWh rounded to 5 decimals, or None if parsing fails
        """
        if not isinstance(value, str):
            return None
        try:
            # European decimal format (comma as decimal separator)
            price_mwh = float(value.strip().replace(",", "."))
        except ValueError:
            return None
        if not math.isfinite(price_mwh):
            return None
        return round(price_mwh / 1000, 5)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

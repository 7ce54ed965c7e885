import json
import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import ValidationError

from app.exceptions.custom import DataUnavailableError
from app.mappers.fields import parse_number
from app.schemas.rates import RatesPayload

logger = logging.getLogger(__name__)


class CurrencyRateTable:
    def __init__(self, base_currency: str, rates: Mapping[str, Any]):
        self._base_currency = base_currency
        self._rates = MappingProxyType(dict(rates))

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def rate(self, code: str | None) -> float | None:
        """Stored rate for ``code``; unknown, unreadable and non-positive rates are None."""
        if code is None:
            return None
        value = parse_number(self._rates.get(code))
        if value is None or value <= 0:
            return None
        return value

    def converted_rate(self, from_code: str | None, to_code: str | None) -> float | None:
        """Cross rate between two currencies through the table's base currency.

        None when either side has no rate. A missing base rate is not checked
        and yields NaN.
        """
        from_rate = self.rate(from_code)
        to_rate = self.rate(to_code)
        if from_rate is None or to_rate is None:
            return None
        base = self.rate(self._base_currency)
        if base is None:
            base = math.nan
        return base / from_rate * to_rate


def load_rate_table(path: Path) -> CurrencyRateTable:
    try:
        payload = RatesPayload(**json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError, ValidationError) as exc:
        raise DataUnavailableError("Cannot get rates.", source=str(path)) from exc

    logger.debug("Loaded %d rates (base=%s) from %s", len(payload.rates), payload.base, path)
    return CurrencyRateTable(payload.base, payload.rates)

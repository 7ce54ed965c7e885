import json
import logging
import math
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from app.exceptions.custom import DataUnavailableError
from app.mappers.fields import parse_number
from app.mappers.pricing import apply_markup, ceil_to
from app.schemas.offers import RawOffer, RawPrice
from app.services.booking_request import BookingRequest
from app.services.currency_rates import CurrencyRateTable

logger = logging.getLogger(__name__)

DEFAULT_MARKET = "ES"
PRICE_DECIMALS = 2

_offer_rows = TypeAdapter(list[RawOffer])


class RoomPrice(BaseModel):
    model_config = {"frozen": True}

    minimum_selling_price: float | None = None
    currency: str | None = None
    net: float | None = None
    exchange_rate: float | None = None
    markup: float
    selling_price: float | None = None
    selling_currency: str | None = None

    @classmethod
    def compute(
        cls,
        raw: RawPrice,
        request: BookingRequest,
        rates: CurrencyRateTable,
    ) -> "RoomPrice":
        """Price an offer for the request's currency and markup.

        The source currency is compared with the offer's own selling_currency
        as sent in the catalog, before it is replaced by the request currency.
        """
        target_currency = request.currency
        markup = request.markup

        if raw.currency != raw.selling_currency:
            exchange_rate = rates.converted_rate(raw.currency, target_currency)
        else:
            exchange_rate = 1.0

        selling_price = None
        if exchange_rate is None or not math.isfinite(exchange_rate):
            logger.warning(
                "No exchange rate from %s to %s, selling price left empty",
                raw.currency, target_currency,
            )
            exchange_rate = None
        else:
            unrounded = apply_markup(raw.net or 0.0, markup, exchange_rate)
            if math.isfinite(unrounded * 10 ** PRICE_DECIMALS):
                selling_price = ceil_to(unrounded, PRICE_DECIMALS)
            else:
                logger.warning(
                    "Selling price out of range (net=%s, markup=%s), left empty",
                    raw.net, markup,
                )

        return cls(
            minimum_selling_price=raw.minimumSellingPrice,
            currency=raw.currency,
            net=raw.net,
            exchange_rate=exchange_rate,
            markup=markup,
            selling_price=selling_price,
            selling_currency=target_currency,
        )


class RoomOffer(BaseModel):
    model_config = {"frozen": True}

    id: str | int | None = None
    hotel_code_supplier: str | int | None = None
    market: str = DEFAULT_MARKET
    price: RoomPrice

    @classmethod
    def from_raw(
        cls,
        raw: RawOffer,
        request: BookingRequest,
        rates: CurrencyRateTable,
    ) -> "RoomOffer":
        return cls(
            id=raw.id,
            hotel_code_supplier=raw.hotelCodeSupplier,
            market=raw.market if raw.market is not None else DEFAULT_MARKET,
            price=RoomPrice.compute(raw.price, request, rates),
        )


def _matches_destination(code: str | int | None, destinations: set[int]) -> bool:
    # Numeric comparison: "039971881" and "100.0" match 39971881 and 100.
    if code is None:
        return False
    value = parse_number(code)
    return value is not None and value in destinations


class RoomOfferCatalog:
    """Catalog snapshot priced against one validated request.

    The request and rate table are shared, read-only inputs.
    """

    def __init__(
        self,
        rows: list[RawOffer],
        request: BookingRequest,
        rates: CurrencyRateTable,
    ):
        self._rows = rows
        self._request = request
        self._rates = rates

    def __len__(self) -> int:
        return len(self._rows)

    def offers(self) -> list[RoomOffer]:
        """Offers for the requested destinations, priced, in catalog order."""
        destinations = set(self._request.avail_destinations)
        return [
            RoomOffer.from_raw(row, self._request, self._rates)
            for row in self._rows
            if _matches_destination(row.hotelCodeSupplier, destinations)
        ]


def load_offer_rows(path: Path) -> list[RawOffer]:
    try:
        rows = _offer_rows.validate_python(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as exc:
        raise DataUnavailableError("Cannot get room offers.", source=str(path)) from exc

    logger.debug("Loaded %d room offers from %s", len(rows), path)
    return rows

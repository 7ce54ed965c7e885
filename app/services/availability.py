import logging
from datetime import date
from pathlib import Path
from typing import Callable

from app.exceptions.custom import RequestRejectedError
from app.mappers.response_assembler import assemble_offers
from app.mappers.xml_request import parse_avail_request
from app.schemas.offers import OfferRecord
from app.services.booking_request import BookingRequest
from app.services.currency_rates import load_rate_table
from app.services.offer_catalog import RoomOfferCatalog, load_offer_rows

logger = logging.getLogger(__name__)


class AvailabilityService:
    def __init__(
        self,
        rates_file: Path,
        offers_file: Path,
        today: Callable[[], date] = date.today,
    ):
        self._rates_file = rates_file
        self._offers_file = offers_file
        self._today = today

    def build_request(self, xml_text: str | bytes) -> BookingRequest:
        return BookingRequest(parse_avail_request(xml_text), today=self._today())

    def search(self, xml_text: str | bytes) -> list[OfferRecord]:
        """Validate the request, then price the catalog offers for its destinations.

        Raises RequestRejectedError with every failed rule when the request is
        invalid, DataUnavailableError when an input cannot be loaded.
        """
        request = self.build_request(xml_text)

        errors = request.collect_errors()
        if errors:
            raise RequestRejectedError(errors)

        rates = load_rate_table(self._rates_file)
        catalog = RoomOfferCatalog(load_offer_rows(self._offers_file), request, rates)
        records = assemble_offers(catalog.offers())

        logger.info(
            "Availability search: %d destinations, %d rooms, %d/%d offers in %s",
            len(request.avail_destinations),
            len(request.room_candidates),
            len(records),
            len(catalog),
            request.currency,
        )
        return records

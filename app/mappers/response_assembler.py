from typing import Iterable

from app.schemas.offers import OfferPriceRecord, OfferRecord
from app.services.offer_catalog import RoomOffer, RoomPrice


def build_price_record(price: RoomPrice) -> OfferPriceRecord:
    return OfferPriceRecord(
        minimumSellingPrice=price.minimum_selling_price,
        currency=price.currency,
        net=price.net,
        selling_price=price.selling_price,
        selling_currency=price.selling_currency,
        markup=price.markup,
        exchange_rate=price.exchange_rate,
    )


def assemble_offers(offers: Iterable[RoomOffer]) -> list[OfferRecord]:
    return [
        OfferRecord(
            id=offer.id,
            hotelCodeSupplier=offer.hotel_code_supplier,
            market=offer.market,
            price=build_price_record(offer.price),
        )
        for offer in offers
    ]

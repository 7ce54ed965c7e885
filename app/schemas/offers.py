from pydantic import BaseModel


class RawPrice(BaseModel):
    minimumSellingPrice: float | None = None
    currency: str | None = None
    net: float | None = None
    selling_currency: str | None = None


class RawOffer(BaseModel):
    id: str | int | None = None
    hotelCodeSupplier: str | int | None = None
    market: str | None = None
    price: RawPrice = RawPrice()


class OfferPriceRecord(BaseModel):
    minimumSellingPrice: float | None
    currency: str | None
    net: float | None
    selling_price: float | None
    selling_currency: str | None
    markup: float
    exchange_rate: float | None


class OfferRecord(BaseModel):
    id: str | int | None
    hotelCodeSupplier: str | int | None
    market: str
    price: OfferPriceRecord

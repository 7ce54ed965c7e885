import inspect
import xml.etree.ElementTree as ET
from datetime import date, timedelta

import httpx
import pytest
from httpx import ASGITransport

from app.routers.availability import search_availability
from app.services.booking_request import ERROR_MESSAGES


def _fmt(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def _request_xml(
    search_type: str = "Multiple",
    currency: str = "USD",
    destinations: tuple[str, ...] = ("39971881", "39776757", "39756945"),
    hotel_count: str = "2",
    start_offset: int = 10,
    nights: int = 4,
    username: str = "YYYYYYYYY",
    markup: str | None = "3.2",
) -> str:
    start = date.today() + timedelta(days=start_offset)
    end = start + timedelta(days=nights)
    destination_xml = "".join(f'<Destination type="HOT" code="{c}"/>' for c in destinations)
    markup_xml = f"<Markup>{markup}</Markup>" if markup is not None else ""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<AvailRQ>
    <source><languageCode>en</languageCode></source>
    <optionsQuota>20</optionsQuota>
    <Configuration><Parameters>
        <Parameter password="XXXXXXXXXX" username="{username}" CompanyID="123456"/>
    </Parameters></Configuration>
    <SearchType>{search_type}</SearchType>
    <AllowedHotelCount>{hotel_count}</AllowedHotelCount>
    <AvailDestinations>{destination_xml}</AvailDestinations>
    <StartDate>{_fmt(start)}</StartDate>
    <EndDate>{_fmt(end)}</EndDate>
    <Currency>{currency}</Currency>
    <Nationality>US</Nationality>
    <Markets><Market>ES</Market></Markets>
    <RoomCandidates>
        <RoomCandidate id="1"><Paxes><Pax age="30"/></Paxes></RoomCandidate>
    </RoomCandidates>
    {markup_xml}
</AvailRQ>"""


async def _post(client, body: str):
    return await client.post(
        "/availability",
        content=body.encode("utf-8"),
        headers={"Content-Type": "application/xml"},
    )


async def test_search_returns_offers_for_first_two_destinations(client):
    resp = await _post(client, _request_xml())

    assert resp.status_code == 200
    data = resp.json()
    assert [o["id"] for o in data] == ["A#1", "A#2", "B#1"]
    assert {o["hotelCodeSupplier"] for o in data} == {"39971881", "39776757"}

    first = data[0]
    assert first["market"] == "ES"
    assert first["price"] == {
        "minimumSellingPrice": None,
        "currency": "USD",
        "net": 132.42,
        "selling_price": 136.66,
        "selling_currency": "USD",
        "markup": 3.2,
        "exchange_rate": 1.0,
    }
    # Catalog selling_currency matches the source currency, so no conversion.
    assert data[1]["price"]["selling_price"] == 147.98
    assert data[1]["price"]["selling_currency"] == "USD"
    assert data[2]["price"]["selling_price"] == 94.74


async def test_search_converts_when_catalog_selling_currency_missing(client):
    resp = await _post(
        client,
        _request_xml(currency="EUR", destinations=("39756945",), markup=None),
    )

    assert resp.status_code == 200
    (offer,) = resp.json()
    assert offer["id"] == "C#1"
    assert offer["market"] == "ES"
    assert offer["price"]["exchange_rate"] == pytest.approx(1 / 0.8557)
    assert offer["price"]["selling_price"] == pytest.approx(110.0 * 1.01 / 0.8557, abs=0.01)
    assert offer["price"]["markup"] == 1.0
    assert offer["price"]["minimumSellingPrice"] == 120.5


async def test_single_search_uses_first_destination_only(client):
    resp = await _post(client, _request_xml(search_type="Single", hotel_count="5"))

    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == ["A#1", "A#2"]


async def test_unknown_destinations_give_empty_list(client):
    resp = await _post(client, _request_xml(destinations=("1", "2")))

    assert resp.status_code == 200
    assert resp.json() == []


async def test_invalid_request_returns_xml_errors(client):
    resp = await _post(
        client,
        _request_xml(search_type="Both", start_offset=1, username="u" * 65),
    )

    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("application/xml")
    root = ET.fromstring(resp.content)
    descriptions = [b.findtext("description") for b in root.findall("applicationErrors")]
    assert descriptions == [
        ERROR_MESSAGES["auth"],
        ERROR_MESSAGES["search_type"],
        ERROR_MESSAGES["start_date"],
        ERROR_MESSAGES["end_date"],
    ]


async def test_short_stay_rejected(client):
    resp = await _post(client, _request_xml(nights=2))

    assert resp.status_code == 400
    root = ET.fromstring(resp.content)
    assert root.findtext("applicationErrors/description") == ERROR_MESSAGES["end_date"]


async def test_search_honors_declared_encoding(client):
    body = _request_xml(username="Müller").replace('encoding="UTF-8"', 'encoding="ISO-8859-1"')

    resp = await client.post(
        "/availability",
        content=body.encode("iso-8859-1"),
        headers={"Content-Type": "application/xml"},
    )

    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == ["A#1", "A#2", "B#1"]


async def test_empty_body_returns_503(client):
    resp = await client.post("/availability", headers={"Content-Type": "application/xml"})

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Cannot obtain incoming data."}


def test_search_runs_in_threadpool():
    assert not inspect.iscoroutinefunction(search_availability)


async def test_malformed_body_returns_503(client):
    resp = await _post(client, "<AvailRQ>")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Cannot obtain incoming data."}


async def test_missing_rates_file_returns_503(mock_env, monkeypatch, tmp_path):
    monkeypatch.setenv("RATES_FILE", str(tmp_path / "missing.json"))
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            resp = await _post(c, _request_xml())

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Cannot get rates."}

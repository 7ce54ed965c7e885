"""Build the raw request attribute tree from an AvailRQ XML document.

Element names are matched with a case-insensitive first letter
(``SearchType`` and ``searchType`` are the same field). A missing element
leaves the field unset; an empty element sets it to "".
"""

import logging
import xml.etree.ElementTree as ET

from app.exceptions.custom import DataUnavailableError
from app.mappers.fields import leading_int
from app.schemas.request import AuthParameters, RawAvailRequest

logger = logging.getLogger(__name__)

# XML element name (first letter lowered) -> RawAvailRequest field
_SCALAR_FIELDS: dict[str, str] = {
    "optionsQuota": "options_quota",
    "searchType": "search_type",
    "allowedHotelCount": "allowed_hotel_count",
    "allowedRoomCount": "allowed_room_count",
    "allowedRoomGuestCount": "allowed_room_guest_count",
    "allowedChildCountPerRoom": "allowed_child_count_per_room",
    "startDate": "start_date",
    "endDate": "end_date",
    "currency": "currency",
    "nationality": "nationality",
    "markup": "markup",
}

_AUTH_ATTRIBUTES: dict[str, str] = {
    "username": "username",
    "password": "password",
    "companyID": "company_id",
}


def _key(tag: str) -> str:
    return tag[:1].lower() + tag[1:]


def _text(element: ET.Element) -> str:
    return (element.text or "").strip()


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _key(child.tag) == name]


def _parse_language_code(source: ET.Element) -> str | None:
    found = _children(source, "languageCode")
    return _text(found[0]) if found else None


def _parse_parameters(configuration: ET.Element, current: dict[str, str]) -> dict[str, str]:
    params = dict(current)
    for block in _children(configuration, "parameters"):
        for parameter in _children(block, "parameter"):
            for attr, value in parameter.attrib.items():
                field = _AUTH_ATTRIBUTES.get(_key(attr))
                if field:
                    params[field] = value
    return params


def _parse_destinations(block: ET.Element) -> list[int]:
    codes: list[int] = []
    for destination in block:
        code = destination.get("code")
        if code:
            codes.append(leading_int(code))
    return codes


def _parse_rooms(block: ET.Element) -> dict[str, list[str | None]]:
    rooms: dict[str, list[str | None]] = {}
    for room in block:
        ages: list[str | None] = []
        for paxes in _children(room, "paxes"):
            ages.extend(pax.get("age") for pax in paxes)
        rooms[room.get("id", "")] = ages
    return rooms


def parse_avail_request(xml_text: str | bytes) -> RawAvailRequest:
    """Bytes input is decoded by the parser, honoring the XML encoding declaration."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        logger.warning("Unparseable availability request: %s", exc)
        raise DataUnavailableError("Cannot obtain incoming data.", source="request") from exc

    fields: dict[str, object] = {}
    auth: dict[str, str] = {}
    destinations: list[int] | None = None
    markets: list[str] | None = None
    rooms: dict[str, list[str | None]] | None = None

    for child in root:
        key = _key(child.tag)
        if key in _SCALAR_FIELDS:
            fields[_SCALAR_FIELDS[key]] = _text(child)
        elif key == "source":
            fields["language_code"] = _parse_language_code(child)
        elif key == "configuration":
            auth = _parse_parameters(child, auth)
        elif key == "availDestinations" and len(child):
            destinations = (destinations or []) + _parse_destinations(child)
        elif key == "markets" and len(child):
            markets = (markets or []) + [_text(market) for market in child]
        elif key == "roomCandidates" and len(child):
            rooms = {**(rooms or {}), **_parse_rooms(child)}

    return RawAvailRequest(
        **fields,
        parameters=AuthParameters(**auth),
        avail_destinations=destinations,
        markets=markets,
        room_candidates=rooms,
    )

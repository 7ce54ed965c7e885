"""Availability request validation and normalization.

Every field is exposed only through a rule-checked accessor. Unset fields
fall back to their default; invalid fields resolve to None and are reported
by ``check_properties()``.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Callable

from app.exceptions.custom import FieldValidationError
from app.mappers.fields import (
    ValidatedField,
    int_in_range,
    leading_float,
    leading_int,
    one_of,
    subset_of,
)
from app.mappers.pax_rules import count_paxes, select_rooms
from app.schemas.request import AuthParameters, RawAvailRequest, RoomCandidate

LANGUAGE_CODES = ("en", "fr", "de", "es")
SEARCH_TYPES = ("Single", "Multiple")
CURRENCIES = ("EUR", "USD", "GBP")
NATIONALITIES = ("US", "GB", "CA")
MARKETS = ("US", "GB", "CA", "ES")

DEFAULT_LANGUAGE_CODE = "en"
DEFAULT_OPTIONS_QUOTA = 20
MAX_OPTIONS_QUOTA = 50
DEFAULT_ALLOWED_HOTEL_COUNT = 20
DEFAULT_ALLOWED_ROOM_COUNT = 1
DEFAULT_ALLOWED_ROOM_GUEST_COUNT = 1
DEFAULT_ALLOWED_CHILD_COUNT_PER_ROOM = 0
DEFAULT_CURRENCY = "EUR"
DEFAULT_NATIONALITY = "US"
DEFAULT_MARKETS = ("ES",)
DEFAULT_MARKUP = 1.0

MAX_USERNAME_LENGTH = 64
START_DATE_MIN_DAYS_AHEAD = 2
MIN_STAY_NIGHTS = 3

DATE_FORMAT = "%d/%m/%Y"
_DATE_RE = re.compile(r"\d{2}/\d{2}/\d{4}")

# Rule order is the order errors are reported in.
ERROR_MESSAGES: dict[str, str] = {
    "language_code": "The 'languageCode' must be one of: en, fr, de, or es",
    "options_quota": "'optionsQuota' must be an integer no greater than 50",
    "auth": "'password', 'username' or 'CompanyID' is missing or incorrect",
    "search_type": "'SearchType' must be 'Single' or 'Multiple'",
    "start_date": "'StartDate' must be at least 2 days after today",
    "end_date": "The stay duration ('EndDate' - 'StartDate') must be at least 3 nights",
    "currency": "'Currency' must be one of: EUR, USD, or GBP",
    "nationality": "'Nationality' must be one of: US, GB, or CA",
    "markets": "'Markets' must contain one or more of: US, GB, CA, or ES.",
}


def parse_request_date(raw: Any) -> date | None:
    text = str(raw).strip()
    if not _DATE_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


class AuthCredentials:
    def __init__(self, username: str | None, password: str | None, company_id: str | None):
        self._username = username
        self._password = password
        self._company_id = company_id

    @classmethod
    def from_parameters(cls, parameters: AuthParameters) -> "AuthCredentials":
        return cls(parameters.username, parameters.password, parameters.company_id)

    @property
    def username(self) -> str | None:
        if not self._username or len(self._username) > MAX_USERNAME_LENGTH:
            return None
        return self._username

    @property
    def password(self) -> str | None:
        return self._password or None

    @property
    def company_id(self) -> int | None:
        if self._company_id is None:
            return None
        return int_in_range(1)(self._company_id)

    def is_valid(self) -> bool:
        return (
            self.password is not None
            and self.username is not None
            and self.company_id is not None
        )


class BookingRequest:
    def __init__(self, payload: RawAvailRequest, today: date | None = None):
        self._payload = payload
        self._today = today or date.today()
        self.auth = AuthCredentials.from_parameters(payload.parameters)

        self._language_code = ValidatedField(
            payload.language_code, one_of(LANGUAGE_CODES), DEFAULT_LANGUAGE_CODE
        )
        self._options_quota = ValidatedField(
            payload.options_quota, int_in_range(1, MAX_OPTIONS_QUOTA), DEFAULT_OPTIONS_QUOTA
        )
        self._search_type = ValidatedField(payload.search_type, one_of(SEARCH_TYPES))
        self._allowed_hotel_count = ValidatedField(
            payload.allowed_hotel_count, leading_int, DEFAULT_ALLOWED_HOTEL_COUNT
        )
        self._allowed_room_count = ValidatedField(
            payload.allowed_room_count, int_in_range(1),
            DEFAULT_ALLOWED_ROOM_COUNT, invalid_as_default=True,
        )
        self._allowed_room_guest_count = ValidatedField(
            payload.allowed_room_guest_count, int_in_range(1),
            DEFAULT_ALLOWED_ROOM_GUEST_COUNT, invalid_as_default=True,
        )
        self._allowed_child_count_per_room = ValidatedField(
            payload.allowed_child_count_per_room, int_in_range(0),
            DEFAULT_ALLOWED_CHILD_COUNT_PER_ROOM, invalid_as_default=True,
        )
        self._start_date = ValidatedField(payload.start_date, self._start_date_rule)
        self._end_date = ValidatedField(payload.end_date, self._end_date_rule)
        self._currency = ValidatedField(payload.currency, one_of(CURRENCIES), DEFAULT_CURRENCY)
        self._nationality = ValidatedField(
            payload.nationality, one_of(NATIONALITIES), DEFAULT_NATIONALITY
        )
        self._markets = ValidatedField(payload.markets, subset_of(MARKETS), list(DEFAULT_MARKETS))
        self._markup = ValidatedField(
            payload.markup, leading_float, DEFAULT_MARKUP, invalid_as_default=True
        )

    # --- date rules ---

    def _start_date_rule(self, raw: Any) -> date | None:
        value = parse_request_date(raw)
        if value is None or value < self._today + timedelta(days=START_DATE_MIN_DAYS_AHEAD):
            return None
        return value

    def _end_date_rule(self, raw: Any) -> date | None:
        start = self.start_date
        value = parse_request_date(raw)
        if start is None or value is None:
            return None
        if value < start + timedelta(days=MIN_STAY_NIGHTS):
            return None
        return value

    # --- accessors ---

    @property
    def language_code(self) -> str | None:
        return self._language_code.resolve()

    @property
    def options_quota(self) -> int | None:
        return self._options_quota.resolve()

    @property
    def search_type(self) -> str | None:
        return self._search_type.resolve()

    @property
    def allowed_hotel_count(self) -> int:
        if self.search_type == "Single":
            return 1
        return self._allowed_hotel_count.resolve()

    @property
    def avail_destinations(self) -> list[int]:
        destinations = self._payload.avail_destinations
        limit = self.allowed_hotel_count
        if not destinations or limit <= 0:
            return []
        return destinations[:limit]

    @property
    def allowed_room_count(self) -> int:
        return self._allowed_room_count.resolve()

    @property
    def allowed_room_guest_count(self) -> int:
        return self._allowed_room_guest_count.resolve()

    @property
    def allowed_child_count_per_room(self) -> int:
        return self._allowed_child_count_per_room.resolve()

    @property
    def start_date(self) -> date | None:
        return self._start_date.resolve()

    @property
    def end_date(self) -> date | None:
        return self._end_date.resolve()

    @property
    def currency(self) -> str | None:
        return self._currency.resolve()

    @property
    def nationality(self) -> str | None:
        return self._nationality.resolve()

    @property
    def markets(self) -> list[str] | None:
        return self._markets.resolve()

    @property
    def markup(self) -> float:
        return self._markup.resolve()

    @property
    def room_candidates(self) -> list[RoomCandidate]:
        """Declared rooms that satisfy the guest/child limits, in declaration order."""
        declared = self._payload.room_candidates
        if not declared:
            return []
        return select_rooms(
            (count_paxes(ages) for ages in declared.values()),
            guest_limit=self.allowed_room_guest_count,
            child_limit=self.allowed_child_count_per_room,
            room_limit=self.allowed_room_count,
        )

    # --- validation ---

    def _checks(self) -> dict[str, Callable[[], bool]]:
        return {
            "language_code": lambda: self.language_code is not None,
            "options_quota": lambda: self.options_quota is not None,
            "auth": self.auth.is_valid,
            "search_type": lambda: self.search_type is not None,
            "start_date": lambda: self.start_date is not None,
            "end_date": lambda: self.end_date is not None,
            "currency": lambda: self.currency is not None,
            "nationality": lambda: self.nationality is not None,
            "markets": lambda: self.markets is not None,
        }

    def collect_errors(self) -> list[FieldValidationError]:
        checks = self._checks()
        return [
            FieldValidationError(field, message)
            for field, message in ERROR_MESSAGES.items()
            if not checks[field]()
        ]

    def check_properties(self) -> list[str]:
        """All failing rule messages, in rule order. Empty means the request is valid."""
        return [error.message for error in self.collect_errors()]

    def is_valid(self) -> bool:
        return not self.collect_errors()

from pydantic import BaseModel


class AuthParameters(BaseModel):
    username: str | None = None
    password: str | None = None
    company_id: str | None = None


class RawAvailRequest(BaseModel):
    """Attribute tree of an availability request, values as they were sent."""

    language_code: str | None = None
    options_quota: str | None = None
    parameters: AuthParameters = AuthParameters()
    search_type: str | None = None
    allowed_hotel_count: str | None = None
    allowed_room_count: str | None = None
    allowed_room_guest_count: str | None = None
    allowed_child_count_per_room: str | None = None
    avail_destinations: list[int] | None = None
    start_date: str | None = None
    end_date: str | None = None
    currency: str | None = None
    nationality: str | None = None
    markets: list[str] | None = None
    room_candidates: dict[str, list[str | None]] | None = None  # room id -> pax ages
    markup: str | None = None


class RoomCandidate(BaseModel):
    model_config = {"frozen": True}

    adult_count: int = 0
    child_count: int = 0

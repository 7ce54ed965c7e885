"""Room and passenger rules.

- Passengers aged 5 or under are children, everyone else is an adult.
- A child must share the room with at least one adult.
- A room holds at most ``guest_limit`` passengers and ``child_limit`` children.
"""

from typing import Iterable

from app.mappers.fields import leading_int
from app.schemas.request import RoomCandidate

CHILD_MAX_AGE = 5


def is_child(age: str | None) -> bool:
    # Missing or unreadable ages count as 0.
    return leading_int(age if age is not None else 0) <= CHILD_MAX_AGE


def count_paxes(ages: Iterable[str | None]) -> RoomCandidate:
    adults = children = 0
    for age in ages:
        if is_child(age):
            children += 1
        else:
            adults += 1
    return RoomCandidate(adult_count=adults, child_count=children)


def accept_room(room: RoomCandidate, guest_limit: int, child_limit: int) -> bool:
    if room.adult_count + room.child_count > guest_limit:
        return False
    if room.adult_count <= 0:
        return False
    return room.child_count == 0 or room.child_count <= child_limit


def select_rooms(
    rooms: Iterable[RoomCandidate],
    guest_limit: int,
    child_limit: int,
    room_limit: int,
) -> list[RoomCandidate]:
    accepted = [r for r in rooms if accept_room(r, guest_limit, child_limit)]
    return accepted[:room_limit]

from typing import Any

from pydantic import BaseModel


class RatesPayload(BaseModel):
    base: str
    # Entries are checked one at a time on lookup; a bad entry only means "no rate".
    rates: dict[str, Any] = {}

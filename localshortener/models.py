from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class ShortLinkModel:
    code: str                           # Unique short identifier of the link
    target: str                         # Destination URL
    expires_at: datetime | None = None  # TTL as Python datetime, None if the link never expires
# fmt: on

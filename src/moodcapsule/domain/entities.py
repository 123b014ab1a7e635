"""Domain model entities for moodcapsule.

These are pure data classes representing journal concepts, independent of
how the host application stores them. Persistence works on the encoded
bytes produced by ``moodcapsule.domain.codec``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Mapping, Optional, Union
from uuid import UUID

DEFAULT_MOOD = "Happy"

# Empty display name means "not set yet"
UNSET_DISPLAY_NAME = ""


class EntryColor(str, Enum):
    """Fixed palette offered when writing an entry."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"


DEFAULT_COLOR = EntryColor.BLUE


@dataclass(frozen=True)
class Entry:
    """Journal entry domain entity (a "mood capsule")."""

    id: UUID
    date: datetime
    mood: str
    content: str
    color: str


@dataclass(frozen=True)
class Preferences:
    """User preference values."""

    dark_mode: bool = False
    display_name: str = UNSET_DISPLAY_NAME
    avatar_image: Optional[bytes] = None


@dataclass(frozen=True)
class BackupSnapshot:
    """Point-in-time export of entries and preferences.

    ``entries`` holds the native entry encoding as opaque bytes. ``settings``
    is a flat map; only its string values survive the wire encoding.
    """

    schema_version: int
    entries: bytes
    avatar_image: Optional[bytes]
    settings: Mapping[str, Union[str, bool]] = field(default_factory=dict)


@dataclass(frozen=True)
class CalendarDay:
    """A single day of a month calendar with its entry marker."""

    day: date
    entry_count: int

    @property
    def has_entries(self) -> bool:
        return self.entry_count > 0


@dataclass(frozen=True)
class StatisticsReport:
    """Derived statistics for an entry snapshot."""

    reference_day: date
    entry_count: int
    total_days: int
    days_this_month: int
    current_streak: int


@dataclass(frozen=True)
class PurchasableUnit:
    """Catalog item crediting a currency amount. Reference data only."""

    price: Decimal
    credited_amount: int
    is_popular: bool = False
    discount_percent: Optional[int] = None

    @property
    def effective_price(self) -> Decimal:
        """Price after applying the discount, if any."""
        if not self.discount_percent:
            return self.price
        factor = Decimal(100 - self.discount_percent) / Decimal(100)
        return (self.price * factor).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

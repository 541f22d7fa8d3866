# rockschool/models/types.py
"""Column types shared by the models."""
import enum
from typing import FrozenSet, Iterable, Optional
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class Instrument(str, enum.Enum):
    VOCALS = "vocals"
    KEYS = "keys"
    GUITAR = "guitar"
    BASS = "bass"
    DRUMS = "drums"


def parse_instruments(values: Iterable) -> FrozenSet[Instrument]:
    """Accepts enum members or their string values; raises ValueError on unknown tags"""
    return frozenset(Instrument(v) for v in values)


class InstrumentSet(TypeDecorator):
    """A set of Instrument tags stored as a comma-joined string.

    Only this column type knows about the delimiter; the rest of the code sees
    a frozenset of Instrument members.
    """

    impl = String(100)
    cache_ok = True

    def process_bind_param(self, value: Optional[Iterable], dialect) -> Optional[str]:
        if value is None:
            return None
        # Sorted so equal sets always serialize to the same string
        return ",".join(sorted(i.value for i in parse_instruments(value)))

    def process_result_value(self, value: Optional[str], dialect) -> FrozenSet[Instrument]:
        if not value:
            return frozenset()
        return parse_instruments(tag.strip() for tag in value.split(",") if tag.strip())

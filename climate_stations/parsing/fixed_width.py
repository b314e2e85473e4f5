"""Decoders for the positional-column GHCN-Daily metadata files.

Both ``ghcnd-stations.txt`` and ``ghcnd-inventory.txt`` are plain ASCII with
one record per line. Columns are addressed by zero-based ``[start, stop)``
offsets and whitespace-trimmed. Lines too short to hold every column are
skipped rather than treated as errors, and malformed numeric columns decode
to zero so one bad field never drops an otherwise usable row.
"""

from __future__ import annotations

from typing import NamedTuple

from climate_stations.models.observation import Element
from climate_stations.models.station import InventoryRecord, Station


class Column(NamedTuple):
    start: int
    stop: int

    def extract(self, line: str) -> str:
        return line[self.start : self.stop].strip()


STATION_ID = Column(0, 11)
STATION_LATITUDE = Column(12, 20)
STATION_LONGITUDE = Column(21, 30)
STATION_NAME = Column(38, 71)
STATION_MIN_WIDTH = STATION_NAME.stop

INVENTORY_ID = Column(0, 11)
INVENTORY_ELEMENT = Column(31, 35)
INVENTORY_FIRST_YEAR = Column(36, 40)
INVENTORY_LAST_YEAR = Column(41, 45)
INVENTORY_MIN_WIDTH = INVENTORY_LAST_YEAR.stop


def _float_or_zero(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def _int_or_zero(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def parse_station_line(line: str) -> Station | None:
    line = line.rstrip("\r\n")
    if len(line) < STATION_MIN_WIDTH:
        return None
    return Station(
        id=STATION_ID.extract(line),
        name=STATION_NAME.extract(line),
        latitude=_float_or_zero(STATION_LATITUDE.extract(line)),
        longitude=_float_or_zero(STATION_LONGITUDE.extract(line)),
    )


def parse_inventory_line(line: str) -> InventoryRecord | None:
    """Decode one inventory row, keeping only temperature elements."""
    line = line.rstrip("\r\n")
    if len(line) < INVENTORY_MIN_WIDTH:
        return None
    element = Element.parse(INVENTORY_ELEMENT.extract(line))
    if element is None:
        return None
    return InventoryRecord(
        station_id=INVENTORY_ID.extract(line),
        element=element.value,
        first_year=_int_or_zero(INVENTORY_FIRST_YEAR.extract(line)),
        last_year=_int_or_zero(INVENTORY_LAST_YEAR.extract(line)),
    )

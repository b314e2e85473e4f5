from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import Protocol

from climate_stations.models.observation import MISSING_VALUE, Element, RawObservation

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y%m%d"
MIN_COLUMNS = 4

_DATE_RE = re.compile(r"^\d{8}$")
_INT_RE = re.compile(r"^[+-]?\d+$")


class SkipReason(str, Enum):
    HEADER = "header"
    SHORT_ROW = "short_row"
    ELEMENT = "element"
    DATE = "date"
    VALUE = "value"
    MISSING = "missing"


class IngestionDiagnostics:
    """Counts rows dropped during ingestion, by reason.

    Purely observational: skipped rows never change whether ingestion
    succeeds.
    """

    def __init__(self) -> None:
        self.accepted = 0
        self.skipped: Counter[SkipReason] = Counter()

    def skip(self, reason: SkipReason) -> None:
        self.skipped[reason] += 1

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped.values())

    def as_dict(self) -> dict[str, int]:
        return {reason.value: count for reason, count in self.skipped.items()}


def _parse_date(value: str) -> date | None:
    if not _DATE_RE.match(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_observation_rows(
    rows: Iterable[list[str]],
    diagnostics: IngestionDiagnostics | None = None,
) -> list[RawObservation]:
    """Reduce per-station CSV rows to TMIN/TMAX observations.

    Columns are ``id, date, element, value, ...``. The first row is a header.
    Short rows, other elements, unparseable dates or values and the -9999
    sentinel are dropped silently.
    """
    diagnostics = diagnostics if diagnostics is not None else IngestionDiagnostics()
    observations: list[RawObservation] = []
    header_seen = False
    for row in rows:
        if not header_seen:
            header_seen = True
            diagnostics.skip(SkipReason.HEADER)
            continue
        if len(row) < MIN_COLUMNS:
            diagnostics.skip(SkipReason.SHORT_ROW)
            continue

        element = Element.parse(row[2])
        if element is None:
            diagnostics.skip(SkipReason.ELEMENT)
            continue

        day = _parse_date(row[1])
        if day is None:
            diagnostics.skip(SkipReason.DATE)
            continue

        if not _INT_RE.match(row[3]):
            diagnostics.skip(SkipReason.VALUE)
            continue
        value = int(row[3])
        if value == MISSING_VALUE:
            diagnostics.skip(SkipReason.MISSING)
            continue

        observations.append(RawObservation(date=day, element=element, value=value))
        diagnostics.accepted += 1
    return observations


class ObservationSource(Protocol):
    def observation_rows(self, station_id: str) -> Iterable[list[str]]: ...


class StationDataLoader:
    def __init__(self, source: ObservationSource) -> None:
        self._source = source

    def load(self, station_id: str) -> list[RawObservation]:
        diagnostics = IngestionDiagnostics()
        observations = parse_observation_rows(
            self._source.observation_rows(station_id), diagnostics
        )
        logger.debug(
            "Ingested %s: %d observations, skipped %s",
            station_id,
            diagnostics.accepted,
            diagnostics.as_dict(),
        )
        return observations

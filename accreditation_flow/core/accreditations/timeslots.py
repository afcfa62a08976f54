# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Time slot reconstruction from the movement log.

Slots are never stored: every read rebuilds them from the log so there is
no second source of truth to drift from it. Everything here is a pure
function of the movements and the reading clock.
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Dict, List, Optional, Sequence

from .entities import ZoneMovement
from .exceptions import StructuralViolation
from .value_objects import Zone
from .zone_graph import ZoneGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeSlot:
    """One continuous occupancy of a zone.

    Attributes:
        step_number: Position in the journey, starting at 1.
        zone: Occupied zone.
        entry_at: Entry time.
        exit_at: Exit time, None while the vehicle is still in the zone.
        duration_minutes: Closed duration, None for an open slot.
        live_minutes: Duration counted in totals; wall-clock based for an
            open slot and never persisted.
        flagged: True when the slot was repaired from an inconsistent log.
    """

    step_number: int
    zone: Zone
    entry_at: datetime
    exit_at: Optional[datetime]
    duration_minutes: Optional[int]
    live_minutes: int
    flagged: bool = False

    def is_open(self) -> bool:
        """Check if the vehicle is still in the zone."""
        return self.exit_at is None


@dataclass(frozen=True)
class Transfer:
    """Transit between two consecutive slots.

    Attributes:
        from_zone: Zone left.
        to_zone: Zone entered next.
        departure_at: Exit time of the earlier slot.
        arrival_at: Entry time of the later slot.
        transit_minutes: Minutes between departure and arrival.
        flagged: True when the transit was clamped to zero.
    """

    from_zone: Zone
    to_zone: Zone
    departure_at: datetime
    arrival_at: datetime
    transit_minutes: int
    flagged: bool = False


@dataclass(frozen=True)
class InTransit:
    """Vehicle that left a non-final zone and has not entered another yet.

    Attributes:
        from_zone: Zone left.
        departure_at: Exit time.
        elapsed_minutes: Minutes since departure at read time.
    """

    from_zone: Zone
    departure_at: datetime
    elapsed_minutes: int


@dataclass
class DaySlotGroup:
    """Slots entered on one site calendar day.

    Attributes:
        date: Site-local calendar day.
        slots: Slots whose entry falls on that day, by step number.
        transfers: Transfers whose departure falls on that day.
        total_minutes: Sum of slot durations (open slots count live).
    """

    date: date
    slots: List[TimeSlot] = field(default_factory=list)
    transfers: List[Transfer] = field(default_factory=list)
    total_minutes: int = 0


@dataclass(frozen=True)
class TimeSlotReport:
    """Day-grouped slots, transfers and totals for one accreditation.

    Attributes:
        days: Day groups, most recent day first.
        grand_total_minutes: Sum of all day totals.
        in_transit: Pending transfer, if the vehicle is between zones.
        warnings: Log inconsistencies that were repaired while reading.
    """

    days: List[DaySlotGroup]
    grand_total_minutes: int
    in_transit: Optional[InTransit] = None
    warnings: List[StructuralViolation] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "TimeSlotReport":
        """Report for an accreditation without movements."""
        return cls(days=[], grand_total_minutes=0)

    def slots(self) -> List[TimeSlot]:
        """All slots in step order."""
        every = [slot for day in self.days for slot in day.slots]
        return sorted(every, key=lambda slot: slot.step_number)

    def transfers(self) -> List[Transfer]:
        """All transfers in departure order."""
        every = [transfer for day in self.days for transfer in day.transfers]
        return sorted(every, key=lambda transfer: transfer.departure_at)

    def minutes_by_zone(self) -> Dict[Zone, int]:
        """Total minutes spent in each zone (open slot counted live)."""
        totals: Dict[Zone, int] = defaultdict(int)
        for slot in self.slots():
            totals[slot.zone] += slot.live_minutes
        return dict(totals)


class TimeSlotAggregator:
    """Rebuilds occupancy slots and transit times from movements.

    Attributes:
        zone_graph: Zone topology, used to tell a finished journey (final
            destination left) from a vehicle still in transit.
        site_timezone: Time zone defining the site's calendar days.
    """

    def __init__(self, zone_graph: ZoneGraph, site_timezone: tzinfo = timezone.utc) -> None:
        self.zone_graph = zone_graph
        self.site_timezone = site_timezone

    def aggregate(
        self,
        movements: Sequence[ZoneMovement],
        now: Optional[datetime] = None,
    ) -> TimeSlotReport:
        """Build the time slot report.

        Args:
            movements: Movements of one accreditation in log order, as
                returned by ``MovementLog.read_all``. They are paired in the
                order given; a slot whose EXIT precedes its ENTRY is clamped
                to zero and flagged.
            now: Reading clock for open slots; defaults to current UTC time.

        Returns:
            TimeSlotReport; empty when there are no movements.
        """
        if not movements:
            return TimeSlotReport.empty()

        now = _as_utc(now or datetime.now(timezone.utc))
        owner = str(movements[0].accreditation_id)
        warnings: List[StructuralViolation] = []

        slots = self._build_slots(owner, movements, now, warnings)
        transfers = self._build_transfers(owner, slots, warnings)
        in_transit = self._pending_transfer(slots, now)

        days = self._group_by_day(slots, transfers)
        grand_total = sum(day.total_minutes for day in days)

        for warning in warnings:
            logger.warning("%s", warning.message)

        return TimeSlotReport(
            days=days,
            grand_total_minutes=grand_total,
            in_transit=in_transit,
            warnings=warnings,
        )

    def _build_slots(
        self,
        owner: str,
        movements: Sequence[ZoneMovement],
        now: datetime,
        warnings: List[StructuralViolation],
    ) -> List[TimeSlot]:
        slots: List[TimeSlot] = []
        step = 0
        open_zone: Optional[Zone] = None
        open_since: Optional[datetime] = None

        for movement in movements:
            at = _as_utc(movement.timestamp)
            if movement.is_entry():
                if open_zone is not None:
                    warnings.append(StructuralViolation(
                        owner,
                        f"ENTRY into {movement.zone.value} while still in {open_zone.value}; "
                        f"previous slot closed at {at.isoformat()} with zero duration",
                    ))
                    slots.append(TimeSlot(step, open_zone, open_since, at, 0, 0, flagged=True))
                step += 1
                open_zone, open_since = movement.zone, at
                continue

            if open_zone is None:
                warnings.append(StructuralViolation(
                    owner,
                    f"EXIT from {movement.zone.value} at {at.isoformat()} without a matching ENTRY; ignored",
                ))
                continue

            flagged = False
            if movement.zone != open_zone:
                warnings.append(StructuralViolation(
                    owner,
                    f"EXIT from {movement.zone.value} closes a slot opened in {open_zone.value}",
                ))
                flagged = True
            duration = _minutes_between(open_since, at)
            if duration < 0:
                warnings.append(StructuralViolation(
                    owner,
                    f"slot in {open_zone.value} ends before it starts; duration clamped to zero",
                ))
                duration, flagged = 0, True
            slots.append(TimeSlot(step, open_zone, open_since, at, duration, duration, flagged))
            open_zone, open_since = None, None

        if open_zone is not None:
            live = max(0, _minutes_between(open_since, now))
            slots.append(TimeSlot(step, open_zone, open_since, None, None, live))
        return slots

    def _build_transfers(
        self,
        owner: str,
        slots: List[TimeSlot],
        warnings: List[StructuralViolation],
    ) -> List[Transfer]:
        transfers: List[Transfer] = []
        for current, following in zip(slots, slots[1:]):
            if current.exit_at is None:
                continue
            transit = _minutes_between(current.exit_at, following.entry_at)
            flagged = False
            if transit < 0:
                warnings.append(StructuralViolation(
                    owner,
                    f"arrival in {following.zone.value} precedes departure from "
                    f"{current.zone.value}; transit clamped to zero",
                ))
                transit, flagged = 0, True
            transfers.append(Transfer(
                from_zone=current.zone,
                to_zone=following.zone,
                departure_at=current.exit_at,
                arrival_at=following.entry_at,
                transit_minutes=transit,
                flagged=flagged,
            ))
        return transfers

    def _pending_transfer(self, slots: List[TimeSlot], now: datetime) -> Optional[InTransit]:
        if not slots:
            return None
        last = slots[-1]
        if last.is_open() or self.zone_graph.is_final_destination(last.zone):
            return None
        return InTransit(
            from_zone=last.zone,
            departure_at=last.exit_at,
            elapsed_minutes=max(0, _minutes_between(last.exit_at, now)),
        )

    def _group_by_day(
        self,
        slots: List[TimeSlot],
        transfers: List[Transfer],
    ) -> List[DaySlotGroup]:
        groups: Dict[date, DaySlotGroup] = {}

        for slot in slots:
            day = self._site_date(slot.entry_at)
            group = groups.setdefault(day, DaySlotGroup(date=day))
            group.slots.append(slot)
            group.total_minutes += slot.live_minutes

        for transfer in transfers:
            day = self._site_date(transfer.departure_at)
            groups.setdefault(day, DaySlotGroup(date=day)).transfers.append(transfer)

        return [groups[day] for day in sorted(groups, reverse=True)]

    def _site_date(self, moment: datetime) -> date:
        return moment.astimezone(self.site_timezone).date()


def _as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end``, half-minutes rounded up."""
    seconds = (end - start).total_seconds()
    return int(math.floor(seconds / 60 + 0.5))

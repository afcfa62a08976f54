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

"""Time slot use cases.

Slots are never persisted: every read rebuilds them from the movement log.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from accreditation_flow.core.accreditations.exceptions import AccreditationNotFoundError
from accreditation_flow.core.accreditations.repositories import UnitOfWork
from accreditation_flow.core.accreditations.timeslots import (
    TimeSlotAggregator,
    TimeSlotReport,
)
from accreditation_flow.core.accreditations.value_objects import AccreditationId, Zone

from ..dtos import TimeSlotReportResponse, ZoneTimeResponse


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class _TimeSlotQuery:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        aggregator: TimeSlotAggregator,
        clock: Callable[[], datetime] = _now_utc,
    ) -> None:
        self._uow_factory = uow_factory
        self._aggregator = aggregator
        self._clock = clock

    def _report(self, accreditation_id: AccreditationId) -> TimeSlotReport:
        with self._uow_factory() as uow:
            if uow.accreditations.find_by_id(accreditation_id) is None:
                raise AccreditationNotFoundError(str(accreditation_id))
            movements = uow.movements.read_all(accreditation_id)
        return self._aggregator.aggregate(movements, now=self._clock())


class GetTimeSlotsUseCase(_TimeSlotQuery):
    """Use case returning the time slot report of an accreditation."""

    def execute(self, accreditation_id: AccreditationId) -> TimeSlotReportResponse:
        """Aggregate the movement log into slots, transfers and day totals.

        Raises:
            AccreditationNotFoundError: If the accreditation does not exist.
        """
        return TimeSlotReportResponse.from_report(
            accreditation_id, self._report(accreditation_id)
        )


class GetZoneTimeUseCase(_TimeSlotQuery):
    """Use case returning minutes spent per zone."""

    def execute(
        self,
        accreditation_id: AccreditationId,
        zone: Optional[Zone] = None,
    ) -> ZoneTimeResponse:
        """Sum slot minutes per zone, the open slot counted live.

        Args:
            accreditation_id: Accreditation to report on.
            zone: Restrict the figures to one zone.

        Raises:
            AccreditationNotFoundError: If the accreditation does not exist.
        """
        minutes = self._report(accreditation_id).minutes_by_zone()
        if zone is not None:
            minutes = {zone: minutes.get(zone, 0)}
        return ZoneTimeResponse(
            accreditation_id=str(accreditation_id),
            minutes_by_zone={key.value: value for key, value in minutes.items()},
            total_minutes=sum(minutes.values()),
        )

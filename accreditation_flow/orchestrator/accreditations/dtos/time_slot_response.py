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

"""Time slot report DTOs."""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class TimeSlotResponse:
    """One zone occupancy slot."""

    step_number: int
    zone: str
    entry_at: str
    exit_at: Optional[str]
    duration_minutes: Optional[int]
    live_minutes: int
    flagged: bool


@dataclass(frozen=True)
class TransferResponse:
    """Transit between two consecutive slots."""

    from_zone: str
    to_zone: str
    departure_at: str
    arrival_at: str
    transit_minutes: int
    flagged: bool


@dataclass(frozen=True)
class InTransitResponse:
    """Vehicle left a non-final zone and has not entered the next one yet."""

    from_zone: str
    departure_at: str
    elapsed_minutes: int


@dataclass(frozen=True)
class DaySlotsResponse:
    """Slots and transfers of one site-local calendar day."""

    date: str
    slots: List[TimeSlotResponse]
    transfers: List[TransferResponse]
    total_minutes: int


@dataclass(frozen=True)
class TimeSlotReportResponse:
    """Response DTO for the time slot report of an accreditation.

    Attributes:
        accreditation_id: Accreditation the report belongs to.
        days: Day groups, most recent first.
        grand_total_minutes: Sum of day totals.
        in_transit: Pending transfer, if any.
        warnings: Movement log inconsistencies met while aggregating.
    """

    accreditation_id: str
    days: List[DaySlotsResponse]
    grand_total_minutes: int
    in_transit: Optional[InTransitResponse]
    warnings: List[str]

    @staticmethod
    def from_report(accreditation_id, report) -> "TimeSlotReportResponse":
        """Create response DTO from a TimeSlotReport.

        Args:
            accreditation_id: Accreditation the report belongs to.
            report: Aggregated TimeSlotReport.

        Returns:
            TimeSlotReportResponse DTO with serialized values.
        """
        days = [
            DaySlotsResponse(
                date=day.date.isoformat(),
                slots=[
                    TimeSlotResponse(
                        step_number=slot.step_number,
                        zone=slot.zone.value,
                        entry_at=slot.entry_at.isoformat(),
                        exit_at=slot.exit_at.isoformat() if slot.exit_at else None,
                        duration_minutes=slot.duration_minutes,
                        live_minutes=slot.live_minutes,
                        flagged=slot.flagged,
                    )
                    for slot in day.slots
                ],
                transfers=[
                    TransferResponse(
                        from_zone=transfer.from_zone.value,
                        to_zone=transfer.to_zone.value,
                        departure_at=transfer.departure_at.isoformat(),
                        arrival_at=transfer.arrival_at.isoformat(),
                        transit_minutes=transfer.transit_minutes,
                        flagged=transfer.flagged,
                    )
                    for transfer in day.transfers
                ],
                total_minutes=day.total_minutes,
            )
            for day in report.days
        ]
        in_transit = None
        if report.in_transit is not None:
            in_transit = InTransitResponse(
                from_zone=report.in_transit.from_zone.value,
                departure_at=report.in_transit.departure_at.isoformat(),
                elapsed_minutes=report.in_transit.elapsed_minutes,
            )
        return TimeSlotReportResponse(
            accreditation_id=str(accreditation_id),
            days=days,
            grand_total_minutes=report.grand_total_minutes,
            in_transit=in_transit,
            warnings=[warning.message for warning in report.warnings],
        )


@dataclass(frozen=True)
class ZoneTimeResponse:
    """Minutes spent per zone, open slot counted live.

    Attributes:
        accreditation_id: Accreditation the figures belong to.
        minutes_by_zone: Zone value to minutes.
        total_minutes: Sum over the reported zones.
    """

    accreditation_id: str
    minutes_by_zone: Dict[str, int]
    total_minutes: int

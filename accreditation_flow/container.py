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

"""Wiring of domain services, use cases and adapters."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from accreditation_flow.config import Settings
from accreditation_flow.core.accreditations import (
    HistoryEntryFactory,
    StatusMachine,
    TimeSlotAggregator,
    UnitOfWork,
    ZoneGraph,
)
from accreditation_flow.infra.db import (
    SqlAlchemyUnitOfWork,
    build_engine,
    build_session_factory,
    init_schema,
)
from accreditation_flow.infra.id_generator import UUIDv4Generator, UUIDv7Generator
from accreditation_flow.orchestrator.accreditations.guard import ConcurrencyGuard
from accreditation_flow.orchestrator.accreditations.use_cases import (
    ArchiveAccreditationUseCase,
    ChangeStatusUseCase,
    CheckDuplicateUseCase,
    CreateAccreditationUseCase,
    GetAccreditationUseCase,
    GetHistoryUseCase,
    ListAccreditationsUseCase,
    ListChangesUseCase,
    GetTimeSlotsUseCase,
    GetZoneTimeUseCase,
    ListMovementsUseCase,
    RecordZoneActionUseCase,
    TransferZoneUseCase,
)

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Container:
    """Application services built over one unit of work factory."""

    settings: Settings
    zone_graph: ZoneGraph
    create_accreditation: CreateAccreditationUseCase
    change_status: ChangeStatusUseCase
    record_zone_action: RecordZoneActionUseCase
    transfer_zone: TransferZoneUseCase
    archive_accreditation: ArchiveAccreditationUseCase
    list_accreditations: ListAccreditationsUseCase
    check_duplicate: CheckDuplicateUseCase
    list_changes: ListChangesUseCase
    get_accreditation: GetAccreditationUseCase
    list_movements: ListMovementsUseCase
    get_history: GetHistoryUseCase
    get_time_slots: GetTimeSlotsUseCase
    get_zone_time: GetZoneTimeUseCase
    correlation_ids: UUIDv4Generator

    @classmethod
    def build(
        cls,
        settings: Settings,
        uow_factory: Callable[[], UnitOfWork],
        zone_graph: Optional[ZoneGraph] = None,
        clock: Callable[[], datetime] = _now_utc,
    ) -> "Container":
        """Build every use case over ``uow_factory``.

        Args:
            settings: Application settings.
            uow_factory: Unit of work factory shared by all use cases.
            zone_graph: Zone topology; loaded from settings when None.
            clock: Source of mutation and reading timestamps.
        """
        if zone_graph is None:
            if settings.site.zones_file:
                zone_graph = ZoneGraph.from_yaml(settings.site.zones_file)
            else:
                zone_graph = ZoneGraph()

        status_machine = StatusMachine(zone_graph)
        history_factory = HistoryEntryFactory(zone_graph)
        guard = ConcurrencyGuard(uow_factory, history_factory, clock=clock)
        aggregator = TimeSlotAggregator(zone_graph, ZoneInfo(settings.site.timezone))

        return cls(
            settings=settings,
            zone_graph=zone_graph,
            create_accreditation=CreateAccreditationUseCase(
                uow_factory, UUIDv7Generator(), history_factory, clock=clock
            ),
            change_status=ChangeStatusUseCase(guard, status_machine),
            record_zone_action=RecordZoneActionUseCase(guard, status_machine),
            transfer_zone=TransferZoneUseCase(guard, status_machine),
            archive_accreditation=ArchiveAccreditationUseCase(guard),
            list_accreditations=ListAccreditationsUseCase(uow_factory),
            check_duplicate=CheckDuplicateUseCase(uow_factory),
            list_changes=ListChangesUseCase(uow_factory, clock=clock),
            get_accreditation=GetAccreditationUseCase(uow_factory),
            list_movements=ListMovementsUseCase(uow_factory),
            get_history=GetHistoryUseCase(uow_factory),
            get_time_slots=GetTimeSlotsUseCase(uow_factory, aggregator, clock=clock),
            get_zone_time=GetZoneTimeUseCase(uow_factory, aggregator, clock=clock),
            correlation_ids=UUIDv4Generator(),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        """Build the container over the configured relational store."""
        engine = build_engine(settings.database)
        init_schema(engine)
        session_factory = build_session_factory(engine)
        logger.info("Site time zone %s", settings.site.timezone)
        return cls.build(settings, lambda: SqlAlchemyUnitOfWork(session_factory))

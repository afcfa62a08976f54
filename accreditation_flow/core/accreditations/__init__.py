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

"""Accreditation domain module for Accreditation Flow."""

from .entities import Accreditation, HistoryEntry, Vehicle, ZoneMovement
from .exceptions import (
    AccreditationDomainError,
    AccreditationNotFoundError,
    InvalidAccreditationError,
    InvalidStateTransitionError,
    InvalidZoneError,
    OptimisticLockError,
    StructuralViolation,
    TerminalStateViolationError,
)
from .repositories import (
    AccreditationIdGenerator,
    AccreditationRepository,
    HistoryRecorder,
    MovementLog,
    UnitOfWork,
)
from .services import HistoryEntryFactory
from .status_machine import StatusMachine
from .timeslots import (
    DaySlotGroup,
    InTransit,
    TimeSlot,
    TimeSlotAggregator,
    TimeSlotReport,
    Transfer,
)
from .value_objects import (
    AccreditationId,
    ActorId,
    HistoryAction,
    MovementAction,
    Status,
    VehicleType,
    Zone,
)
from .zone_graph import DEFAULT_ZONES, ZoneConfig, ZoneGraph

__all__ = [
    "Accreditation",
    "HistoryEntry",
    "Vehicle",
    "ZoneMovement",
    "AccreditationDomainError",
    "AccreditationNotFoundError",
    "InvalidAccreditationError",
    "InvalidStateTransitionError",
    "InvalidZoneError",
    "OptimisticLockError",
    "StructuralViolation",
    "TerminalStateViolationError",
    "AccreditationIdGenerator",
    "AccreditationRepository",
    "HistoryRecorder",
    "MovementLog",
    "UnitOfWork",
    "HistoryEntryFactory",
    "StatusMachine",
    "DaySlotGroup",
    "InTransit",
    "TimeSlot",
    "TimeSlotAggregator",
    "TimeSlotReport",
    "Transfer",
    "AccreditationId",
    "ActorId",
    "HistoryAction",
    "MovementAction",
    "Status",
    "VehicleType",
    "Zone",
    "DEFAULT_ZONES",
    "ZoneConfig",
    "ZoneGraph",
]

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

"""Relational persistence for Accreditation Flow."""

from .models import (
    AccreditationModel,
    Base,
    HistoryEntryModel,
    VehicleModel,
    ZoneMovementModel,
)
from .repositories import (
    SqlAlchemyAccreditationRepository,
    SqlAlchemyHistoryRecorder,
    SqlAlchemyMovementLog,
    SqlAlchemyUnitOfWork,
)
from .session import build_engine, build_session_factory, init_schema

__all__ = [
    "AccreditationModel",
    "Base",
    "HistoryEntryModel",
    "VehicleModel",
    "ZoneMovementModel",
    "SqlAlchemyAccreditationRepository",
    "SqlAlchemyHistoryRecorder",
    "SqlAlchemyMovementLog",
    "SqlAlchemyUnitOfWork",
    "build_engine",
    "build_session_factory",
    "init_schema",
]

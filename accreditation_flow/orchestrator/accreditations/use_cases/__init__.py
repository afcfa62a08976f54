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

"""Accreditation use cases."""

from .archive_accreditation import ArchiveAccreditationUseCase
from .change_status import ChangeStatusUseCase
from .check_duplicate import CheckDuplicateUseCase
from .create_accreditation import CreateAccreditationUseCase
from .list_changes import ListChangesUseCase
from .queries import (
    GetAccreditationUseCase,
    GetHistoryUseCase,
    ListAccreditationsUseCase,
    ListMovementsUseCase,
)
from .record_zone_action import RecordZoneActionUseCase
from .time_slots import GetTimeSlotsUseCase, GetZoneTimeUseCase
from .transfer_zone import TransferZoneUseCase

__all__ = [
    "ArchiveAccreditationUseCase",
    "ChangeStatusUseCase",
    "CheckDuplicateUseCase",
    "CreateAccreditationUseCase",
    "ListChangesUseCase",
    "GetAccreditationUseCase",
    "GetHistoryUseCase",
    "ListAccreditationsUseCase",
    "ListMovementsUseCase",
    "RecordZoneActionUseCase",
    "GetTimeSlotsUseCase",
    "GetZoneTimeUseCase",
    "TransferZoneUseCase",
]

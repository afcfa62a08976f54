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

"""Pydantic schemas for accreditation API requests."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from accreditation_flow.core.accreditations.entities import Vehicle
from accreditation_flow.core.accreditations.value_objects import VehicleType


class VehicleSchema(BaseModel):
    """Vehicle as submitted by the request form."""

    model_config = ConfigDict(extra="forbid")

    plate: str = Field(default="", max_length=32)
    size: str = Field(default="", max_length=64)
    phone_code: str = Field(default="", max_length=8)
    phone_number: str = Field(default="", max_length=32)
    date: str = Field(default="", max_length=32)
    time: str = Field(default="", max_length=16)
    city: str = Field(default="", max_length=128)
    unloading: List[str] = Field(default_factory=list)
    kms: str = Field(default="", max_length=32)
    vehicle_type: Optional[VehicleType] = None
    trailer_plate: Optional[str] = Field(default=None, max_length=32)
    empty_weight: Optional[float] = Field(default=None, ge=0)
    max_weight: Optional[float] = Field(default=None, ge=0)
    current_weight: Optional[float] = Field(default=None, ge=0)

    def to_entity(self) -> Vehicle:
        """Convert to the domain entity."""
        return Vehicle(**self.model_dump())


class CreateAccreditationRequest(BaseModel):
    """Body of POST /accreditations."""

    model_config = ConfigDict(extra="forbid")

    company: str = Field(default="", max_length=255)
    stand: str = Field(default="", max_length=255)
    unloading: str = Field(default="", max_length=255)
    event: str = Field(default="", max_length=255)
    message: str = ""
    email: Optional[str] = Field(default=None, max_length=320)
    consent: bool = True
    status: str = "NOUVEAU"
    vehicles: List[VehicleSchema] = Field(default_factory=list)


class ChangeStatusRequest(BaseModel):
    """Body of PATCH /accreditations/{id}."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(..., ge=1)
    status: Optional[str] = None
    zone: Optional[str] = None
    company: Optional[str] = Field(default=None, max_length=255)
    stand: Optional[str] = Field(default=None, max_length=255)
    unloading: Optional[str] = Field(default=None, max_length=255)
    event: Optional[str] = Field(default=None, max_length=255)
    message: Optional[str] = None
    email: Optional[str] = Field(default=None, max_length=320)
    vehicles: Optional[List[VehicleSchema]] = None


class ZoneActionRequest(BaseModel):
    """Body of POST /accreditations/{id}/zones."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(..., ge=1)
    action: str = Field(..., max_length=16)
    zone: str


class TransferRequest(BaseModel):
    """Body of POST /accreditations/{id}/transfer."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(..., ge=1)
    target_zone: str
    reason: Optional[str] = Field(default=None, max_length=500)


class ArchiveRequest(BaseModel):
    """Body of POST /accreditations/{id}/archive."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(..., ge=1)
    archive: StrictBool


class DuplicateCheckRequest(BaseModel):
    """Body of POST /accreditations/check-duplicate."""

    model_config = ConfigDict(extra="forbid")

    company: str = Field(default="", max_length=255)
    plate: str = Field(default="", max_length=32)
    trailer_plate: Optional[str] = Field(default=None, max_length=32)

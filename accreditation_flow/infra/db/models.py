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

"""ORM models for accreditations, vehicles, movements and history."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for every table of the service."""


class AccreditationModel(Base):
    __tablename__ = "accreditations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    stand: Mapped[str] = mapped_column(String(255), nullable=False)
    unloading: Mapped[str] = mapped_column(String(255), nullable=False)
    event: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    consent: Mapped[bool] = mapped_column(default=True, nullable=False)
    is_archived: Mapped[bool] = mapped_column(default=False, index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(16), index=True, nullable=False)
    current_zone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    entry_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    exit_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class VehicleModel(Base):
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    accreditation_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accreditations.id", ondelete="CASCADE"), index=True
    )
    plate: Mapped[str] = mapped_column(String(32), nullable=False)
    size: Mapped[str] = mapped_column(String(64), nullable=False)
    phone_code: Mapped[str] = mapped_column(String(8), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    date: Mapped[str] = mapped_column(String(32), nullable=False)
    time: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    unloading: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    kms: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    vehicle_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    trailer_plate: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    empty_weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    max_weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    current_weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class ZoneMovementModel(Base):
    __tablename__ = "zone_movements"
    __table_args__ = (
        Index("ix_zone_movements_accreditation_timestamp", "accreditation_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    accreditation_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accreditations.id", ondelete="CASCADE"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(8), nullable=False)
    from_zone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    to_zone: Mapped[str] = mapped_column(String(32), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)


class HistoryEntryModel(Base):
    __tablename__ = "accreditation_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    accreditation_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accreditations.id", ondelete="CASCADE"), index=True
    )
    action: Mapped[str] = mapped_column(String(16), nullable=False)
    field: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    old_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    new_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    actor: Mapped[str] = mapped_column(String(128), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)

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

"""SQLAlchemy adapters for the accreditation repository ports."""

import dataclasses
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from accreditation_flow.core.accreditations.entities import (
    Accreditation,
    HistoryEntry,
    Vehicle,
    ZoneMovement,
)
from accreditation_flow.core.accreditations.exceptions import OptimisticLockError
from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    ActorId,
    HistoryAction,
    MovementAction,
    Status,
    VehicleType,
    Zone,
)

from .models import AccreditationModel, HistoryEntryModel, VehicleModel, ZoneMovementModel

logger = logging.getLogger(__name__)


def _aware(moment: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored values are UTC."""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)


def _zone(value: Optional[str]) -> Optional[Zone]:
    return Zone(value) if value else None


def _vehicle_to_model(accreditation_id: str, vehicle: Vehicle) -> VehicleModel:
    return VehicleModel(
        accreditation_id=accreditation_id,
        plate=vehicle.plate,
        size=vehicle.size,
        phone_code=vehicle.phone_code,
        phone_number=vehicle.phone_number,
        date=vehicle.date,
        time=vehicle.time,
        city=vehicle.city,
        unloading=list(vehicle.unloading),
        kms=vehicle.kms,
        vehicle_type=vehicle.vehicle_type.value if vehicle.vehicle_type else None,
        trailer_plate=vehicle.trailer_plate,
        empty_weight=vehicle.empty_weight,
        max_weight=vehicle.max_weight,
        current_weight=vehicle.current_weight,
    )


def _vehicle_to_entity(model: VehicleModel) -> Vehicle:
    return Vehicle(
        plate=model.plate,
        size=model.size,
        phone_code=model.phone_code,
        phone_number=model.phone_number,
        date=model.date,
        time=model.time,
        city=model.city,
        unloading=list(model.unloading or []),
        kms=model.kms,
        vehicle_type=VehicleType(model.vehicle_type) if model.vehicle_type else None,
        trailer_plate=model.trailer_plate,
        empty_weight=model.empty_weight,
        max_weight=model.max_weight,
        current_weight=model.current_weight,
        vehicle_id=model.id,
    )


def _row_values(accreditation: Accreditation) -> dict:
    return {
        "company": accreditation.company,
        "stand": accreditation.stand,
        "unloading": accreditation.unloading,
        "event": accreditation.event,
        "message": accreditation.message,
        "email": accreditation.email,
        "consent": accreditation.consent,
        "is_archived": accreditation.is_archived,
        "status": accreditation.status.value,
        "current_zone": accreditation.current_zone.value if accreditation.current_zone else None,
        "entry_at": accreditation.entry_at,
        "exit_at": accreditation.exit_at,
        "created_at": accreditation.created_at,
        "updated_at": accreditation.updated_at,
        "version": accreditation.version,
    }


class SqlAlchemyAccreditationRepository:
    """Accreditation repository backed by the ``accreditations`` and ``vehicles`` tables."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, accreditation: Accreditation) -> None:
        acc_id = str(accreditation.accreditation_id)
        self._session.add(AccreditationModel(id=acc_id, **_row_values(accreditation)))
        self._session.flush()
        self._insert_vehicles(acc_id, accreditation.vehicles)

    def find_by_id(self, accreditation_id: AccreditationId) -> Optional[Accreditation]:
        row = self._session.execute(
            select(AccreditationModel).where(AccreditationModel.id == str(accreditation_id))
        ).scalar_one_or_none()
        if row is None:
            return None
        return self._to_entities([row])[0]

    def find_all(self, archived: bool = False) -> List[Accreditation]:
        rows = self._session.execute(
            select(AccreditationModel)
            .where(AccreditationModel.is_archived == archived)
            .order_by(AccreditationModel.created_at.desc(), AccreditationModel.id.desc())
        ).scalars().all()
        return self._to_entities(rows)

    def find_active_by_company(self, company: str) -> List[Accreditation]:
        rows = self._session.execute(
            select(AccreditationModel)
            .where(
                AccreditationModel.is_archived.is_(False),
                func.lower(func.trim(AccreditationModel.company)) == company.strip().lower(),
            )
            .order_by(AccreditationModel.created_at.desc(), AccreditationModel.id.desc())
        ).scalars().all()
        return self._to_entities(rows)

    def _to_entities(self, rows: Sequence[AccreditationModel]) -> List[Accreditation]:
        """Map rows to aggregates, loading their vehicles in one query."""
        vehicles_by_owner: Dict[str, List[Vehicle]] = defaultdict(list)
        if rows:
            vehicles = self._session.execute(
                select(VehicleModel)
                .where(VehicleModel.accreditation_id.in_([row.id for row in rows]))
                .order_by(VehicleModel.id)
            ).scalars()
            for vehicle in vehicles:
                vehicles_by_owner[vehicle.accreditation_id].append(_vehicle_to_entity(vehicle))

        return [
            Accreditation(
                accreditation_id=AccreditationId(row.id),
                company=row.company,
                stand=row.stand,
                unloading=row.unloading,
                event=row.event,
                status=Status(row.status),
                current_zone=_zone(row.current_zone),
                message=row.message or "",
                email=row.email,
                consent=row.consent,
                is_archived=row.is_archived,
                vehicles=vehicles_by_owner[row.id],
                entry_at=_aware(row.entry_at),
                exit_at=_aware(row.exit_at),
                created_at=_aware(row.created_at),
                updated_at=_aware(row.updated_at),
                version=row.version,
            )
            for row in rows
        ]

    def update(self, accreditation: Accreditation, expected_version: int) -> None:
        """Conditional write: ``UPDATE ... WHERE id = :id AND version = :expected``.

        Raises:
            OptimisticLockError: If the stored version moved on.
        """
        acc_id = str(accreditation.accreditation_id)
        result = self._session.execute(
            update(AccreditationModel)
            .where(
                AccreditationModel.id == acc_id,
                AccreditationModel.version == expected_version,
            )
            .values(**_row_values(accreditation))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise OptimisticLockError(acc_id, expected_version=expected_version)
        if self._vehicles_replaced(acc_id, accreditation.vehicles):
            self._session.execute(
                delete(VehicleModel).where(VehicleModel.accreditation_id == acc_id)
            )
            self._insert_vehicles(acc_id, accreditation.vehicles)

    def _vehicles_replaced(self, acc_id: str, vehicles: List[Vehicle]) -> bool:
        stored = set(self._session.execute(
            select(VehicleModel.id).where(VehicleModel.accreditation_id == acc_id)
        ).scalars())
        current = {vehicle.vehicle_id for vehicle in vehicles}
        return None in current or current != stored

    def _insert_vehicles(self, acc_id: str, vehicles: List[Vehicle]) -> None:
        models = [_vehicle_to_model(acc_id, vehicle) for vehicle in vehicles]
        self._session.add_all(models)
        self._session.flush()
        for vehicle, model in zip(vehicles, models):
            vehicle.vehicle_id = model.id


class SqlAlchemyMovementLog:
    """Append-only movement log backed by the ``zone_movements`` table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def append(self, movement: ZoneMovement) -> ZoneMovement:
        model = ZoneMovementModel(
            accreditation_id=str(movement.accreditation_id),
            action=movement.action.value,
            from_zone=movement.from_zone.value if movement.from_zone else None,
            to_zone=movement.to_zone.value,
            timestamp=movement.timestamp,
        )
        self._session.add(model)
        self._session.flush()
        return dataclasses.replace(movement, movement_id=model.id)

    def read_all(self, accreditation_id: AccreditationId) -> List[ZoneMovement]:
        rows = self._session.execute(
            select(ZoneMovementModel)
            .where(ZoneMovementModel.accreditation_id == str(accreditation_id))
            .order_by(ZoneMovementModel.timestamp, ZoneMovementModel.id)
        ).scalars().all()
        return [self._to_entity(row) for row in rows]

    def last(self, accreditation_id: AccreditationId) -> Optional[ZoneMovement]:
        row = self._session.execute(
            select(ZoneMovementModel)
            .where(ZoneMovementModel.accreditation_id == str(accreditation_id))
            .order_by(ZoneMovementModel.timestamp.desc(), ZoneMovementModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()
        return self._to_entity(row) if row is not None else None

    @staticmethod
    def _to_entity(row: ZoneMovementModel) -> ZoneMovement:
        return ZoneMovement(
            accreditation_id=AccreditationId(row.accreditation_id),
            action=MovementAction(row.action),
            from_zone=_zone(row.from_zone),
            to_zone=Zone(row.to_zone),
            timestamp=_aware(row.timestamp),
            movement_id=row.id,
        )


class SqlAlchemyHistoryRecorder:
    """History sink backed by the ``accreditation_history`` table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def record(self, entry: HistoryEntry) -> None:
        self._session.add(HistoryEntryModel(
            accreditation_id=str(entry.accreditation_id),
            action=entry.action.value,
            field=entry.field,
            old_value=entry.old_value,
            new_value=entry.new_value,
            description=entry.description,
            actor=str(entry.actor),
            timestamp=entry.timestamp,
        ))

    def find_by_accreditation(self, accreditation_id: AccreditationId) -> List[HistoryEntry]:
        rows = self._session.execute(
            select(HistoryEntryModel)
            .where(HistoryEntryModel.accreditation_id == str(accreditation_id))
            .order_by(HistoryEntryModel.timestamp.desc(), HistoryEntryModel.id.desc())
        ).scalars().all()
        return [self._to_entity(row) for row in rows]

    def find_since(self, since: datetime, limit: int) -> List[HistoryEntry]:
        rows = self._session.execute(
            select(HistoryEntryModel)
            .where(HistoryEntryModel.timestamp > since)
            .order_by(HistoryEntryModel.timestamp, HistoryEntryModel.id)
            .limit(limit)
        ).scalars().all()
        return [self._to_entity(row) for row in rows]

    @staticmethod
    def _to_entity(row: HistoryEntryModel) -> HistoryEntry:
        return HistoryEntry(
            accreditation_id=AccreditationId(row.accreditation_id),
            action=HistoryAction(row.action),
            description=row.description,
            actor=ActorId(row.actor),
            timestamp=_aware(row.timestamp),
            field=row.field,
            old_value=row.old_value,
            new_value=row.new_value,
            entry_id=row.id,
        )


class SqlAlchemyUnitOfWork:
    """Unit of work holding one session and the three repositories over it.

    Leaving the context without ``commit`` rolls the session back.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self.session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.accreditations = SqlAlchemyAccreditationRepository(self.session)
        self.movements = SqlAlchemyMovementLog(self.session)
        self.history = SqlAlchemyHistoryRecorder(self.session)
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        try:
            self.rollback()
        finally:
            self.session.close()

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            logger.error("Commit failed: %s", exc.__class__.__name__)
            raise

    def rollback(self) -> None:
        self.session.rollback()

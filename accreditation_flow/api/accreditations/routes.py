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

"""FastAPI routes for accreditation lifecycle operations."""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from accreditation_flow.api.dependencies import (
    get_container,
    get_correlation_id,
    require_read,
    require_write,
)
from accreditation_flow.container import Container
from accreditation_flow.core.accreditations.exceptions import (
    AccreditationDomainError,
    AccreditationNotFoundError,
    InvalidAccreditationError,
    InvalidStateTransitionError,
    InvalidZoneError,
    OptimisticLockError,
)
from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    ActorId,
    MovementAction,
    Status,
)
from accreditation_flow.orchestrator.accreditations.commands import (
    ArchiveAccreditationCommand,
    ChangeStatusCommand,
    CreateAccreditationCommand,
    RecordZoneActionCommand,
    TransferZoneCommand,
)
from accreditation_flow.orchestrator.accreditations.dtos import (
    AccreditationResponse,
    MutationResult,
)

from .schemas import (
    ArchiveRequest,
    ChangeStatusRequest,
    CreateAccreditationRequest,
    DuplicateCheckRequest,
    TransferRequest,
    ZoneActionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accreditations", tags=["accreditations"])

# Most specific classes first: TerminalStateViolationError is an
# InvalidStateTransitionError.
_ERROR_MAP = (
    (AccreditationNotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (OptimisticLockError, status.HTTP_409_CONFLICT, "version_conflict"),
    (InvalidZoneError, status.HTTP_400_BAD_REQUEST, "invalid_zone"),
    (InvalidStateTransitionError, status.HTTP_400_BAD_REQUEST, "invalid_transition"),
    (InvalidAccreditationError, status.HTTP_400_BAD_REQUEST, "invalid_request"),
)


def _raise_domain_error(error: AccreditationDomainError) -> NoReturn:
    """Translate a domain error into an HTTP error response."""
    for error_type, status_code, code in _ERROR_MAP:
        if isinstance(error, error_type):
            break
    else:
        status_code, code = status.HTTP_400_BAD_REQUEST, "domain_error"

    detail: Dict[str, Any] = {"error": code, "message": error.message}
    if isinstance(error, OptimisticLockError) and error.actual_version is not None:
        detail["current_version"] = error.actual_version
    if isinstance(error, InvalidAccreditationError):
        detail["fields"] = error.fields
    raise HTTPException(status_code=status_code, detail=detail)


def _parse_id(accreditation_id: str) -> AccreditationId:
    try:
        return AccreditationId(accreditation_id)
    except ValueError:
        _raise_domain_error(AccreditationNotFoundError(accreditation_id))


def _parse_status(value: Optional[str]) -> Optional[Status]:
    if value is None:
        return None
    try:
        return Status(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_status", "message": f"Unknown status: {value}"},
        ) from None


def _parse_action(value: str) -> MovementAction:
    try:
        return MovementAction(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_action", "message": f"Unknown action: {value}"},
        ) from None


def _parse_since(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        # fromisoformat only accepts a trailing "Z" from Python 3.11 on
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_request", "message": f"Invalid 'since' timestamp: {value}"},
        ) from None


def _mutation_response(result: MutationResult) -> Dict[str, Any]:
    if not result.ok:
        _raise_domain_error(result.error)
    body = asdict(AccreditationResponse.from_entity(result.accreditation))
    body["changed"] = result.changed
    return body


@router.post("", status_code=status.HTTP_201_CREATED)
def create_accreditation(
    body: CreateAccreditationRequest,
    actor: ActorId = Depends(require_write),
    correlation_id: str = Depends(get_correlation_id),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Create an accreditation in NOUVEAU (public request) or ATTENTE (staff)."""
    command = CreateAccreditationCommand(
        company=body.company,
        stand=body.stand,
        unloading=body.unloading,
        event=body.event,
        vehicles=tuple(vehicle.to_entity() for vehicle in body.vehicles),
        actor=actor,
        status=_parse_status(body.status),
        message=body.message,
        email=body.email,
        consent=body.consent,
        correlation_id=correlation_id,
    )
    return _mutation_response(container.create_accreditation.execute(command))


@router.get("")
def list_accreditations(
    archived: bool = Query(default=False),
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> List[Dict[str, Any]]:
    """List active accreditations, or archived ones with ``?archived=true``."""
    return [asdict(item) for item in container.list_accreditations.execute(archived)]


@router.get("/changes")
def list_changes(
    since: Optional[str] = Query(default=None),
    zone: Optional[str] = Query(default=None),
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Return history entries recorded after ``since``, for polling clients."""
    try:
        parsed_zone = container.zone_graph.parse(zone) if zone else None
    except AccreditationDomainError as exc:
        _raise_domain_error(exc)
    response = container.list_changes.execute(_parse_since(since), parsed_zone)
    return asdict(response)


@router.post("/check-duplicate")
def check_duplicate(
    body: DuplicateCheckRequest,
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Return active accreditations with the same company and plate."""
    duplicates = container.check_duplicate.execute(
        body.company, body.plate, body.trailer_plate
    )
    return {"duplicates": [asdict(duplicate) for duplicate in duplicates]}


@router.get("/{accreditation_id}")
def get_accreditation(
    accreditation_id: str,
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Return one accreditation."""
    try:
        response = container.get_accreditation.execute(_parse_id(accreditation_id))
    except AccreditationDomainError as exc:
        _raise_domain_error(exc)
    return asdict(response)


@router.patch("/{accreditation_id}")
def change_status(
    accreditation_id: str,
    body: ChangeStatusRequest,
    actor: ActorId = Depends(require_write),
    correlation_id: str = Depends(get_correlation_id),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Change status, zone, descriptive fields or vehicles under version check."""
    vehicles = None
    if body.vehicles is not None:
        vehicles = tuple(vehicle.to_entity() for vehicle in body.vehicles)
    command = ChangeStatusCommand(
        accreditation_id=_parse_id(accreditation_id),
        expected_version=body.version,
        actor=actor,
        status=_parse_status(body.status),
        zone=body.zone,
        company=body.company,
        stand=body.stand,
        unloading=body.unloading,
        event=body.event,
        message=body.message,
        email=body.email,
        vehicles=vehicles,
        correlation_id=correlation_id,
    )
    return _mutation_response(container.change_status.execute(command))


@router.post("/{accreditation_id}/zones")
def record_zone_action(
    accreditation_id: str,
    body: ZoneActionRequest,
    actor: ActorId = Depends(require_write),
    correlation_id: str = Depends(get_correlation_id),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Record a gate scan: ENTRY into or EXIT from a zone."""
    command = RecordZoneActionCommand(
        accreditation_id=_parse_id(accreditation_id),
        expected_version=body.version,
        actor=actor,
        action=_parse_action(body.action),
        zone=body.zone,
        correlation_id=correlation_id,
    )
    return _mutation_response(container.record_zone_action.execute(command))


@router.get("/{accreditation_id}/zones")
def list_movements(
    accreditation_id: str,
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> List[Dict[str, Any]]:
    """Return the movement log, oldest first."""
    try:
        movements = container.list_movements.execute(_parse_id(accreditation_id))
    except AccreditationDomainError as exc:
        _raise_domain_error(exc)
    return [asdict(movement) for movement in movements]


@router.post("/{accreditation_id}/transfer")
def transfer_zone(
    accreditation_id: str,
    body: TransferRequest,
    actor: ActorId = Depends(require_write),
    correlation_id: str = Depends(get_correlation_id),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Send an exited vehicle to one of the transfer targets of its zone."""
    command = TransferZoneCommand(
        accreditation_id=_parse_id(accreditation_id),
        expected_version=body.version,
        actor=actor,
        target_zone=body.target_zone,
        reason=body.reason,
        correlation_id=correlation_id,
    )
    return _mutation_response(container.transfer_zone.execute(command))


@router.get("/{accreditation_id}/timeslots")
def get_time_slots(
    accreditation_id: str,
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Return slots, transfers and day totals rebuilt from the movement log."""
    try:
        report = container.get_time_slots.execute(_parse_id(accreditation_id))
    except AccreditationDomainError as exc:
        _raise_domain_error(exc)
    return asdict(report)


@router.get("/{accreditation_id}/zone-time")
def get_zone_time(
    accreditation_id: str,
    zone: Optional[str] = Query(default=None),
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Return minutes spent per zone, optionally for one zone."""
    try:
        parsed_zone = container.zone_graph.parse(zone) if zone else None
        response = container.get_zone_time.execute(_parse_id(accreditation_id), parsed_zone)
    except AccreditationDomainError as exc:
        _raise_domain_error(exc)
    return asdict(response)


@router.get("/{accreditation_id}/history")
def get_history(
    accreditation_id: str,
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> List[Dict[str, Any]]:
    """Return history entries, newest first."""
    try:
        entries = container.get_history.execute(_parse_id(accreditation_id))
    except AccreditationDomainError as exc:
        _raise_domain_error(exc)
    return [asdict(entry) for entry in entries]


@router.post("/{accreditation_id}/archive")
def archive_accreditation(
    accreditation_id: str,
    body: ArchiveRequest,
    actor: ActorId = Depends(require_write),
    correlation_id: str = Depends(get_correlation_id),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Archive (``archive: true``) or restore an accreditation under version check."""
    command = ArchiveAccreditationCommand(
        accreditation_id=_parse_id(accreditation_id),
        expected_version=body.version,
        actor=actor,
        archive=body.archive,
        correlation_id=correlation_id,
    )
    return _mutation_response(container.archive_accreditation.execute(command))

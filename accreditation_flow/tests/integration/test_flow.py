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

"""End-to-end flows through the use cases and the API over SQLite."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from accreditation_flow.core.accreditations.exceptions import (
    InvalidZoneError,
    OptimisticLockError,
)
from accreditation_flow.core.accreditations.value_objects import (
    ActorId,
    MovementAction,
    Status,
    Zone,
)
from accreditation_flow.main import create_app
from accreditation_flow.orchestrator.accreditations.commands import (
    ChangeStatusCommand,
    CreateAccreditationCommand,
    RecordZoneActionCommand,
    TransferZoneCommand,
)
from accreditation_flow.tests.utils import make_vehicle

ACTOR = ActorId("logisticien-1")


@pytest.fixture
def accreditation_id(sql_container):
    """Create a public request in the database and return its id."""
    result = sql_container.create_accreditation.execute(CreateAccreditationCommand(
        company="Transports Riviera",
        stand="B12",
        unloading="Quai arrière",
        event="Festival",
        vehicles=(make_vehicle(), make_vehicle(plate="EF-456-GH")),
        actor=ActorId.system(),
    ))
    return result.unwrap().accreditation_id


@pytest.mark.integration
class TestAccreditationFlow:
    """Use cases wired over the SQLAlchemy unit of work."""

    def test_full_cycle(self, sql_container, accreditation_id, clock):
        """Validation, arrival, exit and transfer should be persisted in order."""
        container = sql_container
        container.change_status.execute(ChangeStatusCommand(
            accreditation_id, 1, ACTOR, status=Status.ATTENTE, zone="LA_BOCCA"
        )).unwrap()
        clock.advance(10)
        container.record_zone_action.execute(RecordZoneActionCommand(
            accreditation_id, 2, ACTOR, MovementAction.ENTRY, "LA_BOCCA"
        )).unwrap()
        clock.advance(30)
        container.record_zone_action.execute(RecordZoneActionCommand(
            accreditation_id, 3, ACTOR, MovementAction.EXIT, "LA_BOCCA"
        )).unwrap()
        clock.advance(15)
        transferred = container.transfer_zone.execute(TransferZoneCommand(
            accreditation_id, 4, ACTOR, target_zone="PALAIS_DES_FESTIVALS", reason="quai libéré"
        )).unwrap()

        assert transferred.status == Status.ENTREE
        assert transferred.current_zone == Zone.PALAIS_DES_FESTIVALS
        assert transferred.version == 5

        movements = container.list_movements.execute(accreditation_id)
        assert [(movement.action, movement.to_zone) for movement in movements] == [
            ("ENTRY", "LA_BOCCA"),
            ("EXIT", "LA_BOCCA"),
            ("ENTRY", "PALAIS_DES_FESTIVALS"),
        ]

        clock.advance(5)
        report = container.get_time_slots.execute(accreditation_id)
        assert report.grand_total_minutes == 45
        assert report.days[0].transfers[0].transit_minutes == 15

        history = container.get_history.execute(accreditation_id)
        assert history[-1].action == "CREATED"
        assert history[-1].actor == "system"
        assert any(entry.action == "ZONE_TRANSFER" for entry in history)

    def test_conflict_writes_nothing(self, sql_container, accreditation_id):
        """A stale edit should leave no movement and no history behind."""
        container = sql_container
        container.change_status.execute(ChangeStatusCommand(
            accreditation_id, 1, ACTOR, stand="C7"
        )).unwrap()
        history_before = container.get_history.execute(accreditation_id)

        result = container.change_status.execute(ChangeStatusCommand(
            accreditation_id, 1, ActorId("agent-b"), status=Status.ATTENTE, zone="MACE"
        ))

        assert isinstance(result.error, OptimisticLockError)
        assert result.error.actual_version == 2
        assert container.list_movements.execute(accreditation_id) == []
        assert container.get_history.execute(accreditation_id) == history_before

    def test_rejected_mutation_rolls_back(self, sql_container, accreditation_id):
        """A mutation failing halfway should leave the row untouched."""
        container = sql_container
        result = container.change_status.execute(ChangeStatusCommand(
            accreditation_id, 1, ACTOR, status=Status.ATTENTE, zone="ANTIBES", stand="C7"
        ))

        assert isinstance(result.error, InvalidZoneError)
        accreditation = container.get_accreditation.execute(accreditation_id)
        assert accreditation.version == 1
        assert accreditation.stand == "B12"
        assert accreditation.status == "NOUVEAU"

    def test_vehicles_persisted(self, sql_container, accreditation_id):
        """Vehicles should be stored with their identifiers."""
        accreditation = sql_container.get_accreditation.execute(accreditation_id)

        assert [vehicle["plate"] for vehicle in accreditation.vehicles] == [
            "AB-123-CD",
            "EF-456-GH",
        ]
        assert all(vehicle["id"] is not None for vehicle in accreditation.vehicles)


@pytest.mark.integration
class TestApiOverDatabase:
    """HTTP requests served from the SQLite store."""

    def test_create_and_validate(self, sql_container):
        """A request created over HTTP can be validated over HTTP."""
        client = TestClient(create_app(sql_container))
        created = client.post("/api/v1/accreditations", json={
            "company": "Transports Riviera",
            "stand": "B12",
            "unloading": "Quai arrière",
            "event": "Festival",
            "vehicles": [{
                "plate": "AB-123-CD",
                "size": "Porteur",
                "phone_code": "+33",
                "phone_number": "612345678",
                "date": "2026-05-14",
                "city": "Nice",
                "unloading": ["rear"],
            }],
        })
        assert created.status_code == status.HTTP_201_CREATED
        accreditation_id = created.json()["accreditation_id"]

        validated = client.patch(
            f"/api/v1/accreditations/{accreditation_id}",
            json={"version": 1, "status": "ATTENTE", "zone": "PANTIERO"},
        )

        assert validated.status_code == status.HTTP_200_OK
        assert validated.json()["current_zone"] == "PANTIERO"
        assert validated.json()["version"] == 2
        movements = client.get(f"/api/v1/accreditations/{accreditation_id}/zones").json()
        assert [movement["to_zone"] for movement in movements] == ["PANTIERO"]

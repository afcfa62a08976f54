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

"""End-to-end flows through the use cases over the in-memory store."""

from zoneinfo import ZoneInfo

import pytest

from accreditation_flow.core.accreditations.exceptions import OptimisticLockError
from accreditation_flow.core.accreditations.timeslots import TimeSlotAggregator
from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    ActorId,
    MovementAction,
    Status,
    Zone,
)
from accreditation_flow.orchestrator.accreditations.commands import (
    ChangeStatusCommand,
    CreateAccreditationCommand,
    TransferZoneCommand,
)
from accreditation_flow.orchestrator.accreditations.use_cases import (
    ChangeStatusUseCase,
    CreateAccreditationUseCase,
    GetTimeSlotsUseCase,
    TransferZoneUseCase,
)
from accreditation_flow.tests.utils import ACCREDITATION_ID, make_vehicle

ACC = AccreditationId(ACCREDITATION_ID)


@pytest.fixture
def change_status(guard, status_machine):
    """Provide the generic edit use case."""
    return ChangeStatusUseCase(guard, status_machine)


@pytest.mark.unit
class TestScenarios:
    """Journeys of one accreditation across the site."""

    def test_new_request_validated(
        self, uow_factory, id_generator, history_factory, clock, change_status, store, actor
    ):
        """A public request validated into LA_BOCCA logs its first entry."""
        created = CreateAccreditationUseCase(
            uow_factory, id_generator, history_factory, clock
        ).execute(CreateAccreditationCommand(
            company="Transports Riviera",
            stand="B12",
            unloading="Quai arrière",
            event="Festival",
            vehicles=(make_vehicle(),),
            actor=ActorId.system(),
        )).unwrap()
        assert created.status == Status.NOUVEAU
        assert created.current_zone is None

        result = change_status.execute(ChangeStatusCommand(
            created.accreditation_id, 1, actor, status=Status.ATTENTE, zone="LA_BOCCA"
        ))

        validated = result.unwrap()
        assert validated.current_zone == Zone.LA_BOCCA
        assert validated.version == 2
        (movement,) = store.movements
        assert movement.action == MovementAction.ENTRY
        assert movement.from_zone is None
        assert movement.to_zone == Zone.LA_BOCCA

    def test_full_cycle(
        self, guard, status_machine, uow_factory, zone_graph, change_status, seed, store, clock, actor
    ):
        """Arrival, exit and transfer should yield two slots and one transfer."""
        seed(status=Status.ATTENTE, current_zone=Zone.LA_BOCCA)

        clock.advance(10)
        change_status.execute(ChangeStatusCommand(ACC, 1, actor, status=Status.ENTREE)).unwrap()
        clock.advance(30)
        change_status.execute(ChangeStatusCommand(ACC, 2, actor, status=Status.SORTIE)).unwrap()
        clock.advance(15)
        TransferZoneUseCase(guard, status_machine).execute(TransferZoneCommand(
            ACC, 3, actor, target_zone="PALAIS_DES_FESTIVALS"
        )).unwrap()

        assert [(movement.action, movement.to_zone) for movement in store.movements] == [
            (MovementAction.ENTRY, Zone.LA_BOCCA),
            (MovementAction.EXIT, Zone.LA_BOCCA),
            (MovementAction.ENTRY, Zone.PALAIS_DES_FESTIVALS),
        ]
        assert store.movements[-1].from_zone == Zone.LA_BOCCA
        assert store.version_of(ACC) == 4

        clock.advance(20)
        aggregator = TimeSlotAggregator(zone_graph, ZoneInfo("Europe/Paris"))
        report = GetTimeSlotsUseCase(uow_factory, aggregator, clock).execute(ACC)

        (day,) = report.days
        assert [slot.zone for slot in day.slots] == ["LA_BOCCA", "PALAIS_DES_FESTIVALS"]
        assert day.slots[0].duration_minutes == 30
        assert day.slots[1].live_minutes == 20
        (transfer,) = day.transfers
        assert (transfer.from_zone, transfer.to_zone) == ("LA_BOCCA", "PALAIS_DES_FESTIVALS")
        assert transfer.transit_minutes == 15
        assert report.grand_total_minutes == 50
        assert report.in_transit is None

    def test_conflicting_edits(self, change_status, seed, store):
        """The second of two edits based on the same version is rejected."""
        seed(status=Status.ATTENTE, current_zone=Zone.LA_BOCCA, version=5)
        agent_a, agent_b = ActorId("agent-a"), ActorId("agent-b")

        first = change_status.execute(ChangeStatusCommand(ACC, 5, agent_a, stand="C7"))
        second = change_status.execute(
            ChangeStatusCommand(ACC, 5, agent_b, status=Status.ENTREE)
        )

        assert first.accreditation.version == 6
        assert isinstance(second.error, OptimisticLockError)
        assert second.error.actual_version == 6
        with pytest.raises(OptimisticLockError):
            second.unwrap()
        assert store.movements == []
        assert [entry.actor for entry in store.history] == [agent_a]
        assert store.accreditations[ACCREDITATION_ID].status == Status.ATTENTE

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

"""Domain services for Accreditation domain."""

from datetime import datetime
from typing import Dict, List, Optional

from .entities import HistoryEntry
from .value_objects import AccreditationId, ActorId, HistoryAction, Status, Zone
from .zone_graph import ZoneGraph

STATUS_LABELS = {
    Status.ATTENTE.value: "En attente",
    Status.ENTREE.value: "Entrée",
    Status.SORTIE.value: "Sortie",
    Status.NOUVEAU.value: "Nouveau",
    Status.REFUS.value: "Refusé",
    Status.ABSENT.value: "Absent",
}

FIELD_LABELS = {
    "company": "Entreprise",
    "stand": "Stand",
    "unloading": "Déchargement",
    "event": "Événement",
    "message": "Message",
    "email": "E-mail",
    "currentZone": "Zone",
    "vehicles": "Véhicules",
    "status": "Statut",
    "isArchived": "Archivée",
}

# Order in which field changes are recorded within one mutation.
TRACKED_FIELDS = (
    "status",
    "currentZone",
    "company",
    "stand",
    "unloading",
    "event",
    "message",
    "email",
    "vehicles",
    "isArchived",
)


class HistoryEntryFactory:
    """Domain service turning accepted mutations into history entries.

    One entry is produced per logically distinct field change; wording uses
    the site's French display labels.
    """

    def __init__(self, zone_graph: ZoneGraph) -> None:
        self._zone_graph = zone_graph

    def created(
        self,
        accreditation_id: AccreditationId,
        actor: ActorId,
        at: datetime,
    ) -> HistoryEntry:
        """Entry recording the creation of an accreditation."""
        return HistoryEntry(
            accreditation_id=accreditation_id,
            action=HistoryAction.CREATED,
            description="Accréditation créée",
            actor=actor,
            timestamp=at,
        )

    def changes(
        self,
        accreditation_id: AccreditationId,
        before: Dict[str, str],
        after: Dict[str, str],
        actor: ActorId,
        at: datetime,
        zone_action: HistoryAction = HistoryAction.INFO_UPDATED,
        zone_note: Optional[str] = None,
    ) -> List[HistoryEntry]:
        """Diff two aggregate snapshots into history entries.

        Args:
            accreditation_id: Accreditation the changes apply to.
            before: Snapshot taken before the mutation.
            after: Snapshot taken after the mutation.
            actor: Agent performing the mutation.
            at: Mutation timestamp.
            zone_action: History action used for a zone change.
            zone_note: Free text appended to the zone change description.

        Returns:
            Entries in TRACKED_FIELDS order; empty when nothing changed.
        """
        entries = []
        for name in TRACKED_FIELDS:
            old, new = before.get(name, ""), after.get(name, "")
            if old == new:
                continue
            if name == "status":
                action = HistoryAction.STATUS_CHANGED
                description = (
                    f"Statut modifié : {self.status_label(old)} → {self.status_label(new)}"
                )
            elif name == "currentZone":
                action = zone_action
                description = self._zone_description(zone_action, old, new, zone_note)
            elif name == "isArchived":
                action = HistoryAction.ARCHIVED
                description = (
                    "Accréditation archivée" if new == "true" else "Accréditation désarchivée"
                )
            elif name == "vehicles":
                action = HistoryAction.INFO_UPDATED
                description = "Véhicules mis à jour"
            else:
                action = HistoryAction.INFO_UPDATED
                description = (
                    f"{FIELD_LABELS[name]} modifié : {old or 'Aucune'} → {new or 'Aucune'}"
                )
            entries.append(HistoryEntry(
                accreditation_id=accreditation_id,
                action=action,
                description=description,
                actor=actor,
                timestamp=at,
                field=name,
                old_value=old,
                new_value=new,
            ))
        return entries

    @staticmethod
    def status_label(value: str) -> str:
        """Display label of a status value."""
        return STATUS_LABELS.get(value, value)

    def zone_label(self, value: str) -> str:
        """Display label of a zone value ('' meaning no zone)."""
        if not value:
            return "Aucune"
        try:
            return self._zone_graph.label(Zone(value))
        except ValueError:
            return value

    def _zone_description(
        self,
        action: HistoryAction,
        old: str,
        new: str,
        note: Optional[str],
    ) -> str:
        if action == HistoryAction.ZONE_TRANSFER:
            text = f"Transféré de {self.zone_label(old)} vers {self.zone_label(new)}"
        elif action == HistoryAction.ZONE_CHANGED:
            text = f"Entrée en zone {self.zone_label(new)}"
        else:
            text = f"Zone modifié : {self.zone_label(old)} → {self.zone_label(new)}"
        if note:
            text = f"{text} - {note}"
        return text

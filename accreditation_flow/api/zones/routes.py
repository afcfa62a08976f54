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

"""FastAPI routes exposing the zone catalogue."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from accreditation_flow.api.dependencies import get_container, require_read
from accreditation_flow.container import Container
from accreditation_flow.core.accreditations.value_objects import ActorId

router = APIRouter(prefix="/zones", tags=["zones"])


@router.get("")
def list_zones(
    _actor: ActorId = Depends(require_read),
    container: Container = Depends(get_container),
) -> List[Dict[str, Any]]:
    """Return active zones with display data and transfer targets."""
    graph = container.zone_graph
    zones = []
    for zone in graph.all_zones():
        config = graph.configs[zone]
        zones.append({
            "zone": zone.value,
            "label": config.label,
            "address": config.address,
            "latitude": config.latitude,
            "longitude": config.longitude,
            "color": config.color,
            "is_final_destination": config.is_final_destination,
            "transfer_targets": [target.value for target in graph.transfer_targets(zone)],
        })
    return zones

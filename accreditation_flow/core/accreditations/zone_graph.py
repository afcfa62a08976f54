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

"""Static zone topology.

The zone table is a lookup, not a traversal: every active zone can reach
every other active zone, except that the final destination reaches nothing.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from .exceptions import InvalidZoneError
from .value_objects import Zone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneConfig:
    """Display and topology attributes of one zone.

    Attributes:
        zone: Zone identifier.
        label: Display label.
        address: Postal address.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        is_final_destination: True for the zone vehicles end up in.
        color: Display colour name.
        is_active: Inactive zones are neither listed nor reachable.
    """

    zone: Zone
    label: str
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    is_final_destination: bool = False
    color: str = "gray"
    is_active: bool = True


DEFAULT_ZONES = (
    ZoneConfig(Zone.LA_BOCCA, "La Bocca", "", 43.5519, 6.9629, False, "orange"),
    ZoneConfig(Zone.PALAIS_DES_FESTIVALS, "Palais des Festivals", "", 43.5515, 7.0168, True, "green"),
    ZoneConfig(Zone.PANTIERO, "Pantiero", "", 43.5498, 7.0142, False, "blue"),
    ZoneConfig(Zone.MACE, "Macé", "", 43.5503, 7.0223, False, "purple"),
)

_YAML_KEYS = {
    "label": "label",
    "address": "address",
    "latitude": "latitude",
    "longitude": "longitude",
    "final_destination": "is_final_destination",
    "color": "color",
    "active": "is_active",
}


class ZoneGraph:
    """Zone topology queried by the status machine and the time slot aggregator.

    Attributes:
        configs: Zone configurations keyed by zone, in declaration order.
    """

    def __init__(self, zones: Iterable[ZoneConfig] = DEFAULT_ZONES) -> None:
        """Build the graph and check it has exactly one active final destination.

        Args:
            zones: Zone configurations.

        Raises:
            ValueError: If a zone is declared twice or the final destination
                is missing or ambiguous.
        """
        self.configs: Dict[Zone, ZoneConfig] = {}
        for config in zones:
            if config.zone in self.configs:
                raise ValueError(f"Zone declared twice: {config.zone.value}")
            self.configs[config.zone] = config

        finals = [
            config.zone for config in self.configs.values()
            if config.is_active and config.is_final_destination
        ]
        if len(finals) != 1:
            raise ValueError(
                f"Exactly one active final destination is required, got {len(finals)}"
            )
        self._final = finals[0]

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ZoneGraph":
        """Load zone overrides from a YAML file on top of the defaults.

        The file maps zone identifiers to attribute overrides::

            zones:
              MACE:
                label: Quai Macé
                active: false

        Args:
            path: YAML file location.

        Returns:
            ZoneGraph with overrides applied.

        Raises:
            ValueError: If the file names an unknown zone or attribute.
        """
        with open(path, "r", encoding="utf-8") as handle:
            document = yaml.safe_load(handle) or {}

        overrides: Dict[str, Dict[str, Any]] = document.get("zones") or {}
        configs = {config.zone: config for config in DEFAULT_ZONES}
        for name, attributes in overrides.items():
            try:
                zone = Zone(name)
            except ValueError as exc:
                raise ValueError(f"Unknown zone in {path}: {name}") from exc
            changes = {}
            for key, value in (attributes or {}).items():
                if key not in _YAML_KEYS:
                    raise ValueError(f"Unknown zone attribute in {path}: {key}")
                changes[_YAML_KEYS[key]] = value
            configs[zone] = replace(configs[zone], **changes)

        logger.info("Loaded zone overrides from %s for %d zone(s)", path, len(overrides))
        return cls(configs.values())

    def all_zones(self) -> List[Zone]:
        """Return active zones in declaration order."""
        return [config.zone for config in self.configs.values() if config.is_active]

    def final_destination(self) -> Zone:
        """Return the final destination zone."""
        return self._final

    def is_final_destination(self, zone: Optional[Zone]) -> bool:
        """Check if ``zone`` is the final destination."""
        return zone is not None and zone == self._final

    def transfer_targets(self, from_zone: Zone) -> List[Zone]:
        """Return zones reachable from ``from_zone``.

        Never includes ``from_zone`` itself; always includes the final
        destination from a non-final zone; empty from the final destination.
        """
        if self.is_final_destination(from_zone):
            return []
        return [zone for zone in self.all_zones() if zone != from_zone]

    def is_known(self, zone: Zone) -> bool:
        """Check if ``zone`` is an active zone."""
        config = self.configs.get(zone)
        return config is not None and config.is_active

    def label(self, zone: Optional[Zone]) -> str:
        """Return the display label of ``zone``."""
        if zone is None:
            return "Aucune"
        config = self.configs.get(zone)
        return config.label if config else zone.value.replace("_", " ")

    def parse(self, value: Union[str, Zone, None]) -> Zone:
        """Convert a raw value into an active zone.

        Raises:
            InvalidZoneError: If the value is missing, unknown or inactive.
        """
        if value is None or value == "":
            raise InvalidZoneError(None, "a zone is required")
        try:
            zone = Zone(value)
        except ValueError:
            raise InvalidZoneError(str(value), "unknown zone") from None
        if not self.is_known(zone):
            raise InvalidZoneError(zone.value, "zone is not active")
        return zone

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

"""Vehicle entity owned by an Accreditation."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..value_objects import VehicleType


@dataclass
class Vehicle:
    """Vehicle declared on an accreditation request.

    Vehicles are replaced wholesale together with their accreditation and
    carry no lifecycle of their own.

    Attributes:
        plate: Registration plate.
        size: Declared size category.
        phone_code: Driver phone country code.
        phone_number: Driver phone number.
        date: Planned arrival date.
        city: City of departure.
        unloading: Unloading sides ("lat", "rear").
        time: Planned arrival time.
        kms: Declared distance.
        vehicle_type: Body type.
        trailer_plate: Trailer registration plate.
        empty_weight: Unladen weight.
        max_weight: Maximum authorised weight.
        current_weight: Declared current weight.
        vehicle_id: Store-assigned identifier.
    """

    plate: str
    size: str
    phone_code: str
    phone_number: str
    date: str
    city: str
    unloading: List[str] = field(default_factory=list)
    time: str = ""
    kms: str = ""
    vehicle_type: Optional[VehicleType] = None
    trailer_plate: Optional[str] = None
    empty_weight: Optional[float] = None
    max_weight: Optional[float] = None
    current_weight: Optional[float] = None
    vehicle_id: Optional[int] = None

    REQUIRED_FIELDS = ("plate", "size", "phone_code", "phone_number", "date", "city")

    def missing_fields(self) -> List[str]:
        """Return required fields left empty (unloading included)."""
        missing = [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]
        if not self.unloading:
            missing.append("unloading")
        return missing

    def to_dict(self) -> Dict[str, Any]:
        """Serialize without the store identifier, for history diffs."""
        data = asdict(self)
        data.pop("vehicle_id")
        if self.vehicle_type is not None:
            data["vehicle_type"] = self.vehicle_type.value
        return data

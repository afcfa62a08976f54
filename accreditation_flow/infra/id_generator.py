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

"""Infrastructure layer for identifier generation.

This module provides UUID v7 generation for AccreditationId creation and
UUID v4 generation for request correlation identifiers.
"""

import threading
import time
import uuid

from accreditation_flow.core.accreditations.exceptions import AccreditationDomainError
from accreditation_flow.core.accreditations.repositories import AccreditationIdGenerator
from accreditation_flow.core.accreditations.value_objects import AccreditationId


class UUIDv7Generator(AccreditationIdGenerator):
    """UUID v7 generator for accreditation identifiers.

    Identifiers are time-ordered so that newer accreditations sort after
    older ones in the store. Within one millisecond the 12-bit ``rand_a``
    field carries a counter seeded at random, so identifiers issued by one
    generator sort in issue order even when the wall clock stalls or steps
    back.
    """

    _MAX_SEQUENCE = 0xFFF

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_ms = -1
        self._sequence = 0

    def generate(self) -> AccreditationId:
        """Generate a new UUID v7 AccreditationId.

        Returns:
            AccreditationId: A new UUID v7 identifier.

        Raises:
            AccreditationDomainError: If identifier generation fails.
        """
        try:
            return AccreditationId(str(self._uuid7()))
        except ValueError:
            raise
        except Exception as exc:
            raise AccreditationDomainError(
                f"Failed to generate AccreditationId: {exc}"
            ) from exc

    def _uuid7(self) -> uuid.UUID:
        """Build a UUID v7: 48-bit millisecond timestamp, version, counter, variant, random.

        Returns:
            uuid.UUID: A UUID v7 object.
        """
        random_bytes = uuid.uuid4().bytes
        with self._lock:
            now_ms = int(time.time() * 1000)
            if now_ms > self._last_ms:
                self._last_ms = now_ms
                # top bit clear leaves room to count within the millisecond
                self._sequence = int.from_bytes(random_bytes[:2], byteorder="big") & 0x7FF
            elif self._sequence < self._MAX_SEQUENCE:
                self._sequence += 1
            else:
                self._last_ms += 1
                self._sequence = 0
            timestamp_ms, sequence = self._last_ms, self._sequence

        raw = bytearray(
            timestamp_ms.to_bytes(6, byteorder="big")
            + (0x7000 | sequence).to_bytes(2, byteorder="big")
            + random_bytes[8:]
        )
        raw[8] = 0x80 | (raw[8] & 0x3F)
        return uuid.UUID(bytes=bytes(raw))


class UUIDv4Generator:
    """Random UUID v4 generator for correlation identifiers."""

    def generate(self) -> str:
        """Generate a new UUID v4.

        Returns:
            str: A new UUID v4 string.
        """
        return str(uuid.uuid4())

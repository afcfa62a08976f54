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

"""Unit tests for the identifier generators."""

import re
import uuid
from unittest.mock import patch

import pytest

from accreditation_flow.core.accreditations.exceptions import AccreditationDomainError
from accreditation_flow.infra.id_generator import UUIDv4Generator, UUIDv7Generator


class TestUUIDv7Generator:
    """Tests covering UUIDv7Generator behavior."""

    def test_generate_returns_uuid_v7_format(self) -> None:
        """Generated AccreditationId must conform to UUID v7 format."""
        accreditation_id = UUIDv7Generator().generate()

        assert len(accreditation_id.value) == 36
        assert re.match(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            accreditation_id.value,
        )

    def test_generate_is_unique(self) -> None:
        """Generator should yield unique IDs over multiple invocations."""
        generator = UUIDv7Generator()

        generated = {generator.generate().value for _ in range(50)}

        assert len(generated) == 50

    def test_generate_is_time_ordered(self) -> None:
        """Identifiers from later milliseconds should sort after earlier ones."""
        generator = UUIDv7Generator()
        with patch("accreditation_flow.infra.id_generator.time.time", return_value=1_700_000_000.0):
            earlier = generator.generate()
        with patch("accreditation_flow.infra.id_generator.time.time", return_value=1_700_000_001.0):
            later = generator.generate()

        assert earlier.value < later.value

    def test_same_millisecond_ids_sort_in_issue_order(self) -> None:
        """Identifiers issued within one millisecond should sort in issue order."""
        generator = UUIDv7Generator()
        with patch("accreditation_flow.infra.id_generator.time.time", return_value=1_700_000_000.0):
            issued = [generator.generate().value for _ in range(200)]

        assert issued == sorted(issued)
        assert len(set(issued)) == 200
        assert {value[:13] for value in issued} == {issued[0][:13]}

    def test_clock_stepping_back_keeps_order(self) -> None:
        """A wall clock moving backwards should not reorder identifiers."""
        generator = UUIDv7Generator()
        with patch("accreditation_flow.infra.id_generator.time.time", return_value=1_700_000_001.0):
            earlier = generator.generate()
        with patch("accreditation_flow.infra.id_generator.time.time", return_value=1_700_000_000.0):
            later = generator.generate()

        assert earlier.value < later.value

    def test_counter_overflow_moves_to_next_millisecond(self) -> None:
        """An exhausted counter should borrow the next millisecond."""
        generator = UUIDv7Generator()
        with patch("accreditation_flow.infra.id_generator.time.time", return_value=1_700_000_000.0):
            first = uuid.UUID(generator.generate().value)
            generator._sequence = UUIDv7Generator._MAX_SEQUENCE
            second = uuid.UUID(generator.generate().value)

        assert second.int >> 80 == (first.int >> 80) + 1
        assert (second.int >> 64) & 0xFFF == 0
        assert second.version == 7

    def test_generate_wraps_failures(self) -> None:
        """Unexpected failures should surface as domain errors."""
        generator = UUIDv7Generator()
        with patch.object(UUIDv7Generator, "_uuid7", side_effect=OSError("no entropy")):
            with pytest.raises(AccreditationDomainError, match="no entropy"):
                generator.generate()


class TestUUIDv4Generator:
    """Tests covering UUIDv4Generator behavior."""

    def test_generate_returns_uuid_v4(self) -> None:
        """Correlation ids should be random UUIDs."""
        value = UUIDv4Generator().generate()
        assert uuid.UUID(value).version == 4

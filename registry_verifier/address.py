# Copyright 2026 TIER IV, inc.
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

"""Checksum checks for directories named after addresses."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from eth_utils import to_checksum_address

from .config import ADDRESS_PREFIX


class AddressCheck(Enum):
    OK = "ok"
    INVALID_SYNTAX = "invalid-syntax"
    WRONG_CASING = "wrong-casing"


class AddressChecksummer(ABC):
    """Derives the canonical checksummed spelling of an address."""

    @abstractmethod
    def to_checksum(self, name: str) -> str:
        """Return the checksummed form of ``name``.

        Raises:
            ValueError: If ``name`` is not an address
        """


class EthChecksummer(AddressChecksummer):
    """EIP-55 mixed-case checksums via eth-utils.

    Single-case input is only unchecksummed, but mixed-case input already
    claims a checksum, so a mismatch there means the address is invalid.
    """

    def to_checksum(self, name: str) -> str:
        try:
            canonical = to_checksum_address(name)
        except TypeError as e:
            raise ValueError(str(e)) from e

        digits = name[2:]
        mixed_case = digits != digits.lower() and digits != digits.upper()
        if mixed_case and canonical != name:
            raise ValueError(f"bad address checksum: {name}")
        return canonical


def is_address_name(name: str, prefix: str = ADDRESS_PREFIX) -> bool:
    return name.startswith(prefix)


def check_address(name: str, checksummer: Optional[AddressChecksummer] = None) -> AddressCheck:
    """Check that ``name`` is an address written in its checksummed form."""
    checksummer = checksummer or EthChecksummer()
    try:
        canonical = checksummer.to_checksum(name)
    except ValueError:
        return AddressCheck.INVALID_SYNTAX
    if canonical != name:
        return AddressCheck.WRONG_CASING
    return AddressCheck.OK

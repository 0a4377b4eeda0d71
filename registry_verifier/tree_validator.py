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

"""Recursive validation of a data directory tree."""

from __future__ import annotations

import json
import logging
import os
import stat
from pathlib import Path
from typing import Dict, Optional

from .address import AddressCheck, AddressChecksummer, EthChecksummer, check_address, is_address_name
from .config import ADDRESS_PREFIX, INDEX_NAME
from .ownership import OwnershipResolver
from .report import DiagnosticKind, VerificationReport
from .schema_registry import CompiledSchema, schema_type

logger = logging.getLogger(__name__)


class TreeValidator:
    """Walks a data directory and checks every entry below it.

    Each entry is checked against the schema matching its file name, the
    ownership rules and, for address-named directories, the checksum rule.
    Problems are recorded on ``report``; the walk always visits the whole
    tree and ``validate`` returns whether every check passed.
    """

    def __init__(
        self,
        validators: Dict[str, CompiledSchema],
        ownership: OwnershipResolver,
        checksummer: Optional[AddressChecksummer] = None,
        report: Optional[VerificationReport] = None,
        index_name: str = INDEX_NAME,
        address_prefix: str = ADDRESS_PREFIX,
    ):
        self.validators = validators
        self.ownership = ownership
        self.checksummer = checksummer or EthChecksummer()
        self.report = report if report is not None else VerificationReport()
        self.index_name = index_name
        self.address_prefix = address_prefix

    def is_skipped(self, name: str) -> bool:
        """Hidden entries and the directory index file are never checked."""
        return name.startswith(".") or name == self.index_name

    def validate(self, directory: Path) -> bool:
        """Validate every entry below ``directory``.

        Args:
            directory: Directory to walk

        Returns:
            True if every entry in the subtree passed every check
        """
        directory = Path(directory)
        logger.debug(f"Validating directory: {directory}")

        valid = True
        for name in os.listdir(directory):
            if self.is_skipped(name):
                continue
            # Every entry is checked even after a failure
            entry_valid = self._validate_entry(directory / name)
            valid = valid and entry_valid
        return valid

    def _validate_entry(self, path: Path) -> bool:
        mode = path.lstat().st_mode

        valid = True
        if stat.S_ISREG(mode):
            valid = self._validate_file(path)
        elif stat.S_ISDIR(mode):
            valid = self._validate_directory(path)

        owners_valid = self._validate_owners(path)
        return valid and owners_valid

    def _validate_file(self, path: Path) -> bool:
        type_name = schema_type(path)
        validator = self.validators.get(type_name)
        if validator is None:
            return True

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # Reported, but left out of the verdict
            logger.debug(f"Failed to parse {path}: {e}")
            self.report.add_warning(
                DiagnosticKind.JSON,
                f'"{path}" is not a valid JSON file.',
                path=path,
                details=[str(e)],
            )
            return True

        issues = validator.validate(data)
        if not issues:
            return True

        self.report.add_error(
            DiagnosticKind.SCHEMA,
            f'"{path}" does not follow "{type_name}" schema:',
            path=path,
            details=[str(issue) for issue in issues],
        )
        return False

    def _validate_directory(self, path: Path) -> bool:
        valid = True
        if is_address_name(path.name, self.address_prefix):
            valid = self._validate_address(path)
        subtree_valid = self.validate(path)
        return valid and subtree_valid

    def _validate_address(self, path: Path) -> bool:
        name = path.name
        result = check_address(name, self.checksummer)
        if result is AddressCheck.INVALID_SYNTAX:
            self.report.add_error(
                DiagnosticKind.ADDRESS_SYNTAX,
                f'"{name}" is not a valid address. ("{path}")',
                path=path,
            )
            return False
        if result is AddressCheck.WRONG_CASING:
            self.report.add_error(
                DiagnosticKind.ADDRESS_CHECKSUM,
                f'"{name}" is not checksummed. ("{path}")',
                path=path,
            )
            return False
        return True

    def _validate_owners(self, path: Path) -> bool:
        if self.ownership.owners_of(path):
            return True
        self.report.add_error(
            DiagnosticKind.CODEOWNERS,
            f'"{path}" has no codeowners.',
            path=path,
        )
        return False

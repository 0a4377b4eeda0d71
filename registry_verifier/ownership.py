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

"""Ownership lookup against the repository's CODEOWNERS rules."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple

from codeowners import CodeOwners

from .exceptions import OwnershipConfigError

logger = logging.getLogger(__name__)

# Same lookup order GitHub uses
CODEOWNERS_LOCATIONS = (
    Path(".github") / "CODEOWNERS",
    Path("CODEOWNERS"),
    Path("docs") / "CODEOWNERS",
)


class OwnershipResolver(ABC):
    """Answers who is responsible for a path."""

    @abstractmethod
    def owners_of(self, path: Path) -> List[str]:
        """Return the owners declared for ``path``; empty when there are none."""


def find_codeowners_file(repo_root: Path) -> Optional[Path]:
    for location in CODEOWNERS_LOCATIONS:
        candidate = Path(repo_root) / location
        if candidate.is_file():
            return candidate
    return None


class CodeOwnersResolver(OwnershipResolver):
    """OwnershipResolver reading a GitHub style CODEOWNERS file."""

    def __init__(self, repo_root: Path, codeowners_file: Optional[Path] = None):
        self.repo_root = Path(os.path.abspath(repo_root))
        if codeowners_file is None:
            codeowners_file = find_codeowners_file(self.repo_root)
        if codeowners_file is None:
            raise OwnershipConfigError(
                f"No CODEOWNERS file found in {self.repo_root} "
                f"(looked in: {', '.join(str(p) for p in CODEOWNERS_LOCATIONS)})"
            )

        self.codeowners_file = Path(codeowners_file)
        try:
            text = self.codeowners_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise OwnershipConfigError(f"Failed to read {self.codeowners_file}: {e}") from e

        self._owners = CodeOwners(text)
        logger.debug(f"Using ownership rules from {self.codeowners_file}")
    def _relative_keys(self, path: Path) -> List[str]:
        path = Path(path)
        absolute = Path(os.path.abspath(path))
        try:
            relative = absolute.relative_to(self.repo_root)
        except ValueError:
            relative = path
        key = relative.as_posix()
        # "data/*" only matches the bare key, "/data/tokens/" only the slashed one
        if absolute.is_dir() and not absolute.is_symlink():
            return [key, key + "/"]
        return [key]

    def _matching_rule(self, key: str) -> Tuple[List[str], Optional[int]]:
        match = self._owners.matching_line(key)
        owners, line_num = match[0], match[1]
        return [owner for _kind, owner in owners], line_num

    def owners_of(self, path: Path) -> List[str]:
        """Return the owners from the last CODEOWNERS rule matching ``path``.

        Directories are looked up with and without a trailing slash; when both
        spellings match, the rule further down the file wins.
        """
        owners: List[str] = []
        best_line = None
        for key in self._relative_keys(path):
            key_owners, line_num = self._matching_rule(key)
            if line_num is None:
                continue
            if best_line is None or line_num > best_line:
                owners, best_line = key_owners, line_num
        logger.debug(f"Owners of {path}: {owners} (rule line {best_line})")
        return owners

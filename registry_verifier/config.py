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

"""Fixed repository layout and start-up checks for the verifier."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import RepositoryRootError

SCHEMA_DIRECTORY = "schema"
DATA_DIRECTORY = "data"
INDEX_NAME = "index.json"
ADDRESS_PREFIX = "0x"
REPOSITORY_MARKER = ".git"


@dataclass(frozen=True)
class RootCheck:
    ok: bool
    root: Path
    message: Optional[str] = None

    def raise_for_status(self) -> None:
        if not self.ok:
            raise RepositoryRootError(self.message)


def check_repository_root(cwd: Optional[Path] = None) -> RootCheck:
    """Check that ``cwd`` is the root of a repository.

    A ``.git`` entry marks the root. It may be a directory or, for
    worktrees and submodules, a plain file.
    """
    root = Path(cwd) if cwd is not None else Path(".")
    if not (root / REPOSITORY_MARKER).exists():
        return RootCheck(
            ok=False,
            root=root,
            message="script should be run in the root of the repo.",
        )
    return RootCheck(ok=True, root=root)


@dataclass(frozen=True)
class VerifierConfig:
    repo_root: Path
    schema_dir: Path
    data_dir: Path
    index_name: str = INDEX_NAME
    address_prefix: str = ADDRESS_PREFIX

    @classmethod
    def for_root(cls, root: Path) -> "VerifierConfig":
        root = Path(root)
        return cls(
            repo_root=root,
            schema_dir=root / SCHEMA_DIRECTORY,
            data_dir=root / DATA_DIRECTORY,
        )

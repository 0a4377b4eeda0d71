"""Shared fixtures for the registry verifier tests."""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from registry_verifier.ownership import OwnershipResolver

WIDGET_SCHEMA = {
    "type": "object",
    "properties": {"name": {"type": "string"}},
    "required": ["name"],
}

# EIP-55 reference vector
CHECKSUMMED_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class FakeOwnership(OwnershipResolver):
    """Every path is owned unless its name is listed in ``orphans``."""

    def __init__(self, orphans: Iterable[str] = ()):
        self.orphans = set(orphans)
        self.queried: List[Path] = []

    def owners_of(self, path: Path) -> List[str]:
        self.queried.append(Path(path))
        if Path(path).name in self.orphans:
            return []
        return ["@org/data-team"]


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def repo(tmp_path):
    """A repository root with empty schema/ and data/ directories."""
    (tmp_path / ".git").mkdir()
    (tmp_path / "schema").mkdir()
    (tmp_path / "data").mkdir()
    return tmp_path


@pytest.fixture
def make_repo(repo):
    """Populate the ``repo`` fixture.

    Args to the returned callable:
        schemas: type name -> schema document
        data: relative path under data/ -> JSON document (or raw str)
        codeowners: CODEOWNERS file content, not written when None
    """

    def _make(
        schemas: Optional[Dict[str, object]] = None,
        data: Optional[Dict[str, object]] = None,
        codeowners: Optional[str] = None,
    ) -> Path:
        for type_name, schema in (schemas or {}).items():
            write_json(repo / "schema" / f"{type_name}.json", schema)
        for rel_path, content in (data or {}).items():
            target = repo / "data" / rel_path
            if isinstance(content, str):
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
            else:
                write_json(target, content)
        if codeowners is not None:
            (repo / "CODEOWNERS").write_text(codeowners, encoding="utf-8")
        return repo

    return _make

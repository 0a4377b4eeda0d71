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

"""Diagnostic collection for a verification run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence


class DiagnosticKind:
    """Categories of problems found while walking the data tree."""

    SCHEMA = "schema"
    JSON = "json"
    ADDRESS_SYNTAX = "address-syntax"
    ADDRESS_CHECKSUM = "address-checksum"
    CODEOWNERS = "codeowners"


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    path: Optional[Path] = None
    details: Sequence[str] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'message': self.message,
            'path': str(self.path) if self.path is not None else None,
            'details': list(self.details),
        }


class VerificationReport:
    """Container for everything reported during one verification run."""

    def __init__(self):
        self.errors: List[Diagnostic] = []
        self.warnings: List[Diagnostic] = []
        # Aggregate verdict of the tree walk; None until a walk has finished.
        self.valid: Optional[bool] = None

    def add_error(
        self,
        kind: str,
        message: str,
        path: Optional[Path] = None,
        details: Sequence[str] = (),
    ) -> Diagnostic:
        """Record a problem that makes the run invalid.

        Args:
            kind: One of the DiagnosticKind values
            message: Human readable description
            path: Filesystem entry the problem belongs to
            details: Optional sub-messages (e.g. individual schema issues)
        """
        diagnostic = Diagnostic(kind=kind, message=message, path=path, details=tuple(details))
        self.errors.append(diagnostic)
        return diagnostic

    def add_warning(
        self,
        kind: str,
        message: str,
        path: Optional[Path] = None,
        details: Sequence[str] = (),
    ) -> Diagnostic:
        """Record a problem that is reported but does not affect the verdict."""
        diagnostic = Diagnostic(kind=kind, message=message, path=path, details=tuple(details))
        self.warnings.append(diagnostic)
        return diagnostic

    def errors_of(self, kind: str) -> List[Diagnostic]:
        return [d for d in self.errors if d.kind == kind]

    def warnings_of(self, kind: str) -> List[Diagnostic]:
        return [d for d in self.warnings if d.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'valid': bool(self.valid),
            'errors': [d.to_dict() for d in self.errors],
            'warnings': [d.to_dict() for d in self.warnings],
        }

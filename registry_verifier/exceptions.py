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

"""Custom exceptions for the registry verifier."""


class VerifierError(Exception):
    """Base exception for registry verifier errors."""
    pass


class ConfigurationError(VerifierError):
    """Exception raised when the verifier cannot be set up for a repository."""
    pass


class RepositoryRootError(ConfigurationError):
    """Exception raised when the verifier is not run from a repository root."""
    pass


class OwnershipConfigError(ConfigurationError):
    """Exception raised when no usable CODEOWNERS file is available."""
    pass


class SchemaLoadError(VerifierError):
    """Exception raised when a schema file cannot be parsed or compiled."""

    def __init__(self, file_path, reason: str = ""):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f'"{file_path}" is not a valid schema.')

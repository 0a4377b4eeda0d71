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

"""Verify a repository's data tree against its schemas and ownership rules."""

import logging
from typing import Optional

from .address import AddressChecksummer
from .config import VerifierConfig, check_repository_root
from .ownership import CodeOwnersResolver, OwnershipResolver
from .report import VerificationReport
from .schema_registry import SchemaCompiler, load_validators
from .tree_validator import TreeValidator

__all__ = ['verify', 'VerifierConfig', 'VerificationReport', 'check_repository_root']

logger = logging.getLogger(__name__)


def verify(
    config: VerifierConfig,
    compiler: Optional[SchemaCompiler] = None,
    ownership: Optional[OwnershipResolver] = None,
    checksummer: Optional[AddressChecksummer] = None,
) -> VerificationReport:
    """Run every check over the data tree described by ``config``.

    Args:
        config: Repository layout to verify
        compiler: Schema compiler, jsonschema based by default
        ownership: Ownership resolver, the repository's CODEOWNERS by default
        checksummer: Address checksummer, EIP-55 by default

    Returns:
        VerificationReport with all diagnostics and the aggregate verdict

    Raises:
        SchemaLoadError: If any schema is unusable
        OwnershipConfigError: If no CODEOWNERS file can be read
    """
    validators = load_validators(config.schema_dir, compiler)
    if ownership is None:
        ownership = CodeOwnersResolver(config.repo_root)

    report = VerificationReport()
    tree_validator = TreeValidator(
        validators,
        ownership,
        checksummer=checksummer,
        report=report,
        index_name=config.index_name,
        address_prefix=config.address_prefix,
    )
    report.valid = tree_validator.validate(config.data_dir)
    logger.debug(
        f"Verification finished: valid={report.valid}, "
        f"errors={len(report.errors)}, warnings={len(report.warnings)}"
    )
    return report

#!/usr/bin/env python3
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

"""CLI entry point for verifying the data tree of a repository."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import verify
from .config import VerifierConfig, check_repository_root
from .exceptions import VerifierError
from .report import Diagnostic, VerificationReport
from .utils.logging_utils import configure_cli_logging

SUCCESS_MESSAGE = "Ok: all files match schema definitions!"


def _print_human(report: VerificationReport) -> None:
    def emit(label: str, diagnostic: Diagnostic) -> None:
        print(f"{label}: {diagnostic.message}", file=sys.stderr)
        for detail in diagnostic.details:
            print(f" - {detail}", file=sys.stderr)

    for warning in report.warnings:
        emit("Warning", warning)
    for error in report.errors:
        emit("Error", error)


def _print_github_actions(report: VerificationReport) -> None:
    def emit(level: str, diagnostic: Diagnostic) -> None:
        message = diagnostic.message
        if diagnostic.details:
            # Workflow commands encode newlines as %0A
            message += "%0A" + "%0A".join(f" - {d}" for d in diagnostic.details)
        if diagnostic.path is not None:
            print(f"::{level} file={diagnostic.path}::{message}")
        else:
            print(f"::{level}::{message}")

    for warning in report.warnings:
        emit("warning", warning)
    for error in report.errors:
        emit("error", error)


def main(argv: Optional[List[str]] = None, cwd: Optional[Path] = None) -> int:
    """Main entry point for the verifier CLI.

    Returns:
        Process exit status: 0 when the whole tree is valid, 1 otherwise
    """
    parser = argparse.ArgumentParser(
        description='Verify data files against schema definitions and CODEOWNERS',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format for diagnostics (default: human)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress details',
    )
    args = parser.parse_args(argv)

    # Leave logging alone when the embedding application already set it up
    if not logging.getLogger().handlers:
        configure_cli_logging(verbose=args.verbose)

    root_check = check_repository_root(cwd)
    try:
        root_check.raise_for_status()
        report = verify(VerifierConfig.for_root(root_check.root))
    except VerifierError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e!r}", file=sys.stderr)
        return 1

    if args.format == 'json':
        print(json.dumps(report.to_dict(), indent=2))
    elif args.format == 'github-actions':
        _print_github_actions(report)
    else:
        _print_human(report)

    if not report.valid:
        return 1
    if args.format != 'json':
        print(SUCCESS_MESSAGE)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == '__main__':
    cli()

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

"""Schema registry: loads and compiles every schema in a directory."""

from __future__ import annotations

import json
import logging
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from .exceptions import SchemaLoadError

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = ('.yaml', '.yml')


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    # JSON pointer into the validated document, "" for the root
    path: str = ""

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (at {self.path})"
        return self.message


class CompiledSchema(ABC):
    """A schema ready to be applied to parsed documents."""

    @abstractmethod
    def validate(self, data: Any) -> List[SchemaIssue]:
        """Return every issue found in ``data``; an empty list means valid."""


class SchemaCompiler(ABC):
    """Turns a parsed schema document into a CompiledSchema."""

    @abstractmethod
    def compile(self, schema: Any) -> CompiledSchema:
        """Compile ``schema``.

        Raises:
            ValueError: If the document is not a usable schema
        """


def _to_pointer(path) -> str:
    if not path:
        return ""
    return "/" + "/".join(str(p).replace("~", "~0").replace("/", "~1") for p in path)


class JsonSchemaValidator(CompiledSchema):
    """CompiledSchema backed by a jsonschema validator instance."""

    def __init__(self, validator):
        self._validator = validator

    def validate(self, data: Any) -> List[SchemaIssue]:
        errors = sorted(
            self._validator.iter_errors(data),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        return [SchemaIssue(message=e.message, path=_to_pointer(e.absolute_path)) for e in errors]


class JsonSchemaCompiler(SchemaCompiler):
    """Compile schemas with jsonschema.

    The draft is picked from the document's ``$schema`` keyword, falling back
    to Draft 7 when it is absent.
    """

    def __init__(self, default_validator=Draft7Validator):
        self._default_validator = default_validator

    def compile(self, schema: Any) -> CompiledSchema:
        if not isinstance(schema, (dict, bool)):
            raise ValueError(f"schema must be an object or a boolean, got {type(schema).__name__}")

        validator_cls = validator_for(schema, default=self._default_validator)
        try:
            validator_cls.check_schema(schema)
        except SchemaError as e:
            raise ValueError(e.message) from e
        return JsonSchemaValidator(validator_cls(schema))


def schema_type(file_path: Path) -> str:
    """Schema type of a schema or data file: its name without the last extension."""
    return Path(file_path).stem


def _parse_schema_file(file_path: Path) -> Any:
    with open(file_path, "r", encoding="utf-8") as f:
        if file_path.suffix.lower() in YAML_EXTENSIONS:
            return yaml.safe_load(f)
        return json.load(f)


def load_validators(
    schema_dir: Path,
    compiler: Optional[SchemaCompiler] = None,
) -> Dict[str, CompiledSchema]:
    """Load every schema file in ``schema_dir`` (top level only).

    Args:
        schema_dir: Directory holding ``<type>.json`` (or ``.yaml``) schema files
        compiler: Schema compiler, JsonSchemaCompiler by default

    Returns:
        Mapping from schema type to compiled schema

    Raises:
        SchemaLoadError: If the directory cannot be listed, or any schema file
            cannot be parsed or compiled
    """
    compiler = compiler or JsonSchemaCompiler()
    schema_dir = Path(schema_dir)

    try:
        names = sorted(p.name for p in schema_dir.iterdir())
    except OSError as e:
        raise SchemaLoadError(schema_dir, str(e)) from e

    validators: Dict[str, CompiledSchema] = {}
    sources: Dict[str, Path] = {}

    for name in names:
        file_path = schema_dir / name
        # lstat: symlinks and directories are not schema files
        if not stat.S_ISREG(file_path.lstat().st_mode):
            logger.debug(f"Skipping non-regular schema entry: {file_path}")
            continue

        type_name = schema_type(file_path)
        try:
            schema = _parse_schema_file(file_path)
            compiled = compiler.compile(schema)
        except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
            raise SchemaLoadError(file_path, str(e)) from e

        if type_name in validators:
            logger.warning(
                f"Schema type '{type_name}' is defined more than once: "
                f"{file_path} replaces {sources[type_name]}"
            )
        validators[type_name] = compiled
        sources[type_name] = file_path
        logger.debug(f"Loaded schema '{type_name}' from {file_path}")

    logger.debug(f"Loaded {len(validators)} schema(s) from {schema_dir}")
    return validators

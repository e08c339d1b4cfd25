"""JSON schema and validation for persisted conversation records."""

from __future__ import annotations

import re
from typing import Any

from jsonschema import Draft202012Validator

from taskexec.core.types import ACTION_KINDS, ENTRY_KINDS
from taskexec.record.exceptions import RecordValidationError

SUPPORTED_MAJOR_VERSION = 1
DEFAULT_RECORD_VERSION = "1.0"

_VERSION_PATTERN = re.compile(r"^(?P<major>\d+)\.(?P<minor>\d+)$")
_CHECKSUM_PATTERN = r"^sha256:[0-9a-f]{64}$"
_OPTIONAL_STRING = {"type": ["string", "null"]}

RECORD_SCHEMA_V1: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "taskexec conversation record",
    "type": "object",
    "required": ["version", "metadata", "payload", "checksum"],
    "additionalProperties": True,
    "properties": {
        "version": {"type": "string", "pattern": r"^\d+\.\d+$"},
        "metadata": {
            "type": "object",
            "required": ["executor_type"],
            "additionalProperties": True,
            "properties": {"executor_type": {"type": "string"}},
        },
        "payload": {
            "type": "object",
            "required": ["conversation"],
            "additionalProperties": True,
            "properties": {"conversation": {"$ref": "#/$defs/conversation"}},
        },
        "checksum": {"type": "string", "pattern": _CHECKSUM_PATTERN},
    },
    "$defs": {
        "conversation": {
            "type": "object",
            "required": ["entries", "executor_type"],
            "additionalProperties": False,
            "properties": {
                "entries": {"type": "array", "items": {"$ref": "#/$defs/entry"}},
                "session_id": _OPTIONAL_STRING,
                "executor_type": {"type": "string"},
                "prompt": _OPTIONAL_STRING,
                "summary": _OPTIONAL_STRING,
            },
        },
        "entry": {
            "type": "object",
            "required": ["entry_type", "content"],
            "additionalProperties": False,
            "properties": {
                "timestamp": _OPTIONAL_STRING,
                "entry_type": {"$ref": "#/$defs/entry_type"},
                "content": {"type": "string"},
                "metadata": {"type": ["object", "null"]},
            },
        },
        "entry_type": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"type": "string", "enum": list(ENTRY_KINDS)},
                "tool_name": {"type": "string"},
                "action_type": {"$ref": "#/$defs/action_type"},
            },
            "if": {"properties": {"type": {"const": "tool_use"}}},
            "then": {"required": ["type", "tool_name", "action_type"]},
        },
        "action_type": {
            "type": "object",
            "required": ["action"],
            "properties": {"action": {"type": "string", "enum": list(ACTION_KINDS)}},
            "additionalProperties": {"type": "string"},
        },
    },
}


def parse_record_version(version: str) -> tuple[int, int]:
    match = _VERSION_PATTERN.fullmatch(version.strip())
    if match is None:
        raise RecordValidationError(f"Invalid record version: {version}")
    return int(match.group("major")), int(match.group("minor"))


def validate_record(record: dict[str, Any]) -> None:
    """Validate record shape and supported version contract."""
    version = str(record.get("version", "")).strip()
    major, _minor = parse_record_version(version)

    if major != SUPPORTED_MAJOR_VERSION:
        raise RecordValidationError(
            "Unsupported record major version: "
            f"{version}. Supported major: {SUPPORTED_MAJOR_VERSION}.x"
        )

    validator = Draft202012Validator(RECORD_SCHEMA_V1)
    errors = sorted(validator.iter_errors(record), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.path) or "$"
        raise RecordValidationError(f"Invalid record at {location}: {first.message}")

"""Persisted conversation records."""

from taskexec.record.exceptions import RecordChecksumError, RecordError, RecordValidationError
from taskexec.record.io import (
    build_record_envelope,
    compute_record_checksum,
    read_conversation_record,
    read_record_envelope,
    write_conversation_record,
)
from taskexec.record.schema import (
    DEFAULT_RECORD_VERSION,
    RECORD_SCHEMA_V1,
    parse_record_version,
    validate_record,
)

__all__ = [
    "DEFAULT_RECORD_VERSION",
    "RECORD_SCHEMA_V1",
    "RecordChecksumError",
    "RecordError",
    "RecordValidationError",
    "build_record_envelope",
    "compute_record_checksum",
    "parse_record_version",
    "read_conversation_record",
    "read_record_envelope",
    "validate_record",
    "write_conversation_record",
]

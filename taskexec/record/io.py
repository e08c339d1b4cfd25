"""Read/write utilities for persisted conversation records."""

from __future__ import annotations

from hashlib import sha256
import json
from pathlib import Path
from typing import Any

from taskexec.core.canonical import canonical_json, canonicalize
from taskexec.core.models import NormalizedConversation
from taskexec.record.exceptions import RecordChecksumError, RecordValidationError
from taskexec.record.schema import DEFAULT_RECORD_VERSION, validate_record


def compute_record_checksum(record_without_checksum: dict[str, Any]) -> str:
    payload = canonical_json(record_without_checksum)
    digest = sha256(payload.encode("utf-8")).hexdigest()
    return f"sha256:{digest}"


def build_record_envelope(
    conversation: NormalizedConversation,
    *,
    version: str = DEFAULT_RECORD_VERSION,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        "version": version,
        "metadata": {
            "executor_type": conversation.executor_type,
            "entry_count": len(conversation.entries),
            **(metadata or {}),
        },
        "payload": {
            "conversation": conversation.to_dict(),
        },
    }
    envelope["checksum"] = compute_record_checksum(envelope)
    validate_record(envelope)
    return envelope


def write_conversation_record(
    conversation: NormalizedConversation,
    path: str | Path,
    *,
    version: str = DEFAULT_RECORD_VERSION,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    record = build_record_envelope(conversation, version=version, metadata=metadata)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(canonicalize(record), indent=2, ensure_ascii=True, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return record


def read_record_envelope(path: str | Path) -> dict[str, Any]:
    """Read and validate a record envelope, verifying its checksum."""
    target = Path(path)
    try:
        raw_text = target.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise RecordValidationError(f"Record is not valid UTF-8 text: {target}") from error

    try:
        record = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise RecordValidationError(f"Record is not valid JSON: {target} ({error})") from error

    if not isinstance(record, dict):
        raise RecordValidationError(f"Record must be a JSON object: {target}")

    validate_record(record)

    checksum_actual = record.get("checksum")
    checksum_expected = compute_record_checksum(
        {
            "version": record["version"],
            "metadata": record["metadata"],
            "payload": record["payload"],
        }
    )
    if checksum_actual != checksum_expected:
        raise RecordChecksumError(
            f"Record checksum mismatch: expected {checksum_expected}, got {checksum_actual}"
        )

    return record


def read_conversation_record(path: str | Path) -> NormalizedConversation:
    record = read_record_envelope(path)
    return NormalizedConversation.from_dict(record["payload"]["conversation"])

"""Log normalization pipeline for plain-text coding agents."""

from taskexec.normalize.actions import (
    TOOL_MARKERS,
    UNKNOWN_TOOL_NAME,
    ToolMarker,
    classify_action,
    find_tool_marker,
    is_tool_usage,
)
from taskexec.normalize.fields import FIELD_DELIMITER, extract_field
from taskexec.normalize.lines import LINE_RULES, LineRule, classify_line, match_line_rule
from taskexec.normalize.normalizer import normalize_logs
from taskexec.normalize.paths import make_path_relative

__all__ = [
    "FIELD_DELIMITER",
    "LINE_RULES",
    "LineRule",
    "TOOL_MARKERS",
    "ToolMarker",
    "UNKNOWN_TOOL_NAME",
    "classify_action",
    "classify_line",
    "extract_field",
    "find_tool_marker",
    "is_tool_usage",
    "make_path_relative",
    "match_line_rule",
    "normalize_logs",
]

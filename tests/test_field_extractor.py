from taskexec.normalize import extract_field


def test_extracts_text_after_first_colon_trimmed() -> None:
    assert extract_field("Running command:   npm install  ") == "npm install"


def test_first_delimiter_wins_even_inside_payload() -> None:
    assert extract_field("Fetching URL: https://example.com/a") == "https://example.com/a"
    assert extract_field("note: a: b") == "a: b"


def test_missing_delimiter_returns_whole_line() -> None:
    assert extract_field("  no delimiter here ") == "no delimiter here"


def test_empty_payload_after_delimiter() -> None:
    assert extract_field("Searching for:") == ""


def test_custom_delimiter() -> None:
    assert extract_field("key=value=more", "=") == "value=more"


def test_drive_letter_is_not_special_cased() -> None:
    assert extract_field("C:\\repo\\main.rs") == "\\repo\\main.rs"

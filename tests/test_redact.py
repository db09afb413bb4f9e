from __future__ import annotations

from fumotion._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "email": "ann@example.com",
        "password": "pw",
        "confirm_password": "pw",
        "token": "abc",
        "nested": {"Token": "def", "items": [{"password": "x"}]},
    }

    redacted = redact_for_log(payload)
    assert redacted["email"] == "ann@example.com"
    assert redacted["password"] == "<redacted>"
    assert redacted["confirm_password"] == "<redacted>"
    assert redacted["token"] == "<redacted>"
    assert redacted["nested"]["Token"] == "<redacted>"
    assert redacted["nested"]["items"][0]["password"] == "<redacted>"
    assert payload["password"] == "pw"


def test_authorization_header_keeps_scheme() -> None:
    redacted = redact_for_log({"Authorization": "Bearer abc", "Accept": "application/json"})
    assert redacted["Authorization"] == "Bearer <redacted>"
    assert redacted["Accept"] == "application/json"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]

import logging

from artist_playlists.core.logging_config import (
    RedactSecretsFilter,
    configure_logging,
    redact_secrets,
)


def test_redact_secrets_masks_tokens_and_codes() -> None:
    text = (
        "GET /refresh-token?refresh_token=AQDx9-abc "
        "redirect /#access_token=BQC.123&refresh_token=AQD "
        "callback?code=xyz&state=s1 Authorization: Bearer BQC-tok.en"
    )

    redacted = redact_secrets(text)

    assert "AQDx9-abc" not in redacted
    assert "BQC.123" not in redacted
    assert "xyz" not in redacted
    assert "BQC-tok.en" not in redacted
    assert "refresh_token=***" in redacted
    assert "state=s1" in redacted
    assert "Bearer ***" in redacted


def test_filter_rewrites_formatted_record() -> None:
    record = logging.LogRecord(
        "artist_playlists", logging.INFO, __file__, 1,
        "calling %s", ("http://proxy.test/refresh-token?refresh_token=secret",), None,
    )

    assert RedactSecretsFilter().filter(record) is True
    assert record.getMessage() == "calling http://proxy.test/refresh-token?refresh_token=***"


def test_configure_logging_attaches_filter_once(monkeypatch) -> None:
    root = logging.getLogger()
    handler = logging.StreamHandler()
    monkeypatch.setattr(root, "handlers", [handler])
    monkeypatch.setattr(root, "level", root.level)

    configure_logging("DEBUG")
    configure_logging("DEBUG")

    assert root.level == logging.DEBUG
    assert sum(isinstance(f, RedactSecretsFilter) for f in handler.filters) == 1
    assert logging.getLogger("urllib3").level == logging.WARNING

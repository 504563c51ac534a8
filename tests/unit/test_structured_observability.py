"""Log lines are JSON on stderr, keyed by proposal and list view."""
import json

import pytest

from issuer_governance.observability.logging import configure_logging, get_logger


def _last_line(captured: str) -> dict[str, object]:
    return json.loads(captured.strip().splitlines()[-1])


def test_logs_are_json_on_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")
    logger = get_logger("test")

    logger.info("proposal_broadcast", proposal_id=42, transaction_hash="ABC")

    captured = capsys.readouterr()
    assert captured.out == ""
    payload = _last_line(captured.err)
    assert payload["event"] == "proposal_broadcast"
    assert payload["proposal_id"] == 42
    assert payload["level"] == "info"
    assert "timestamp" in payload


def test_logs_redact_secrets(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")
    logger = get_logger("test")

    logger.warning("signer_loaded", signer_mnemonic="abandon about", view="proposals")

    payload = _last_line(capsys.readouterr().err)
    assert payload["signer_mnemonic"] == "***REDACTED***"
    assert payload["view"] == "proposals"


def test_level_filtering(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("WARNING")
    logger = get_logger("test")

    logger.info("page_loaded", view="votes/1")
    logger.warning("page_failed", view="votes/1", error="timeout")

    lines = capsys.readouterr().err.strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["event"] == "page_failed"

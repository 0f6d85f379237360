"""Tests for the self-check client, with requests patched out."""

from unittest.mock import MagicMock, patch

import requests

from ghost.self_check import SELF_CHECKS, run_self_checks


def _response(text):
    resp = MagicMock()
    resp.text = text
    resp.raise_for_status.return_value = None
    return resp


def test_all_checks_pass_when_keywords_present():
    body = (
        "WordInSentence ReferenceLink hello LemmaLink run GlobNode ghost-negation? no"
    )
    with patch("ghost.self_check.requests.post", return_value=_response(body)) as post:
        results = run_self_checks("http://localhost:8009")

    assert post.call_count == len(SELF_CHECKS)
    assert post.call_args.args[0] == "http://localhost:8009/compile"
    assert all(r["ok"] for r in results)


def test_missing_keywords_are_reported():
    with patch("ghost.self_check.requests.post", return_value=_response("{}")):
        results = run_self_checks("http://localhost:8009")

    assert not results[0]["ok"]
    assert "hello" in results[0]["missing_keywords"]


def test_connection_errors_do_not_raise():
    with patch(
        "ghost.self_check.requests.post",
        side_effect=requests.ConnectionError("refused"),
    ):
        results = run_self_checks("http://localhost:1")

    assert all(not r["ok"] and "refused" in r["error"] for r in results)

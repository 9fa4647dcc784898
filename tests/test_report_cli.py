"""Tests for the pizza-combos command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests
from helpers import FakeResponse, FakeSession, feed

from pizza_combos.cli import reason_codes, report
from pizza_combos.services import schema_registry
from pizza_combos.services.combo_ranking import BANNER


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PIZZA_COMBOS_TOP_N",
        "PIZZA_COMBOS_ORDERS_URL",
        "PIZZA_COMBOS_FETCH_TIMEOUT",
        "PIZZA_COMBOS_HASH",
    ):
        monkeypatch.delenv(name, raising=False)


def _write_feed(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "pizzas.json"
    path.write_text(body, encoding="utf-8")
    return path


def test_text_report_from_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write_feed(
        tmp_path, feed(["cheese", "pepperoni"], ["pepperoni", "cheese"], ["mushroom"])
    )

    exit_code = report.main(["--file", str(path)])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == [
        BANNER,
        "Top 20 pizza toppings",
        BANNER,
        "1. cheese - pepperoni = 2",
        "2. mushroom           = 1",
        BANNER,
    ]


def test_json_report_from_default_url(capsys: pytest.CaptureFixture[str]) -> None:
    session = FakeSession(FakeResponse(feed(["olive", "olive"], ["olive"], ["olive"])))

    exit_code = report.main(
        ["--json", "--hash", "java", "--limit", "1"], session=session
    )

    assert exit_code == 0
    assert session.calls == [("http://files.olo.com/pizzas.json", {"timeout": 30.0})]
    payload = json.loads(capsys.readouterr().out)
    schema_registry.validate("combo_report_v0.1", payload)
    assert payload["hash_function"] == "java"
    assert payload["distinct_combos"] == 2
    (combo,) = payload["combos"]
    assert (combo["rank"], combo["toppings"], combo["count"]) == (1, ["olive"], 2)


def test_url_and_limit_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PIZZA_COMBOS_ORDERS_URL", "http://example.test/feed.json")
    monkeypatch.setenv("PIZZA_COMBOS_TOP_N", "2")
    session = FakeSession(FakeResponse(feed(["a"], ["b"], ["c"])))

    assert report.main([], session=session) == 0

    assert session.calls[0][0] == "http://example.test/feed.json"
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "Top 2 pizza toppings"
    assert out[3:5] == ["1. a = 1", "2. b = 1"]


def test_fetch_failure_reports_reason(capsys: pytest.CaptureFixture[str]) -> None:
    session = FakeSession(error=requests.ConnectionError("refused"))

    assert report.main([], session=session) == 1

    assert f"error: {reason_codes.FETCH_FAILED}:" in capsys.readouterr().err


def test_http_status_failure_reports_reason(capsys: pytest.CaptureFixture[str]) -> None:
    session = FakeSession(FakeResponse("", status_code=500))

    assert report.main([], session=session) == 1

    assert reason_codes.FETCH_FAILED in capsys.readouterr().err


def test_invalid_json_reports_decode_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write_feed(tmp_path, "{not json")

    assert report.main(["--file", str(path)]) == 1

    assert reason_codes.DECODE_FAILED in capsys.readouterr().err


def test_malformed_orders_report_invalid_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write_feed(tmp_path, json.dumps([{"toppings": None}]))

    assert report.main(["--file", str(path)]) == 1

    captured = capsys.readouterr()
    assert reason_codes.INVALID_INPUT in captured.err
    assert captured.out == ""


def test_missing_file_reports_fetch_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert report.main(["--file", str(tmp_path / "absent.json")]) == 1

    assert reason_codes.FETCH_FAILED in capsys.readouterr().err


def test_unknown_hash_is_rejected_before_fetching(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PIZZA_COMBOS_HASH", "md5")
    session = FakeSession(FakeResponse(feed(["cheese"])))

    assert report.main([], session=session) == 1

    assert session.calls == []
    assert f"error: {reason_codes.INVALID_CONFIG}:" in capsys.readouterr().err


def test_non_utf8_file_reports_decode_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "pizzas.json"
    path.write_bytes(b'[{"toppings": ["\xff"]}]')

    assert report.main(["--file", str(path)]) == 1

    assert f"error: {reason_codes.DECODE_FAILED}:" in capsys.readouterr().err


@pytest.mark.parametrize("limit", ["0", "abc", "5000"])
def test_limit_flag_is_bounded(limit: str) -> None:
    with pytest.raises(SystemExit):
        report.parse_args(["--limit", limit])


def test_url_and_file_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        report.parse_args(["--url", "http://example.test", "--file", "x.json"])

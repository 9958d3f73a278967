# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Tests for the CLI entry point."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from abn_search.cli import main
from conftest import GUID, FakeTransport, load_response

GUID_ARGS = ["--guid", GUID]


@pytest.fixture
def soap(registry: FakeTransport) -> Iterator[MagicMock]:
    """Route every client the CLI builds to the fake registry."""
    with patch("abn_search.client.SoapTransport", return_value=registry) as mock:
        yield mock


def test_check_valid(capsys: pytest.CaptureFixture[str]) -> None:
    main(["check", "99124391073", "46 110 483 513"])
    assert capsys.readouterr().out.splitlines() == ["99 124 391 073", "46 110 483 513"]


def test_check_invalid_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit, match="1"):
        main(["check", "99124391073", "99124391072"])
    assert "INVALID: 99124391072" in capsys.readouterr().out


def test_check_acn(capsys: pytest.CaptureFixture[str]) -> None:
    main(["check", "--acn", "124391073"])
    assert capsys.readouterr().out.strip() == "124 391 073"


def test_lookup_abn(soap: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
    main([*GUID_ARGS, "lookup", "--abn", "99124391073"])
    out = capsys.readouterr().out
    assert out.startswith("99 124 391 073  ACME WIDGETS PTY LTD")
    assert "also: WIDGET WORLD" in out


def test_lookup_acn_to_file(
    soap: MagicMock, registry: FakeTransport, tmp_path: Path
) -> None:
    out = tmp_path / "entity.jsonl"
    main([*GUID_ARGS, "lookup", "--acn", "124391073", "-o", str(out)])
    lines = out.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[1])["abn"] == "99124391073"
    assert registry.calls[0][0] == "SearchByASICv201408"


def test_lookup_proxy_and_timeout_reach_transport(soap: MagicMock) -> None:
    main([*GUID_ARGS, "--proxy", "http://proxy.local:3128", "--timeout", "5",
          "lookup", "--abn", "99124391073"])
    kwargs = soap.call_args[1]
    assert kwargs["proxy"] == "http://proxy.local:3128"
    assert kwargs["timeout"] == 5.0


def test_lookup_invalid_abn_exits_1(soap: MagicMock, registry: FakeTransport) -> None:
    with pytest.raises(SystemExit, match="1"):
        main([*GUID_ARGS, "lookup", "--abn", "99124391072"])
    assert registry.calls == []


def test_lookup_without_guid_exits_1(
    soap: MagicMock, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.delenv("ABN_LOOKUP_GUID", raising=False)
    with pytest.raises(SystemExit, match="1"):
        main(["lookup", "--abn", "99124391073"])
    assert "No GUID provided" in caplog.text


def test_lookup_malformed_endpoint_exits_1(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(SystemExit, match="1"):
        main([*GUID_ARGS, "--endpoint", "notaurl", "lookup", "--abn", "99124391073"])
    assert "unknown url type" in caplog.text


def test_lookup_remote_error_exits_1(
    soap: MagicMock, registry: FakeTransport, caplog: pytest.LogCaptureFixture
) -> None:
    registry.responses["SearchByABNv201408"] = load_response("search_by_abn_exception.xml")
    with pytest.raises(SystemExit, match="1"):
        main(["--guid", "fake-guid", "lookup", "--abn", "99124391073"])
    assert "not recognised as a Registered Party" in caplog.text


def test_search_happy_path(
    soap: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main([*GUID_ARGS, "search", "acme", "-o", str(tmp_path)])

    assert (tmp_path / "entities.csv").exists()
    assert (tmp_path / "entities.jsonl").exists()
    assert (tmp_path / "entities.json-schema.json").exists()
    assert capsys.readouterr().out.startswith("OK: wrote 2 records")


def test_search_filters(soap: MagicMock, registry: FakeTransport, tmp_path: Path) -> None:
    main([*GUID_ARGS, "search", "acme", "--state", "NSW", "--state", "VIC",
          "--postcode", "2113", "--min-score", "70", "--max-results", "3",
          "--no-enrich", "--skip-verify", "-o", str(tmp_path)])

    assert len(registry.calls) == 1
    search = registry.calls[0][1]["externalNameSearch"]
    state_codes = search["filters"]["stateCode"]
    assert {s for s, flag in state_codes.items() if flag == "Y"} == {"NSW", "VIC"}
    assert search["filters"]["postcode"] == "2113"
    assert search["minimumScore"] == 70
    assert search["maxSearchResults"] == 3


def test_search_output_records(soap: MagicMock, tmp_path: Path) -> None:
    main([*GUID_ARGS, "search", "acme", "-o", str(tmp_path)])
    with open(tmp_path / "entities.jsonl", encoding="utf-8") as f:
        lines = [json.loads(line) for line in f if line.strip()]
    assert lines[0]["_metadata"]["query"] == "acme"
    assert [rec["abn"] for rec in lines[1:]] == ["99124391073", "46110483513"]


def test_search_remote_error_exits_1(
    soap: MagicMock, registry: FakeTransport, tmp_path: Path
) -> None:
    registry.responses["ABRSearchByNameAdvanced2012"] = load_response(
        "search_by_name_exception.xml"
    )
    with pytest.raises(SystemExit, match="1"):
        main([*GUID_ARGS, "search", "x", "-o", str(tmp_path)])
    assert not (tmp_path / "entities.csv").exists()


def test_verbose(soap: MagicMock, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """--verbose flag enables DEBUG-level log messages."""
    with caplog.at_level("DEBUG", logger="abn_search"):
        main([*GUID_ARGS, "-v", "search", "acme", "-o", str(tmp_path)])
    debug_messages = [r for r in caplog.records if r.levelname == "DEBUG"]
    assert len(debug_messages) > 0


def test_guid_is_never_logged(
    soap: MagicMock, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level("DEBUG", logger="abn_search"):
        main([*GUID_ARGS, "-v", "search", "acme", "-o", str(tmp_path)])
    assert GUID not in caplog.text

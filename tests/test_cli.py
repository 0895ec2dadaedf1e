"""Tests for the command-line interface."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import ANIME_LIST_XML, ANIME_SEARCH_XML, FakeTransport
from mal_list import cli
from mal_list.exceptions import BadStatusError
from mal_list.mal_client import MALClient


@pytest.fixture
def runner(tmp_path, monkeypatch):
    for name in ("MAL_USERNAME", "MAL_PASSWORD", "MAL_LIST_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    config = tmp_path / "config.yaml"
    config.write_text("mal:\n  username: testuser\n  password: pw\n")
    monkeypatch.setenv("MAL_LIST_CONFIG", str(config))
    return CliRunner()


@pytest.fixture
def fake(monkeypatch):
    transport = FakeTransport()
    monkeypatch.setattr(cli, "_make_client", lambda settings: MALClient("testuser", transport=transport))
    return transport


def test_search(runner, fake):
    fake.respond(ANIME_SEARCH_XML)
    result = runner.invoke(cli.main, ["search", "anime", "Cowboy Bebop"])
    assert result.exit_code == 0
    assert "Cowboy Bebop" in result.output
    assert "Tengoku no Tobira" in result.output


def test_search_no_results(runner, fake):
    fake.respond("", status_code=204)
    result = runner.invoke(cli.main, ["search", "manga", "zzz"])
    assert result.exit_code == 0
    assert "No results." in result.output


def test_list(runner, fake):
    fake.respond(ANIME_LIST_XML)
    result = runner.invoke(cli.main, ["list", "anime"])
    assert result.exit_code == 0
    assert "2 entries" in result.output
    assert "Toradora!" in result.output
    assert "watching" in result.output


def test_update_sends_only_given_options(runner, fake):
    result = runner.invoke(cli.main, ["update", "anime", "4224", "--progress", "25", "--status", "completed"])
    assert result.exit_code == 0, result.output
    assert fake.sent[0].data["data"] == "<entry><episode>25</episode><status>2</status></entry>"


def test_add_manga_with_dates_and_tags(runner, fake):
    result = runner.invoke(
        cli.main,
        ["add", "manga", "2", "--status", "plan_to_read", "--volumes", "3", "--start", "none",
         "--tag", "a", "--tag", "b", "--redo"],
    )
    assert result.exit_code == 0, result.output
    assert fake.sent[0].url.endswith("/api/mangalist/add/2.xml")
    assert fake.sent[0].data["data"] == (
        "<entry><volume>3</volume><status>6</status><date_start>00000000</date_start>"
        "<enable_rereading>1</enable_rereading><tags>a,b</tags></entry>"
    )


def test_update_without_options_fails(runner, fake):
    result = runner.invoke(cli.main, ["update", "anime", "1"])
    assert result.exit_code == 1
    assert fake.sent == []


def test_bad_status_label(runner, fake):
    result = runner.invoke(cli.main, ["add", "anime", "1", "--status", "binging"])
    assert result.exit_code != 0
    assert fake.sent == []


def test_delete(runner, fake):
    result = runner.invoke(cli.main, ["delete", "anime", "1"])
    assert result.exit_code == 0
    assert fake.sent[0].method == "DELETE"


def test_verify_rejected(runner, fake):
    fake.fail_with(BadStatusError(401))
    result = runner.invoke(cli.main, ["verify"])
    assert result.exit_code == 1


def test_service_error_exits_nonzero(runner, fake):
    fake.fail_with(BadStatusError(500))
    result = runner.invoke(cli.main, ["delete", "manga", "2"])
    assert result.exit_code == 1


def test_missing_username(tmp_path, monkeypatch):
    for name in ("MAL_USERNAME", "MAL_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MAL_LIST_CONFIG", str(tmp_path / "absent.yaml"))
    with patch.object(cli, "MALTransport") as transport_cls:
        result = CliRunner().invoke(cli.main, ["verify"])
    assert result.exit_code == 1
    transport_cls.assert_not_called()

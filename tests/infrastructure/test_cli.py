"""End-to-end tests of the click CLI against a temporary data directory."""

import pytest
from click.testing import CliRunner

from slotbid.infrastructure.cli.main import cli
from slotbid.infrastructure.config import get_settings


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("SLOTBID_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


def _invoke(runner, *args):
    return runner.invoke(cli, list(args))


class TestProductCommands:

    def test_create_and_show(self, runner):
        result = _invoke(
            runner, "product", "create",
            "--name", "Watch", "--category", "Luxury",
            "--image", "watch.png", "--price", "1000",
        )
        assert result.exit_code == 0, result.output
        assert "Product #1 'Watch' created at $1000.00" in result.output

        result = _invoke(runner, "product", "show", "--id", "1")
        assert "status=Not ready to bid" in result.output

    def test_list_empty(self, runner):
        result = _invoke(runner, "product", "list")
        assert result.exit_code == 0
        assert "No products found." in result.output

    def test_domain_error_exits_non_zero(self, runner):
        result = _invoke(runner, "product", "show", "--id", "42")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestAuctionCommands:

    def test_full_auction(self, runner):
        _invoke(runner, "user", "add", "--name", "Alice", "--email", "alice@example.com")
        _invoke(runner, "user", "add", "--name", "Bob", "--email", "bob@example.com")
        _invoke(
            runner, "product", "create",
            "--name", "Watch", "--category", "Luxury",
            "--image", "watch.png", "--price", "300",
        )

        result = _invoke(runner, "slot", "create", "--product", "1", "--price", "100", "--units", "3")
        assert result.exit_code == 0, result.output
        assert "Remaining amount: $0.00 of $300.00" in result.output
        assert "Status: Ready to bid" in result.output

        result = _invoke(
            runner, "bid", "place", "--product", "1", "--user", "1",
            "--amount", "100", "--quantity", "2",
        )
        assert result.exit_code == 0, result.output
        assert "User 1 has invested $200.00" in result.output

        result = _invoke(
            runner, "bid", "place", "--product", "1", "--user", "2",
            "--amount", "100", "--quantity", "2",
        )
        assert result.exit_code == 1
        assert "limit exceeded" in result.output

        result = _invoke(
            runner, "bid", "place", "--product", "1", "--user", "2",
            "--amount", "100", "--quantity", "1",
        )
        assert "status=Bid completed" in result.output

        result = _invoke(runner, "winner", "declare", "--product", "1")
        assert result.exit_code == 0, result.output
        assert "winner:" in result.output

        result = _invoke(runner, "winner", "declare", "--product", "1")
        assert result.exit_code == 1

    def test_user_list(self, runner):
        _invoke(runner, "user", "add", "--name", "Alice", "--email", "alice@example.com")
        result = _invoke(runner, "user", "list")
        assert "alice@example.com" in result.output

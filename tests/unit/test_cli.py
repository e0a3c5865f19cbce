"""Tests for the amm-engine command line."""

import json

import pytest

from amm_engine.cli import main
from tests.helpers import USDC, USDT, WETH


@pytest.fixture(autouse=True)
def _structlog_defaults(reset_structlog):
    """main() configures structlog globally."""
    yield


class TestInvariantCommand:
    """Tests for the invariant subcommand."""

    def test_invariant(self, capsys):
        exit_code = main(["invariant", "--balance0", "1000", "--balance1", "1000", "--amp", "200000"])

        assert exit_code == 0
        result = json.loads(capsys.readouterr().out)
        assert result == {"invariant": "2000", "amplificationCoefficient": 200000}

    def test_default_amp_from_env(self, capsys, monkeypatch):
        monkeypatch.setenv("AMM_DEFAULT_AMPLIFICATION_COEFFICIENT", "20000")

        assert main(["invariant", "--balance0", "1000", "--balance1", "1000"]) == 0
        assert json.loads(capsys.readouterr().out)["amplificationCoefficient"] == 20000

    def test_one_sided_balances(self, capsys):
        assert main(["invariant", "--balance0", "0", "--balance1", "1000"]) == 1
        assert "Error:" in capsys.readouterr().err


class TestQuoteCommands:
    """Tests for quote-out and quote-in."""

    def test_quote_out(self, capsys, pair_snapshot_file):
        exit_code = main(
            ["quote-out", "--pair", str(pair_snapshot_file), "--token", USDC.address, "--amount", "1000000000"]
        )

        assert exit_code == 0
        result = json.loads(capsys.readouterr().out)
        assert result["token"] == USDT.address
        assert 999_800_000 < int(result["amount"]) <= 999_900_000
        assert result["pair"]["curveId"] == 1
        assert result["pair"]["reserve0"] == 1_001_000 * 10**6

    def test_quote_in(self, capsys, pair_snapshot_file):
        exit_code = main(
            ["quote-in", "--pair", str(pair_snapshot_file), "--token", USDT.address, "--amount", "1000000000"]
        )

        assert exit_code == 0
        result = json.loads(capsys.readouterr().out)
        assert result["token"] == USDC.address
        assert 1000 * 10**6 < int(result["amount"]) < 1001 * 10**6

    def test_token_lookup_is_case_insensitive(self, capsys, pair_snapshot_file):
        exit_code = main(
            ["quote-out", "--pair", str(pair_snapshot_file), "--token", USDC.address.upper().replace("0X", "0x"), "--amount", "1000"]
        )
        assert exit_code == 0

    def test_foreign_token(self, capsys, pair_snapshot_file):
        exit_code = main(
            ["quote-out", "--pair", str(pair_snapshot_file), "--token", WETH.address, "--amount", "1000"]
        )

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, capsys, tmp_path):
        exit_code = main(
            ["quote-out", "--pair", str(tmp_path / "missing.json"), "--token", USDC.address, "--amount", "1"]
        )

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_output_exceeds_reserve(self, capsys, pair_snapshot_file):
        exit_code = main(
            ["quote-in", "--pair", str(pair_snapshot_file), "--token", USDT.address, "--amount", str(10**13)]
        )
        assert exit_code == 1

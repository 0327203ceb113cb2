"""Tests for the Typer CLI commands."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from eligibility_api.cli.app import app
from eligibility_api.services.cache_service import CacheStats

runner = CliRunner()


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


class TestCheckCommand:
    """Exit codes of the free-text check command."""

    def test_eligible_exits_zero(self) -> None:
        with patch("eligibility_api.cli.check_cmd._check", new_callable=AsyncMock, return_value=True) as mock_check:
            result = runner.invoke(app, ["check", "212 Encounter Bay, Alameda, CA 90255"])
        assert result.exit_code == 0
        mock_check.assert_awaited_once_with("212 Encounter Bay, Alameda, CA 90255")

    def test_not_eligible_exits_one(self) -> None:
        with patch("eligibility_api.cli.check_cmd._check", new_callable=AsyncMock, return_value=False):
            result = runner.invoke(app, ["check", "100 Main St, Reno, NV"])
        assert result.exit_code == 1

    def test_not_found_exits_two(self) -> None:
        with patch("eligibility_api.cli.check_cmd._check", new_callable=AsyncMock, return_value=None):
            result = runner.invoke(app, ["check", "nowhere"])
        assert result.exit_code == 2


class TestCacheCommands:
    """Tests for the cache command group."""

    def test_stats(self) -> None:
        stats = CacheStats(eligibility_entries=3, total_db_size=None)
        with patch("eligibility_api.cli.cache_cmd._with_cache", new_callable=AsyncMock, return_value=stats):
            result = runner.invoke(app, ["cache", "stats"])
        assert result.exit_code == 0
        assert "Eligibility entries: 3" in result.output
        assert "unavailable" in result.output

    def test_clear_with_yes(self) -> None:
        with patch("eligibility_api.cli.cache_cmd._with_cache", new_callable=AsyncMock, return_value=4):
            result = runner.invoke(app, ["cache", "clear", "--yes"])
        assert result.exit_code == 0
        assert "Deleted 4 entries" in result.output

    def test_clear_aborts_without_confirmation(self) -> None:
        with patch("eligibility_api.cli.cache_cmd._with_cache", new_callable=AsyncMock) as mock_cache:
            result = runner.invoke(app, ["cache", "clear"], input="n\n")
        assert result.exit_code == 1
        mock_cache.assert_not_called()

    def test_evict_missing_key_exits_one(self) -> None:
        with patch("eligibility_api.cli.cache_cmd._with_cache", new_callable=AsyncMock, return_value=False):
            result = runner.invoke(app, ["cache", "evict", "1 main st:x:y:z"])
        assert result.exit_code == 1


class TestZonesSeedCommand:
    def test_invalid_file_exits_one(self, tmp_path: Path) -> None:
        zone_file = tmp_path / "zones.yml"
        zone_file.write_text("not_zones: []\n")
        result = runner.invoke(app, ["zones", "seed", str(zone_file)])
        assert result.exit_code == 1

    def test_missing_file_is_usage_error(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["zones", "seed", str(tmp_path / "absent.yml")])
        assert result.exit_code == 2


PROJECT_ALEMBIC_INI = Path(__file__).resolve().parents[3] / "alembic.ini"


class TestDbCommands:
    """Tests for the migration command group."""

    def test_missing_config_exits_one(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["db", "upgrade", "--config", str(tmp_path / "absent.ini")])
        assert result.exit_code == 1
        assert "Alembic config not found" in result.output

    def test_upgrade_resolves_script_location_next_to_ini(self, tmp_path: Path) -> None:
        ini = tmp_path / "alembic.ini"
        ini.write_text("[alembic]\nscript_location = alembic\n")

        with patch("alembic.command.upgrade") as mock_upgrade:
            result = runner.invoke(app, ["db", "upgrade", "--config", str(ini)])

        assert result.exit_code == 0
        config, revision = mock_upgrade.call_args.args
        assert revision == "head"
        assert config.get_main_option("script_location") == str(tmp_path.resolve() / "alembic")

    def test_downgrade_default_is_one_step(self, tmp_path: Path) -> None:
        ini = tmp_path / "alembic.ini"
        ini.write_text("[alembic]\nscript_location = alembic\n")

        with patch("alembic.command.downgrade") as mock_downgrade:
            result = runner.invoke(app, ["db", "downgrade", "-c", str(ini)])

        assert result.exit_code == 0
        assert mock_downgrade.call_args.args[1] == "-1"

    def test_heads_reports_shipped_revision(self) -> None:
        result = runner.invoke(app, ["db", "heads", "--config", str(PROJECT_ALEMBIC_INI)])
        assert result.exit_code == 0
        assert "001  " in result.output
        assert "eligibility zone tables" in result.output

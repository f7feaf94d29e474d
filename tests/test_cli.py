"""Tests for the edmkts CLI."""
import json
import logging
from unittest.mock import MagicMock, PropertyMock, patch

import pytest

import cli
from domain.models import Commodity, PriceOffer, System


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def lookup_service():
    service = MagicMock()
    with patch("services.lookup_service.get_lookup_service", return_value=service):
        yield service


class TestCommodityCommand:
    def test_found_prints_json(self, lookup_service, capsys):
        lookup_service.lookup_commodity.return_value = Commodity(
            name="Gold", avg_buy_price=150.0,
            best_buy=PriceOffer(100.0, "Jameson Memorial", "Shinrarta Dezhra"),
        )

        code = cli.main(["commodity", "Gold"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "Gold"
        assert data["best_buy"]["station_name"] == "Jameson Memorial"
        lookup_service.lookup_commodity.assert_called_once_with("Gold", True)

    def test_legacy_flag(self, lookup_service, capsys):
        lookup_service.lookup_commodity.return_value = Commodity(name="Gold")
        cli.main(["commodity", "Gold", "--legacy"])
        lookup_service.lookup_commodity.assert_called_once_with("Gold", False)

    def test_not_found(self, lookup_service, capsys):
        lookup_service.lookup_commodity.return_value = None
        assert cli.main(["commodity", "Nope"]) == 1
        assert capsys.readouterr().out.strip() == "not found"


class TestSystemCommand:
    def test_found(self, lookup_service, capsys):
        lookup_service.lookup_system.return_value = System(address=10477373803, name="Sol")

        assert cli.main(["system", "10477373803"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["address"] == 10477373803
        assert data["stars"] == []

    def test_address_must_be_int(self, lookup_service):
        with pytest.raises(SystemExit):
            cli.main(["system", "sol"])


class TestMisc:
    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_log_level_get(self, capsys):
        assert cli.main(["log-level"]) == 0
        assert capsys.readouterr().out.strip() in cli.VALID_LOG_LEVELS

    def test_log_level_rejects_unknown(self, capsys):
        assert cli.main(["log-level", "LOUD"]) == 1
        assert "invalid level" in capsys.readouterr().out

    def test_init_db(self, capsys):
        with patch("init_db.init_db", return_value=True) as mock_init:
            assert cli.main(["init-db", "--alias", "edmkts_dev"]) == 0
        mock_init.assert_called_once_with("edmkts_dev")


class TestLogLevels:
    def test_verbose_enables_debug_on_lookup_logger(self, lookup_service, capsys):
        import services.lookup_service as lookup_module

        lookup_service.lookup_commodity.return_value = Commodity(name="Gold", avg_buy_price=150.0)
        with patch(
            "settings_service.SettingsService.log_level",
            new_callable=PropertyMock,
            return_value="DEBUG",
        ):
            assert cli.main(["-v", "commodity", "Gold"]) == 0

        assert lookup_module.logger.isEnabledFor(logging.DEBUG)

    def test_verbose_overrides_quieter_settings(self, lookup_service, capsys):
        import services.lookup_service as lookup_module

        lookup_service.lookup_system.return_value = None
        with patch(
            "settings_service.SettingsService.log_level",
            new_callable=PropertyMock,
            return_value="WARNING",
        ):
            cli.main(["-v", "system", "1"])
            assert lookup_module.logger.isEnabledFor(logging.DEBUG)

    def test_log_level_set_reloads_settings(self, tmp_path, capsys):
        settings_copy = tmp_path / "settings.toml"
        settings_copy.write_text(cli.SETTINGS_PATH.read_text())

        with patch("cli.SETTINGS_PATH", settings_copy), \
                patch("cli._load_settings", return_value={"env": {"log_level": "INFO"}}), \
                patch("cli.clear_settings_cache") as mock_clear, \
                patch("cli.set_level") as mock_set_level:
            assert cli.main(["log-level", "debug"]) == 0

        assert 'log_level = "DEBUG"' in settings_copy.read_text()
        mock_clear.assert_called_once()
        mock_set_level.assert_called_once_with(None)

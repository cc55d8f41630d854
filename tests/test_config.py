"""
Tests for configuration loading.
"""

import pytest

from barberbook.config import AppConfig, BookingDefaults


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "America/Sao_Paulo"
        assert config.catalog_path is None
        assert config.booking.slot_interval_minutes == 30
        assert config.booking.horizon_days == 14

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "timezone: Europe/Lisbon\n"
            "catalog_path: data/catalog.json\n"
            "booking:\n"
            "  slot_interval_minutes: 15\n"
            "  horizon_days: 7\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "Europe/Lisbon"
        assert config.booking.slot_interval_minutes == 15
        assert config.booking.horizon_days == 7
        assert config.catalog_path == tmp_path / "data" / "catalog.json"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert AppConfig.load_from_yaml(path) == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("booking: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_unknown_timezone(self):
        with pytest.raises(ValueError):
            AppConfig(timezone="Mars/Olympus_Mons")

    @pytest.mark.parametrize("field", ["slot_interval_minutes", "horizon_days"])
    def test_non_positive_values(self, field):
        with pytest.raises(ValueError, match="greater than zero"):
            BookingDefaults(**{field: 0})

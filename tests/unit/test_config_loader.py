"""Unit tests for icsevent.config_loader."""

import pytest

from icsevent.config_loader import ConversionSettings, load_settings

pytestmark = pytest.mark.unit


class TestConversionSettings:
    """Tests for ConversionSettings.from_dict."""

    def test_defaults(self):
        settings = ConversionSettings.from_dict(None)

        assert settings.default_timezone is None
        assert settings.reject_unknown_properties is False
        assert settings.skip_malformed_attendees is False
        assert settings.log_level == "INFO"

    def test_values_are_read(self):
        settings = ConversionSettings.from_dict(
            {
                "default_timezone": "Europe/Berlin",
                "reject_unknown_properties": True,
                "skip_malformed_attendees": "yes",
                "log_level": "debug",
            }
        )

        assert settings.default_timezone == "Europe/Berlin"
        assert settings.reject_unknown_properties is True
        assert settings.skip_malformed_attendees is True
        assert settings.log_level == "DEBUG"

    def test_invalid_values_fall_back(self, caplog):
        settings = ConversionSettings.from_dict(
            {
                "default_timezone": "Mars/Olympus_Mons",
                "reject_unknown_properties": "sometimes",
                "log_level": "LOUD",
            }
        )

        assert settings.default_timezone is None
        assert settings.reject_unknown_properties is False
        assert settings.log_level == "INFO"
        assert "not a known IANA zone" in caplog.text

    def test_direct_construction_rejects_unknown_zone(self):
        with pytest.raises(ValueError, match="not a known IANA zone"):
            ConversionSettings(default_timezone="Not/AZone")

    def test_direct_construction_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            ConversionSettings(log_level="LOUD")

    def test_direct_construction_accepts_valid_values(self):
        settings = ConversionSettings(default_timezone="Asia/Tokyo", log_level="debug")

        assert settings.default_timezone == "Asia/Tokyo"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_returns_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml")

        assert settings == ConversionSettings()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "icsevent.yaml"
        path.write_text("default_timezone: America/Chicago\nskip_malformed_attendees: true\n")

        settings = load_settings(str(path))

        assert settings.default_timezone == "America/Chicago"
        assert settings.skip_malformed_attendees is True

    def test_json_file(self, tmp_path):
        path = tmp_path / "icsevent.json"
        path.write_text('{"reject_unknown_properties": true}')

        assert load_settings(path).reject_unknown_properties is True

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_settings(path) == ConversionSettings()

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            load_settings(path)

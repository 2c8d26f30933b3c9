"""Tests for configuration and the password list store."""

import json
import os
from unittest.mock import patch

import pytest

from pdecrypt.config.password_list import PasswordList, load_password_list, save_password_list
from pdecrypt.config.settings import Settings
from pdecrypt.utils.exceptions import ConfigCorruptError, ConfigMissingError, ValidationError


class TestSettings:
    """Test cases for Settings class."""

    def test_settings_init_default(self):
        """Test Settings initialization with default values."""
        settings_obj = Settings()

        assert settings_obj.pw_list_file.endswith("pw_list.json")
        assert settings_obj.supported_pdf_formats == [".pdf"]
        assert settings_obj.citizen_id_length == 13
        assert settings_obj.output_dir_suffix == "_pdfs_decrypted_"

    def test_settings_from_env(self, temp_dir):
        """Test Settings creation from environment variables."""
        env_vars = {
            "PDECRYPT_HOME": str(temp_dir),
            "LOG_LEVEL": "DEBUG",
            "LOG_TO_FILE": "true",
        }
        with patch.dict(os.environ, env_vars):
            settings_obj = Settings.from_env()

        assert settings_obj.home_dir == str(temp_dir)
        assert settings_obj.pw_list_file == os.path.join(str(temp_dir), "pw_list.json")
        assert settings_obj.logs_dir == os.path.join(str(temp_dir), "logs")
        assert settings_obj.log_level == "DEBUG"
        assert settings_obj.log_to_file is True

    def test_settings_from_env_pw_list_override(self, temp_dir):
        """Test PDECRYPT_PW_LIST takes precedence over PDECRYPT_HOME."""
        pw_list = str(temp_dir / "custom.json")
        with patch.dict(os.environ, {"PDECRYPT_HOME": str(temp_dir), "PDECRYPT_PW_LIST": pw_list}):
            settings_obj = Settings.from_env()

        assert settings_obj.pw_list_file == pw_list

    def test_validate(self):
        assert Settings().validate() is True
        assert Settings(supported_pdf_formats=["pdf"]).validate() is False
        assert Settings(pw_list_file="").validate() is False

    def test_get_log_level(self):
        assert Settings(log_level="debug").get_log_level() == "DEBUG"
        assert Settings(log_level="chatty").get_log_level() == "INFO"

    def test_update_ignores_none_and_unknown(self):
        settings_obj = Settings(log_level="INFO")
        settings_obj.update({"log_level": None, "unknown": 1, "pw_list_file": "x.json"})

        assert settings_obj.log_level == "INFO"
        assert settings_obj.pw_list_file == "x.json"
        assert not hasattr(settings_obj, "unknown")

    def test_create_directories(self, sample_settings):
        sample_settings.create_directories()
        sample_settings.create_directories()

        assert os.path.isdir(sample_settings.home_dir)
        assert os.path.isdir(sample_settings.logs_dir)

    def test_no_unused_environment_constant(self):
        from pdecrypt.config import settings as settings_module
        assert not hasattr(settings_module, "ENVIRONMENT")

    def test_dict_round_trip(self, sample_settings):
        assert Settings.from_dict(sample_settings.to_dict()) == sample_settings


class TestPasswordListStore:
    """Test cases for saving and loading the password list."""

    def test_save_writes_json(self, temp_dir):
        path = temp_dir / "nested" / "pw_list.json"
        save_password_list(PasswordList(["15061990", "150690"]), str(path))

        assert json.loads(path.read_text(encoding="utf-8")) == {"pw_list": ["15061990", "150690"]}

    def test_save_then_load(self, temp_dir):
        path = str(temp_dir / "pw_list.json")
        save_password_list(PasswordList(["a1", "b2", "c3"]), path)

        loaded = load_password_list(path)
        assert loaded.passwords == ["a1", "b2", "c3"]
        assert list(loaded) == ["a1", "b2", "c3"]
        assert len(loaded) == 3

    def test_save_overwrites_and_leaves_no_temp_files(self, temp_dir):
        path = temp_dir / "pw_list.json"
        save_password_list(PasswordList(["old"]), str(path))
        save_password_list(PasswordList(["new"]), str(path))

        assert load_password_list(str(path)).passwords == ["new"]
        assert [p.name for p in temp_dir.iterdir()] == ["pw_list.json"]

    def test_save_rejects_empty_list(self, temp_dir):
        path = temp_dir / "pw_list.json"
        with pytest.raises(ValidationError):
            save_password_list(PasswordList([]), str(path))
        assert not path.exists()

    def test_failed_write_keeps_previous_list(self, temp_dir):
        path = temp_dir / "pw_list.json"
        save_password_list(PasswordList(["old"]), str(path))

        with patch("pdecrypt.config.password_list.json.dump", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                save_password_list(PasswordList(["new"]), str(path))

        assert load_password_list(str(path)).passwords == ["old"]
        assert [p.name for p in temp_dir.iterdir()] == ["pw_list.json"]

    def test_load_missing(self, temp_dir):
        with pytest.raises(ConfigMissingError, match="pdecrypt init"):
            load_password_list(str(temp_dir / "missing.json"))

    @pytest.mark.parametrize("content", [
        "not json",
        "[]",
        '{"passwords": ["a"]}',
        '{"pw_list": []}',
        '{"pw_list": "15061990"}',
    ])
    def test_load_corrupt(self, temp_dir, content):
        path = temp_dir / "pw_list.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigCorruptError):
            load_password_list(str(path))

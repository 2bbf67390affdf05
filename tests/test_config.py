from pathlib import Path

import pytest

from trackpage.exceptions import ConfigurationError
from trackpage.models.config import CheckConfig
from trackpage.storage.config_manager import ConfigManager, get_default_config_file


def test_defaults_when_file_missing(tmp_path: Path):
    config = ConfigManager(tmp_path / "absent.ini").load_config()

    assert config == CheckConfig()
    assert config.max_concurrent is None
    assert config.method == "HEAD"


def test_required_file_missing(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path / "absent.ini", required=True).load_config()


def test_file_values_and_cli_overrides(tmp_path: Path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[DEFAULT]\ntimeout = 2.5\nmax_concurrent = 4\nmethod = get\nuser_agent = probe/1.0 (100%)\n",
        encoding="utf-8",
    )

    config = ConfigManager(path).load_config({"timeout": 7.0, "method": None})

    assert config.timeout == 7.0
    assert config.max_concurrent == 4
    assert config.method == "GET"
    assert config.user_agent == "probe/1.0 (100%)"


def test_zero_concurrency_means_unbounded(tmp_path: Path):
    config = ConfigManager(tmp_path / "absent.ini").load_config({"max_concurrent": 0})

    assert config.max_concurrent is None


@pytest.mark.parametrize(
    "options",
    [{"timeout": 0}, {"timeout": 1000}, {"max_concurrent": -1}, {"method": "POST"}],
)
def test_invalid_values(tmp_path: Path, options: dict):
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path / "absent.ini").load_config(options)


def test_non_numeric_value_in_file(tmp_path: Path):
    path = tmp_path / "config.ini"
    path.write_text("[DEFAULT]\ntimeout = soon\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path).load_config()


def test_default_config_file_follows_xdg(tmp_path: Path):
    assert get_default_config_file().parent.name == "trackpage"

import pytest

from mitter_sdk.config import Config, core, pagination
from mitter_sdk.config.core import Core
from mitter_sdk.config.loader import load_raw_config
from mitter_sdk.config.pagination import Pagination


def test_module_singletons_follow_test_env():
    assert Config.core is core
    assert core.API_BASE_URL == "https://api.test.mitter.io"
    assert core.APPLICATION_ID == "test-app"
    assert pagination.MAX_MESSAGE_LIST_LENGTH == 50


def test_missing_config_file_yields_empty_dict(tmp_path):
    assert load_raw_config(tmp_path / "nope.toml") == {}


def test_toml_values_win_over_env(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text(
        '[mitter.api]\nbase_url = "https://eu.mitter.example/"\nrequest_timeout = 5\n'
        "[mitter.pagination]\nmax_message_list_length = 20\ndefault_page_size = 40\n"
    )
    monkeypatch.setenv("MITTER_API_BASE_URL", "https://ignored.example")

    raw = load_raw_config(path)
    api = Core(raw)
    pages = Pagination(raw)

    assert api.API_BASE_URL == "https://eu.mitter.example"
    assert api.REQUEST_TIMEOUT == 5.0
    assert pages.MAX_MESSAGE_LIST_LENGTH == 20
    assert pages.DEFAULT_PAGE_SIZE == 20


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("MITTER_API_BASE_URL", "ftp://nope")
    with pytest.raises(ValueError):
        Core()

    monkeypatch.setenv("MITTER_MAX_MESSAGE_LIST_LENGTH", "0")
    with pytest.raises(ValueError):
        Pagination()


def test_config_path_can_come_from_env(tmp_path, monkeypatch):
    path = tmp_path / "sdk.toml"
    path.write_text('[mitter.api]\napplication_id = "from-file"\n[other]\nkey = 1\n')
    monkeypatch.setenv("MITTER_CONFIG", str(path))

    raw = load_raw_config()

    assert raw == {"mitter": {"api": {"application_id": "from-file"}}}
    assert Core(raw).APPLICATION_ID == "from-file"


def test_file_without_mitter_table_is_empty(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[unrelated]\nkey = 1\n")
    assert load_raw_config(path) == {}


def test_non_table_mitter_key_is_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('mitter = "oops"\n')
    with pytest.raises(ValueError):
        load_raw_config(path)

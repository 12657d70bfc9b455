import os

import pytest

from whist_keeper.config import Settings, load_settings, parse_bid_rule
from whist_keeper.paths import resolve_results_path
from whist_keeper.rules import BidTotalRule

ENV_NAMES = ("WHIST_BID_TOTAL_RULE", "WHIST_RESULTS_DIR", "WHIST_LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield monkeypatch
    # load_dotenv writes straight into os.environ
    for name in ENV_NAMES:
        os.environ.pop(name, None)


def test_defaults_without_environment(clean_env, tmp_path):
    settings = load_settings(tmp_path / "missing.env")
    assert settings == Settings()
    assert settings.bid_rule == BidTotalRule.FORBID_THIRTEEN


def test_settings_from_environment(clean_env, tmp_path):
    clean_env.setenv("WHIST_BID_TOTAL_RULE", "REQUIRE_THIRTEEN")
    clean_env.setenv("WHIST_RESULTS_DIR", str(tmp_path / "out"))
    clean_env.setenv("WHIST_LOG_LEVEL", "debug")

    settings = load_settings(tmp_path / "missing.env")
    assert settings.bid_rule == BidTotalRule.REQUIRE_THIRTEEN
    assert settings.results_dir == tmp_path / "out"
    assert settings.log_level == "DEBUG"


def test_settings_from_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("WHIST_BID_TOTAL_RULE=any\n", encoding="utf-8")

    settings = load_settings(env_file)
    assert settings.bid_rule == BidTotalRule.ANY


def test_parse_bid_rule():
    assert parse_bid_rule("forbid-thirteen") == BidTotalRule.FORBID_THIRTEEN
    assert parse_bid_rule(" Any ") == BidTotalRule.ANY
    with pytest.raises(ValueError, match="Unknown bid total rule"):
        parse_bid_rule("sometimes")


def test_resolve_results_path(tmp_path):
    absolute = tmp_path / "a.csv"
    assert resolve_results_path(absolute) == absolute

    resolved = resolve_results_path("b.csv", tmp_path / "results")
    assert resolved == tmp_path / "results" / "b.csv"
    assert (tmp_path / "results").is_dir()

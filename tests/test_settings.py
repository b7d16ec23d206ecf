"""TOML config, profiles and RunConfig."""

from marketsheet.config.settings import RunConfig, Settings, get_settings


def _write(path, text):
    path.write_text(text, encoding="utf-8")


def test_defaults_when_no_config(tmp_path):
    settings = get_settings(config_dir=tmp_path)
    assert settings.gamma_api_base == "https://gamma-api.polymarket.com"
    assert settings.fetch_limit_max == 500
    assert settings.tag_filter is None
    assert settings.timezone == "America/Toronto"
    assert settings.clock == "24h"
    assert "Sports" in settings.category_keywords


def test_profile_overlays_default(tmp_path):
    _write(
        tmp_path / "default.toml",
        '[fetch]\nlimit_min = 10\nlimit_max = 300\ntag_filter = ""\n[output]\nclock = "24h"\n',
    )
    _write(tmp_path / "dev.toml", '[fetch]\ntag_filter = "Sports"\n[output]\nclock = "12h"\n')
    settings = get_settings("dev", config_dir=tmp_path)
    assert settings.fetch_limit_min == 10
    assert settings.fetch_limit_max == 300
    assert settings.tag_filter == "Sports"
    assert settings.clock == "12h"


def test_limit_max_capped_at_api_maximum():
    settings = Settings(fetch={"limit_max": 5000})
    assert settings.fetch_limit_max == 1000


def test_category_keyword_overlay():
    settings = Settings(
        categories={
            "Sports": {"keywords": ["cricket"]},
            "Weather": {"keywords": ["hurricane"], "exclude": ["movie"]},
        }
    )
    table = settings.category_keywords
    assert table["Sports"]["keywords"] == ["cricket"]
    assert "lawsuit" in table["Sports"]["exclude"]
    assert table["Weather"] == {"keywords": ["hurricane"], "exclude": ["movie"]}
    assert table["Crypto"]["keywords"]


def test_run_config_overrides_and_clamp():
    settings = Settings(fetch={"limit_min": 20, "limit_max": 100, "tag_filter": "Crypto"})
    config = settings.run_config(clock="12h", selected_tag_filter=None)
    assert config.selected_tag_filter == "Crypto"
    assert config.clock == "12h"
    assert config.clamp_limit() == 100
    assert config.clamp_limit(5) == 20
    assert config.clamp_limit(5000) == 100
    assert RunConfig().clamp_limit(50) == 50

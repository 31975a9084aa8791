import json

import pytest

import config


def _write(tmp_path, data):
    path = tmp_path / "drafts.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_config_applies_defaults(tmp_path):
    settings = config.load_config(_write(tmp_path, {"articles_dir": "articles"}))
    assert settings["articles_dir"] == "articles"
    assert settings["inventory_path"] == "data/inventory.csv"
    assert settings["publish"] is False
    assert settings["lint"] == {}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        config.load_config(str(tmp_path / "missing.json"))


def test_load_config_missing_required_key(tmp_path):
    with pytest.raises(ValueError, match="articles_dir"):
        config.load_config(_write(tmp_path, {"articles_dir": ""}))


def test_publish_requires_wordpress_credentials(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "WORDPRESS_URL", "https://blog.example.com")
    monkeypatch.setattr(config, "WORDPRESS_USERNAME", "editor")
    monkeypatch.setattr(config, "WORDPRESS_APP_PASSWORD", None)
    with pytest.raises(ValueError, match="WORDPRESS_APP_PASSWORD"):
        config.load_config(_write(tmp_path, {"articles_dir": "articles", "publish": True}))


def test_defaults_are_not_shared_between_loads(tmp_path):
    path = _write(tmp_path, {"articles_dir": "articles"})
    first = config.load_config(path)
    first["lint"]["max_seo_title_length"] = 10
    assert config.load_config(path)["lint"] == {}
    assert config.DEFAULTS["lint"] == {}

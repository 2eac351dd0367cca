# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from agent_ready.config import CrawlConfig, load_config, read_config_data
from agent_ready.crawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("base_url: http://example.com", None),
        (json.dumps({"base_url": "http://example.com"}), None),
        (json.dumps({"url": "http://example.com", "maxDepth": 2}), None),
        ("{}", ValidationError),
        ("- just\n- a list", TypeError),
        ("::invalid yaml: [", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".json" if content.strip().startswith("{") else ".yaml"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlConfig)
        assert str(cfg.base_url).rstrip("/") == "http://example.com"


def test_defaults():
    cfg = CrawlConfig(base_url="https://example.com/")
    assert cfg.max_depth == 3
    assert cfg.concurrency == 5
    assert cfg.sitemap is True
    assert cfg.include == [] and cfg.exclude == []
    assert cfg.timeout == DEFAULT_TIMEOUT == 15.0
    assert cfg.user_agent == DEFAULT_USER_AGENT


def test_camel_case_aliases():
    cfg = CrawlConfig.model_validate({"url": "https://example.com", "maxDepth": 1, "userAgent": "X/1"})
    assert cfg.max_depth == 1
    assert cfg.user_agent == "X/1"


@pytest.mark.parametrize(
    "field,value",
    [("max_depth", -1), ("concurrency", 0), ("timeout", 0), ("include", ["docs/**"]), ("exclude", [""])],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        CrawlConfig(base_url="https://example.com", **{field: value})


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        CrawlConfig(base_url="https://example.com", robots=True)


def test_config_is_frozen():
    cfg = CrawlConfig(base_url="https://example.com")
    with pytest.raises(ValidationError):
        cfg.max_depth = 10


def test_unsupported_suffix(tmp_path):
    cfg_path = write_file(tmp_path, "base_url = 'x'", ".toml")
    with pytest.raises(ValueError):
        read_config_data(cfg_path)


def test_load_config_has_no_implicit_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("base_url: https://example.com\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(None)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")

# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from script_scout.config import ScanConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("secrets: true\nurls: true\nrate_limit: 2.5", ".yaml", None),
        (json.dumps({"secrets": True, "urls": True, "rate_limit": 2.5}), ".json", None),
        ("unknown_option: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{broken", ".json", ValueError),
        ("secrets = true", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, ScanConfig)
        assert cfg.secrets and cfg.urls
        assert cfg.rate_limit == 2.5
        assert not cfg.dom


def test_defaults_without_a_file():
    cfg = load_config(None)
    assert cfg == ScanConfig()
    assert not any([cfg.dom, cfg.secrets, cfg.urls, cfg.noisy, cfg.verify, cfg.file])
    assert cfg.rate_limit == 1.0 and cfg.burst == 1


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_config_is_read_only():
    cfg = ScanConfig()
    with pytest.raises(ValidationError):
        cfg.secrets = True  # type: ignore[misc]


def test_with_overrides_validates_and_skips_none():
    cfg = ScanConfig(noisy=True).with_overrides(secrets=True, noisy=None, concurrency=3)
    assert cfg.secrets and cfg.noisy and cfg.concurrency == 3

    with pytest.raises(ValidationError):
        ScanConfig().with_overrides(concurrency=0)

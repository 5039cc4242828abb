from __future__ import annotations

from pathlib import Path

import pytest

from snaplru.config import (
    DEFAULT_CONFIG_TOML,
    default_config,
    find_project_root,
    load_config,
)
from snaplru.errors import SnapLRUConfigError


def _write_config(root: Path, text: str) -> Path:
    p = root / "snaplru.toml"
    p.write_text(text, encoding="utf-8")
    return p


def test_load_config_defaults_with_minimal_file(tmp_path: Path) -> None:
    _write_config(tmp_path, "version = 1\n")
    cfg = load_config(root=tmp_path)
    assert cfg == default_config()
    assert cfg.cache.capacity == 128
    assert cfg.cache.trigger == "count"
    assert cfg.logging.level == "WARNING"


def test_default_config_toml_round_trips(tmp_path: Path) -> None:
    _write_config(tmp_path, DEFAULT_CONFIG_TOML)
    assert load_config(root=tmp_path) == default_config()


def test_load_config_overrides_work(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "\n".join(
            [
                "version = 1",
                "",
                "[cache]",
                "capacity = 0",
                'trigger = "clock"',
                "",
                "[logging]",
                'level = "debug"',
                "",
            ]
        ),
    )
    cfg = load_config(root=tmp_path)
    assert cfg.cache.capacity == 0
    assert cfg.cache.trigger == "clock"
    assert cfg.logging.level == "DEBUG"


def test_load_config_accepts_explicit_path(tmp_path: Path) -> None:
    p = tmp_path / "elsewhere.toml"
    p.write_text("version = 1\n[cache]\ncapacity = 7\n", encoding="utf-8")
    assert load_config(config_path=p).cache.capacity == 7


@pytest.mark.parametrize(
    "text",
    [
        "version = \n",
        "[cache]\ncapacity = 3\n",
        "version = 2\n",
        'version = "1"\n',
        "version = 1\ncache = 3\n",
        'version = 1\n[cache]\ncapacity = "big"\n',
        "version = 1\n[cache]\ncapacity = true\n",
        'version = 1\n[cache]\ntrigger = "fifo"\n',
        'version = 1\n[logging]\nlevel = "LOUD"\n',
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    _write_config(tmp_path, text)
    with pytest.raises(SnapLRUConfigError):
        load_config(root=tmp_path)


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(SnapLRUConfigError, match="Missing snaplru.toml"):
        load_config(config_path=tmp_path / "snaplru.toml")


def test_find_project_root_success(tmp_path: Path) -> None:
    _write_config(tmp_path, "version = 1\n")
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)

    assert find_project_root(deep) == tmp_path.resolve()
    some_file = deep / "trace.txt"
    some_file.write_text("size\n", encoding="utf-8")
    assert find_project_root(some_file) == tmp_path.resolve()


def test_find_project_root_failure(tmp_path: Path) -> None:
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    with pytest.raises(SnapLRUConfigError):
        find_project_root(deep)

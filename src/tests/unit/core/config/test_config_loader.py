# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from dataclasses import fields

import pytest

from diffcover.context import GlobalConfig
from diffcover.core.config.config_loader import ConfigLoader
from diffcover.core.exceptions import ConfigurationError

ENV_PREFIX = "DIFFCOVER_TEST_"


@pytest.fixture
def paths(tmp_path):
    return {
        "local": tmp_path / "local.toml",
        "global": tmp_path / "global.toml",
        "custom": tmp_path / "custom.toml",
    }


def _load(paths, input_args=None, custom=None):
    return ConfigLoader.get_full_config(
        GlobalConfig,
        input_args or {},
        paths["local"],
        ENV_PREFIX,
        paths["global"],
        custom,
    )


def test_defaults_when_nothing_is_set(paths):
    config, sources, used_defaults = _load(paths)

    assert config == GlobalConfig()
    assert sources == []
    assert used_defaults


def test_priority_order(paths, monkeypatch):
    paths["global"].write_text("verbose = true\nsilent = true\nmax_hunk_lines = 10\n")
    paths["local"].write_text("silent = false\n")
    monkeypatch.setenv(ENV_PREFIX + "MAX_HUNK_LINES", "50")

    config, sources, _ = _load(paths, input_args={"skip_generated": False})

    assert config.verbose is True
    assert config.silent is False
    assert config.max_hunk_lines == 50
    assert config.skip_generated is False
    assert sources == ["Input Args", "Local Config", "Environment Variables", "Global Config"]


def test_custom_config_beats_local(paths):
    paths["local"].write_text("max_hunk_lines = 10\n")
    paths["custom"].write_text("max_hunk_lines = 99\n")

    config, sources, _ = _load(paths, custom=paths["custom"])

    assert config.max_hunk_lines == 99
    assert sources == ["Custom Config"]


def test_missing_custom_config_raises(paths):
    with pytest.raises(ConfigurationError, match="Custom config not found"):
        _load(paths, custom=paths["custom"])


def test_invalid_value_raises(paths):
    paths["local"].write_text('max_hunk_lines = "lots"\n')

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        _load(paths)


def test_broken_toml_is_ignored(paths):
    paths["local"].write_text("this is not = = toml")

    assert ConfigLoader.load_toml(paths["local"]) == {}


def test_load_env_strips_prefix_and_lowercases(monkeypatch):
    monkeypatch.setenv(ENV_PREFIX + "SKIP_GENERATED", "false")

    assert ConfigLoader.load_env(ENV_PREFIX)["skip_generated"] == "false"


def test_global_config_holds_only_settings():
    assert [field.name for field in fields(GlobalConfig)] == [
        "verbose",
        "silent",
        "skip_generated",
        "max_hunk_lines",
    ]
    assert not hasattr(GlobalConfig, "descriptions")

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

import os
import tomllib
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from diffcover.core.exceptions import ConfigurationError


class ConfigLoader:
    """Handles loading and merging configuration from multiple sources into a unified model."""

    @staticmethod
    def get_full_config(
        config_model: type,
        input_args: dict,
        local_config_path: Path,
        env_app_prefix: str,
        global_config_path: Path,
        custom_config_path: Path | None = None,
    ):
        """Merges configuration from multiple sources with priority: input args, custom config, local config, environment variables, global config."""

        source_names = [
            "Input Args",
            "Local Config",
            "Environment Variables",
            "Global Config",
        ]
        sources = [
            input_args,
            ConfigLoader.load_toml(local_config_path),
            ConfigLoader.load_env(env_app_prefix),
            ConfigLoader.load_toml(global_config_path),
        ]

        if custom_config_path is not None:
            if not custom_config_path.exists():
                raise ConfigurationError(
                    f"Custom config not found: {custom_config_path}",
                    "Check the path passed to --custom-config",
                )
            # custom config is priority #2
            sources.insert(1, ConfigLoader.load_toml(custom_config_path))
            source_names.insert(1, "Custom Config")

        for name, source in zip(source_names, sources, strict=True):
            logger.debug(f"{name=} {source=}")

        type_adapter = TypeAdapter(config_model)
        built_model, used_indexes, used_defaults = ConfigLoader.build(
            config_model, type_adapter, sources
        )

        source_names = [source_names[i] for i in sorted(used_indexes)]

        return built_model, source_names, used_defaults

    @staticmethod
    def load_toml(path: Path):
        """Loads configuration data from a TOML file, returning an empty dict if the file doesn't exist or is invalid."""

        if not path.exists():
            logger.debug(f"{path} does not exist")
            return {}

        data = {}
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Failed to load {path}: {e}")

        return data

    @staticmethod
    def load_env(app_prefix: str):
        """Extracts configuration values from environment variables prefixed with the app prefix, converting keys to lowercase."""

        data = {}
        for k, v in os.environ.items():
            if k.lower().startswith(app_prefix.lower()):
                key_clean = k[len(app_prefix) :].lower()
                data[key_clean] = v

        return data

    @staticmethod
    def build(
        config_model: type,
        type_adapter: TypeAdapter,
        sources: list[dict],
    ):
        """Builds the configuration model by merging data from sources in priority order, filling in defaults where needed."""

        remaining_keys = set(config_model.__dataclass_fields__.keys())

        final_data = {}
        used_indices = set()

        # Iterate in order of highest-lowest preference
        for i, d in enumerate(sources):
            if not remaining_keys:
                break

            contributions = d.keys() & remaining_keys

            if contributions:
                used_indices.add(i)

                for key in contributions:
                    final_data[key] = d[key]

                # Remove found keys so we don't look for them in lower priority sources
                remaining_keys -= contributions

        try:
            model = type_adapter.validate_python(final_data)
        except ValidationError as e:
            raise ConfigurationError("Invalid configuration", str(e)) from e

        # built model, what sources we used, and if we used any defaults
        return model, used_indices, bool(remaining_keys)

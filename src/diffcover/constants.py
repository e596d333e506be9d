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

import re
from pathlib import Path

from platformdirs import user_config_dir, user_log_path

APP_NAME = "diffcover"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = "diffcoverconfig.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

DEV_NULL = "/dev/null"
UNKNOWN_FILENAME = "unknown"

# lockfiles never carry reviewable changes
IGNORED_FILES = frozenset(
    {
        "pnpm-lock.yaml",
        "package-lock.json",
        "yarn.lock",
        "bun.lockb",
        "Cargo.lock",
        "poetry.lock",
        "Gemfile.lock",
        "composer.lock",
    }
)

AUTO_GENERATED_PATTERNS = (
    re.compile(r"\.generated\.(ts|js|tsx|jsx)$"),
    re.compile(r"\.g\.(ts|js)$"),
    # build outputs
    re.compile(r"\.min\.(js|css)$"),
    re.compile(r"\.bundle\.(js|css)$"),
    # source maps
    re.compile(r"\.map$"),
    re.compile(r"\.d\.ts$"),
    # timestamped migrations
    re.compile(r"migrations/\d{10,}.*\.(sql|ts|js)$"),
    # test snapshots
    re.compile(r"__snapshots__/"),
    re.compile(r"\.snap$"),
)

UNCOVERED_SUCCESS_MESSAGE = "All hunks have been fully explained."
UNCOVERED_HEADER_MESSAGE = "The following portions were not explained:"

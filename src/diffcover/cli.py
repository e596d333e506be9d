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

from pathlib import Path

import typer
from dotenv import load_dotenv
from loguru import logger

from diffcover.commands import coverage, hunks, split
from diffcover.constants import (
    APP_NAME,
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from diffcover.context import GlobalConfig, GlobalContext
from diffcover.core.config.config_loader import ConfigLoader
from diffcover.core.exceptions import handle_diffcover_exception
from diffcover.core.logging.logging import setup_logger
from diffcover.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    version_callback,
)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: Index diff hunks, split them, and track what a review explained",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

app.command(name="hunks")(hunks.main)
app.command(name="split")(split.main)
app.command(name="coverage")(coverage.main)


def setup_config_args(**kwargs):
    config_args = {}

    for key, item in kwargs.items():
        if item is not None:
            config_args[key] = item

    return config_args


def load_global_config(custom_config: str | None, **input_args):
    return ConfigLoader.get_full_config(
        GlobalConfig,
        setup_config_args(**input_args),
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        Path(custom_config) if custom_config else None,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for diffcover live) and exit",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not output any log text to the console.",
    ),
    skip_generated: bool | None = typer.Option(
        None,
        "--skip-generated/--keep-generated",
        help="Leave out auto-generated files (minified bundles, source maps, snapshots).",
    ),
    max_hunk_lines: int | None = typer.Option(
        None,
        "--max-hunk-lines",
        help="Flag hunks longer than this many lines in listings.",
    ),
) -> None:
    """
    Global setup callback. Initialize global context/config used by commands
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    with handle_diffcover_exception(exit_on_fail=True):
        config, used_configs, used_defaults = load_global_config(
            custom_config,
            verbose=verbose,
            silent=silent,
            skip_generated=skip_generated,
            max_hunk_lines=max_hunk_lines,
        )

    setup_logger(ctx.invoked_subcommand, debug=config.verbose, silent=config.silent)

    if not used_configs and used_defaults:
        logger.debug("No configuration found. Using default values.")

    logger.debug(f"Used {used_configs} to build global context.")
    ctx.obj = GlobalContext.from_global_config(config)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()

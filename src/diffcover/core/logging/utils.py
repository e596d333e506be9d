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

import contextlib
from time import perf_counter

from loguru import logger


@contextlib.contextmanager
def time_block(block_name: str):
    """
    A context manager to time the execution of a code block and log the result.
    """

    logger.debug(f"Starting {block_name}")
    start_time = perf_counter()

    try:
        yield
    finally:
        end_time = perf_counter()
        duration_ms = int((end_time - start_time) * 1000)

        logger.debug(
            f"Finished {block_name}. Timing(ms)={duration_ms}",
        )


def log_hunks(process_step: str, hunks) -> None:
    unique_files = {hunk.filename for hunk in hunks}

    logger.debug(
        "{process_step}: hunks={count} files={files}",
        process_step=process_step,
        count=len(hunks),
        files=len(unique_files),
    )

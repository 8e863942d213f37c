"""Runs the project build before any screenshots are diffed."""

from __future__ import annotations

import asyncio
import logging
import time

from visual_ci.errors import BuildError
from visual_ci.models.config import BuildConfig

logger = logging.getLogger(__name__)


class ShellBuild:
    """Runs the configured build command in a shell."""

    def __init__(self, config: BuildConfig):
        self.config = config

    async def run(self) -> None:
        command = self.config.command
        if not command:
            logger.info("No build command configured, skipping build")
            return

        logger.info("Building: %s", command)
        start = time.time()
        process = await asyncio.create_subprocess_shell(command, cwd=self.config.cwd)
        returncode = await process.wait()
        if returncode != 0:
            raise BuildError(f"Build command failed with exit code {returncode}: {command}")
        logger.info("Build complete in %.1fs", time.time() - start)

"""Diff orchestrator — coordinates build, diff passes, status publication and exit code."""

from __future__ import annotations

import asyncio
import logging
import time

from visual_ci.collaborators import BuildSource, ReportController, ResultComparer, StatusReporter
from visual_ci.constants import ExitCode
from visual_ci.diff.branch_policy import is_stable_reference_branch
from visual_ci.diff.exit_code import get_exit_code
from visual_ci.diff.merge import copy_and_compare_screenshots
from visual_ci.diff.testability import check_is_testable
from visual_ci.errors import ScreenshotTestError
from visual_ci.models.config import RunnerConfig
from visual_ci.models.report_data import ReportData, Screenshot

logger = logging.getLogger(__name__)


class DiffOrchestrator:
    """Runs the screenshot tests for one pull request build.

    The primary pass captures and diffs against the configured diff base.
    If it finds nothing failure-worthy, the captured screenshots are diffed
    again against the stable reference branch for the report.
    """

    def __init__(
        self,
        config: RunnerConfig,
        build: BuildSource,
        report_controller: ReportController,
        image_differ: ResultComparer,
        status_reporter: StatusReporter,
    ):
        self.config = config
        self.build = build
        self.report_controller = report_controller
        self.image_differ = image_differ
        self.status_reporter = status_reporter
        self.primary_report: ReportData | None = None
        self.reference_report: ReportData | None = None

    def run_sync(self) -> ExitCode:
        return asyncio.run(self.run())

    async def run(self) -> ExitCode:
        start = time.time()
        diff_base = self.config.diff_base

        # Build failures are not diff failures: no wrapping, no status
        await self.build.run()

        logger.info("--- Diffing against %s ---", diff_base)
        report_data = await self.diff_pass(diff_base)
        self.primary_report = report_data

        testability = check_is_testable(report_data)
        if not testability.is_testable:
            logger.warning(
                "PR #%s does not contain any testable source file changes. "
                "Skipping screenshot tests.",
                testability.pr_number,
            )
            return ExitCode.OK

        await self.status_reporter.publish_status(report_data)

        # The stable branch is never failed on, nor compared against itself
        if is_stable_reference_branch(diff_base, self.config.stable_branch):
            logger.info("%d screenshot changes found against stable branch %s (%.1fs)",
                        report_data.screenshots.num_changes(), diff_base, time.time() - start)
            return ExitCode.OK

        exit_code = get_exit_code(report_data, self.config.is_online())
        if exit_code != ExitCode.OK:
            logger.info("%d screenshot changes found against %s (%.1fs)",
                        report_data.screenshots.num_changes(), diff_base, time.time() - start)
            return exit_code

        captured = report_data.screenshots.all_captured()
        stable_branch = self.config.stable_branch
        logger.info("--- Diffing %d captured screenshots against %s ---", len(captured), stable_branch)
        reference_report = await self.diff_pass(stable_branch, captured)
        self.reference_report = reference_report
        logger.info("%d screenshots differ from %s",
                    reference_report.screenshots.num_changes(), stable_branch)

        logger.info("=== Screenshot tests complete in %.1fs ===", time.time() - start)
        return ExitCode.OK

    async def diff_pass(
        self, diff_base: str, captured_screenshots: list[Screenshot] | None = None,
    ) -> ReportData:
        """Run one diff pass. Reuses captured_screenshots instead of capturing when given."""
        reuse = bool(captured_screenshots)
        controller = self.report_controller

        try:
            report_data = await controller.init_for_capture(diff_base)

            if not reuse:
                await self.status_reporter.publish_status(report_data)

            await controller.upload_all_assets(report_data)

            if not reuse:
                await controller.capture_all_pages(report_data)
                await self.status_reporter.publish_status(report_data)
            else:
                await copy_and_compare_screenshots(
                    report_data, captured_screenshots, self.image_differ,
                )

            controller.populate_maps(report_data)

            await controller.upload_all_images(report_data)
            await controller.generate_report_page(report_data)

            if not reuse:
                await self.status_reporter.publish_status(report_data)
        except Exception as err:
            logger.error("Screenshot diff against %s failed: %s", diff_base, err)
            try:
                await self.status_reporter.publish_error()
            except Exception as status_err:
                logger.error("Could not publish error status: %s", status_err)
            raise ScreenshotTestError("Failed to run screenshot tests", err) from err

        return report_data

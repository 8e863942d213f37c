"""Interfaces of the collaborators the diff orchestrator drives."""

from __future__ import annotations

from typing import Protocol

from visual_ci.models.report_data import DiffImageResult, ReportData, ReportMeta, Screenshot


class BuildSource(Protocol):
    async def run(self) -> None:
        """Build the project. Raises on failure."""
        ...


class ReportController(Protocol):
    """Owns the capture, upload and report-page lifecycle of one diff pass."""

    async def init_for_capture(self, diff_base: str) -> ReportData: ...

    async def upload_all_assets(self, report_data: ReportData) -> None: ...

    async def capture_all_pages(self, report_data: ReportData) -> None: ...

    def populate_maps(self, report_data: ReportData) -> None: ...

    async def upload_all_images(self, report_data: ReportData) -> None: ...

    async def generate_report_page(self, report_data: ReportData) -> None: ...


class ResultComparer(Protocol):
    async def compare_one_screenshot(
        self, meta: ReportMeta, screenshot: Screenshot,
    ) -> DiffImageResult: ...


class StatusReporter(Protocol):
    async def publish_status(self, report_data: ReportData) -> None: ...

    async def publish_error(self) -> None: ...

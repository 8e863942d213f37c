"""Publishes pull request commit statuses derived from report state."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import requests

from visual_ci.errors import StatusPublishError
from visual_ci.models.config import GitHubConfig
from visual_ci.models.report_data import CaptureState, ReportData

logger = logging.getLogger(__name__)

# GitHub caps status descriptions at 140 characters
MAX_DESCRIPTION_LENGTH = 140


@dataclass
class PullRequestStatus:
    state: str  # pending, success, failure, error
    description: str
    target_url: str | None = None


def _diff_base_label(report_data: ReportData) -> str:
    meta = report_data.meta
    for diff_base in (meta.golden_diff_base, meta.diff_base):
        if diff_base and diff_base.input_string:
            return diff_base.input_string
    return "golden screenshots"


def derive_pull_request_status(report_data: ReportData) -> PullRequestStatus:
    """Map the current report state to a commit status.

    Before the report page exists the status is pending and tracks capture
    progress. Afterwards it is success or failure depending on whether any
    screenshot changed, was added, or was removed.
    """
    screenshots = report_data.screenshots
    report_url = report_data.meta.report_html_url
    base = _diff_base_label(report_data)

    if report_url:
        num_changes = screenshots.num_changes()
        if num_changes > 0:
            return PullRequestStatus(
                state="failure",
                description=f"{num_changes} screenshots differ from {base}",
                target_url=report_url,
            )
        return PullRequestStatus(
            state="success",
            description=f"All {len(screenshots.unchanged)} screenshots match {base}",
            target_url=report_url,
        )

    num_total = len(screenshots.runnable) or len(screenshots.actual)
    if num_total == 0:
        return PullRequestStatus(state="pending", description="Preparing screenshot tests")

    num_captured = sum(
        1 for s in screenshots.actual
        if s.capture_state in (CaptureState.DIFFING, CaptureState.DONE)
    )
    percent = num_captured * 100 // num_total
    return PullRequestStatus(
        state="pending",
        description=f"{num_captured} of {num_total} screenshots captured ({percent}%)",
    )


class GitHubStatusReporter:
    """Posts commit statuses through the GitHub REST API.

    When no token, repository or commit SHA is configured (local runs),
    every publish call is a no-op.
    """

    def __init__(self, config: GitHubConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()

    async def publish_status(self, report_data: ReportData) -> None:
        await self._publish(derive_pull_request_status(report_data))

    async def publish_error(self) -> None:
        await self._publish(PullRequestStatus(
            state="error",
            description="Error running screenshot tests",
        ))

    async def _publish(self, status: PullRequestStatus) -> None:
        if not self.config.is_enabled():
            logger.debug("GitHub status not configured, skipping: [%s] %s",
                         status.state, status.description)
            return
        await asyncio.to_thread(self._post_status, status)

    def _post_status(self, status: PullRequestStatus) -> None:
        url = (f"{self.config.api_url.rstrip('/')}/repos/"
               f"{self.config.repository}/statuses/{self.config.commit_sha}")
        payload = {
            "state": status.state,
            "description": status.description[:MAX_DESCRIPTION_LENGTH],
            "context": self.config.status_context,
        }
        if status.target_url:
            payload["target_url"] = status.target_url

        logger.info("Setting PR status: [%s] %s", status.state, status.description)
        try:
            response = self.session.post(
                url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.config.token}",
                    "Accept": "application/vnd.github+json",
                },
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("GitHub status API error: %s", e)
            raise StatusPublishError(f"Failed to set PR status '{status.state}': {e}") from e

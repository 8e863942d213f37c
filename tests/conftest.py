"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest

from visual_ci.models.config import BuildConfig, GitHubConfig, RunnerConfig
from visual_ci.models.report_data import (
    DiffBase,
    DiffImageResult,
    GitRevision,
    GitRevisionType,
    ReportData,
    ReportMeta,
    ScreenshotLists,
)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def runner_config() -> RunnerConfig:
    """Create a runner config for a feature branch, connected to the network."""
    cfg = RunnerConfig(
        diff_base="origin/feature/button-ripple",
        stable_branch="origin/master",
        build=BuildConfig(command=None),
        github=GitHubConfig(),
    )
    cfg._online = True
    return cfg


@pytest.fixture
def github_config() -> GitHubConfig:
    """Create a fully enabled GitHub config."""
    return GitHubConfig(
        api_url="https://api.github.test",
        repository="acme/widgets",
        commit_sha="abc123",
        token="test-token",
    )


# ============================================================================
# Report Data Fixtures
# ============================================================================


@pytest.fixture
def pr_revision() -> GitRevision:
    """A CI pull request revision with testable file changes."""
    return GitRevision(
        type=GitRevisionType.CI_PULL_REQUEST,
        input_string="origin/feature/button-ripple",
        pr_number=1234,
        pr_file_paths=["packages/mdc-button/_mixins.scss"],
    )


@pytest.fixture
def report_data() -> ReportData:
    """An empty report with no golden diff base."""
    return ReportData(meta=ReportMeta(), screenshots=ScreenshotLists())


@pytest.fixture
def pr_report_data(pr_revision: GitRevision) -> ReportData:
    """An empty report for a CI pull request."""
    return ReportData(
        meta=ReportMeta(golden_diff_base=DiffBase(
            input_string="origin/feature/button-ripple",
            git_revision=pr_revision,
        )),
    )


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_build() -> Mock:
    build = Mock()
    build.run = AsyncMock()
    return build


@pytest.fixture
def mock_controller() -> Mock:
    """Create a mock report controller that returns an empty report."""
    controller = Mock()
    controller.init_for_capture = AsyncMock(return_value=ReportData())
    controller.upload_all_assets = AsyncMock()
    controller.capture_all_pages = AsyncMock()
    controller.populate_maps = Mock()
    controller.upload_all_images = AsyncMock()
    controller.generate_report_page = AsyncMock()
    return controller


@pytest.fixture
def mock_differ() -> Mock:
    """Create a mock image differ that reports every screenshot as unchanged."""
    differ = Mock()
    differ.compare_one_screenshot = AsyncMock(
        return_value=DiffImageResult(has_changed=False, diff_image_file="diff.png")
    )
    return differ


@pytest.fixture
def mock_status_reporter() -> Mock:
    reporter = Mock()
    reporter.publish_status = AsyncMock()
    reporter.publish_error = AsyncMock()
    return reporter

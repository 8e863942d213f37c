"""Report data structures shared by the diff passes, the differ, and status reporting."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GitRevisionType(str, Enum):
    LOCAL_BRANCH = "local_branch"
    REMOTE_BRANCH = "remote_branch"
    REMOTE_TAG = "remote_tag"
    COMMIT = "commit"
    CI_PULL_REQUEST = "ci_pull_request"


class GitRevision(BaseModel):
    type: GitRevisionType
    input_string: str = ""
    commit: str = ""
    branch: str = ""
    tag: str = ""
    pr_number: Optional[int] = None
    pr_file_paths: list[str] = Field(default_factory=list)


class DiffBase(BaseModel):
    input_string: str = ""
    local_file_path: Optional[str] = None
    public_url: Optional[str] = None
    git_revision: Optional[GitRevision] = None


class ReportMeta(BaseModel):
    start_time_iso: str = ""
    diff_base: Optional[DiffBase] = None  # what the pass was asked to compare against
    golden_diff_base: Optional[DiffBase] = None  # resolved provenance of the golden screenshots
    report_html_url: Optional[str] = None


class UserAgent(BaseModel):
    alias: str
    browser_name: str = ""
    browser_version: str = ""


class CaptureState(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    DIFFING = "diffing"
    DONE = "done"
    SKIPPED = "skipped"


class DiffImageResult(BaseModel):
    """Outcome of comparing one screenshot against its golden image."""
    model_config = ConfigDict(frozen=True)

    has_changed: bool
    diff_image_file: Optional[str] = None
    changed_pixel_count: int = 0
    changed_pixel_fraction: float = 0.0


class Screenshot(BaseModel):
    """One rendered page variant, identified by HTML file path and user agent alias.

    Instances are shared by reference between the category lists of a
    ReportData, so updates made during comparison are visible everywhere.
    """
    html_file_path: str
    user_agent: UserAgent
    expected_image_file: Optional[str] = None
    actual_html_file: Optional[str] = None
    actual_image_file: Optional[str] = None
    capture_state: CaptureState = CaptureState.QUEUED
    diff_image_result: Optional[DiffImageResult] = None
    diff_image_file: Optional[str] = None

    @property
    def key(self) -> tuple[str, str]:
        return self.html_file_path, self.user_agent.alias


class ScreenshotLists(BaseModel):
    expected: list[Screenshot] = Field(default_factory=list)
    actual: list[Screenshot] = Field(default_factory=list)
    runnable: list[Screenshot] = Field(default_factory=list)
    changed: list[Screenshot] = Field(default_factory=list)
    added: list[Screenshot] = Field(default_factory=list)
    removed: list[Screenshot] = Field(default_factory=list)
    unchanged: list[Screenshot] = Field(default_factory=list)
    comparable: list[Screenshot] = Field(default_factory=list)

    def num_changes(self) -> int:
        return len(self.changed) + len(self.added) + len(self.removed)

    def all_captured(self) -> list[Screenshot]:
        """Every categorized screenshot from a capture pass, regardless of category."""
        return [*self.changed, *self.added, *self.removed, *self.unchanged]


class ReportData(BaseModel):
    meta: ReportMeta = Field(default_factory=ReportMeta)
    screenshots: ScreenshotLists = Field(default_factory=ScreenshotLists)

"""Decides whether a pull request needs screenshot tests at all."""

from __future__ import annotations

from dataclasses import dataclass

from visual_ci.models.report_data import GitRevisionType, ReportData


@dataclass
class PullRequestTestability:
    is_testable: bool
    pr_number: int | None = None


def check_is_testable(report_data: ReportData) -> PullRequestTestability:
    """A CI pull request that changed no testable files is skipped.

    Runs without a golden git revision (local runs, no PR context) are
    always testable.
    """
    golden = report_data.meta.golden_diff_base
    revision = golden.git_revision if golden else None
    if revision is None:
        return PullRequestTestability(is_testable=True, pr_number=None)

    should_skip = (
        revision.type == GitRevisionType.CI_PULL_REQUEST
        and len(revision.pr_file_paths) == 0
    )
    return PullRequestTestability(is_testable=not should_skip, pr_number=revision.pr_number)

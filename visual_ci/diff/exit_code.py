"""Exit code derivation for a finished diff pass."""

from __future__ import annotations

from visual_ci.constants import ExitCode
from visual_ci.models.report_data import ReportData


def get_exit_code(report_data: ReportData, is_online: bool) -> ExitCode:
    """CHANGES_FOUND only when connected and something changed, was added, or was removed.

    Offline runs never fail on detected differences.
    """
    num_changes = report_data.screenshots.num_changes()
    if is_online and num_changes > 0:
        return ExitCode.CHANGES_FOUND
    return ExitCode.OK

"""Exception types raised by the screenshot test runner."""

from __future__ import annotations


class VisualCIError(Exception):
    """Base class for runner errors."""


class BuildError(VisualCIError):
    """The project build failed before any diffing started."""


class StatusPublishError(VisualCIError):
    """The pull request status could not be published."""


class ScreenshotTestError(VisualCIError):
    """A diff pass failed. The original exception is chained as __cause__."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"

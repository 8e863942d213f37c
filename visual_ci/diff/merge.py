"""Concurrent comparison of already-captured screenshots against another diff base."""

from __future__ import annotations

import asyncio
import logging

from visual_ci.collaborators import ResultComparer
from visual_ci.models.report_data import DiffImageResult, ReportData, Screenshot

logger = logging.getLogger(__name__)


def _match_pairs(
    baseline: list[Screenshot], captured: list[Screenshot],
) -> list[tuple[Screenshot, Screenshot]]:
    pairs = []
    for base_shot in baseline:
        for captured_shot in captured:
            if captured_shot.key == base_shot.key:
                pairs.append((base_shot, captured_shot))
    return pairs


async def copy_and_compare_screenshots(
    report_data: ReportData,
    captured_screenshots: list[Screenshot],
    differ: ResultComparer,
) -> None:
    """Compare every baseline screenshot that has a captured counterpart.

    The baseline set is ``report_data.screenshots.actual``. Matching pairs
    share an HTML file path and user agent alias. Capture artifacts are
    copied onto the baseline screenshot in place, all comparisons run
    concurrently, and results are filed into changed/unchanged/comparable
    only after every comparison has succeeded. If any comparison raises,
    the others are cancelled and nothing is filed.
    """
    screenshots = report_data.screenshots
    already_compared = {id(s) for s in screenshots.comparable}

    pairs = []
    for base_shot, captured_shot in _match_pairs(screenshots.actual, captured_screenshots):
        if id(base_shot) in already_compared:
            logger.debug("Already compared %s > %s, skipping",
                         base_shot.html_file_path, base_shot.user_agent.alias)
            continue
        pairs.append((base_shot, captured_shot))
        already_compared.add(id(base_shot))

    if not pairs:
        logger.info("No captured screenshots to compare")
        return

    async def _compare_one(base_shot: Screenshot, captured_shot: Screenshot) -> DiffImageResult:
        logger.debug("Comparing %s > %s...", base_shot.html_file_path, base_shot.user_agent.alias)
        base_shot.actual_html_file = captured_shot.actual_html_file
        base_shot.actual_image_file = captured_shot.actual_image_file
        base_shot.capture_state = captured_shot.capture_state
        result = await differ.compare_one_screenshot(report_data.meta, base_shot)
        logger.debug("Compared %s > %s (changed=%s)",
                     base_shot.html_file_path, base_shot.user_agent.alias, result.has_changed)
        return result

    tasks = [asyncio.ensure_future(_compare_one(b, c)) for b, c in pairs]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    # Single writer: file results in baseline order once everything settled
    for (base_shot, _), result in zip(pairs, results):
        base_shot.diff_image_result = result
        base_shot.diff_image_file = result.diff_image_file
        if result.has_changed:
            screenshots.changed.append(base_shot)
        else:
            screenshots.unchanged.append(base_shot)
        screenshots.comparable.append(base_shot)

    num_changed = sum(1 for r in results if r.has_changed)
    logger.info("Done comparing %d screenshots (%d changed)", len(results), num_changed)

"""Fill an application form using the fields the analyzer detected."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from playwright.sync_api import Error as PlaywrightError

from job_hunter.log import get_logger
from job_hunter.models import TRUTHY, FormField, JobContext, PageAnalysis, opt_str

log = get_logger(__name__)

MAX_TEXT_CHARS = 3000


@dataclass
class FillResult:
    success: bool = True
    fields_filled: int = 0
    fields_skipped: int = 0
    errors: list[str] = field(default_factory=list)


def _visible(locator) -> bool:
    return locator.count() > 0 and locator.first.is_visible()


def _fill_one(page, f: FormField, value: str) -> None:
    loc = page.locator(f.selector).first
    if f.type == "file":
        if not Path(value).is_file():
            raise FileNotFoundError(value)
        loc.set_input_files(value)
    elif f.type == "select":
        try:
            loc.select_option(label=value)
        except PlaywrightError:
            loc.select_option(value=value)
    elif f.type == "checkbox":
        if value.strip().lower() in TRUTHY:
            loc.check()
        else:
            loc.uncheck()
    elif f.type == "radio":
        option = page.locator(f'{f.selector}[value="{value}"]')
        if _visible(option):
            option.first.check()
        else:
            page.get_by_label(value, exact=True).first.check()
    else:
        loc.fill(value[:MAX_TEXT_CHARS])


def fill_form(
    page,
    analyzer,
    profile: Mapping[str, Any],
    job_context: JobContext,
    analysis: PageAnalysis | None = None,
) -> FillResult:
    """Fill every detected field; one bad field never stops the others.

    Browser errors and missing resume files are recorded per field. Provider
    failures from the analyzer propagate.
    """
    result = FillResult()
    if analysis is None:
        analysis = analyzer.analyze_page(page)

    if not analysis.form_fields:
        result.success = False
        result.errors.append("No form fields detected")
        return result

    log.info("Found %d form fields to fill", len(analysis.form_fields))
    for f in analysis.form_fields:
        try:
            if not _visible(page.locator(f.selector)):
                log.debug("Not visible: %s", f.selector)
                result.fields_skipped += 1
                continue

            value = f.value or opt_str(analyzer.determine_field_value(f, profile, job_context))
            if not value:
                if f.required:
                    log.warning("No value for required field: %s", f.label)
                result.fields_skipped += 1
                continue

            _fill_one(page, f, value)
            result.fields_filled += 1
            log.info("  ✓ %s", f.label or f.selector)
        except (PlaywrightError, OSError) as exc:
            msg = f"Failed to fill {f.label or f.selector}: {str(exc)[:80]}"
            result.errors.append(msg)
            log.warning("  ✗ %s", msg)

    if result.errors and result.fields_filled == 0:
        result.success = False
    return result

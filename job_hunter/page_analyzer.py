"""Vision-model page analysis, job matching and form-field answers.

Every public method is one request/response round trip against the
OpenAI-compatible client handed to the constructor. Nothing is retried or
cached: SDK failures surface as ProviderError, unusable answers as
ResponseFormatError.
"""
from __future__ import annotations

import base64
import json
import re
from typing import Any, Mapping

from openai import OpenAI, OpenAIError

from job_hunter.config import DEFAULT_MODEL, DEFAULT_VISION_MODEL, create_llm_client, get_llm_settings
from job_hunter.errors import ProviderError, ResponseFormatError
from job_hunter.log import get_logger
from job_hunter.models import (
    FormField,
    JobContext,
    MatchResult,
    PageAnalysis,
    UserProfile,
    direct_value,
    str_list,
)

log = get_logger(__name__)

MAX_HTML_CHARS = 15_000
MAX_JOB_DESCRIPTION_CHARS = 3_000
MAX_PROFILE_CHARS = 1_500
UNKNOWN_MARKER = "UNKNOWN"

_FENCE_RE = re.compile(r"```(?:[\w-]+[ \t]*\n)?\s*([\s\S]*?)```")

# ── Prompts ─────────────────────────────────────────────────────────────

_PAGE_PROMPT = """\
Analyze this webpage screenshot and the HTML below. Determine:

1. Page type: is this a job listing page, job details page, application form, login page, or other?
2. If job listings: identify job titles and their CSS selectors.
3. If application form: identify ALL form fields with their
   - CSS selector (be specific, use IDs when available)
   - field type (text, email, phone, file, select, checkbox, radio, textarea)
   - label/purpose
   - whether it is required
   - which user profile value should fill it (firstName, lastName, email, phone, resumePath, ...)
4. Identify submit/next/apply buttons with their selectors.
5. Note any login requirements or visible errors.

HTML (truncated):
{html}

Respond ONLY with JSON:
{{
  "pageType": "job_listing" | "job_details" | "application_form" | "login" | "other",
  "title": "page title",
  "jobs": [{{"title": "...", "selector": "...", "url": "..."}}],
  "formFields": [{{"selector": "...", "type": "...", "label": "...", "required": true, "profileMapping": "...", "options": []}}],
  "submitButton": "selector",
  "nextButton": "selector if multi-step",
  "loginRequired": false,
  "errors": ["any error messages visible"]
}}
"""

_MATCH_PROMPT = """\
Analyze how well this candidate matches the job.

JOB DESCRIPTION:
{description}

CANDIDATE PROFILE:
Skills: {skills}
Experience: {experience}
Education: {education}

Respond ONLY with JSON:
{{
  "score": 0-100,
  "analysis": "2-3 sentence explanation",
  "missingSkills": ["skills the job wants but the candidate lacks"],
  "strongMatches": ["areas where the candidate excels"]
}}
"""

_FIELD_PROMPT = """\
What should I fill in for this form field?

Field: {label} ({type})
{options}
Job: {title} at {company}

User profile:
{profile}

Respond with ONLY the value to fill, no explanation. For select/radio fields respond with the exact option text.
"""

_CAREERS_PROMPT = """\
What is the careers/jobs page URL for {company}?
{website}
Common patterns:
- careers.company.com
- company.com/careers
- jobs.company.com
- company.com/jobs
- company.greenhouse.io
- jobs.lever.co/company

Respond with ONLY the most likely URL, no explanation. If unknown, respond "{unknown}".
"""


# ── Response helpers ────────────────────────────────────────────────────


def _extract_json(text: str) -> dict[str, Any]:
    """Parse a JSON object from a model answer, tolerating code fences and chatter."""
    m = _FENCE_RE.search(text)
    raw = (m.group(1) if m else text).strip()
    start = raw.find("{")
    end = raw.rfind("}") + 1
    if start == -1 or end == 0:
        raise ResponseFormatError("Model did not return a JSON object", raw=text)
    try:
        data = json.loads(raw[start:end])
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"Model returned invalid JSON: {exc}", raw=text) from exc
    if not isinstance(data, dict):
        raise ResponseFormatError("Model JSON is not an object", raw=text)
    return data


def _clean_answer(text: str) -> str:
    """Strip quotes and code fences a model likes to wrap one-line answers in."""
    value = text.strip()
    m = _FENCE_RE.search(value)
    if m:
        value = m.group(1).strip()
    return value.strip("`").strip().strip('"').strip("'").strip()


class PageAnalyzer:
    def __init__(
        self,
        client: OpenAI,
        *,
        model: str = DEFAULT_MODEL,
        vision_model: str = DEFAULT_VISION_MODEL,
    ) -> None:
        self.client = client
        self.model = model
        self.vision_model = vision_model

    @classmethod
    def from_env(cls) -> PageAnalyzer:
        settings = get_llm_settings()
        return cls(
            create_llm_client(settings),
            model=settings.model,
            vision_model=settings.vision_model,
        )

    # ── Transport ───────────────────────────────────────────────────────

    def _complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        max_tokens: int,
        timeout: float | None,
        operation: str,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": 0.1,
        }
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            resp = self.client.chat.completions.create(**kwargs)
        except OpenAIError as exc:
            status = getattr(exc, "status_code", None)
            log.error("%s failed (%s): %s", operation, model, exc)
            raise ProviderError(
                f"{operation} request failed: {exc}",
                status_code=status,
                context={"operation": operation, "model": model},
            ) from exc

        if not resp.choices:
            raise ResponseFormatError(f"{operation}: provider returned no choices")
        content = resp.choices[0].message.content
        if content is None:
            raise ResponseFormatError(f"{operation}: provider returned no text content")
        return content

    # ── Operations ──────────────────────────────────────────────────────

    def analyze_page(self, page, *, timeout: float | None = None) -> PageAnalysis:
        """Screenshot the viewport of a live Playwright page and classify it."""
        screenshot = page.screenshot(type="png", full_page=False)
        image_b64 = base64.b64encode(screenshot).decode("ascii")
        html = page.content()[:MAX_HTML_CHARS]
        log.debug("Analyzing page %s (%d bytes screenshot, %d chars html)", page.url, len(screenshot), len(html))

        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": f"data:image/png;base64,{image_b64}"}},
                    {"type": "text", "text": _PAGE_PROMPT.format(html=html)},
                ],
            }
        ]
        raw = self._complete(
            messages, model=self.vision_model, max_tokens=4096, timeout=timeout, operation="analyze_page",
        )
        data = _extract_json(raw)
        try:
            analysis = PageAnalysis.from_dict(data)
        except (TypeError, ValueError, AttributeError) as exc:
            raise ResponseFormatError(f"analyze_page: mis-shaped answer: {exc}", raw=raw) from exc
        log.info(
            "Page %s → %s (%d fields, %d jobs)",
            page.url, analysis.page_type, len(analysis.form_fields), len(analysis.jobs),
        )
        return analysis

    def analyze_job_match(
        self,
        job_description: str,
        profile: UserProfile,
        *,
        timeout: float | None = None,
    ) -> MatchResult:
        prompt = _MATCH_PROMPT.format(
            description=job_description[:MAX_JOB_DESCRIPTION_CHARS],
            skills=", ".join(profile.skills),
            experience="; ".join(f"{e.title} at {e.company}" for e in profile.experience),
            education="; ".join(f"{e.degree} in {e.field}" for e in profile.education),
        )
        raw = self._complete(
            [{"role": "user", "content": prompt}],
            model=self.model, max_tokens=1024, timeout=timeout, operation="analyze_job_match",
        )
        data = _extract_json(raw)
        if "score" not in data:
            raise ResponseFormatError("analyze_job_match: answer has no score", raw=raw)
        try:
            score = float(data["score"])
        except (TypeError, ValueError) as exc:
            raise ResponseFormatError(f"analyze_job_match: non-numeric score {data['score']!r}", raw=raw) from exc

        try:
            result = MatchResult(
                score=score,
                analysis=str(data.get("analysis") or ""),
                missing_skills=str_list(data.get("missingSkills")),
                strong_matches=str_list(data.get("strongMatches")),
            )
        except TypeError as exc:
            raise ResponseFormatError(f"analyze_job_match: mis-shaped answer: {exc}", raw=raw) from exc
        log.info("Job match score %.0f (%d missing skills)", result.score, len(result.missing_skills))
        return result

    def determine_field_value(
        self,
        field: FormField,
        profile: Mapping[str, Any],
        job_context: JobContext,
        *,
        timeout: float | None = None,
    ) -> str:
        """Pick the value to type into one form field."""
        direct = direct_value(field, profile)
        if direct:
            log.debug("Field %r filled from profile.%s", field.label, field.profile_mapping)
            return direct

        options = f"Options: {', '.join(field.options)}\n" if field.options else ""
        prompt = _FIELD_PROMPT.format(
            label=field.label,
            type=field.type,
            options=options,
            title=job_context.title,
            company=job_context.company,
            profile=json.dumps(dict(profile), indent=2, default=str)[:MAX_PROFILE_CHARS],
        )
        raw = self._complete(
            [{"role": "user", "content": prompt}],
            model=self.model, max_tokens=256, timeout=timeout, operation="determine_field_value",
        )
        return _clean_answer(raw)

    def find_careers_page(
        self,
        company_name: str,
        company_website: str | None = None,
        *,
        timeout: float | None = None,
    ) -> str | None:
        """Return the careers page URL, or None when the model does not know it."""
        prompt = _CAREERS_PROMPT.format(
            company=company_name,
            website=f"Their website is: {company_website}\n" if company_website else "",
            unknown=UNKNOWN_MARKER,
        )
        raw = self._complete(
            [{"role": "user", "content": prompt}],
            model=self.model, max_tokens=256, timeout=timeout, operation="find_careers_page",
        )
        url = _clean_answer(raw)
        if not url or url.upper() == UNKNOWN_MARKER:
            log.info("No careers page found for %s", company_name)
            return None
        log.info("Careers page for %s → %s", company_name, url)
        return url


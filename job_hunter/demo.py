"""Sample analyzer used when the app runs in demo mode — no network access."""
from __future__ import annotations

from typing import Any, Mapping

from job_hunter.environment import assert_not_production, is_demo_mode
from job_hunter.log import get_logger
from job_hunter.models import (
    FormField,
    JobContext,
    JobLink,
    MatchResult,
    PageAnalysis,
    UserProfile,
    direct_value,
)
from job_hunter.page_analyzer import PageAnalyzer

log = get_logger(__name__)

DEMO_FIELD_VALUES: dict[str, str] = {
    "text": "Demo answer",
    "textarea": "I am excited about this role and the team's mission.",
    "email": "demo@example.com",
    "phone": "+1 555 0100",
    "checkbox": "true",
}


def _slug(name: str) -> str:
    return "".join(c for c in name.lower() if c.isalnum())


class DemoPageAnalyzer:
    """Drop-in for PageAnalyzer that returns fixed sample results."""

    def __init__(self) -> None:
        assert_not_production("demo page analyzer")
        log.info("DemoPageAnalyzer generating sample results")

    def analyze_page(self, page, *, timeout: float | None = None) -> PageAnalysis:
        url = getattr(page, "url", "") or ""
        return PageAnalysis(
            page_type="application_form",
            title="Software Engineer — Demo Corp",
            jobs=[JobLink(title="Software Engineer", selector="#job-1", url=url or None)],
            form_fields=[
                FormField(selector="#first_name", type="text", label="First Name", required=True, profile_mapping="firstName"),
                FormField(selector="#last_name", type="text", label="Last Name", required=True, profile_mapping="lastName"),
                FormField(selector="#email", type="email", label="Email", required=True, profile_mapping="email"),
                FormField(selector="#resume", type="file", label="Resume/CV", required=True, profile_mapping="resumePath"),
                FormField(selector="#why_us", type="textarea", label="Why do you want to work here?"),
            ],
            submit_button="#submit_app",
        )

    def analyze_job_match(
        self, job_description: str, profile: UserProfile, *, timeout: float | None = None,
    ) -> MatchResult:
        text = job_description.lower()
        matched = [s for s in profile.skills if s.lower() in text]
        score = 40.0 + min(10.0 * len(matched), 50.0)
        return MatchResult(
            score=score,
            analysis=f"Demo analysis: {len(matched)} of your skills appear in this description.",
            missing_skills=["Kubernetes", "GraphQL"],
            strong_matches=matched[:5],
        )

    def determine_field_value(
        self,
        field: FormField,
        profile: Mapping[str, Any],
        job_context: JobContext,
        *,
        timeout: float | None = None,
    ) -> str:
        direct = direct_value(field, profile)
        if direct:
            return direct
        if field.options:
            return field.options[0]
        return DEMO_FIELD_VALUES.get(field.type, "")

    def find_careers_page(
        self, company_name: str, company_website: str | None = None, *, timeout: float | None = None,
    ) -> str | None:
        slug = _slug(company_name)
        if not slug:
            return None
        return f"https://careers.{slug}.example.com"


def get_page_analyzer(client=None) -> PageAnalyzer | DemoPageAnalyzer:
    """Demo analyzer in demo mode, otherwise the real one."""
    if is_demo_mode():
        return DemoPageAnalyzer()
    if client is not None:
        return PageAnalyzer(client)
    return PageAnalyzer.from_env()

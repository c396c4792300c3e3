"""Data models for page analysis, profiles and job matching."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

FIELD_TYPES: tuple[str, ...] = (
    "text", "email", "phone", "file", "select", "checkbox", "radio", "textarea",
)
PAGE_TYPES: tuple[str, ...] = (
    "job_listing", "job_details", "application_form", "login", "other",
)
TRUTHY: frozenset[str] = frozenset({"true", "yes", "y", "1", "on", "checked"})

# ── Coercion helpers for model-produced JSON ────────────────────────────
# Wrong-typed containers raise TypeError; callers turn that into a format error.


def str_list(value: Any) -> list[str]:
    """Non-blank strings from a list (or a single string); numbers are stringified."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list of strings, got {type(value).__name__}")
    return [
        str(v) for v in value
        if isinstance(v, (str, int, float)) and not isinstance(v, bool) and str(v).strip()
    ]


def as_bool(value: Any) -> bool:
    """Booleans as models write them: true, "false", "Yes", 1 ..."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    if isinstance(value, (int, float)):
        return value != 0
    return False


def opt_str(value: Any) -> str | None:
    """A scalar as a stripped string; None for blanks and non-scalars."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _dict_list(value: Any, name: str) -> list[dict[str, Any]]:
    if value is None or value == "":
        return []
    if not isinstance(value, list):
        raise TypeError(f"{name} must be a list, got {type(value).__name__}")
    return [v for v in value if isinstance(v, dict)]


@dataclass
class FormField:
    selector: str
    type: str
    label: str
    required: bool = False
    profile_mapping: str | None = None
    value: str | None = None
    options: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormField:
        field_type = (opt_str(data.get("type")) or "text").lower()
        if field_type == "tel":
            field_type = "phone"
        return cls(
            selector=opt_str(data.get("selector")) or "",
            type=field_type if field_type in FIELD_TYPES else "text",
            label=opt_str(data.get("label")) or "",
            required=as_bool(data.get("required", False)),
            profile_mapping=opt_str(data.get("profileMapping")) or opt_str(data.get("profile_mapping")),
            value=opt_str(data.get("value")),
            options=str_list(data.get("options")),
        )


@dataclass
class JobLink:
    title: str
    selector: str
    url: str | None = None


@dataclass
class PageAnalysis:
    page_type: str = "other"
    title: str | None = None
    jobs: list[JobLink] = field(default_factory=list)
    form_fields: list[FormField] = field(default_factory=list)
    submit_button: str | None = None
    next_button: str | None = None
    login_required: bool = False
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageAnalysis:
        """Build from the model's JSON; raises TypeError when a list member is not a list."""
        page_type = opt_str(data.get("pageType")) or opt_str(data.get("page_type")) or "other"
        jobs = [
            JobLink(title=opt_str(j.get("title")) or "", selector=opt_str(j.get("selector")) or "", url=opt_str(j.get("url")))
            for j in _dict_list(data.get("jobs"), "jobs")
        ]
        raw_fields = data.get("formFields", data.get("form_fields"))
        fields = [
            FormField.from_dict(f)
            for f in _dict_list(raw_fields, "formFields")
            if opt_str(f.get("selector"))
        ]
        return cls(
            page_type=page_type if page_type in PAGE_TYPES else "other",
            title=opt_str(data.get("title")),
            jobs=jobs,
            form_fields=fields,
            submit_button=opt_str(data.get("submitButton")) or opt_str(data.get("submit_button")),
            next_button=opt_str(data.get("nextButton")) or opt_str(data.get("next_button")),
            login_required=as_bool(data.get("loginRequired", data.get("login_required", False))),
            errors=str_list(data.get("errors")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def direct_value(f: FormField, profile: Mapping[str, Any]) -> str:
    """Profile values that fill a field without asking the model."""
    if not f.profile_mapping:
        return ""
    contact = profile.get("contact") or {}
    if not isinstance(contact, Mapping):
        contact = {}
    mappings = {
        "firstName": profile.get("firstName"),
        "lastName": profile.get("lastName"),
        "email": contact.get("email"),
        "phone": contact.get("phone"),
        "linkedin": contact.get("linkedin"),
        "website": contact.get("website"),
        "city": contact.get("location"),
        "resumePath": profile.get("resumePath"),
    }
    return opt_str(mappings.get(f.profile_mapping)) or ""


@dataclass
class Experience:
    title: str
    company: str
    description: str | None = None


@dataclass
class Education:
    degree: str
    field: str


@dataclass
class UserProfile:
    skills: list[str] = field(default_factory=list)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        """Build from the profile.yaml layout (top-level or nested under ``profile``)."""
        inner = data.get("profile") if isinstance(data.get("profile"), dict) else {}
        skills = data.get("skills") or inner.get("skills") or []
        experience = data.get("experience") or inner.get("experience") or []
        education = data.get("education") or inner.get("education") or []
        return cls(
            skills=list(dict.fromkeys(str_list(skills))),
            experience=[
                Experience(
                    title=str(e.get("title") or ""),
                    company=str(e.get("company") or ""),
                    description=e.get("description"),
                )
                for e in experience
                if isinstance(e, dict)
            ],
            education=[
                Education(degree=str(e.get("degree") or ""), field=str(e.get("field") or ""))
                for e in education
                if isinstance(e, dict)
            ],
        )


@dataclass
class JobContext:
    title: str
    company: str
    description: str = ""


@dataclass
class MatchResult:
    score: float
    analysis: str
    missing_skills: list[str] = field(default_factory=list)
    strong_matches: list[str] = field(default_factory=list)

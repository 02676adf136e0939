from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_PLATFORMS = ("linkedin", "reddit", "twitter")
MAX_PAGES = 5


def _clean_tuple(values) -> Tuple[str, ...]:
    return tuple(s.strip() for s in (values or ()) if s and s.strip())


@dataclass(frozen=True)
class Location:
    city: str = ""
    state: str = ""
    country: str = ""

    def parts(self) -> List[str]:
        return [p.strip() for p in (self.city, self.state, self.country) if p and p.strip()]

    def display(self) -> str:
        return ", ".join(self.parts())


@dataclass(frozen=True)
class SearchCriteria:
    """
    One search submission. Immutable for the duration of a run; list
    arguments are stored as tuples.
    """

    industry: Tuple[str, ...] = ()
    location: Location = field(default_factory=Location)
    company_size: str = ""
    job_title: str = ""
    keywords: Tuple[str, ...] = ()
    professional_field: str = ""
    custom_tags: Tuple[str, ...] = ()
    email_required: bool = False
    phone_required: bool = False
    target_platforms: Tuple[str, ...] = DEFAULT_PLATFORMS
    max_pages: int = 3
    time_range: str = ""

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        pages = int(self.max_pages or 1)
        object.__setattr__(self, "max_pages", max(1, min(MAX_PAGES, pages)))
        object.__setattr__(self, "industry", _clean_tuple(self.industry))
        object.__setattr__(self, "keywords", _clean_tuple(self.keywords))
        object.__setattr__(self, "custom_tags", _clean_tuple(self.custom_tags))
        object.__setattr__(self, "job_title", (self.job_title or "").strip())
        object.__setattr__(self, "professional_field", (self.professional_field or "").strip())
        platforms = tuple(p.lower() for p in _clean_tuple(self.target_platforms))
        object.__setattr__(self, "target_platforms", platforms or DEFAULT_PLATFORMS)

    @property
    def primary_industry(self) -> str:
        return self.industry[0] if self.industry else ""

    def has_any_field(self) -> bool:
        return bool(
            self.industry
            or self.location.parts()
            or self.job_title
            or self.keywords
            or self.professional_field
            or self.custom_tags
        )


@dataclass
class DorkBreakdown:
    base_query: str = ""
    industry_filter: str = ""
    location_filter: str = ""
    role_filter: str = ""
    keyword_filters: List[str] = field(default_factory=list)
    field_filter: str = ""
    custom_tag_filters: List[str] = field(default_factory=list)
    contact_requirements: str = ""


@dataclass
class DorkQuery:
    query: str
    breakdown: DorkBreakdown = field(default_factory=DorkBreakdown)
    description: str = ""
    category: str = ""


@dataclass
class RawResultItem:
    title: str = ""
    snippet: str = ""
    link: str = ""

    @property
    def text(self) -> str:
        return f"{self.title} {self.snippet}".strip()


@dataclass
class ContactInfo:
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)

    def has_contacts(self) -> bool:
        return bool(self.emails or self.names or self.companies)


@dataclass
class Lead:
    id: str
    name: str
    company: str
    job_title: str
    location: str
    industry: str
    company_size: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    score: int = 0
    source_url: str = ""
    platform: str = ""
    extracted_data: Optional[ContactInfo] = None
    score_reasons: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.score = max(0, min(100, int(self.score)))

    def to_row(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "Company": self.company,
            "Job Title": self.job_title,
            "Email": self.email or "",
            "Phone": self.phone or "",
            "Location": self.location,
            "Industry": self.industry,
            "Platform": self.platform,
            "Score": self.score,
            "Source URL": self.source_url,
        }


class StageStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"
    EMPTY = "empty"


@dataclass
class QueryOutcome:
    query: str
    status: StageStatus = StageStatus.EMPTY
    pages_fetched: int = 0
    results_seen: int = 0
    leads: int = 0
    error: str = ""


@dataclass
class PlatformReport:
    platform: str
    queries: List[str] = field(default_factory=list)
    outcomes: List[QueryOutcome] = field(default_factory=list)
    count: int = 0
    error: str = ""

    @property
    def status(self) -> StageStatus:
        if self.error and not self.outcomes:
            return StageStatus.FAILURE
        if not self.outcomes:
            return StageStatus.EMPTY
        failed = [o for o in self.outcomes if o.status == StageStatus.FAILURE]
        if len(failed) == len(self.outcomes):
            return StageStatus.FAILURE
        if failed or any(o.status == StageStatus.PARTIAL for o in self.outcomes) or self.error:
            return StageStatus.PARTIAL
        if self.count == 0:
            return StageStatus.EMPTY
        return StageStatus.SUCCESS


@dataclass
class LeadGenerationResult:
    leads: List[Lead]
    total_count: int
    search_criteria: SearchCriteria
    generated_at: str
    dork_query: str
    platform_results: Dict[str, PlatformReport] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        for name, report in self.platform_results.items():
            out["platform_results"][name]["status"] = report.status.value
        return out

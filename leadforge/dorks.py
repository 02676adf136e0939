# leadforge/dorks.py
from __future__ import annotations

import re
from typing import Dict, List, Optional

from .patterns import (
    CATEGORY_LABELS,
    CONTACT_DORKS,
    DORK_PATTERNS,
    LOCATION_MODIFIERS,
    PLATFORM_FALLBACKS,
    PLATFORM_TEMPLATES,
    PLATFORMS,
    ROLE_PATTERNS,
)
from .types import DorkBreakdown, DorkQuery, SearchCriteria

MAX_QUERIES_PER_PLATFORM = 3
BUILDER_MODES = ("simplified", "basic", "advanced")

BASIC_BASE_SITES = ["linkedin.com/in", "about.me", "github.io"]
CONTACT_REQUIREMENTS = (
    '("@gmail.com" OR "@yahoo.com" OR "@outlook.com" OR "email") '
    'AND ("phone" OR "mobile" OR "contact" OR "+91" OR "call")'
)
PROFESSIONAL_KEYWORDS = '"experience" OR "skills" OR "portfolio" OR "resume"'

_PLACEHOLDER = re.compile(r"\{[a-z_]+\}")


# ----------------------------
# Utilities
# ----------------------------
def _norm(s: str) -> str:
    return " ".join(str(s or "").strip().split())


def _quote(s: str) -> str:
    return f'"{_norm(s)}"'


def _or_group(values: List[str]) -> str:
    return " OR ".join(_quote(v) for v in values if _norm(v))


def _unique(items: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for q in items:
        q = _norm(q)
        if not q or q in seen:
            continue
        seen.add(q)
        out.append(q)
    return out


def _site_for(platform: str) -> str:
    if platform in PLATFORMS:
        return PLATFORMS[platform]
    return platform if "." in platform else f"{platform}.com"


def _primary_location(criteria: SearchCriteria) -> str:
    parts = criteria.location.parts()
    return parts[0] if parts else ""


# ----------------------------
# Simplified (per-platform) builder
# ----------------------------
def build_platform_queries(
    criteria: SearchCriteria,
    platform: str,
    limit: int = MAX_QUERIES_PER_PLATFORM,
) -> List[str]:
    """
    Short per-platform queries. Always returns at least one query.
    """
    platform = _norm(platform).lower()
    values = {
        "industry": criteria.primary_industry,
        "location": _primary_location(criteria),
        "role": criteria.job_title,
    }

    queries: List[str] = []
    templates = PLATFORM_TEMPLATES.get(platform)
    if templates is not None:
        for needs, template in templates:
            if all(values[k] for k in needs):
                queries.append(template.format(**values))
    else:
        terms = [v for v in (values["industry"], values["location"], values["role"]) if v]
        if terms:
            queries.append(f"site:{_site_for(platform)} {' '.join(terms)}")

    queries = _unique(queries)
    if not queries:
        queries = [PLATFORM_FALLBACKS.get(platform, f"site:{_site_for(platform)} contact email")]

    return queries[: max(1, limit)]


# ----------------------------
# Basic builder (single long dork + breakdown)
# ----------------------------
def build_basic_dork(criteria: SearchCriteria, sites: Optional[List[str]] = None) -> DorkQuery:
    base_query = " OR ".join(f"site:{s}" for s in (sites or BASIC_BASE_SITES))

    industry_filter = _or_group(criteria.industry)
    location_filter = " ".join(_quote(p) for p in criteria.location.parts())
    role_filter = _quote(criteria.job_title) if criteria.job_title else ""
    field_filter = _quote(criteria.professional_field) if criteria.professional_field else ""
    keyword_filters = [_quote(k) for k in criteria.keywords]
    custom_tag_filters = [_quote(t) for t in criteria.custom_tags]

    parts = [base_query]
    if industry_filter:
        parts.append(f"({industry_filter})")
    if location_filter:
        parts.append(f"({location_filter})")
    if role_filter:
        parts.append(role_filter)
    if field_filter:
        parts.append(field_filter)
    if keyword_filters:
        parts.append(f"({' OR '.join(keyword_filters)})")
    if custom_tag_filters:
        parts.append(f"({' OR '.join(custom_tag_filters)})")
    parts.append(f"({CONTACT_REQUIREMENTS})")
    parts.append(f"({PROFESSIONAL_KEYWORDS})")

    return DorkQuery(
        query=" ".join(parts),
        breakdown=DorkBreakdown(
            base_query=base_query,
            industry_filter=industry_filter,
            location_filter=location_filter,
            role_filter=role_filter,
            keyword_filters=keyword_filters,
            field_filter=field_filter,
            custom_tag_filters=custom_tag_filters,
            contact_requirements=CONTACT_REQUIREMENTS,
        ),
        description="Combined profile search",
        category="Basic",
    )


def build_alternative_queries(criteria: SearchCriteria) -> List[str]:
    industries = _or_group(criteria.industry)
    city = criteria.location.city

    linkedin = "site:linkedin.com/in"
    if criteria.job_title:
        linkedin += f" {_quote(criteria.job_title)}"
    if industries:
        linkedin += f" ({industries})"
    if city:
        linkedin += f" {_quote(city)}"
    linkedin += ' ("email" OR "contact") ("phone" OR "mobile")'

    directory = "site:crunchbase.com OR site:zoominfo.com OR site:apollo.io"
    if industries:
        directory += f" ({industries})"
    if city:
        directory += f" {_quote(city)}"
    if criteria.job_title:
        directory += f" {_quote(criteria.job_title)}"
    directory += ' "email" "phone"'

    network = "site:github.io OR site:medium.com OR site:dev.to OR site:behance.net"
    if criteria.professional_field:
        network += f" {_quote(criteria.professional_field)}"
    if criteria.keywords:
        network += f" ({_or_group(criteria.keywords)})"
    if city:
        network += f" {_quote(city)}"
    network += ' ("contact" OR "hire" OR "email") ("phone" OR "mobile")'

    return [linkedin, directory, network]


# ----------------------------
# Advanced builder (pattern catalog)
# ----------------------------
class AdvancedDorkBuilder:
    def __init__(self, criteria: SearchCriteria):
        self.criteria = criteria

    def _values(self) -> Dict[str, str]:
        c = self.criteria
        city = c.location.city or _primary_location(c)
        return {
            "industry": c.primary_industry,
            "company_type": c.primary_industry,
            "role": c.job_title,
            "location": city,
            "city": city,
            "state": c.location.state,
            "domain": c.keywords[0] if c.keywords else "",
        }

    def replace_placeholders(self, pattern: str) -> str:
        """
        Fill placeholders. AND-clauses whose placeholder has no value are dropped,
        so the query never carries a literal "{...}".
        """
        values = self._values()
        kept: List[str] = []
        for clause in pattern.split(" AND "):
            filled = clause
            for key, value in values.items():
                if value:
                    filled = filled.replace("{" + key + "}", value)
            if _PLACEHOLDER.search(filled):
                continue
            kept.append(filled)
        return " AND ".join(kept)

    def location_filter(self) -> str:
        mods = _unique([self.replace_placeholders(m) for m in LOCATION_MODIFIERS])
        return "(" + " OR ".join(mods) + ")" if mods else ""

    def role_filter(self) -> str:
        if not self.criteria.job_title:
            return ""
        return "(" + " OR ".join(self.replace_placeholders(p) for p in ROLE_PATTERNS) + ")"

    def _expand(self, category: str, suffix: str = "") -> List[DorkQuery]:
        out: List[DorkQuery] = []
        for pattern in DORK_PATTERNS[category]:
            query = self.replace_placeholders(pattern.pattern)
            if not query:
                continue
            if suffix:
                query += suffix
            out.append(
                DorkQuery(
                    query=query,
                    description=pattern.description,
                    category=CATEGORY_LABELS[category],
                    breakdown=DorkBreakdown(base_query=" OR ".join(f"site:{s}" for s in pattern.sites)),
                )
            )
        return out

    def social_queries(self) -> List[DorkQuery]:
        return self._expand("SOCIAL")

    def professional_queries(self) -> List[DorkQuery]:
        return self._expand("PROFESSIONAL", ' AND (intext:"email" OR intext:"@" OR intext:"contact")')

    def contact_queries(self) -> List[DorkQuery]:
        suffix = f" AND ({' OR '.join(CONTACT_DORKS)})"
        if self.criteria.location.city:
            suffix += f" AND {self.location_filter()}"
        return self._expand("CONTACT_INFO", suffix)

    def directory_queries(self) -> List[DorkQuery]:
        return self._expand("DIRECTORIES", ' AND (intext:"phone" OR intext:"email" OR intext:"contact")')

    def generate(self) -> List[DorkQuery]:
        queries: List[DorkQuery] = []
        queries.extend(self.social_queries())
        queries.extend(self.professional_queries())
        queries.extend(self.contact_queries())
        queries.extend(self.directory_queries())
        return queries

    def for_platform(self, platform: str) -> List[str]:
        domain = _site_for(platform).split("/")[0]
        picked = [q.query for q in self.generate() if domain in q.breakdown.base_query]
        return _unique(picked)

    def optimized_query(self) -> str:
        queries = self.generate()
        if queries:
            return queries[0].query
        return self.basic_fallback()

    def basic_fallback(self) -> str:
        c = self.criteria
        q = "site:linkedin.com/in OR site:reddit.com OR site:twitter.com"
        if c.industry:
            q += f" AND ({_or_group(c.industry)})"
        if c.job_title:
            q += f" AND {self.role_filter()}"
        if c.location.city:
            q += f" AND {_quote(c.location.city)}"
        q += ' AND (intext:"email" OR intext:"@") AND (intext:"phone" OR intext:"contact")'
        return q


# ----------------------------
# Public API
# ----------------------------
def build_queries(
    criteria: SearchCriteria,
    platform: str,
    mode: str = "simplified",
    limit: int = MAX_QUERIES_PER_PLATFORM,
) -> List[str]:
    """
    Ordered literal queries for one platform. Every mode falls back to the
    simplified builder, so the list is never empty.
    """
    if mode not in BUILDER_MODES:
        raise ValueError(f"Unknown builder mode: {mode!r}")

    queries: List[str] = []
    if mode == "basic":
        queries = [build_basic_dork(criteria, sites=[_site_for(platform)]).query]
    elif mode == "advanced":
        queries = AdvancedDorkBuilder(criteria).for_platform(platform)

    queries = _unique(queries)
    if not queries:
        return build_platform_queries(criteria, platform, limit=limit)
    return queries[: max(1, limit)]


def format_dork_for_display(dork: DorkQuery) -> str:
    b = dork.breakdown
    lines = [
        "Generated Google Dork Query:",
        dork.query,
        "",
        "Query Breakdown:",
        f"• Base Sites: {b.base_query}",
        f"• Industry Filter: {b.industry_filter or 'None'}",
        f"• Location Filter: {b.location_filter or 'None'}",
        f"• Role Filter: {b.role_filter or 'None'}",
        f"• Keywords: {', '.join(b.keyword_filters) or 'None'}",
        f"• Field Filter: {b.field_filter or 'None'}",
        f"• Custom Tags: {', '.join(b.custom_tag_filters) or 'None'}",
        f"• Contact Requirements: {b.contact_requirements or 'None'}",
    ]
    return "\n".join(lines)


def dork_preview(criteria: SearchCriteria, mode: str = "simplified") -> str:
    lines = [f"Search queries ({mode} mode):", ""]
    for i, platform in enumerate(criteria.target_platforms, start=1):
        lines.append(f"{i}. {platform.upper()}")
        for j, q in enumerate(build_queries(criteria, platform, mode=mode), start=1):
            lines.append(f"   {j}. {q}")
        lines.append("")
    lines.append(f"Total Platforms: {len(criteria.target_platforms)}")
    lines.append(f"Search Pages per Query: {criteria.max_pages}")

    if mode == "basic":
        lines += ["", format_dork_for_display(build_basic_dork(criteria)), "", "Alternative Queries:"]
        lines += [f"   {i}. {q}" for i, q in enumerate(build_alternative_queries(criteria), start=1)]
    elif mode == "advanced":
        lines += ["", "Optimized Query:", AdvancedDorkBuilder(criteria).optimized_query()]
    return "\n".join(lines)

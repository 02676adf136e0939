from __future__ import annotations

from typing import List, Tuple

from .patterns import INFERRED_EMAIL_PREFIX, PLACEHOLDER_NAMES, UNKNOWN_COMPANY
from .types import Lead, SearchCriteria

BASE_SCORE = 30
EMAIL_POINTS = 25
PHONE_POINTS = 20
NAME_POINTS = 15
COMPANY_POINTS = 10
INDUSTRY_POINTS = 20
LOCATION_POINTS = 15
TITLE_POINTS = 20


def _low(s) -> str:
    return str(s or "").strip().lower()


def bucket_from_score(score: int) -> str:
    if score >= 75:
        return "strong"
    if score >= 55:
        return "promising"
    if score >= 40:
        return "maybe"
    return "weak"


def score_lead_with_reasons(lead: Lead, criteria: SearchCriteria) -> Tuple[int, List[str]]:
    """
    Weighted-additive quality score in [0, 100]. Every point added comes
    with a reason.
    """
    reasons: List[str] = []
    score = BASE_SCORE

    # Contact information
    if lead.email and not _low(lead.email).startswith(INFERRED_EMAIL_PREFIX):
        score += EMAIL_POINTS
        reasons.append("Has a direct email address.")
    if lead.phone:
        score += PHONE_POINTS
        reasons.append("Has a phone number.")

    # Data quality
    if lead.name and lead.name not in PLACEHOLDER_NAMES:
        score += NAME_POINTS
        reasons.append("Person name found in source.")
    if lead.company and lead.company != UNKNOWN_COMPANY:
        score += COMPANY_POINTS
        reasons.append("Company known.")

    # Criteria match
    industry = _low(lead.industry)
    if industry and any(_low(i) in industry for i in criteria.industry if i):
        score += INDUSTRY_POINTS
        reasons.append(f"Industry matches: {lead.industry}")

    city = _low(criteria.location.city)
    if city and city in _low(lead.location):
        score += LOCATION_POINTS
        reasons.append(f"Location matches: {criteria.location.city}")

    title = _low(criteria.job_title)
    if title and title in _low(lead.job_title):
        score += TITLE_POINTS
        reasons.append(f"Job title matches: {criteria.job_title}")

    score = max(0, min(100, int(score)))
    return score, reasons


def score_lead(lead: Lead, criteria: SearchCriteria) -> int:
    score, _ = score_lead_with_reasons(lead, criteria)
    return score

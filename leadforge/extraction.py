"""
Regex extraction of contact details from search-result text.

Each ``find_*`` function is pure (text in, candidates out) and keeps the
first-seen order of its matches.
"""
from __future__ import annotations

import hashlib
import re
import uuid
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from .logger import get_logger
from .patterns import (
    DEFAULT_COMPANY_SIZE,
    DEFAULT_JOB_TITLE,
    INFERRED_EMAIL_PREFIX,
    PLACEHOLDER_NAMES,
    UNKNOWN_COMPANY,
)
from .scoring import score_lead_with_reasons
from .types import ContactInfo, Lead, RawResultItem, SearchCriteria

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?<![\w+])(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)")
NAME_RE = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")
# the suffix must end the word: "Co-Founder" is not a company
COMPANY_RE = re.compile(r"\b((?:[A-Z][A-Za-z&'-]*\s+){1,4}?(?:Inc|LLC|Corp|Ltd|Co)\b\.?)(?![-\w])")
COMPANY_SUFFIXES = {"inc", "llc", "corp", "ltd", "co"}

DISPOSABLE_PROVIDERS = ["tempmail", "10minutemail", "guerrillamail", "mailinator"]

SOCIAL_DOMAINS = [
    "linkedin.com",
    "reddit.com",
    "twitter.com",
    "x.com",
    "facebook.com",
    "instagram.com",
    "youtube.com",
    "github.com",
    "medium.com",
]

BUSINESS_TERMS = {"inc", "llc", "corp", "ltd", "co", "company", "group", "solutions", "services"}

COMMON_WORDS = {
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "her", "was", "one", "our",
    "had", "words", "what", "were", "they", "we", "when", "your", "said", "each", "which",
    "she", "do", "how", "their", "if", "will", "up", "other", "about", "out", "many", "then",
    "them", "these", "so", "some", "would", "make", "like", "into", "him", "has", "two", "more",
    "go", "no", "way", "could", "my", "than", "first", "been", "call", "who", "its", "now",
    "find", "long", "down", "day", "did", "get", "come", "made", "may", "part",
    # words that show up capitalised in profile titles
    "contact", "email", "phone", "hiring", "remote", "senior", "lead", "head", "chief",
    "manager", "director", "engineer", "developer", "founder", "officer", "president",
    "linkedin", "twitter", "reddit", "profile", "jobs",
}

JOB_TITLE_KEYWORDS = [
    ("ceo", "CEO"),
    ("cto", "CTO"),
    ("manager", "Manager"),
    ("director", "Director"),
    ("lead", "Lead"),
    ("senior", "Senior"),
    ("head", "Head"),
]


# ----------------------------
# Utilities
# ----------------------------
def _unique(items: Iterable[str], key=lambda s: s) -> List[str]:
    seen = set()
    out: List[str] = []
    for it in items:
        k = key(it)
        if k in seen:
            continue
        seen.add(k)
        out.append(it)
    return out


def _host(url: str) -> str:
    if not url:
        return ""
    u = urlparse(url)
    if u.scheme not in {"http", "https"}:
        return ""
    host = (u.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host if "." in host else ""


def is_social_domain(host: str) -> bool:
    return any(host == d or host.endswith("." + d) for d in SOCIAL_DOMAINS)


def normalize_phone(phone: str) -> str:
    return re.sub(r"\D", "", phone or "")


# ----------------------------
# Finders
# ----------------------------
def is_valid_email(email: str) -> bool:
    low = email.lower()
    return not any(p in low for p in DISPOSABLE_PROVIDERS)


def infer_email_from_url(url: str) -> Optional[str]:
    host = _host(url)
    if not host or is_social_domain(host):
        return None
    return f"{INFERRED_EMAIL_PREFIX}{host}"


def find_emails(text: str, url: str = "") -> List[str]:
    emails = [e for e in EMAIL_RE.findall(text or "") if is_valid_email(e)]
    if not emails:
        inferred = infer_email_from_url(url)
        if inferred:
            emails.append(inferred)
    return _unique(emails, key=str.lower)


def find_phones(text: str) -> List[str]:
    phones = [normalize_phone(m) for m in PHONE_RE.findall(text or "")]
    return _unique([p for p in phones if len(p) >= 10])


def is_likely_person_name(name: str) -> bool:
    words = name.split()
    if len(words) != 2:
        return False
    return not any(w.lower() in BUSINESS_TERMS or w.lower() in COMMON_WORDS for w in words)


def find_person_names(text: str) -> List[str]:
    return _unique([n for n in NAME_RE.findall(text or "") if is_likely_person_name(n)])


def find_company_names(text: str) -> List[str]:
    companies = [" ".join(m.split()) for m in COMPANY_RE.findall(text or "")]
    return _unique(companies)


def _company_stem(company: str) -> List[str]:
    words = company.split()
    if words and words[-1].rstrip(".").lower() in COMPANY_SUFFIXES:
        words = words[:-1]
    return words


def _is_company_stem(name: str, companies: List[str]) -> bool:
    # only the words right before the suffix: "Blue Ocean" in "Blue Ocean Ltd"
    parts = name.split()
    return any(_company_stem(c)[-len(parts):] == parts for c in companies)


def extract_contact_info(item: RawResultItem) -> ContactInfo:
    text = item.text
    companies = find_company_names(text)
    names = [n for n in find_person_names(text) if not _is_company_stem(n, companies)]
    return ContactInfo(
        emails=find_emails(text, item.link),
        phones=find_phones(text),
        names=names,
        companies=companies,
    )


# ----------------------------
# Lead assembly
# ----------------------------
def placeholder_name(seed: str) -> str:
    idx = int(hashlib.sha256((seed or "").encode("utf-8")).hexdigest()[:8], 16)
    return PLACEHOLDER_NAMES[idx % len(PLACEHOLDER_NAMES)]


def company_from_url(url: str) -> Optional[str]:
    host = _host(url)
    if not host or is_social_domain(host):
        return None
    label = host.split(".")[0]
    return label[:1].upper() + label[1:] if label else None


def guess_job_title(text: str) -> Optional[str]:
    low = (text or "").lower()
    for keyword, label in JOB_TITLE_KEYWORDS:
        if re.search(rf"\b{keyword}\b", low):
            return label
    return None


def _new_lead_id() -> str:
    return f"lead_{uuid.uuid4().hex[:12]}"


def build_lead(
    info: ContactInfo,
    item: RawResultItem,
    criteria: SearchCriteria,
    platform: str,
) -> Optional[Lead]:
    if not info.has_contacts():
        return None

    source_url = item.link or ""
    job_title = (
        guess_job_title(item.title)
        or guess_job_title(item.snippet)
        or criteria.job_title
        or DEFAULT_JOB_TITLE
    )
    is_linkedin = "linkedin" in platform or "linkedin.com" in _host(source_url)

    return Lead(
        id=_new_lead_id(),
        name=info.names[0] if info.names else placeholder_name(source_url or item.title),
        company=(info.companies[0] if info.companies else None) or company_from_url(source_url) or UNKNOWN_COMPANY,
        job_title=job_title,
        email=info.emails[0] if info.emails else None,
        phone=info.phones[0] if info.phones else None,
        location=criteria.location.display() or "Not specified",
        industry=criteria.primary_industry or "General",
        linkedin_url=source_url if is_linkedin and source_url else None,
        company_size=criteria.company_size or DEFAULT_COMPANY_SIZE,
        score=0,
        source_url=source_url,
        platform=platform,
        extracted_data=info,
    )


def extract_lead(
    item: RawResultItem,
    criteria: SearchCriteria,
    platform: str,
    enricher=None,
) -> Optional[Lead]:
    """
    One search result -> zero or one scored lead.
    """
    info = extract_contact_info(item)
    lead = build_lead(info, item, criteria, platform)
    if lead is None:
        logger.debug(f"No contact data in result: {item.link or item.title}")
        return None

    if enricher is not None:
        lead = enricher.enrich(lead, item)

    lead.score, lead.score_reasons = score_lead_with_reasons(lead, criteria)
    return lead

# leadforge/discovery.py
from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, unquote, urlparse

import requests
from bs4 import BeautifulSoup

from .config import Settings
from .errors import SearchProviderError
from .logger import get_logger
from .patterns import TIME_RANGES
from .types import RawResultItem

logger = get_logger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
DDG_HTML_URL = "https://html.duckduckgo.com/html/"
RESULTS_PER_PAGE = 10

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


# ----------------------------
# Rate limiting
# ----------------------------
def rate_limit_delay(seconds: float, sleeper: Callable[[float], None] = time.sleep) -> None:
    if seconds and seconds > 0:
        sleeper(seconds)


@dataclass
class RateLimitPolicy:
    """Fixed waits between provider calls, one per kind of step."""

    page_delay_s: float = 1.0
    query_delay_s: float = 1.5
    platform_delay_s: float = 1.0
    enrichment_delay_s: float = 0.8
    email_delay_s: float = 0.1
    sleeper: Callable[[float], None] = field(default=time.sleep, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings, sleeper: Callable[[float], None] = time.sleep) -> "RateLimitPolicy":
        return cls(
            page_delay_s=settings.page_delay_s,
            query_delay_s=settings.query_delay_s,
            platform_delay_s=settings.platform_delay_s,
            enrichment_delay_s=settings.enrichment_delay_s,
            email_delay_s=settings.email_delay_s,
            sleeper=sleeper,
        )

    def wait(self, kind: str) -> None:
        seconds = getattr(self, f"{kind}_delay_s", None)
        if seconds is None:
            raise ValueError(f"Unknown delay kind: {kind!r}")
        rate_limit_delay(seconds, self.sleeper)


# ----------------------------
# Utilities
# ----------------------------
def _norm(s: str) -> str:
    return " ".join(str(s or "").strip().split())


def _html_to_text(s: str) -> str:
    if not s or "<" not in s:
        return _norm(s)
    return _norm(BeautifulSoup(s, "lxml").get_text(" ", strip=True))


def _clean_title(title: str) -> str:
    t = _norm(title)
    t = re.sub(r"\s*[-–|]\s*(LinkedIn|Twitter|X|Reddit|Medium|GitHub)\s*$", "", t, flags=re.I)
    return t.strip()


def _unwrap_ddg_url(href: str) -> str:
    """
    DDG returns redirect URLs like
    https://duckduckgo.com/l/?uddg=https%3A%2F%2Flinear.app%2F
    """
    if not href:
        return href
    u = urlparse(href if not href.startswith("//") else "https:" + href)
    if "duckduckgo.com" in (u.netloc or "") and u.path.startswith("/l/"):
        qs = parse_qs(u.query or "")
        if qs.get("uddg"):
            return unquote(qs["uddg"][0])
    return href


def page_start(page: int, num: int = RESULTS_PER_PAGE) -> int:
    """1-based result offset for a 0-based page index."""
    return page * num + 1


def date_restrict_for(time_range: str) -> str:
    return TIME_RANGES.get((time_range or "").strip(), "")


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return (resp.text or "")[:200]
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return str(data["error"].get("message", ""))
    return (resp.text or "")[:200]


# ----------------------------
# Google Custom Search
# ----------------------------
class GoogleSearchClient:
    name = "google"

    def __init__(self, settings: Settings, session: Optional[Any] = None):
        self.api_key = settings.google_api_key
        self.cx = settings.google_cx
        self.timeout = settings.search_timeout_s
        self.session = session or requests.Session()

    def search(
        self,
        query: str,
        start: int = 1,
        num: int = RESULTS_PER_PAGE,
        date_restrict: str = "",
    ) -> list[RawResultItem]:
        q = _norm(query)
        if not q:
            return []

        params = {"key": self.api_key, "cx": self.cx, "q": q, "num": num, "start": start}
        if date_restrict:
            params["dateRestrict"] = date_restrict

        logger.debug(f"Google search start={start}: {q}")
        try:
            resp = self.session.get(GOOGLE_SEARCH_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SearchProviderError(0, f"Network error: {exc}") from exc

        if resp.status_code >= 400:
            detail = _error_message(resp)
            logger.error(f"Google Search API error {resp.status_code}: {detail}")
            if resp.status_code == 403:
                raise SearchProviderError(403, f"Quota exceeded or invalid credentials: {detail}")
            if resp.status_code == 400:
                raise SearchProviderError(400, f"Invalid search query or parameters: {detail}")
            raise SearchProviderError(resp.status_code, detail)

        try:
            data = resp.json() or {}
        except ValueError as exc:
            raise SearchProviderError(resp.status_code, "Response is not valid JSON") from exc
        if isinstance(data.get("error"), dict):
            err = data["error"]
            raise SearchProviderError(int(err.get("code") or resp.status_code), str(err.get("message", "")))

        items: list[RawResultItem] = []
        for it in data.get("items") or []:
            items.append(
                RawResultItem(
                    title=_html_to_text(it.get("title", "")),
                    snippet=_html_to_text(it.get("snippet", "")),
                    link=(it.get("link") or "").strip(),
                )
            )
        return items


# ----------------------------
# DuckDuckGo HTML search (no key)
# ----------------------------
class DuckDuckGoSearchClient:
    name = "duckduckgo"

    def __init__(self, settings: Settings, session: Optional[Any] = None):
        self.timeout = settings.search_timeout_s
        self.session = session or requests.Session()

    def search(
        self,
        query: str,
        start: int = 1,
        num: int = RESULTS_PER_PAGE,
        date_restrict: str = "",
    ) -> list[RawResultItem]:
        q = _norm(query)
        if not q:
            return []

        params = {"q": q}
        if start > 1:
            params["s"] = start - 1
        if date_restrict:
            # DDG only knows d/w/m/y
            params["df"] = date_restrict[0]

        headers = {
            "User-Agent": USER_AGENT,
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": "https://duckduckgo.com/",
        }
        try:
            resp = self.session.get(DDG_HTML_URL, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SearchProviderError(0, f"Network error: {exc}") from exc
        if resp.status_code >= 400:
            raise SearchProviderError(resp.status_code, (resp.text or "")[:200])

        soup = BeautifulSoup(resp.text or "", "lxml")
        out: list[RawResultItem] = []
        for res in soup.select(".result"):
            a = res.select_one(".result__a")
            if not a:
                continue
            href = _unwrap_ddg_url((a.get("href") or "").strip())
            title = _clean_title(a.get_text(" ", strip=True) or "")
            snippet_el = res.select_one(".result__snippet")
            snippet = _norm(snippet_el.get_text(" ", strip=True)) if snippet_el else ""

            if href and title:
                out.append(RawResultItem(title=title, snippet=snippet, link=href))
            if len(out) >= num:
                break
        return out


def make_search_client(settings: Settings, session: Optional[Any] = None):
    """Pick the configured backend. Fails fast on missing credentials."""
    settings.require_search_credentials()
    if settings.search_backend == "duckduckgo":
        return DuckDuckGoSearchClient(settings, session=session)
    return GoogleSearchClient(settings, session=session)

import json
import re
from dataclasses import replace
from typing import Any, Dict, Optional

from openai import OpenAI

from .config import Settings
from .errors import EnrichmentError
from .logger import get_logger
from .types import Lead, RawResultItem

logger = get_logger(__name__)

# response key -> Lead attribute
ALLOWED_FIELDS = {
    "name": "name",
    "company": "company",
    "jobTitle": "job_title",
    "job_title": "job_title",
    "location": "location",
    "industry": "industry",
    "companySize": "company_size",
    "company_size": "company_size",
}

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.S)

ENRICH_PROMPT_TEMPLATE = """
You clean up sales-lead records scraped from web search results.
Use ONLY the source text below. Do not invent people, companies or contact details.
If a field cannot be determined from the source, leave it out.

LEAD (partial):
{lead_json}

SOURCE:
Title: {title}
Snippet: {snippet}
URL: {link}

Return JSON only, with any of these string fields:
name, company, jobTitle, location, industry, companySize
""".strip()


def _safe_parse_json(text: str) -> Dict[str, Any]:
    t = (text or "").strip()
    if not t:
        return {}

    m = _FENCED_JSON.search(t)
    if m:
        t = m.group(1)

    try:
        obj = json.loads(t)
        return obj if isinstance(obj, dict) else {}
    except json.JSONDecodeError:
        pass

    start = t.find("{")
    end = t.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            obj = json.loads(t[start : end + 1])
            return obj if isinstance(obj, dict) else {}
        except json.JSONDecodeError:
            return {}
    return {}


def parse_enrichment(text: str) -> Dict[str, str]:
    """Model output -> {lead attribute: value}, restricted to the allowlist."""
    parsed = _safe_parse_json(text)
    out: Dict[str, str] = {}
    for key, attr in ALLOWED_FIELDS.items():
        value = parsed.get(key)
        if isinstance(value, str) and value.strip():
            out[attr] = value.strip()
    return out


class LeadEnricher:
    """
    Optional AI pass over a freshly extracted lead.

    With ``protect_extracted`` on, a name or company that the regex extraction
    actually found is never replaced; only placeholders are.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[Any] = None,
        policy=None,
        protect_extracted: bool = True,
    ):
        self.model = settings.gemini_model
        self.client = client or OpenAI(api_key=settings.gemini_api_key, base_url=settings.gemini_base_url)
        self.policy = policy
        self.protect_extracted = protect_extracted

    def build_prompt(self, lead: Lead, item: RawResultItem) -> str:
        lead_json = json.dumps(
            {
                "name": lead.name,
                "company": lead.company,
                "jobTitle": lead.job_title,
                "location": lead.location,
                "industry": lead.industry,
            },
            indent=2,
            ensure_ascii=False,
        )
        return ENRICH_PROMPT_TEMPLATE.format(
            lead_json=lead_json,
            title=item.title or "N/A",
            snippet=item.snippet or "N/A",
            link=item.link or "N/A",
        )

    def _complete(self, prompt: str) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
            return (resp.choices[0].message.content or "").strip()
        except Exception as exc:
            raise EnrichmentError(str(exc)) from exc
        finally:
            if self.policy is not None:
                self.policy.wait("enrichment")

    def enrich(self, lead: Lead, item: RawResultItem) -> Lead:
        try:
            text = self._complete(self.build_prompt(lead, item))
        except EnrichmentError as exc:
            logger.warning(f"AI enrichment failed for {lead.source_url or lead.id}: {exc}")
            return lead

        updates = parse_enrichment(text)
        if not updates:
            logger.debug(f"AI enrichment returned nothing usable for {lead.source_url or lead.id}")
            return lead

        info = lead.extracted_data
        if self.protect_extracted and info is not None:
            if info.names:
                updates.pop("name", None)
            if info.companies:
                updates.pop("company", None)

        return replace(lead, **updates)

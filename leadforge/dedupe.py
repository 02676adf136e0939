from typing import Dict, List

from .types import Lead


def lead_key(lead: Lead) -> str:
    if lead.email:
        return lead.email.strip().lower()
    return f"{lead.name}-{lead.company}".strip().lower()


def dedupe_leads(leads: List[Lead]) -> List[Lead]:
    """
    One lead per identity (email, else name-company). The higher score wins;
    on a tie the first-seen lead stays. Output keeps first-seen key order.
    """
    best: Dict[str, Lead] = {}
    for lead in leads:
        key = lead_key(lead)
        kept = best.get(key)
        if kept is None or lead.score > kept.score:
            best[key] = lead
    return list(best.values())

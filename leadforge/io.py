import csv
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .types import Lead

EXPORT_COLUMNS = [
    "Name",
    "Company",
    "Job Title",
    "Email",
    "Phone",
    "Location",
    "Industry",
    "Platform",
    "Score",
    "Source URL",
]
XLSX_EXTRA_COLUMNS = ["LinkedIn URL", "Company Size"]


def leads_to_dataframe(leads: List[Lead], extra_columns: bool = False) -> pd.DataFrame:
    rows = []
    for lead in leads:
        row = lead.to_row()
        if extra_columns:
            row["LinkedIn URL"] = lead.linkedin_url or ""
            row["Company Size"] = lead.company_size or ""
        rows.append(row)
    columns = EXPORT_COLUMNS + (XLSX_EXTRA_COLUMNS if extra_columns else [])
    return pd.DataFrame(rows, columns=columns)


def leads_to_csv(leads: List[Lead]) -> str:
    """Header + one line per lead, every field double-quoted, no trailing newline."""
    df = leads_to_dataframe(leads).astype(str)
    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return text.rstrip("\n")


def leads_to_xlsx(leads: List[Lead]) -> bytes:
    buf = BytesIO()
    df = leads_to_dataframe(leads, extra_columns=True)
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Leads")
    return buf.getvalue()


def leads_to_contacts(leads: List[Lead]) -> List[Dict[str, str]]:
    """Leads with an email, shaped like rows from ``load_contacts``."""
    contacts = []
    for lead in leads:
        if not lead.email:
            continue
        contacts.append(
            {
                "name": lead.name,
                "email": lead.email,
                "company": lead.company,
                "job_title": lead.job_title,
                "location": lead.location,
                "industry": lead.industry,
            }
        )
    return contacts


def load_contacts(source: Any, filename: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Read a CSV/XLSX contact sheet for the mail merge. Headers are lower-cased,
    rows without an email are dropped, duplicates (by email) removed.
    """
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    suffix = Path(name).suffix.lower()
    if suffix in {".xlsx", ".xls"}:
        df = pd.read_excel(source, dtype=str)
    else:
        df = pd.read_csv(source, dtype=str)
    df = df.fillna("")
    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    if "email" not in df.columns:
        raise ValueError("Contact sheet needs an 'email' column.")

    contacts: List[Dict[str, str]] = []
    seen = set()
    for _, row in df.iterrows():
        record = {k: str(v).strip() for k, v in row.items()}
        email = record.get("email", "")
        if not email or email.lower() in seen:
            continue
        seen.add(email.lower())
        contacts.append(record)
    return contacts

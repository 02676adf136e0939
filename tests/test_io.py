import csv
import io

import pandas as pd
import pytest

from leadforge.io import (
    EXPORT_COLUMNS,
    leads_to_contacts,
    leads_to_csv,
    leads_to_xlsx,
    load_contacts,
)
from leadforge.types import Lead


def _lead(name, company, email=None, **kw):
    return Lead(
        id=f"lead_{name[:3].lower()}",
        name=name,
        company=company,
        job_title=kw.get("job_title", "CTO"),
        location=kw.get("location", "Pune, India"),
        industry="Technology",
        email=email,
        phone=kw.get("phone"),
        linkedin_url=kw.get("linkedin_url"),
        company_size="1-50",
        score=kw.get("score", 80),
        source_url="https://example.com/p",
        platform="linkedin",
    )


def test_csv_has_header_plus_one_line_per_lead():
    leads = [
        _lead("John Smith", "Acme, Inc", email="john@acme.com"),
        _lead("Jane Doe", 'The "Best" Co', phone="5551234567"),
    ]
    text = leads_to_csv(leads)
    lines = text.split("\n")

    assert len(lines) == 3
    assert lines[0] == ",".join(f'"{c}"' for c in EXPORT_COLUMNS)
    assert all(line.startswith('"') and line.endswith('"') for line in lines)
    assert '"Acme, Inc"' in lines[1]
    assert '"The ""Best"" Co"' in lines[2]

    rows = list(csv.DictReader(io.StringIO(text)))
    assert rows[0]["Company"] == "Acme, Inc"
    assert rows[0]["Location"] == "Pune, India"
    assert rows[1]["Email"] == ""
    assert rows[1]["Score"] == "80"


def test_csv_of_no_leads_is_header_only():
    assert leads_to_csv([]).split("\n") == [",".join(f'"{c}"' for c in EXPORT_COLUMNS)]


def test_xlsx_sheet_and_extra_columns():
    data = leads_to_xlsx([_lead("John Smith", "Acme Inc", linkedin_url="https://linkedin.com/in/js")])
    df = pd.read_excel(io.BytesIO(data), sheet_name="Leads")
    assert list(df.columns) == EXPORT_COLUMNS + ["LinkedIn URL", "Company Size"]
    assert df.loc[0, "LinkedIn URL"] == "https://linkedin.com/in/js"


def test_load_contacts_csv():
    raw = io.StringIO(
        "Name,Email,Company Name\n"
        "Jane,jane@acme.com,Acme\n"
        "NoMail,,Foo\n"
        "Jane again,JANE@acme.com,Acme\n"
        "Raj,raj@foo.in,\n"
    )
    contacts = load_contacts(raw, filename="contacts.csv")
    assert [c["email"] for c in contacts] == ["jane@acme.com", "raj@foo.in"]
    assert contacts[0]["company_name"] == "Acme"
    assert contacts[1]["company_name"] == ""


def test_load_contacts_xlsx(tmp_path):
    path = tmp_path / "contacts.xlsx"
    pd.DataFrame([{"EMAIL": "a@b.co", "Name": "Ana"}]).to_excel(path, index=False)
    assert load_contacts(path) == [{"email": "a@b.co", "name": "Ana"}]


def test_load_contacts_requires_email_column():
    with pytest.raises(ValueError):
        load_contacts(io.StringIO("name,phone\nA,1\n"), filename="x.csv")


def test_leads_to_contacts_skips_missing_email():
    contacts = leads_to_contacts([_lead("John Smith", "Acme Inc", email="john@acme.com"), _lead("Jane Doe", "X")])
    assert contacts == [
        {
            "name": "John Smith",
            "email": "john@acme.com",
            "company": "Acme Inc",
            "job_title": "CTO",
            "location": "Pune, India",
            "industry": "Technology",
        }
    ]

from leadforge.dedupe import dedupe_leads, lead_key
from leadforge.types import Lead


def _lead(id, score, email=None, name="Jane Doe", company="Acme Inc"):
    return Lead(
        id=id,
        name=name,
        company=company,
        job_title="CTO",
        location="Pune",
        industry="Technology",
        email=email,
        score=score,
    )


def test_key_prefers_email():
    assert lead_key(_lead("a", 10, email="Jane@Acme.com ")) == "jane@acme.com"
    assert lead_key(_lead("a", 10)) == "jane doe-acme inc"


def test_higher_score_wins():
    leads = [_lead("a", 40, email="jane@acme.com"), _lead("b", 70, email="JANE@acme.com")]
    (kept,) = dedupe_leads(leads)
    assert kept.id == "b"


def test_tie_keeps_first_seen():
    leads = [_lead("a", 50), _lead("b", 50)]
    (kept,) = dedupe_leads(leads)
    assert kept.id == "a"


def test_idempotent():
    leads = [
        _lead("a", 40, email="jane@acme.com"),
        _lead("b", 90, name="Raj Patel", company="Foo LLC"),
        _lead("c", 60, email="jane@acme.com"),
    ]
    once = dedupe_leads(leads)
    twice = dedupe_leads(once)
    assert [l.id for l in once] == [l.id for l in twice] == ["c", "b"]


def test_distinct_leads_survive():
    leads = [_lead("a", 10, email="a@x.com"), _lead("b", 10, email="b@x.com")]
    assert len(dedupe_leads(leads)) == 2

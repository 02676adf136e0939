import pytest

from leadforge.scoring import BASE_SCORE, bucket_from_score, score_lead, score_lead_with_reasons
from leadforge.types import Lead, Location, SearchCriteria


def _lead(**kw):
    base = dict(
        id="lead_x",
        name="Alex Johnson",
        company="Unknown",
        job_title="Professional",
        location="Not specified",
        industry="General",
    )
    base.update(kw)
    return Lead(**base)


def test_bare_lead_gets_base_score():
    assert score_lead(_lead(), SearchCriteria()) == BASE_SCORE


def test_inferred_email_earns_nothing():
    criteria = SearchCriteria()
    assert score_lead(_lead(email="contact@acme.io"), criteria) == BASE_SCORE
    assert score_lead(_lead(email="jane@acme.io"), criteria) > BASE_SCORE


def test_criteria_matches_add_points():
    criteria = SearchCriteria(industry=["Technology"], location=Location(city="Pune"), job_title="CTO")
    plain = score_lead(_lead(), criteria)
    matched = score_lead(_lead(industry="Technology", location="Pune, India", job_title="CTO"), criteria)
    assert matched > plain
    _, reasons = score_lead_with_reasons(_lead(location="Pune"), criteria)
    assert any("Location matches" in r for r in reasons)


def test_score_is_clamped():
    criteria = SearchCriteria(industry=["Technology"], location=Location(city="Pune"), job_title="CTO")
    lead = _lead(
        name="John Smith",
        company="Acme Inc",
        email="john@acme.com",
        phone="15551234567",
        industry="Technology",
        location="Pune",
        job_title="CTO",
    )
    assert score_lead(lead, criteria) == 100


def test_lead_constructor_clamps_score():
    assert _lead(score=250).score == 100
    assert _lead(score=-3).score == 0


@pytest.mark.parametrize(
    "score,bucket",
    [(100, "strong"), (75, "strong"), (60, "promising"), (40, "maybe"), (39, "weak"), (0, "weak")],
)
def test_buckets(score, bucket):
    assert bucket_from_score(score) == bucket

from leadforge.extraction import (
    build_lead,
    company_from_url,
    extract_contact_info,
    extract_lead,
    find_company_names,
    find_emails,
    find_person_names,
    find_phones,
    guess_job_title,
    infer_email_from_url,
    placeholder_name,
)
from leadforge.patterns import PLACEHOLDER_NAMES
from leadforge.types import RawResultItem, SearchCriteria


def test_email_found_without_trailing_words():
    assert find_emails("Contact: jane.doe@example.com or call") == ["jane.doe@example.com"]


def test_disposable_emails_dropped():
    assert find_emails("a@mailinator.com b@company.io") == ["b@company.io"]


def test_emails_deduped_case_insensitively():
    assert find_emails("Bob@Acme.com and bob@acme.com") == ["Bob@Acme.com"]


def test_email_inferred_from_company_site():
    assert find_emails("no address here", "https://www.acme.io/about") == ["contact@acme.io"]


def test_no_email_inferred_from_social_sites():
    assert infer_email_from_url("https://www.linkedin.com/in/jane") is None
    assert infer_email_from_url("not a url") is None


def test_phones_normalized_to_digits():
    text = "Call +1-555-123-4567 or (555) 987-6543."
    assert find_phones(text) == ["15551234567", "5559876543"]


def test_short_numbers_are_not_phones():
    assert find_phones("Founded 2019, 45 people, room 123-4567") == []


def test_person_names_skip_common_and_business_words():
    text = "Jane Doe joined Blue Ocean Ltd. Contact Sales for details. Senior Engineer"
    names = find_person_names(text)
    assert "Jane Doe" in names
    assert "Contact Sales" not in names
    assert "Senior Engineer" not in names


def test_company_names():
    assert find_company_names("works at Acme Inc and Blue Ocean Ltd.") == ["Acme Inc", "Blue Ocean Ltd."]


def test_company_words_are_not_people():
    info = extract_contact_info(RawResultItem(snippet="Blue Ocean Ltd is hiring"))
    assert info.names == []
    assert info.companies == ["Blue Ocean Ltd"]


def test_person_before_title_case_company_is_kept():
    item = RawResultItem(title="Jane Doe Joins Acme Inc", snippet="jane@acme.com", link="https://www.linkedin.com/in/jd")
    info = extract_contact_info(item)
    assert info.names == ["Jane Doe"]

    lead = extract_lead(item, SearchCriteria(), "linkedin")
    assert lead.name == "Jane Doe"
    assert lead.name not in PLACEHOLDER_NAMES


def test_co_founder_is_not_a_company():
    info = extract_contact_info(RawResultItem(title="Jane Doe Co-Founder"))
    assert info.companies == []
    assert info.names == ["Jane Doe"]


def test_no_contacts_means_no_lead():
    item = RawResultItem(title="nothing useful", snippet="just lowercase words", link="https://reddit.com/r/x")
    assert extract_lead(item, SearchCriteria(), "reddit") is None


def test_full_extraction(john_item, pune_criteria):
    lead = extract_lead(john_item, pune_criteria, "linkedin")
    assert lead is not None
    assert lead.name == "John Smith"
    assert lead.company == "Acme Inc"
    assert lead.email == "john@acme.com"
    assert lead.phone == "15551234567"
    assert lead.job_title == "CTO"
    assert lead.location == "Pune"
    assert lead.industry == "Technology"
    assert lead.linkedin_url == "https://www.linkedin.com/in/johnsmith"
    assert lead.id.startswith("lead_")
    assert lead.score >= 80


def test_placeholder_name_is_stable():
    assert placeholder_name("https://x.com/a") == placeholder_name("https://x.com/a")
    assert placeholder_name("anything") in PLACEHOLDER_NAMES


def test_defaults_when_only_email_found():
    item = RawResultItem(snippet="write to hello@widgets.dev", link="https://widgets.dev/team")
    info = extract_contact_info(item)
    lead = build_lead(info, item, SearchCriteria(), "github")
    assert lead.name in PLACEHOLDER_NAMES
    assert lead.company == "Widgets"
    assert lead.job_title == "Professional"
    assert lead.location == "Not specified"
    assert lead.industry == "General"
    assert lead.linkedin_url is None


def test_company_from_url():
    assert company_from_url("https://www.acme.io/x") == "Acme"
    assert company_from_url("https://twitter.com/acme") is None


def test_job_title_guess():
    assert guess_job_title("Head of Growth at Foo") == "Head"
    assert guess_job_title("Leadership coach") is None
    assert guess_job_title("") is None


def test_job_title_falls_back_to_criteria():
    item = RawResultItem(snippet="Jane Doe, jane@doe.org", link="https://doe.org")
    lead = build_lead(extract_contact_info(item), item, SearchCriteria(job_title="Designer"), "web")
    assert lead.job_title == "Designer"


def test_score_reasons_kept_on_lead(john_item, pune_criteria):
    lead = extract_lead(john_item, pune_criteria, "linkedin")
    assert "Has a direct email address." in lead.score_reasons
    assert "Location matches: Pune" in lead.score_reasons

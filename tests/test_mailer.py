import pytest
import requests
from conftest import FakeResponse, FakeSession

from leadforge.errors import ConfigurationError
from leadforge.mailer import BREVO_SEND_URL, BrevoMailer, merge_and_send, render_template, to_html

SENDER = {"name": "Sam Sender", "email": "sam@leadforge.dev"}


def test_render_template():
    contact = {"name": "Jane", "Company": "Acme"}
    out = render_template("Hi {{name}} from {{ company }}, {{missing}}!", contact)
    assert out == "Hi Jane from Acme, !"


def test_to_html_escapes_and_breaks_lines():
    assert to_html("a < b\nnext") == "a &lt; b<br>next"


def test_send_one_success(settings, policy):
    session = FakeSession([FakeResponse(201, {"messageId": "<abc@brevo>"})])
    mailer = BrevoMailer(settings, session=session, policy=policy)

    result = mailer.send_one(SENDER, {"email": "jane@acme.com", "name": "Jane"}, "Hello", "<p>Hi</p>")

    assert result.success
    assert result.message_id == "<abc@brevo>"
    call = session.calls[0]
    assert call["url"] == BREVO_SEND_URL
    assert call["headers"]["api-key"] == "brevo-test"
    assert call["json"]["to"] == [{"email": "jane@acme.com", "name": "Jane"}]
    assert call["json"]["htmlContent"] == "<p>Hi</p>"


def test_send_one_failure_is_reported(settings, policy):
    session = FakeSession([FakeResponse(400, {"code": "invalid_parameter", "message": "sender not valid"})])
    mailer = BrevoMailer(settings, session=session, policy=policy)
    result = mailer.send_one(SENDER, {"email": "jane@acme.com"}, "Hello", "Hi")
    assert not result.success
    assert result.message == "sender not valid"


def test_bulk_send_continues_after_failures(settings, policy, sleeps):
    session = FakeSession(
        [
            FakeResponse(201, {"messageId": "1"}),
            requests.ConnectionError("reset"),
            FakeResponse(500, None, text="oops"),
        ]
    )
    mailer = BrevoMailer(settings, session=session, policy=policy)
    contacts = [
        {"name": "A", "email": "a@x.com"},
        {"name": "B", "email": "b@x.com"},
        {"name": "C", "email": "c@x.com"},
        {"name": "No address", "email": ""},
    ]

    results = merge_and_send(mailer, SENDER, contacts, "Hi {{name}}", "Dear {{name}},\nthanks")

    assert [r.success for r in results] == [True, False, False]
    assert results[2].message == "HTTP 500"
    assert len(session.calls) == 3
    assert session.calls[1]["json"]["subject"] == "Hi B"
    assert session.calls[1]["json"]["htmlContent"] == "Dear B,<br>thanks"
    assert sleeps == [policy.email_delay_s, policy.email_delay_s]


def test_mailer_needs_api_key(settings):
    with pytest.raises(ConfigurationError):
        BrevoMailer(settings.model_copy(update={"brevo_api_key": ""}))

"""
Mail merge over Brevo's transactional email API.

One POST per recipient with a fixed pause in between; every message gets its
own ``EmailResult`` and nothing is retried.
"""
import html
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

import requests

from .config import Settings
from .discovery import RateLimitPolicy
from .errors import MailerError
from .logger import get_logger

logger = get_logger(__name__)

BREVO_SEND_URL = "https://api.brevo.com/v3/smtp/email"

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z0-9_ ]+?)\s*\}\}")


@dataclass
class EmailResult:
    email: str
    name: str = ""
    success: bool = False
    message: str = ""
    message_id: Optional[str] = None


@dataclass
class OutgoingEmail:
    email: str
    name: str
    subject: str
    html: str


def render_template(template: str, contact: Mapping[str, str]) -> str:
    """Fill ``{{field}}`` placeholders; unknown fields become empty strings."""
    lowered = {str(k).strip().lower(): v for k, v in contact.items()}

    def _sub(m: re.Match) -> str:
        key = m.group(1).strip().lower().replace(" ", "_")
        value = lowered.get(key, "")
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_sub, template or "")


def to_html(text: str) -> str:
    return html.escape(text or "").replace("\r\n", "\n").replace("\n", "<br>")


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {resp.status_code}"


class BrevoMailer:
    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        policy: Optional[RateLimitPolicy] = None,
    ):
        settings.require_brevo_credentials()
        self.api_key = settings.brevo_api_key
        self.timeout = settings.search_timeout_s
        self.session = session or requests.Session()
        self.policy = policy or RateLimitPolicy.from_settings(settings)

    def _post(self, payload: Dict) -> Dict:
        headers = {
            "api-key": self.api_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        try:
            resp = self.session.post(BREVO_SEND_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise MailerError(0, str(exc)) from exc
        if resp.status_code >= 400:
            raise MailerError(resp.status_code, _error_message(resp))
        try:
            data = resp.json()
        except ValueError:
            data = {}
        return data if isinstance(data, dict) else {}

    def send_one(self, sender: Mapping[str, str], recipient: Mapping[str, str], subject: str, html_content: str) -> EmailResult:
        email = (recipient.get("email") or "").strip()
        name = (recipient.get("name") or "").strip()
        result = EmailResult(email=email, name=name)

        to = {"email": email}
        if name:
            to["name"] = name
        payload = {
            "sender": {"name": sender.get("name", ""), "email": sender.get("email", "")},
            "to": [to],
            "subject": subject,
            "htmlContent": html_content,
        }
        try:
            data = self._post(payload)
        except MailerError as exc:
            logger.error(f"Email to {email} failed: {exc}")
            result.message = exc.message
            return result

        result.success = True
        result.message = "Email sent successfully"
        result.message_id = data.get("messageId")
        logger.info(f"Email sent to {email}")
        return result

    def send_bulk(self, sender: Mapping[str, str], messages: List[OutgoingEmail]) -> List[EmailResult]:
        results: List[EmailResult] = []
        for i, msg in enumerate(messages):
            if i > 0:
                self.policy.wait("email")
            results.append(
                self.send_one(sender, {"email": msg.email, "name": msg.name}, msg.subject, msg.html)
            )
        ok = sum(1 for r in results if r.success)
        logger.info(f"Bulk send finished: {ok}/{len(results)} delivered")
        return results


def merge_and_send(
    mailer: BrevoMailer,
    sender: Mapping[str, str],
    contacts: List[Mapping[str, str]],
    subject: str,
    template: str,
) -> List[EmailResult]:
    messages = [
        OutgoingEmail(
            email=str(c.get("email", "")).strip(),
            name=str(c.get("name", "") or "").strip(),
            subject=render_template(subject, c),
            html=to_html(render_template(template, c)),
        )
        for c in contacts
        if str(c.get("email", "")).strip()
    ]
    return mailer.send_bulk(sender, messages)

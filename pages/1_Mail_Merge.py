# pages/1_Mail_Merge.py
# Mail merge page – no st.set_page_config(...) here, app.py owns it.
import pandas as pd
import streamlit as st

from leadforge.config import Settings
from leadforge.errors import ConfigurationError
from leadforge.io import load_contacts
from leadforge.mailer import BrevoMailer, merge_and_send, render_template, to_html

DEFAULT_TEMPLATE = """Hi {{name}},

I came across your work at {{company}} and wanted to reach out.

Best regards,
"""


# ----------------------------
# Helpers
# ----------------------------
@st.cache_resource
def _settings() -> Settings:
    return Settings()


def _fields(contacts: list[dict]) -> list[str]:
    seen: list[str] = []
    for c in contacts:
        for k in c.keys():
            if k not in seen:
                seen.append(k)
    return seen


# ----------------------------
# Session state
# ----------------------------
if "mm_contacts" not in st.session_state:
    st.session_state["mm_contacts"] = []
if "mm_results" not in st.session_state:
    st.session_state["mm_results"] = []

settings = _settings()

st.title("Mail merge")
st.caption("Upload contacts, write a template with {{field}} placeholders, send through Brevo.")
st.page_link("app.py", label="Back to lead generator", icon="🔎")

# ----------------------------
# Sidebar
# ----------------------------
st.sidebar.header("Sender")
sender_name = st.sidebar.text_input("Sender name")
sender_email = st.sidebar.text_input("Sender email")
if not settings.brevo_api_key:
    st.sidebar.warning("BREVO_API_KEY is not set; sending is disabled.")

# ----------------------------
# Contacts
# ----------------------------
st.subheader("1) Contacts")
upload = st.file_uploader("CSV or XLSX with an 'email' column", type=["csv", "xlsx", "xls"])
if upload is not None:
    try:
        st.session_state["mm_contacts"] = load_contacts(upload, filename=upload.name)
        st.success(f"Loaded {len(st.session_state['mm_contacts'])} contacts ✅")
    except Exception as e:
        st.error(f"Could not read contacts: {e}")

contacts = st.session_state["mm_contacts"]
if contacts:
    st.dataframe(pd.DataFrame(contacts), use_container_width=True, hide_index=True)
    st.caption("Available fields: " + ", ".join(f"{{{{{f}}}}}" for f in _fields(contacts)))
else:
    st.info("No contacts yet.")

# ----------------------------
# Template
# ----------------------------
st.subheader("2) Message")
subject = st.text_input("Subject", placeholder="e.g. Quick question, {{name}}")
template = st.text_area("Body", value=DEFAULT_TEMPLATE, height=220)

if contacts:
    with st.expander("Preview (first contact)", expanded=True):
        first = contacts[0]
        st.markdown(f"**To:** {first.get('email', '')}")
        st.markdown(f"**Subject:** {render_template(subject, first)}")
        st.markdown(to_html(render_template(template, first)), unsafe_allow_html=True)

# ----------------------------
# Send
# ----------------------------
st.subheader("3) Send")
send = st.button(
    f"Send to {len(contacts)} contacts",
    type="primary",
    use_container_width=True,
    disabled=not contacts,
)
if send:
    if not sender_name or not sender_email or not subject:
        st.error("Please fill in sender name, sender email and subject.")
    else:
        try:
            mailer = BrevoMailer(settings)
            with st.spinner("Sending…"):
                st.session_state["mm_results"] = merge_and_send(
                    mailer,
                    {"name": sender_name, "email": sender_email},
                    contacts,
                    subject,
                    template,
                )
        except ConfigurationError as e:
            st.error(str(e))

results = st.session_state["mm_results"]
if results:
    ok = sum(1 for r in results if r.success)
    st.metric("Delivered", f"{ok}/{len(results)}")
    st.dataframe(
        pd.DataFrame(
            [
                {"Email": r.email, "Name": r.name, "Status": "sent" if r.success else "failed", "Message": r.message}
                for r in results
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )

# app.py
import json

import streamlit as st

from leadforge.config import Settings
from leadforge.dorks import BUILDER_MODES
from leadforge.errors import ConfigurationError
from leadforge.io import leads_to_contacts, leads_to_csv, leads_to_dataframe, leads_to_xlsx
from leadforge.logger import configure_logging
from leadforge.patterns import COMPANY_SIZES, INDUSTRIES, PLATFORMS, TIME_RANGE_LABELS
from leadforge.pipeline import LeadGenerator
from leadforge.scoring import bucket_from_score
from leadforge.types import Location, SearchCriteria


# ----------------------------
# Page config (ONLY ONCE in multipage app)
# ----------------------------
st.set_page_config(
    page_title="Leadforge — Lead Generator",
    layout="wide",
)

BADGE_CSS = """
<style>
.lf-badge {display:inline-block; padding:2px 10px; border-radius:999px; font-size:0.85rem; font-weight:600;}
.badge-strong {background: rgba(110,255,190,.35);}
.badge-promising {background: rgba(124,255,230,.30);}
.badge-maybe {background: rgba(255,220,120,.35);}
.badge-weak {background: rgba(200,200,210,.35);}
</style>
"""
st.markdown(BADGE_CSS, unsafe_allow_html=True)


# ----------------------------
# Helpers
# ----------------------------
@st.cache_resource
def _settings() -> Settings:
    settings = Settings()
    configure_logging(settings.log_level)
    return settings


def _split(text: str) -> list[str]:
    return [p.strip() for p in (text or "").split(",") if p.strip()]


def _score_badge(score: int) -> str:
    bucket = bucket_from_score(score)
    return f'<span class="lf-badge badge-{bucket}">{score} · {bucket.title()}</span>'


def _criteria_from_form(form: dict) -> SearchCriteria:
    return SearchCriteria(
        industry=form["industry"],
        location=Location(city=form["city"], state=form["state"], country=form["country"]),
        company_size=form["company_size"],
        job_title=form["job_title"],
        keywords=_split(form["keywords"]),
        professional_field=form["professional_field"],
        custom_tags=_split(form["custom_tags"]),
        email_required=form["email_required"],
        phone_required=form["phone_required"],
        target_platforms=form["platforms"],
        max_pages=form["max_pages"],
        time_range=form["time_range"],
    )


# ----------------------------
# Session state
# ----------------------------
if "lf_result" not in st.session_state:
    st.session_state["lf_result"] = None

settings = _settings()

# ----------------------------
# Header
# ----------------------------
st.title("Leadforge — Lead Generator")
st.caption("Search-engine dorks → contact extraction → scored, de-duplicated leads.")
st.page_link("pages/1_Mail_Merge.py", label="Mail merge", icon="✉️")

# ----------------------------
# Sidebar
# ----------------------------
st.sidebar.header("Search")
mode = st.sidebar.selectbox("Query builder", list(BUILDER_MODES), index=0)
platforms = st.sidebar.multiselect("Platforms", list(PLATFORMS.keys()), default=["linkedin", "reddit", "twitter"])
max_pages = st.sidebar.slider("Pages per query", 1, 5, 3, 1)
time_range = st.sidebar.selectbox(
    "Time range",
    list(TIME_RANGE_LABELS.keys()),
    format_func=lambda k: TIME_RANGE_LABELS[k],
)
st.sidebar.divider()
email_required = st.sidebar.checkbox("Email required", value=False)
phone_required = st.sidebar.checkbox("Phone required", value=False)

st.sidebar.divider()
st.sidebar.caption(f"Search backend: {settings.search_backend}")
st.sidebar.caption(f"AI enrichment: {'on' if settings.enrichment_available else 'off'}")

# ----------------------------
# Criteria form
# ----------------------------
c1, c2 = st.columns(2)
with c1:
    industry = st.multiselect("Industry", INDUSTRIES)
    job_title = st.text_input("Job title", placeholder="e.g. CTO, Head of Marketing")
    professional_field = st.text_input("Field (optional)", placeholder="e.g. Data Science")
    company_size = st.selectbox("Company size", [""] + COMPANY_SIZES, format_func=lambda s: s or "Any")
with c2:
    city = st.text_input("City", placeholder="e.g. Pune")
    state = st.text_input("State / Region (optional)")
    country = st.text_input("Country (optional)")
    keywords = st.text_input("Keywords (comma-separated)", placeholder="e.g. saas, startup")
    custom_tags = st.text_input("Custom tags (comma-separated, optional)")

form = {
    "industry": industry,
    "city": city,
    "state": state,
    "country": country,
    "company_size": company_size,
    "job_title": job_title,
    "keywords": keywords,
    "professional_field": professional_field,
    "custom_tags": custom_tags,
    "email_required": email_required,
    "phone_required": phone_required,
    "platforms": platforms,
    "max_pages": max_pages,
    "time_range": time_range,
}
criteria = _criteria_from_form(form)
generator = LeadGenerator(settings, mode=mode)

with st.expander("Query preview", expanded=False):
    if criteria.has_any_field():
        st.code(generator.preview(criteria), language="text")
    else:
        st.caption("Fill in at least one field to see the generated queries.")

run = st.button("Generate leads", type="primary", use_container_width=True)
if run:
    if not criteria.has_any_field():
        st.error("Please fill in at least one search field.")
    else:
        try:
            with st.spinner("Searching…"):
                st.session_state["lf_result"] = generator.generate(criteria)
        except ConfigurationError as e:
            st.error(str(e))

# ----------------------------
# Results
# ----------------------------
result = st.session_state["lf_result"]
if result is not None:
    st.divider()
    st.subheader(f"{result.total_count} leads")

    with st.expander("Per-platform report", expanded=False):
        for name, report in result.platform_results.items():
            line = f"**{name}** — {report.count} leads ({report.status.value})"
            if report.error:
                line += f" · error: {report.error}"
            st.markdown(line)
            for outcome in report.outcomes:
                msg = f"- `{outcome.query}` · pages {outcome.pages_fetched}, results {outcome.results_seen}, leads {outcome.leads}"
                if outcome.error:
                    msg += f" · {outcome.error}"
                st.markdown(msg)

    if not result.leads:
        st.warning("No leads found. Try broader criteria or more pages.")
    else:
        df = leads_to_dataframe(result.leads)
        st.dataframe(df, use_container_width=True, hide_index=True)

        d1, d2, d3 = st.columns(3)
        with d1:
            st.download_button(
                "Download CSV",
                data=leads_to_csv(result.leads),
                file_name="leads.csv",
                mime="text/csv",
                use_container_width=True,
            )
        with d2:
            st.download_button(
                "Download XLSX",
                data=leads_to_xlsx(result.leads),
                file_name="leads.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                use_container_width=True,
            )
        with d3:
            st.download_button(
                "Download run report (JSON)",
                data=json.dumps(result.to_dict(), indent=2, default=str),
                file_name="lead_run.json",
                mime="application/json",
                use_container_width=True,
            )

        if st.button("Use these leads for mail merge", use_container_width=True):
            st.session_state["mm_contacts"] = leads_to_contacts(result.leads)
            st.switch_page("pages/1_Mail_Merge.py")

        st.write("")
        for lead in result.leads[:20]:
            cA, cB = st.columns([5, 2], vertical_alignment="center")
            with cA:
                st.markdown(f"**{lead.name}** · {lead.job_title} @ {lead.company}")
                st.caption(lead.source_url)
            with cB:
                st.markdown(_score_badge(lead.score), unsafe_allow_html=True)
                if lead.score_reasons:
                    st.caption(" · ".join(lead.score_reasons))

    st.caption(f"Generated {result.generated_at}")

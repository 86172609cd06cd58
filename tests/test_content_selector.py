# tests/test_content_selector.py
from services.extraction.config_loader import ExtractionProfile, get_extraction_profile
from services.extraction.content_selector import extract_page_text, select_primary_content
from services.extraction.text_normalizer import collapse_whitespace, parse_document

LONG = (
    "We are hiring a Senior Engineer to build distributed systems "
    "for our payments platform in Python and Go."
)
OTHER_LONG = (
    "Our company blog covers engineering culture, open source work and "
    "the occasional conference talk recap."
)


def _select(html: str, profile: ExtractionProfile = None) -> str:
    profile = profile or get_extraction_profile()
    return collapse_whitespace(select_primary_content(parse_document(html, profile), profile))


# -------------------------------------------------------------------
# 1️⃣  A substantial landmark beats the rest of the page
# -------------------------------------------------------------------
def test_main_landmark_is_preferred_over_body():
    html = f"<body><p>Cookie banner</p><main><p>{LONG}</p></main></body>"
    assert _select(html) == LONG


def test_job_description_container_is_a_landmark():
    html = f'<body><p>Other stuff</p><div class="job-description">{LONG}</div></body>'
    assert _select(html) == LONG


def test_job_details_id_is_a_landmark():
    html = f'<body><p>Other stuff</p><section id="job-details">{LONG}</section></body>'
    assert _select(html) == LONG


def test_landmarks_are_tried_in_priority_order():
    """``main`` outranks ``article`` even when the article comes first."""
    html = f"<body><article>{OTHER_LONG}</article><main>{LONG}</main></body>"
    assert _select(html) == LONG


# -------------------------------------------------------------------
# 2️⃣  Fallback to the full body
# -------------------------------------------------------------------
def test_short_landmark_falls_back_to_body():
    html = f"<body><main>Apply now</main><div>{LONG}</div></body>"
    result = _select(html)
    assert "Apply now" in result
    assert LONG in result


def test_no_landmark_uses_body():
    html = f"<html><head><title>Job</title></head><body><div>{LONG}</div></body></html>"
    assert _select(html) == LONG


def test_fragment_without_body_uses_whole_document():
    assert _select(f"<div>{LONG}</div>") == LONG


def test_threshold_is_tunable():
    html = f"<body><main>Apply now</main><div>{LONG}</div></body>"
    profile = get_extraction_profile().model_copy(update={"min_landmark_chars": 5})
    assert _select(html, profile) == "Apply now"


# -------------------------------------------------------------------
# 3️⃣  extract_page_text – the URL-path entry point
# -------------------------------------------------------------------
def test_extract_page_text_strips_navigation_inside_landmark():
    html = f"<body><main><nav>Menu Jobs Blog</nav><p>{LONG}</p></main></body>"
    assert extract_page_text(html) == LONG


def test_extract_page_text_blank_page():
    assert extract_page_text("<html><body><script>x()</script></body></html>") == ""


def test_ats_profile_prefers_posting_container():
    html = (
        f'<body><main><div id="content">{LONG}</div>'
        f'<form id="application">{OTHER_LONG}</form></main></body>'
    )
    assert extract_page_text(html, get_extraction_profile("ats_boards")) == LONG

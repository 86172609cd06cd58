# tests/test_result_mapper.py
from datetime import date

from models.extraction import ExtractedFields
from models.job_draft import JobDraftRecord, JobStatus
from services.extraction.result_mapper import map_to_draft


def _fields(**overrides) -> ExtractedFields:
    data = {
        "companyName": "Acme Corp",
        "role": "Senior Engineer",
        "location": "Remote",
        "summary": "Build distributed systems.",
    }
    data.update(overrides)
    return ExtractedFields.model_validate(data)


def test_summary_becomes_notes_and_status_is_saved():
    draft = map_to_draft(_fields(), "", today=date(2024, 5, 1))

    assert draft.company_name == "Acme Corp"
    assert draft.role == "Senior Engineer"
    assert draft.location == "Remote"
    assert draft.notes == "Build distributed systems."
    assert draft.status is JobStatus.SAVED
    assert draft.status.value == "Saved (Not Applied)"
    assert draft.link == ""
    assert draft.date_applied == date(2024, 5, 1)


def test_missing_optionals_default_to_empty_strings():
    draft = map_to_draft(_fields(location=None, summary=None), "")
    assert draft.location == ""
    assert draft.notes == ""
    assert draft.platform_posted == draft.referral_options == draft.person_posted == ""


def test_link_is_the_source_url():
    draft = map_to_draft(_fields(), "  https://jobs.test/42  ")
    assert draft.link == "https://jobs.test/42"


def test_date_defaults_to_today():
    assert map_to_draft(_fields(), "").date_applied == date.today()


def test_same_input_same_draft():
    fields = _fields()
    first = map_to_draft(fields, "https://jobs.test/42")
    second = map_to_draft(fields, "https://jobs.test/42")
    assert first.model_dump(exclude={"date_applied"}) == second.model_dump(exclude={"date_applied"})


def test_to_dict_uses_tracker_field_names():
    exported = map_to_draft(_fields(), "https://jobs.test/42", today=date(2024, 5, 1)).to_dict()
    assert exported == {
        "companyName": "Acme Corp",
        "role": "Senior Engineer",
        "location": "Remote",
        "notes": "Build distributed systems.",
        "dateApplied": "2024-05-01",
        "status": "Saved (Not Applied)",
        "link": "https://jobs.test/42",
        "platformPosted": "",
        "referralOptions": "",
        "personPosted": "",
    }


def test_draft_round_trips_through_tracker_shape():
    exported = map_to_draft(_fields(), "", today=date(2024, 5, 1)).to_dict()
    assert JobDraftRecord.model_validate(exported).company_name == "Acme Corp"

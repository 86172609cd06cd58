# services/extraction/result_mapper.py
from datetime import date
from typing import Optional

from models.extraction import ExtractedFields
from models.job_draft import JobDraftRecord, JobStatus


def map_to_draft(
    fields: ExtractedFields, source_link: str, today: Optional[date] = None
) -> JobDraftRecord:
    """
    Shape extracted fields into a draft job record.

    Extraction never marks a job as applied: the draft always starts as
    ``Saved (Not Applied)``.  ``today`` defaults to the local current date.
    """
    return JobDraftRecord(
        company_name=fields.company_name or "",
        role=fields.role or "",
        location=fields.location or "",
        notes=fields.summary or "",
        date_applied=today or date.today(),
        status=JobStatus.SAVED,
        link=(source_link or "").strip(),
    )

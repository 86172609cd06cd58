# models/job_draft.py
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JobStatus(str, Enum):
    """Application states used by the tracker."""

    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFER_RECEIVED = "Offer Received"
    REJECTED = "Rejected"
    WAITING_REFERRAL = "Waiting (Referral)"
    SAVED = "Saved (Not Applied)"
    WITHDRAWN = "Withdrawn"


class JobDraftRecord(BaseModel):
    """
    A job‑application entry produced by extraction but not yet saved.

    The field set mirrors what the tracker persists, so the caller can
    drop ``to_dict()`` straight into its document store after review.
    """

    company_name: str = ""
    role: str = ""
    location: str = ""
    notes: str = ""
    date_applied: date
    status: JobStatus = JobStatus.SAVED
    link: str = ""
    platform_posted: str = ""
    referral_options: str = ""
    person_posted: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """camelCase, JSON‑ready (``dateApplied`` as ``YYYY-MM-DD``)."""
        return self.model_dump(by_alias=True, mode="json")

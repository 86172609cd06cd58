from .extraction import ExtractedFields, ExtractionInput, Source, TextSource, UrlSource
from .job_draft import JobDraftRecord, JobStatus

__all__ = [
    'ExtractedFields', 'ExtractionInput', 'Source', 'TextSource', 'UrlSource',
    'JobDraftRecord', 'JobStatus',
]

# subject_memory/extraction/__init__.py
"""
Subject extraction from batches of text records.

Usage:
    from subject_memory.extraction import (
        FrequencyKeywordExtractor,
        SubjectExtractionPipeline,
        TextRecord,
    )

    pipeline = SubjectExtractionPipeline(extractor=FrequencyKeywordExtractor())
    output = pipeline.run([TextRecord(id="m1", text="...")])
"""

from .dedupe import deduplicate_subjects
from .frequency import FrequencyKeywordExtractor
from .models import (
    ExtractedSubject,
    ExtractionResult,
    PipelineOutput,
    RecordFailure,
    TextRecord,
)
from .pipeline import SubjectExtractionPipeline, excerpt, select_records
from .protocols import KeywordExtractor

__all__ = [
    "SubjectExtractionPipeline",
    "KeywordExtractor",
    "FrequencyKeywordExtractor",
    "TextRecord",
    "ExtractedSubject",
    "ExtractionResult",
    "PipelineOutput",
    "RecordFailure",
    "deduplicate_subjects",
    "select_records",
    "excerpt",
]

"""
Blogforge Schemas
=================

Pydantic schemas for the rows and content flowing through the pipeline.

- records: SourceRecord (read), DestinationRecord (written)
- content: GeneratedContent (validated LLM output)
"""

from .content import GeneratedContent
from .records import SOURCE_COLUMNS, DestinationRecord, SourceRecord

__all__ = [
    "GeneratedContent",
    "SourceRecord",
    "DestinationRecord",
    "SOURCE_COLUMNS",
]

"""
Table Row Schemas
=================

Rows read from the source table and written to the destination table.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .content import GeneratedContent


SOURCE_COLUMNS = "id, question, answer, category_display_name"


class SourceRecord(BaseModel):
    """One question/answer row from the source table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(ge=1)
    question: str = ""
    answer: str = ""
    category: str = Field(default="", alias="category_display_name")

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SourceRecord":
        # NULL columns come back as None; the prompt wants text
        return cls(
            id=row["id"],
            question=row.get("question") or "",
            answer=row.get("answer") or "",
            category_display_name=row.get("category_display_name") or "",
        )

    def prompt_text(self) -> str:
        """Prompt sent to the content generator."""
        return f"{self.question} {self.answer} {self.category}"


class DestinationRecord(BaseModel):
    """One blog row for the destination table."""

    category: str
    title: str
    description: str
    read_more_titles: List[str]
    read_more_texts: List[str]
    source_id: Optional[int] = None

    @classmethod
    def build(cls, source: SourceRecord, content: GeneratedContent) -> "DestinationRecord":
        return cls(
            category=source.category,
            title=content.main_title,
            description=content.main_description,
            read_more_titles=list(content.read_more_titles),
            read_more_texts=list(content.read_more_descriptions),
            source_id=source.id,
        )

    def to_row(self, source_id_column: Optional[str] = None) -> Dict[str, Any]:
        """Column mapping for the insert; the source id is only written when a column is configured."""
        row: Dict[str, Any] = {
            "category_display_name": self.category,
            "title": self.title,
            "description": self.description,
            "read_more_titles": self.read_more_titles,
            "read_more_texts": self.read_more_texts,
        }
        if source_id_column:
            row[source_id_column] = self.source_id
        return row

"""
Generated Content Schema
========================

The structured blog content the LLM is asked to produce.

A GeneratedContent either exists fully populated or not at all:
`from_payload` is the only way raw model output becomes one, and it
returns None for anything that does not pass validation.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

READ_MORE_COUNT = 3


class GeneratedContent(BaseModel):
    """Validated LLM output: one main article plus three read-more teasers."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    main_title: str = Field(min_length=1)
    main_description: str = Field(min_length=1)
    read_more_titles: List[str] = Field(min_length=READ_MORE_COUNT, max_length=READ_MORE_COUNT)
    read_more_descriptions: List[str] = Field(min_length=READ_MORE_COUNT, max_length=READ_MORE_COUNT)

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["GeneratedContent"]:
        """
        Build from parsed model JSON.

        `read_more_texts` is accepted in place of `read_more_descriptions`
        since models tend to echo the destination column name.

        Returns:
            GeneratedContent, or None if the payload is unusable
        """
        if not isinstance(payload, dict):
            logger.warning("AI payload is not a JSON object (got %s)", type(payload).__name__)
            return None

        data = dict(payload)
        if "read_more_descriptions" not in data and "read_more_texts" in data:
            data["read_more_descriptions"] = data["read_more_texts"]

        try:
            return cls(
                main_title=data.get("main_title"),
                main_description=data.get("main_description"),
                read_more_titles=data.get("read_more_titles"),
                read_more_descriptions=data.get("read_more_descriptions"),
            )
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            logger.warning("AI payload rejected, invalid fields: %s", ", ".join(fields))
            return None

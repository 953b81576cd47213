"""
Blogforge
=========

Batch pipeline that turns question/answer rows into blog posts:
fetch a source row, ask the LLM for structured content, write it back.
"""

__version__ = "1.0.0"

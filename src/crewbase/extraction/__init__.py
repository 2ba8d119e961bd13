# ABOUTME: Role document extraction: markdown text in, RoleCatalog out
# ABOUTME: Three line-oriented state machines for the three document layouts

"""
Extraction Layer: turn role documents into structured catalogs

This layer handles:
- List-style wiki pages (one category per page)
- READMEs with team markers under each role heading
- READMEs indexing roles in a per-team table
- Shared markdown cleanup of descriptions

Data Flow: raw document text → state machine → RoleCatalog → sources/
"""

from .base import DocumentExtractor, ExtractionError
from .category_style import CategoryStyleExtractor
from .list_style import ListStyleExtractor, category_from_page_name
from .machine import LineStateMachine, ParserState
from .table_style import TableStyleExtractor
from .text import clean_markdown

__all__ = [
    "CategoryStyleExtractor",
    "DocumentExtractor",
    "ExtractionError",
    "LineStateMachine",
    "ListStyleExtractor",
    "ParserState",
    "TableStyleExtractor",
    "category_from_page_name",
    "clean_markdown",
]

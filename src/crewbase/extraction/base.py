# ABOUTME: Interface shared by the role document extractors
# ABOUTME: Defines the extractor protocol, its error type and document decoding

from typing import Protocol

from crewbase.models import RoleCatalog


class DocumentExtractor(Protocol):
    """Protocol for turning one markdown document into a RoleCatalog.

    Extractors are pure: they never perform I/O and never raise for
    malformed markup, they skip what they cannot place.
    """

    def extract(self, document: str | bytes) -> RoleCatalog:
        """Extract the roles described in ``document``.

        Raises:
            ExtractionError: If the document cannot be read at all
        """
        ...


class ExtractionError(Exception):
    """Raised when a role document is unreadable."""

    pass


def read_lines(document: str | bytes) -> list[str]:
    """Decode ``document`` and split it into lines."""
    if isinstance(document, bytes):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"Document is not valid UTF-8: {e}") from e

    if not document.strip():
        raise ExtractionError("Document is empty")

    return document.splitlines()

"""Streaming access to XML report documents."""

from reportbridge.reports.cursor import StreamCursor, finish_document, open_document

__all__ = ["StreamCursor", "finish_document", "open_document"]

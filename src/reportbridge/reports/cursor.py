"""Forward-only cursor over a streamed XML report.

Reports can be large, so they are never loaded as a whole tree. A cursor
wraps one element of an ``iterparse`` event stream and lets a handler:

- read the element's attributes (available as soon as the element opens)
- lazily iterate direct children or descendants with a given name
- read text content, which consumes the rest of the element

Cursors are single-pass. Advancing a parent past a child closes the child,
and a closed cursor yields nothing further. Elements are cleared once the
stream has moved past their end tag, so memory stays proportional to
nesting depth rather than document size.

Structure::

    root = open_document(handle)
    for package in root.descendants("package"):
        for cls in package.descendants("class"):
            lines = cls.child("lines")          # StreamError if absent
            for line in lines.children("line"):
                line.attribute("number")
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path
from typing import IO

from reportbridge.core.errors import StreamError


def _local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


class _EventStream:
    """Shared start/end event source with an explicit stack of open elements."""

    def __init__(self, source: IO[bytes] | Path | str) -> None:
        self._events = ET.iterparse(source, events=("start", "end"))
        self._open: list[ET.Element] = []
        self._spent: ET.Element | None = None

    @property
    def depth(self) -> int:
        return len(self._open)

    def is_open(self, element: ET.Element, depth: int) -> bool:
        return len(self._open) >= depth and self._open[depth - 1] is element

    def next(self) -> tuple[str, ET.Element]:
        # Release the element closed by the previous event
        if self._spent is not None:
            self._spent.clear()
            self._spent = None

        try:
            event, elem = next(self._events)
        except StopIteration:
            raise StreamError.unexpected_end() from None
        except ET.ParseError as e:
            line, column = e.position
            raise StreamError.malformed(str(e), line, column) from e

        if event == "start":
            self._open.append(elem)
        else:
            self._open.pop()
            self._spent = elem
        return event, elem

    def close_to(self, depth: int) -> None:
        """Consume events until at most ``depth`` elements remain open."""
        while len(self._open) > depth:
            self.next()

    def drain(self) -> None:
        """Consume the remainder of the document, surfacing trailing errors."""
        try:
            for _ in self._events:
                pass
        except ET.ParseError as e:
            line, column = e.position
            raise StreamError.malformed(str(e), line, column) from e
        self._open.clear()


class StreamCursor:
    """Cursor positioned on a single element of a streamed document."""

    __slots__ = ("_stream", "_element", "_depth", "_attrib", "_text", "name")

    def __init__(self, stream: _EventStream, element: ET.Element, depth: int) -> None:
        self._stream = stream
        self._element = element
        self._depth = depth
        # Attributes are copied; the element is cleared once the stream passes it
        self._attrib = {_local_name(k): v for k, v in element.attrib.items()}
        self._text: str | None = None
        self.name = _local_name(element.tag)

    def __repr__(self) -> str:
        return f"StreamCursor(<{self.name}> depth={self._depth})"

    @property
    def is_open(self) -> bool:
        """True until the stream has moved past this element's end tag."""
        return self._stream.is_open(self._element, self._depth)

    def attribute(self, name: str) -> str | None:
        return self._attrib.get(name)

    def children(self, name: str) -> Iterator[StreamCursor]:
        """Lazily yield direct children named ``name``."""
        return self._scan(name, nested=False)

    def descendants(self, name: str) -> Iterator[StreamCursor]:
        """Lazily yield descendants named ``name`` at any depth.

        A matched element is not searched for further matches inside itself.
        """
        return self._scan(name, nested=True)

    def child(self, name: str) -> StreamCursor:
        """Return the first direct child named ``name``.

        Raises:
            StreamError: If this element has no such child.
        """
        for found in self.children(name):
            return found
        raise StreamError.missing_element(name, self.name)

    def text(self) -> str:
        """Return this element's own text, consuming the rest of the element.

        Raises:
            StreamError: If the stream moved past this element before its
                text was read. The element has been cleared by then.
        """
        if self._text is None:
            if not self.is_open:
                raise StreamError.element_passed(self.name)
            self._stream.close_to(self._depth - 1)
            self._text = self._element.text or ""
        return self._text

    def child_text(self, *path: str) -> str | None:
        """Text of the element reached by following ``path`` through direct children.

        Returns None when any step of the path is absent.
        """
        cursor: StreamCursor = self
        for name in path:
            found = next(cursor.children(name), None)
            if found is None:
                return None
            cursor = found
        return cursor.text()

    def skip(self) -> None:
        """Consume the rest of this element without inspecting it."""
        if self.is_open:
            self._stream.close_to(self._depth - 1)

    def _scan(self, name: str, *, nested: bool) -> Iterator[StreamCursor]:
        if not self.is_open:
            return
        # Close whatever a previous scan left open below this element
        self._stream.close_to(self._depth)
        while True:
            event, elem = self._stream.next()
            if event == "end":
                if elem is self._element:
                    self._text = elem.text or ""
                    return
                continue
            if _local_name(elem.tag) == name:
                depth = self._stream.depth
                yield StreamCursor(self._stream, elem, depth)
                self._stream.close_to(depth - 1)
            elif not nested:
                self._stream.close_to(self._depth)


def open_document(source: IO[bytes] | Path | str) -> StreamCursor:
    """Open a streamed document and return a cursor on its root element.

    Args:
        source: Binary file object or filesystem path.

    Raises:
        StreamError: If the document is empty or not well-formed.
    """
    stream = _EventStream(source)
    event, elem = stream.next()
    # The first event of a well-formed document is always the root start
    if event != "start":
        raise StreamError.malformed("document has no root element")
    return StreamCursor(stream, elem, 1)


def finish_document(root: StreamCursor) -> None:
    """Consume everything after the root cursor, validating the document tail."""
    root.skip()
    root._stream.drain()

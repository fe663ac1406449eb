"""Line view of a decoded buffer."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Line:
    """One logical line, as offsets into the shared buffer.

    ``end`` excludes the line terminator.  For ``\\r\\n`` endings the
    ``\\r`` stays outside the range but remains in ``buffer``.
    """

    line_no: int
    start: int
    end: int
    buffer: str = field(compare=False, repr=False)

    @property
    def content(self) -> str:
        return self.buffer[self.start:self.end]


def line_generator(buffer: str) -> Iterator[Line]:
    """Yield every line of ``buffer``, including a final empty one."""
    line_no = 1
    cur = 0
    nxt = buffer.find("\n")
    while nxt != -1:
        end = nxt - 1 if nxt > 0 and buffer[nxt - 1] == "\r" else nxt
        yield Line(line_no, cur, end, buffer)
        cur = nxt + 1
        nxt = buffer.find("\n", cur)
        line_no += 1
    yield Line(line_no, cur, len(buffer), buffer)

from __future__ import annotations

from datetime import timedelta
from typing import Any

from PyStlSubtitle.Helpers.Time import GetTimeDelta, TimedeltaToText

class SubtitleLine:
    """
    A single timed subtitle line, independent of any file format.

    Text uses '\\n' as the line separator and HTML-style tags (<i>, <b>) for inline styling.
    """
    def __init__(self, line : dict[str, Any]|None = None):
        line = line or {}
        self.number : int = int(line.get('number') or 0)
        self._start : timedelta|None = GetTimeDelta(line.get('start'))
        self._end : timedelta|None = GetTimeDelta(line.get('end'))
        self.text : str|None = line.get('text')
        self.metadata : dict[str, Any] = dict(line.get('metadata') or {})

    @classmethod
    def Construct(cls, number : int, start : timedelta|str|None, end : timedelta|str|None, text : str|None, metadata : dict[str, Any]|None = None) -> SubtitleLine:
        return SubtitleLine({
            'number': number,
            'start': start,
            'end': end,
            'text': text,
            'metadata': metadata
        })

    @property
    def start(self) -> timedelta|None:
        return self._start

    @start.setter
    def start(self, value : timedelta|str|None):
        self._start = GetTimeDelta(value)

    @property
    def end(self) -> timedelta|None:
        return self._end

    @end.setter
    def end(self, value : timedelta|str|None):
        self._end = GetTimeDelta(value)

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, SubtitleLine):
            return NotImplemented
        return (self.number, self.start, self.end, self.text) == (other.number, other.start, other.end, other.text)

    def __str__(self) -> str:
        return f"{self.number}: {TimedeltaToText(self._start)} --> {TimedeltaToText(self._end)} {repr(self.text)}"

    def __repr__(self) -> str:
        return f"SubtitleLine({str(self)})"

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import timedelta
from functools import reduce
from typing import TextIO

import regex

from PyStlSubtitle.Helpers.Localization import _
from PyStlSubtitle.Helpers.Text import CountTagInText, NormaliseLineBreaks, RemoveSsaTags
from PyStlSubtitle.Helpers.Time import (
    FramesToMilliseconds,
    GetTimecodeFields,
    MillisecondsToFrames,
    ValidateFrameRate,
    default_frame_rate,
)
from PyStlSubtitle.SettingsType import SettingsType
from PyStlSubtitle.SubtitleData import SubtitleData
from PyStlSubtitle.SubtitleFileHandler import (
    SubtitleFileHandler,
    default_encoding,
    fallback_encoding,
)
from PyStlSubtitle.SubtitleLine import SubtitleLine

_TIMED_RECORD_PATTERN = regex.compile(r'^\d+:\d+:\d+[:;]\d+\t,\t\d+:\d+:\d+[:;]\d+\t,\t.*$')
_TIMECODE_SEPARATORS = regex.compile(r'[:;]')

FIELD_SEPARATOR = "\t,\t"
LINE_BREAK = "\r\n"

ITALIC_CODE = "^I"
BOLD_CODE = "^B"

ALIGN_TOP_DIRECTIVE = "$VertAlign=Top"
ALIGN_BOTTOM_DIRECTIVE = "$VertAlign=Bottom"

# Cues starting with one of these SSA alignment overrides are shown at the top of the frame
TOP_ALIGN_TAGS = ("{\\an7}", "{\\an8}", "{\\an9}")
TOP_ALIGN_TAG = "{\\an8}"

DEFAULT_HEADER = (
    "$VertAlign          =   Bottom",
    "$Bold               =   FALSE",
    "$Underlined         =   FALSE",
    "$Italic             =   0",
    "$XOffset                =   0",
    "$YOffset                =   -5",
    "$TextContrast           =   15",
    "$Outline1Contrast           =   15",
    "$Outline2Contrast           =   13",
    "$BackgroundContrast     =   0",
    "$ForceDisplay           =   FALSE",
    "$FadeIn             =   0",
    "$FadeOut                =   0",
    "$HorzAlign          =   Center",
)


def EncodeStyles(text : str) -> str:
    """
    Convert internal markup to DVD Studio Pro escape codes.

    Italic and bold tags become the toggle codes ^I and ^B, and line breaks become '|'.
    If the whole cue is wrapped in a single italic pair, each line break closes and reopens
    italics so every row is rendered italic.
    """
    text = RemoveSsaTags(NormaliseLineBreaks(text or ""))
    text = text.replace("<I>", "<i>").replace("</I>", "</i>")

    all_italic = text.startswith("<i>") and text.endswith("</i>") and CountTagInText(text, "<i>") == 1

    for tag in ("<i>", "</i>"):
        text = text.replace(tag, ITALIC_CODE)

    for tag in ("<b>", "<B>", "</b>", "</B>"):
        text = text.replace(tag, BOLD_CODE)

    if all_italic:
        return text.replace("\n", f"{ITALIC_CODE}|{ITALIC_CODE}")
    return text.replace("\n", "|")


def DecodeStyles(text : str) -> str:
    """
    Convert ^I and ^B toggle codes to <i>/</i> and <b>/</b> tags.

    Italic and bold are toggled independently. Unbalanced codes leave the last tag open.
    """
    output : list[str] = []
    italic = False
    bold = False
    position = 0
    while position < len(text):
        code = text[position:position + 2]
        if code == ITALIC_CODE:
            output.append("</i>" if italic else "<i>")
            italic = not italic
            position += 2
        elif code == BOLD_CODE:
            output.append("</b>" if bold else "<b>")
            bold = not bold
            position += 2
        else:
            output.append(text[position])
            position += 1

    return "".join(output)


def _SplitLines(content : str) -> list[str]:
    """ Split on CR and LF only; other Unicode line separators are part of the cue text """
    return NormaliseLineBreaks(content).split("\n")


@dataclass
class _ParseState:
    """ Accumulator threaded through the line parser """
    align_top : bool = False
    lines : list[SubtitleLine] = field(default_factory=list)
    error_count : int = 0
    dropped_count : int = 0


class DvdStudioProFileHandler(SubtitleFileHandler):
    r"""
    File handler for the DVD Studio Pro text subtitle format (.stl).

    Each cue is a single tab-delimited line with frame-based timecodes:

        00:00:01:05\t,\t00:00:03:10\t,\tFirst row|^Isecond row^I

    Lines starting with '$' are directives. Only $VertAlign is interpreted; it applies to
    every following cue until the next $VertAlign directive.

    Lines that are neither directives nor cues are counted in metadata['error_count']
    rather than failing the parse.
    """

    SUPPORTED_EXTENSIONS = {'.stl': 10}

    def __init__(self, settings : SettingsType|None = None):
        frame_rate = SettingsType(settings).get_float('frame_rate')
        self.frame_rate : float = ValidateFrameRate(frame_rate if frame_rate is not None else default_frame_rate)

    def load_file(self, path: str) -> SubtitleData:
        try:
            with open(path, 'r', encoding=default_encoding) as f:
                return self.parse_file(f)
        except UnicodeDecodeError:
            with open(path, 'r', encoding=fallback_encoding) as f:
                return self.parse_file(f)

    def parse_file(self, file_obj: TextIO) -> SubtitleData:
        """
        Parse file content and return SubtitleData with lines and metadata.
        """
        return self.parse_string(file_obj.read())

    def parse_string(self, content: str) -> SubtitleData:
        """
        Parse string content and return SubtitleData with lines and metadata.
        """
        return self.parse_lines(_SplitLines(content.lstrip('\ufeff')))

    def parse_lines(self, lines : Iterable[str], filename : str|None = None) -> SubtitleData:
        """
        Parse a sequence of text lines into subtitle lines.

        Never raises for malformed content: unrecognised lines are counted in metadata['error_count'],
        and cue lines whose timecodes cannot be read are skipped and counted in metadata['dropped_count'].
        """
        state = reduce(self._parse_line, lines, _ParseState())

        if state.error_count:
            logging.warning(_("{count} lines in {file} were not recognised as DVD Studio Pro subtitles").format(
                count=state.error_count, file=filename or _("subtitles")))

        if state.dropped_count:
            logging.warning(_("{count} cues with invalid timecodes were skipped").format(count=state.dropped_count))

        metadata = {
            'error_count': state.error_count,
            'dropped_count': state.dropped_count,
            'frame_rate': self.frame_rate
        }
        return SubtitleData(lines=state.lines, metadata=metadata, detected_format='.stl')

    def compose(self, data: SubtitleData) -> str:
        """
        Compose subtitle lines into DVD Studio Pro format.

        A $VertAlign directive is written whenever the alignment differs from the previous cue.
        Lines without start or end times are skipped.
        """
        output_lines = list(DEFAULT_HEADER)
        output_lines.append("")

        last_align_top = False
        skipped = 0
        for line in data.lines:
            if line.start is None or line.end is None:
                skipped += 1
                continue

            text = line.text or ""
            align_top = text.startswith(TOP_ALIGN_TAGS)
            if align_top != last_align_top:
                output_lines.append(ALIGN_TOP_DIRECTIVE if align_top else ALIGN_BOTTOM_DIRECTIVE)

            output_lines.append(FIELD_SEPARATOR.join([
                self.format_timecode(line.start),
                self.format_timecode(line.end),
                EncodeStyles(text)
            ]))
            last_align_top = align_top

        if skipped:
            logging.warning(_("{} lines were invalid and were not written to the output file").format(skipped))

        return LINE_BREAK.join(output_lines).strip()

    def matches_content(self, content: str) -> bool:
        """
        DVD Studio Pro files contain at least one tab-delimited timed record
        """
        return any(_TIMED_RECORD_PATTERN.match(line) for line in _SplitLines(content))

    def format_timecode(self, time : timedelta) -> str:
        """ Format a time as HH:MM:SS:FF at the handler's frame rate """
        hours, minutes, seconds, milliseconds = GetTimecodeFields(time)
        frames = MillisecondsToFrames(milliseconds, self.frame_rate)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}:{frames:02d}"

    def parse_timecode(self, timecode : str) -> timedelta|None:
        """
        Parse HH:MM:SS:FF (or HH:MM:SS;FF) into a timedelta, returning None if any field is invalid
        """
        parts = _TIMECODE_SEPARATORS.split(timecode.strip())
        if len(parts) < 4:
            return None

        try:
            hours, minutes, seconds, frames = (int(part) for part in parts[:4])
            milliseconds = FramesToMilliseconds(frames, self.frame_rate)
            return timedelta(hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds)
        except (ValueError, OverflowError):
            return None

    def _parse_line(self, state : _ParseState, line : str) -> _ParseState:
        """
        Fold step: classify one line and update the accumulated state
        """
        if line and line.strip() and line[0] != '$':
            if _TIMED_RECORD_PATTERN.match(line):
                subtitle_line = self._parse_timed_record(line, state.align_top, len(state.lines) + 1)
                if subtitle_line:
                    state.lines.append(subtitle_line)
                else:
                    logging.debug(f"Skipping cue with invalid timecodes: {line!r}")
                    state.dropped_count += 1
            else:
                state.error_count += 1

        elif line and line.lstrip().lower().startswith("$vertalign"):
            directive = line.replace(" ", "").replace("\t", "").lower()
            if directive == ALIGN_BOTTOM_DIRECTIVE.lower():
                state.align_top = False
            elif directive == ALIGN_TOP_DIRECTIVE.lower():
                state.align_top = True

        return state

    def _parse_timed_record(self, line : str, align_top : bool, number : int) -> SubtitleLine|None:
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != 3:
            return None

        start = self.parse_timecode(fields[0])
        end = self.parse_timecode(fields[1])
        if start is None or end is None:
            return None

        text = fields[2].rstrip().replace(" | ", "\n").replace("|", "\n")
        text = DecodeStyles(text)
        if align_top:
            text = TOP_ALIGN_TAG + text

        return SubtitleLine.Construct(number, start, end, text)

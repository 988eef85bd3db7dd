from datetime import timedelta
import os

import regex

from PyStlSubtitle.Helpers.Localization import _

MAX_FRAME_RATE = 100.0

# Frame rate assumed by frame-based formats when none is configured (PAL)
default_frame_rate = float(os.getenv('STL_FRAME_RATE', '25'))

_TIMESTAMP_PATTERN = regex.compile(r'^\s*(?:(?P<hours>\d+):)?(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})(?:[,.](?P<fraction>\d{1,3}))?\s*$')

def GetTimeDelta(time : timedelta|str|int|float|None, raise_exception : bool = False) -> timedelta|None:
    """
    Convert a timestamp string, a number of seconds or a timedelta into a timedelta
    """
    if time is None:
        return None

    if isinstance(time, timedelta):
        return time

    if isinstance(time, (int, float)):
        return timedelta(seconds=time)

    match = _TIMESTAMP_PATTERN.match(str(time))
    if not match:
        if raise_exception:
            raise ValueError(_("Invalid timestamp: {}").format(time))
        return None

    fraction = (match.group('fraction') or '0').ljust(3, '0')
    return timedelta(
        hours=int(match.group('hours') or 0),
        minutes=int(match.group('minutes')),
        seconds=int(match.group('seconds')),
        milliseconds=int(fraction)
    )

def GetTimecodeFields(time : timedelta) -> tuple[int, int, int, int]:
    """
    Split a timedelta into (hours, minutes, seconds, milliseconds). Hours are not wrapped at 24.
    """
    total_milliseconds = round(time.total_seconds() * 1000)
    total_seconds, milliseconds = divmod(total_milliseconds, 1000)
    total_minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)
    return hours, minutes, seconds, milliseconds

def TimedeltaToText(time : timedelta|None, include_milliseconds : bool = True) -> str:
    if time is None:
        return ""

    hours, minutes, seconds, milliseconds = GetTimecodeFields(time)
    if include_milliseconds:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

def ValidateFrameRate(frame_rate : float) -> float:
    """
    Frame counts are written as two digits, so the rate must stay below 100 fps
    """
    if frame_rate <= 0 or frame_rate >= MAX_FRAME_RATE:
        raise ValueError(_("Invalid frame rate: {}").format(frame_rate))
    return float(frame_rate)

def FramesToMilliseconds(frames : int, frame_rate : float = default_frame_rate) -> int:
    """
    Convert a frame index within a second to milliseconds, capped at 999
    """
    milliseconds = round(frames * (1000.0 / frame_rate))
    return min(milliseconds, 999)

def MillisecondsToFrames(milliseconds : int|float, frame_rate : float = default_frame_rate) -> int:
    """
    Convert milliseconds within a second to the nearest frame index.

    The result is clamped to the last frame of the second rather than rolling over.
    """
    frames = round(milliseconds / (1000.0 / frame_rate))
    if frames >= frame_rate:
        frames = MaxFrameIndex(frame_rate)
    return frames

def MaxFrameIndex(frame_rate : float = default_frame_rate) -> int:
    """ The highest frame index that can appear in a timecode at this frame rate """
    return int(frame_rate - 0.01)

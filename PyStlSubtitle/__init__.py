"""
PyStlSubtitle - DVD Studio Pro subtitle library

Reads and writes the text subtitle format used by DVD Studio Pro (.stl),
and converts between it and other registered subtitle formats.

Basic Usage
-----------

# Load subtitles, detecting the format from the file
data = load_subtitles("movie.srt")

# Write them as DVD Studio Pro subtitles at 29.97 fps
save_subtitles(data, "movie.stl", settings={'frame_rate': 29.97})

# Lines that could not be parsed are counted rather than raising
data = load_subtitles("movie.stl")
print(data.error_count)
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from PyStlSubtitle.Formats.DvdStudioProFileHandler import DvdStudioProFileHandler
from PyStlSubtitle.Helpers import GetInputPath
from PyStlSubtitle.Helpers.Localization import _
from PyStlSubtitle.SettingsType import SettingType, SettingsType
from PyStlSubtitle.SubtitleData import SubtitleData
from PyStlSubtitle.SubtitleError import SubtitleError, SubtitleParseError
from PyStlSubtitle.SubtitleFileHandler import SubtitleFileHandler
from PyStlSubtitle.SubtitleFormatRegistry import SubtitleFormatRegistry
from PyStlSubtitle.SubtitleLine import SubtitleLine
from PyStlSubtitle.version import __version__


def create_handler(extension : str|None = None, filename : str|None = None, settings : Mapping[str, SettingType]|None = None) -> SubtitleFileHandler:
    """
    Create a file handler for a format, passing settings to handlers that accept them.

    Parameters
    ----------
    extension : str|None
        File extension of the format, e.g. '.stl'.

    filename : str|None
        Filename to deduce the format from if no extension is given.

    settings : Mapping, optional
        Handler settings, e.g. `frame_rate` for frame-based formats.
    """
    handler = SubtitleFormatRegistry.create_handler(extension, filename)
    if settings and isinstance(handler, DvdStudioProFileHandler):
        handler = DvdStudioProFileHandler(SettingsType(settings))
    return handler


def load_subtitles(filepath : str, *, settings : Mapping[str, SettingType]|None = None, detect_format : bool = False) -> SubtitleData:
    """
    Load a subtitle file using the handler for its extension, or by detecting the format from its content.

    Returns
    -------
    SubtitleData : the parsed lines and file metadata. For DVD Studio Pro files
    `metadata['error_count']` is the number of unrecognised lines.
    """
    path = GetInputPath(filepath)
    if not path:
        raise ValueError(_("No subtitle file specified"))

    extension = SubtitleFormatRegistry.get_format_from_filename(path)
    if detect_format or not extension or extension not in SubtitleFormatRegistry.enumerate_formats():
        detected_extension = SubtitleFormatRegistry.detect_format_from_file(path)
        data = create_handler(detected_extension, settings=settings).load_file(path)
        data.detected_format = detected_extension
    else:
        data = create_handler(extension, settings=settings).load_file(path)

    logging.info(_("Loaded {count} lines from {path}").format(count=len(data.lines), path=path))
    return data


def save_subtitles(data : SubtitleData, filepath : str, *, settings : Mapping[str, SettingType]|None = None) -> str:
    """
    Compose subtitles in the format given by the file extension and write them to disk.

    Returns the composed content.
    """
    handler = create_handler(filename=filepath, settings=settings)
    content = handler.compose(data)

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    # The composed text already contains the line endings the format requires
    with open(filepath, 'w', encoding='utf-8', newline='') as f:
        f.write(content)

    logging.info(_("Saved {count} lines to {path}").format(count=len(data.lines), path=filepath))
    return content


__all__ = [
    '__version__',
    'DvdStudioProFileHandler',
    'SettingsType',
    'SubtitleData',
    'SubtitleError',
    'SubtitleFileHandler',
    'SubtitleFormatRegistry',
    'SubtitleLine',
    'SubtitleParseError',
    'create_handler',
    'load_subtitles',
    'save_subtitles',
]

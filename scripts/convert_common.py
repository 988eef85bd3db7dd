import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PyStlSubtitle.Helpers import GetOutputPath
from PyStlSubtitle.Helpers.Localization import _
from PyStlSubtitle.SettingsType import SettingsType
from PyStlSubtitle.SubtitleFormatRegistry import SubtitleFormatRegistry

config_dir = os.getenv('STL_CONFIG_DIR') or os.path.join(os.path.expanduser('~'), '.pystlsubtitle')

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the argument parser for subtitle conversion
    """
    pre_parser = ArgumentParser(add_help=False)
    pre_parser.add_argument('--list-formats', action='store_true')
    pre_args, _unknown = pre_parser.parse_known_args()
    if pre_args.list_formats:
        HandleFormatListing(pre_args)

    parser = ArgumentParser(description=description)
    parser.add_argument('input', help="Path to subtitle file (see --list-formats for supported formats)")
    parser.add_argument('-o', '--output', help="Output subtitle file path; format inferred from extension")
    parser.add_argument('-f', '--format', type=str, default=None, help="Output format extension, if not given by the output path (e.g. stl, srt)")
    parser.add_argument('--list-formats', action='store_true', help="List supported subtitle formats and exit")
    parser.add_argument('--framerate', type=float, default=None, help="Frame rate for frame-based timecodes (default 25)")
    parser.add_argument('--detect', action='store_true', help="Detect the input format from the file content instead of its extension")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def HandleFormatListing(args: Namespace) -> None:
    """Print supported subtitle formats and exit if requested."""
    if getattr(args, "list_formats", False):
        formats = SubtitleFormatRegistry.list_available_formats()
        if formats:
            print(f"Supported subtitle formats: {formats}")
        else:
            print("No subtitle formats available.")
        raise SystemExit(0)

def CreateSettings(args: Namespace) -> SettingsType:
    """ Collect handler settings from the command line """
    settings = SettingsType()
    settings.update({
        'frame_rate': args.framerate,
    })
    return settings

def GetTargetPath(args: Namespace) -> str:
    """
    Work out where to write the converted subtitles.

    Converting from DVD Studio Pro defaults to SRT, anything else defaults to DVD Studio Pro.
    """
    if args.output:
        return args.output

    input_format = SubtitleFormatRegistry.get_format_from_filename(args.input)
    target_format = args.format or ('.srt' if input_format == '.stl' else '.stl')
    output_path = GetOutputPath(args.input, target_format)
    if not output_path:
        raise ValueError(_("Unable to determine an output path for {}").format(args.input))
    return output_path

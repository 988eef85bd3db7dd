import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from check_imports import check_required_imports
check_required_imports(['PyStlSubtitle', 'srt', 'pysubs2', 'regex'])

from scripts.convert_common import (
    InitLogger,
    CreateArgParser,
    CreateSettings,
    GetTargetPath,
)

from PyStlSubtitle import load_subtitles, save_subtitles
from PyStlSubtitle.Helpers.Localization import _
from PyStlSubtitle.SubtitleData import SubtitleData

parser = CreateArgParser("Converts subtitles to and from DVD Studio Pro format")
args = parser.parse_args()

logger_options = InitLogger("stl-convert", args.debug)

try:
    settings = CreateSettings(args)
    output_path = GetTargetPath(args)

    data : SubtitleData = load_subtitles(args.input, settings=settings, detect_format=args.detect)
    if not data.lines:
        raise ValueError(_("Subtitle file contains no subtitles"))

    if data.error_count:
        logging.warning(_("{count} lines in {path} could not be parsed").format(count=data.error_count, path=args.input))

    save_subtitles(data, output_path, settings=settings)
    logging.info(_("Converted {count} subtitles from {source} to {target}").format(count=len(data.lines), source=args.input, target=output_path))

except Exception as e:
    print(_("Error: {}").format(e))
    raise

import os
import tempfile
import unittest
from typing import TextIO

from PyStlSubtitle.SubtitleFileHandler import SubtitleFileHandler
from PyStlSubtitle.SubtitleFormatRegistry import SubtitleFormatRegistry
from PyStlSubtitle.Formats.DvdStudioProFileHandler import DvdStudioProFileHandler
from PyStlSubtitle.Formats.SrtFileHandler import SrtFileHandler
from PyStlSubtitle.SubtitleData import SubtitleData
from PyStlSubtitle.SubtitleError import SubtitleParseError
from PyStlSubtitle.Helpers.Tests import (
    log_input_expected_error,
    log_input_expected_result,
    log_test_name,
    skip_if_debugger_attached,
)


class DummySrtHandler(SubtitleFileHandler):
    SUPPORTED_EXTENSIONS = {'.srt': 5}

    def parse_file(self, file_obj : TextIO) -> SubtitleData:
        return SubtitleData(lines=[], metadata={})

    def parse_string(self, content : str) -> SubtitleData:
        return SubtitleData(lines=[], metadata={})

    def compose(self, data : SubtitleData) -> str:
        return ""

    def load_file(self, path: str) -> SubtitleData:
        return self.parse_string("")


class TestSubtitleFormatRegistry(unittest.TestCase):
    def setUp(self):
        SubtitleFormatRegistry.clear()
        SubtitleFormatRegistry.discover()

    def tearDown(self):
        SubtitleFormatRegistry.clear()

    def _create_temp_file(self, content: str, suffix: str) -> str:
        with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False, encoding='utf-8') as f:
            f.write(content)
            temp_path = f.name
        self.addCleanup(os.remove, temp_path)
        return temp_path

    def test_AutoDiscovery(self):
        log_test_name("AutoDiscovery")
        test_cases = [('.stl', DvdStudioProFileHandler), ('.srt', SrtFileHandler)]
        for extension, expected in test_cases:
            with self.subTest(extension=extension):
                handler = SubtitleFormatRegistry.get_handler_by_extension(extension)
                log_input_expected_result(extension, expected, handler)
                self.assertIs(handler, expected)

    def test_ExtensionCaseAndDot(self):
        log_test_name("ExtensionCaseAndDot")
        for extension in ('.STL', 'stl', '.Stl'):
            with self.subTest(extension=extension):
                handler = SubtitleFormatRegistry.get_handler_by_extension(extension)
                log_input_expected_result(extension, DvdStudioProFileHandler, handler)
                self.assertIs(handler, DvdStudioProFileHandler)

    def test_UnknownExtension(self):
        if skip_if_debugger_attached("UnknownExtension"):
            return

        log_test_name("UnknownExtension")
        with self.assertRaises(ValueError) as e:
            SubtitleFormatRegistry.get_handler_by_extension('.unknown')
        log_input_expected_error('.unknown', ValueError, e.exception)

    def test_EnumerateFormats(self):
        log_test_name("EnumerateFormats")
        formats = SubtitleFormatRegistry.enumerate_formats()
        log_input_expected_result('formats', ['.srt', '.stl'], formats)
        self.assertIn('.srt', formats)
        self.assertIn('.stl', formats)
        self.assertEqual(formats, sorted(formats))

    def test_CreateHandler(self):
        log_test_name("CreateHandler")
        handler = SubtitleFormatRegistry.create_handler(filename='movie.STL')
        log_input_expected_result('movie.STL', DvdStudioProFileHandler, type(handler))
        self.assertIsInstance(handler, DvdStudioProFileHandler)

    def test_CreateHandlerWithoutFormat(self):
        if skip_if_debugger_attached("CreateHandlerWithoutFormat"):
            return

        log_test_name("CreateHandlerWithoutFormat")
        with self.assertRaises(ValueError) as e:
            SubtitleFormatRegistry.create_handler(filename='no_extension')
        log_input_expected_error('no_extension', ValueError, e.exception)

    def test_DuplicateRegistrationPriority(self):
        log_test_name("DuplicateRegistrationPriority")

        SubtitleFormatRegistry.disable_autodiscovery()

        SubtitleFormatRegistry.register_handler(DummySrtHandler)
        handler = SubtitleFormatRegistry.get_handler_by_extension('.srt')
        log_input_expected_result('priority', DummySrtHandler, handler)
        self.assertIs(handler, DummySrtHandler)

        SubtitleFormatRegistry.register_handler(SrtFileHandler)
        handler_after = SubtitleFormatRegistry.get_handler_by_extension('.srt')
        log_input_expected_result('priority', SrtFileHandler, handler_after)
        self.assertIs(handler_after, SrtFileHandler)

    def test_DetectFormatFromContent(self):
        log_test_name("DetectFormatFromContent")
        test_cases = [
            ("00:00:01:00\t,\t00:00:02:00\t,\tHello", '.stl'),
            ("1\n00:00:01,000 --> 00:00:02,000\nHello\n", None),
        ]
        for content, expected in test_cases:
            with self.subTest(content=content):
                result = SubtitleFormatRegistry.detect_format_from_content(content)
                log_input_expected_result(content, expected, result)
                self.assertEqual(result, expected)

    def test_DetectDvdStudioProFile(self):
        log_test_name("DetectDvdStudioProFile")
        content = "$VertAlign = Bottom\n00:00:01:00\t,\t00:00:02:00\t,\tDetected\n"
        path = self._create_temp_file(content, ".txt")

        data = SubtitleFormatRegistry.detect_format_and_load_file(path)

        log_input_expected_result(path, '.stl', data.detected_format)
        self.assertEqual(data.detected_format, '.stl')
        self.assertEqual(len(data.lines), 1)
        self.assertEqual(data.lines[0].text, "Detected")

    def test_DetectSrtFile(self):
        log_test_name("DetectSrtFile")
        content = "1\n00:00:01,000 --> 00:00:02,000\nHello World\n\n2\n00:00:03,000 --> 00:00:04,000\nSecond\n"
        path = self._create_temp_file(content, ".txt")

        data = SubtitleFormatRegistry.detect_format_and_load_file(path)

        log_input_expected_result(path, '.srt', data.detected_format)
        self.assertEqual(data.detected_format, '.srt')
        self.assertEqual(len(data.lines), 2)

    def test_DetectUnrecognisedFile(self):
        if skip_if_debugger_attached("DetectUnrecognisedFile"):
            return

        log_test_name("DetectUnrecognisedFile")
        path = self._create_temp_file("This is not a subtitle file at all\n", ".txt")

        with self.assertRaises(SubtitleParseError) as e:
            SubtitleFormatRegistry.detect_format_and_load_file(path)
        log_input_expected_error(path, SubtitleParseError, e.exception)


if __name__ == '__main__':
    unittest.main()

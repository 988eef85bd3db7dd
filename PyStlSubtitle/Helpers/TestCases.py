from collections.abc import Sequence
from datetime import timedelta
import unittest
from typing import Any

from PyStlSubtitle.Helpers.Tests import log_input_expected_result, log_test_name
from PyStlSubtitle.SubtitleData import SubtitleData
from PyStlSubtitle.SubtitleLine import SubtitleLine

class LoggedTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, description : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertEqual(expected, actual, description)

    def assertLoggedTrue(self, description : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, True, actual)
        self.assertTrue(actual, description)

    def assertLoggedSequenceEqual(self, description : str, expected : Sequence[Any], actual : Sequence[Any], input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertSequenceEqual(expected, actual, description)


class SubtitleTestCase(LoggedTestCase):
    def assertSameLines(self, expected : list[SubtitleLine], actual : list[SubtitleLine]) -> None:
        """
        Assert that two lists of lines have the same timing and text, line by line
        """
        self.assertLoggedEqual("line count", len(expected), len(actual))

        for expected_line, actual_line in zip(expected, actual):
            with self.subTest(line=expected_line.number):
                self.assertEqual(expected_line.number, actual_line.number)
                self.assertEqual(expected_line.start, actual_line.start)
                self.assertEqual(expected_line.end, actual_line.end)
                self.assertEqual(expected_line.text, actual_line.text)


def BuildSubtitleData(line_definitions : list[tuple[float, float, str]], metadata : dict[str, Any]|None = None) -> SubtitleData:
    """
    Build SubtitleData from (start seconds, end seconds, text) tuples
    """
    lines = [
        SubtitleLine.Construct(number, timedelta(seconds=start), timedelta(seconds=end), text)
        for number, (start, end, text) in enumerate(line_definitions, start=1)
    ]
    return SubtitleData(lines=lines, metadata=metadata or {})

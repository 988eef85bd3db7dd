import unittest
from datetime import timedelta

from PyStlSubtitle.Helpers.Time import (
    FramesToMilliseconds,
    GetTimeDelta,
    GetTimecodeFields,
    MaxFrameIndex,
    MillisecondsToFrames,
    TimedeltaToText,
    ValidateFrameRate,
)
from PyStlSubtitle.Helpers.TestCases import LoggedTestCase


class TestFrameConversion(LoggedTestCase):
    frame_rates = [23.976, 24.0, 25.0, 29.97, 30.0, 50.0, 59.94]

    def test_FramesRoundTrip(self):
        for frame_rate in self.frame_rates:
            with self.subTest(frame_rate=frame_rate):
                frames = list(range(MaxFrameIndex(frame_rate) + 1))
                result = [MillisecondsToFrames(FramesToMilliseconds(frame, frame_rate), frame_rate) for frame in frames]
                self.assertLoggedSequenceEqual(f"frames at {frame_rate} fps", frames, result, input_value=frame_rate)

    def test_MaxFrameIndex(self):
        test_cases = [(25.0, 24), (29.97, 29), (30.0, 29), (23.976, 23)]
        for frame_rate, expected in test_cases:
            with self.subTest(frame_rate=frame_rate):
                self.assertLoggedEqual("max frame index", expected, MaxFrameIndex(frame_rate), input_value=frame_rate)

    def test_FramesToMilliseconds(self):
        test_cases = [
            (0, 25.0, 0),
            (1, 25.0, 40),
            (24, 25.0, 960),
            (25, 25.0, 999),
            (99, 25.0, 999),
            (15, 29.97, 501),
            (12, 24.0, 500),
        ]
        for frames, frame_rate, expected in test_cases:
            with self.subTest(frames=frames, frame_rate=frame_rate):
                result = FramesToMilliseconds(frames, frame_rate)
                self.assertLoggedEqual("milliseconds", expected, result, input_value=(frames, frame_rate))

    def test_MillisecondsToFrames(self):
        test_cases = [
            (0, 25.0, 0),
            (39, 25.0, 1),
            (40, 25.0, 1),
            (500, 25.0, 12),
            (979, 25.0, 24),
            (999, 25.0, 24),
            (999, 29.97, 29),
            (999, 30.0, 29),
        ]
        for milliseconds, frame_rate, expected in test_cases:
            with self.subTest(milliseconds=milliseconds, frame_rate=frame_rate):
                result = MillisecondsToFrames(milliseconds, frame_rate)
                self.assertLoggedEqual("frames", expected, result, input_value=(milliseconds, frame_rate))

    def test_ValidateFrameRate(self):
        self.assertLoggedEqual("valid frame rate", 25.0, ValidateFrameRate(25))
        for frame_rate in (0, -1, 100, 250):
            with self.subTest(frame_rate=frame_rate):
                with self.assertRaises(ValueError):
                    ValidateFrameRate(frame_rate)


class TestTimeHelpers(LoggedTestCase):
    def test_GetTimeDelta(self):
        test_cases = [
            ("00:01:02,500", timedelta(minutes=1, seconds=2, milliseconds=500)),
            ("01:02:03.4", timedelta(hours=1, minutes=2, seconds=3, milliseconds=400)),
            ("02:03", timedelta(minutes=2, seconds=3)),
            (12.5, timedelta(seconds=12, milliseconds=500)),
            (timedelta(seconds=3), timedelta(seconds=3)),
            (None, None),
            ("not a time", None),
        ]
        for value, expected in test_cases:
            with self.subTest(value=value):
                self.assertLoggedEqual("timedelta", expected, GetTimeDelta(value), input_value=value)

    def test_GetTimeDeltaRaises(self):
        with self.assertRaises(ValueError):
            GetTimeDelta("not a time", raise_exception=True)

    def test_GetTimecodeFields(self):
        test_cases = [
            (timedelta(0), (0, 0, 0, 0)),
            (timedelta(hours=1, minutes=2, seconds=3, milliseconds=4), (1, 2, 3, 4)),
            (timedelta(hours=25, milliseconds=5), (25, 0, 0, 5)),
            (timedelta(seconds=59, microseconds=999600), (0, 1, 0, 0)),
        ]
        for time, expected in test_cases:
            with self.subTest(time=time):
                self.assertLoggedEqual("timecode fields", expected, GetTimecodeFields(time), input_value=time)

    def test_TimedeltaToText(self):
        self.assertLoggedEqual("text", "01:02:03,004", TimedeltaToText(timedelta(hours=1, minutes=2, seconds=3, milliseconds=4)))
        self.assertLoggedEqual("text without milliseconds", "01:02:03", TimedeltaToText(timedelta(hours=1, minutes=2, seconds=3), include_milliseconds=False))
        self.assertLoggedEqual("none", "", TimedeltaToText(None))


if __name__ == '__main__':
    unittest.main()

import logging
import os
import sys
import unittest

from PyStlSubtitle.Helpers.Tests import create_logfile

def discover_tests(base_dir : str|None = None, pattern : str = 'test_*.py') -> unittest.TestSuite:
    """Discover all test modules in tests/PyStlSubtitleTests.

    Args:
        base_dir: Base directory to search from. If None, uses parent of this file.
        pattern: Filename pattern for test modules.
    """
    if base_dir is None:
        base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    test_dir = os.path.join(base_dir, 'tests', 'PyStlSubtitleTests')
    if not os.path.exists(test_dir):
        return unittest.TestSuite()

    loader = unittest.TestLoader()
    original_dir = os.getcwd()
    try:
        os.chdir(base_dir)
        return loader.discover(test_dir, pattern=pattern, top_level_dir=base_dir)
    finally:
        os.chdir(original_dir)

if __name__ == '__main__':
    root_directory = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    results_directory = os.path.join(root_directory, 'test_results')

    logging.getLogger().setLevel(logging.INFO)
    create_logfile(results_directory, "unit_tests.log")

    runner = unittest.TextTestRunner(verbosity=1)
    result = runner.run(discover_tests(root_directory))
    if not result.wasSuccessful():
        print("Some tests failed or had errors.")
        sys.exit(1)

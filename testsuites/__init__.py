"""
Test suites package.

Keeps `testsuites` importable so page objects, the framework and both test
suites (`ui_testing/tests`, `unit`) resolve through one import root, for
IDE navigation and for `run_tests.py`.
"""

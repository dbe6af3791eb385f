"""
Unit tests for ``object_component_to_group.common.logging``.

Tests debug/warn/error output gating and safe_report fallback behaviour.
Pure Python. No bpy or mathutils required.
"""

import io
import unittest
from unittest.mock import patch

import object_component_to_group.common.logging as log_mod
from object_component_to_group.common.logging import debug, warn, error, safe_report


class TestDebug(unittest.TestCase):
    """debug() should only print when DEBUG_MODE is True."""

    def setUp(self):
        self.original = log_mod.DEBUG_MODE

    def tearDown(self):
        log_mod.DEBUG_MODE = self.original

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_debug_prints_when_enabled(self, mock_stdout):
        log_mod.DEBUG_MODE = True
        debug("converting", 3, "instances")
        self.assertIn("converting 3 instances", mock_stdout.getvalue())

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_debug_silent_when_disabled(self, mock_stdout):
        log_mod.DEBUG_MODE = False
        debug("secret")
        self.assertEqual(mock_stdout.getvalue(), "")


class TestWarnAndError(unittest.TestCase):
    """warn() and error() always print, with a prefix."""

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_warn_prefix(self, mock_stdout):
        warn("no components selected")
        self.assertTrue(mock_stdout.getvalue().startswith("WARNING:"))

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_error_prefix(self, mock_stdout):
        error("conversion failed")
        output = mock_stdout.getvalue()
        self.assertTrue(output.startswith("ERROR:"))
        self.assertIn("conversion failed", output)


class _FakeOperator:
    """Minimal operator stub with a report() method."""

    def __init__(self):
        self.reports = []

    def report(self, level, message):
        self.reports.append((level, message))


class _UnboundOperator:
    """Operator stub whose report() raises like an operator without a UI context."""

    def report(self, level, message):
        raise RuntimeError("No UI context")


class TestSafeReport(unittest.TestCase):
    """safe_report() delegates to operator.report() or falls back to the console."""

    def test_delegates_to_operator(self):
        op = _FakeOperator()
        safe_report(op, {"INFO"}, "Converted 2 component(s) to groups")
        self.assertEqual(op.reports, [({"INFO"}, "Converted 2 component(s) to groups")])

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_fallback_error(self, mock_stdout):
        safe_report(_UnboundOperator(), {"ERROR"}, "oops")
        self.assertIn("ERROR: oops", mock_stdout.getvalue())

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_fallback_warning(self, mock_stdout):
        safe_report(_UnboundOperator(), {"WARNING"}, "hmm")
        self.assertIn("WARNING: hmm", mock_stdout.getvalue())

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_fallback_info_only_in_debug_mode(self, mock_stdout):
        original = log_mod.DEBUG_MODE
        try:
            log_mod.DEBUG_MODE = False
            safe_report(_UnboundOperator(), {"INFO"}, "quiet")
            log_mod.DEBUG_MODE = True
            safe_report(_UnboundOperator(), {"INFO"}, "loud")
        finally:
            log_mod.DEBUG_MODE = original
        output = mock_stdout.getvalue()
        self.assertNotIn("quiet", output)
        self.assertIn("loud", output)

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_none_operator_goes_to_console(self, mock_stdout):
        safe_report(None, {"ERROR"}, "no context")
        self.assertIn("ERROR: no context", mock_stdout.getvalue())


if __name__ == "__main__":
    unittest.main()

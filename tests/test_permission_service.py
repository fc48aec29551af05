"""Unit tests for PermissionGate and the access table."""
import json
import os
import tempfile
import unittest
from unittest.mock import Mock, patch
from usagestats.config import OPSTR_GET_USAGE_STATS
from usagestats.models import OpMode, PermissionState
from usagestats.platform.access import load_access_table, lookup_mode, set_mode
from usagestats.platform.headless import HeadlessPlatform
from usagestats.services.permission_service import PermissionGate


class TestPermissionGate(unittest.TestCase):
    """Test permission evaluation against a mocked platform."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.platform = Mock()
        self.gate = PermissionGate(platform=self.platform, package="usagestats", uid=1000)

    def test_allowed_is_granted(self) -> None:
        self.platform.check_op.return_value = OpMode.ALLOWED

        self.assertEqual(self.gate.check_permission(), PermissionState.GRANTED)
        self.platform.check_op.assert_called_once_with(OPSTR_GET_USAGE_STATS, 1000, "usagestats")

    def test_other_modes_are_denied(self) -> None:
        for mode in (OpMode.IGNORED, OpMode.ERRORED, OpMode.DEFAULT):
            with self.subTest(mode=mode):
                self.platform.check_op.return_value = mode
                self.assertEqual(self.gate.check_permission(), PermissionState.DENIED)

    @patch("builtins.print")
    def test_platform_error_fails_closed(self, mock_print: Mock) -> None:
        """An erroring authority reads as denied, never raises."""
        self.platform.check_op.side_effect = OSError("authority unreachable")

        self.assertEqual(self.gate.check_permission(), PermissionState.DENIED)
        self.assertFalse(self.gate.is_granted())

    def test_not_cached(self) -> None:
        """Every check asks the platform again."""
        self.platform.check_op.side_effect = [OpMode.IGNORED, OpMode.ALLOWED]

        self.assertFalse(self.gate.is_granted())
        self.assertTrue(self.gate.is_granted())
        self.assertEqual(self.platform.check_op.call_count, 2)

    def test_request_launches_remediation_and_returns(self) -> None:
        self.platform.start_remediation.return_value = True

        self.assertIsNone(self.gate.request_permission())
        self.platform.start_remediation.assert_called_once_with(OPSTR_GET_USAGE_STATS, "usagestats")

    @patch("builtins.print")
    def test_request_failure_is_swallowed(self, mock_print: Mock) -> None:
        self.platform.start_remediation.side_effect = OSError("no surface")

        self.gate.request_permission()

        mock_print.assert_called_once()


class TestPermissionWithAccessTable(unittest.TestCase):
    """Test the gate against a real access file."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.tmpdir = tempfile.TemporaryDirectory()
        self.access_path = os.path.join(self.tmpdir.name, "access.json")
        self.db_path = os.path.join(self.tmpdir.name, "usage.db")
        self.platform = HeadlessPlatform(db_path=self.db_path, access_path=self.access_path)
        self.gate = PermissionGate(platform=self.platform, package="usagestats", uid=1000)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write(self, content: str) -> None:
        with open(self.access_path, "w") as f:
            f.write(content)

    def test_missing_file_is_denied(self) -> None:
        self.assertEqual(self.gate.check_permission(), PermissionState.DENIED)

    def test_corrupt_file_is_denied(self) -> None:
        self._write("{not json")
        self.assertEqual(self.platform.check_op(OPSTR_GET_USAGE_STATS, 1000, "usagestats"), OpMode.ERRORED)
        self.assertEqual(self.gate.check_permission(), PermissionState.DENIED)

    def test_granted_entry(self) -> None:
        self._write(json.dumps({OPSTR_GET_USAGE_STATS: {"usagestats": "allowed"}}))
        self.assertEqual(self.gate.check_permission(), PermissionState.GRANTED)

    def test_uid_entry_takes_precedence(self) -> None:
        self._write(json.dumps({OPSTR_GET_USAGE_STATS: {
            "usagestats": "allowed",
            "1000:usagestats": "ignored",
        }}))
        self.assertEqual(self.gate.check_permission(), PermissionState.DENIED)

    def test_other_package_is_not_granted(self) -> None:
        self._write(json.dumps({OPSTR_GET_USAGE_STATS: {"someone-else": "allowed"}}))
        self.assertEqual(self.gate.check_permission(), PermissionState.DENIED)

    @patch("builtins.print")
    def test_request_does_not_change_state(self, mock_print: Mock) -> None:
        """Checking right after a request sees the state from before it."""
        before = self.gate.check_permission()

        self.gate.request_permission()

        self.assertEqual(self.gate.check_permission(), before)
        self.assertFalse(os.path.exists(self.access_path))

    def test_state_changes_once_granted_out_of_band(self) -> None:
        self.assertFalse(self.gate.is_granted())

        set_mode(self.access_path, OPSTR_GET_USAGE_STATS, "usagestats", OpMode.ALLOWED)

        self.assertTrue(self.gate.is_granted())


class TestAccessTable(unittest.TestCase):
    """Test access table helpers."""

    def test_unknown_mode_is_errored(self) -> None:
        table = {OPSTR_GET_USAGE_STATS: {"usagestats": "maybe"}}
        self.assertEqual(lookup_mode(table, OPSTR_GET_USAGE_STATS, 1, "usagestats"), OpMode.ERRORED)

    def test_malformed_op_entry_is_default(self) -> None:
        table = {OPSTR_GET_USAGE_STATS: ["usagestats"]}
        self.assertEqual(lookup_mode(table, OPSTR_GET_USAGE_STATS, 1, "usagestats"), OpMode.DEFAULT)

    def test_set_mode_keeps_other_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "access.json")
            set_mode(path, "other_op", "pkg", OpMode.ALLOWED)
            set_mode(path, OPSTR_GET_USAGE_STATS, "pkg", OpMode.IGNORED)

            table = load_access_table(path)

        self.assertEqual(table, {
            "other_op": {"pkg": "allowed"},
            OPSTR_GET_USAGE_STATS: {"pkg": "ignored"},
        })

    def test_non_object_table_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "access.json")
            with open(path, "w") as f:
                f.write("[]")
            with self.assertRaises(ValueError):
                load_access_table(path)


if __name__ == "__main__":
    unittest.main()

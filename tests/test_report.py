import unittest
from dataclasses import FrozenInstanceError

from tests._test_path import SRC  # noqa: F401

from pixiedust.validation.report import Report, StageResult


class TestReport(unittest.TestCase):
    def test_report_is_frozen(self):
        sr = StageResult(stage="decode", passed=True, message="ok", metrics={"a": 1})
        rep = Report(passed=True, results=[sr])

        self.assertTrue(rep.passed)
        self.assertEqual(rep.results[0].stage, "decode")

        with self.assertRaises(FrozenInstanceError):
            rep.passed = False  # type: ignore[misc]

        with self.assertRaises(FrozenInstanceError):
            sr.message = "changed"  # type: ignore[misc]

    def test_failures(self):
        rep = Report(passed=False, results=[
            StageResult("a", True, "ok"),
            StageResult("b", False, "bad"),
        ])
        self.assertEqual([r.stage for r in rep.failures()], ["b"])

"""Tests for SaveDetector."""

from pathlib import Path
from unittest.mock import Mock

from tfview.core.pending.save_detector import IGNORED_DIRS, SaveDetector

ROOT = Path("/ws")


def make_detector(*scans: dict[Path, float]) -> tuple[SaveDetector, Mock]:
    fs = Mock()
    fs.file_mtimes.side_effect = list(scans)
    return SaveDetector(fs, ROOT), fs


class TestSaveDetector:
    """Tests for detecting saves between scans."""

    def test_first_scan_is_baseline(self):
        detector, _ = make_detector({ROOT / "a.ts": 1.0})
        assert detector.scan() == []

    def test_modified_and_new_files_reported_sorted(self):
        detector, _ = make_detector(
            {ROOT / "b.ts": 1.0, ROOT / "c.ts": 1.0},
            {ROOT / "b.ts": 2.0, ROOT / "c.ts": 1.0, ROOT / "a.ts": 5.0},
        )
        detector.scan()
        assert detector.scan() == [ROOT / "a.ts", ROOT / "b.ts"]

    def test_deleted_files_are_not_saves(self):
        detector, _ = make_detector({ROOT / "a.ts": 1.0}, {})
        detector.scan()
        assert detector.scan() == []

    def test_compares_against_previous_scan_only(self):
        """Test that a file saved once is not reported again."""
        detector, _ = make_detector(
            {ROOT / "a.ts": 1.0},
            {ROOT / "a.ts": 2.0},
            {ROOT / "a.ts": 2.0},
        )
        detector.scan()
        assert detector.scan() == [ROOT / "a.ts"]
        assert detector.scan() == []

    def test_skips_metadata_directories(self):
        detector, fs = make_detector({})
        detector.scan()
        fs.file_mtimes.assert_called_once_with(ROOT, IGNORED_DIRS)
        assert "$tf" in IGNORED_DIRS and ".tfview" in IGNORED_DIRS

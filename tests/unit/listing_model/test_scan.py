"""Tests for the concurrent directory scanner.

Covers direct and recursive listings, error surfacing for the scan root,
partial failure for nested directories, worker limits, and symlink cycles.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from dirbrowser.errors import DirectoryReadError
from dirbrowser.listing_model import SortMode, scan_directory, sort_entries
from dirbrowser.listing_model.scan import entry_from_stat


def _make_tree(root: Path) -> None:
    (root / "alpha.txt").write_text("alpha\n", encoding="utf-8")
    (root / "empty.bin").write_bytes(b"")
    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("# guide\n" * 4, encoding="utf-8")
    nested = docs / "nested"
    nested.mkdir()
    (nested / "deep.py").write_text("value = 1\n", encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "main.py").write_text("print('hi')\n", encoding="utf-8")


class ScanDirectoryTests(unittest.TestCase):
    def test_non_recursive_scan_lists_direct_children_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)

            entries = scan_directory(root, recurse=False)

            by_name = {entry.name: entry for entry in entries}
            self.assertEqual(len(entries), 4)
            self.assertEqual(set(by_name), {"alpha.txt", "empty.bin", "docs", "src"})
            self.assertTrue(by_name["docs"].is_directory)
            self.assertTrue(by_name["src"].is_directory)
            self.assertFalse(by_name["alpha.txt"].is_directory)
            self.assertEqual(by_name["alpha.txt"].size, (root / "alpha.txt").stat().st_size)
            self.assertEqual(by_name["empty.bin"].size, 0)
            self.assertEqual(by_name["docs"].size, 0)

    def test_recursive_scan_counts_every_descendant(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)

            entries = scan_directory(root, recurse=True)

            names = sorted(entry.name for entry in entries)
            self.assertEqual(
                names,
                ["alpha.txt", "deep.py", "docs", "empty.bin", "guide.md", "main.py", "nested", "src"],
            )
            deep = next(entry for entry in entries if entry.name == "deep.py")
            self.assertEqual(deep.size, len("value = 1\n"))

    def test_rescanning_unchanged_tree_yields_same_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)

            first = scan_directory(root, recurse=True)
            second = scan_directory(root, recurse=True)

            self.assertEqual(Counter(first), Counter(second))
            self.assertEqual(
                [entry.name for entry in sort_entries(first, SortMode.NAME)],
                [entry.name for entry in sort_entries(second, SortMode.NAME)],
            )

    def test_empty_directory_yields_no_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(scan_directory(Path(tmp), recurse=True), [])

    def test_entry_records_permission_bits_and_mtime(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            target = root / "locked.txt"
            target.write_text("x", encoding="utf-8")
            os.chmod(target, 0o640)
            os.utime(target, (1_600_000_000, 1_600_000_000))

            (entry,) = scan_directory(root, recurse=False)

            self.assertEqual(entry.permissions, 0o640)
            self.assertEqual(entry.permissions_text, "-rw-r-----")
            self.assertEqual(int(entry.modified_at.timestamp()), 1_600_000_000)
            self.assertIsNotNone(entry.modified_at.tzinfo)

    def test_missing_root_raises_directory_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "does-not-exist"
            with self.assertRaises(DirectoryReadError) as ctx:
                scan_directory(missing, recurse=False)
            self.assertEqual(ctx.exception.path, missing)
            self.assertIsInstance(ctx.exception.cause, FileNotFoundError)

    def test_file_root_raises_directory_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "plain.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(DirectoryReadError):
                scan_directory(target, recurse=True)


class ScanPartialFailureTests(unittest.TestCase):
    def test_unreadable_subdirectory_is_logged_and_its_subtree_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            blocked = root / "docs"
            real_scandir = os.scandir

            def flaky_scandir(path):
                if Path(path) == blocked:
                    raise PermissionError(13, "Permission denied", str(path))
                return real_scandir(path)

            with mock.patch("dirbrowser.listing_model.scan.os.scandir", side_effect=flaky_scandir):
                with self.assertLogs("dirbrowser.listing_model.scan", level="WARNING") as logs:
                    entries = scan_directory(root, recurse=True)

            names = sorted(entry.name for entry in entries)
            self.assertEqual(names, ["alpha.txt", "docs", "empty.bin", "main.py", "src"])
            self.assertTrue(any("docs" in line for line in logs.output))

    @unittest.skipIf(hasattr(os, "geteuid") and os.geteuid() == 0, "root ignores directory permissions")
    def test_permission_revoked_subdirectory_keeps_sibling_subtrees(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            locked = root / "docs"
            os.chmod(locked, 0)
            try:
                with self.assertLogs("dirbrowser.listing_model.scan", level="WARNING"):
                    entries = scan_directory(root, recurse=True)
            finally:
                os.chmod(locked, 0o755)

            names = {entry.name for entry in entries}
            self.assertIn("main.py", names)
            self.assertIn("docs", names)
            self.assertNotIn("guide.md", names)


class ScanConcurrencyTests(unittest.TestCase):
    def test_worker_limit_is_passed_to_thread_pool(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            with mock.patch(
                "dirbrowser.listing_model.scan.ThreadPoolExecutor",
                wraps=ThreadPoolExecutor,
            ) as executor_cls:
                entries = scan_directory(root, recurse=True, max_workers=2)

            self.assertEqual(len(entries), 8)
            executor_cls.assert_called_once()
            self.assertEqual(executor_cls.call_args.kwargs["max_workers"], 2)

    def test_single_worker_completes_deep_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            current = root
            for depth in range(12):
                current = current / f"level{depth}"
                current.mkdir()
                (current / f"file{depth}.txt").write_text("x" * depth, encoding="utf-8")

            entries = scan_directory(root, recurse=True, max_workers=1)

            self.assertEqual(len(entries), 24)
            self.assertEqual(sum(1 for entry in entries if entry.is_directory), 12)


@unittest.skipUnless(hasattr(os, "symlink"), "symlinks unavailable")
class ScanSymlinkTests(unittest.TestCase):
    def test_symlink_cycle_terminates_when_following_links(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            inner = root / "inner"
            inner.mkdir()
            (inner / "file.txt").write_text("x", encoding="utf-8")
            os.symlink(root, inner / "loop")

            entries = scan_directory(root, recurse=True, follow_symlinks=True)

            names = sorted(entry.name for entry in entries)
            self.assertEqual(names, ["file.txt", "inner", "loop"])
            loop = next(entry for entry in entries if entry.name == "loop")
            self.assertTrue(loop.is_directory)

    def test_symlinks_are_not_followed_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            target = root / "target"
            target.mkdir()
            (target / "inside.txt").write_text("x", encoding="utf-8")
            os.symlink(target, root / "link")

            entries = scan_directory(root, recurse=True)

            link = next(entry for entry in entries if entry.name == "link")
            self.assertFalse(link.is_directory)
            self.assertEqual(sorted(entry.name for entry in entries), ["inside.txt", "link", "target"])

    def test_dangling_symlink_is_listed_when_following_links(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("x", encoding="utf-8")
            os.symlink(root / "gone", root / "dangling")

            entries = scan_directory(root, recurse=True, follow_symlinks=True)

            self.assertEqual(sorted(entry.name for entry in entries), ["a.txt", "dangling"])
            dangling = next(entry for entry in entries if entry.name == "dangling")
            self.assertFalse(dangling.is_directory)


class EntryFromStatTests(unittest.TestCase):
    def _stat(self, mtime: float) -> os.stat_result:
        return os.stat_result((0o100644, 1, 1, 1, 0, 0, 5, 0, mtime, 0))

    def test_regular_mtime_is_local_and_aware(self) -> None:
        entry = entry_from_stat("a.txt", self._stat(1_700_000_000))
        self.assertEqual(entry.size, 5)
        self.assertEqual(entry.permissions, 0o644)
        self.assertIsNotNone(entry.modified_at.tzinfo)
        self.assertEqual(entry.modified_at.timestamp(), 1_700_000_000)

    def test_out_of_range_mtime_is_clamped(self) -> None:
        late = entry_from_stat("late", self._stat(1e20))
        early = entry_from_stat("early", self._stat(-1e20))

        self.assertEqual(late.modified_at, datetime.max.replace(tzinfo=timezone.utc))
        self.assertEqual(early.modified_at, datetime.min.replace(tzinfo=timezone.utc))
        self.assertLess(early.modified_at, late.modified_at)


if __name__ == "__main__":
    unittest.main()

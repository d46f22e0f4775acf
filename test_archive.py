from __future__ import annotations

import unittest

from txtar.archive import Archive, File, find
from txtar.errors import FileNotInArchive, TxtarError
from txtar.parser import parse


SAMPLE = """comment1
comment2
-- file1 --
This is file 1
-- file2 --
this is file2
"""


class LookupTests(unittest.TestCase):
    def setUp(self):
        self.archive = parse(SAMPLE)

    def test_find_present(self):
        f = find(self.archive, "file2")
        self.assertIsNotNone(f)
        self.assertEqual(f.name, "file2")
        self.assertEqual(f.data, "this is file2\n")

    def test_find_absent(self):
        self.assertIsNone(find(self.archive, "not-exists"))
        self.assertIsNone(find(Archive(), "file1"))

    def test_find_is_exact(self):
        self.assertIsNone(find(self.archive, " file1"))
        self.assertIsNone(find(self.archive, "FILE1"))

    def test_find_returns_first_duplicate(self):
        a = Archive(files=[File("x", "first\n"), File("x", "second\n")])
        self.assertIs(find(a, "x"), a.files[0])

    def test_get_and_contains(self):
        self.assertTrue(self.archive.contains("file1"))
        self.assertFalse(self.archive.contains("not-exists"))
        self.assertIn("file1", self.archive)
        self.assertNotIn("not-exists", self.archive)
        self.assertNotIn(1, self.archive)
        self.assertEqual(self.archive.get("file1").data, "This is file 1\n")
        self.assertIsNone(self.archive.get("not-exists"))

    def test_getitem(self):
        self.assertEqual(self.archive["file2"].data, "this is file2\n")
        with self.assertRaises(FileNotInArchive) as cm:
            self.archive["not-exists"]
        self.assertIsInstance(cm.exception, KeyError)
        self.assertIsInstance(cm.exception, TxtarError)
        self.assertIn("not-exists", str(cm.exception))

    def test_names_and_iteration(self):
        self.assertEqual(self.archive.names(), ["file1", "file2"])
        self.assertEqual([f.name for f in self.archive], ["file1", "file2"])


class ArchiveModelTests(unittest.TestCase):
    def test_defaults_are_independent(self):
        a = Archive()
        b = Archive()
        a.files.append(File("x", ""))
        self.assertEqual(b.files, [])

    def test_caller_mutation_is_reflected(self):
        a = parse(SAMPLE)
        del a.files[0]
        a.files.append(File("new", "n\n"))
        self.assertEqual(a.to_text(), "comment1\ncomment2\n-- file2 --\nthis is file2\n-- new --\nn\n")

    def test_equality(self):
        self.assertEqual(parse(SAMPLE), parse(SAMPLE))
        self.assertNotEqual(parse(SAMPLE), Archive(comment="comment1\ncomment2\n"))


if __name__ == "__main__":
    unittest.main()

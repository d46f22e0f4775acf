from __future__ import annotations

import unittest

from txtar import Archive, File, format, parse


class FormatTests(unittest.TestCase):
    def test_empty_archive(self):
        self.assertEqual(format(Archive()), "")

    def test_comment_and_files(self):
        a = Archive(
            comment="comment1\ncomment2\n",
            files=[File("file1", "File 1 text.\n"), File("empty", ""), File("file 2", "two\n")],
        )
        self.assertEqual(
            format(a),
            "comment1\ncomment2\n-- file1 --\nFile 1 text.\n-- empty --\n-- file 2 --\ntwo\n",
        )

    def test_data_written_verbatim(self):
        # Nothing is added after data lacking a final newline.
        a = Archive(files=[File("a", "no newline"), File("b", "x\n")])
        self.assertEqual(format(a), "-- a --\nno newline-- b --\nx\n")

    def test_name_written_without_padding(self):
        self.assertEqual(format(Archive(files=[File("", "")])), "--  --\n")
        self.assertEqual(format(Archive(files=[File(" x ", "")])), "--  x  --\n")

    def test_to_text(self):
        a = Archive(comment="c\n", files=[File("f", "d\n")])
        self.assertEqual(a.to_text(), format(a))

    def test_format_of_parse_reproduces_text(self):
        samples = [
            "",
            "just a comment\n",
            "-- a --\nline1\n-- b --\nline2\n",
            "intro\n\n-- dir/one.txt --\n1\n-- dir/two.txt --\n-- three --\n\n3\n",
            "-- crlf --\r\nx\r\n",
        ]
        for text in samples:
            with self.subTest(text=text):
                out = format(parse(text))
                if text.startswith("-- crlf"):
                    # marker lines are always rendered with "\n"
                    self.assertEqual(out, "-- crlf --\nx\r\n")
                else:
                    self.assertEqual(out, text)

    def test_format_adds_only_missing_final_newline(self):
        self.assertEqual(format(parse("c1\n-- f1 --\ncontent")), "c1\n-- f1 --\ncontent\n")
        self.assertEqual(format(parse("comment")), "comment\n")

    def test_parse_of_format_roundtrip(self):
        archives = [
            Archive(),
            Archive(comment="only\n"),
            Archive(files=[File("a", ""), File("a", "dup\n")]),
            Archive(comment="c\n", files=[File("x/y.go", "package y\n\nfunc Y() {}\n"), File("", "blank name\n")]),
        ]
        for a in archives:
            with self.subTest(archive=a):
                self.assertEqual(parse(format(a)), a)

    def test_marker_like_data_does_not_roundtrip(self):
        a = Archive(files=[File("a", "-- b --\n")])
        back = parse(format(a))
        self.assertNotEqual(back, a)
        self.assertEqual(back.names(), ["a", "b"])


if __name__ == "__main__":
    unittest.main()

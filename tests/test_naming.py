import unittest as ut

from fsxfer.exc import InvalidArgumentError
from fsxfer.naming import next_name, next_item_name, split_extension, check_name_segment, natural_sort_key


class TestNextName(ut.TestCase):

    def test_unsequenced(self):
        self.assertEqual(next_name("foo"), "foo(2)")

    def test_increment(self):
        self.assertEqual(next_name("foo(2)"), "foo(3)")

    def test_carry(self):
        self.assertEqual(next_name("foo(9)"), "foo(10)")
        self.assertEqual(next_name("foo(99)"), "foo(100)")

    def test_non_digit_in_parens(self):
        self.assertEqual(next_name("foo(a)"), "foo(a)(2)")

    def test_only_sequence(self):
        self.assertEqual(next_name("(2)"), "(3)")

    def test_digits_without_open_paren(self):
        self.assertEqual(next_name("foo2)"), "foo2)(2)")
        self.assertEqual(next_name("2)"), "2)(2)")

    def test_empty_parens(self):
        self.assertEqual(next_name("foo()"), "foo()(2)")

    def test_multi_digit_sequence(self):
        self.assertEqual(next_name("report(123)"), "report(124)")

    def test_zero(self):
        self.assertEqual(next_name("foo(0)"), "foo(1)")

    def test_only_last_group_counts(self):
        self.assertEqual(next_name("foo(2)(5)"), "foo(2)(6)")
        self.assertEqual(next_name("foo(2) bar"), "foo(2) bar(2)")

    def test_empty(self):
        self.assertEqual(next_name(""), "(2)")

    def test_unsequenced_property(self):
        for value in ("a", "abc.txt", "x)", "with space", "foo(b)", "foo)"):
            with self.subTest(value=value):
                self.assertEqual(next_name(value), value + "(2)")

    def test_sequenced_property(self):
        for base in ("a", "", "x y", "foo(a)"):
            for n in (0, 1, 2, 9, 10, 41):
                with self.subTest(base=base, n=n):
                    self.assertEqual(next_name(f"{base}({n})"), f"{base}({n + 1})")


class TestItemNames(ut.TestCase):

    def test_split_extension(self):
        self.assertEqual(split_extension("data.txt"), ("data", ".txt"))
        self.assertEqual(split_extension("archive.tar.gz"), ("archive.tar", ".gz"))
        self.assertEqual(split_extension("README"), ("README", ""))
        self.assertEqual(split_extension(".bashrc"), ("", ".bashrc"))

    def test_file_names_keep_extension(self):
        self.assertEqual(next_item_name("data.txt", True), "data(2).txt")
        self.assertEqual(next_item_name("data(2).txt", True), "data(3).txt")
        self.assertEqual(next_item_name("README", True), "README(2)")

    def test_folder_names_use_full_name(self):
        self.assertEqual(next_item_name("v1.0", False), "v1.0(2)")
        self.assertEqual(next_item_name("A(2)", False), "A(3)")


class TestNameSegment(ut.TestCase):

    def test_valid(self):
        check_name_segment("hello.txt", "/\0")

    def test_blank(self):
        self.assertRaises(InvalidArgumentError, check_name_segment, "", "/")
        self.assertRaises(InvalidArgumentError, check_name_segment, "   ", "/")
        self.assertRaises(InvalidArgumentError, check_name_segment, None, "/")

    def test_reserved(self):
        self.assertRaises(InvalidArgumentError, check_name_segment, ".", "/")
        self.assertRaises(InvalidArgumentError, check_name_segment, "..", "/")

    def test_invalid_characters(self):
        for ch in "/\0":
            with self.subTest(ch=ch):
                self.assertRaises(InvalidArgumentError, check_name_segment, f"a{ch}b", "/\0")


class TestNaturalSort(ut.TestCase):

    def test_numbers_by_value(self):
        names = ["file10", "file2", "file1", "File3"]
        self.assertEqual(sorted(names, key=natural_sort_key), ["file1", "file2", "File3", "file10"])

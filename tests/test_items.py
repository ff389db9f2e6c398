import os
import tempfile
import unittest as ut

from fsxfer.exc import InvalidArgumentError
from fsxfer.items import File, Folder, StorageItemType
from fsxfer.locator import StorageLocator
from fsxfer.storage.local import LocalProvider
from fsxfer.storage.memory import MemoryProvider


ROOT = "memory://test/"


class TestStorageItems(ut.TestCase):

    def setUp(self):
        self.provider = MemoryProvider("test")
        self.provider.create_directory(ROOT + "a")
        self.provider.write_bytes(ROOT + "a/data.txt", b"hello")

    def test_paths_are_normalized(self):
        file = File(ROOT + "a//data.txt", self.provider)
        folder = Folder(ROOT + "a", self.provider)
        self.assertEqual(file.path, ROOT + "a/data.txt")
        self.assertEqual(folder.path, ROOT + "a/")
        self.assertEqual(Folder(ROOT + "a///", self.provider).path, ROOT + "a/")

    def test_value_equality(self):
        first = File(ROOT + "a/data.txt", self.provider)
        second = File(ROOT + "a/./data.txt", self.provider)
        self.assertIsNot(first, second)
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(len({first, second}), 1)
        self.assertNotEqual(first, File(ROOT + "a/other.txt", self.provider))

    def test_names(self):
        file = File(ROOT + "a/data.txt", self.provider)
        self.assertEqual(file.name, "data.txt")
        self.assertEqual(file.pure_name, "data")
        self.assertEqual(file.extension, ".txt")
        self.assertEqual(file.item_type, StorageItemType.FILE)
        folder = Folder(ROOT + "a", self.provider)
        self.assertEqual(folder.name, "a")
        self.assertEqual(folder.item_type, StorageItemType.FOLDER)

    def test_file_without_extension(self):
        self.provider.write_bytes(ROOT + "a/README", b"")
        file = File(ROOT + "a/README", self.provider)
        self.assertEqual(file.pure_name, "README")
        self.assertEqual(file.extension, "")

    def test_file_over_folder_is_rejected(self):
        self.assertRaises(InvalidArgumentError, File, ROOT + "a", self.provider)

    def test_folder_must_exist(self):
        self.assertRaises(InvalidArgumentError, Folder, ROOT + "missing", self.provider)
        self.assertRaises(InvalidArgumentError, Folder, ROOT + "a/data.txt", self.provider)

    def test_blank_path(self):
        self.assertRaises(InvalidArgumentError, File, "", self.provider)
        self.assertRaises(InvalidArgumentError, File, None, self.provider)

    def test_missing_file_is_allowed(self):
        file = File(ROOT + "a/nothing.txt", self.provider)
        self.assertFalse(file.exists)

    def test_exists_is_not_cached(self):
        file = File(ROOT + "a/data.txt", self.provider)
        self.assertTrue(file.exists)
        self.provider.delete(ROOT + "a/data.txt")
        self.assertFalse(file.exists)

    def test_stale_handle_keeps_type(self):
        file = File(ROOT + "a/data.txt", self.provider)
        self.provider.delete(ROOT + "a/data.txt")
        self.provider.create_directory(ROOT + "a/data.txt")
        self.assertEqual(file.item_type, StorageItemType.FILE)
        self.assertFalse(file.exists)

    def test_parent(self):
        file = File(ROOT + "a/data.txt", self.provider)
        self.assertEqual(file.parent, Folder(ROOT + "a", self.provider))
        self.assertEqual(file.parent.parent.path, ROOT)
        self.assertIsNone(file.parent.parent.parent)

    def test_parent_is_cleared_by_move(self):
        self.provider.create_directory(ROOT + "b")
        file = File(ROOT + "a/data.txt", self.provider)
        self.assertEqual(file.parent.path, ROOT + "a/")
        file.move(Folder(ROOT + "b", self.provider))
        self.assertEqual(file.parent.path, ROOT + "b/")
        self.assertEqual(file.name, "data.txt")

    def test_check_exists(self):
        file = File(ROOT + "a/data.txt", self.provider)
        self.assertTrue(file.check_exists(ROOT + "a"))
        self.assertTrue(file.check_exists_file(ROOT + "a/data.txt"))
        self.assertFalse(file.check_exists_file(ROOT + "a"))
        self.assertFalse(file.check_exists(ROOT + "b"))


class TestFolderContents(ut.TestCase):

    def setUp(self):
        self.provider = MemoryProvider("test")
        self.root = Folder(ROOT, self.provider)
        for name in ("file10.txt", "file2.txt", "file1.txt"):
            self.provider.write_bytes(ROOT + name, b"x")
        self.provider.create_directory(ROOT + "sub/inner")
        self.provider.write_bytes(ROOT + "sub/inner/deep.txt", b"x")

    def test_files_in_natural_order(self):
        names = [f.name for f in self.root.get_files()]
        self.assertEqual(names, ["file1.txt", "file2.txt", "file10.txt"])

    def test_folders(self):
        self.assertEqual([f.path for f in self.root.get_folders()], [ROOT + "sub/"])
        self.assertEqual(
            [f.path for f in self.root.get_folders(recursive=True)],
            [ROOT + "sub/", ROOT + "sub/inner/"]
        )

    def test_recursive_files(self):
        self.assertIn(File(ROOT + "sub/inner/deep.txt", self.provider), self.root.get_files(recursive=True))
        self.assertEqual(len(self.root.get_files(recursive=True)), 4)

    def test_items(self):
        items = self.root.get_items()
        self.assertEqual(len(items), 4)
        self.assertEqual(self.root.list(), items)
        self.assertEqual(len(self.root.list(recursive=True)), 6)

    def test_is_empty(self):
        self.assertFalse(self.root.is_empty())
        sub = Folder(ROOT + "sub", self.provider)
        self.provider.delete(ROOT + "sub/inner/deep.txt")
        self.assertFalse(sub.is_empty())
        self.assertTrue(sub.is_empty(include_folders=False))
        inner = Folder(ROOT + "sub/inner", self.provider)
        self.assertTrue(inner.is_empty())

    def test_create_subfolder(self):
        new_folder = self.root.create_subfolder("made")
        self.assertEqual(new_folder.path, ROOT + "made/")
        self.assertTrue(new_folder.exists)
        self.assertRaises(InvalidArgumentError, self.root.create_subfolder, "bad/name")

    def test_create(self):
        folder = Folder.create(ROOT + "x/y", self.provider)
        self.assertTrue(folder.exists)
        self.assertEqual(folder.parent.path, ROOT + "x/")


class TestStorageLocator(ut.TestCase):

    def setUp(self):
        self.provider = MemoryProvider("test")
        self.provider.create_directory(ROOT + "a")
        self.provider.write_bytes(ROOT + "a/data.txt", b"hello")
        self.locator = StorageLocator(self.provider)

    def test_locate(self):
        self.assertEqual(self.locator.locate(ROOT + "a"), Folder(ROOT + "a", self.provider))
        self.assertEqual(self.locator.locate(ROOT + "a/data.txt"), File(ROOT + "a/data.txt", self.provider))
        self.assertIsNone(self.locator.locate(ROOT + "b"))

    def test_exists(self):
        self.assertTrue(self.locator.exists(ROOT + "a"))
        self.assertTrue(self.locator.folder_exists(ROOT + "a"))
        self.assertFalse(self.locator.file_exists(ROOT + "a"))
        self.assertTrue(self.locator.file_exists(ROOT + "a/data.txt"))
        self.assertFalse(self.locator.exists(ROOT + "a/none.txt"))

    def test_get(self):
        self.assertEqual(self.locator.get_folder(ROOT + "a").path, ROOT + "a/")
        self.assertRaises(InvalidArgumentError, self.locator.get_folder, ROOT + "a/data.txt")
        self.assertRaises(InvalidArgumentError, self.locator.get_file, ROOT + "a")


class TestItemIdentity(ut.TestCase):

    def test_provider_is_part_of_identity(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "data.txt")
            sensitive = File(path, LocalProvider(case_sensitive=True))
            self.assertEqual(sensitive, File(path, LocalProvider(case_sensitive=True)))
            self.assertEqual(hash(sensitive), hash(File(path, LocalProvider(case_sensitive=True))))
            self.assertNotEqual(sensitive, File(path, LocalProvider(case_sensitive=False)))

    def test_memory_case_sensitivity_is_part_of_identity(self):
        memory = MemoryProvider("test")
        other = MemoryProvider("test", case_sensitive=False)
        self.assertEqual(Folder(ROOT, memory), Folder(ROOT, MemoryProvider("test")))
        self.assertNotEqual(Folder(ROOT, memory), Folder(ROOT, other))

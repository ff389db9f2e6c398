"""Files and folders on a storage provider.

    Items are light values: a normalized path plus the provider it lives on.
    Two items over the same path are equal. The type of an item is decided
    when it is built and never changes, even if the real object on the
    provider is later replaced by something else.
"""
from __future__ import annotations
import enum
import typing as t

from fsxfer.exc import InvalidArgumentError
from fsxfer.naming import split_extension, natural_sort_key, check_name_segment

if t.TYPE_CHECKING:
    from fsxfer.storage.base import BaseStorageProvider
    from fsxfer.engine import TransferEngine


class StorageItemType(enum.Enum):
    """Whether an item is a file or a folder."""

    FILE = "file"
    FOLDER = "folder"


class NameCollisionOption(enum.Enum):
    """What to do when the destination of a copy, move or rename is already taken."""

    GENERATE_UNIQUE_NAME = "generate_unique_name"
    REPLACE_EXISTING = "replace_existing"
    FAIL_IF_EXISTS = "fail_if_exists"


class StorageItem:

    item_type: StorageItemType = None

    def __init__(self, path: str, provider: BaseStorageProvider, verify: bool = True):
        if path is None or str(path).strip() == "":
            raise InvalidArgumentError("Path cannot be blank", 1004)
        self._provider = provider
        self._cached_properties = {}
        self._path = provider.normalize(path, self.item_type == StorageItemType.FOLDER)
        if verify:
            self._verify()

    def _verify(self):
        pass

    def __str__(self):
        return self._path

    def __repr__(self):
        return f"{self.__class__.__name__}({self._path!r})"

    def __eq__(self, other):
        if not isinstance(other, StorageItem):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def _identity(self) -> tuple:
        return type(self._provider), self._provider.case_sensitive, self.item_type, self._path

    def clear_cache(self):
        """Clear the local cache of all values."""
        self._cached_properties = {}

    def _with_cache(self, key: str, callback: callable, *args, **kwargs):
        if key not in self._cached_properties:
            self._cached_properties[key] = callback(*args, **kwargs)
        return self._cached_properties[key]

    def _set_path(self, path: str):
        """Point this item at a new location after it was moved."""
        self._path = self._provider.normalize(path, self.item_type == StorageItemType.FOLDER)
        self.clear_cache()

    def _engine(self) -> TransferEngine:
        from fsxfer.engine import TransferEngine
        return TransferEngine(self._provider)

    @property
    def path(self) -> str:
        """The full, normalized path of the item."""
        return self._path

    @property
    def provider(self) -> BaseStorageProvider:
        return self._provider

    @property
    def name(self) -> str:
        """The name of the item including the file name extension if there is one."""
        return self._with_cache('name', self._provider.name_of, self._path)

    @property
    def parent(self) -> t.Optional[Folder]:
        """The folder containing this item, or None at a root."""
        return self._with_cache('parent', self._find_parent)

    def _find_parent(self) -> t.Optional[Folder]:
        parent_path = self._provider.parent_of(self._path)
        if parent_path is None:
            return None
        return Folder(parent_path, self._provider, verify=False)

    @property
    def exists(self) -> bool:
        """Check (every time) if the item is on the provider with the same type."""
        return self._provider.kind(self._path) == self.item_type

    def check_exists(self, path: str) -> bool:
        """Check if any item exists at path on the same provider."""
        from fsxfer.locator import StorageLocator
        return StorageLocator(self._provider).exists(path)

    def copy(self,
             destination: t.Union[str, Folder],
             desired_name: t.Optional[str] = None,
             option: t.Optional[NameCollisionOption] = None) -> StorageItem:
        """Copy the item to a full path, or into a folder (optionally with a new name)."""
        return self._engine().copy(self, destination, desired_name, option)

    def move(self,
             destination: t.Union[str, Folder],
             desired_name: t.Optional[str] = None,
             option: t.Optional[NameCollisionOption] = None) -> StorageItem:
        """Move the item to a full path, or into a folder (optionally with a new name)."""
        return self._engine().move(self, destination, desired_name, option)

    def rename(self, desired_name: str, option: t.Optional[NameCollisionOption] = None) -> StorageItem:
        """Rename the item within its current folder."""
        return self._engine().rename(self, desired_name, option)

    def delete(self):
        """Delete the item (folders are deleted with their contents)."""
        self._engine().delete(self)


class File(StorageItem):

    item_type = StorageItemType.FILE

    def _verify(self):
        if self._provider.kind(self._path) == StorageItemType.FOLDER:
            raise InvalidArgumentError(f"Path [{self._path}] is a folder", 1009)

    @property
    def pure_name(self) -> str:
        """The name of the file without its extension."""
        return split_extension(self.name)[0]

    @property
    def extension(self) -> str:
        """The extension of the file, including the dot, or an empty string."""
        return split_extension(self.name)[1]

    def rename_ignore_extension(self, desired_name: str, option: t.Optional[NameCollisionOption] = None) -> File:
        """Rename the file but keep its current extension."""
        return self._engine().rename_ignore_extension(self, desired_name, option)

    def replace(self, other: StorageItem) -> File:
        """Move this file onto the path of other, replacing it."""
        return self._engine().replace(self, other)

    def check_exists_file(self, path: str) -> bool:
        """Check if a file (and not a folder) exists at path on the same provider."""
        from fsxfer.locator import StorageLocator
        return StorageLocator(self._provider).file_exists(path)


class Folder(StorageItem):

    item_type = StorageItemType.FOLDER

    def _verify(self):
        if self._provider.kind(self._path) != StorageItemType.FOLDER:
            raise InvalidArgumentError(f"Path [{self._path}] is not an existing folder", 1010)

    @classmethod
    def create(cls, path: str, provider: BaseStorageProvider) -> Folder:
        """Create a new folder (and any missing parents)."""
        from fsxfer.engine import TransferEngine
        return TransferEngine(provider).create_folder(path)

    def create_subfolder(self, name: str) -> Folder:
        check_name_segment(name, self._provider.invalid_name_chars())
        return self._engine().create_folder(self._provider.join(self._path, name, True))

    def _children(self) -> t.Iterable[StorageItem]:
        from fsxfer.locator import StorageLocator
        locator = StorageLocator(self._provider)
        for child_path in self._provider.list_children(self._path):
            item = locator.locate(child_path)
            # Skip anything removed since the listing
            if item is not None:
                yield item

    def _walk(self, recursive: bool) -> t.Iterable[StorageItem]:
        for item in self._children():
            yield item
            if recursive and item.item_type == StorageItemType.FOLDER:
                yield from item._walk(True)

    def get_files(self, recursive: bool = False) -> list[File]:
        """Get the files in this folder, in natural path order."""
        files = [x for x in self._walk(recursive) if x.item_type == StorageItemType.FILE]
        return sorted(files, key=lambda x: natural_sort_key(x.path))

    def get_folders(self, recursive: bool = False) -> list[Folder]:
        """Get the sub-folders of this folder, in natural path order."""
        folders = [x for x in self._walk(recursive) if x.item_type == StorageItemType.FOLDER]
        return sorted(folders, key=lambda x: natural_sort_key(x.path))

    def get_items(self, recursive: bool = False) -> list[StorageItem]:
        """Get files and sub-folders together, in natural path order."""
        return sorted(self._walk(recursive), key=lambda x: natural_sort_key(x.path))

    def is_empty(self, include_folders: bool = True) -> bool:
        """Check if the folder is empty.

            When include_folders is False, a folder that only holds (possibly
            nested) empty folders counts as empty.
        """
        if include_folders:
            return not any(True for _ in self._children())
        return not any(x.item_type == StorageItemType.FILE for x in self._walk(True))

    def list(self, recursive: bool = False) -> list[StorageItem]:
        return self.get_items(recursive)

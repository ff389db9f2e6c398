"""In-memory provider"""
import typing as t
from urllib.parse import urlparse

from fsxfer.exc import StorageError, SourceNotFoundError, RenameNotPossibleError
from fsxfer.items import StorageItemType
from .base import UrlBaseProvider


class MemoryProvider(UrlBaseProvider):
    """Provider that keeps a namespace of files and folders in memory.

        Paths look like memory://NAMESPACE/dir/file. The namespace root always
        exists. Folders given in ``devices`` behave like separate devices:
        renaming from one to another raises RenameNotPossibleError, like
        moving between mount points on a local disk.
    """

    def __init__(self, namespace: str = "default", case_sensitive: bool = True, devices: t.Iterable[str] = None):
        self.namespace = namespace
        self._case_sensitive = case_sensitive
        self._root = f"memory://{namespace}/"
        # key -> (path, content); content is None for folders
        self._entries: dict[str, tuple[str, t.Optional[bytes]]] = {}
        self._devices = [self.normalize(self._root + d, True) for d in (devices or [])]

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def _key(self, path: str) -> str:
        path = self.normalize(path)
        return path if self._case_sensitive else path.casefold()

    def _is_root(self, path: str) -> bool:
        return self.normalize(path, True) == self._root

    def _device(self, path: str) -> t.Optional[str]:
        matches = [d for d in self._devices if self.is_within(path, d) or self.same_path(path, d)]
        if not matches:
            return None
        return max(matches, key=len)

    def _require_parent(self, path: str):
        parent = self.parent_of(path)
        if parent is None or self.kind(parent) != StorageItemType.FOLDER:
            raise StorageError(f"Parent folder of [{path}] does not exist", 1005)

    def kind(self, path: str) -> t.Optional[StorageItemType]:
        if self._is_root(path):
            return StorageItemType.FOLDER
        entry = self._entries.get(self._key(path))
        if entry is None:
            return None
        return StorageItemType.FOLDER if entry[1] is None else StorageItemType.FILE

    def create_directory(self, path: str):
        if self.exists(path):
            raise StorageError(f"Item already exists: {path}", 1006)
        parent = self.parent_of(path)
        if not self.exists(parent):
            self.create_directory(parent)
        elif self.kind(parent) != StorageItemType.FOLDER:
            raise StorageError(f"Parent of [{path}] is not a directory", 1005)
        self._entries[self._key(path)] = (self.normalize(path), None)

    def write_bytes(self, path: str, content: bytes):
        """Create or overwrite a file."""
        if self.kind(path) == StorageItemType.FOLDER:
            raise StorageError(f"Item is a directory: {path}", 1004)
        self._require_parent(path)
        self._entries[self._key(path)] = (self.normalize(path), bytes(content))

    def read_bytes(self, path: str) -> bytes:
        entry = self._entries.get(self._key(path))
        if entry is None:
            raise SourceNotFoundError(f"Memory file not found: {path}")
        if entry[1] is None:
            raise StorageError(f"Item is a directory: {path}", 1004)
        return entry[1]

    def _descendant_keys(self, path: str) -> list[str]:
        prefix = self.normalize(path, True)
        if not self._case_sensitive:
            prefix = prefix.casefold()
        return [k for k in self._entries if k.startswith(prefix)]

    def delete(self, path: str):
        if self._is_root(path):
            raise StorageError(f"Cannot delete the root of [{self.namespace}]", 1008)
        key = self._key(path)
        if key not in self._entries:
            raise SourceNotFoundError(f"Memory file not found: {path}")
        for child_key in self._descendant_keys(path):
            del self._entries[child_key]
        del self._entries[key]

    def rename(self, old_path: str, new_path: str):
        old_key = self._key(old_path)
        if old_key not in self._entries:
            raise SourceNotFoundError(f"Memory file not found: {old_path}")
        if self._device(old_path) != self._device(new_path):
            raise RenameNotPossibleError(f"Cannot rename across devices: {old_path} -> {new_path}")
        new_key = self._key(new_path)
        if new_key in self._entries and new_key != old_key:
            raise StorageError(f"Item already exists: {new_path}", 1006)
        if self.is_within(new_path, old_path):
            raise StorageError(f"Cannot move [{old_path}] inside itself", 1009)
        self._require_parent(new_path)
        old_folder = self.normalize(old_path, True)
        new_folder = self.normalize(new_path, True)
        moved = {}
        for child_key in self._descendant_keys(old_path):
            child_path, content = self._entries.pop(child_key)
            child_path = new_folder + child_path[len(old_folder):]
            moved[self._key(child_path)] = (child_path, content)
        _, content = self._entries.pop(old_key)
        self._entries[new_key] = (self.normalize(new_path), content)
        self._entries.update(moved)

    def copy_bytes(self, old_path: str, new_path: str):
        self.write_bytes(new_path, self.read_bytes(old_path))

    def list_children(self, path: str) -> list[str]:
        if self.kind(path) != StorageItemType.FOLDER:
            raise StorageError(f"Not a directory: {path}", 1005)
        children = []
        for child_path, content in self._entries.values():
            if self.same_path(self.parent_of(child_path), path):
                children.append(self.normalize(child_path, content is None))
        return children

    @staticmethod
    def supports(file_path: str) -> bool:
        return file_path.startswith("memory://")

    @classmethod
    def provider_key(cls, file_path: str) -> str:
        return f"{cls.__name__}:{urlparse(file_path).netloc}"

    @classmethod
    def build(cls, file_path: str):
        return cls(urlparse(file_path).netloc)

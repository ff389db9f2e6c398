"""Turns paths into typed items by probing the provider."""
import typing as t

from fsxfer.items import StorageItem, File, Folder, StorageItemType
from fsxfer.storage.base import BaseStorageProvider


class StorageLocator:
    """Classifies what is at a given path on one provider."""

    def __init__(self, provider: BaseStorageProvider):
        self._provider = provider

    def locate(self, path: str) -> t.Optional[StorageItem]:
        """Get a File or Folder for whatever is at path, or None if nothing is there."""
        kind = self._provider.kind(path)
        if kind is None:
            return None
        return self.item_for(path, kind)

    def item_for(self, path: str, kind: StorageItemType) -> StorageItem:
        if kind == StorageItemType.FOLDER:
            return Folder(path, self._provider, verify=False)
        return File(path, self._provider, verify=False)

    def exists(self, path: str) -> bool:
        return self._provider.exists(path)

    def file_exists(self, path: str) -> bool:
        return self._provider.kind(path) == StorageItemType.FILE

    def folder_exists(self, path: str) -> bool:
        return self._provider.kind(path) == StorageItemType.FOLDER

    def get_file(self, path: str) -> File:
        return File(path, self._provider)

    def get_folder(self, path: str) -> Folder:
        return Folder(path, self._provider)

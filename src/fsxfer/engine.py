"""Copy, move and rename with name-collision handling.

    Every operation runs the same way: validate the arguments, resolve the
    destination with the CollisionResolver, then commit the change on the
    provider. Once committed, a moved item points at its final path, which can
    differ from the requested one under GENERATE_UNIQUE_NAME.

    Replacing an existing item and the copy+delete fallback of a move are not
    atomic: if something fails after the existing item (or the source) was
    deleted, nothing is rolled back.
"""
import os
import typing as t

import zirconium as zr
import zrlog
from autoinject import injector

from fsxfer.exc import InvalidArgumentError, SourceNotFoundError, StorageError
from fsxfer.items import StorageItem, File, Folder, StorageItemType, NameCollisionOption
from fsxfer.locator import StorageLocator
from fsxfer.naming import check_name_segment
from fsxfer.resolver import CollisionResolver, DecisionAction
from fsxfer.storage.base import BaseStorageProvider


Destination = t.Union[str, os.PathLike, Folder]


class TransferEngine:

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self, provider: BaseStorageProvider):
        self._provider = provider
        self._locator = StorageLocator(provider)
        self._resolver = CollisionResolver(provider, self._locator)
        self._log = zrlog.get_logger("fsxfer.engine")

    @property
    def provider(self) -> BaseStorageProvider:
        return self._provider

    @property
    def locator(self) -> StorageLocator:
        return self._locator

    def default_option(self) -> NameCollisionOption:
        """Collision option used when none is given."""
        name = self.config.as_str(("fsxfer", "default_collision_option"), default="FAIL_IF_EXISTS")
        try:
            return NameCollisionOption[name.upper()]
        except KeyError as ex:
            raise InvalidArgumentError(f"Invalid default collision option [{name}]", 1012) from ex

    def _option(self, option: t.Optional[NameCollisionOption]) -> NameCollisionOption:
        if option is None:
            return self.default_option()
        if not isinstance(option, NameCollisionOption):
            raise InvalidArgumentError(f"Invalid collision option [{option}]", 1012)
        return option

    def destination_path(self, item: StorageItem, destination: Destination, desired_name: t.Optional[str] = None) -> str:
        """Turn the (folder, name), (folder) and (full path) forms into one path."""
        if isinstance(destination, Folder):
            folder_path = destination.path
            if desired_name is None:
                desired_name = item.name
        else:
            if destination is None or str(destination).strip() == "":
                raise InvalidArgumentError("Destination path cannot be blank", 1004)
            if desired_name is None:
                return self._provider.normalize(str(destination))
            folder_path = str(destination)
        check_name_segment(desired_name, self._provider.invalid_name_chars())
        return self._provider.join(folder_path, desired_name)

    def copy(self,
             item: StorageItem,
             destination: Destination,
             desired_name: t.Optional[str] = None,
             option: t.Optional[NameCollisionOption] = None) -> StorageItem:
        """Copy a file, or a folder with everything in it, and return the copy."""
        option = self._option(option)
        new_item = self._copy(item, self.destination_path(item, destination, desired_name), option)
        self._log.info(f"Copied [{item}] to [{new_item}]")
        return new_item

    def move(self,
             item: StorageItem,
             destination: Destination,
             desired_name: t.Optional[str] = None,
             option: t.Optional[NameCollisionOption] = None) -> StorageItem:
        """Move an item; the item is updated to its final path and returned."""
        option = self._option(option)
        path = self.destination_path(item, destination, desired_name)
        self._require_source(item, path)
        decision = self._resolver.resolve(path, option, source=item, allow_case_rename=True)
        decision.raise_for_failure()
        original_path = item.path
        if decision.action == DecisionAction.RENAME_VIA_TEMPORARY:
            self._log.notice(f"Renaming [{item}] through [{decision.temporary_path}] to change case")
            self._move_item(item, decision.temporary_path)
        elif decision.action == DecisionAction.DELETE_THEN_PROCEED:
            self._delete_existing(decision.existing)
        self._move_item(item, decision.path)
        self._log.info(f"Moved [{original_path}] to [{item}]")
        return item

    def rename(self, item: StorageItem, desired_name: str, option: t.Optional[NameCollisionOption] = None) -> StorageItem:
        """Move an item to a new name in the same folder."""
        check_name_segment(desired_name, self._provider.invalid_name_chars())
        parent = item.parent
        if parent is None:
            raise InvalidArgumentError(f"Cannot rename the root [{item}]", 1014)
        return self.move(item, parent, desired_name, option)

    def rename_ignore_extension(self, item: File, desired_name: str, option: t.Optional[NameCollisionOption] = None) -> File:
        """Rename a file but keep its extension."""
        if item.item_type != StorageItemType.FILE:
            raise InvalidArgumentError(f"[{item}] is not a file", 1016)
        check_name_segment(desired_name, self._provider.invalid_name_chars())
        return self.rename(item, desired_name + item.extension, option)

    def replace(self, item: File, other: StorageItem) -> File:
        """Move a file onto the path of other, which is removed first."""
        if item.item_type != StorageItemType.FILE:
            raise InvalidArgumentError(f"[{item}] is not a file", 1016)
        if not isinstance(other, StorageItem):
            raise InvalidArgumentError(f"Cannot replace [{other}], it is not a storage item", 1017)
        return self.move(item, other.path, option=NameCollisionOption.REPLACE_EXISTING)

    def delete(self, item: StorageItem):
        self._provider.delete(item.path)
        self._log.info(f"Deleted [{item}]")

    def create_folder(self, path: str) -> Folder:
        """Create a folder (and any missing parents)."""
        if path is None or str(path).strip() == "":
            raise InvalidArgumentError("Path cannot be blank", 1004)
        self._provider.create_directory(path)
        return Folder(path, self._provider, verify=False)

    def _require_source(self, item: StorageItem, destination_path: str):
        if not item.exists:
            raise SourceNotFoundError(f"Source [{item}] does not exist")
        if item.item_type == StorageItemType.FOLDER and self._provider.is_within(destination_path, item.path):
            raise InvalidArgumentError(f"Cannot transfer [{item}] into itself [{destination_path}]", 1015)

    def _copy(self, item: StorageItem, path: str, option: NameCollisionOption) -> StorageItem:
        self._require_source(item, path)
        decision = self._resolver.resolve(path, option, source=item)
        decision.raise_for_failure()
        if decision.action == DecisionAction.DELETE_THEN_PROCEED:
            self._delete_existing(decision.existing)
        return self._copy_item(item, decision.path)

    def _copy_item(self, item: StorageItem, path: str) -> StorageItem:
        if item.item_type == StorageItemType.FILE:
            self._provider.copy_bytes(item.path, path)
            return File(path, self._provider, verify=False)
        return self._copy_folder(item, path)

    def _copy_folder(self, folder: Folder, path: str) -> Folder:
        new_folder = self.create_folder(path)
        # The new folder was just created, so its children only collide if it
        # was filled in the meantime.
        for child in folder.get_files():
            self._copy(child, self._provider.join(new_folder.path, child.name), NameCollisionOption.FAIL_IF_EXISTS)
        for child in folder.get_folders():
            self._copy(child, self._provider.join(new_folder.path, child.name, True), NameCollisionOption.FAIL_IF_EXISTS)
        return new_folder

    def _move_item(self, item: StorageItem, path: str):
        try:
            self._provider.rename(item.path, path)
        except SourceNotFoundError:
            raise
        except StorageError as ex:
            # Any failed rename is treated like a cross-device move
            self._log.notice(f"Could not rename [{item}] to [{path}], copying and deleting instead: {ex}")
            self._copy_item(item, path)
            self._provider.delete(item.path)
        item._set_path(path)

    def _delete_existing(self, existing: StorageItem):
        self._log.debug(f"Removing [{existing}] to make room")
        self._provider.delete(existing.path)

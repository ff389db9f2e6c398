"""Local file provider"""
import os
import shutil
import sys
import typing as t

import zirconium as zr
from autoinject import injector

from fsxfer.exc import InvalidArgumentError, SourceNotFoundError, StorageError
from fsxfer.items import StorageItemType
from .base import BaseStorageProvider, local_file_error_wrap


_WINDOWS_INVALID_CHARS = '<>:"|?*' + "".join(chr(x) for x in range(0, 32))


class LocalProvider(BaseStorageProvider):
    """Provider for files stored on a local disk or accessible network drive.

        The underlying functionality is based on os, os.path and shutil.
    """

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self, case_sensitive: t.Optional[bool] = None):
        if case_sensitive is None:
            case_sensitive = self.config.as_bool(("fsxfer", "local", "case_sensitive"), default=None)
        if case_sensitive is None:
            case_sensitive = not (sys.platform.startswith("win") or sys.platform == "darwin")
        self._case_sensitive = case_sensitive
        self.separator = os.sep

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def invalid_name_chars(self) -> frozenset[str]:
        chars = {os.sep, "\0"}
        if os.altsep:
            chars.add(os.altsep)
        if os.name == "nt":
            chars.update(_WINDOWS_INVALID_CHARS)
        return frozenset(chars)

    def normalize(self, path, as_dir: bool = False) -> str:
        if path is None or str(path).strip() == "":
            raise InvalidArgumentError("Path cannot be blank", 1004)
        path = str(path)
        if path.startswith("file://"):
            path = path[7:]
        path = os.path.abspath(os.path.expanduser(path))
        if as_dir and not path.endswith(os.sep):
            path += os.sep
        return path

    def parent_of(self, path: str) -> t.Optional[str]:
        path = self.normalize(path)
        parent = os.path.dirname(path)
        if parent == path:
            return None
        return self.normalize(parent, True)

    def name_of(self, path: str) -> str:
        path = self.normalize(path)
        return os.path.basename(path) or path

    def kind(self, path: str) -> t.Optional[StorageItemType]:
        path = self.normalize(path)
        if os.path.isdir(path):
            return StorageItemType.FOLDER
        if os.path.lexists(path):
            return StorageItemType.FILE
        return None

    @local_file_error_wrap
    def create_directory(self, path: str):
        os.makedirs(self.normalize(path))

    @local_file_error_wrap
    def delete(self, path: str):
        path = self.normalize(path)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)

    def _missing_path_error(self, old_path: str, new_path: str, ex: FileNotFoundError):
        if not os.path.lexists(old_path):
            raise SourceNotFoundError(f"Local file not found: {old_path}", 1002) from ex
        raise StorageError(f"Parent folder of [{new_path}] does not exist", 1005) from ex

    @local_file_error_wrap
    def rename(self, old_path: str, new_path: str):
        old_path = self.normalize(old_path)
        new_path = self.normalize(new_path)
        try:
            os.rename(old_path, new_path)
        except FileNotFoundError as ex:
            self._missing_path_error(old_path, new_path, ex)

    @local_file_error_wrap
    def copy_bytes(self, old_path: str, new_path: str):
        old_path = self.normalize(old_path)
        new_path = self.normalize(new_path)
        try:
            shutil.copy2(old_path, new_path)
        except FileNotFoundError as ex:
            self._missing_path_error(old_path, new_path, ex)

    @local_file_error_wrap
    def list_children(self, path: str) -> list[str]:
        path = self.normalize(path)
        return [os.path.join(path, name) for name in os.listdir(path)]

    @staticmethod
    def supports(file_path: str) -> bool:
        return True

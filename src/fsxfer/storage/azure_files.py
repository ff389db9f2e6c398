"""Azure Files provider"""
import functools
import typing as t
from urllib.parse import urlparse

import azure.core.exceptions as ace
import requests
import urllib3.exceptions
import zirconium as zr
from autoinject import injector
from azure.identity import DefaultAzureCredential
from azure.storage.fileshare import ShareFileClient, ShareDirectoryClient, FileProperties, DirectoryProperties

from fsxfer.exc import FsxferError, StorageError, SourceNotFoundError, RenameNotPossibleError, InvalidArgumentError
from fsxfer.items import StorageItemType
from .base import UrlBaseProvider


def wrap_azure_errors(cb):

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except ace.ResourceNotFoundError as ex:
            raise SourceNotFoundError(f"Azure: Resource not found error: {ex.__class__.__name__}: {str(ex)}", 2004) from ex
        except ace.AzureError as ex:
            if ex.inner_exception is not None:
                if isinstance(ex.inner_exception, urllib3.exceptions.ConnectTimeoutError):
                    raise StorageError(f"Azure: Connection timeout error: {ex.__class__.__name__}: {str(ex)}", 2001, True) from ex
                elif isinstance(ex.inner_exception, requests.ConnectionError):
                    raise StorageError(f"Azure: Connection error: {ex.__class__.__name__}: {str(ex)}", 2002, True) from ex
            if isinstance(ex, ace.ClientAuthenticationError):
                raise StorageError(f"Azure: Client authentication error: {ex.__class__.__name__}: {str(ex)}", 2003, True) from ex
            elif isinstance(ex, ace.ResourceExistsError):
                raise StorageError(f"Azure: Resource already exists error: {ex.__class__.__name__}: {str(ex)}", 2005) from ex
            raise StorageError(f"Azure: {ex.__class__.__name__}: {str(ex)}", 2000) from ex

    return _inner


class AzureFilesProvider(UrlBaseProvider):
    """Provider for an Azure Files share.

        Paths look like https://ACCOUNT.file.core.windows.net/SHARE/dir/file.
        The share is the root. Azure Files compares names without regard to
        case, so case-only renames go through a temporary name.
    """

    config: zr.ApplicationConfig = None
    root_segments = 1

    @injector.construct
    def __init__(self):
        self._cached_properties = {}

    @property
    def case_sensitive(self) -> bool:
        return False

    def invalid_name_chars(self) -> frozenset[str]:
        return frozenset('"\\/:|<>*?' + "".join(chr(x) for x in range(0, 32)))

    def get_connection_details(self, path: str) -> dict:
        path = self.normalize(path)
        url_parts = urlparse(path)
        domain = url_parts.hostname
        if not domain.endswith(".file.core.windows.net"):
            raise InvalidArgumentError(f"Invalid hostname [{domain}]", 1008)
        root, segments = self._split_path(path)
        return {
            "storage_account": domain[:-22],
            "storage_url": domain,
            "share_name": root.rstrip('/').rsplit('/', 1)[-1],
            "connection_string": self._connection_string(domain[:-22]),
            "file_path": "/".join(segments),
        }

    def _connection_string(self, account: str) -> t.Optional[str]:
        key = f"connection_string_{account}"
        if key not in self._cached_properties:
            self._cached_properties[key] = self.config.as_str(("azure", "storage", account, "connection_string"), default=None)
        return self._cached_properties[key]

    def file_client(self, path: str) -> ShareFileClient:
        try:
            connection_info = self.get_connection_details(path)
            if connection_info["connection_string"]:
                return ShareFileClient.from_connection_string(
                    conn_str=connection_info["connection_string"],
                    share_name=connection_info["share_name"],
                    file_path=connection_info["file_path"]
                )
            else:
                return ShareFileClient.from_file_url(
                    self.normalize(path),
                    credential=DefaultAzureCredential(),
                    token_intent="backup"
                )
        except ValueError as ex:
            raise StorageError(f"Could not create file client", 2010) from ex

    def directory_client(self, path: str) -> ShareDirectoryClient:
        try:
            connection_info = self.get_connection_details(path)
            if connection_info["connection_string"]:
                return ShareDirectoryClient.from_connection_string(
                    conn_str=connection_info["connection_string"],
                    share_name=connection_info["share_name"],
                    directory_path=connection_info["file_path"]
                )
            else:
                return ShareDirectoryClient.from_directory_url(
                    self.normalize(path, True),
                    credential=DefaultAzureCredential(),
                    token_intent="backup"
                )
        except ValueError as ex:
            raise StorageError(f"Could not create directory client", 2011) from ex

    @wrap_azure_errors
    def kind(self, path: str) -> t.Optional[StorageItemType]:
        try:
            self.directory_client(path).get_directory_properties()
            return StorageItemType.FOLDER
        except ace.ResourceNotFoundError:
            pass
        if not self.relative_path(path):
            return None
        try:
            self.file_client(path).get_file_properties()
            return StorageItemType.FILE
        except ace.ResourceNotFoundError:
            return None

    @wrap_azure_errors
    def create_directory(self, path: str):
        root, segments = self._split_path(path)
        for idx in range(1, len(segments) + 1):
            client = self.directory_client(root + "/".join(segments[:idx]))
            if idx < len(segments) and client.exists():
                continue
            client.create_directory()

    @wrap_azure_errors
    def delete(self, path: str):
        if self.kind(path) == StorageItemType.FOLDER:
            for child in self.list_children(path):
                self.delete(child)
            self.directory_client(path).delete_directory()
        else:
            self.file_client(path).delete_file()

    @wrap_azure_errors
    def rename(self, old_path: str, new_path: str):
        if self.provider_key(old_path) != self.provider_key(new_path):
            raise RenameNotPossibleError(f"Cannot rename [{old_path}] to a different share [{new_path}]")
        new_name = self.relative_path(new_path)
        if self.kind(old_path) == StorageItemType.FOLDER:
            self.directory_client(old_path).rename_directory(new_name)
        else:
            self.file_client(old_path).rename_file(new_name)

    @wrap_azure_errors
    def copy_bytes(self, old_path: str, new_path: str):
        data = self.file_client(old_path).download_file().readall()
        self.file_client(new_path).upload_file(data)

    @wrap_azure_errors
    def list_children(self, path: str) -> list[str]:
        folder_path = self.normalize(path, True)
        children = []
        for item in self.directory_client(path).list_directories_and_files():
            if isinstance(item, DirectoryProperties):
                children.append(self.join(folder_path, item.name, True))
            elif isinstance(item, FileProperties):
                children.append(self.join(folder_path, item.name))
            else:
                raise FsxferError(f"Unknown type of file listing results [{item.__class__.__name__}]", "AZFILE", 1005)
        return children

    @staticmethod
    def supports(file_path: str) -> bool:
        if not (file_path.startswith("http://") or file_path.startswith("https://")):
            return False
        pieces = urlparse(file_path)
        return pieces.hostname is not None and pieces.hostname.endswith(".file.core.windows.net")

    @classmethod
    def provider_key(cls, file_path: str) -> str:
        pieces = urlparse(file_path)
        share = pieces.path.lstrip('/').split('/', 1)[0]
        return f"{cls.__name__}:{pieces.hostname}/{share}".lower()

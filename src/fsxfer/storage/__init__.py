"""
    Storage providers.

    A provider knows how to do a handful of basic operations on one kind of
    storage: check what is at a path, create a directory, delete, rename in one
    step, copy the bytes of a file and list the children of a directory. All of
    the name collision handling lives above the providers, in the TransferEngine.

    In general, one should use the StorageController to get the provider for a
    path. Local paths (or pathlib.Path objects) go to the LocalProvider, Azure
    Files URLs to the AzureFilesProvider and memory:// paths to a MemoryProvider.

    URL-based providers adopt the convention that directory paths end with a
    trailing slash (e.g. memory://default/directory/) and file paths do not
    (e.g. memory://default/file). Local paths follow the same convention with
    the platform separator once normalized.
"""
from .core import StorageController
from .base import BaseStorageProvider, UrlBaseProvider
from .local import LocalProvider
from .memory import MemoryProvider

from autoinject import injector
import typing as t
import pathlib

from fsxfer.items import StorageItem, File, Folder
from .base import BaseStorageProvider
from .azure_files import AzureFilesProvider
from .memory import MemoryProvider
from .local import LocalProvider


@injector.injectable_global
class StorageController:
    """Controller class that identifies the correct provider for a given path.

        https://ACCOUNT.file.core.windows.net/SHARE -> AzureFilesProvider
        memory://NAMESPACE -> MemoryProvider
        (default or path-like) -> LocalProvider

        Providers are kept, so every path on the same share or namespace
        goes through the same provider instance.
    """

    def __init__(self):
        self.provider_classes = [
            AzureFilesProvider,
            MemoryProvider,
        ]
        self.default_provider = LocalProvider
        self._providers: dict[str, BaseStorageProvider] = {}

    def get_provider(self, file_path: t.Union[str, pathlib.Path]) -> BaseStorageProvider:
        """Get the provider for the given path."""
        if isinstance(file_path, pathlib.Path):
            return self._provider_for(self.default_provider, str(file_path))
        for cls in self.provider_classes:
            if cls.supports(file_path):
                return self._provider_for(cls, file_path)
        return self._provider_for(self.default_provider, file_path)

    def register_provider(self, file_path: str, provider: BaseStorageProvider):
        """Use a specific provider instance for paths like file_path."""
        self._providers[provider.provider_key(file_path)] = provider

    def _provider_for(self, cls, file_path: str) -> BaseStorageProvider:
        key = cls.provider_key(file_path)
        if key not in self._providers:
            self._providers[key] = cls.build(file_path)
        return self._providers[key]

    def engine(self, file_path: t.Union[str, pathlib.Path]):
        from fsxfer.engine import TransferEngine
        return TransferEngine(self.get_provider(file_path))

    def locate(self, file_path: t.Union[str, pathlib.Path]) -> t.Optional[StorageItem]:
        """Get a File or Folder for whatever is at file_path, or None."""
        return self.engine(file_path).locator.locate(str(file_path))

    def get_file(self, file_path: t.Union[str, pathlib.Path]) -> File:
        return File(str(file_path), self.get_provider(file_path))

    def get_folder(self, file_path: t.Union[str, pathlib.Path]) -> Folder:
        return Folder(str(file_path), self.get_provider(file_path))

from __future__ import annotations
import functools
import errno
import typing as t
from urllib.parse import urlparse

from fsxfer.exc import (
    FsxferError, StorageError, SourceNotFoundError, RenameNotPossibleError, InvalidArgumentError
)
from fsxfer.items import StorageItemType


def local_file_error_wrap(cb):
    """Converts typical local file-system errors into appropriate FsxferErrors with recoverable set properly."""

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except FsxferError:
            raise
        except FileNotFoundError as ex:
            raise SourceNotFoundError(f"Local file not found: {ex.filename}", 1002) from ex
        except PermissionError as ex:
            raise StorageError(f"Access to local file denied", 1003, True) from ex
        except IsADirectoryError as ex:
            raise StorageError(f"Local file is a directory", 1004) from ex
        except NotADirectoryError as ex:
            raise StorageError(f"Local directory is not a directory", 1005) from ex
        except FileExistsError as ex:
            raise StorageError(f"Local file already exists: {ex.filename}", 1006) from ex
        except OSError as ex:
            if ex.errno == errno.EXDEV:
                raise RenameNotPossibleError(f"Cannot rename across devices: {ex.filename}") from ex
            raise StorageError(f"Exception processing local file: {ex.__class__.__name__}: {str(ex)}", 1007) from ex

    return _inner


class BaseStorageProvider:
    """The operations fsxfer needs from a storage back-end.

        Paths are plain strings. Providers normalize them so that folder paths
        end with exactly one separator and file paths never do. Operations take
        either form.
    """

    separator = "/"

    def __str__(self):
        return self.__class__.__name__

    @property
    def case_sensitive(self) -> bool:
        """Whether two names differing only in case are two different items."""
        return True

    def invalid_name_chars(self) -> frozenset[str]:
        """Characters that cannot appear in a single path segment."""
        return frozenset((self.separator, "\0"))

    def normalize(self, path: str, as_dir: bool = False) -> str:
        """Get the canonical form of path, as a folder path if as_dir is set."""
        raise NotImplementedError

    def join(self, folder_path: str, name: str, as_dir: bool = False) -> str:
        """Build the path of the child called name within folder_path."""
        return self.normalize(self.normalize(folder_path, True) + name, as_dir)

    def parent_of(self, path: str) -> t.Optional[str]:
        """Get the folder path of the parent of path, or None for a root."""
        raise NotImplementedError

    def name_of(self, path: str) -> str:
        """Get the last segment of path."""
        raise NotImplementedError

    def same_path(self, path_a: str, path_b: str, ignore_case: t.Optional[bool] = None) -> bool:
        """Check if both paths refer to the same location."""
        if ignore_case is None:
            ignore_case = not self.case_sensitive
        path_a = self.normalize(path_a)
        path_b = self.normalize(path_b)
        if ignore_case:
            return path_a.casefold() == path_b.casefold()
        return path_a == path_b

    def is_within(self, path: str, folder_path: str) -> bool:
        """Check if path is strictly inside folder_path."""
        folder_path = self.normalize(folder_path, True)
        path = self.normalize(path)
        if not self.case_sensitive:
            folder_path = folder_path.casefold()
            path = path.casefold()
        return path != folder_path and path.startswith(folder_path)

    def exists(self, path: str) -> bool:
        return self.kind(path) is not None

    def kind(self, path: str) -> t.Optional[StorageItemType]:
        """Probe path: FILE, FOLDER or None if nothing is there."""
        raise NotImplementedError

    def create_directory(self, path: str):
        """Create a directory (and any missing parents)."""
        raise NotImplementedError

    def delete(self, path: str):
        """Delete a file or a directory with all of its contents."""
        raise NotImplementedError

    def rename(self, old_path: str, new_path: str):
        """Atomically rename an item. Raises RenameNotPossibleError if it can't be done in one step."""
        raise NotImplementedError

    def copy_bytes(self, old_path: str, new_path: str):
        """Copy the content of a file to a new file."""
        raise NotImplementedError

    def list_children(self, path: str) -> list[str]:
        """List the paths directly inside a directory."""
        raise NotImplementedError

    @staticmethod
    def supports(file_path: str) -> bool:
        """Check if this provider class supports the given path."""
        raise NotImplementedError

    @classmethod
    def provider_key(cls, file_path: str) -> str:
        """Paths with the same key can share one provider instance."""
        return cls.__name__

    @classmethod
    def build(cls, file_path: str) -> BaseStorageProvider:
        """Construct a provider for the given path."""
        return cls()


class UrlBaseProvider(BaseStorageProvider):
    """General implementation of url-based paths.

        The root of every path is the scheme and host plus the first
        ``root_segments`` segments of the path (for example the share name).
    """

    root_segments = 0

    def _split_path(self, path: str) -> tuple[str, list[str]]:
        if path is None or str(path).strip() == "":
            raise InvalidArgumentError("Path cannot be blank", 1004)
        pieces = urlparse(str(path))
        if not (pieces.scheme and pieces.netloc):
            raise InvalidArgumentError(f"Path [{path}] is not a URL", 1005)
        if pieces.query or pieces.fragment:
            raise InvalidArgumentError(f"Path [{path}] cannot have a query or fragment", 1006)
        segments = []
        for segment in pieces.path.split('/'):
            if segment in ('', '.'):
                continue
            if segment == '..':
                if len(segments) > self.root_segments:
                    segments.pop()
                continue
            segments.append(segment)
        if len(segments) < self.root_segments:
            raise InvalidArgumentError(f"Path [{path}] is missing its root", 1007)
        root = f"{pieces.scheme}://{pieces.netloc}/"
        if self.root_segments:
            root += "/".join(segments[:self.root_segments]) + "/"
        return root, segments[self.root_segments:]

    def normalize(self, path: str, as_dir: bool = False) -> str:
        root, segments = self._split_path(path)
        if not segments:
            return root
        return root + "/".join(segments) + ("/" if as_dir else "")

    def parent_of(self, path: str) -> t.Optional[str]:
        root, segments = self._split_path(path)
        if not segments:
            return None
        return self.normalize(root + "/".join(segments[:-1]), True)

    def name_of(self, path: str) -> str:
        root, segments = self._split_path(path)
        if not segments:
            return root.rstrip('/').rsplit('/', 1)[-1]
        return segments[-1]

    def relative_path(self, path: str) -> str:
        """Get the path below the root, without leading or trailing slashes."""
        _, segments = self._split_path(path)
        return "/".join(segments)

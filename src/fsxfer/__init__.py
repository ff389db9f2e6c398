"""
    File and folder operations that work the same way on every storage provider.

    Items (File and Folder) can be copied, moved, renamed and deleted. When the
    destination is already taken, a NameCollisionOption decides what happens:
    generate a unique name (``foo(2).txt``), replace the existing item, or fail.
"""
from .exc import (
    FsxferError, InvalidArgumentError, AlreadyExistsError, SourceEqualsDestinationError,
    StorageError, SourceNotFoundError, RenameNotPossibleError
)
from .items import StorageItem, File, Folder, StorageItemType, NameCollisionOption
from .naming import next_name
from .locator import StorageLocator
from .resolver import CollisionResolver, Decision, DecisionAction, FailureReason
from .engine import TransferEngine

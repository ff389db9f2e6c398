"""Decides what happens when the destination of a transfer is already occupied.

    The resolver only looks; it never changes anything on the provider. The
    TransferEngine carries out the decision.
"""
import dataclasses
import enum
import typing as t

import zrlog

from fsxfer.exc import AlreadyExistsError, SourceEqualsDestinationError, InvalidArgumentError
from fsxfer.items import StorageItem, StorageItemType, NameCollisionOption
from fsxfer.locator import StorageLocator
from fsxfer.naming import next_item_name
from fsxfer.storage.base import BaseStorageProvider


class DecisionAction(enum.Enum):

    PROCEED = "proceed"
    PROCEED_WITH_PATH = "proceed_with_path"
    DELETE_THEN_PROCEED = "delete_then_proceed"
    RENAME_VIA_TEMPORARY = "rename_via_temporary"
    FAIL = "fail"


class FailureReason(enum.Enum):

    ALREADY_EXISTS = "already_exists"
    SOURCE_EQUALS_DESTINATION = "source_equals_destination"
    DESTINATION_CONTAINS_SOURCE = "destination_contains_source"


@dataclasses.dataclass
class Decision:
    """Outcome of resolving a destination.

        ``path`` is where the transfer should end up. For DELETE_THEN_PROCEED,
        ``existing`` is the item to delete first. For RENAME_VIA_TEMPORARY,
        the source goes to ``temporary_path`` and then to ``path``.
    """

    action: DecisionAction
    path: str
    existing: t.Optional[StorageItem] = None
    reason: t.Optional[FailureReason] = None
    temporary_path: t.Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.action == DecisionAction.FAIL

    def raise_for_failure(self):
        """Raise the error matching a FAIL decision, do nothing otherwise."""
        if self.action != DecisionAction.FAIL:
            return
        if self.reason == FailureReason.ALREADY_EXISTS:
            raise AlreadyExistsError(self.path, self.existing.item_type if self.existing is not None else None)
        if self.reason == FailureReason.SOURCE_EQUALS_DESTINATION:
            raise SourceEqualsDestinationError(self.path)
        raise InvalidArgumentError(f"Cannot replace [{self.path}] because it contains the source", 1011)


class CollisionResolver:

    def __init__(self, provider: BaseStorageProvider, locator: t.Optional[StorageLocator] = None):
        self._provider = provider
        self._locator = locator or StorageLocator(provider)
        self._log = zrlog.get_logger("fsxfer.resolver")

    def resolve(self,
                destination_path: str,
                option: NameCollisionOption,
                source: t.Optional[StorageItem] = None,
                allow_case_rename: bool = False) -> Decision:
        """Decide how a transfer of source to destination_path should proceed.

            The source itself is never an acceptable destination, whatever the
            option. Paths are compared without regard to case, so an item that
            only differs from the source by case is never replaced. The one exception is a move to a path that differs from
            the source only by case on a provider that ignores case: that is
            a case correction and is done through a temporary name when
            allow_case_rename is set.
        """
        if destination_path is None or str(destination_path).strip() == "":
            raise InvalidArgumentError("Destination path cannot be blank", 1004)
        path = self._provider.normalize(destination_path)
        existing = self._locator.locate(path)
        if existing is None:
            return Decision(DecisionAction.PROCEED, path)
        if source is not None and self._is_source(source, path):
            if (allow_case_rename
                    and not self._provider.case_sensitive
                    and self._provider.normalize(source.path) != path):
                temporary_path = self._free_path(source.path, source.item_type == StorageItemType.FILE, source)
                self._log.debug(f"Case-only rename of [{source}] to [{path}] goes through [{temporary_path}]")
                return Decision(DecisionAction.RENAME_VIA_TEMPORARY, path, existing, temporary_path=temporary_path)
            return Decision(DecisionAction.FAIL, path, existing, FailureReason.SOURCE_EQUALS_DESTINATION)
        if option == NameCollisionOption.FAIL_IF_EXISTS:
            return Decision(DecisionAction.FAIL, path, existing, FailureReason.ALREADY_EXISTS)
        elif option == NameCollisionOption.REPLACE_EXISTING:
            if (source is not None
                    and existing.item_type == StorageItemType.FOLDER
                    and self._provider.is_within(source.path, existing.path)):
                return Decision(DecisionAction.FAIL, path, existing, FailureReason.DESTINATION_CONTAINS_SOURCE)
            return Decision(DecisionAction.DELETE_THEN_PROCEED, path, existing)
        elif option == NameCollisionOption.GENERATE_UNIQUE_NAME:
            item_type = source.item_type if source is not None else existing.item_type
            new_path = self._free_path(path, item_type == StorageItemType.FILE, source)
            self._log.debug(f"[{path}] is taken, using [{new_path}]")
            return Decision(DecisionAction.PROCEED_WITH_PATH, new_path, existing)
        raise InvalidArgumentError(f"Invalid collision option [{option}]", 1012)

    def _is_source(self, source: StorageItem, path: str) -> bool:
        # Case variants count as the source even on case-sensitive providers
        return self._provider.normalize(source.path).casefold() == path.casefold()

    def _free_path(self, path: str, is_file: bool, source: t.Optional[StorageItem]) -> str:
        """Sequence the name of path until nothing is found there."""
        parent = self._provider.parent_of(path)
        if parent is None:
            raise InvalidArgumentError(f"Cannot generate a new name for the root [{path}]", 1013)
        candidate = self._provider.normalize(path)
        while True:
            candidate = self._provider.join(parent, next_item_name(self._provider.name_of(candidate), is_file))
            # The source path never counts as free
            if source is not None and self._is_source(source, candidate):
                continue
            if not self._locator.exists(candidate):
                return candidate

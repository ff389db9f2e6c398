"""Errors raised by fsxfer."""


class FsxferError(Exception):
    """Super-type of all errors raised by fsxfer code"""

    def __init__(self, msg: str, code_space: str = "GEN", code_number: int = None, is_recoverable: bool = False):
        self.internal_code = "" if code_number is None else f"{code_space}-{code_number}"
        super().__init__(f"{msg} [{self.internal_code}]")
        self.is_recoverable = is_recoverable


class InvalidArgumentError(FsxferError):
    """A path or name was rejected before anything was changed."""

    def __init__(self, msg, code):
        super().__init__(msg, "ARG", code)


class CollisionError(FsxferError):

    def __init__(self, msg, code, destination: str = None):
        super().__init__(msg, "COLLIDE", code)
        self.destination = destination


class AlreadyExistsError(CollisionError):
    """The destination is occupied and the collision option forbids touching it."""

    def __init__(self, destination: str, existing_type=None):
        what = "An item" if existing_type is None else f"A {existing_type.value}"
        super().__init__(f"{what} already exists at [{destination}]", 1001, destination)


class SourceEqualsDestinationError(CollisionError):
    """The source and the destination are the same item."""

    def __init__(self, destination: str):
        super().__init__(f"Source and destination are the same item [{destination}]", 1002, destination)


class StorageError(FsxferError):
    """Error class specifically for storage provider errors."""

    def __init__(self, msg, code, is_recoverable: bool = False):
        super().__init__(msg, "STORAGE", code, is_recoverable=is_recoverable)


class SourceNotFoundError(StorageError):
    """The item being transferred does not exist."""

    def __init__(self, msg, code: int = 1002):
        super().__init__(msg, code)


class RenameNotPossibleError(StorageError):
    """The provider could not rename the item in one step (e.g. across devices)."""

    def __init__(self, msg, code: int = 1010):
        super().__init__(msg, code)

"""Exceptions raised while dating photos. All but InvalidRoot are per-file and never abort a run."""


class PhotoDaterError(Exception):
    """Base class for all photo_dater errors."""


class NoDateFound(PhotoDaterError):
    def __init__(self, text):
        super().__init__(f"no date pattern found in '{text}'")
        self.text = text


class InvalidDate(PhotoDaterError):
    def __init__(self, timestamp, cause=None):
        super().__init__(f"'{timestamp}' is not a valid calendar date")
        self.timestamp = timestamp
        self.cause = cause


class InvalidFilenameEncoding(PhotoDaterError):
    def __init__(self, path):
        super().__init__(f"filename cannot be decoded as text: {path!r}")
        self.path = path


class UnreadableMetadata(PhotoDaterError):
    def __init__(self, path, cause=None):
        message = f"cannot read metadata from {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause


class WriteFailed(PhotoDaterError):
    def __init__(self, path, cause=None):
        message = f"cannot write capture date to {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause


class InvalidRoot(PhotoDaterError):
    def __init__(self, path, cause=None):
        message = f"cannot traverse directory {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause

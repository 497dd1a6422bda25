class ExtractionError(Exception):
    """Base class for all errors raised by pptx2text."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class CorruptArchiveError(ExtractionError):
    """Raised when the byte buffer cannot be opened as a presentation container."""


class ExtractionFileEncryptedError(CorruptArchiveError):
    """Raised when the presentation is encrypted or password-protected."""


class ExtractionZipBombError(CorruptArchiveError):
    """Raised when the container exceeds the configured ZIP safety limits."""


class PartReadError(ExtractionError):
    """Raised when a single part of the container cannot be read as text."""

    def __init__(self, part_name: str, message: str = None, *, cause: Exception = None):
        self.part_name = part_name
        if message is None:
            message = f"Failed to read part: {part_name}"
        super().__init__(message, cause=cause)


class MissingEntryError(PartReadError):
    """Raised when a part is not present in the container."""

    def __init__(self, part_name: str, *, cause: Exception = None):
        super().__init__(part_name, f"Part not found: {part_name}", cause=cause)


class EntryDecodeError(PartReadError):
    """Raised when the bytes of a part are not decodable text."""

    def __init__(self, part_name: str, message: str = None, *, cause: Exception = None):
        if message is None:
            message = f"Part is not decodable text: {part_name}"
        super().__init__(part_name, message, cause=cause)


class ExtractionFailedError(ExtractionError):
    """Raised when extraction fails for a reason other than a corrupt container."""


class ExtractionFileFormatNotSupportedError(ExtractionError):
    """Raised when the file format for extraction is not supported."""

    def __init__(self, file_path: str, message: str = None, *, cause: Exception = None):
        self.file_path = file_path
        if message is None:
            message = f"Extraction file format not supported: {file_path}"
        super().__init__(message, cause=cause)

import io

import olefile

# Streams written by Office when a package is protected with a password.
# The encrypted presentation is then an OLE compound file, not a ZIP.
_ENCRYPTION_STREAMS = ("EncryptionInfo", "EncryptedPackage")


def is_ooxml_encrypted(file_like: io.BytesIO) -> bool:
    """Return True when ``file_like`` is a password-protected OOXML package."""
    file_like.seek(0)
    try:
        if not olefile.isOleFile(file_like):
            return False
        file_like.seek(0)
        with olefile.OleFileIO(file_like) as ole:
            return any(ole.exists(stream) for stream in _ENCRYPTION_STREAMS)
    finally:
        file_like.seek(0)

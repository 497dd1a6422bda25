MIME_TYPE_MAPPING = {
    # PresentationML packages share the same part layout
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.ms-powerpoint.presentation.macroEnabled.12": "pptm",
    "application/vnd.openxmlformats-officedocument.presentationml.slideshow": "ppsx",
    "application/vnd.ms-powerpoint.slideshow.macroEnabled.12": "ppsm",
    "application/vnd.openxmlformats-officedocument.presentationml.template": "potx",
    "application/vnd.ms-powerpoint.template.macroEnabled.12": "potm",
}

# Extension -> MIME type, independent of the platform's mimetypes database
EXTENSION_MAPPING = {
    f".{file_type}": mime_type for mime_type, file_type in MIME_TYPE_MAPPING.items()
}


def is_supported_mime_type(mime_type: str | None) -> bool:
    if not mime_type:
        return False
    return mime_type in MIME_TYPE_MAPPING


def guess_mime_type(path: str) -> str | None:
    """MIME type of a presentation path from its extension, None if unknown."""
    lowered = path.lower()
    for extension, mime_type in EXTENSION_MAPPING.items():
        if lowered.endswith(extension):
            return mime_type
    return None

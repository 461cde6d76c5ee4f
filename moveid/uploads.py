"""
Upload validation.

Runs before any analysis: a rejected upload never reaches the generator or
the vision model.
"""
from moveid.config import MB


class UploadRejected(Exception):
    """The submitted file cannot be analysed. Reported to the client as HTTP 400."""

    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


KIND_LABELS = {
    'video': 'a video',
    'image': 'an image',
}


def validate_upload(kind, content_type, size, max_bytes):
    """
    Check the MIME type prefix and size of an uploaded file.

    Parameters
    ----------
    kind : str
        'video' or 'image'; the content type must start with '<kind>/'.
    content_type : str or None
        MIME type reported by the client.
    size : int
        File size in bytes.
    max_bytes : int
        Largest accepted size.
    """
    if not (content_type or '').startswith(f"{kind}/"):
        raise UploadRejected(f"The file must be {KIND_LABELS.get(kind, kind)}")
    if size > max_bytes:
        raise UploadRejected(
            f"The file is too large. Maximum allowed: {max_bytes // MB}MB"
        )

import hashlib
from typing import Optional, Union


def token_fingerprint(token: Optional[Union[str, bytes]]) -> str:
    """Provide a stable, low-leak credential identifier for logs."""
    if not token:
        return "<empty>"
    raw = token if isinstance(token, bytes) else token.encode("utf-8")
    digest = hashlib.sha256(raw).hexdigest()[:12]
    return f"len={len(raw)} sha256={digest}"

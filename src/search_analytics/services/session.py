"""Session identifiers for correlating search and click events."""

import random
import string
import time

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 9


def generate_session_id() -> str:
    """
    Generate an opaque session id: ``session_<epoch-ms>_<random suffix>``.

    Unique with high probability within one client lifetime. Not suitable
    as a secret.
    """
    timestamp_ms = int(time.time() * 1000)
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=_SUFFIX_LENGTH))
    return f"session_{timestamp_ms}_{suffix}"

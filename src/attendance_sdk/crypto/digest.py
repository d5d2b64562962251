"""
Credential Digest
Derives the password digest the tenant service compares server-side

The raw password never leaves the process; only base64(SHA-1(password))
is transmitted.
"""

import base64
import hashlib
from typing import Union


def hash_password(password: Union[str, bytes]) -> str:
    """
    Compute the transmitted password digest

    Args:
        password: Raw password (str is encoded as UTF-8)

    Returns:
        Base64-encoded SHA-1 digest
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    digest = hashlib.sha1(password).digest()
    return base64.b64encode(digest).decode("ascii")

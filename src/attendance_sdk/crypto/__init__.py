"""
Crypto module for the attendance SDK

Provides the credential digest used during login.
"""

from attendance_sdk.crypto.digest import hash_password

__all__ = ["hash_password"]

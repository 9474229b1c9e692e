"""
Utilities for generating secrets and passwords for the stack configuration.
"""
import base64
import re
import secrets
from typing import Dict, Iterable

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def generate_secret_key() -> str:
    """
    Returns 32 random bytes, base64-encoded. Used for JWT / NextAuth secrets.
    """
    return base64.b64encode(secrets.token_bytes(32)).decode("ascii")


def generate_db_password() -> str:
    """
    Returns an alphanumeric password of at most 16 characters.

    16 random bytes are base64-encoded, every non-alphanumeric character is
    removed and the result is cut to 16 characters. Removal happens before
    truncation, so the result can be shorter than 16.
    """
    encoded = base64.b64encode(secrets.token_bytes(16)).decode("ascii")
    return _NON_ALPHANUMERIC.sub("", encoded)[:16]


def generate_secrets(secret_key_fields: Iterable[str],
                     password_fields: Iterable[str]) -> Dict[str, str]:
    """
    Generates a fresh value for every secret and password field.

    :param secret_key_fields: Keys that receive a high-entropy secret.
    :param password_fields: Keys that receive a database-style password.
    :return: Mapping of field name to generated value.
    """
    generated = {key: generate_secret_key() for key in secret_key_fields}
    generated.update({key: generate_db_password() for key in password_fields})
    return generated

"""
Validation of the public URL entered for external deployments.
"""
from typing import Optional
from urllib.parse import urlparse

INVALID_URL_MESSAGE = "Please enter a valid URL (e.g., https://kodus.yourdomain.com)"


def check_public_url(value: str) -> Optional[str]:
    """
    Checks that ``value`` is an http(s) URL with a dotted hostname.

    :param value: The URL entered by the operator.
    :return: None when valid, otherwise a message explaining the problem.
    """
    try:
        parsed = urlparse(value.strip())
        hostname = parsed.hostname
    except ValueError:
        return INVALID_URL_MESSAGE

    if not parsed.scheme or not parsed.netloc:
        return INVALID_URL_MESSAGE
    if parsed.scheme not in ("http", "https"):
        return "URL must start with http:// or https://"
    if not hostname or "." not in hostname:
        return "URL must include a valid domain name"
    return None

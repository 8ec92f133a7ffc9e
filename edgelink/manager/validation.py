"""Input gates used by the allocator."""

import re
from urllib.parse import urlparse

CUSTOM_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
# Code points a URL host may never contain: controls, space and URL delimiters
FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20\x7f#%/<>?@\[\\\]^|]")


def is_valid_url(url) -> bool:
    """
    True iff `url` is a string that parses as an absolute URL with a scheme and a host.

    Any scheme is accepted as long as a host follows it, so "ftp://files.example"
    passes while "not a url", "javascript:alert(1)" and "https://" do not.
    """
    if not isinstance(url, str) or not url:
        return False
    try:
        parsed = urlparse(url)
        # Accessing .port validates the port component ("http://h:99999" raises)
        parsed.port
    except ValueError:
        return False
    if not (parsed.scheme and parsed.netloc and parsed.hostname):
        return False
    # Bracketed IPv6 literals legitimately contain ":" and are left to urlparse
    if "[" not in parsed.netloc and FORBIDDEN_HOST_CHARS.search(parsed.hostname):
        return False
    return True


def is_valid_custom_id(custom_id) -> bool:
    """True iff non-empty and made only of ASCII letters, digits, '-' and '_'."""
    if not isinstance(custom_id, str):
        return False
    # fullmatch: "$" alone would accept a trailing newline
    return CUSTOM_ID_PATTERN.fullmatch(custom_id) is not None

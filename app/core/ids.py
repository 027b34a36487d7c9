"""
Identifier, slug and timestamp helpers for job listings.
"""

import re
import secrets
import string
import time


TOKEN_ALPHABET = string.ascii_letters + string.digits
TOKEN_LENGTH = 9

_NON_SLUG_CHARS = re.compile(r"[^\w ]+", re.ASCII)
_SPACE_RUNS = re.compile(r" +")


def slugify(text: str) -> str:
    """
    Build a URL-safe slug from a title.

    Lowercases, drops everything that is not an ASCII letter, digit,
    underscore or space, then collapses each run of spaces into one hyphen.
    Leading and trailing spaces become hyphens rather than being trimmed:

        slugify("Senior Engineer!! ") == "senior-engineer-"
    """
    text = _NON_SLUG_CHARS.sub("", text.lower())
    return _SPACE_RUNS.sub("-", text)


def random_token() -> str:
    """
    Generate a short random token for listing ids.

    Uses secrets module for cryptographic randomness. Collisions are not
    checked; uniqueness relies on the token space.
    """
    return ''.join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def current_epoch_millis() -> int:
    """Current wall-clock time as integer epoch milliseconds"""
    return time.time_ns() // 1_000_000

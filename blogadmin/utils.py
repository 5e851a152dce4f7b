import base64
import binascii
import re
from typing import Iterable

from blogadmin.errors import RemoteError

CONTENT_SUFFIXES = (".md", ".mdx")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def derive_slug(title: str) -> str:
    """Lowercase the title and collapse every run of non [a-z0-9] characters into one hyphen."""
    return _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")


def derive_filename(title: str) -> str:
    return f"{derive_slug(title)}.md"


def is_content_file(name: str, suffixes: Iterable[str] = CONTENT_SUFFIXES) -> bool:
    return name.endswith(tuple(suffixes))


def encode_transport(text: str) -> str:
    """UTF-8 encode the text, then base64 it for embedding in a JSON body."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_transport(payload: str) -> str:
    """
    Reverse encode_transport.
    The contents API wraps base64 payloads with newlines, so whitespace is dropped first.
    """
    compact = "".join(payload.split())
    try:
        raw = base64.b64decode(compact, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise RemoteError(f"Could not decode file content: {e}") from e

"""Slug derivation for human-readable product and category URLs."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lower-case, ASCII-only, hyphen-separated form of ``value``.

    "RoboClean Pro X1" -> "roboclean-pro-x1"
    """
    ascii_value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_value.lower()).strip("-")

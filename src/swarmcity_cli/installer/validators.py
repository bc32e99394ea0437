"""Answer predicates shared by the prompts and the config loader.

Each returns True or the message questionary shows under the prompt.
"""

from __future__ import annotations

import re
from pathlib import Path

_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$", re.IGNORECASE)
# Alphabetic TLD, or an IDN TLD in punycode (xn--p1ai)
_TLD = re.compile(r"^(?:[a-z]{2,63}|xn--[a-z0-9-]{2,59})$", re.IGNORECASE)


def validate_workpath(value: str) -> bool | str:
    """Accept absolute paths only."""
    if value and Path(value.strip()).is_absolute():
        return True
    return "Please enter a absolute path."


def is_fqdn(value: str) -> bool:
    """Check that value is a fully qualified domain name.

    At least two labels, each 1-63 letters/digits/hyphens not starting or
    ending with a hyphen, alphabetic or punycode TLD, 253 characters max.
    A trailing dot is rejected since the value is written as-is into
    SITE_HOSTNAME.
    """
    if not value or len(value) > 253:
        return False
    labels = value.split(".")
    if len(labels) < 2:
        return False
    if not all(_LABEL.match(label) for label in labels):
        return False
    return bool(_TLD.match(labels[-1]))


def validate_hostname(value: str) -> bool | str:
    """Accept an FQDN or exactly ``localhost``."""
    if value == "localhost" or is_fqdn(value):
        return True
    return "Please enter a fully qualified domain name."

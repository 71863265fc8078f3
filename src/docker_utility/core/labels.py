"""
Label handling for managed containers.

Two labels make up the whole persisted state: the marker label that makes a
container "managed", and the options label that stores the original run
arguments as base64 of a single joined string.
"""

from __future__ import annotations

import base64
import binascii
import re
import shlex
from typing import Dict, List, Mapping, Optional, Sequence

from docker_utility.config import MANAGED_LABEL_KEY, MANAGED_LABEL_VALUE, OPTIONS_LABEL_KEY

# Characters a shell would treat specially; any other token is stored as-is
_NEEDS_QUOTING = re.compile(r"""[\s'"\\$`|&;<>()*?\[\]{}~!#]""")


def join_args(args: Sequence[str]) -> str:
    """
    Join run arguments into the string stored in the options label.

    Plain tokens are joined with single spaces, exactly as a shell ``$*``
    would, non-ASCII text included. Only tokens that are empty or contain
    whitespace, quotes or shell metacharacters are quoted, so
    :func:`split_args` can recover them.
    """
    return " ".join(
        t if t and not _NEEDS_QUOTING.search(t) else shlex.quote(t)
        for t in args
    )


def split_args(options: str) -> List[str]:
    """Split a stored options string back into run arguments."""
    return shlex.split(options)


def encode_options(options: str) -> str:
    """Base64-encode a joined options string. No line wrapping."""
    if not options:
        return ""
    return base64.b64encode(options.encode("utf-8")).decode("ascii")


def decode_options(encoded: str) -> str:
    """
    Decode an options label value.

    Embedded newlines are ignored so values written by line-wrapping
    ``base64`` implementations still decode.

    Raises:
        ValueError: value is not valid base64 or not UTF-8
    """
    encoded = "".join(encoded.split())
    if not encoded:
        return ""
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"invalid options label value: {e}") from e


def build_labels(encoded_options: str) -> Dict[str, str]:
    """Label map attached to every container this tool creates."""
    return {
        MANAGED_LABEL_KEY: MANAGED_LABEL_VALUE,
        OPTIONS_LABEL_KEY: encoded_options,
    }


def options_label(labels: Optional[Mapping[str, str]]) -> Optional[str]:
    """Raw options label value, or None when the label is absent."""
    if not labels:
        return None
    return labels.get(OPTIONS_LABEL_KEY)


def is_managed(labels: Optional[Mapping[str, str]]) -> bool:
    return bool(labels) and labels.get(MANAGED_LABEL_KEY) == MANAGED_LABEL_VALUE


__all__ = [
    "join_args",
    "split_args",
    "encode_options",
    "decode_options",
    "build_labels",
    "options_label",
    "is_managed",
]

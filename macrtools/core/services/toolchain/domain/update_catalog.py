"""
L1 Domain: Software update catalog parsing (pure).

``softwareupdate -l`` only has a free-text listing, so parsing is
kept here, behind one function, where format drift shows up in tests.

Two listing formats are known::

    # 10.13 / 10.14
       * Command Line Tools (macOS Mojave version 10.14) for Xcode-10.3
    \tCommand Line Tools (macOS Mojave version 10.14) for Xcode (10.3), 199140K [recommended]

    # 10.15+
    * Label: Command Line Tools for Xcode-11.5
    \tTitle: Command Line Tools for Xcode, Version: 11.5, Size: 224868K, Recommended: YES,
"""

from __future__ import annotations

import re

from macrtools.core.services.toolchain.data.constants import CLT_CATALOG_PATTERN

_CLT_LINE_RE = re.compile(CLT_CATALOG_PATTERN)
_LABEL_PREFIX_RE = re.compile(r"^Label:\s*")


def find_clt_labels(listing: str) -> list[str]:
    """Return every command line tools label in catalog order."""
    labels: list[str] = []
    for line in listing.splitlines():
        if not _CLT_LINE_RE.search(line):
            continue
        # Everything after the "*" bullet is the label
        label = line.split("*", 1)[1].strip()
        label = _LABEL_PREFIX_RE.sub("", label)
        if label:
            labels.append(label)
    return labels


def parse_clt_label(listing: str) -> str | None:
    """Pick the command line tools label to install.

    The catalog lists older releases first, so the last match wins.

    Returns:
        The bare label, or None if the listing has no matching entry.
    """
    labels = find_clt_labels(listing)
    return labels[-1] if labels else None

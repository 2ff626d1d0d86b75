"""Shared helpers for word normalization."""

from __future__ import annotations

import re

WORD_RE = re.compile(r"[^A-Z]")


def normalize_word(text: object) -> str:
    """Return ``text`` uppercased with everything outside A-Z removed."""

    if text is None:
        return ""
    return WORD_RE.sub("", str(text).upper())


__all__ = ["normalize_word"]

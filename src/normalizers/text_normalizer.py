#!/usr/bin/env python3
"""
Person Name Collation

Builds sort keys for person identifiers so the published roster reads in
dictionary order: accents and case are ignored first and only used to break
ties, the way a Portuguese (pt-BR) reader expects names to be listed.
"""

import re
import unicodedata
from typing import Callable, Iterable, List, Optional, Tuple


def strip_accents(name: str) -> str:
    """
    Remove combining marks from a name.

    Example:
        >>> strip_accents("João Antônio")
        'Joao Antonio'
    """
    if not name or not isinstance(name, str):
        return ""

    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(name: str) -> Tuple[str, str, str, str]:
    """
    Sort key approximating locale-aware collation for person names.

    Levels, compared in order:
    1. Base letters, case-folded, punctuation dropped, spaces collapsed
    2. Accented form, case-folded
    3. Case (lowercase sorts before uppercase)
    4. The raw identifier, so distinct names never compare equal

    Args:
        name: Person identifier

    Returns:
        Tuple usable as a ``sorted(..., key=...)`` key

    Example:
        >>> sorted(["Élio", "eva", "Ana", "ana"], key=collation_key)
        ['ana', 'Ana', 'Élio', 'eva']
    """
    text = name if isinstance(name, str) else str(name)

    base = strip_accents(text).casefold()
    base = re.sub(r"[^\w\s]", "", base)
    base = re.sub(r"\s+", " ", base).strip()

    return (base, text.casefold(), text.swapcase(), text)


def sort_roster(people: Iterable[str],
                sort_key: Optional[Callable[[str], object]] = None) -> List[str]:
    """
    Sort a roster of person identifiers.

    Args:
        people: Person identifiers (any iterable, duplicates are kept)
        sort_key: Key function to order names by (default: collation_key)

    Returns:
        Sorted list of person identifiers
    """
    return sorted(people, key=sort_key or collation_key)

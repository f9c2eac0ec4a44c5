#!/usr/bin/env python3
"""
Anagrammer Dictionary Source - wordlist.py

Turns a raw word list (one word per line) into the length buckets the
search engine consumes:

  - words without a vowel-ish letter (aeiouy) are dropped ("brrr", "hmm")
  - a trailing possessive is stripped ("aaron's" -> "aaron")
  - words are grouped by length, keeping dictionary order inside a bucket

The word list comes from a file, or from wordfreq's built-in English list
when no file is at hand.
"""

from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional
from wordfreq import top_n_list, zipf_frequency
import re

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

N_WORDS = 50000
VOWELISH = re.compile(r"[aeiouy]", re.IGNORECASE)
APOSTROPHES = ("'", "’")


class DictionaryError(Exception):
    """The word list could not be read."""


# ============================================================================ #
#                              CLEANING                                        #
# ============================================================================ #

def clean_word(line: str) -> Optional[str]:
    word = line.strip()
    if len(word) >= 2 and word[-2] in APOSTROPHES:
        word = word[:-2]
    if not word or not VOWELISH.search(word):
        return None
    return word


def clean_words(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        word = clean_word(line)
        if word is not None:
            yield word


# ============================================================================ #
#                              SOURCES                                         #
# ============================================================================ #

def load_words(path: Path | str) -> List[str]:
    """Cleaned words from a UTF-8 word list file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="ignore") as f:
            return list(clean_words(f))
    except OSError as e:
        raise DictionaryError(f"Cannot read word list {path}: {e}") from e


def load_wordfreq_words(n: int = N_WORDS) -> List[str]:
    """Top-n English words from wordfreq, most frequent first."""
    return list(clean_words(top_n_list('en', n, wordlist='best')))


# ============================================================================ #
#                              BUCKETS                                         #
# ============================================================================ #

def bucketize_words(words: Iterable[str]) -> Dict[int, List[str]]:
    """Group words by length. Raw lines are cleaned first."""
    buckets: Dict[int, List[str]] = {}
    for word in clean_words(words):
        buckets.setdefault(len(word), []).append(word)
    return buckets


@lru_cache(maxsize=None)
def get_zipf(word: str) -> float:
    return zipf_frequency(word, 'en')


def order_by_frequency(words: List[str]) -> List[str]:
    """Most common words first; ties keep dictionary order."""
    return sorted(words, key=lambda w: -get_zipf(w))

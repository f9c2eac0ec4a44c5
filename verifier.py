#!/usr/bin/env python3
"""
Anagrammer Hash Verifier - verifier.py

A phrase is only a bag of words; the hidden answer is one particular word
order. verify() tries every order of the words (never the letters inside a
word) until the digest of the space-joined string matches the target.

Phrases are short (2-5 words), so the factorial blow-up stays small.
"""

from __future__ import annotations
from itertools import permutations
from multiprocessing.pool import Pool
from typing import Iterable, Optional, Sequence, Tuple
import hashlib

DEFAULT_ALGORITHM = "md5"
IMAP_CHUNKSIZE = 16


def digest(text: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    return hashlib.new(algorithm, text.encode("utf-8")).hexdigest()


def check_algorithm(algorithm: str) -> str:
    if algorithm not in hashlib.algorithms_available:
        raise ValueError(f"Unknown digest algorithm '{algorithm}'")
    return algorithm


def verify(words: Sequence[str], target_digest: str, algorithm: str = DEFAULT_ALGORITHM) -> Optional[str]:
    """Return the first ordering of words whose digest equals target_digest."""
    tried = set()
    for ordering in permutations(words):
        candidate = " ".join(ordering)
        if candidate in tried:
            continue
        tried.add(candidate)
        if digest(candidate, algorithm) == target_digest:
            return candidate
    return None


def _verify_worker(args: Tuple[str, str, str]) -> Optional[str]:
    """Pool worker: verify one space-joined phrase."""
    phrase, target_digest, algorithm = args
    return verify(phrase.split(), target_digest, algorithm)


def verify_phrases(
    phrases: Iterable[str],
    target_digest: str,
    algorithm: str = DEFAULT_ALGORITHM,
    pool: Optional[Pool] = None,
) -> Optional[str]:
    """
    Verify phrases in the order given and return the first match.

    With a pool, imap keeps results in input order, so the answer is the
    same as the serial one. The pool is terminated on the first hit, which
    drops any work still queued or running.
    """
    if pool is None:
        for phrase in phrases:
            match = verify(phrase.split(), target_digest, algorithm)
            if match is not None:
                return match
        return None

    jobs = [(phrase, target_digest, algorithm) for phrase in phrases]
    for match in pool.imap(_verify_worker, jobs, chunksize=IMAP_CHUNKSIZE):
        if match is not None:
            pool.terminate()
            return match
    return None

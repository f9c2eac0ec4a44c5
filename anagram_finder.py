#!/usr/bin/env python3
"""
Anagrammer Search Engine - anagram_finder.py

Finds a rearrangement of a target phrase into dictionary words whose digest
matches a given token. The answer may have any number of words.

How the search grows:
  Every accepted dictionary word is combined with every node already in the
  index whose letters still fit inside the word's complement (target minus
  word). So the index ends up holding every multi-word sub-multiset of the
  target reachable from the words seen so far. A word whose complement is
  already in the index completes the target: that pair is a candidate.

Long words are fed first. Real answers tend to use a few long words, and the
short-word buckets are where the number of combinations explodes, so most
searches end before reaching them.
"""

from __future__ import annotations
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set, Union
from tqdm import tqdm
import hashlib

from alphagram import AlphagramNode, DecompositionIndex, LetterMultiset, subtract
from verifier import DEFAULT_ALGORITHM, check_algorithm, verify_phrases
from wordlist import bucketize_words, order_by_frequency

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

BUCKET_ORDERS: Dict[str, Callable[[Iterable[int]], List[int]]] = {
    "longest": lambda lengths: sorted(lengths, reverse=True),
    "shortest": lambda lengths: sorted(lengths),
}

WORD_ORDERS: Dict[str, Callable[[List[str]], List[str]]] = {
    "dictionary": list,
    "frequency": order_by_frequency,
}

DEFAULT_BUCKET_ORDER = "longest"
DEFAULT_WORD_ORDER = "dictionary"
DEFAULT_FINGERPRINT = "structure"


def progress(iterable, desc=""):
    return tqdm(iterable, desc=desc, ascii=" ▖▘▝▗▚▞█", bar_format='{desc}: |{bar:20}| {n_fmt}/{total_fmt}')


# ============================================================================ #
#                              FINGERPRINTS                                    #
# ============================================================================ #

def structural_fingerprint(node: AlphagramNode) -> str:
    """
    Digest of the node's whole nested structure: key, words and, recursively,
    every combination pair. Changes whenever a merge adds words or pairs
    anywhere below the node.
    """
    memo: Dict[int, str] = {}

    def walk(n: AlphagramNode) -> str:
        cached = memo.get(id(n))
        if cached is not None:
            return cached
        parts = [n.key.letters, ",".join(sorted(n.words))]
        parts.extend(sorted(
            walk(left) + "+" + walk(right)
            for left, right in n.combinations.values()
        ))
        memo[id(n)] = hashlib.md5("|".join(parts).encode()).hexdigest()
        return memo[id(n)]

    return walk(node)


def key_fingerprint(node: AlphagramNode) -> str:
    return node.key.letters


FINGERPRINTS: Dict[str, Callable[[AlphagramNode], str]] = {
    "structure": structural_fingerprint,
    "key": key_fingerprint,
}


# ============================================================================ #
#                              SEARCH ENGINE                                   #
# ============================================================================ #

@dataclass
class SearchStats:
    words_read: int = 0
    words_discarded: int = 0
    buckets_processed: int = 0
    candidates_found: int = 0
    candidates_checked: int = 0
    phrases_checked: int = 0


class AnagramFinder:
    """
    Incremental alphagram search for one target phrase and digest.

    Does not presume the answer has the same number of words as the target.
    Optimises the typical case, not the worst case.
    """

    def __init__(
        self,
        phrase: str,
        target_digest: str,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        bucket_order: str = DEFAULT_BUCKET_ORDER,
        word_order: str = DEFAULT_WORD_ORDER,
        fingerprint: str = DEFAULT_FINGERPRINT,
        workers: int = 1,
        show_progress: bool = False,
    ) -> None:
        self.target_key = LetterMultiset.from_word(phrase)
        if not self.target_key.size:
            raise ValueError(f"Target phrase {phrase!r} has no letters")
        if bucket_order not in BUCKET_ORDERS:
            raise ValueError(f"Unknown bucket order '{bucket_order}' (choose from {sorted(BUCKET_ORDERS)})")
        if word_order not in WORD_ORDERS:
            raise ValueError(f"Unknown word order '{word_order}' (choose from {sorted(WORD_ORDERS)})")
        if fingerprint not in FINGERPRINTS:
            raise ValueError(f"Unknown fingerprint policy '{fingerprint}' (choose from {sorted(FINGERPRINTS)})")

        self.phrase = phrase
        self.target_digest = target_digest.strip().lower()
        self.algorithm = check_algorithm(algorithm)
        self.bucket_order = bucket_order
        self.word_order = word_order
        self.fingerprint = FINGERPRINTS[fingerprint]
        self.workers = max(1, workers)
        self.show_progress = show_progress

        self.index = DecompositionIndex()
        self.candidates: List[AlphagramNode] = []
        self.checked_candidates: Set[str] = set()
        self.stats = SearchStats()
        self._pool: Optional[Pool] = None

    # ------------------------------------------------------------------ #

    def parse_word(self, word: str) -> None:
        """Feed one dictionary word into the index."""
        self.stats.words_read += 1
        word_key = LetterMultiset.from_word(word)
        if not word_key.size:
            self.stats.words_discarded += 1
            return

        # Same letters as a tracked multiset: just another spelling of it
        existing = self.index.lookup(word_key)
        if existing is not None:
            existing.add_word(word)
            return

        remainder = subtract(self.target_key, word_key)
        if remainder is None:
            self.stats.words_discarded += 1
            return

        word_node = AlphagramNode(word_key, (word,))

        # One word spells the whole target
        if not remainder.size:
            self._add_candidate(word_node)
            return

        remainder_existing = self.index.lookup(remainder)
        if remainder_existing is not None:
            self._add_candidate(word_node.sum_with(remainder_existing))
            return

        self.combine(word_node, remainder)
        word_node = self.index.insert_or_merge(word_node)

        # Target is two spellings of the same letters ("stop pots")
        if remainder == word_key:
            self._add_candidate(word_node.sum_with(word_node))

    def combine(self, word_node: AlphagramNode, remainder: LetterMultiset) -> None:
        """Sum word_node with every indexed node that still fits in remainder."""
        for sub in self.index.each_node():
            if subtract(remainder, sub.key) is None:
                continue
            self.index.insert_or_merge(sub.sum_with(word_node))

    def _add_candidate(self, candidate: AlphagramNode) -> None:
        self.candidates.append(candidate)
        self.stats.candidates_found += 1

    # ------------------------------------------------------------------ #

    def find_and_verify(self) -> Optional[str]:
        """Check every candidate not yet seen in its current shape."""
        for candidate in self.candidates:
            fingerprint = self.fingerprint(candidate)
            if fingerprint in self.checked_candidates:
                continue
            self.checked_candidates.add(fingerprint)
            self.stats.candidates_checked += 1

            phrases = sorted(candidate.enumerate_phrases())
            self.stats.phrases_checked += len(phrases)
            match = verify_phrases(phrases, self.target_digest, self.algorithm, self._pool)
            if match is not None:
                return match
        return None

    def run(self, buckets: Mapping[int, List[str]]) -> Optional[str]:
        """Process length buckets in order, verifying after each one."""
        if self.workers > 1:
            with Pool(self.workers) as pool:
                self._pool = pool
                try:
                    return self._run_buckets(buckets)
                finally:
                    self._pool = None
        return self._run_buckets(buckets)

    def _run_buckets(self, buckets: Mapping[int, List[str]]) -> Optional[str]:
        lengths = BUCKET_ORDERS[self.bucket_order](buckets.keys())
        if self.show_progress:
            lengths = progress(lengths, "Searching length buckets")

        order_words = WORD_ORDERS[self.word_order]
        for length in lengths:
            for word in order_words(buckets[length]):
                self.parse_word(word)
            self.stats.buckets_processed += 1

            result = self.find_and_verify()
            if result is not None:
                return result
        return None


# ============================================================================ #
#                              ENTRY                                           #
# ============================================================================ #

def solve(
    phrase: str,
    target_digest: str,
    dictionary: Union[Mapping[int, List[str]], Iterable[str]],
    **options,
) -> Optional[str]:
    """
    Find the word sequence spelling phrase's letters whose digest is
    target_digest, or None when the dictionary cannot produce one.

    dictionary is either length buckets (as from bucketize_words) or any
    iterable of raw words, which is cleaned and bucketed here.
    """
    if isinstance(dictionary, Mapping):
        buckets = dictionary
    else:
        buckets = bucketize_words(dictionary)
    return AnagramFinder(phrase, target_digest, **options).run(buckets)

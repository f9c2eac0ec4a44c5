#!/usr/bin/env python3
"""
Anagrammer - find_anagram.py

Command-line front end: given a phrase and the digest of some unknown
rearrangement of its letters into words, print that rearrangement.

Example:
  python find_anagram.py "poultry outwits ants" 4624d200580677270a54ccff86b9610e
  python find_anagram.py "poultry outwits ants" <digest> --wordfreq 30000 --workers 4
"""

from __future__ import annotations
from pathlib import Path
import argparse
import sys
import time

from anagram_finder import (
    AnagramFinder, BUCKET_ORDERS, WORD_ORDERS, FINGERPRINTS,
    DEFAULT_BUCKET_ORDER, DEFAULT_WORD_ORDER, DEFAULT_FINGERPRINT,
)
from verifier import DEFAULT_ALGORITHM
from wordlist import DictionaryError, bucketize_words, load_words, load_wordfreq_words

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

WORDLIST = Path("wordlist.txt")
WORKERS = 1


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Find the anagram of a phrase whose digest matches a target"
    )
    parser.add_argument('phrase', help='Phrase whose letters the answer rearranges')
    parser.add_argument('digest', help='Hex digest of the hidden answer')
    parser.add_argument('--wordlist', '-w', type=Path, default=WORDLIST,
                        help=f'Word list file, one word per line (default: {WORDLIST})')
    parser.add_argument('--wordfreq', type=int, default=None, metavar='N',
                        help='Use the top N wordfreq English words instead of a file')
    parser.add_argument('--algorithm', default=DEFAULT_ALGORITHM,
                        help=f'hashlib digest algorithm (default: {DEFAULT_ALGORITHM})')
    parser.add_argument('--bucket-order', choices=sorted(BUCKET_ORDERS), default=DEFAULT_BUCKET_ORDER,
                        help=f'Order of word-length buckets (default: {DEFAULT_BUCKET_ORDER})')
    parser.add_argument('--word-order', choices=sorted(WORD_ORDERS), default=DEFAULT_WORD_ORDER,
                        help=f'Order of words inside a bucket (default: {DEFAULT_WORD_ORDER})')
    parser.add_argument('--fingerprint', choices=sorted(FINGERPRINTS), default=DEFAULT_FINGERPRINT,
                        help=f'Candidate de-duplication policy (default: {DEFAULT_FINGERPRINT})')
    parser.add_argument('--workers', '-j', type=int, default=WORKERS,
                        help=f'Processes used for digest checks (default: {WORKERS})')
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar over length buckets')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    print("Loading dictionary...")
    try:
        if args.wordfreq is not None:
            words = load_wordfreq_words(args.wordfreq)
        else:
            words = load_words(args.wordlist)
    except DictionaryError as e:
        print(f"ERROR: {e}")
        return 1

    buckets = bucketize_words(words)
    print(f"Words: {sum(len(b) for b in buckets.values())} in {len(buckets)} length buckets")

    try:
        finder = AnagramFinder(
            args.phrase,
            args.digest,
            algorithm=args.algorithm,
            bucket_order=args.bucket_order,
            word_order=args.word_order,
            fingerprint=args.fingerprint,
            workers=args.workers,
            show_progress=args.progress,
        )
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    t0 = time.time()
    result = finder.run(buckets)
    elapsed = time.time() - t0

    stats = finder.stats
    print(f"\n{'='*60}")
    print(f"Target:      {args.phrase} ({finder.target_key})")
    print(f"Words read:  {stats.words_read} ({stats.words_discarded} discarded)")
    print(f"Index:       {len(finder.index)} alphagrams")
    print(f"Candidates:  {stats.candidates_found} found, {stats.candidates_checked} checked")
    print(f"Phrases:     {stats.phrases_checked} checked in {elapsed:.1f}s")
    print(f"{'='*60}")

    if result is None:
        print("No anagram found.")
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Anagrammer Letter Algebra - alphagram.py

An alphagram is the sorted-letter signature shared by every word that is an
anagram of every other: "stop", "pots" and "tops" all have alphagram "opst".

This module holds the three value types the search is built from:

  LetterMultiset      canonical sorted letters of a word or phrase
  AlphagramNode       the dictionary words spelling one multiset, plus the
                      pairs of smaller nodes that add up to it
  DecompositionIndex  every node discovered so far, one per multiset

Example: target "poultry outwits ants"
  printout + stout   -> node "inooprsttttuu" (combination pair)
  yawls              -> complement of that node, so yawls + node is a candidate
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple
import re


_NON_LETTERS = re.compile(r"[^a-z]")


class IncompatibleMerge(ValueError):
    """Raised when two nodes with different letters are merged."""


# ============================================================================ #
#                              LETTER MULTISET                                 #
# ============================================================================ #

@dataclass(frozen=True)
class LetterMultiset:
    """Sorted lower-case letters. Build with from_word(), not the constructor."""
    letters: str

    @classmethod
    def from_word(cls, text: str) -> LetterMultiset:
        return cls("".join(sorted(_NON_LETTERS.sub("", text.lower()))))

    @property
    def size(self) -> int:
        return len(self.letters)

    def __len__(self) -> int:
        return len(self.letters)

    def __lt__(self, other: LetterMultiset) -> bool:
        return (self.size, self.letters) < (other.size, other.letters)

    def __str__(self) -> str:
        return self.letters


def subtract(a: LetterMultiset, b: LetterMultiset) -> Optional[LetterMultiset]:
    """
    Letters of a left over after removing one occurrence of each letter in b.

    Returns None when b holds a letter (or more copies of one) that a lacks.
    Both strings are sorted, so a single merge-style walk is enough.
    """
    have = a.letters
    remainder = []
    i = 0
    for ch in b.letters:
        while i < len(have) and have[i] < ch:
            remainder.append(have[i])
            i += 1
        if i == len(have) or have[i] != ch:
            return None
        i += 1
    remainder.append(have[i:])
    return LetterMultiset("".join(remainder))


def concat(a: LetterMultiset, b: LetterMultiset) -> LetterMultiset:
    return LetterMultiset("".join(sorted(a.letters + b.letters)))


def same_letters(a: LetterMultiset, b: LetterMultiset) -> bool:
    return a.letters == b.letters


# ============================================================================ #
#                              ALPHAGRAM NODE                                  #
# ============================================================================ #

def _pair_key(left: AlphagramNode, right: AlphagramNode) -> Tuple[str, str]:
    """Order-independent key for a combination pair."""
    a, b = left.key.letters, right.key.letters
    return (a, b) if a <= b else (b, a)


class AlphagramNode:
    """
    One letter multiset and every known way of spelling it.

    words:        dictionary words that are exact anagrams of key
    combinations: (left, right) child pairs with left.key + right.key == key,
                  stored once per unordered pair of child keys. Children are
                  shared with the index and with other nodes.
    """

    __slots__ = ("key", "words", "combinations")

    def __init__(self, key: LetterMultiset, words=()) -> None:
        self.key: LetterMultiset = key
        self.words: Set[str] = set(words)
        self.combinations: Dict[Tuple[str, str], Tuple[AlphagramNode, AlphagramNode]] = {}

    @classmethod
    def for_word(cls, word: str) -> AlphagramNode:
        return cls(LetterMultiset.from_word(word), (word,))

    def __repr__(self) -> str:
        return f"AlphagramNode({self.key.letters!r}, words={sorted(self.words)}, pairs={len(self.combinations)})"

    def add_word(self, word: str) -> None:
        self.words.add(word)

    def add_combination(self, left: AlphagramNode, right: AlphagramNode) -> None:
        if not same_letters(concat(left.key, right.key), self.key):
            raise IncompatibleMerge(
                f"{left.key} + {right.key} does not spell {self.key}"
            )
        self.combinations.setdefault(_pair_key(left, right), (left, right))

    def merge(self, other: AlphagramNode) -> AlphagramNode:
        """Fold other's words and combinations into this node (in place)."""
        if not same_letters(self.key, other.key):
            raise IncompatibleMerge(
                f"cannot merge alphagram {other.key} into {self.key}"
            )
        if other is self:
            return self

        self.words |= other.words
        for pair, (left, right) in other.combinations.items():
            mine = self.combinations.get(pair)
            if mine is None:
                self.combinations[pair] = (left, right)
                continue
            # Same child keys, possibly different child objects
            if mine[0].key == left.key:
                mine[0].merge(left)
                mine[1].merge(right)
            else:
                mine[0].merge(right)
                mine[1].merge(left)
        return self

    def sum_with(self, other: AlphagramNode) -> AlphagramNode:
        """Composite node spelling both nodes' letters, with no words of its own."""
        node = AlphagramNode(concat(self.key, other.key))
        node.combinations[_pair_key(self, other)] = (self, other)
        return node

    def enumerate_phrases(self, _memo: Optional[Dict[int, Set[str]]] = None) -> Set[str]:
        """
        All space-joined word sequences spelling this node's letters.

        Direct word hits first, then for every combination pair the cross
        product of the two children's phrases. Children always have fewer
        letters than their parent, so the recursion bottoms out at nodes with
        no combinations. The memo only lives for one top-level call.
        """
        memo = {} if _memo is None else _memo
        cached = memo.get(id(self))
        if cached is not None:
            return cached

        phrases = set(self.words)
        for left, right in self.combinations.values():
            if not same_letters(concat(left.key, right.key), self.key):
                continue
            right_phrases = right.enumerate_phrases(memo)
            if not right_phrases:
                continue
            for phrase1 in left.enumerate_phrases(memo):
                for phrase2 in right_phrases:
                    phrases.add(phrase1 + " " + phrase2)

        memo[id(self)] = phrases
        return phrases

    def word_count(self) -> int:
        return len(self.words) + sum(
            left.word_count() + right.word_count()
            for left, right in self.combinations.values()
        )

    def combination_count(self) -> int:
        return len(self.combinations) + sum(
            left.combination_count() + right.combination_count()
            for left, right in self.combinations.values()
        )


# ============================================================================ #
#                              DECOMPOSITION INDEX                             #
# ============================================================================ #

class DecompositionIndex:
    """Canonical node per letter multiset. Equal keys are merged on insert."""

    def __init__(self) -> None:
        self._nodes: Dict[str, AlphagramNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def insert_or_merge(self, node: AlphagramNode) -> AlphagramNode:
        """Returns the canonical node for node.key; always link to the result."""
        existing = self._nodes.get(node.key.letters)
        if existing is None:
            self._nodes[node.key.letters] = node
            return node
        return existing.merge(node)

    def lookup(self, key: LetterMultiset) -> Optional[AlphagramNode]:
        return self._nodes.get(key.letters)

    def each_node(self) -> List[AlphagramNode]:
        """Snapshot; nodes inserted afterwards are not in the returned list."""
        return list(self._nodes.values())

import random

import pytest

from alphagram import (
    AlphagramNode, DecompositionIndex, IncompatibleMerge, LetterMultiset,
    concat, same_letters, subtract,
)


def ms(text):
    return LetterMultiset.from_word(text)


# ---------------------------------------------------------------- letters

def test_from_word_strips_case_and_punctuation():
    assert ms("Poultry, outwits ants!").letters == "ailnooprssttttuuwy"


@pytest.mark.parametrize("word", ["printout", "outlaws", "yawls", "poultry outwits ants"])
def test_canonical_form_ignores_letter_order(word):
    letters = list(word)
    random.Random(7).shuffle(letters)
    assert ms(word) == ms("".join(letters))
    assert hash(ms(word)) == hash(ms("".join(letters)))


def test_subtract_returns_remainder():
    assert subtract(ms("poultry outwits ants"), ms("printout")) == ms("stoutyawls")


def test_subtract_rejects_missing_letter():
    assert subtract(ms("stout"), ms("zest")) is None


def test_subtract_rejects_excess_count():
    assert subtract(ms("toy"), ms("tot")) is None


def test_subtract_everything_leaves_empty_multiset():
    remainder = subtract(ms("stop"), ms("pots"))
    assert remainder is not None
    assert remainder.size == 0


@pytest.mark.parametrize("a, b", [
    ("poultry outwits ants", "stout"),
    ("poultry outwits ants", "yawls printout"),
    ("aabbcc", "abc"),
])
def test_subtract_then_concat_round_trips(a, b):
    remainder = subtract(ms(a), ms(b))
    assert remainder is not None
    assert concat(ms(b), remainder) == ms(a)


def test_ordering_is_size_then_letters():
    grams = sorted([ms("stout"), ms("toy"), ms("abc"), ms("printout")])
    assert [g.letters for g in grams] == ["abc", "oty", "osttu", "inoprttu"]


# ---------------------------------------------------------------- nodes

def test_add_word_is_idempotent():
    node = AlphagramNode.for_word("stop")
    node.add_word("pots")
    node.add_word("pots")
    assert node.words == {"stop", "pots"}


def test_sum_with_builds_composite():
    stout, yawls = AlphagramNode.for_word("stout"), AlphagramNode.for_word("yawls")
    pair = stout.sum_with(yawls)
    assert pair.key == ms("stout yawls")
    assert pair.words == set()
    assert list(pair.combinations.values()) == [(stout, yawls)]


def test_merge_requires_same_letters():
    with pytest.raises(IncompatibleMerge):
        AlphagramNode.for_word("stop").merge(AlphagramNode.for_word("stout"))


def test_merge_unions_words_and_combinations():
    stop = AlphagramNode.for_word("stop")
    stop.merge(AlphagramNode.for_word("pots"))
    assert stop.words == {"stop", "pots"}

    toy, stout, yawls = (AlphagramNode.for_word(w) for w in ("toy", "stout", "yawls"))
    a = toy.sum_with(stout)
    b = AlphagramNode(a.key)
    b.merge(a)
    assert list(b.combinations.values()) == [(toy, stout)]
    with pytest.raises(IncompatibleMerge):
        b.merge(toy.sum_with(yawls))


def test_merge_with_itself_changes_nothing():
    node = AlphagramNode.for_word("stop")
    node.add_word("pots")
    node.merge(node)
    assert node.words == {"stop", "pots"}

    stout, toy = AlphagramNode.for_word("stout"), AlphagramNode.for_word("toy")
    composite = stout.sum_with(toy)
    twin = AlphagramNode(composite.key)
    twin.combinations.update(composite.combinations)
    composite.merge(twin)
    assert len(composite.combinations) == 1
    assert stout.words == {"stout"}
    assert toy.words == {"toy"}


def test_merge_folds_children_with_equal_keys():
    stop1, stop2 = AlphagramNode.for_word("stop"), AlphagramNode.for_word("pots")
    toy = AlphagramNode.for_word("toy")
    a = stop1.sum_with(toy)
    a.merge(stop2.sum_with(toy))
    assert stop1.words == {"stop", "pots"}
    assert a.enumerate_phrases() == {"stop toy", "pots toy"}


def test_add_combination_checks_letters():
    node = AlphagramNode(ms("stouttoy"))
    node.add_combination(AlphagramNode.for_word("stout"), AlphagramNode.for_word("toy"))
    with pytest.raises(IncompatibleMerge):
        node.add_combination(AlphagramNode.for_word("stout"), AlphagramNode.for_word("yawls"))


def test_enumerate_phrases_nested():
    printout, stout, yawls = (AlphagramNode.for_word(w) for w in ("printout", "stout", "yawls"))
    candidate = yawls.sum_with(printout.sum_with(stout))
    assert candidate.enumerate_phrases() == {"yawls printout stout"}


def test_enumerate_phrases_unions_every_decomposition():
    stout, toy = AlphagramNode.for_word("stout"), AlphagramNode.for_word("toy")
    outs, toty = AlphagramNode.for_word("outs"), AlphagramNode.for_word("toty")
    node = stout.sum_with(toy)
    node.merge(outs.sum_with(toty))
    assert len(node.combinations) == 2
    assert node.enumerate_phrases() == {"stout toy", "outs toty"}


def test_enumerated_phrases_spell_the_key():
    printout, stout, yawls, outlaws = (
        AlphagramNode.for_word(w) for w in ("printout", "stout", "yawls", "outlaws")
    )
    printout.add_word("outprint")
    candidate = yawls.sum_with(printout.sum_with(stout))
    for phrase in candidate.enumerate_phrases():
        assert same_letters(ms(phrase), candidate.key)
    assert outlaws.enumerate_phrases() == {"outlaws"}


def test_counts():
    printout, stout, yawls = (AlphagramNode.for_word(w) for w in ("printout", "stout", "yawls"))
    candidate = yawls.sum_with(printout.sum_with(stout))
    assert candidate.word_count() == 3
    assert candidate.combination_count() == 2


# ---------------------------------------------------------------- index

def test_insert_or_merge_returns_canonical_node():
    index = DecompositionIndex()
    first = index.insert_or_merge(AlphagramNode.for_word("stop"))
    second = index.insert_or_merge(AlphagramNode.for_word("pots"))
    assert second is first
    assert first.words == {"stop", "pots"}
    assert len(index) == 1
    assert index.lookup(ms("tops")) is first
    assert index.lookup(ms("stout")) is None


def test_each_node_is_a_snapshot():
    index = DecompositionIndex()
    index.insert_or_merge(AlphagramNode.for_word("stout"))
    snapshot = index.each_node()
    index.insert_or_merge(AlphagramNode.for_word("toy"))
    assert [n.key for n in snapshot] == [ms("stout")]
    assert len(index.each_node()) == 2

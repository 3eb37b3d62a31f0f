# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import pytest

from html5tree._trie import Trie
from html5tree.constants import entities


@pytest.fixture
def trie():
    return Trie({"amp": "&", "amp;": "&", "ampx;": "?", "lt;": "<"})


def test_mapping(trie):
    assert len(trie) == 4
    assert trie["lt;"] == "<"
    assert "amp" in trie
    assert "am" not in trie


def test_keys(trie):
    assert trie.keys() == {"amp", "amp;", "ampx;", "lt;"}
    assert trie.keys("amp") == {"amp", "amp;", "ampx;"}
    assert trie.keys("ampx") == {"ampx;"}
    assert trie.keys("gt") == set()


def test_has_keys_with_prefix(trie):
    assert trie.has_keys_with_prefix("a")
    assert trie.has_keys_with_prefix("amp;")
    assert not trie.has_keys_with_prefix("ampy")
    assert not trie.has_keys_with_prefix("x")


def test_longest_prefix(trie):
    assert trie.longest_prefix("amp;") == "amp;"
    assert trie.longest_prefix("ampxyz") == "amp"
    assert trie.longest_prefix_item("amp;foo") == ("amp;", "&")
    with pytest.raises(KeyError):
        trie.longest_prefix("am")


def test_walk_nodes(trie):
    node = trie.root
    for char in "amp":
        node = node.child(char)
    assert node.isTerminal
    assert node.value == "&"
    assert node.child("x").child(";").value == "?"
    assert not node.child("x").isTerminal
    assert node.child("y") is None


def test_non_string_keys():
    with pytest.raises(TypeError):
        Trie({1: "x"})


def test_entity_table():
    entitiesTrie = Trie(entities)
    assert entitiesTrie["amp;"] == "&"
    assert entitiesTrie["amp"] == "&"
    assert entitiesTrie.longest_prefix("notit;") == "not"
    assert entitiesTrie.longest_prefix("notin;") == "notin;"

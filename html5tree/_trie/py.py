# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

from collections.abc import Mapping


class TrieNode(object):
    """One character step in a Trie.

    ``value`` is set when the path from the root to this node spells a
    complete key.
    """
    __slots__ = ("children", "value")

    def __init__(self):
        self.children = {}
        self.value = None

    @property
    def isTerminal(self):
        return self.value is not None

    def child(self, char):
        return self.children.get(char)


class Trie(Mapping):
    """Immutable prefix tree over string keys.

    Besides the read-only mapping interface the root node is exposed so that
    callers can walk the tree one character at a time.
    """

    def __init__(self, data):
        if not all(isinstance(x, str) for x in data.keys()):
            raise TypeError("All keys must be strings")

        self._data = dict(data)
        self.root = TrieNode()
        for key, value in self._data.items():
            node = self.root
            for char in key:
                nextNode = node.children.get(char)
                if nextNode is None:
                    nextNode = node.children[char] = TrieNode()
                node = nextNode
            node.value = value

    def __contains__(self, key):
        return key in self._data

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, key):
        return self._data[key]

    def _lookup(self, prefix):
        node = self.root
        for char in prefix:
            node = node.child(char)
            if node is None:
                return None
        return node

    def keys(self, prefix=None):
        if prefix is None or prefix == "":
            return set(self._data)

        node = self._lookup(prefix)
        keys = set()
        if node is None:
            return keys

        stack = [(prefix, node)]
        while stack:
            key, node = stack.pop()
            if node.isTerminal:
                keys.add(key)
            for char, child in node.children.items():
                stack.append((key + char, child))
        return keys

    def has_keys_with_prefix(self, prefix):
        node = self._lookup(prefix)
        return node is not None and (node.isTerminal or bool(node.children))

    def longest_prefix(self, prefix):
        node = self.root
        longest = None
        for i, char in enumerate(prefix):
            node = node.child(char)
            if node is None:
                break
            if node.isTerminal:
                longest = i + 1

        if longest is None:
            raise KeyError(prefix)
        return prefix[:longest]

    def longest_prefix_item(self, prefix):
        lprefix = self.longest_prefix(prefix)
        return (lprefix, self[lprefix])

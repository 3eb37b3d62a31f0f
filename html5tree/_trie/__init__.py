# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

from .py import Trie, TrieNode

__all__ = ["Trie", "TrieNode"]

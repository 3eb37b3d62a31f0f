# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

"""Tree builders used by the parser to construct documents.

A tree builder inherits from ``treebuilders.base.TreeBuilder``, which holds
the tree construction bookkeeping (open elements, active formatting
elements, head and form pointers) and the insertion algorithms. Subclasses
name the document class they build and supply ``testSerializer``, which
renders a subtree in the format used by the tree construction tests.
"""

treeBuilderCache = {}


def getTreeBuilder(treeType="dom"):
    """Get a TreeBuilder class for a tree type with built-in support

    treeType - the name of the tree type required (case-insensitive).
               Supported values are:

               "dom" - the html5tree.dom document model.
    """

    treeType = treeType.lower()
    if treeType not in treeBuilderCache:
        if treeType == "dom":
            from . import dom
            treeBuilderCache[treeType] = dom.TreeBuilder
        else:
            raise ValueError("""Unrecognised treebuilder "%s" """ % treeType)
    return treeBuilderCache.get(treeType)

# SPDX-FileCopyrightText: 2006-2021 html5lib contributors. See AUTHORS.rst
#
# SPDX-License-Identifier: MIT

import os.path

import pytest

from .tree_construction import TreeConstructionFile

_dir = os.path.abspath(os.path.dirname(__file__))
_testdata = os.path.join(_dir, "testdata")
_tree_construction = os.path.join(_testdata, "tree-construction")


def pytest_configure(config):
    if not os.path.exists(_tree_construction):
        pytest.exit("testdata not available! The tree-construction data "
                    "files should ship next to the tests.")


def pytest_collect_file(file_path, parent):
    dir = os.path.abspath(os.path.dirname(str(file_path)))
    dir_and_parents = set()
    while dir not in dir_and_parents:
        dir_and_parents.add(dir)
        dir = os.path.dirname(dir)

    if _tree_construction in dir_and_parents:
        if file_path.suffix == ".dat":
            return TreeConstructionFile.from_parent(parent, path=file_path)

#!/usr/bin/env python
# encoding: utf-8

"""Module contains common utilities used in automated code tests for paravec modules.

Attributes:
-----------
module_path : str
    Full path to this module directory.

common_texts : list of list of str
    Toy dataset.

Examples:
---------
It's easy to keep objects in temporary folder and reuse'em if needed:

>>> from paravec.models import Paragraph2Vec
>>> from paravec.test.utils import get_tmpfile, common_texts
>>>
>>> model = Paragraph2Vec(documents=common_texts, min_count=1, negative=2, context_length=2)
>>> temp_path = get_tmpfile('toy_p2v')
>>> model.save(temp_path)
>>>
>>> new_model = Paragraph2Vec.load(temp_path)
>>> result = new_model.most_similar("human", topn=1)

We can find our toy corpus in test data directory.

>>> from paravec.test.utils import datapath
>>>
>>> with open(datapath("paragraphs.cor")) as f:
...     texts = [line.split() for line in f]
>>> print(texts[0][:3])
['the', 'cat', 'sat']

"""

import contextlib
import tempfile
import os
import shutil

module_path = os.path.dirname(__file__)  # needed because sample data files are located in the same folder


def datapath(fname):
    """Get full path for file `fname` in test data directory placed in this module directory.

    Parameters
    ----------
    fname : str
        Name of file.

    Returns
    -------
    str
        Full path to `fname` in test_data folder.

    """
    return os.path.join(module_path, 'test_data', fname)


def get_tmpfile(suffix):
    """Get full path to file `suffix` in temporary folder.
    This function doesn't create the file (only generates the name).

    Parameters
    ----------
    suffix : str
        Suffix of file.

    Returns
    -------
    str
        Path to `suffix` file in temporary folder.

    """
    return os.path.join(tempfile.gettempdir(), suffix)


@contextlib.contextmanager
def temporary_file(name=""):
    """This context manager creates file `name` in temporary directory and returns its full path.
    Temporary directory with included files will be deleted at the end of context. Note, it won't create file.

    Parameters
    ----------
    name : str
        Filename.

    Yields
    ------
    str
        Path to file `name` in temporary directory.

    """
    tmp = tempfile.mkdtemp()
    try:
        yield os.path.join(tmp, name)
    finally:
        shutil.rmtree(tmp, ignore_errors=True)


# set up vars used in testing ("Deerwester" from the web tutorial)
common_texts = [
    ['human', 'interface', 'computer'],
    ['survey', 'user', 'computer', 'system', 'response', 'time'],
    ['eps', 'user', 'interface', 'system'],
    ['system', 'human', 'system', 'eps'],
    ['user', 'response', 'time'],
    ['trees'],
    ['graph', 'trees'],
    ['graph', 'minors', 'trees'],
    ['graph', 'minors', 'survey']
]

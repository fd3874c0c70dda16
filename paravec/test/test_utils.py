#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for checking various utils functions.
"""

import io
import logging
import pickle
import unittest

import numpy as np

from paravec import utils
from paravec.test.utils import common_texts, temporary_file


class Holder(utils.SaveLoad):
    def __init__(self, array, note):
        self.array = array
        self.note = note


class TestUtils(unittest.TestCase):
    def test_keep_vocab_item(self):
        self.assertTrue(utils.keep_vocab_item('a', 5, 5))
        self.assertFalse(utils.keep_vocab_item('a', 4, 5))
        self.assertTrue(utils.keep_vocab_item('a', 1, 5, trim_rule=lambda *args: utils.RULE_KEEP))
        self.assertFalse(utils.keep_vocab_item('a', 9, 5, trim_rule=lambda *args: utils.RULE_DISCARD))
        self.assertTrue(utils.keep_vocab_item('a', 9, 5, trim_rule=lambda *args: utils.RULE_DEFAULT))

    def test_decoding(self):
        self.assertEqual(utils.to_unicode(b'caf\xc3\xa9'), 'caf\xe9')
        self.assertEqual(utils.to_unicode('caf\xe9'), 'caf\xe9')
        self.assertEqual(utils.to_utf8('caf\xe9'), b'caf\xc3\xa9')

    def test_save_as_line_sentence(self):
        for fname in ('corpus.txt', 'corpus.txt.gz'):
            with temporary_file(fname) as corpus_file:
                utils.save_as_line_sentence(common_texts, corpus_file)
                with utils.open(corpus_file, 'rb') as fin:
                    lines = [utils.to_unicode(line).split() for line in fin]
            self.assertEqual(lines, common_texts)


class TestSaveLoad(unittest.TestCase):
    def test_separately(self):
        with temporary_file('holder.tst') as fname:
            holder = Holder(np.arange(10, dtype=float), 'small')
            holder.save(fname, separately=['array'])
            loaded = Holder.load(fname)
            np.testing.assert_array_equal(loaded.array, holder.array)
            self.assertEqual(loaded.note, 'small')
            self.assertEqual(holder.array.shape, (10, ))  # attribute restored after saving

            loaded = Holder.load(fname, mmap='r')
            np.testing.assert_array_equal(loaded.array, holder.array)

    def test_ignore(self):
        with temporary_file('holder.tst') as fname:
            Holder(np.arange(3), 'dropped').save(fname, ignore=['note'])
            self.assertIsNone(Holder.load(fname).note)

    def test_file_handle(self):
        holder = Holder(np.ones(3), 'handle')
        buffer = io.BytesIO()
        holder.save(buffer)
        buffer.seek(0)
        loaded = pickle.load(buffer)
        np.testing.assert_array_equal(loaded.array, holder.array)


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

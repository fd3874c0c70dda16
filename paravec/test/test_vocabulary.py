#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for the corpus statistics: vocabulary, subsampling and the noise table.
"""

import logging
import unittest

import numpy as np
from testfixtures import log_capture

from paravec import utils
from paravec.models.vocabulary import Vocabulary, UNK_WORD, NULL_WORD
from paravec.test.utils import common_texts


class TestVocabulary(unittest.TestCase):
    def test_small_scenario(self):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab([['the', 'cat', 'sat'], ['the', 'dog', 'ran']])

        self.assertEqual(vocab.index_to_key, ['the', 'cat', 'sat', 'dog', 'ran', UNK_WORD, NULL_WORD])
        self.assertEqual(len(vocab), 7)
        self.assertEqual(vocab.num_words, 5)
        self.assertEqual((vocab.unk_index, vocab.null_index), (5, 6))
        self.assertEqual(vocab.corpus_count, 2)
        self.assertEqual(vocab.corpus_total_words, 6)
        # 'the' occurs twice: round(2 ** 0.75) = 2 slots; the others once: 1 slot each
        self.assertEqual(len(vocab.noise_table), 6)
        self.assertEqual(np.count_nonzero(vocab.noise_table == vocab.index('the')), 2)

    def test_unique_indexes(self):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab(common_texts)
        words = {word for text in common_texts for word in text}
        indexes = [vocab.index(word) for word in words]
        self.assertEqual(sorted(indexes), list(range(vocab.num_words)))
        self.assertEqual(vocab.num_words, 12)

    def test_min_count(self):
        vocab = Vocabulary(min_count=3)
        report = vocab.build_vocab(common_texts)

        self.assertEqual(vocab.index_to_key[:vocab.num_words], ['user', 'system', 'trees', 'graph'])
        for word in ['human', 'interface', 'computer', 'minors']:
            self.assertNotIn(word, vocab)
            self.assertEqual(vocab.index(word), vocab.unk_index)
        self.assertEqual(vocab.unk_count, 16)
        self.assertEqual(report['drop_unique'], 8)
        self.assertEqual(report['drop_total'], 16)
        self.assertEqual(report['retain_total'], 13)
        self.assertEqual(report['num_retained_words'], 4)

    def test_trim_rule(self):
        def rule(word, count, min_count):
            return utils.RULE_DISCARD if word == 'system' else utils.RULE_DEFAULT

        vocab = Vocabulary(min_count=1)
        vocab.build_vocab(common_texts, trim_rule=rule)
        self.assertNotIn('system', vocab)
        self.assertEqual(vocab.num_words, 11)
        self.assertEqual(vocab.unk_count, 4)

    def test_noise_table(self):
        vocab = Vocabulary(min_count=1)
        report = vocab.build_vocab(common_texts)

        expected = sum(int(round(count ** 0.75)) for count in vocab.counts)
        self.assertEqual(len(vocab.noise_table), expected)
        self.assertEqual(report['noise_table_size'], expected)
        self.assertTrue(np.all(vocab.noise_table >= 0))
        self.assertTrue(np.all(vocab.noise_table < vocab.num_words))
        # every retained word can be drawn
        self.assertEqual(set(vocab.noise_table.tolist()), set(range(vocab.num_words)))

    def test_discard_probs(self):
        vocab = Vocabulary(min_count=1, sample=0.1)
        vocab.build_vocab(common_texts)

        probs = vocab.discard_probs
        self.assertEqual(len(probs), vocab.num_words)
        self.assertTrue(np.all(probs >= 0.0))
        self.assertTrue(np.all(probs < 1.0))

        order = np.argsort(vocab.counts, kind='stable')
        self.assertTrue(np.all(np.diff(probs[order]) >= 0.0))

        # 'system' occurs 4 times out of 29
        expected = 1.0 - np.sqrt(0.1 / (4 / 29.0))
        self.assertAlmostEqual(probs[vocab.index('system')], expected)
        self.assertEqual(probs[vocab.index('human')], 0.0)

    def test_unknown_mass_in_frequencies(self):
        """Words dropped by min_count still count towards the corpus size."""
        vocab = Vocabulary(min_count=3, sample=0.1)
        vocab.build_vocab(common_texts)
        expected = 1.0 - np.sqrt(0.1 / (4 / 29.0))
        self.assertAlmostEqual(vocab.discard_probs[vocab.index('system')], expected)

    def test_no_subsampling(self):
        vocab = Vocabulary(min_count=1, sample=0)
        report = vocab.build_vocab(common_texts)
        self.assertTrue(np.all(vocab.discard_probs == 0.0))
        self.assertEqual(report['downsample_unique'], 0)

    def test_indexes(self):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab(common_texts)
        null, unk = vocab.null_index, vocab.unk_index
        self.assertEqual(vocab.indexes(['user', 'unseen'], 2), [null, null, vocab.index('user'), unk])
        self.assertEqual(vocab.indexes([], 1), [null])
        self.assertEqual(vocab.word(vocab.index('graph')), 'graph')

    def test_empty_corpus(self):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab([])
        self.assertEqual(vocab.num_words, 0)
        self.assertEqual(len(vocab), 2)
        self.assertEqual(len(vocab.noise_table), 0)
        self.assertEqual(vocab.corpus_count, 0)

    def test_invalid_parameters(self):
        self.assertRaises(ValueError, Vocabulary, min_count=-1)
        self.assertRaises(ValueError, Vocabulary, sample=-0.5)

    def test_keep_raw_vocab(self):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab(common_texts, keep_raw_vocab=True)
        self.assertEqual(vocab.raw_vocab['system'], 4)

        vocab.build_vocab(common_texts)
        self.assertEqual(len(vocab.raw_vocab), 0)

    def test_noise_pool_size(self):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab(common_texts)
        self.assertEqual(vocab.noise_pool_size, vocab.num_words - 1)

        vocab = Vocabulary(min_count=1, ns_exponent=-1.0)
        vocab.build_vocab([['a', 'a', 'b', 'c', 'c', 'c']])
        # only the single-occurrence 'b' keeps a slot
        self.assertEqual(vocab.noise_table.tolist(), [vocab.index('b')])
        self.assertEqual(vocab.noise_pool_size, 0)

        self.assertEqual(Vocabulary(min_count=1).noise_pool_size, 0)

    @log_capture()
    def test_sentinel_name_collision(self, loglines):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab([[UNK_WORD, 'a', NULL_WORD]])
        self.assertIn("collide with the sentinel names", str(loglines))
        self.assertEqual(vocab.index_to_key, [UNK_WORD, 'a', NULL_WORD, UNK_WORD, NULL_WORD])
        self.assertEqual(vocab.index(UNK_WORD), 0)
        self.assertEqual(vocab.unk_index, 3)

    @log_capture()
    def test_string_documents_warning(self, loglines):
        vocab = Vocabulary(min_count=1)
        vocab.build_vocab(['human', 'machine'])
        self.assertIn("Each document should be a list of words", str(loglines))


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

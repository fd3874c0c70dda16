#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for checking the output of paravec.scripts.
"""

import io
import logging
import os.path
import unittest

import numpy as np

from paravec import utils
from paravec.models.paragraph2vec import Paragraph2Vec
from paravec.scripts.paragraph2vec_standalone import build_parser, paragraph2vec_standalone
from paravec.scripts.word_knn import word_knn
from paravec.test.utils import datapath, temporary_file


def read_lines(fname):
    with utils.open(fname, 'rb') as fin:
        return [utils.to_unicode(line).split() for line in fin]


class TestParagraph2VecStandalone(unittest.TestCase):
    def setUp(self):
        self.corpus = datapath('paragraphs.cor')

    def test_defaults(self):
        args = build_parser().parse_args(['-train', self.corpus])
        self.assertEqual((args.word_size, args.paragraph_size, args.context), (50, 50, 5))
        self.assertEqual((args.min_count, args.negative, args.iter, args.threads, args.seed), (5, 5, 1, 3, 1))
        self.assertEqual((args.sample, args.alpha, args.min_alpha), (1e-5, 0.025, 0.0001))
        self.assertIsNone(args.knn)

    def test_outputs(self):
        with temporary_file('words.txt') as words, temporary_file('paragraphs.txt') as paragraphs, \
                temporary_file('matrices.bin') as binary, temporary_file('model.tst') as saved:
            args = build_parser().parse_args([
                '-train', self.corpus, '-output-words', words, '-output-paragraphs', paragraphs,
                '-binary', binary, '-save', saved, '-word-size', '6', '-paragraph-size', '4', '-context', '2',
                '-min_count', '2', '-negative', '2', '-iter', '2', '-threads', '2',
            ])
            model = paragraph2vec_standalone(args)

            word_lines = read_lines(words)
            self.assertEqual(len(word_lines), model.vocabulary.num_words)
            self.assertTrue(all(len(line) == 7 for line in word_lines))

            paragraph_lines = read_lines(paragraphs)
            self.assertEqual(len(paragraph_lines), 32)
            self.assertTrue(all(len(line) == 5 for line in paragraph_lines))

            self.assertTrue(os.path.isfile(binary))
            loaded = Paragraph2Vec.load(saved)
            np.testing.assert_array_equal(loaded.embeddings.word_vectors, model.embeddings.word_vectors)

            # restoring from the binary file instead of training
            args = build_parser().parse_args([
                '-train', self.corpus, '-load', binary, '-word-size', '6', '-paragraph-size', '4',
                '-context', '2', '-min_count', '2', '-negative', '2',
            ])
            restored = paragraph2vec_standalone(args)
            np.testing.assert_array_equal(restored.embeddings.word_score_vectors, model.embeddings.word_score_vectors)
            self.assertEqual(restored.train_count, 0)


class TestWordKnn(unittest.TestCase):
    def setUp(self):
        self.model = Paragraph2Vec(
            corpus_file=datapath('paragraphs.cor'), word_vector_size=6, paragraph_vector_size=4, context_length=2,
            min_count=2, negative=2, workers=1,
        )

    def test_queries(self):
        fin = io.StringIO("cat\nunseen\ndog\nq\nbird\n")
        fout = io.StringIO()
        answered = word_knn(self.model, topn=3, fin=fin, fout=fout)

        self.assertEqual(answered, 2)
        lines = fout.getvalue().split('\n')
        self.assertEqual(lines[0], "KNN words of words")
        neighbours = [line for line in lines[1:] if line]
        self.assertEqual(len(neighbours), 6)
        for line in neighbours:
            similarity, word = line.split(' ')
            self.assertTrue(similarity.startswith('(') and similarity.endswith(')'))
            self.assertIn(word, self.model.vocabulary)
        self.assertEqual(neighbours[:3], [
            "(%.5f) %s" % (similarity, word) for word, similarity in self.model.most_similar('cat', topn=3)
        ])

    def test_end_of_input(self):
        fout = io.StringIO()
        self.assertEqual(word_knn(self.model, fin=io.StringIO("cat\n"), fout=fout), 1)
        self.assertEqual(word_knn(self.model, fin=io.StringIO(""), fout=io.StringIO()), 0)


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
USAGE: %(program)s -train CORPUS [-output-words FILE] [-output-paragraphs FILE] [-save FILE]
[-binary FILE] [-load FILE] -word-size SIZE -paragraph-size SIZE -context CONTEXT -min_count MIN-COUNT
-sample SAMPLE -negative NEGATIVE -alpha ALPHA -min_alpha MIN-ALPHA -iter ITER -threads THREADS
-seed SEED [-knn TOPN]

Trains word vectors and paragraph vectors on text file CORPUS, one document per line,
with words already preprocessed and separated by whitespace.

Parameters for training:
        -train <file>
                Use text data from <file> to train the model
        -output-words <file>
                Save the resulting word vectors as text into <file>
        -output-paragraphs <file>
                Save the resulting paragraph vectors as text into <file>
        -save <file>
                Save the whole model into <file>, loadable with Paragraph2Vec.load()
        -binary <file>
                Save the word, paragraph and word-score matrices into the binary model file <file>
        -load <file>
                Skip training; restore the matrices from the binary model file <file> instead
        -word-size <int>
                Set size of word vectors; default is 50
        -paragraph-size <int>
                Set size of paragraph vectors; default is 50
        -context <int>
                Number of preceding words used to predict a word; default is 5
        -min_count <int>
                This will discard words that appear less than <int> times; default is 5
        -sample <float>
                Set threshold for occurrence of words. Those that appear with higher frequency in the training data
                will be randomly down-sampled; default is 1e-5, 0 disables
        -negative <int>
                Number of negative examples; default is 5
        -alpha <float>
                Set the starting learning rate; default is 0.025
        -min_alpha <float>
                Learning rate at the end of training; default is 0.0001
        -iter <int>
                Run more training iterations (default 1)
        -threads <int>
                Use <int> threads (default 3)
        -seed <int>
                Random seed (default 1)
        -knn <int>
                Afterwards, interactively list <int> nearest neighbours of words read from standard input

Example: python -m paravec.scripts.paragraph2vec_standalone -train data.txt \
         -output-words words.txt -output-paragraphs paragraphs.txt -word-size 100 -iter 5
"""

import argparse
import logging
import os.path
import sys

from numpy import seterr

from paravec.models.paragraph2vec import Paragraph2Vec  # avoid referencing __main__ in pickle
from paravec.scripts.word_knn import word_knn

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-train", help="Use text data from file TRAIN to train the model", required=True)
    parser.add_argument("-output-words", dest="output_words", help="Save the resulting word vectors as text")
    parser.add_argument(
        "-output-paragraphs", dest="output_paragraphs", help="Save the resulting paragraph vectors as text",
    )
    parser.add_argument("-save", help="Save the whole model into file SAVE")
    parser.add_argument("-binary", help="Save the weight matrices into the binary model file BINARY")
    parser.add_argument("-load", help="Restore the weight matrices from binary model file LOAD instead of training")
    parser.add_argument(
        "-word-size", dest="word_size", help="Set size of word vectors; default is 50", type=int, default=50,
    )
    parser.add_argument(
        "-paragraph-size", dest="paragraph_size", help="Set size of paragraph vectors; default is 50",
        type=int, default=50,
    )
    parser.add_argument(
        "-context", help="Number of preceding words used to predict a word; default is 5", type=int, default=5,
    )
    parser.add_argument(
        "-min_count", help="This will discard words that appear less than MIN_COUNT times; default is 5",
        type=int, default=5
    )
    parser.add_argument(
        "-sample",
        help="Set threshold for occurrence of words. "
             "Those that appear with higher frequency in the training data will be randomly down-sampled; "
             "default is 1e-5, 0 disables",
        type=float, default=1e-5)
    parser.add_argument("-negative", help="Number of negative examples; default is 5", type=int, default=5)
    parser.add_argument("-alpha", help="Set the starting learning rate; default is 0.025", type=float, default=0.025)
    parser.add_argument(
        "-min_alpha", help="Learning rate at the end of training; default is 0.0001", type=float, default=0.0001,
    )
    parser.add_argument("-iter", help="Run more training iterations (default 1)", type=int, default=1)
    parser.add_argument("-threads", help="Use THREADS threads (default 3)", type=int, default=3)
    parser.add_argument("-seed", help="Random seed (default 1)", type=int, default=1)
    parser.add_argument(
        "-knn", help="Interactively list KNN nearest neighbours of words read from standard input", type=int,
    )
    return parser


def paragraph2vec_standalone(args):
    """Train (or restore) a model as configured by the parsed command line `args`, then store the outputs.

    Returns
    -------
    :class:`~paravec.models.paragraph2vec.Paragraph2Vec`
        The trained model.

    """
    model = Paragraph2Vec(
        word_vector_size=args.word_size, paragraph_vector_size=args.paragraph_size, context_length=args.context,
        min_count=args.min_count, sample=args.sample, negative=args.negative, alpha=args.alpha,
        min_alpha=args.min_alpha, epochs=args.iter, workers=args.threads, seed=args.seed,
    )
    model.build_vocab(corpus_file=args.train)
    if args.load:
        model.load_matrices(args.load)
    else:
        model.train(corpus_file=args.train)

    if args.output_words:
        model.save_word_vectors(args.output_words)
    if args.output_paragraphs:
        model.save_paragraph_vectors(args.output_paragraphs)
    if args.binary:
        model.save_matrices(args.binary)
    if args.save:
        model.save(args.save)
    return model


if __name__ == "__main__":
    logging.basicConfig(format='%(asctime)s : %(threadName)s : %(levelname)s : %(message)s', level=logging.INFO)
    logger.info("running %s", " ".join(sys.argv))
    seterr(all='raise')  # don't ignore numpy errors

    args = build_parser().parse_args()
    model = paragraph2vec_standalone(args)
    if args.knn:
        word_knn(model, topn=args.knn)

    logger.info("finished running %s", os.path.basename(sys.argv[0]))

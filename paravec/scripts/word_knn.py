#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
USAGE: %(program)s -model MODEL [-topn TOPN]

Interactively list the nearest neighbours of words, by cosine similarity of their word vectors,
in a model saved by :mod:`paravec.scripts.paragraph2vec_standalone`.

Reads one word per line from standard input. Words outside the vocabulary are ignored;
a line with just `q` quits.

Example: python -m paravec.scripts.word_knn -model paragraphs.model -topn 5
"""

import argparse
import logging
import os.path
import sys

from paravec.models.paragraph2vec import Paragraph2Vec

logger = logging.getLogger(__name__)

QUIT_TOKEN = 'q'


def word_knn(model, topn=10, fin=None, fout=None, quit_token=QUIT_TOKEN):
    """Answer nearest-neighbour queries read from `fin`, one word per line, writing to `fout`.

    Parameters
    ----------
    model : :class:`~paravec.models.paragraph2vec.Paragraph2Vec`
        Trained model.
    topn : int, optional
        Number of neighbours listed per query.
    fin : file-like, optional
        Query source, defaults to standard input.
    fout : file-like, optional
        Output sink, defaults to standard output.
    quit_token : str, optional
        Stop reading queries at a line equal to this.

    Returns
    -------
    int
        Number of queries answered.

    """
    fin = sys.stdin if fin is None else fin
    fout = sys.stdout if fout is None else fout

    fout.write("KNN words of words\n")
    answered = 0
    for line in fin:
        word = line.strip()
        if word == quit_token:
            break
        if word not in model.vocabulary:
            logger.debug("ignoring query %r, not in vocabulary", word)
            continue
        for neighbour, similarity in model.most_similar(word, topn=topn):
            fout.write("(%.5f) %s\n" % (similarity, neighbour))
        fout.write("\n")
        fout.flush()
        answered += 1
    return answered


if __name__ == "__main__":
    logging.basicConfig(format='%(asctime)s : %(threadName)s : %(levelname)s : %(message)s', level=logging.INFO)
    logger.info("running %s", " ".join(sys.argv))

    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-model", help="Model saved with -save by paragraph2vec_standalone", required=True)
    parser.add_argument("-topn", help="Number of neighbours listed per query; default is 10", type=int, default=10)
    args = parser.parse_args()

    word_knn(Paragraph2Vec.load(args.model), topn=args.topn)

    logger.info("finished running %s", os.path.basename(sys.argv[0]))

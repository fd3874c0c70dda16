#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""The three weight matrices trained by :class:`~paravec.models.paragraph2vec.Paragraph2Vec`.

* ``word_vectors``, shape `(vocab_size, word_vector_size)`: the input vector of each word,
  used whenever the word occurs inside a context window.
* ``paragraph_vectors``, shape `(doc_count, paragraph_vector_size)`: one vector per document.
* ``word_score_vectors``, shape `(vocab_size, paragraph_vector_size + context_length * word_vector_size)`:
  the output weights used when a word is the prediction target.

Each row of ``word_score_vectors`` is made of one paragraph block followed by one block per relative
context position; :class:`ScoreLayout` and :class:`WordScoreView` name these blocks, so that code
never does the offset arithmetic by hand:

.. sourcecode:: pycon

    >>> from paravec.models.embeddings import EmbeddingStore
    >>>
    >>> store = EmbeddingStore(vocab_size=7, doc_count=2, word_vector_size=3, paragraph_vector_size=4, context_length=2)
    >>> row = store.score_view(5)
    >>> row.paragraph_block().shape, row.context_block(1).shape
    ((4,), (3,))

The matrices are shared by all training threads and updated in place without any locking.

Binary model file
-----------------
:meth:`EmbeddingStore.save_matrices` writes the word, paragraph and word-score matrices in this fixed
order. Each matrix is a header of two little-endian int64 values (rows, columns), followed by
the row-major little-endian float64 payload.

"""

import logging

import numpy as np
from numpy import float64 as REAL

from paravec import utils

logger = logging.getLogger(__name__)

HEADER_DTYPE = np.dtype('<i8')
PAYLOAD_DTYPE = np.dtype('<f8')


class ScoreLayout:
    def __init__(self, paragraph_size, word_size, context_length):
        """Block structure of one word-score row.

        Parameters
        ----------
        paragraph_size : int
            Size of the leading block, paired with the paragraph vector.
        word_size : int
            Size of each context block, paired with one context word vector.
        context_length : int
            Number of context blocks, one per relative position in the context window.

        """
        self.paragraph_size = paragraph_size
        self.word_size = word_size
        self.context_length = context_length
        self.width = paragraph_size + context_length * word_size
        self.paragraph_slice = slice(0, paragraph_size)

    def context_slice(self, offset):
        """Slice of the block paired with the context word at `offset` (0 = leftmost) in the window."""
        if not 0 <= offset < self.context_length:
            raise IndexError(
                "context offset %r out of range for context length %i" % (offset, self.context_length)
            )
        start = self.paragraph_size + offset * self.word_size
        return slice(start, start + self.word_size)

    def compose(self, paragraph_vector, context_vectors):
        """Concatenate a paragraph vector and `context_length` word vectors into one input layer
        laid out like a word-score row.

        Returns
        -------
        numpy.ndarray
            New 1D array of length `width`.

        """
        context_vectors = np.asarray(context_vectors)
        if paragraph_vector.shape != (self.paragraph_size,):
            raise ValueError(
                "expected paragraph vector of shape %s, got %s" % ((self.paragraph_size,), paragraph_vector.shape)
            )
        if context_vectors.shape != (self.context_length, self.word_size):
            raise ValueError(
                "expected context vectors of shape %s, got %s"
                % ((self.context_length, self.word_size), context_vectors.shape)
            )
        return np.concatenate((paragraph_vector, context_vectors.ravel()))

    def __eq__(self, other):
        return isinstance(other, ScoreLayout) and (
            (self.paragraph_size, self.word_size, self.context_length)
            == (other.paragraph_size, other.word_size, other.context_length)
        )

    def __repr__(self):
        return '%s(paragraph_size=%i, word_size=%i, context_length=%i)' % (
            self.__class__.__name__, self.paragraph_size, self.word_size, self.context_length,
        )


class WordScoreView:
    """Structured view of a single word's output (score) weights. All blocks are views into the store."""

    def __init__(self, vector, layout):
        if vector.shape != (layout.width,):
            raise ValueError("expected a score row of length %i, got shape %s" % (layout.width, vector.shape))
        self.vector = vector
        self.layout = layout

    def paragraph_block(self):
        return self.vector[self.layout.paragraph_slice]

    def context_block(self, offset):
        return self.vector[self.layout.context_slice(offset)]


class EmbeddingStore(utils.SaveLoad):
    def __init__(self, vocab_size, doc_count, word_vector_size, paragraph_vector_size, context_length):
        """Allocate the word, paragraph and word-score matrices (all zeros, see :meth:`reset_weights`).

        Parameters
        ----------
        vocab_size : int
            Number of vocabulary entries, sentinels included.
        doc_count : int
            Number of documents in the corpus.
        word_vector_size : int
            Dimensionality of the word vectors.
        paragraph_vector_size : int
            Dimensionality of the paragraph vectors.
        context_length : int
            Number of preceding words used as context for each predicted word.

        """
        if word_vector_size < 1 or paragraph_vector_size < 1:
            raise ValueError(
                "vector sizes must be positive, got word_vector_size=%r, paragraph_vector_size=%r"
                % (word_vector_size, paragraph_vector_size)
            )
        if context_length < 0:
            raise ValueError("context_length must be non-negative, got %r" % context_length)

        self.layout = ScoreLayout(paragraph_vector_size, word_vector_size, context_length)
        self.word_vectors = np.zeros((vocab_size, word_vector_size), dtype=REAL)
        self.paragraph_vectors = np.zeros((doc_count, paragraph_vector_size), dtype=REAL)
        self.word_score_vectors = np.zeros((vocab_size, self.layout.width), dtype=REAL)

    @property
    def word_vector_size(self):
        return self.layout.word_size

    @property
    def paragraph_vector_size(self):
        return self.layout.paragraph_size

    @property
    def context_length(self):
        return self.layout.context_length

    def reset_weights(self, seed=1):
        """Reset all weights to an initial (untrained) state.

        Word and paragraph vectors are drawn uniformly from `[-r, r)` with `r = sqrt(6 / (2 * size + 1))`,
        each from its own generator. Word-score vectors start at zero.

        """
        logger.info("resetting layer weights")
        word_rng, paragraph_rng = (np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(2))
        self.word_vectors[...] = self._uniform(word_rng, self.word_vectors.shape)
        self.paragraph_vectors[...] = self._uniform(paragraph_rng, self.paragraph_vectors.shape)
        self.word_score_vectors.fill(0.0)

    @staticmethod
    def _uniform(rng, shape):
        scale = np.sqrt(6.0 / (shape[1] * 2 + 1.0))
        return (rng.random(shape, dtype=REAL) * 2.0 - 1.0) * scale

    def score_view(self, index):
        """Get a :class:`WordScoreView` on the output weights of word `index`."""
        return WordScoreView(self.word_score_vectors[index], self.layout)

    def matrices(self):
        """The three matrices in persistence order: word, paragraph, word-score."""
        return self.word_vectors, self.paragraph_vectors, self.word_score_vectors

    def save_matrices(self, fname):
        """Store the three matrices into the binary model file `fname`.

        Parameters
        ----------
        fname : str
            Output path. A `.gz` or `.bz2` suffix compresses the output.

        """
        logger.info("storing %s matrices into %s", ' '.join('%ix%i' % m.shape for m in self.matrices()), fname)
        with utils.open(fname, 'wb') as fout:
            for matrix in self.matrices():
                fout.write(np.array(matrix.shape, dtype=HEADER_DTYPE).tobytes())
                fout.write(np.ascontiguousarray(matrix, dtype=PAYLOAD_DTYPE).tobytes())

    def load_matrices(self, fname):
        """Restore the three matrices from the binary model file `fname`, in place.

        Raises
        ------
        ValueError
            If the stored dimensions differ from this store's, or the file is truncated.
        IOError
            If `fname` is missing or unreadable.

        """
        logger.info("loading matrices from %s", fname)
        with utils.open(fname, 'rb') as fin:
            for name, matrix in zip(('word', 'paragraph', 'word-score'), self.matrices()):
                shape = tuple(int(dim) for dim in _read_array(fin, HEADER_DTYPE, 2, fname))
                if shape != matrix.shape:
                    raise ValueError(
                        "%s matrix in %s has shape %s, expected %s" % (name, fname, shape, matrix.shape)
                    )
                matrix[...] = _read_array(fin, PAYLOAD_DTYPE, matrix.size, fname).reshape(shape)
        logger.info("loaded %s", fname)


def _read_array(fin, dtype, count, fname):
    nbytes = dtype.itemsize * count
    data = fin.read(nbytes)
    if len(data) != nbytes:
        raise ValueError("unexpected end of file in %s: wanted %i bytes, got %i" % (fname, nbytes, len(data)))
    return np.frombuffer(data, dtype=dtype)

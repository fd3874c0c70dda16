#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Corpus statistics: the frequency-filtered vocabulary, word discard probabilities for subsampling
of frequent words, and the noise table that negative samples are drawn from.

Words are indexed in the order they were first seen in the corpus, after dropping words rarer than
`min_count`. Two sentinel entries always follow the real words:

* the *unknown* index, standing for dropped and unseen words;
* the *null* index, used to left-pad every document so that a full context window exists
  from the document's first word on.

Usage example:

.. sourcecode:: pycon

    >>> from paravec.models.vocabulary import Vocabulary
    >>>
    >>> vocab = Vocabulary(min_count=1)
    >>> report = vocab.build_vocab([['the', 'cat', 'sat'], ['the', 'dog', 'ran']])
    >>> len(vocab)  # five words plus the two sentinels
    7

"""

import logging
from collections import defaultdict

import numpy as np
from numpy import float64 as REAL

from paravec import utils

logger = logging.getLogger(__name__)

UNK_WORD = '**UNK**'
NULL_WORD = '**NULL**'


class Vocabulary(utils.SaveLoad):
    def __init__(self, min_count=5, sample=1e-5, ns_exponent=0.75):
        """Collect word statistics from a corpus of tokenized documents.

        Parameters
        ----------
        min_count : int, optional
            Ignores all words with total frequency lower than this. Their occurrences are counted
            as "unknown mass", which still takes part in frequency normalization.
        sample : float, optional
            Threshold for subsampling of frequent words: a word with corpus frequency `f`
            is discarded during training with probability `max(0, 1 - sqrt(sample / f))`.
            Zero disables subsampling.
        ns_exponent : float, optional
            Each retained word appears `round(count ** ns_exponent)` times in the noise table.

        """
        if min_count < 0:
            raise ValueError("min_count must be non-negative, got %r" % min_count)
        if sample < 0:
            raise ValueError("sample must be non-negative, got %r" % sample)

        self.min_count = int(min_count)
        self.sample = sample
        self.ns_exponent = ns_exponent

        self.raw_vocab = defaultdict(int)
        self.index_to_key = []
        self.key_to_index = {}
        self.counts = np.zeros(0, dtype=np.int64)
        self.discard_probs = np.zeros(0, dtype=REAL)
        self.noise_table = np.zeros(0, dtype=np.int64)
        self.unk_index = None
        self.null_index = None
        self.unk_count = 0
        self.corpus_count = 0
        self.corpus_total_words = 0

    def scan_vocab(self, documents, progress_per=10000):
        """Do an initial scan of all words appearing in `documents`.

        Parameters
        ----------
        documents : iterable of list of str
            One item per document (a line of the corpus). Empty documents count as documents.
        progress_per : int, optional
            Log a progress message once every `progress_per` documents.

        Returns
        -------
        (int, int)
            Number of raw words and number of documents seen.

        """
        logger.info("collecting all words and their counts")
        document_no = -1
        total_words = 0
        vocab = defaultdict(int)
        checked_string_types = False
        for document_no, document in enumerate(documents):
            if not checked_string_types:
                if isinstance(document, str):
                    logger.warning(
                        "Each document should be a list of words (usually unicode strings). "
                        "First item here is instead plain %s.",
                        type(document),
                    )
                checked_string_types = True
            if document_no % progress_per == 0:
                logger.info(
                    "PROGRESS: at document #%i, processed %i words, keeping %i word types",
                    document_no, total_words, len(vocab),
                )
            for word in document:
                vocab[word] += 1
            total_words += len(document)

        self.raw_vocab = vocab
        self.corpus_count = document_no + 1
        self.corpus_total_words = total_words
        logger.info(
            "collected %i word types from a corpus of %i raw words and %i documents",
            len(vocab), total_words, self.corpus_count,
        )
        return total_words, self.corpus_count

    def prepare_vocab(self, trim_rule=None, keep_raw_vocab=False):
        """Apply `min_count` to the scanned counts, then derive discard probabilities and the noise table.

        Parameters
        ----------
        trim_rule : function, optional
            Vocabulary trimming rule, see :func:`~paravec.utils.keep_vocab_item`. The rule is not stored
            with the vocabulary.
        keep_raw_vocab : bool, optional
            Keep the raw counts dictionary after filtering, instead of deleting it to free up RAM.

        Returns
        -------
        dict of (str, int)
            Summary of the effects of filtering and subsampling.

        """
        index_to_key, key_to_index, counts = [], {}, []
        drop_unique = unk_count = 0

        for word, count in self.raw_vocab.items():
            if utils.keep_vocab_item(word, count, self.min_count, trim_rule=trim_rule):
                key_to_index[word] = len(index_to_key)
                index_to_key.append(word)
                counts.append(count)
            else:
                drop_unique += 1
                unk_count += count

        clashes = [word for word in (UNK_WORD, NULL_WORD) if word in key_to_index]
        if clashes:
            logger.warning(
                "corpus words %s collide with the sentinel names; they are kept as ordinary words, "
                "so index_to_key will list these strings twice", clashes,
            )

        self.key_to_index = key_to_index
        self.counts = np.array(counts, dtype=np.int64)
        self.unk_count = unk_count
        retain_total = int(self.counts.sum())

        # frequencies are only final once the unknown mass is in the denominator
        self.discard_probs = self.make_discard_probs(retain_total + unk_count)
        self.noise_table = self.make_noise_table()

        self.unk_index = len(index_to_key)
        self.null_index = self.unk_index + 1
        self.index_to_key = index_to_key + [UNK_WORD, NULL_WORD]

        if not keep_raw_vocab:
            logger.info("deleting the raw counts dictionary of %i items", len(self.raw_vocab))
            self.raw_vocab = defaultdict(int)

        downsample_unique = int(np.count_nonzero(self.discard_probs))
        logger.info(
            "min_count=%i retains %i unique words, drops %i into the unknown mass of %i words",
            self.min_count, len(index_to_key), drop_unique, unk_count,
        )
        logger.info("sample=%g downsamples %i most-common words", self.sample, downsample_unique)
        return {
            'drop_unique': drop_unique,
            'drop_total': unk_count,
            'retain_total': retain_total,
            'num_retained_words': len(index_to_key),
            'downsample_unique': downsample_unique,
            'noise_table_size': len(self.noise_table),
        }

    def build_vocab(self, documents, progress_per=10000, trim_rule=None, keep_raw_vocab=False):
        """Build the vocabulary from a single pass over `documents`.

        Returns
        -------
        dict of (str, int)
            See :meth:`~paravec.models.vocabulary.Vocabulary.prepare_vocab`.

        """
        self.scan_vocab(documents, progress_per=progress_per)
        return self.prepare_vocab(trim_rule=trim_rule, keep_raw_vocab=keep_raw_vocab)

    def make_discard_probs(self, total_count):
        """Compute the subsampling discard probability of each retained word.

        Parameters
        ----------
        total_count : int
            Number of tokens in the corpus, including the words dropped by `min_count`.

        Returns
        -------
        numpy.ndarray
            Probabilities in `[0, 1)`, one per retained word.

        """
        if not self.sample or not len(self.counts):
            return np.zeros(len(self.counts), dtype=REAL)
        frequencies = self.counts / float(total_count)
        # clamp instead of going negative for words rarer than `sample`
        return np.maximum(0.0, 1.0 - np.sqrt(self.sample / frequencies)).astype(REAL)

    def make_noise_table(self):
        """Create the flat table for drawing negative samples.

        Each word index repeats `round(count ** ns_exponent)` times, so that drawing a uniformly random
        table slot approximates the smoothed unigram distribution.

        """
        copies = np.rint(self.counts.astype(REAL) ** self.ns_exponent).astype(np.int64)
        return np.repeat(np.arange(len(self.counts), dtype=np.int64), copies)

    @property
    def noise_pool_size(self):
        """Number of distinct noise words that can be drawn against any predicted word.

        Words whose `round(count ** ns_exponent)` is zero never appear in the noise table, and one drawable
        word may be the predicted word itself.

        """
        return max(len(np.unique(self.noise_table)) - 1, 0)

    @property
    def num_words(self):
        """Number of real (non-sentinel) words in the vocabulary."""
        return len(self.key_to_index)

    def index(self, word):
        """Get the index of `word`, or the unknown sentinel index for words outside the vocabulary."""
        return self.key_to_index.get(word, self.unk_index)

    def indexes(self, words, context_length=0):
        """Convert a document into its word indexes, left-padded with `context_length` null indexes."""
        key_to_index, unk_index = self.key_to_index, self.unk_index
        return [self.null_index] * context_length + [key_to_index.get(word, unk_index) for word in words]

    def word(self, index):
        return self.index_to_key[index]

    def __contains__(self, word):
        return word in self.key_to_index

    def __len__(self):
        return len(self.index_to_key)

    def __str__(self):
        return "%s<words=%i, documents=%i, min_count=%i>" % (
            self.__class__.__name__, self.num_words, self.corpus_count, self.min_count,
        )

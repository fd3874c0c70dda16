#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Introduction
============

Learn word vectors and paragraph (document) vectors jointly, with the concatenated distributed memory
model of `Quoc Le and Tomas Mikolov: "Distributed Representations of Sentences and Documents"
<http://arxiv.org/pdf/1405.4053v2.pdf>`_, trained by negative sampling.

Each word of a document is predicted from the document's paragraph vector and the vectors of the
`context_length` words preceding it. The prediction score of a word is the dot product of its output
(word-score) row with the concatenation of the paragraph vector and the context word vectors, squashed
through a logistic function. Every document is left-padded with `context_length` null words, so that
even a document's first word has a full context window.

Training is multithreaded: the corpus is split into one contiguous range of documents per worker
thread, and all workers update the same weight matrices in place, without any locking
("Hogwild"-style asynchronous SGD). Updates from different threads may occasionally overwrite
each other; since each document only touches a small fraction of all vectors, this is tolerated as noise.

Usage examples
==============

Initialize & train a model on a corpus file with one document per line:

.. sourcecode:: pycon

    >>> from paravec.test.utils import datapath
    >>> from paravec.models.paragraph2vec import Paragraph2Vec
    >>>
    >>> model = Paragraph2Vec(corpus_file=datapath('paragraphs.cor'), min_count=2, workers=2)

Export the trained vectors as text, or persist the weight matrices in binary form:

.. sourcecode:: pycon

    >>> from paravec.test.utils import get_tmpfile
    >>>
    >>> model.save_word_vectors(get_tmpfile('words.txt'))
    >>> model.save_paragraph_vectors(get_tmpfile('paragraphs.txt'))
    >>> model.save_matrices(get_tmpfile('model.bin'))

Persist the whole model and continue training it later:

.. sourcecode:: pycon

    >>> fname = get_tmpfile('paragraph2vec.model')
    >>> model.save(fname)
    >>> model = Paragraph2Vec.load(fname)
    >>> trained_words, raw_words = model.train(corpus_file=datapath('paragraphs.cor'), epochs=1)

"""

import itertools
import logging
import os
import threading
from collections.abc import Iterable
from queue import Queue
from timeit import default_timer
from types import GeneratorType

import numpy as np
from numpy import dot, outer, zeros, float64 as REAL
from scipy.special import expit

from paravec import utils, matutils
from paravec.models.embeddings import EmbeddingStore
from paravec.models.randomstream import RandomStream
from paravec.models.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

SELF_SIMILARITY = -1.0e+05  # keeps a query word out of its own neighbours


def train_document_dm_concat(model, doc_index, indexes, alpha, negative, random):
    """Update the model from a single document, using negative sampling.

    Called concurrently from all training threads of
    :meth:`~paravec.models.paragraph2vec.Paragraph2Vec.train_epoch`, with no locking.

    Parameters
    ----------
    model : :class:`~paravec.models.paragraph2vec.Paragraph2Vec`
        The model to train; its weight matrices are updated in place.
    doc_index : int
        Index of the document, i.e. its row in the paragraph vectors.
    indexes : list of int
        Vocabulary indexes of the document's words, left-padded with `context_length` null indexes.
    alpha : float
        Learning rate.
    negative : int
        Number of distinct noise words drawn for each predicted word.
    random : :class:`~paravec.models.randomstream.RandomStream`
        The calling worker's private random stream.

    Returns
    -------
    int
        Number of words actually trained on (not unknown, not discarded by subsampling).

    """
    vocab = model.vocabulary
    store = model.embeddings
    layout = store.layout
    word_vectors = store.word_vectors
    word_score_vectors = store.word_score_vectors
    paragraph = store.paragraph_vectors[doc_index]  # view: updates go straight into the store
    context_length = layout.context_length
    context_slices = [layout.context_slice(offset) for offset in range(context_length)]
    discard_probs, unk_index = vocab.discard_probs, vocab.unk_index

    labels = zeros(negative + 1, dtype=REAL)
    labels[0] = 1.0
    trained = 0

    for pos in range(context_length, len(indexes)):
        target = indexes[pos]
        if target == unk_index or discard_probs[target] > random.zero2one():
            continue

        context = indexes[pos - context_length:pos]
        l1 = layout.compose(paragraph, word_vectors[context])  # 1 x word-score width

        # the predicted word (label = 1) + `negative` distinct noise words (label = 0)
        word_indices = [target] + draw_negatives(vocab.noise_table, target, negative, random)
        l2 = word_score_vectors[word_indices]  # 2d matrix, k+1 x word-score width
        gradient = expit(dot(l2, l1)) - labels
        neu1e = dot(gradient, l2)  # input-side error, taken before the output rows move
        word_score_vectors[word_indices] -= outer(alpha * gradient, l1)

        paragraph -= alpha * neu1e[layout.paragraph_slice]
        for context_slice, word in zip(context_slices, context):
            word_vectors[word] -= alpha * neu1e[context_slice]
        trained += 1

    return trained


def draw_negatives(noise_table, target, negative, random):
    """Draw `negative` distinct noise words from `noise_table`, all different from `target`.

    Draws are rejection-sampled one at a time, each from a uniformly random table slot.
    The caller must make sure that enough distinct words exist, otherwise this never returns.

    """
    chosen = []
    table_size = len(noise_table)
    for _ in range(negative):
        word = target
        while word == target or word in chosen:
            word = int(noise_table[random.next() % table_size])
        chosen.append(word)
    return chosen


class LineDocument:
    def __init__(self, source, start=0, stop=None):
        """Iterate over a corpus with one document per line, words already preprocessed and
        separated by whitespace.

        Parameters
        ----------
        source : str or iterable of list of str
            Path to the corpus file (compressed `.gz` and `.bz2` files are decompressed on the fly),
            or an already tokenized, restartable iterable of documents.
        start : int, optional
            Index of the first document to yield. Preceding lines are read and skipped.
        stop : int or None, optional
            Stop before this document index. Read until the end if None (the default).

        """
        self.source = source
        self.start = start
        self.stop = stop

    def __iter__(self):
        """Iterate through the documents in the source.

        Yields
        ------
        list of str
            Words of the next document. Empty lines are yielded as empty documents.

        """
        if isinstance(self.source, (str, os.PathLike)):
            with utils.open(self.source, 'rb') as fin:
                for line in itertools.islice(fin, self.start, self.stop):
                    yield utils.to_unicode(line).split()
        else:
            for document in itertools.islice(self.source, self.start, self.stop):
                yield list(document)


class WorkerState:
    """Long-lived state of one training worker: its document range, its learning rate schedule
    and its private random stream. Reused across :meth:`Paragraph2Vec.train_epoch` calls."""

    def __init__(self, thread_id, random):
        self.thread_id = thread_id
        self.random = random
        self.start = 0
        self.end = 0
        self.alpha = 0.0
        self.shrink = 0.0
        self.error = None

    def __len__(self):
        return self.end - self.start

    def __repr__(self):
        return '%s(thread_id=%i, documents=[%i, %i), alpha=%g)' % (
            self.__class__.__name__, self.thread_id, self.start, self.end, self.alpha,
        )


class TrainingPool:
    def __init__(self, workers, random):
        """Per-worker training state, created once and refreshed before every epoch.

        Parameters
        ----------
        workers : int
            Number of worker threads.
        random : :class:`~paravec.models.randomstream.RandomStream`
            Top-level stream; each worker gets its own child stream seeded from it.

        """
        if workers < 1:
            raise ValueError("workers must be a positive integer, got %r" % workers)
        self.workers = [WorkerState(thread_id, random.spawn()) for thread_id in range(workers)]

    @staticmethod
    def partition(doc_count, workers):
        """Split the document indexes `[0, doc_count)` into `workers` contiguous ranges.

        All ranges have `doc_count // workers` documents, except the last one, which also absorbs
        the remainder.

        Returns
        -------
        list of (int, int)
            Half-open `(start, end)` document ranges, one per worker, in order.

        """
        step = doc_count // workers
        ranges = [(i * step, (i + 1) * step) for i in range(workers - 1)]
        ranges.append(((workers - 1) * step, doc_count))
        return ranges

    def refresh(self, doc_count, alpha, shrink):
        """Assign fresh document ranges and learning rates, keeping each worker's random stream.

        Each worker starts at `alpha` and lowers its rate by `shrink / partition_size` after every document.

        """
        for state, (start, end) in zip(self.workers, self.partition(doc_count, len(self.workers))):
            state.start, state.end = start, end
            state.alpha = alpha
            state.shrink = shrink / (end - start) if end > start else 0.0
            state.error = None

    def __iter__(self):
        return iter(self.workers)

    def __len__(self):
        return len(self.workers)


class Paragraph2Vec(utils.SaveLoad):
    def __init__(
            self, corpus_file=None, documents=None, word_vector_size=50, paragraph_vector_size=50,
            context_length=5, min_count=5, sample=1e-5, negative=5, alpha=0.025, min_alpha=0.0001,
            epochs=1, workers=3, seed=1, ns_exponent=0.75, trim_rule=None,
        ):
        """Train word and paragraph vectors with the concatenated distributed memory model.

        Parameters
        ----------
        corpus_file : str, optional
            Path to a corpus file in :class:`~paravec.models.paragraph2vec.LineDocument` format,
            one document per line. If neither `corpus_file` nor `documents` is given, the model is left
            uninitialized.
        documents : iterable of list of str, optional
            Restartable iterable of tokenized documents, used instead of `corpus_file`.
        word_vector_size : int, optional
            Dimensionality of the word vectors.
        paragraph_vector_size : int, optional
            Dimensionality of the paragraph vectors.
        context_length : int, optional
            Number of preceding words used to predict each word.
        min_count : int, optional
            Ignores all words with total frequency lower than this.
        sample : float, optional
            Threshold for subsampling frequent words, see :class:`~paravec.models.vocabulary.Vocabulary`.
        negative : int, optional
            Number of distinct noise words drawn for each predicted word.
        alpha : float, optional
            The initial learning rate.
        min_alpha : float, optional
            Learning rate reached at the end of the last epoch.
        epochs : int, optional
            Number of iterations (epochs) over the corpus.
        workers : int, optional
            Use these many worker threads to train the model.
        seed : int, optional
            Seed for weight initialization and for the workers' random streams. With `workers=1`
            training is fully reproducible.
        ns_exponent : float, optional
            The exponent used to shape the noise distribution.
        trim_rule : function, optional
            Vocabulary trimming rule, see :func:`~paravec.utils.keep_vocab_item`. Not stored with the model.

        """
        if word_vector_size < 1 or paragraph_vector_size < 1:
            raise ValueError("vector sizes must be positive integers")
        if context_length < 0:
            raise ValueError("context_length must be non-negative, got %r" % context_length)
        if negative < 0:
            raise ValueError("negative must be non-negative, got %r" % negative)
        if workers < 1:
            raise ValueError("workers must be a positive integer, got %r" % workers)
        if epochs < 1:
            raise ValueError("epochs must be a positive integer, got %r" % epochs)

        self.word_vector_size = int(word_vector_size)
        self.paragraph_vector_size = int(paragraph_vector_size)
        self.context_length = int(context_length)
        self.negative = int(negative)
        self.alpha = float(alpha)
        self.min_alpha = float(min_alpha)
        self.min_alpha_yet_reached = float(alpha)
        self.epochs = int(epochs)
        self.workers = int(workers)
        self.seed = seed

        self.vocabulary = Vocabulary(min_count=min_count, sample=sample, ns_exponent=ns_exponent)
        self.embeddings = None
        self.random = RandomStream(seed)
        self.pool = None
        self.train_count = 0
        self.total_train_time = 0.0

        if corpus_file is not None or documents is not None:
            self._check_corpus_sanity(corpus_file=corpus_file, documents=documents, passes=self.epochs + 1)
            self.build_vocab(corpus_file=corpus_file, documents=documents, trim_rule=trim_rule)
            self.train(corpus_file=corpus_file, documents=documents)
        elif trim_rule is not None:
            logger.warning(
                "The rule, if given, is only used to prune vocabulary during build_vocab() "
                "and is not stored as part of the model. Model initialized without a corpus. "
                "trim_rule provided, if any, will be ignored."
            )

    @staticmethod
    def _check_corpus_sanity(corpus_file=None, documents=None, passes=1):
        """Checks whether the corpus parameters make sense."""
        if corpus_file is None and documents is None:
            raise TypeError("Either one of corpus_file or documents value must be provided")
        if corpus_file is not None and documents is not None:
            raise TypeError("Both corpus_file and documents must not be provided at the same time")
        if documents is None and not os.path.isfile(corpus_file):
            raise IOError("Parameter corpus_file must be a valid path to a file, got %r instead" % corpus_file)
        if documents is not None and not isinstance(documents, Iterable):
            raise TypeError("The documents must be an iterable of lists of strings, got %r instead" % documents)
        if documents is not None and isinstance(documents, GeneratorType):
            raise TypeError(
                "Using a generator as documents can't support %i passes. Try a re-iterable sequence." % passes
            )

    def build_vocab(self, corpus_file=None, documents=None, progress_per=10000, trim_rule=None, keep_raw_vocab=False):
        """Collect corpus statistics in a single pass, then allocate and randomly initialize the weights.

        Parameters
        ----------
        corpus_file : str, optional
            Path to a corpus file in :class:`~paravec.models.paragraph2vec.LineDocument` format.
        documents : iterable of list of str, optional
            Tokenized documents, used instead of `corpus_file`.
        progress_per : int, optional
            Log a progress message once every `progress_per` documents.
        trim_rule : function, optional
            Vocabulary trimming rule, see :func:`~paravec.utils.keep_vocab_item`.
        keep_raw_vocab : bool, optional
            Keep the raw word counts after filtering.

        Returns
        -------
        dict of (str, int)
            Summary of the vocabulary filtering, see :meth:`~paravec.models.vocabulary.Vocabulary.prepare_vocab`.

        """
        self._check_corpus_sanity(corpus_file=corpus_file, documents=documents)
        source = corpus_file if documents is None else documents
        report = self.vocabulary.build_vocab(
            LineDocument(source), progress_per=progress_per, trim_rule=trim_rule, keep_raw_vocab=keep_raw_vocab,
        )

        self.embeddings = EmbeddingStore(
            len(self.vocabulary), self.vocabulary.corpus_count,
            self.word_vector_size, self.paragraph_vector_size, self.context_length,
        )
        self.embeddings.reset_weights(seed=self.seed)
        self.pool = None  # document ranges depend on the corpus

        logger.info("Documents: %i", self.vocabulary.corpus_count)
        logger.info("Vocabulary size: %i", len(self.vocabulary))
        logger.info("Word embedding size: %i", self.word_vector_size)
        logger.info("Paragraph embedding size: %i", self.paragraph_vector_size)
        logger.info("Context size: %i", self.context_length)
        return report

    def _check_training_sanity(self, negative):
        """Checks whether the model is ready for training with `negative` noise words per prediction.

        Raises
        ------
        RuntimeError
            If the vocabulary hasn't been built yet.
        ValueError
            If the noise table can't supply `negative` distinct words besides the predicted word.

        """
        if self.embeddings is None or self.vocabulary.unk_index is None:
            raise RuntimeError("you must first build vocabulary before training the model")
        if negative < 0:
            raise ValueError("negative must be non-negative, got %r" % negative)
        pool_size = self.vocabulary.noise_pool_size
        if negative > pool_size:
            raise ValueError(
                "insufficient negative-sample pool: negative=%i, but only %i distinct noise words "
                "can differ from a predicted word" % (negative, pool_size)
            )

    def train(self, corpus_file=None, documents=None, alpha=None, min_alpha=None, epochs=None, negative=None,
              report_delay=1.0):
        """Train the model over `epochs` passes of the corpus.

        The learning rate decays linearly from `alpha` to `min_alpha` over all epochs: epoch `e` starts at
        `alpha - (alpha - min_alpha) * e / epochs` and every worker decays its own rate across its
        document range by one epoch's share.

        Parameters
        ----------
        corpus_file : str, optional
            Path to the corpus file that the vocabulary was built from.
        documents : iterable of list of str, optional
            The tokenized documents that the vocabulary was built from.
        alpha : float, optional
            Initial learning rate, defaults to the value given at construction.
        min_alpha : float, optional
            Final learning rate, defaults to the value given at construction.
        epochs : int, optional
            Number of passes, defaults to the value given at construction.
        negative : int, optional
            Noise words per prediction, defaults to the value given at construction.
        report_delay : float, optional
            Seconds to wait before reporting progress.

        Returns
        -------
        (int, int)
            Tuple of (effective word count after ignoring unknown words and subsampling, total raw word count).

        """
        alpha = self.alpha if alpha is None else alpha
        min_alpha = self.min_alpha if min_alpha is None else min_alpha
        epochs = self.epochs if epochs is None else epochs
        negative = self.negative if negative is None else negative

        if epochs < 1:
            raise ValueError("You must specify a positive epochs count, got %r" % epochs)
        self._check_corpus_sanity(corpus_file=corpus_file, documents=documents, passes=epochs)
        self._check_training_sanity(negative)
        if alpha > self.min_alpha_yet_reached:
            logger.warning("Effective 'alpha' higher than previous training cycles")

        logger.info(
            "training model with %i workers on %i vocabulary and %i documents, "
            "negative=%i context_length=%i epochs=%i",
            self.workers, len(self.vocabulary), self.vocabulary.corpus_count,
            negative, self.context_length, epochs,
        )

        decay = (alpha - min_alpha) / epochs
        trained_word_count, raw_word_count = 0, 0
        start = default_timer() - 0.00001
        for cur_epoch in range(epochs):
            trained_words, raw_words = self.train_epoch(
                corpus_file=corpus_file, documents=documents, alpha=alpha - decay * cur_epoch, shrink=decay,
                negative=negative, cur_epoch=cur_epoch, report_delay=report_delay,
            )
            trained_word_count += trained_words
            raw_word_count += raw_words

        total_elapsed = default_timer() - start
        logger.info(
            "training on %i raw words (%i effective words) took %.1fs, %.0f effective words/s",
            raw_word_count, trained_word_count, total_elapsed, trained_word_count / total_elapsed,
        )
        return trained_word_count, raw_word_count

    def train_epoch(self, corpus_file=None, documents=None, alpha=None, shrink=0.0, negative=None, cur_epoch=0,
                    report_delay=1.0):
        """Train one pass over the corpus, with one thread per worker on its own range of documents.

        Worker state (document range, random stream) is created on the first call and refreshed on
        subsequent calls. Threads are started and joined within this call.

        Parameters
        ----------
        corpus_file : str, optional
            Path to the corpus file that the vocabulary was built from.
        documents : iterable of list of str, optional
            The tokenized documents that the vocabulary was built from.
        alpha : float, optional
            Learning rate at the start of each worker's range.
        shrink : float, optional
            Total learning rate decrease across each worker's range.
        negative : int, optional
            Noise words per prediction.
        cur_epoch : int, optional
            Epoch number, for logging.
        report_delay : float, optional
            Seconds to wait before reporting progress.

        Returns
        -------
        (int, int)
            Effective and raw word counts of this epoch.

        """
        alpha = self.alpha if alpha is None else alpha
        negative = self.negative if negative is None else negative
        self._check_corpus_sanity(corpus_file=corpus_file, documents=documents)
        self._check_training_sanity(negative)
        source = corpus_file if documents is None else documents

        if self.pool is None:
            self.pool = TrainingPool(self.workers, self.random)
        self.pool.refresh(self.vocabulary.corpus_count, alpha, shrink)

        progress_queue = Queue()
        workers = [
            threading.Thread(
                target=self._worker_loop, args=(state, source, negative, progress_queue),
                name='paravec-worker-%i' % state.thread_id,
            )
            for state in self.pool
        ]
        for thread in workers:
            thread.daemon = True  # make interrupting the process with ctrl+c easier
            thread.start()

        trained_word_count, raw_word_count = self._log_epoch_progress(
            progress_queue, cur_epoch=cur_epoch, report_delay=report_delay,
        )
        for thread in workers:
            thread.join()

        for state in self.pool:
            if state.error is not None:
                raise state.error

        self.min_alpha_yet_reached = min(state.alpha for state in self.pool)
        self.train_count += 1
        return trained_word_count, raw_word_count

    def _worker_loop(self, state, source, negative, progress_queue):
        """Train on the documents of one worker's range, in corpus order.

        Reports `(documents, trained words, raw words)` after each document to `progress_queue`,
        followed by None once the range is done.

        """
        documents = 0
        try:
            for doc_index, words in enumerate(LineDocument(source, state.start, state.end), state.start):
                indexes = self.vocabulary.indexes(words, self.context_length)
                trained = train_document_dm_concat(self, doc_index, indexes, state.alpha, negative, state.random)
                state.alpha -= state.shrink
                documents += 1
                progress_queue.put((1, trained, len(words)))
        except Exception as err:
            logger.error("worker %i failed at document #%i: %s", state.thread_id, state.start + documents, err)
            state.error = err
        finally:
            progress_queue.put(None)
        logger.debug("worker %i exiting, processed %i documents", state.thread_id, documents)

    def _log_epoch_progress(self, progress_queue, cur_epoch=0, report_delay=1.0):
        """Consume worker progress reports until all workers have finished, logging along the way.

        Returns
        -------
        (int, int)
            Effective and raw word counts of the epoch.

        """
        example_count, trained_word_count, raw_word_count = 0, 0, 0
        start, next_report = default_timer() - 0.00001, report_delay
        total_examples = self.vocabulary.corpus_count
        unfinished_worker_count = len(self.pool)

        while unfinished_worker_count > 0:
            report = progress_queue.get()  # blocks if workers too slow
            if report is None:  # a thread reporting that it finished
                unfinished_worker_count -= 1
                logger.info("worker thread finished; awaiting finish of %i more threads", unfinished_worker_count)
                continue
            examples, trained_words, raw_words = report
            example_count += examples
            trained_word_count += trained_words  # only words in vocab & sampled
            raw_word_count += raw_words

            elapsed = default_timer() - start
            if elapsed >= next_report:
                logger.info(
                    "EPOCH %i - PROGRESS: at %.2f%% documents, %.0f effective words/s",
                    cur_epoch + 1, 100.0 * example_count / max(total_examples, 1), trained_word_count / elapsed,
                )
                next_report = elapsed + report_delay

        elapsed = default_timer() - start
        logger.info(
            "EPOCH - %i : training on %i raw words (%i effective words) took %.1fs, %.0f effective words/s",
            cur_epoch + 1, raw_word_count, trained_word_count, elapsed, trained_word_count / elapsed,
        )
        if example_count != total_examples:
            logger.warning(
                "EPOCH - %i : supplied document count (%i) did not equal expected count (%i)",
                cur_epoch + 1, example_count, total_examples,
            )
        self.total_train_time += elapsed
        return trained_word_count, raw_word_count

    def _check_built(self):
        if self.embeddings is None:
            raise RuntimeError("you must first build vocabulary before using the model's vectors")

    def word_vector(self, word):
        """Get the input vector of `word`, as a view into the model.

        Raises
        ------
        KeyError
            If `word` is not in the vocabulary.

        """
        self._check_built()
        if word not in self.vocabulary:
            raise KeyError("Key '%s' not present" % word)
        return self.embeddings.word_vectors[self.vocabulary.index(word)]

    def paragraph_vector(self, doc_index):
        """Get the paragraph vector of the document at line `doc_index` of the corpus."""
        self._check_built()
        return self.embeddings.paragraph_vectors[doc_index]

    def most_similar(self, word, topn=10):
        """Find the `topn` words closest to `word` by cosine similarity of their word vectors.

        Only real words are ranked; the sentinels are skipped, and so is `word` itself.

        Returns
        -------
        list of (str, float)
            Words and their similarities, most similar first. Empty for words outside the vocabulary.

        """
        self._check_built()
        if word not in self.vocabulary or topn < 1:
            return []
        target = self.vocabulary.index(word)
        vectors = self.embeddings.word_vectors[:self.vocabulary.num_words]
        norms = np.linalg.norm(vectors, axis=1)
        norms[norms == 0.0] = 1.0
        dists = dot(vectors, matutils.unitvec(vectors[target])) / norms
        dists[target] = SELF_SIMILARITY
        best = matutils.argsort(dists, topn=topn + 1, reverse=True)
        return [(self.vocabulary.word(sim), float(dists[sim])) for sim in best if sim != target][:topn]

    def save_word_vectors(self, fname):
        """Store the word vectors as text, one `<word> <v1> ... <vN>` line per vocabulary word, in index order.

        The unknown and null sentinels are not stored.

        """
        self._check_built()
        logger.info(
            "storing %ix%i word vectors into %s", self.vocabulary.num_words, self.word_vector_size, fname,
        )
        with utils.open(fname, 'wb') as fout:
            for index in range(self.vocabulary.num_words):
                vector = self.embeddings.word_vectors[index]
                fout.write(utils.to_utf8(_vector_line(self.vocabulary.word(index), vector)))

    def save_paragraph_vectors(self, fname):
        """Store the paragraph vectors as text, one `<document index> <v1> ... <vN>` line per document."""
        self._check_built()
        paragraph_vectors = self.embeddings.paragraph_vectors
        logger.info("storing %ix%i paragraph vectors into %s", *paragraph_vectors.shape, fname)
        with utils.open(fname, 'wb') as fout:
            for doc_index, vector in enumerate(paragraph_vectors):
                fout.write(utils.to_utf8(_vector_line(doc_index, vector)))

    def save_matrices(self, fname):
        """Store the word, paragraph and word-score matrices into a binary model file,
        see :meth:`~paravec.models.embeddings.EmbeddingStore.save_matrices`."""
        self._check_built()
        self.embeddings.save_matrices(fname)

    def load_matrices(self, fname):
        """Restore the weights from a binary model file written by :meth:`save_matrices`.

        The vocabulary must already be built from the same corpus and settings, so that the stored
        dimensions match; otherwise a ValueError is raised.

        """
        self._check_built()
        self.embeddings.load_matrices(fname)

    def _save_specials(self, fname, separately, sep_limit, ignore, pickle_protocol, compress, subname):
        """Arrange any special handling for the `paravec.utils.SaveLoad` protocol."""
        # worker state is rebuilt on the next train_epoch() call
        ignore = set(ignore).union(['pool', ])
        return super(Paragraph2Vec, self)._save_specials(
            fname, separately, sep_limit, ignore, pickle_protocol, compress, subname)

    def __str__(self):
        """Human readable representation of the model's state."""
        return "%s(vocab=%i, documents=%i, word_vector_size=%i, paragraph_vector_size=%i, context=%i, alpha=%s)" % (
            self.__class__.__name__, len(self.vocabulary), self.vocabulary.corpus_count,
            self.word_vector_size, self.paragraph_vector_size, self.context_length, self.alpha,
        )


def _vector_line(key, vector):
    return "%s %s\n" % (key, ' '.join(repr(val) for val in vector.tolist()))

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Paravec Contributors
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Independent pseudo-random streams, one per training worker.

Each stream wraps its own :class:`numpy.random.Generator`, so workers never share generator state.
Child streams are derived from a parent stream with :meth:`RandomStream.spawn`, which keeps runs
with a fixed seed and worker count reproducible.

"""

import numpy as np

UINT32_BOUND = 2**32


class RandomStream:
    def __init__(self, seed=1):
        """Pseudo-random source producing uniform integers and uniform reals in [0, 1).

        Parameters
        ----------
        seed : int, optional
            Seed for the underlying generator.

        """
        self.seed = int(seed)
        self._rng = np.random.default_rng(self.seed)

    def next(self):
        """Get a uniform random integer in `[0, 2**32)`."""
        return int(self._rng.integers(UINT32_BOUND))

    def zero2one(self):
        """Get a uniform random real in `[0, 1)`."""
        return float(self._rng.random())

    def spawn(self):
        """Create an independent child stream, seeded from the next integer of this stream."""
        return RandomStream(self.next())

    def __repr__(self):
        return '%s(seed=%i)' % (self.__class__.__name__, self.seed)

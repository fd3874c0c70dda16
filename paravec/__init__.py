"""
This package trains word vectors and paragraph (document) vectors jointly from plain text,
using a concatenated-context paragraph vector model with negative sampling.

"""

__version__ = "0.3.0.dev0"

import logging

from paravec import (  # noqa:F401
    matutils,
    models,
    utils,
)

logger = logging.getLogger("paravec")
if not logger.handlers:  # To ensure reload() doesn't add another one
    logger.addHandler(logging.NullHandler())

"""
This package contains the paragraph vector model and the building blocks it is trained with.
"""

# bring model classes directly into package namespace, to save some typing
from .randomstream import RandomStream  # noqa:F401
from .vocabulary import Vocabulary  # noqa:F401
from .embeddings import EmbeddingStore, ScoreLayout, WordScoreView  # noqa:F401
from .paragraph2vec import Paragraph2Vec, LineDocument, TrainingPool, WorkerState  # noqa:F401

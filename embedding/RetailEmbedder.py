# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-15
# Description: RetailEmbedder
# -----------------------------------------------------------------------------
from typing import List, Optional, Sequence

import numpy as np
from openai import OpenAI, OpenAIError

from config.Config import Config
import settings
from utility.logging_utils import get_class_logger


class RetailEmbedder:
    """
    OpenAI embeddings for search terms and product descriptions.

    embed_text / embed_texts return None when the provider fails;
    callers decide whether that is fatal.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            batch_size: int = settings.SEED_EMBED_BATCH_SIZE,
            dimensions: int = settings.EMBEDDING_DIMENSIONS,
            normalize: bool = True,
            logger=None,
    ):
        self.cfg = cfg
        self.batch_size = batch_size
        self.dimensions = dimensions
        self.normalize = normalize
        self.logger = logger or get_class_logger(self.__class__)

        self.client = OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url or None,
        )
        self.model = cfg.openai_embed_model or "text-embedding-3-small"
        self.logger.info("RetailEmbedder initialised (model=%s, dimensions=%d)", self.model, self.dimensions)

    def _embed_batch(self, texts: List[str]) -> np.ndarray:
        resp = self.client.embeddings.create(
            model=self.model,
            input=texts,
            encoding_format="float",
        )
        arr = np.asarray([d.embedding for d in resp.data], dtype=np.float32)

        if arr.ndim != 2 or arr.shape[1] != self.dimensions:
            raise ValueError(f"Expected {self.dimensions}-d embeddings, got shape {arr.shape}")

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms
        return arr

    def embed_text(self, text: str) -> Optional[List[float]]:
        text = (text or "").strip()
        if not text:
            self.logger.warning("embed_text called with empty text")
            return None
        try:
            arr = self._embed_batch([text])
        except (OpenAIError, ValueError) as e:
            self.logger.error("Error generating embeddings: %s", e)
            return None
        return arr[0].tolist()

    def embed_texts(self, texts: Sequence[str]) -> Optional[List[List[float]]]:
        """Embed in batches; any failed batch fails the whole call."""
        items = [(t or "").strip() or " " for t in texts]
        total = len(items)
        self.logger.info("Embedding %d texts (batch=%d)", total, self.batch_size)

        out: List[List[float]] = []
        for i in range(0, total, self.batch_size):
            batch = items[i:i + self.batch_size]
            try:
                arr = self._embed_batch(batch)
            except (OpenAIError, ValueError) as e:
                self.logger.error("Embedding batch at offset %d failed: %s", i, e)
                return None
            out.extend(v.tolist() for v in arr)

        self.logger.info("Completed embeddings for %d texts", len(out))
        return out

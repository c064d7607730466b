"""
Embedding provider for query-time semantic search.

Wraps the Google GenAI embedding API to turn a single query string into a
vector. Catalog entry vectors are computed upstream; this client only ever
embeds queries.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from google.genai import Client as GenAIClient
from google.genai import errors as genai_errors
from google.genai.types import HttpOptions

from .config import DEFAULT_EMBEDDING_TIMEOUT
from .errors import ProviderError


logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "text-embedding-004"


class EmbeddingProvider:
    """Generate query embeddings via Google GenAI."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        timeout: float | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model or os.getenv("CATALOG_SEARCH_EMBEDDING_MODEL", _DEFAULT_MODEL)
        self.dim = dim
        self.timeout = timeout if timeout is not None else DEFAULT_EMBEDDING_TIMEOUT

        if client is not None:
            self._client = client
        else:
            resolved_key = api_key or os.getenv("GOOGLE_API_KEY")
            if resolved_key is None:
                raise ProviderError(
                    "GOOGLE_API_KEY not found. "
                    "Provide api_key or set the environment variable."
                )
            self._client = GenAIClient(
                api_key=resolved_key,
                http_options=HttpOptions(timeout=int(self.timeout * 1000)),
            )

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query text for retrieval.

        Raises ProviderError on API errors, transport failures (timeouts
        included) and responses that carry no usable vector.
        """
        config: dict[str, Any] = {"task_type": "RETRIEVAL_QUERY"}
        if self.dim:
            config["output_dimensionality"] = self.dim

        try:
            result = self._client.models.embed_content(
                model=self.model,
                contents=[query],
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.error("Embedding API returned %s: %s", exc.code, exc.message)
            raise ProviderError(
                f"Embedding provider returned an error ({exc.code}): {exc.message}"
            ) from exc
        except Exception as exc:
            logger.error("Embedding request failed: %s", exc)
            raise ProviderError(f"Embedding provider is unreachable: {exc}") from exc

        embeddings = getattr(result, "embeddings", None)
        if not embeddings:
            raise ProviderError("Embedding provider response contained no embeddings.")
        values = getattr(embeddings[0], "values", None)
        if not values:
            raise ProviderError("Embedding provider response contained an empty vector.")
        return [float(v) for v in values]

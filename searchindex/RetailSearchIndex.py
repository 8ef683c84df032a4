# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Updated: 2026-10-01
# Description: RetailSearchIndex.py
# -----------------------------------------------------------------------------
"""
In-memory document index with keyword, vector and hybrid search.

Keyword ranking is delegated to rank_bm25 (BM25+), vector similarity to numpy.
The whole index round-trips through persist()/restore() as a JSON-serializable
dict; callers treat that blob as opaque.
"""
import json
import re
import time
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import numpy as np
from rank_bm25 import BM25Plus

from searchindex.SearchTypes import SearchHit, SearchResults

INDEX_FORMAT = "retail-search-index"
INDEX_FORMAT_VERSION = 1

SEARCH_MODES = ("fulltext", "vector", "hybrid")
HYBRID_TEXT_WEIGHT = 0.5
HYBRID_VECTOR_WEIGHT = 0.5

_TOKEN_RE = re.compile(r"[^\W_]+")
_VECTOR_TYPE_RE = re.compile(r"^vector\[(\d+)\]$")

Ranked = List[Tuple[int, float]]  # (document position, score)


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(text.lower())


def _format_elapsed(raw_ns: int) -> str:
    if raw_ns < 1_000:
        return f"{raw_ns}ns"
    if raw_ns < 1_000_000:
        return f"{raw_ns // 1_000}μs"
    return f"{raw_ns // 1_000_000}ms"


class RetailSearchIndex:
    def __init__(self, schema: Mapping[str, str]) -> None:
        self.schema: Dict[str, str] = dict(schema)
        self._string_props: List[str] = []
        self._vector_dims: Dict[str, int] = {}

        for prop, kind in self.schema.items():
            if kind == "string":
                self._string_props.append(prop)
                continue
            if kind == "number":
                continue
            m = _VECTOR_TYPE_RE.match(kind)
            if not m:
                raise ValueError(f"Unsupported schema type {kind!r} for property '{prop}'")
            self._vector_dims[prop] = int(m.group(1))

        self._ids: List[str] = []
        self._id_set: Set[str] = set()
        self._documents: List[Dict[str, Any]] = []
        self._prop_tokens: List[Dict[str, List[str]]] = []
        self._vectors: Dict[str, List[Optional[np.ndarray]]] = {p: [] for p in self._vector_dims}

        # Rebuilt lazily on the first search after a mutation
        self._corpus_cache: Dict[Tuple[str, ...], Tuple[List[Set[str]], Set[str], BM25Plus]] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @classmethod
    def create(cls, schema: Mapping[str, str]) -> "RetailSearchIndex":
        return cls(schema)

    @classmethod
    def restore(cls, blob: Any) -> "RetailSearchIndex":
        if isinstance(blob, (str, bytes)):
            blob = json.loads(blob)
        if not isinstance(blob, Mapping) or blob.get("format") != INDEX_FORMAT:
            raise ValueError("Persisted blob is not a retail search index")
        if blob.get("version") != INDEX_FORMAT_VERSION:
            raise ValueError(f"Unsupported index format version: {blob.get('version')!r}")

        index = cls(blob["schema"])
        for entry in blob.get("documents", []):
            index._add(entry["id"], entry["document"])
        return index

    def persist(self) -> Dict[str, Any]:
        return {
            "format": INDEX_FORMAT,
            "version": INDEX_FORMAT_VERSION,
            "schema": dict(self.schema),
            "documents": [
                {"id": doc_id, "document": doc}
                for doc_id, doc in zip(self._ids, self._documents)
            ],
        }

    @property
    def count(self) -> int:
        return len(self._ids)

    def __len__(self) -> int:
        return self.count

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, document: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self._add(doc_id, document)
        return doc_id

    def _add(self, doc_id: str, document: Mapping[str, Any]) -> None:
        if doc_id in self._id_set:
            raise ValueError(f"Document id '{doc_id}' already exists")

        doc = self._validate(document)

        tokens: Dict[str, List[str]] = {}
        for prop in self._string_props:
            value = doc.get(prop)
            tokens[prop] = tokenize(value) if value else []

        for prop in self._vector_dims:
            value = doc.get(prop)
            self._vectors[prop].append(np.asarray(value, dtype=np.float32) if value is not None else None)

        self._ids.append(doc_id)
        self._id_set.add(doc_id)
        self._documents.append(doc)
        self._prop_tokens.append(tokens)
        self._corpus_cache.clear()

    def _validate(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        doc: Dict[str, Any] = {}
        for prop, value in document.items():
            kind = self.schema.get(prop)
            if kind is None or value is None:
                doc[prop] = value
                continue

            if kind == "string":
                if not isinstance(value, str):
                    raise ValueError(f"Property '{prop}' expects a string, got {type(value).__name__}")
            elif kind == "number":
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"Property '{prop}' expects a number, got {type(value).__name__}")
            else:
                dims = self._vector_dims[prop]
                try:
                    values = [float(v) for v in value]
                except (TypeError, ValueError) as e:
                    raise ValueError(f"Property '{prop}' expects a numeric vector: {e}") from e
                if len(values) != dims:
                    raise ValueError(f"Property '{prop}' expects a vector of {dims} values, got {len(values)}")
                value = values
            doc[prop] = value
        return doc

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search(
            self,
            term: str = "",
            *,
            limit: int = 10,
            offset: int = 0,
            properties: Optional[Sequence[str]] = None,
            mode: str = "fulltext",
            vector: Optional[Iterable[float]] = None,
            vector_property: Optional[str] = None,
            similarity: float = 0.8,
    ) -> SearchResults:
        started = time.perf_counter_ns()

        if mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode {mode!r}; expected one of {SEARCH_MODES}")
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")

        props = self._resolve_properties(properties)

        if mode == "fulltext":
            ranked = self._fulltext(term or "", props, match_all_on_empty=True)
        elif mode == "vector":
            ranked = self._vector(vector, vector_property, similarity)
        else:
            text_ranked = self._fulltext(term or "", props, match_all_on_empty=False)
            vector_ranked = self._vector(vector, vector_property, similarity)
            ranked = self._merge_hybrid(text_ranked, vector_ranked)

        page = ranked[offset:offset + limit]
        hits = [
            SearchHit(id=self._ids[pos], score=score, document=dict(self._documents[pos]))
            for pos, score in page
        ]

        raw = time.perf_counter_ns() - started
        return SearchResults(
            count=len(ranked),
            hits=hits,
            elapsed={"raw": raw, "formatted": _format_elapsed(raw)},
        )

    def _resolve_properties(self, properties: Optional[Sequence[str]]) -> Tuple[str, ...]:
        if not properties:
            return tuple(self._string_props)
        unknown = [p for p in properties if p not in self._string_props]
        if unknown:
            raise ValueError(f"Properties are not searchable strings: {unknown}")
        return tuple(properties)

    def _corpus(self, props: Tuple[str, ...]) -> Tuple[List[Set[str]], Set[str], BM25Plus]:
        cached = self._corpus_cache.get(props)
        if cached is not None:
            return cached

        corpus = [
            [tok for prop in props for tok in doc_tokens[prop]]
            for doc_tokens in self._prop_tokens
        ]
        token_sets = [set(doc) for doc in corpus]
        vocabulary = set().union(*token_sets) if token_sets else set()
        bm25 = BM25Plus(corpus)

        self._corpus_cache[props] = (token_sets, vocabulary, bm25)
        return token_sets, vocabulary, bm25

    def _fulltext(self, term: str, props: Tuple[str, ...], *, match_all_on_empty: bool) -> Ranked:
        query_tokens = tokenize(term)
        if not query_tokens:
            if match_all_on_empty:
                return [(pos, 0.0) for pos in range(len(self._ids))]
            return []
        if not self._ids:
            return []

        token_sets, vocabulary, bm25 = self._corpus(props)

        # prefix expansion: "choc" also matches "chocolate"
        expanded = {
            tok for tok in vocabulary
            if any(tok.startswith(q) for q in query_tokens)
        }
        if not expanded:
            return []

        matched = [pos for pos, doc_tokens in enumerate(token_sets) if doc_tokens & expanded]
        scores = bm25.get_scores(sorted(expanded))

        ranked = [(pos, float(scores[pos])) for pos in matched]
        ranked.sort(key=lambda item: item[1], reverse=True)
        return ranked

    def _vector(
            self,
            vector: Optional[Iterable[float]],
            vector_property: Optional[str],
            similarity: float,
    ) -> Ranked:
        if vector is None:
            raise ValueError("Vector search requires a query vector")
        if not self._vector_dims:
            raise ValueError("Schema has no vector property")

        prop = vector_property or next(iter(self._vector_dims))
        if prop not in self._vector_dims:
            raise ValueError(f"Property '{prop}' is not a vector property")

        query = np.asarray(list(vector), dtype=np.float32)
        dims = self._vector_dims[prop]
        if query.shape != (dims,):
            raise ValueError(f"Query vector must have {dims} values, got {query.shape[0]}")

        positions = [pos for pos, v in enumerate(self._vectors[prop]) if v is not None]
        query_norm = float(np.linalg.norm(query))
        if not positions or query_norm == 0.0:
            return []

        matrix = np.vstack([self._vectors[prop][pos] for pos in positions])
        norms = np.linalg.norm(matrix, axis=1) * query_norm
        with np.errstate(divide="ignore", invalid="ignore"):
            sims = np.where(norms > 0, matrix @ query / norms, 0.0)

        ranked = [(pos, float(sim)) for pos, sim in zip(positions, sims) if sim >= similarity]
        ranked.sort(key=lambda item: item[1], reverse=True)
        return ranked

    @staticmethod
    def _merge_hybrid(text_ranked: Ranked, vector_ranked: Ranked) -> Ranked:
        max_text = max((score for _, score in text_ranked), default=0.0)

        combined: Dict[int, float] = {}
        for pos, score in text_ranked:
            normalized = score / max_text if max_text > 0 else 0.0
            combined[pos] = HYBRID_TEXT_WEIGHT * normalized
        for pos, score in vector_ranked:
            combined[pos] = combined.get(pos, 0.0) + HYBRID_VECTOR_WEIGHT * score

        return sorted(combined.items(), key=lambda item: item[1], reverse=True)

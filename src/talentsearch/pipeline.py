"""Search pipeline assembly and execution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog
from pydantic import ValidationError

from .core import QueryEvaluator
from .schemas import CandidateRecord, SavedSearch, SearchQuery
from .store import SavedSearchStore, SearchHistoryStore
from . import __version__


class CandidateLoadError(ValueError):
    """Raised when candidate loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[CandidateRecord]):
        super().__init__("Candidate loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Candidate loading failed: {self.errors}"


class SavedSearchNotFoundError(LookupError):
    """Raised when a run references a saved search that does not exist."""

    def __init__(self, search_id: str):
        super().__init__(f"Saved search not found: {search_id!r}")
        self.search_id = search_id


class CandidateLoader:
    """Load candidate records from JSON lines."""

    def load(self, path: Path) -> list[CandidateRecord]:
        candidates: list[CandidateRecord] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: expected a JSON object")
                    continue
                try:
                    candidates.append(CandidateRecord.model_validate(record))
                except ValidationError as exc:
                    errors.append(f"line {idx}: {exc.errors()[0]['msg']}")
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


class QueryLoader:
    """Load query documents (``{"groups": [...], "globalOperator": ...}``)."""

    def load(self, path: Path) -> SearchQuery:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid query JSON: {exc}") from exc
        try:
            return SearchQuery.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid query document: {exc}") from exc


class OutputWriter:
    """Persist search results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class SearchPipeline:
    """Load candidates, apply a query, track usage and history, write results."""

    def __init__(
        self,
        *,
        evaluator: QueryEvaluator,
        saved_searches: SavedSearchStore,
        history: SearchHistoryStore,
        candidate_loader: CandidateLoader | None = None,
        query_loader: QueryLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._evaluator = evaluator
        self._saved_searches = saved_searches
        self._history = history
        self._candidates = candidate_loader or CandidateLoader()
        self._queries = query_loader or QueryLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def resolve_query(
        self,
        *,
        query: SearchQuery | None = None,
        query_path: Path | None = None,
        saved_search_id: str | None = None,
    ) -> SearchQuery | SavedSearch:
        if saved_search_id:
            saved = self._saved_searches.get(saved_search_id)
            if saved is None:
                raise SavedSearchNotFoundError(saved_search_id)
            return saved
        if query is not None:
            return query
        if query_path is not None:
            return self._queries.load(query_path)
        return SearchQuery()

    def run(
        self,
        *,
        candidates_path: Path,
        output_path: Path,
        query: SearchQuery | None = None,
        query_path: Path | None = None,
        saved_search_id: str | None = None,
        search_text: str = "",
    ) -> list[dict[str, Any]]:
        resolved = self.resolve_query(
            query=query, query_path=query_path, saved_search_id=saved_search_id
        )
        load_errors: list[str] = []
        try:
            candidates = self._candidates.load(candidates_path)
        except CandidateLoadError as exc:
            candidates = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("candidates.partial_load", errors=exc.errors)

        matched = self._evaluator.evaluate(candidates, resolved)

        saved_id = resolved.id if isinstance(resolved, SavedSearch) else None
        if saved_id:
            self._saved_searches.record_usage(saved_id)

        filters: dict[str, Any] = {
            "advancedSearch": bool(resolved.groups),
            "groupCount": len(resolved.groups),
            "globalOperator": resolved.global_operator,
        }
        if saved_id:
            filters["savedSearchId"] = saved_id
        history_text = search_text or (resolved.name if isinstance(resolved, SavedSearch) else "")
        self._history.append(history_text, filters, len(matched))

        self._logger.info(
            "search.completed",
            candidate_count=len(candidates),
            match_count=len(matched),
            saved_search_id=saved_id,
        )

        results = [record.model_dump(mode="json", by_alias=True) for record in matched]
        metadata = {
            "candidateCount": len(candidates),
            "matchCount": len(matched),
            "savedSearchId": saved_id,
            "errors": load_errors,
            "timestamp": pendulum.now("UTC").to_iso8601_string(),
            "appVersion": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "results": results})
        return results

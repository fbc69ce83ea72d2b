from __future__ import annotations

import json
from pathlib import Path

import pytest

from talentsearch.pipeline import CandidateLoadError, CandidateLoader, QueryLoader


def test_candidate_loader_raises_on_invalid_json(tmp_path: Path):
    loader = CandidateLoader()
    path = tmp_path / "candidates.jsonl"
    path.write_text('{"id": "cand-1"}\n{invalid}', encoding="utf-8")

    with pytest.raises(CandidateLoadError) as exc:
        loader.load(path)
    assert "invalid JSON" in str(exc.value)


def test_candidate_loader_skips_invalid_and_reports(tmp_path: Path):
    loader = CandidateLoader()
    path = tmp_path / "candidates.jsonl"
    valid_payload = {"id": "cand-1", "name": "Alice", "experienceLevel": "senior"}
    invalid_payload = {"name": "Missing id"}
    path.write_text(
        json.dumps(valid_payload, ensure_ascii=False)
        + "\n\n"
        + json.dumps(invalid_payload, ensure_ascii=False)
        + "\n"
        + json.dumps(["not", "an", "object"]),
        encoding="utf-8",
    )

    with pytest.raises(CandidateLoadError) as exc:
        loader.load(path)
    error = exc.value
    assert error.errors[0].startswith("line 3:")
    assert error.errors[1] == "line 4: expected a JSON object"
    assert len(error.partial) == 1
    assert error.partial[0].experience_level == "senior"


def test_query_loader_invalid_json(tmp_path: Path):
    path = tmp_path / "query.json"
    path.write_text("{invalid", encoding="utf-8")

    with pytest.raises(ValueError):
        QueryLoader().load(path)


def test_query_loader_rejects_bad_global_operator(tmp_path: Path):
    path = tmp_path / "query.json"
    path.write_text(json.dumps({"groups": [], "globalOperator": "XOR"}), encoding="utf-8")

    with pytest.raises(ValueError):
        QueryLoader().load(path)

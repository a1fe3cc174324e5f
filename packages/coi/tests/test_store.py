"""Tests for the JSON conflict check store."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from coi.checker import ConflictChecker
from coi.repository import InMemoryMatterRepository
from coi.store import CheckNotFoundError, ConflictStoreError, JsonConflictStore
from coi.types import (
    ConflictCheckParams,
    ConflictCheckResult,
    ConflictMatch,
    ConflictStatus,
    MatchType,
    Recommendation,
    RiskLevel,
)


def make_result() -> ConflictCheckResult:
    conflict = ConflictMatch(
        id="client::m1::Jane Doe",
        type=MatchType.CLIENT,
        matter_id="m1",
        matter_title="Doe v. Globex",
        matched_name="Jane Doe",
        query_name="Jane Doe",
        similarity_score=1.0,
        risk_level=RiskLevel.CRITICAL,
        matched_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        client_name="Jane Doe",
    )
    return ConflictCheckResult(
        conflicts=[conflict],
        risk_level=RiskLevel.CRITICAL,
        total_matches=1,
        high_risk_count=1,
        medium_risk_count=0,
        low_risk_count=0,
        recommendation=Recommendation.DECLINE,
        summary="Critical conflicts detected (1 critical, 0 high risk). Engagement should be declined.",
    )


def make_params() -> ConflictCheckParams:
    return ConflictCheckParams(
        owner_id="owner-1",
        client_name="Jane Doe",
        adverse_parties=["Globex"],
    )


@pytest.fixture
def store(tmp_path: Path) -> JsonConflictStore:
    store = JsonConflictStore(tmp_path / "checks.json")
    store.load()
    return store


def test_missing_file_loads_empty(store):
    assert store.get_all() == []


def test_save_creates_pending_record(store):
    check_id = store.save(make_result(), make_params())

    record = store.get(check_id)
    assert record.status == ConflictStatus.PENDING
    assert record.owner_id == "owner-1"
    assert record.client_name == "Jane Doe"
    assert record.adverse_parties == ["Globex"]
    assert record.risk_level == RiskLevel.CRITICAL
    assert record.conflicts[0].matter_id == "m1"
    assert record.resolved_at is None


def test_save_ids_unique(store):
    first = store.save(make_result(), make_params())
    second = store.save(make_result(), make_params())
    assert first != second


def test_roundtrip_through_disk(tmp_path: Path):
    path = tmp_path / "checks.json"
    writer = JsonConflictStore(path)
    writer.load()
    check_id = writer.save(make_result(), make_params())

    reader = JsonConflictStore(path)
    reader.load()
    record = reader.get(check_id)
    assert record.total_matches == 1
    assert record.conflicts[0].risk_level == RiskLevel.CRITICAL


def test_file_uses_camel_case_keys(store):
    store.save(make_result(), make_params())
    data = json.loads(store.path.read_text())

    record = data["checks"][0]
    assert record["ownerId"] == "owner-1"
    assert record["riskLevel"] == "critical"
    assert record["conflicts"][0]["similarityScore"] == 1.0
    assert record["status"] == "pending"


class TestUpdateResolution:
    def test_sets_resolution_fields(self, store):
        check_id = store.save(make_result(), make_params())

        store.update_resolution(check_id, ConflictStatus.WAIVED, "Client consent on file", "partner-7")

        record = store.get(check_id)
        assert record.status == ConflictStatus.WAIVED
        assert record.resolution_notes == "Client consent on file"
        assert record.resolved_by == "partner-7"
        assert record.resolved_at is not None

    def test_accepts_string_status(self, store):
        check_id = store.save(make_result(), make_params())
        store.update_resolution(check_id, "screened")
        assert store.get(check_id).status == ConflictStatus.SCREENED

    def test_persisted(self, store):
        check_id = store.save(make_result(), make_params())
        store.update_resolution(check_id, "declined")

        reader = JsonConflictStore(store.path)
        reader.load()
        assert reader.get(check_id).status == ConflictStatus.DECLINED

    def test_unknown_id(self, store):
        with pytest.raises(CheckNotFoundError):
            store.update_resolution("missing", ConflictStatus.CLEARED)

    def test_invalid_status(self, store):
        check_id = store.save(make_result(), make_params())
        with pytest.raises(ValueError):
            store.update_resolution(check_id, "approved")


class TestCorruptFile:
    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "checks.json"
        path.write_text("not json{")
        store = JsonConflictStore(path)
        store.load()
        assert store.get_all() == []

    def test_invalid_record(self, tmp_path: Path):
        path = tmp_path / "checks.json"
        path.write_text(json.dumps({"checks": [{"bogus": 1}]}))
        store = JsonConflictStore(path)
        store.load()
        assert store.get_all() == []

    def test_wrong_top_level_shape(self, tmp_path: Path):
        path = tmp_path / "checks.json"
        path.write_text("[]")
        store = JsonConflictStore(path)
        store.load()
        assert store.get_all() == []


class TestLoadFailureKeepsHistory:
    """A file that fails to load must never be rewritten."""

    @pytest.fixture
    def damaged_path(self, tmp_path: Path) -> Path:
        path = tmp_path / "checks.json"
        store = JsonConflictStore(path)
        store.load()
        for _ in range(3):
            store.save(make_result(), make_params())

        data = json.loads(path.read_text())
        data["checks"][1]["status"] = "bogus"
        path.write_text(json.dumps(data))
        return path

    def test_save_refuses_to_overwrite(self, damaged_path: Path):
        before = damaged_path.read_text()
        store = JsonConflictStore(damaged_path)
        store.load()

        assert store.load_error is not None
        with pytest.raises(ConflictStoreError):
            store.save(make_result(), make_params())

        assert damaged_path.read_text() == before
        assert len(json.loads(before)["checks"]) == 3

    def test_update_resolution_refuses_to_overwrite(self, damaged_path: Path):
        before = damaged_path.read_text()
        check_id = json.loads(before)["checks"][0]["id"]
        store = JsonConflictStore(damaged_path)
        store.load()

        with pytest.raises(ConflictStoreError):
            store.update_resolution(check_id, ConflictStatus.CLEARED)
        assert damaged_path.read_text() == before

    def test_check_and_save_keeps_earlier_records(self, damaged_path: Path):
        before = damaged_path.read_text()
        store = JsonConflictStore(damaged_path)
        store.load()
        checker = ConflictChecker(InMemoryMatterRepository(), store=store)

        result, check_id = checker.check_and_save(make_params())

        assert check_id is None
        assert result.total_matches == 0
        assert damaged_path.read_text() == before

    def test_reload_after_repair(self, damaged_path: Path):
        store = JsonConflictStore(damaged_path)
        store.load()

        data = json.loads(damaged_path.read_text())
        data["checks"][1]["status"] = "pending"
        damaged_path.write_text(json.dumps(data))
        store.load()

        store.save(make_result(), make_params())
        assert len(store.get_all()) == 4


def test_save_without_explicit_load_keeps_existing(tmp_path: Path):
    path = tmp_path / "checks.json"
    first = JsonConflictStore(path)
    first.load()
    existing_id = first.save(make_result(), make_params())

    second = JsonConflictStore(path)
    second.save(make_result(), make_params())

    reader = JsonConflictStore(path)
    assert len(reader.get_all()) == 2
    assert reader.get(existing_id).owner_id == "owner-1"


class TestOwnerScoping:
    def test_get_with_matching_owner(self, store):
        check_id = store.save(make_result(), make_params())
        assert store.get(check_id, owner_id="owner-1").id == check_id

    def test_get_with_other_owner(self, store):
        check_id = store.save(make_result(), make_params())
        with pytest.raises(CheckNotFoundError):
            store.get(check_id, owner_id="owner-2")

    def test_update_resolution_with_other_owner(self, store):
        check_id = store.save(make_result(), make_params())
        with pytest.raises(CheckNotFoundError):
            store.update_resolution(check_id, ConflictStatus.WAIVED, owner_id="owner-2")
        assert store.get(check_id).status == ConflictStatus.PENDING

    def test_update_resolution_with_matching_owner(self, store):
        check_id = store.save(make_result(), make_params())
        store.update_resolution(check_id, ConflictStatus.WAIVED, owner_id="owner-1")
        assert store.get(check_id).status == ConflictStatus.WAIVED

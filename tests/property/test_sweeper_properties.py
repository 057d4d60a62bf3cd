"""
Property-based tests for expiry sweeping and password digests.
"""

from hypothesis import assume, given

import pytest

from qrdrop.domain.file_storage import PasswordDigest, ShareManager
from tests.fixtures.mock_repositories import DummyStorageRepo, FakeClock, InMemoryRecordRepo
from tests.property.strategies import NOW, passwords, record_sets

pytestmark = pytest.mark.property


def _manager(records):
    storage = DummyStorageRepo()
    for record in records.values():
        storage.saved[record.storage_path] = b"x"
    repo = InMemoryRecordRepo(records)
    return ShareManager(repo, storage, clock=FakeClock(NOW)), repo, storage


@given(record_sets())
def test_sweep_leaves_only_live_records(records):
    manager, repo, _ = _manager(records)

    report = manager.cleanup_expired_files()

    assert all(r.expires_at > report.started_at for r in repo.records.values())


@given(record_sets())
def test_sweep_removes_exactly_the_expired_records(records):
    manager, repo, storage = _manager(records)
    expected = {i for i, r in records.items() if r.expires_at <= NOW}

    report = manager.cleanup_expired_files()

    assert set(report.removed_ids) == expected
    assert set(repo.records) == set(records) - expected
    assert set(storage.deleted) == {records[i].storage_path for i in expected}
    assert report.failures == []


@given(record_sets())
def test_sweep_is_idempotent(records):
    manager, repo, _ = _manager(records)
    manager.cleanup_expired_files()
    saves = repo.save_count

    second = manager.cleanup_expired_files()

    assert second.removed_ids == []
    assert repo.save_count == saves


@given(passwords, passwords)
def test_digest_matches_only_its_secret(secret, other):
    assume(secret != other)
    digest = PasswordDigest.from_secret(secret)

    assert PasswordDigest.matches(secret, digest)
    assert not PasswordDigest.matches(other, digest)
    assert not PasswordDigest.matches(None, digest)

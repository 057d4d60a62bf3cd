from qrdrop.domain.file_storage.entities import FileRecord

NOW = 1_700_000_000_000
TTL = 10 * 60 * 1000


def create_record(**overrides):
    params = dict(
        share_id="0123456789ab",
        stored_name="1700000000000-42.txt",
        original_name="notes.txt",
        storage_path="/srv/uploads/1700000000000-42.txt",
        password_digest=None,
        ttl_ms=TTL,
        now=NOW,
    )
    params.update(overrides)
    return FileRecord.create(**params)


class TestFileRecordCreate:
    def test_expiry_is_upload_time_plus_ttl(self):
        record = create_record()

        assert record.uploaded_at == NOW
        assert record.expires_at == NOW + TTL

    def test_password_flag_follows_digest(self):
        assert not create_record().password_protected
        assert create_record(password_digest="d" * 64).password_protected


class TestFileRecordExpiry:
    def test_not_expired_before_deadline(self):
        record = create_record()
        assert not record.is_expired(NOW + TTL - 1)

    def test_expired_at_and_after_deadline(self):
        record = create_record()

        assert record.is_expired(NOW + TTL)
        assert record.is_expired(NOW + TTL + 1)


class TestFileRecordSerialization:
    def test_to_dict_uses_store_keys(self):
        data = create_record(password_digest="d" * 64).to_dict()

        assert data == {
            "id": "0123456789ab",
            "filename": "1700000000000-42.txt",
            "originalName": "notes.txt",
            "path": "/srv/uploads/1700000000000-42.txt",
            "passwordHash": "d" * 64,
            "uploadedAt": NOW,
            "expiresAt": NOW + TTL,
        }

    def test_from_dict_restores_record(self):
        record = create_record(password_digest="d" * 64)
        assert FileRecord.from_dict(record.to_dict()) == record

    def test_public_dict_hides_digest_and_path(self):
        public = create_record(password_digest="d" * 64).to_public_dict()

        assert public == {
            "id": "0123456789ab",
            "originalName": "notes.txt",
            "expiresAt": NOW + TTL,
            "passwordProtected": True,
        }

    def test_download_name_falls_back_to_stored_file(self):
        record = create_record(original_name="")
        assert record.download_name() == "1700000000000-42.txt"

import hashlib

import pytest

from qrdrop.domain.file_storage.value_objects import (
    InvalidShareIdError,
    PasswordDigest,
    ShareId,
)


class TestShareId:
    def test_generate_is_twelve_hex_chars(self):
        share_id = ShareId.generate()

        assert len(str(share_id)) == 12
        assert all(c in "0123456789abcdef" for c in str(share_id))

    def test_generate_is_unpredictable(self):
        ids = {str(ShareId.generate()) for _ in range(1000)}
        assert len(ids) == 1000

    @pytest.mark.parametrize("value", ["", "abc", "zzzzzzzzzzzz", "0123456789abc", None])
    def test_rejects_malformed_values(self, value):
        with pytest.raises(InvalidShareIdError):
            ShareId(value)


class TestPasswordDigest:
    def test_digest_is_sha256_hex(self):
        assert PasswordDigest.from_secret("abc") == hashlib.sha256(b"abc").hexdigest()

    @pytest.mark.parametrize("secret", [None, ""])
    def test_empty_secret_means_no_password(self, secret):
        assert PasswordDigest.from_secret(secret) is None

    def test_matches_only_the_original_secret(self):
        digest = PasswordDigest.from_secret("abc")

        assert PasswordDigest.matches("abc", digest)
        assert not PasswordDigest.matches("abcd", digest)
        assert not PasswordDigest.matches("", digest)
        assert not PasswordDigest.matches(None, digest)

    def test_no_password_sentinel_never_matches(self):
        assert not PasswordDigest.matches(None, None)
        assert not PasswordDigest.matches("abc", None)

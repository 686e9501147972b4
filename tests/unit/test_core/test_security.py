"""Tests for bearer token verification and secret hashing."""
import pytest
from datetime import timedelta

from app.core.errors import UnauthorizedError
from app.core.security import (
    Principal,
    create_access_token,
    get_password_hash,
    verify_bearer_token,
    verify_host_secret,
    verify_password,
)


@pytest.mark.unit
class TestVerifyBearerToken:

    def test_valid_token(self):
        token = create_access_token({"sub": "user-1", "email": "u@example.com", "cognito:groups": ["hosts"]})
        principal = verify_bearer_token(f"Bearer {token}")

        assert principal == Principal(subject="user-1", email="u@example.com", groups=["hosts"])
        assert principal.is_host
        assert not principal.is_super_admin

    def test_super_admin_group(self):
        token = create_access_token({"sub": "admin", "cognito:groups": ["super-admins"]})
        assert verify_bearer_token(f"Bearer {token}").is_super_admin

    def test_no_groups(self):
        token = create_access_token({"sub": "athlete"})
        principal = verify_bearer_token(f"Bearer {token}")
        assert principal.groups == []
        assert not principal.is_host

    def test_single_group_as_string(self):
        """Some issuers send a lone group as a bare string."""
        token = create_access_token({"sub": "user-1", "cognito:groups": "hosts"})
        principal = verify_bearer_token(f"Bearer {token}")

        assert principal.groups == ["hosts"]
        assert principal.is_host

    def test_missing_header(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            verify_bearer_token(None)
        assert exc_info.value.code == "missing_token"
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "token-without-scheme"])
    def test_malformed_header(self, header):
        with pytest.raises(UnauthorizedError) as exc_info:
            verify_bearer_token(header)
        assert exc_info.value.code == "invalid_token"

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-10))
        with pytest.raises(UnauthorizedError) as exc_info:
            verify_bearer_token(f"Bearer {token}")
        assert exc_info.value.code == "token_expired"

    def test_tampered_token(self):
        token = create_access_token({"sub": "user-1"})
        with pytest.raises(UnauthorizedError):
            verify_bearer_token(f"Bearer {token[:-2]}xx")

    def test_token_without_subject(self):
        token = create_access_token({"email": "u@example.com"})
        with pytest.raises(UnauthorizedError):
            verify_bearer_token(f"Bearer {token}")


@pytest.mark.unit
class TestSecrets:

    def test_hash_and_verify(self):
        hashed = get_password_hash("kiosk-secret")
        assert hashed != "kiosk-secret"
        assert verify_password("kiosk-secret", hashed)
        assert not verify_password("other", hashed)

    def test_host_secret_hashed(self):
        assert verify_host_secret("kiosk-secret", get_password_hash("kiosk-secret"))

    def test_host_secret_plaintext_record(self):
        assert verify_host_secret("legacy", "legacy")
        assert not verify_host_secret("legacy", "other")

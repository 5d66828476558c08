import pytest
from jose import jwt
from protean.exceptions import ConfigurationError
from shared.auth import ANONYMOUS, CallerContext, caller_from_token, is_moderator
from shared.errors import AuthenticationError


@pytest.fixture(autouse=True)
def _jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "unit-secret")


def _token(claims, secret="unit-secret"):
    return jwt.encode(claims, secret, algorithm="HS256")


class TestCallerFromToken:
    def test_valid_token(self):
        caller = caller_from_token(_token({"sub": "admin-001", "role": "admin"}))
        assert caller == CallerContext(subject="admin-001", role="admin")

    def test_wrong_secret(self):
        with pytest.raises(AuthenticationError):
            caller_from_token(_token({"sub": "admin-001"}, secret="other"))

    def test_missing_subject(self):
        with pytest.raises(AuthenticationError) as exc:
            caller_from_token(_token({"role": "admin"}))
        assert "token" in exc.value.messages


class TestSigningSecret:
    @pytest.fixture(autouse=True)
    def _no_secret(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)

    @pytest.mark.parametrize("environment", ["production", "staging"])
    def test_deployed_environment_requires_secret(self, monkeypatch, environment):
        monkeypatch.setenv("ENVIRONMENT", environment)
        with pytest.raises(ConfigurationError):
            caller_from_token(_token({"sub": "admin-001"}, secret="robotech-dev-secret"))

    def test_test_environment_uses_local_secret(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "test")
        caller = caller_from_token(_token({"sub": "admin-001", "role": "admin"}, secret="robotech-dev-secret"))
        assert caller.role == "admin"


class TestIsModerator:
    @pytest.mark.parametrize("role", ["admin", "superadmin"])
    def test_moderator_roles(self, role):
        assert is_moderator(CallerContext(subject="u", role=role))

    @pytest.mark.parametrize("role", ["customer", None])
    def test_other_roles(self, role):
        assert not is_moderator(CallerContext(subject="u", role=role))

    def test_anonymous(self):
        assert ANONYMOUS.is_anonymous
        assert not is_moderator(ANONYMOUS)

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from starlette.authentication import AuthCredentials, AuthenticationBackend, SimpleUser
from starlette.middleware.authentication import AuthenticationMiddleware

from quiz_api.core import security
from quiz_api.core.security import (
    HeaderPrincipalResolver,
    ScopePrincipalResolver,
    get_current_principal,
    get_principal_resolver,
)


class HeaderBackend(AuthenticationBackend):
    """Stands in for a Negotiate backend: trusts the Remote-Name header."""

    async def authenticate(self, conn):
        name = conn.headers.get("Remote-Name")
        if not name:
            return None
        return AuthCredentials(["authenticated"]), SimpleUser(name)


def build_app(resolver):
    app = FastAPI()

    @app.get("/whoami")
    def whoami(principal: str = Depends(get_current_principal)):
        return {"user": principal}

    app.dependency_overrides[get_principal_resolver] = lambda: resolver
    return app


def test_header_resolver():
    client = TestClient(build_app(HeaderPrincipalResolver("X-Remote-User")))

    assert client.get("/whoami", headers={"X-Remote-User": "CONTOSO\\alice"}).json() == {
        "user": "CONTOSO\\alice"
    }
    assert client.get("/whoami").status_code == 401
    assert client.get("/whoami", headers={"X-Other": "alice"}).status_code == 401


def test_scope_resolver_with_authentication_middleware():
    app = build_app(ScopePrincipalResolver())
    app.add_middleware(AuthenticationMiddleware, backend=HeaderBackend())
    client = TestClient(app)

    assert client.get("/whoami", headers={"Remote-Name": "bob"}).json() == {"user": "bob"}
    response = client.get("/whoami")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Negotiate"


def test_scope_resolver_without_middleware():
    client = TestClient(build_app(ScopePrincipalResolver()))
    assert client.get("/whoami").status_code == 401


@pytest.mark.parametrize("mode, expected", [
    ("header", HeaderPrincipalResolver),
    ("scope", ScopePrincipalResolver),
])
def test_get_principal_resolver(monkeypatch, mode, expected):
    monkeypatch.setattr(security.settings, "AUTH_MODE", mode)
    get_principal_resolver.cache_clear()
    try:
        assert isinstance(get_principal_resolver(), expected)
    finally:
        get_principal_resolver.cache_clear()


def test_get_principal_resolver_unknown_mode(monkeypatch):
    monkeypatch.setattr(security.settings, "AUTH_MODE", "basic")
    get_principal_resolver.cache_clear()
    try:
        with pytest.raises(RuntimeError):
            get_principal_resolver()
    finally:
        get_principal_resolver.cache_clear()

import pytest

from app.models.user import AuthUser
from app.services.route_guard import resolve_redirect
from tests.conftest import USER_ID, auth_headers

INCOMPLETE = AuthUser(id=USER_ID, email="ada@example.com")
COMPLETE = AuthUser(id=USER_ID, email="ada@example.com", user_metadata={"full_name": "Ada"})


@pytest.mark.parametrize(
    "destination, expected",
    [
        ("/dashboard", "/profile"),
        ("/documents/42?tab=summary", "/profile"),
        ("/", "/profile"),
        ("/profile", None),
        ("/login", None),
        ("/profile?from=dashboard", None),
    ],
)
def test_incomplete_profile(destination, expected):
    assert resolve_redirect(INCOMPLETE, destination) == expected


@pytest.mark.parametrize("destination", ["/dashboard", "/profile", "/login", "/"])
def test_complete_profile_is_never_redirected(destination):
    assert resolve_redirect(COMPLETE, destination) is None


@pytest.mark.parametrize(
    "destination, expected",
    [
        ("/dashboard", "/login"),
        ("/profile", "/login"),
        ("/login", None),
        ("/confirm", None),
        ("/", None),
    ],
)
def test_guest(destination, expected):
    assert resolve_redirect(None, destination) == expected


def test_server_side_navigation_is_exempt():
    assert resolve_redirect(INCOMPLETE, "/dashboard", server_side=True) is None
    assert resolve_redirect(None, "/dashboard", server_side=True) is None


def test_empty_full_name_counts_as_incomplete():
    user = AuthUser(id=USER_ID, user_metadata={"full_name": ""})

    assert resolve_redirect(user, "/dashboard") == "/profile"


def test_navigation_endpoint_reads_live_session(client, user_repo):
    user_repo.add()

    first = client.get("/api/navigation", params={"path": "/dashboard"}, headers=auth_headers())
    client.patch("/api/profile", json={"full_name": "Ada"}, headers=auth_headers())
    second = client.get("/api/navigation", params={"path": "/dashboard"}, headers=auth_headers())

    assert first.json() == {"redirect": "/profile"}
    assert second.json() == {"redirect": None}


def test_navigation_endpoint_for_guest(client, user_repo):
    response = client.get("/api/navigation", params={"path": "/dashboard"})

    assert response.json() == {"redirect": "/login"}
    assert user_repo.calls == []


def test_navigation_endpoint_requires_path(client):
    response = client.get("/api/navigation")

    assert response.status_code == 400

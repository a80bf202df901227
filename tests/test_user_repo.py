from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from supabase import AuthApiError

from app.core.errors import RemoteError
from app.repositories.user_repo import AuthUserRepository
from tests.conftest import USER_ID


def stub_client(**admin_behaviour) -> MagicMock:
    client = MagicMock()
    for name, behaviour in admin_behaviour.items():
        setattr(getattr(client.auth.admin, name), "side_effect", behaviour)
    return client


def test_get_by_id_maps_provider_user():
    client = MagicMock()
    client.auth.admin.get_user_by_id.return_value = SimpleNamespace(
        user=SimpleNamespace(id=USER_ID, email="ada@example.com", user_metadata={"full_name": "Ada"})
    )

    user = AuthUserRepository(client).get_by_id(USER_ID)

    assert user.id == USER_ID
    assert user.email == "ada@example.com"
    assert user.full_name == "Ada"
    client.auth.admin.get_user_by_id.assert_called_once_with(USER_ID)


def test_get_by_id_returns_none_for_deleted_user():
    client = stub_client(get_user_by_id=AuthApiError("User not found", 404, "user_not_found"))

    assert AuthUserRepository(client).get_by_id(USER_ID) is None


def test_get_by_id_surfaces_other_provider_failures():
    client = stub_client(get_user_by_id=AuthApiError("Database error", 500, "unexpected_failure"))

    with pytest.raises(RemoteError) as exc_info:
        AuthUserRepository(client).get_by_id(USER_ID)

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Database error"


def test_update_metadata_sends_full_metadata():
    client = MagicMock()
    metadata = {"full_name": "Ada", "description": None}
    client.auth.admin.update_user_by_id.return_value = SimpleNamespace(
        user=SimpleNamespace(id=USER_ID, email="ada@example.com", user_metadata=metadata)
    )

    user = AuthUserRepository(client).update_metadata(USER_ID, metadata)

    client.auth.admin.update_user_by_id.assert_called_once_with(
        USER_ID, {"user_metadata": metadata}
    )
    assert user.user_metadata == metadata

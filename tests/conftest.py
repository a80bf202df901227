import os
import time

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.core import dependencies
from app.core.errors import RemoteError
from app.main import app
from app.models.user import AuthUser

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]
USER_ID = "6f1d2a4e-8c3b-4e57-9a10-2b7c5d9e0f11"


class FakeUserRepository:
    """In-memory stand-in for the Supabase Auth admin API."""

    def __init__(self):
        self.users: dict[str, AuthUser] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_update: str | None = None

    def add(self, user_id: str = USER_ID, email: str = "ada@example.com", **metadata):
        self.users[user_id] = AuthUser(id=user_id, email=email, user_metadata=metadata)
        return self.users[user_id]

    def get_by_id(self, user_id: str) -> AuthUser | None:
        self.calls.append(("get_by_id", user_id))
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    def update_metadata(self, user_id: str, metadata: dict) -> AuthUser:
        self.calls.append(("update_metadata", user_id))
        if self.fail_update:
            raise RemoteError(self.fail_update)
        self.users[user_id].user_metadata = dict(metadata)
        return self.users[user_id].model_copy(deep=True)


class FakeBucket:
    """In-memory stand-in for one Supabase Storage bucket."""

    def __init__(self, name: str):
        self.name = name
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.calls: list[tuple] = []
        self.fail_upload: str | None = None
        self.fail_remove: str | None = None

    def upload(self, path, file_bytes, content_type, upsert=False):
        self.calls.append(("upload", path, upsert))
        if self.fail_upload:
            raise RemoteError(self.fail_upload)
        if path in self.objects and not upsert:
            raise RemoteError("The resource already exists")
        self.objects[path] = file_bytes
        self.content_types[path] = content_type

    def get_public_url(self, path):
        self.calls.append(("get_public_url", path))
        return f"https://test-project.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def list_names(self, search):
        self.calls.append(("list", search))
        return [name for name in self.objects if search in name]

    def remove(self, paths):
        self.calls.append(("remove", tuple(paths)))
        if self.fail_remove:
            raise RemoteError(self.fail_remove)
        for path in paths:
            self.objects.pop(path, None)


class FakeTextModel:
    def __init__(self, reply: str = "Generated text"):
        self.reply = reply
        self.prompts: list[str] = []
        self.error: Exception | None = None

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class FakeVisionModel:
    def __init__(self, chunks=("# Summary\n", "Section one.\n", "Section two.\n")):
        self.chunks = list(chunks)
        self.requests: list[tuple[str, bytes]] = []
        self.error: Exception | None = None

    def stream_pdf(self, instruction: str, pdf_data: bytes):
        self.requests.append((instruction, pdf_data))
        if self.error:
            raise self.error
        yield from self.chunks


def make_token(sub: str | None = USER_ID, expires_in: int = 3600, secret: str = JWT_SECRET) -> str:
    claims = {"email": "ada@example.com", "aud": "authenticated", "exp": int(time.time()) + expires_in}
    if sub is not None:
        claims["sub"] = sub
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(sub: str = USER_ID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(sub)}"}


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def avatars():
    return FakeBucket("avatars")


@pytest.fixture
def pdfs():
    return FakeBucket("pdfs")


@pytest.fixture
def text_model():
    return FakeTextModel()


@pytest.fixture
def vision_model():
    return FakeVisionModel()


@pytest.fixture
def client(user_repo, avatars, pdfs, text_model, vision_model):
    app.dependency_overrides[dependencies.get_user_repository] = lambda: user_repo
    app.dependency_overrides[dependencies.get_avatar_bucket] = lambda: avatars
    app.dependency_overrides[dependencies.get_pdf_bucket] = lambda: pdfs
    app.dependency_overrides[dependencies.get_text_model] = lambda: text_model
    app.dependency_overrides[dependencies.get_vision_model] = lambda: vision_model
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

# app/services/profile_service.py
import logging
import os

from app.core.errors import BadInput, RemoteError, UploadError
from app.core.storage_utils import StorageBucket
from app.models.user import (
    AVATAR_URL_KEY,
    DESCRIPTION_KEY,
    FULL_NAME_KEY,
    AuthUser,
)
from app.repositories.user_repo import AuthUserRepository
from app.schemas.profile import AvatarRead, ProfileRead, ProfileUpdate, SuccessResponse

logger = logging.getLogger(__name__)


# --- Avatar config ---

ALLOWED_AVATAR_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

# Extensions an avatar object may carry; anything else falls back to the
# content-type extension.
AVATAR_EXTENSIONS: frozenset[str] = frozenset(
    {"jpg", "jpeg", "png", "webp", "gif"}
)

# Maps ProfileUpdate fields to auth user_metadata keys.
METADATA_KEYS: dict[str, str] = {
    "full_name": FULL_NAME_KEY,
    "description": DESCRIPTION_KEY,
    "avatar_url": AVATAR_URL_KEY,
}


class ProfileService:
    """
    Profile & avatar lifecycle on top of Supabase Auth + Storage.

    Responsibilities:
      - project auth user_metadata into a profile
      - apply tri-state profile edits without wiping omitted fields
      - avatar upload/delete orchestration (deterministic path per user)

    Every workflow stops at the first failing remote call. Nothing is
    retried or rolled back: an avatar uploaded before a failed metadata
    write stays in the bucket.
    """

    def __init__(
        self,
        repo: AuthUserRepository,
        avatars: StorageBucket,
        max_avatar_bytes: int = 5 * 1024 * 1024,
    ):
        self.repo = repo
        self.avatars = avatars
        self.max_avatar_bytes = max_avatar_bytes

    # ----- Helpers -----

    @staticmethod
    def avatar_path(user_id: str, ext: str) -> str:
        """
        Deterministic avatar object path so re-uploads overwrite.

        Path pattern (inside the avatars bucket):
            <user_id>.<ext>
        """
        return f"{user_id}.{ext}"

    def _avatar_extension(
        self, filename: str | None, content_type: str | None, size: int
    ) -> str:
        if content_type not in ALLOWED_AVATAR_CONTENT_TYPES:
            raise BadInput("Unsupported image type. Allowed: JPEG, PNG, WEBP, GIF.")

        if size == 0:
            raise BadInput("Uploaded file is empty")

        if size > self.max_avatar_bytes:
            raise BadInput(
                f"Image too large (max {self.max_avatar_bytes // (1024 * 1024)}MB)."
            )

        ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
        if ext in AVATAR_EXTENSIONS:
            return ext
        return ALLOWED_AVATAR_CONTENT_TYPES[content_type]

    def _own_avatar_urls(self, user_id: str) -> set[str]:
        return {
            self.avatars.get_public_url(self.avatar_path(user_id, ext))
            for ext in AVATAR_EXTENSIONS
        }

    # ----- Profile -----

    def get_profile(self, current_user: AuthUser) -> ProfileRead:
        """Project the current auth user into a profile snapshot."""
        return ProfileRead(
            id=current_user.id,
            email=current_user.email,
            full_name=current_user.full_name,
            description=current_user.description,
            avatar_url=current_user.avatar_url,
        )

    def update_profile(
        self, current_user: AuthUser, payload: ProfileUpdate
    ) -> SuccessResponse:
        """
        Apply a profile edit in one metadata write.

        Only fields present in the payload change; an explicit null
        clears the field. The provider receives the full resulting
        metadata, not a sparse patch.

        A non-null avatar_url must point at the caller's own object in
        the avatars bucket.
        """
        if payload.avatar_url is not None and (
            payload.avatar_url not in self._own_avatar_urls(current_user.id)
        ):
            raise BadInput("avatar_url must reference your uploaded avatar")

        changes = {
            METADATA_KEYS[field]: getattr(payload, field)
            for field in payload.model_fields_set
        }
        if not changes:
            return SuccessResponse()

        metadata = {**current_user.user_metadata, **changes}
        logger.info(
            f"Updating profile of {current_user.id}: {', '.join(sorted(changes))}"
        )
        updated = self.repo.update_metadata(current_user.id, metadata)
        # Keep the request-scoped user in sync with what the provider stored.
        current_user.user_metadata = updated.user_metadata
        return SuccessResponse()

    # ----- Avatar -----

    def upload_avatar(
        self,
        current_user: AuthUser,
        filename: str | None,
        content_type: str | None,
        file_bytes: bytes,
    ) -> AvatarRead:
        """
        Upload or replace the user's avatar.

        Steps:
          1. derive <user_id>.<ext>
          2. upload with upsert
          3. resolve the public URL
          4. store the URL in the profile

        Raises:
            BadInput: unsupported type / empty / too large (no remote call).
            UploadError: storage rejected the upload (nothing else attempted).
            RemoteError: metadata write failed after a successful upload.
        """
        ext = self._avatar_extension(filename, content_type, len(file_bytes))
        path = self.avatar_path(current_user.id, ext)

        logger.info(f"Uploading avatar to {self.avatars.name}/{path}")
        try:
            self.avatars.upload(path, file_bytes, content_type, upsert=True)
        except RemoteError as exc:
            raise UploadError(exc.message) from exc

        public_url = self.avatars.get_public_url(path)
        self.update_profile(current_user, ProfileUpdate(avatar_url=public_url))
        return AvatarRead(avatar_url=public_url)

    def delete_avatar(self, current_user: AuthUser) -> SuccessResponse:
        """
        Remove every avatar object of the user and clear avatar_url.

        No-op when the profile has no avatar. Objects are matched by
        "name contains user id", which also sweeps files left by older
        naming schemes or a previous upload with another extension.
        """
        if not current_user.avatar_url:
            return SuccessResponse()

        names = self.avatars.list_names(search=current_user.id)
        if names:
            logger.info(f"Removing {len(names)} avatar object(s) of {current_user.id}")
            self.avatars.remove(names)

        return self.update_profile(current_user, ProfileUpdate(avatar_url=None))

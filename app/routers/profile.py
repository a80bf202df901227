# app/routers/profile.py
from fastapi import APIRouter, Depends, File, UploadFile

from app.core.auth import require_auth
from app.core.config import get_settings
from app.core.dependencies import get_avatar_bucket, get_user_repository
from app.core.storage_utils import StorageBucket
from app.models.user import AuthUser
from app.repositories.user_repo import AuthUserRepository
from app.schemas.profile import AvatarRead, ProfileRead, ProfileUpdate, SuccessResponse
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


def get_profile_service(
    repo: AuthUserRepository = Depends(get_user_repository),
    avatars: StorageBucket = Depends(get_avatar_bucket),
) -> ProfileService:
    return ProfileService(repo, avatars, get_settings().MAX_AVATAR_BYTES)


@router.get("", response_model=ProfileRead)
def read_profile(
    current_user: AuthUser = Depends(require_auth),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires valid Supabase JWT.
    """
    return service.get_profile(current_user)


@router.patch("", response_model=SuccessResponse)
def update_profile(
    payload: ProfileUpdate,
    current_user: AuthUser = Depends(require_auth),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Edit full_name / description / avatar_url.

    Omitted fields are kept, null clears a field.
    """
    return service.update_profile(current_user, payload)


@router.post(
    "/avatar",
    response_model=AvatarRead,
    summary="Upload or replace the user's avatar",
)
def upload_avatar(
    file: UploadFile = File(...),
    current_user: AuthUser = Depends(require_auth),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Upload a new avatar and store its public URL in the profile.

    - Accepts JPEG, PNG, WEBP, GIF.
    - Overwrites the previous avatar stored under the same extension.
    """
    file_bytes = file.file.read()
    return service.upload_avatar(
        current_user,
        filename=file.filename,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )


@router.delete("/avatar", response_model=SuccessResponse)
def delete_avatar(
    current_user: AuthUser = Depends(require_auth),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Delete the user's avatar objects and clear avatar_url.

    Succeeds without doing anything when no avatar is set.
    """
    return service.delete_avatar(current_user)

"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentPrincipal
from api.v1.dependencies import get_github_client, get_profile_service
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpsert,
    RepositoryListResponse,
    RepositoryResponse,
    SocialLinksResponse,
    UserSummary,
)
from core.rate_limit import limiter
from domain.entities.profile import ProfileWithUser
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profile", tags=["profile"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Profile not found"}}


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
    responses=_NOT_FOUND,
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_own_profile(
    request: Request,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile, with their name and avatar."""
    item = await service.get_own(principal)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update own profile",
    responses={422: {"model": ErrorResponse, "description": "Missing status or skills"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Create the profile on first call, update it afterwards.

    `skills` is a comma-separated list. Optional fields that are omitted are
    left unchanged.
    """
    item = await service.upsert(principal, **body.model_dump())
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Public listing of every profile."""
    items = await service.get_all()
    data = [_build_profile_response(item) for item in items]
    return ProfileListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get profile by user ID",
    responses=_NOT_FOUND,
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Public profile lookup. Malformed ids answer 404 like unknown ones."""
    item = await service.get_by_user_id(user_id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete own profile and account",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the authenticated user's profile and user record."""
    await service.delete_own(principal)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add experience",
    responses=_NOT_FOUND,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add a work history entry. Newest entries come first."""
    item = await service.add_experience(principal, **body.model_dump())
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.delete(
    "/experience/{entry_id}",
    response_model=ProfileDetailResponse,
    summary="Remove experience",
    responses={404: {"model": ErrorResponse, "description": "Profile or entry not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    entry_id: str,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry from the authenticated user's profile."""
    item = await service.remove_experience(principal, entry_id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add education",
    responses=_NOT_FOUND,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an education entry. Newest entries come first."""
    item = await service.add_education(principal, **body.model_dump())
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.delete(
    "/education/{entry_id}",
    response_model=ProfileDetailResponse,
    summary="Remove education",
    responses={404: {"model": ErrorResponse, "description": "Profile or entry not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    entry_id: str,
    principal: CurrentPrincipal,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry from the authenticated user's profile."""
    item = await service.remove_education(principal, entry_id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.get(
    "/github/{username}",
    response_model=RepositoryListResponse,
    summary="Get GitHub repositories",
    responses={
        404: {"model": ErrorResponse, "description": "No GitHub profile found"},
        502: {"model": ErrorResponse, "description": "GitHub unreachable"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    client: GitHubClient = Depends(get_github_client),
) -> RepositoryListResponse:
    """Public passthrough listing a GitHub user's first public repositories."""
    repos = await client.fetch(username)
    return RepositoryListResponse(data=[RepositoryResponse(**r.as_dict()) for r in repos])


def _build_profile_response(item: ProfileWithUser) -> ProfileResponse:
    profile, user = item.profile, item.user
    return ProfileResponse(
        id=profile.id,
        user=UserSummary(id=user.id, name=user.name, avatar=user.avatar) if user else None,
        status=profile.status,
        skills=profile.skills,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.githubusername,
        social=SocialLinksResponse(**profile.social.as_dict()),
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.experience
        ],
        education=[
            EducationResponse(
                id=e.id,
                school=e.school,
                degree=e.degree,
                fieldofstudy=e.fieldofstudy,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.education
        ],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )

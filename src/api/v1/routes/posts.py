"""Post API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentPrincipal
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    LikeListResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import limiter
from domain.entities.post import Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

_POST_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Post not found"}}


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={201: {"description": "Post created successfully"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post. The author's current name and avatar are copied onto it."""
    post = await service.create(principal, body.text)
    return PostDetailResponse(data=_build_post_response(post))


@router.get(
    "",
    response_model=PostListResponse,
    summary="List all posts",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get every post, newest first."""
    posts = await service.get_all()
    data = [_build_post_response(p) for p in posts]
    return PostListResponse(data=data, meta={"total": len(data)})


@router.put(
    "/like/{post_id}",
    response_model=LikeListResponse,
    summary="Like a post",
    responses={
        **_POST_NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Post already liked"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: str,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Like a post. Returns the post's likes, newest first."""
    likes = await service.like(principal, post_id)
    return LikeListResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.put(
    "/unlike/{post_id}",
    response_model=LikeListResponse,
    summary="Unlike a post",
    responses={
        **_POST_NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Post has not yet been liked"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: str,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Remove the caller's like from a post."""
    likes = await service.unlike(principal, post_id)
    return LikeListResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.post(
    "/comment/{post_id}",
    response_model=CommentListResponse,
    summary="Comment on a post",
    responses=_POST_NOT_FOUND,
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: str,
    body: CommentCreate,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Add a comment. Returns the post's comments, newest first."""
    comments = await service.add_comment(principal, post_id, body.text)
    return CommentListResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=CommentListResponse,
    summary="Delete a comment",
    responses={
        403: {"model": ErrorResponse, "description": "Not the comment's author"},
        404: {"model": ErrorResponse, "description": "Post or comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: str,
    comment_id: str,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> CommentListResponse:
    """Delete one of the caller's own comments."""
    comments = await service.delete_comment(principal, post_id, comment_id)
    return CommentListResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses=_POST_NOT_FOUND,
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: str,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a single post. Malformed ids answer 404 like unknown ones."""
    post = await service.get(post_id)
    return PostDetailResponse(data=_build_post_response(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        **_POST_NOT_FOUND,
        403: {"model": ErrorResponse, "description": "Not the post's author"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: str,
    principal: CurrentPrincipal,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    await service.delete(principal, post_id)
    return MessageResponse(message="Post removed")


def _build_post_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=[LikeResponse.model_validate(like) for like in post.likes],
        comments=[CommentResponse.model_validate(c) for c in post.comments],
        date=post.date,
    )

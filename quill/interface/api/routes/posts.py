"""Post routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Request, status

from quill.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    PostItem,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from quill.domain.service import IdentityService
from quill.interface.api.auth import optional_principal, require_principal
from quill.interface.api.forms import read_submission
from quill.interface.api.schemas import ApiResponse, PagedResponse

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


@router.post(
    "", response_model=ApiResponse[PostItem], status_code=status.HTTP_201_CREATED
)
async def create_post(
    request: Request,
    create_post_use_case: FromDishka[CreatePostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[PostItem]:
    """Create a new post.

    Accepts multipart/form-data (with an optional `coverImage` file) or JSON.
    Requires authentication.

    Args:
        request: Raw request carrying the submission
        create_post_use_case: Create post use case from DI
        identity_service: Identity service from DI
        authorization: Bearer token header

    Returns:
        Created post
    """
    principal = await require_principal(identity_service, authorization)
    fields, cover_upload = await read_submission(request)

    result = await create_post_use_case.execute(
        CreatePostRequest(
            principal=principal, fields=fields, cover_upload=cover_upload
        )
    )
    return ApiResponse(message=result.message, data=result.post)


@router.get("", response_model=PagedResponse[list[PostItem]])
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    identity_service: FromDishka[IdentityService],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    category: Optional[str] = Query(default=None),
    tag: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    authorization: Optional[str] = Header(default=None),
) -> PagedResponse[list[PostItem]]:
    """List posts newest first.

    Drafts are only included for admins.

    Args:
        list_posts_use_case: List posts use case from DI
        identity_service: Identity service from DI
        page: Page number, starting at 1
        limit: Page size
        category: Category id or slug filter
        tag: Tag id or slug filter
        search: Case-insensitive substring of title or content
        authorization: Optional bearer token header

    Returns:
        One page of posts with paging metadata
    """
    principal = await optional_principal(identity_service, authorization)
    result = await list_posts_use_case.execute(
        ListPostsRequest(
            page=page,
            limit=limit,
            category=category,
            tag=tag,
            search=search,
            principal=principal,
        )
    )
    return PagedResponse(
        data=result.posts,
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.current_page,
    )


@router.get("/{slug}", response_model=ApiResponse[PostItem])
async def get_post(
    slug: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[PostItem]:
    """Get a post by slug.

    Drafts are only visible to their author and admins; premium posts
    require a subscription.

    Args:
        slug: Post slug
        get_post_use_case: Get post use case from DI
        identity_service: Identity service from DI
        authorization: Optional bearer token header

    Returns:
        The post
    """
    principal = await optional_principal(identity_service, authorization)
    result = await get_post_use_case.execute(
        GetPostRequest(slug=slug, principal=principal)
    )
    return ApiResponse(data=result.post)


@router.put("/{post_id}", response_model=ApiResponse[PostItem])
async def update_post(
    post_id: str,
    request: Request,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[PostItem]:
    """Update a post. Only supplied fields change.

    Only the post author or an admin can edit.

    Args:
        post_id: Post UUID
        request: Raw request carrying the submission
        update_post_use_case: Update post use case from DI
        identity_service: Identity service from DI
        authorization: Bearer token header

    Returns:
        Updated post
    """
    principal = await require_principal(identity_service, authorization)
    fields, cover_upload = await read_submission(request)

    result = await update_post_use_case.execute(
        UpdatePostRequest(
            post_id=post_id,
            principal=principal,
            fields=fields,
            cover_upload=cover_upload,
        )
    )
    return ApiResponse(message=result.message, data=result.post)


@router.delete("/{post_id}", response_model=ApiResponse[None])
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[None]:
    """Delete a post. Only the post author or an admin can delete."""
    principal = await require_principal(identity_service, authorization)
    result = await delete_post_use_case.execute(
        DeletePostRequest(post_id=post_id, principal=principal)
    )
    return ApiResponse(message=result.message)

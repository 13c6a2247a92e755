"""
Category Handler

Read endpoints are public; writes are admin only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from media_platform.api.dependencies import AdminUser
from media_platform.api.dependencies.services import get_category_service
from media_platform.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdate,
)
from media_platform.schemas.common import MessageResponse
from media_platform.services.category_service import CategoryService


router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    parent_id: Optional[int] = Query(None, ge=1, description="Only direct children of this category"),
    category_service: CategoryService = Depends(get_category_service),
):
    return await category_service.list_categories(parent_id=parent_id)


@router.get("/{category_id}", response_model=CategoryDetailResponse)
async def get_category(
    category_id: int,
    category_service: CategoryService = Depends(get_category_service),
):
    """Category with its direct children."""
    category, children = await category_service.get_with_children(category_id)
    detail = CategoryDetailResponse.model_validate(category)
    detail.children = [CategoryResponse.model_validate(c) for c in children]
    return detail


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    data: CategoryCreate,
    _admin: AdminUser,
    category_service: CategoryService = Depends(get_category_service),
):
    """
    Raises:
        409: Name already used
        400: Parent does not exist
    """
    return await category_service.create_category(
        name=data.name,
        description=data.description,
        parent_id=data.parent_id,
    )


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    changes: CategoryUpdate,
    _admin: AdminUser,
    category_service: CategoryService = Depends(get_category_service),
):
    """
    Partial update. Sending `"parent_id": null` moves the category to the top
    level; an explicit null name is ignored.
    """
    values = changes.model_dump(exclude_unset=True)
    if values.get("name") is None:
        values.pop("name", None)
    return await category_service.update_category(category_id, values)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    _admin: AdminUser,
    category_service: CategoryService = Depends(get_category_service),
):
    """Deletes the category and its content; child categories become top level."""
    await category_service.delete_category(category_id)
    return MessageResponse(message="Category deleted successfully")

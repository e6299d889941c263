from typing import List
from uuid import UUID

from tortoise.functions import Count

from optistore.core.errors import ConflictError, NotFoundError
from optistore.models.inventory import Category
from optistore.schemas.inventory import CategoryCreate, CategoryUpdate


async def list_categories(company_id: UUID) -> List[Category]:
    return await Category.filter(company_id=company_id).annotate(item_count=Count("items")).order_by("name")


async def get_category(company_id: UUID, category_id: UUID) -> Category:
    category = await (
        Category.filter(id=category_id, company_id=company_id).annotate(item_count=Count("items")).first()
    )
    if not category:
        raise NotFoundError("Category not found")
    return category


async def _ensure_unique_name(company_id: UUID, name: str, exclude_id: UUID = None) -> None:
    query = Category.filter(company_id=company_id, name=name)
    if exclude_id:
        query = query.exclude(id=exclude_id)
    if await query.exists():
        raise ConflictError("Category with this name already exists")


async def create_category(company_id: UUID, data: CategoryCreate) -> Category:
    name = data.name.strip()
    await _ensure_unique_name(company_id, name)
    return await Category.create(company_id=company_id, name=name, type=data.type)


async def update_category(company_id: UUID, category_id: UUID, data: CategoryUpdate) -> Category:
    category = await Category.get_or_none(id=category_id, company_id=company_id)
    if not category:
        raise NotFoundError("Category not found")

    name = data.name.strip()
    await _ensure_unique_name(company_id, name, exclude_id=category_id)
    category.name = name
    # Only touch type when the client sent it; null or "" clears it
    if "type" in data.model_fields_set:
        category.type = data.type
    await category.save()
    return category


async def delete_category(company_id: UUID, category_id: UUID) -> None:
    category = await get_category(company_id, category_id)
    if category.item_count > 0:
        raise ConflictError("Cannot delete category with existing inventory items")
    await category.delete()

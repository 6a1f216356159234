from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.schemas.category import CategoryRecord
from app.services import categories as category_service


router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryRecord])
async def list_categories(session: AsyncSession = Depends(get_session)):
	return await category_service.list_categories(session)


@router.post("", response_model=CategoryRecord, status_code=status.HTTP_201_CREATED)
async def create_category(data: Any = Body(None), session: AsyncSession = Depends(get_session)):
	return await category_service.create_category(session, data)


@router.patch("/{category_id}", response_model=CategoryRecord)
async def rename_category(category_id: int, data: Any = Body(None), session: AsyncSession = Depends(get_session)):
	return await category_service.rename_category(session, category_id, data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, session: AsyncSession = Depends(get_session)):
	await category_service.delete_category(session, category_id)
	return Response(status_code=status.HTTP_204_NO_CONTENT)

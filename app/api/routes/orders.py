from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.schemas.order import OrderRecord
from app.services import orders as order_service


router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderRecord])
async def list_orders(page: int = Query(1), session: AsyncSession = Depends(get_session)):
	return await order_service.list_orders(session, page=page)


@router.get("/{order_id}", response_model=OrderRecord)
async def show_order(order_id: int, session: AsyncSession = Depends(get_session)):
	return await order_service.get_order(session, order_id)


@router.post("", response_model=OrderRecord, status_code=status.HTTP_201_CREATED)
async def create_order(data: Any = Body(None), session: AsyncSession = Depends(get_session)):
	return await order_service.create_order(session, data)

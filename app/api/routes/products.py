from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.schemas.product import ProductPage, ProductRecord
from app.services import products as product_service


router = APIRouter(prefix="/products", tags=["products"])


def expects_json(request: Request) -> bool:
	"""True when the caller wants a structured acknowledgment instead of a redirect."""
	accept = request.headers.get("accept", "")
	requested_with = request.headers.get("x-requested-with", "")
	return "application/json" in accept.lower() or requested_with.lower() == "xmlhttprequest"


@router.get("", response_model=ProductPage)
async def list_products(
	column: str = Query("id"),
	order: str = Query("asc"),
	query: str | None = Query(None),
	page: int = Query(1),
	session: AsyncSession = Depends(get_session),
):
	return await product_service.list_products(session, column=column, order=order, query=query, page=page)


@router.get("/{product_id}", response_model=ProductRecord)
async def show_product(product_id: int, session: AsyncSession = Depends(get_session)):
	return await product_service.get_product(session, product_id)


@router.post("", response_model=ProductRecord, status_code=status.HTTP_201_CREATED)
async def create_product(data: Any = Body(None), session: AsyncSession = Depends(get_session)):
	return await product_service.create_product(session, data)


@router.api_route("/{product_id}", methods=["PATCH", "PUT"])
async def update_product(product_id: int, data: Any = Body(None), session: AsyncSession = Depends(get_session)):
	product = await product_service.update_product(session, product_id, data)
	return {"message": "Product updated successfully.", "product": product.model_dump(mode="json")}


@router.put("/{product_id}/details", response_model=ProductRecord)
async def set_product_details(product_id: int, data: Any = Body(None), session: AsyncSession = Depends(get_session)):
	return await product_service.set_product_details(session, product_id, data)


@router.delete("/{product_id}")
async def delete_product(product_id: int, request: Request, session: AsyncSession = Depends(get_session)):
	await product_service.delete_product(session, product_id)
	if expects_json(request):
		return {"message": "Product deleted successfully."}
	return RedirectResponse(url=str(request.url_for("list_products")), status_code=status.HTTP_303_SEE_OTHER)

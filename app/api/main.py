from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import NotFoundError, SortColumnError, ValidationError
from app.core.logging import setup_logging
from app import models  # noqa: F401  registers every table on Base.metadata
from app.api.routes.categories import router as categories_router
from app.api.routes.orders import router as orders_router
from app.api.routes.products import router as products_router


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
	return JSONResponse(
		status_code=422,
		content={"message": "The given data was invalid.", "errors": exc.errors},
	)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	# query/path parameters that FastAPI itself failed to coerce
	errors: dict[str, str] = {}
	for error in exc.errors():
		loc = [str(part) for part in error["loc"] if part not in ("query", "path", "body")]
		errors.setdefault(".".join(loc) or "input", error["msg"])
	return JSONResponse(status_code=422, content={"message": "The given data was invalid.", "errors": errors})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
	return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": f"{exc.entity} not found."})


async def sort_column_handler(request: Request, exc: SortColumnError) -> JSONResponse:
	return JSONResponse(
		status_code=status.HTTP_400_BAD_REQUEST,
		content={"message": "Unsupported sort column.", "errors": {"column": str(exc)}},
	)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
	logger.exception("Store failure on {} {}", request.method, request.url.path)
	return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": "Internal server error"})


@asynccontextmanager
async def lifespan(app: FastAPI):
	setup_logging()
	logger.info("Catalog API started")
	yield


def create_app() -> FastAPI:
	app = FastAPI(title="Product Catalog API", version="1.0.0", lifespan=lifespan)
	app.add_exception_handler(ValidationError, validation_error_handler)
	app.add_exception_handler(RequestValidationError, request_validation_handler)
	app.add_exception_handler(NotFoundError, not_found_handler)
	app.add_exception_handler(SortColumnError, sort_column_handler)
	app.add_exception_handler(SQLAlchemyError, store_error_handler)
	app.include_router(products_router)
	app.include_router(categories_router)
	app.include_router(orders_router)
	return app


app = create_app()

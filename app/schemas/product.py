import math
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationInfo, computed_field, field_validator
from pydantic_core import PydanticCustomError


ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Price = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]
Stock = Annotated[int, Field(ge=0)]
Manufacturer = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]


def _blank_to_none(value: Any) -> Any:
	if isinstance(value, str) and not value.strip():
		return None
	return value


def _float_as_text(value: Any) -> Any:
	# JSON numbers arrive as floats; go through repr so 49.99 keeps two places
	if isinstance(value, float):
		return repr(value)
	return value


class ProductCreate(BaseModel):
	name: ProductName
	description: str | None = None
	price: Price
	stock: Stock
	category_id: int

	@field_validator("description", mode="before")
	@classmethod
	def _blank_description(cls, value: Any) -> Any:
		return _blank_to_none(value)

	@field_validator("price", mode="before")
	@classmethod
	def _price_text(cls, value: Any) -> Any:
		return _float_as_text(value)


class ProductUpdate(BaseModel):
	"""Any subset of the product fields; only the ones sent are applied."""

	name: ProductName | None = None
	description: str | None = None
	price: Price | None = None
	stock: Stock | None = None
	category_id: int | None = None

	@field_validator("description", mode="before")
	@classmethod
	def _blank_description(cls, value: Any) -> Any:
		return _blank_to_none(value)

	@field_validator("name", "price", "stock", "category_id", mode="before")
	@classmethod
	def _not_null(cls, value: Any, info: ValidationInfo) -> Any:
		# a field that is sent must carry a value; only description may be cleared
		if value is None:
			raise PydanticCustomError("missing", "The {field} field is required.", {"field": info.field_name.replace("_", " ")})
		return value

	@field_validator("price", mode="before")
	@classmethod
	def _price_text(cls, value: Any) -> Any:
		return _float_as_text(value)

	def changes(self) -> dict[str, Any]:
		return self.model_dump(exclude_unset=True)


class ProductDetailsIn(BaseModel):
	specifications: str | None = None
	manufacturer: Manufacturer | None = None

	@field_validator("specifications", "manufacturer", mode="before")
	@classmethod
	def _blank(cls, value: Any) -> Any:
		return _blank_to_none(value)


class ProductRecord(BaseModel):
	id: int
	name: str
	description: str | None
	price: Decimal
	stock: int
	category_id: int | None
	category_name: str | None = None
	specifications: str | None = None
	manufacturer: str | None = None


class ProductPage(BaseModel):
	model_config = ConfigDict(frozen=True)

	items: list[ProductRecord]
	total: int
	page: int
	page_size: int

	@computed_field  # type: ignore[prop-decorator]
	@property
	def last_page(self) -> int:
		return max(1, math.ceil(self.total / self.page_size))

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


class OrderItemIn(BaseModel):
	product_id: int
	quantity: Annotated[int, Field(ge=1)] = 1


class OrderCreate(BaseModel):
	customer_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
	items: Annotated[list[OrderItemIn], Field(min_length=1)]


class OrderItemRecord(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	product_id: int
	quantity: int
	price: Decimal


class OrderRecord(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	customer_name: str
	total_amount: Decimal
	created_at: datetime
	items: list[OrderItemRecord]

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints


CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=128)]


class CategoryIn(BaseModel):
	name: CategoryName


class CategoryRecord(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	name: str

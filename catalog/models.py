# catalog/models.py
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: float = Field(ge=0)
    category: str
    in_stock: bool = Field(default=True, alias="inStock")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

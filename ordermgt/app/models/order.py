# ordermgt/app/models/order.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Order(BaseModel):
    """A stored order. Instances are frozen; updates produce a new document."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="ID", description="Client-assigned order id (immutable).")
    name: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description")

    def merged(self, changes: "OrderChanges") -> "Order":
        """Copy Name/Description from `changes`; the id never changes."""
        update: Dict[str, Any] = {}
        if changes.name is not None:
            update["name"] = changes.name
        if changes.description is not None:
            update["description"] = changes.description
        return self.model_copy(update=update)

    def to_wire(self) -> Dict[str, Any]:
        return {"Order": self.model_dump(by_alias=True)}


class OrderChanges(BaseModel):
    """Inner `Order` object of a request body. `ID` is optional here (Update ignores it)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="ID")
    name: Optional[str] = Field(default=None, alias="Name")
    description: Optional[str] = Field(default=None, alias="Description")

    def to_order(self) -> Order:
        if self.id is None:
            raise ValueError("Order.ID is required")
        return Order(id=self.id, name=self.name or "", description=self.description or "")


class OrderRequest(BaseModel):
    """Request envelope: {"Order": {...}}."""
    model_config = ConfigDict(extra="ignore")

    order: OrderChanges = Field(..., alias="Order")

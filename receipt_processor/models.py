from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import JSON, Column
from sqlmodel import Field as SQLField
from sqlmodel import SQLModel


class Item(BaseModel):
    """A single line entry on a receipt."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    short_description: str = Field(
        alias="shortDescription", description="Short product description"
    )
    price: str = Field(description="Item price as decimal text, e.g. '6.49'")


class Receipt(BaseModel):
    """A submitted purchase receipt as it travels over the wire.

    Amounts, dates and times are kept as text; they are only parsed when
    points are computed.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    retailer: str = Field(description="Retailer or store name")
    purchase_date: str = Field(
        alias="purchaseDate", description="Purchase date, e.g. '2022-01-01'"
    )
    purchase_time: str = Field(
        alias="purchaseTime", description="Purchase time in 24-hour form, e.g. '13:01'"
    )
    items: tuple[Item, ...] = Field(description="Purchased items, in receipt order")
    total: str = Field(description="Total amount paid as decimal text")


class ReceiptCreated(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int


class ReceiptRecord(SQLModel, table=True):
    """One persisted receipt document, keyed by its generated identifier."""

    __tablename__ = "receipts"

    id: str = SQLField(primary_key=True, description="Generated receipt identifier")
    retailer: str
    purchase_date: str
    purchase_time: str
    items: list[dict[str, Any]] = SQLField(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    total: str

    @classmethod
    def from_receipt(cls, receipt_id: str, receipt: Receipt) -> "ReceiptRecord":
        return cls(
            id=receipt_id,
            retailer=receipt.retailer,
            purchase_date=receipt.purchase_date,
            purchase_time=receipt.purchase_time,
            items=[item.model_dump(by_alias=True) for item in receipt.items],
            total=receipt.total,
        )

    def to_receipt(self) -> Receipt:
        return Receipt(
            retailer=self.retailer,
            purchase_date=self.purchase_date,
            purchase_time=self.purchase_time,
            items=tuple(Item.model_validate(item) for item in self.items),
            total=self.total,
        )

"""
Database Schemas for the Storefront

Each Pydantic model corresponds to one MongoDB collection.
Collection name is the lowercase of the class name.

- User -> "user"
- Category -> "category"
- Product -> "product"
- Cart -> "cart"
- Order -> "order"
- Rating -> "rating"
- Testimonial -> "testimonial"

These are the last line of validation before a write; a ValidationError raised
here is reported to the client as a 400.
"""
from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional

from bson.objectid import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

Role = Literal["admin", "customer", "deliveryPartner"]
Unit = Literal["kg", "g", "pcs"]
OrderStatus = Literal["pending", "shipped", "in-transit", "delivered"]


def _to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError("Cast to ObjectId failed")


PyObjectId = Annotated[ObjectId, BeforeValidator(_to_object_id)]


class Document(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, str_strip_whitespace=True)


class User(Document):
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    phoneNumber: str = Field(..., min_length=1, description="Login key, unique")
    address: str = Field(..., min_length=1)
    emailAddress: Optional[str] = Field(None, description="Unique when present, lowercase")
    password: str = Field(..., description="bcrypt hash")
    role: Role = "customer"
    totalPurchaseAmount: float = Field(0, ge=0)
    lastPurchaseDate: Optional[int] = Field(None, description="Epoch milliseconds")
    orders: List[PyObjectId] = Field(default_factory=list)


class Category(Document):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None


class Product(Document):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    images: List[str] = Field(..., min_length=1, description="At least one image is required")
    price: float = Field(..., ge=0)
    category: PyObjectId


class LineItem(Document):
    productId: PyObjectId
    quantity: float = Field(1, ge=1, le=10)
    price: float = Field(0, ge=0)
    unit: Unit = "kg"


class Cart(Document):
    userId: PyObjectId
    items: List[LineItem] = Field(..., min_length=1, max_length=10)


class Order(Document):
    userId: PyObjectId
    items: List[LineItem] = Field(..., min_length=1, max_length=10)
    address: str = Field(..., min_length=1)
    phoneNumber: str = Field(..., min_length=1)
    expectedDeliveryDate: datetime
    totalAmount: float = Field(0, ge=0)
    status: OrderStatus = "pending"


class Rating(Document):
    userId: PyObjectId
    productId: PyObjectId
    rating: float = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class Testimonial(Document):
    rating: float = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    images: List[str] = Field(default_factory=list)

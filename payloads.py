"""
Request payload builders.

Each entity has a Create model (also used for full replacement) and a Patch
model. The models forbid unknown keys, so the key set of a body must be a
subset of the entity's whitelist. build_payload() never returns a partially
valid payload: any rejected field rejects the whole body.
"""
import logging
from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Type, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationError,
    model_validator,
)

from schemas import OrderStatus, Role, Unit
from validators import (
    is_valid_object_id,
    to_date,
    to_non_negative_number,
    to_positive_number,
    to_rating,
)

log = logging.getLogger(__name__)

P = TypeVar("P", bound="Payload")


def _number(convert, reason: str):
    def validate(value: Any) -> float:
        parsed = convert(value)
        if parsed is None:
            raise ValueError(reason)
        return parsed

    return validate


def _object_id(value: str) -> str:
    if not is_valid_object_id(value):
        raise ValueError("not a valid identifier")
    return value


def _date(value: Any) -> datetime:
    parsed = to_date(value)
    if parsed is None:
        raise ValueError("not a valid date")
    return parsed


def _lower(value: str) -> str:
    return value.lower()


def _string_or_none(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) else None


def _clean_strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise ValueError("expected a list")
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _required_images(value: Any) -> List[str]:
    if not isinstance(value, list) or not value:
        raise ValueError("at least one image is required")
    images = _clean_strings(value)
    if not images:
        raise ValueError("at least one image is required")
    return images


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
OptionalText = Annotated[Optional[str], BeforeValidator(_string_or_none)]
ObjectIdStr = Annotated[NonEmptyStr, AfterValidator(_object_id)]
PositiveNumber = Annotated[float, BeforeValidator(_number(to_positive_number, "must be a number greater than 0"))]
NonNegativeNumber = Annotated[float, BeforeValidator(_number(to_non_negative_number, "must be a number >= 0"))]
RatingValue = Annotated[float, BeforeValidator(_number(to_rating, "must be a number between 1 and 5"))]
DateValue = Annotated[datetime, BeforeValidator(_date)]
ProductImages = Annotated[List[str], BeforeValidator(_required_images)]
ImageList = Annotated[List[str], BeforeValidator(_clean_strings)]


class Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PatchPayload(Payload):
    """Only supplied fields are validated and applied; nothing supplied is a rejection."""

    @model_validator(mode="after")
    def reject_empty(self):
        if not self.model_fields_set:
            raise ValueError("no updatable fields supplied")
        return self

    def to_changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def build_payload(model: Type[P], body: Any) -> Optional[P]:
    if not isinstance(body, dict):
        return None
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        log.debug("Rejected %s: %s", model.__name__, exc.errors())
        return None


# ----------------------- Auth -----------------------
class RegisterPayload(Payload):
    firstName: NonEmptyStr
    lastName: NonEmptyStr
    phoneNumber: NonEmptyStr
    address: NonEmptyStr
    password: NonEmptyStr
    emailAddress: Annotated[EmailStr, AfterValidator(_lower)] = None
    role: Role = None

    @model_validator(mode="before")
    @classmethod
    def strip_email(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("emailAddress"), str):
            data = {**data, "emailAddress": data["emailAddress"].strip()}
        return data


class LoginPayload(Payload):
    phoneNumber: NonEmptyStr
    password: NonEmptyStr


# ----------------------- Categories -----------------------
class CategoryCreate(Payload):
    name: NonEmptyStr
    description: OptionalText = None
    image: OptionalText = None


class CategoryPatch(PatchPayload):
    name: NonEmptyStr = None
    description: TrimmedStr = None
    image: TrimmedStr = None


# ----------------------- Products -----------------------
class ProductCreate(Payload):
    name: NonEmptyStr
    description: OptionalText = None
    images: ProductImages
    price: NonNegativeNumber
    category: NonEmptyStr


class ProductPatch(PatchPayload):
    name: NonEmptyStr = None
    description: TrimmedStr = None
    images: ProductImages = None
    price: NonNegativeNumber = None
    category: NonEmptyStr = None


# ----------------------- Carts & Orders -----------------------
class LineItemPayload(Payload):
    productId: ObjectIdStr
    quantity: PositiveNumber
    price: NonNegativeNumber
    unit: Unit


Items = Annotated[List[LineItemPayload], Field(min_length=1)]


class CartCreate(Payload):
    userId: ObjectIdStr
    items: Items


class CartPatch(PatchPayload):
    items: Items = None


class OrderCreate(Payload):
    userId: ObjectIdStr
    items: Items
    address: NonEmptyStr
    phoneNumber: NonEmptyStr
    expectedDeliveryDate: DateValue
    status: OrderStatus = None


class OrderPatch(PatchPayload):
    items: Items = None
    address: NonEmptyStr = None
    phoneNumber: NonEmptyStr = None
    expectedDeliveryDate: DateValue = None
    status: OrderStatus = None


# ----------------------- Ratings -----------------------
class RatingCreate(Payload):
    userId: ObjectIdStr
    productId: ObjectIdStr
    rating: RatingValue
    comment: TrimmedStr = None


class RatingPatch(PatchPayload):
    rating: RatingValue = None
    comment: TrimmedStr = None


# ----------------------- Testimonials -----------------------
class TestimonialCreate(Payload):
    rating: RatingValue
    comment: NonEmptyStr
    images: ImageList = None


class TestimonialPatch(PatchPayload):
    rating: RatingValue = None
    comment: NonEmptyStr = None
    images: ImageList = None

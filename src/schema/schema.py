from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl


class RequestCodeInput(BaseModel):
    """Start of the login flow: which inbox to send a code to."""

    email: EmailStr = Field(description="Owner email address.", examples=["owner@example.com"])


class VerifyCodeInput(BaseModel):
    email: EmailStr = Field(description="Email the code was sent to.", examples=["owner@example.com"])
    code: str = Field(
        description="Six-digit verification code from the email.",
        min_length=6,
        max_length=6,
        examples=["123456"],
    )


class SuccessResponse(BaseModel):
    success: bool = True


class VerifyCodeResponse(SuccessResponse):
    user_id: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: Optional[str] = None
    country: Optional[str] = None
    verified: bool


class ProfileUpdateInput(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    country: Optional[str] = Field(default=None, min_length=1)


class RestaurantCreateInput(BaseModel):
    name: str = Field(min_length=1, examples=["The Italian Bistro"])
    location: str = Field(min_length=1, examples=["New York, NY, USA"])


class RestaurantUpdateInput(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: str
    user_id: str
    created_at: datetime
    updated_at: datetime


class CategoryInput(BaseModel):
    name: str = Field(min_length=1, examples=["Appetizers"])


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    restaurant_id: str


class CategoryRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class DishCreateInput(BaseModel):
    name: str = Field(min_length=1)
    image: Optional[HttpUrl] = None
    description: Optional[str] = None
    price: Optional[str] = Field(default=None, examples=["$12.50"])
    spice_level: Optional[int] = Field(default=None, ge=0, le=3)
    category_ids: Optional[list[str]] = None


class DishUpdateInput(BaseModel):
    """
    Partial dish update.

    Only fields present in the request body are applied. image,
    description, price and spice_level may be sent as null to clear them;
    category_ids, when present, replaces the dish's category links.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    image: Optional[HttpUrl] = None
    description: Optional[str] = None
    price: Optional[str] = None
    spice_level: Optional[int] = Field(default=None, ge=0, le=3)
    category_ids: Optional[list[str]] = None


class DishResponse(BaseModel):
    id: str
    name: str
    image: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    spice_level: Optional[int] = None
    restaurant_id: str
    categories: list[CategoryRef] = []
    created_at: datetime
    updated_at: datetime


class PublicRestaurant(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: str


class PublicDish(BaseModel):
    id: str
    name: str
    image: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    spice_level: Optional[int] = None
    categories: list[CategoryRef] = []


class PublicCategory(BaseModel):
    id: str
    name: str
    dishes: list[PublicDish] = []


class PublicMenuResponse(BaseModel):
    restaurant: PublicRestaurant
    categories: list[PublicCategory]


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing procedure."""

    error: str
    error_code: str
    message: str

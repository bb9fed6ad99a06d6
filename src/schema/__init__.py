from .schema import (
    RequestCodeInput,
    VerifyCodeInput,
    SuccessResponse,
    VerifyCodeResponse,
    UserResponse,
    ProfileUpdateInput,
    RestaurantCreateInput,
    RestaurantUpdateInput,
    RestaurantResponse,
    CategoryInput,
    CategoryResponse,
    CategoryRef,
    DishCreateInput,
    DishUpdateInput,
    DishResponse,
    PublicRestaurant,
    PublicDish,
    PublicCategory,
    PublicMenuResponse,
    ErrorResponse,
)

__all__ = [
    "RequestCodeInput",
    "VerifyCodeInput",
    "SuccessResponse",
    "VerifyCodeResponse",
    "UserResponse",
    "ProfileUpdateInput",
    "RestaurantCreateInput",
    "RestaurantUpdateInput",
    "RestaurantResponse",
    "CategoryInput",
    "CategoryResponse",
    "CategoryRef",
    "DishCreateInput",
    "DishUpdateInput",
    "DishResponse",
    "PublicRestaurant",
    "PublicDish",
    "PublicCategory",
    "PublicMenuResponse",
    "ErrorResponse",
]

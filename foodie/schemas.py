"""
Pydantic Schemas for Request/Response Validation

Two wire formats meet here:
- FoodieOS menu items, which use terse field names (h, dp, ct, ...).
  MenuItem keeps readable attribute names and maps them with aliases,
  so responses and sync payloads go out in the FoodieOS format.
- QR payloads, which use camelCase (tableId, outletId, ...).

Everything else is this service's own snake_case envelope.

Version: 1.0.0
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from foodie.core.config import get_settings


# =============================================================================
# ENUMS
# =============================================================================

class CheckoutStageEnum(str, Enum):
    BROWSING = "browsing"
    CART = "cart"
    SUMMARY = "summary"
    PHONE_VERIFICATION = "phone_verification"
    PAYMENT_METHOD = "payment_method"
    UPI_APP = "upi_app"
    SUCCESS = "success"


class PaymentMethodEnum(str, Enum):
    UPI = "upi"
    PAY_LATER = "paylater"


class UpiAppEnum(str, Enum):
    GPAY = "gpay"
    PHONEPE = "phonepe"
    PAYTM = "paytm"
    OTHER = "other"


# =============================================================================
# MENU
# =============================================================================

class AddOn(BaseModel):
    """Optional priced modifier of a menu item."""
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    price: int = Field(default=0, ge=0, description="Price in paise")


class MenuItem(BaseModel):
    """
    A dish as served by FoodieOS.

    Prices are integers in paise; divide by 100 only for display.
    Unknown FoodieOS fields are kept so they survive a sync round trip.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str = Field(..., alias="h")
    price: int = Field(..., alias="dp", description="Price in paise")
    category: str = Field(default="", alias="ct")
    veg: bool = False
    weight: Optional[str] = Field(default="", alias="wt")
    energy: Optional[str] = Field(default="", alias="en")
    image: Optional[str] = Field(default="", alias="i")
    best_seller: bool = Field(default=False, alias="bestSeller")
    add_ons: list[AddOn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("addOns", "addOnItems", "add_ons"),
        serialization_alias="addOns",
    )
    combo_items: list[Any] = Field(default_factory=list, alias="comboItems")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @field_validator("add_ons", "combo_items", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return v or []

    def to_wire(self) -> dict[str, Any]:
        """Dump in FoodieOS field names."""
        return self.model_dump(by_alias=True)


class MenuItemCreate(BaseModel):
    """Admin create/update payload. A missing id means 'create'."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    name: str = Field(..., alias="h", max_length=120)
    price: int = Field(..., alias="dp")
    category: str = Field(default="MAIN COURSE", alias="ct")
    veg: bool = True
    weight: str = Field(default="", alias="wt")
    energy: str = Field(default="", alias="en")
    image: str = Field(default="", alias="i")
    best_seller: bool = Field(default=False, alias="bestSeller")
    add_ons: list[AddOn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("addOns", "addOnItems", "add_ons"),
        serialization_alias="addOns",
    )

    @field_validator("id", mode="before")
    @classmethod
    def blank_id_as_none(cls, v: Any) -> Optional[str]:
        if v is None or str(v).strip() == "":
            return None
        return str(v).strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Item name is required")
        return v.strip()

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Price must be greater than 0")
        return v

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        categories = get_settings().menu_categories_list
        value = v.strip().upper()
        if value not in categories:
            raise ValueError(f"Category must be one of: {categories}")
        return value


class FoodRequest(BaseModel):
    """Body of POST /api/food."""
    outlet_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("outletId", "outlet_id"))
    category: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None
    city: Optional[str] = None
    state: Optional[str] = None
    search: str = ""
    categories: list[str] = Field(default_factory=list)
    veg: bool = False
    non_veg: bool = Field(default=False, validation_alias=AliasChoices("nonVeg", "non_veg"))
    bestseller: bool = False


class MenuResponse(BaseModel):
    success: bool
    outlet_id: str
    items: list[MenuItem] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    error: Optional[str] = None


class MenuListResponse(BaseModel):
    """Admin menu list (GET /api/menu)."""
    items: list[MenuItem]


class SaveMenuItemResponse(BaseModel):
    success: bool
    id: str
    is_new: bool


# =============================================================================
# QR
# =============================================================================

class QRCodeData(BaseModel):
    """Identifiers carried by a table / outlet QR code."""
    model_config = ConfigDict(populate_by_name=True)

    outlet_id: str = Field(..., alias="outletId")
    table_id: Optional[str] = Field(default=None, alias="tableId")
    outlet_name: Optional[str] = Field(default=None, alias="outletName")
    table_number: Optional[str] = Field(default=None, alias="tableNumber")
    food_category: Optional[str] = Field(default=None, alias="foodCategory")


class LocationContext(BaseModel):
    lat: float
    lon: float
    city: Optional[str] = None
    state: Optional[str] = None


class QRResolveRequest(BaseModel):
    payload: str = Field(..., min_length=1)
    lat: Optional[float] = None
    lon: Optional[float] = None


class QRResolveResponse(BaseModel):
    success: bool = True
    data: QRCodeData
    location: Optional[LocationContext] = None
    redirect_url: str


# =============================================================================
# CART
# =============================================================================

class CartAddRequest(BaseModel):
    item_id: str = Field(..., validation_alias=AliasChoices("itemId", "item_id"))
    add_ons: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("addOns", "add_ons"),
    )


class CartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    key: str
    item_id: str
    name: str
    price: int
    quantity: int
    image: Optional[str] = None
    add_ons: list[str] = Field(default_factory=list)
    line_total: int


class CartResponse(BaseModel):
    lines: list[CartLineResponse]
    total_price: int
    total_items: int
    formatted_total: str


# =============================================================================
# CHECKOUT
# =============================================================================

class SendOtpRequest(BaseModel):
    phone: str


class VerifyOtpRequest(BaseModel):
    otp: str


class PaymentMethodRequest(BaseModel):
    method: PaymentMethodEnum


class UpiAppRequest(BaseModel):
    app: UpiAppEnum


class DeliveryEstimate(BaseModel):
    time: str
    day: str


class CheckoutResponse(BaseModel):
    stage: CheckoutStageEnum
    phone: Optional[str] = None
    otp_sent: bool = False
    payment_method: Optional[PaymentMethodEnum] = None
    upi_app: Optional[UpiAppEnum] = None
    deep_link: Optional[str] = None
    cart: CartResponse
    delivery_estimate: Optional[DeliveryEstimate] = None


# =============================================================================
# ADMIN
# =============================================================================

class LoginRequest(BaseModel):
    password: str


class AuthCheckResponse(BaseModel):
    authenticated: bool
    error: Optional[str] = None


class SyncRequest(BaseModel):
    outlet_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("outletId", "outlet_id"))
    cat: Optional[list[str]] = None


class SyncResponse(BaseModel):
    success: bool
    message: str
    synced_items: int = 0


class UploadResponse(BaseModel):
    url: str
    public_id: Optional[str] = None


# =============================================================================
# GENERIC
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[Any] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    foodie_service: str
    geo_service: str
    media_service: str
    menu_store: str
    timestamp: datetime

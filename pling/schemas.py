# pling/schemas.py
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MIN_PURCHASE_YEAR = 2000

Category = Literal["Adult", "Kids"]
Condition = Literal["Fair", "Good", "Like New"]
GearTransmission = Literal["Non-Geared", "Single Speed", "Multi-Speed"]
FrameMaterial = Literal["Steel", "Aluminum", "Carbon Fiber", "Titanium"]
Suspension = Literal["None", "Front", "Full"]
CycleType = Literal["Mountain", "Road", "Hybrid", "BMX", "Other"]
WheelSize = Literal["12", "16", "20", "24", "26", "27.5", "29", "Other"]
ListingStatus = Literal["available", "sold", "reserved", "unlisted"]


def current_year() -> int:
    return datetime.now().year


def _check_purchase_year(value):
    if value is not None and not MIN_PURCHASE_YEAR <= value <= current_year():
        raise ValueError(f"purchase year must be between {MIN_PURCHASE_YEAR} and {current_year()}")
    return value


PurchaseYear = Annotated[int, AfterValidator(_check_purchase_year)]


class SortBy(str, Enum):
    RELEVANT = "relevant"
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"

    @classmethod
    def _missing_(cls, value):
        if value == "relevance":
            return cls.RELEVANT
        return None


class GroupBy(str, Enum):
    DEVICE = "device"
    PLATFORM = "platform"
    BROWSER = "browser"
    PATH = "path"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- listings ---

class ListingBase(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category: Category
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    purchase_year: PurchaseYear
    price: int = Field(..., ge=0)
    gear_transmission: GearTransmission
    frame_material: FrameMaterial
    suspension: Suspension
    condition: Condition
    cycle_type: CycleType
    wheel_size: WheelSize
    has_receipt: bool = False
    additional_details: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    is_premium: bool = False


class ListingCreate(ListingBase):
    seller_id: int


class ListingOut(ListingBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    seller_id: int
    # stored rows are not re-checked against the moving year window
    purchase_year: int
    status: ListingStatus
    views: int
    inquiries: int
    created_at: Optional[datetime] = None


class ListingStatusUpdate(CamelModel):
    status: ListingStatus


class InquiryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    message: str = Field(..., min_length=1, max_length=2000)


class ListingFilter(CamelModel):
    brand: Optional[str] = None
    purchase_year: Optional[PurchaseYear] = Field(None, alias="yearOfPurchase")
    condition: Optional[Condition] = None
    gear_transmission: Optional[GearTransmission] = None
    frame_material: Optional[FrameMaterial] = None
    suspension: Optional[Suspension] = None
    wheel_size: Optional[WheelSize] = None
    min_price: Optional[int] = Field(None, ge=0)
    max_price: Optional[int] = Field(None, ge=0)
    category: Optional[Category] = None
    is_premium: Optional[bool] = None
    seller_id: Optional[int] = None
    ids: List[int] = Field(default_factory=list)
    status: Optional[ListingStatus] = None
    city: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("ids", mode="before")
    @classmethod
    def _ids_default(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _price_range(self):
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("minPrice must not exceed maxPrice")
        return self


# --- analytics ---

class VisitCreate(CamelModel):
    path: str = Field(..., min_length=1, max_length=2048)
    device_type: Optional[str] = None
    platform: Optional[str] = None
    browser: Optional[str] = None
    user_id: Optional[int] = None
    session_id: str = Field(..., min_length=1, max_length=255)


class VisitOut(VisitCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: Optional[datetime] = None


class VisitCount(BaseModel):
    dimension: str
    count: int


# --- faqs ---

class FAQCreate(CamelModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    order: int = 0
    is_active: bool = True


class FAQUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    order: Optional[int] = None
    is_active: Optional[bool] = None


class FAQOut(FAQCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- seo ---

class SeoMeta(CamelModel):
    title: str
    description: str
    canonical_url: str
    image_url: Optional[str] = None
    type: str = "product"
    schema_: dict = Field(default_factory=dict, alias="schema")

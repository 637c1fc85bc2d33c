"""Pydantic models representing property listing domain objects."""

from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PropertyStatus = Literal["active", "pending", "sold"]
PropertyType = Literal["farm", "ranch", "estate", "land"]
SortOption = Literal["price-high", "price-low", "newest", "acreage"]

PROPERTY_TYPES = ("farm", "ranch", "estate", "land")


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Agent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    title: str = ""
    phone: str = ""
    email: str = ""
    photo: str = ""
    bio: str = ""
    specialties: List[str] = Field(default_factory=list)
    license_number: str = ""


class EquestrianAmenities(BaseModel):
    """Horse-keeping facilities of a listing; every field has a non-null default."""

    model_config = ConfigDict(frozen=True)

    stalls: int = Field(0, ge=0)
    has_indoor_arena: bool = False
    has_outdoor_arena: bool = False
    pastures: int = Field(0, ge=0)
    pasture_acreage: float = Field(0.0, ge=0)
    has_tack_room: bool = False
    has_feed_room: bool = False
    has_wash_rack: bool = False
    has_round_pen: bool = False
    fencing_type: List[str] = Field(default_factory=list)
    water_source: List[str] = Field(default_factory=list)
    barn_square_feet: Optional[int] = None
    additional_structures: List[str] = Field(default_factory=list)


class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    mls_number: str
    title: str
    address: str
    city: str
    state: str
    zip_code: str = ""
    price: int = Field(0, ge=0)
    acreage: float = Field(0.0, ge=0)
    bedrooms: int = 0
    bathrooms: float = 0
    square_feet: int = 0
    year_built: int = 0
    description: str = ""
    images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    equestrian_amenities: EquestrianAmenities = Field(default_factory=EquestrianAmenities)
    listing_agent: Agent
    status: PropertyStatus = "active"
    list_date: date
    property_type: PropertyType = "farm"
    coordinates: Optional[Coordinates] = None


class PropertyFilters(BaseModel):
    """Search request; every field is optional and absent means unconstrained."""

    min_price: Optional[int] = Field(None, ge=0)
    max_price: Optional[int] = Field(None, ge=0)
    min_acreage: Optional[float] = Field(None, ge=0)
    max_acreage: Optional[float] = Field(None, ge=0)
    min_stalls: Optional[int] = Field(None, ge=0)
    city: Optional[str] = None
    has_indoor_arena: Optional[bool] = None
    has_outdoor_arena: Optional[bool] = None
    property_type: Optional[PropertyType] = None


"""Pydantic request schemas for the Catalogue API.

Update requests declare every field optional and are dumped with
``exclude_unset=True``; a non-nullable column keeps a non-optional type so an
explicit ``null`` is rejected instead of reaching the database.
"""

from pydantic import BaseModel, Field

from catalogue.product.product import MetalFinish
from shared.api import LowercaseStr, RequiredStr, TrimmedStr

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Kundan Jhumka",
                    "category": "earrings",
                    "price": 2499,
                    "mrp": 3299,
                    "stock_qty": 12,
                    "metal_finish": "gold",
                    "images": ["/images/products/kundan-jhumka-1.jpg"],
                    "tags": ["festive", "bridal"],
                    "slug": "kundan-jhumka",
                }
            ]
        },
    }

    product_id: RequiredStr | None = Field(None, max_length=32)
    sku: RequiredStr | None = Field(None, max_length=50)
    title: RequiredStr = Field(..., max_length=255)
    category: LowercaseStr = Field(..., max_length=100)
    price: float = Field(..., ge=0)
    mrp: float | None = Field(None, ge=0)
    cost_price: float | None = Field(None, ge=0)
    stock_qty: int = Field(0, ge=0)
    weight: float | None = Field(None, ge=0)
    metal_finish: MetalFinish | None = None
    images: list[str] = Field(default_factory=list)
    description: str = ""
    short_description: str | None = Field(None, max_length=500)
    tags: list[str] = Field(default_factory=list)
    dimensions: dict | None = None
    shipping_class: str | None = Field(None, max_length=50)
    slug: RequiredStr = Field(..., max_length=200)
    is_new: bool = False
    size_options: list[str] | None = None


class UpdateProductRequest(BaseModel):
    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {"examples": [{"price": 2199, "stock_qty": 4, "is_new": True}]},
    }

    sku: RequiredStr = Field(None, max_length=50)
    title: RequiredStr = Field(None, max_length=255)
    category: LowercaseStr = Field(None, max_length=100)
    price: float = Field(None, ge=0)
    mrp: float | None = Field(None, ge=0)
    cost_price: float | None = Field(None, ge=0)
    stock_qty: int = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    metal_finish: MetalFinish | None = None
    images: list[str] = None
    description: str = None
    short_description: str | None = Field(None, max_length=500)
    tags: list[str] = None
    dimensions: dict | None = None
    shipping_class: str | None = Field(None, max_length=50)
    slug: RequiredStr = Field(None, max_length=200)
    is_new: bool = None
    size_options: list[str] | None = None


# --- Category Request Schemas ---


class CategoryRequest(BaseModel):
    name: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"name": "Necklaces"}]}}


# --- Collection Request Schemas ---


class CreateCollectionRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Festive Edit",
                    "slug": "festive-edit",
                    "description": "Statement pieces for the season",
                    "product_ids": ["va-01", "va-04"],
                    "is_featured": True,
                }
            ]
        }
    }

    name: RequiredStr = Field(..., max_length=200)
    slug: RequiredStr = Field(..., max_length=200)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    product_ids: list[str] = Field(default_factory=list)
    is_featured: bool = False
    is_active: bool = True
    display_order: int = 0


class UpdateCollectionRequest(BaseModel):
    name: RequiredStr = Field(None, max_length=200)
    slug: RequiredStr = Field(None, max_length=200)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    product_ids: list[str] = None
    is_featured: bool = None
    is_active: bool = None
    display_order: int = None


# --- Carousel Request Schemas ---


class CreateSlideRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "image_url": "/images/carousel/diwali.jpg",
                    "title": "Diwali Collection",
                    "subtitle": "Handcrafted for the festival of lights",
                    "link_url": "/collections/festive-edit",
                    "link_text": "Shop now",
                }
            ]
        }
    }

    image_url: RequiredStr = Field(..., max_length=500)
    title: TrimmedStr | None = Field(None, max_length=200)
    subtitle: TrimmedStr | None = Field(None, max_length=300)
    link_url: str | None = Field(None, max_length=500)
    link_text: str | None = Field(None, max_length=100)
    order: int | None = None
    is_active: bool = True


class UpdateSlideRequest(BaseModel):
    image_url: RequiredStr = Field(None, max_length=500)
    title: TrimmedStr | None = Field(None, max_length=200)
    subtitle: TrimmedStr | None = Field(None, max_length=300)
    link_url: str | None = Field(None, max_length=500)
    link_text: str | None = Field(None, max_length=100)
    order: int = None
    is_active: bool = None


class SlideOrder(BaseModel):
    id: str
    order: int


class ReorderSlidesRequest(BaseModel):
    slides: list[SlideOrder]

    model_config = {
        "json_schema_extra": {
            "examples": [{"slides": [{"id": "slide-a", "order": 1}, {"id": "slide-b", "order": 2}]}]
        }
    }


# --- Site Settings Request Schemas ---


class UpdateSiteSettingsRequest(BaseModel):
    site_icon: RequiredStr = Field(None, max_length=500)
    site_logo: RequiredStr = Field(None, max_length=500)

    model_config = {"json_schema_extra": {"examples": [{"site_logo": "/images/logo-gold.png"}]}}

"""FastAPI routes for the Catalogue domain: products, categories, collections,
the home-page carousel and site settings."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from catalogue.api.schemas import (
    CategoryRequest,
    CreateCollectionRequest,
    CreateProductRequest,
    CreateSlideRequest,
    ReorderSlidesRequest,
    UpdateCollectionRequest,
    UpdateProductRequest,
    UpdateSiteSettingsRequest,
    UpdateSlideRequest,
)
from catalogue.carousel.management import create_slide, delete_slide, list_slides, reorder_slides, update_slide
from catalogue.category.management import add_category, delete_category, list_categories, rename_category
from catalogue.collection.management import (
    create_collection,
    delete_collection,
    list_all_collections,
    list_public_collections,
    update_collection,
)
from catalogue.product.management import create_product, delete_product, update_product
from catalogue.product.queries import (
    get_product_by_id,
    get_product_by_slug,
    has_purchased,
    list_products,
    product_suggestions,
)
from catalogue.settings.site_settings import get_site_settings, update_site_settings
from shared.auth import (
    Principal,
    PrincipalKind,
    get_optional_principal,
    require_admin,
    require_superuser,
)
from shared.database import get_session
from shared.exceptions import ValidationError


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("")
async def get_products(
    limit: int = Query(default=20, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    category: str | None = None,
    all: bool = False,
    session: Session = Depends(get_session),
):
    return list_products(session, limit=limit, offset=offset, category=category, include_all=all)


@product_router.get("/by-id/{product_id}")
async def get_product_by_product_id(product_id: str, session: Session = Depends(get_session)):
    return {"success": True, "product": get_product_by_id(session, product_id).to_dict()}


@product_router.get("/{slug}")
async def get_product(slug: str, session: Session = Depends(get_session)):
    return {"success": True, "product": get_product_by_slug(session, slug).to_dict()}


@product_router.get("/{slug}/suggestions")
async def get_suggestions(slug: str, session: Session = Depends(get_session)):
    return {"success": True, **product_suggestions(session, slug)}


@product_router.get("/{slug}/check-purchase")
async def check_purchase(
    slug: str,
    user_id: str | None = None,
    session: Session = Depends(get_session),
    principal: Principal | None = Depends(get_optional_principal),
):
    if principal is not None and principal.kind == PrincipalKind.CUSTOMER.value:
        user_id = principal.subject
    if not user_id:
        return {"success": True, "hasPurchased": False}
    return {"success": True, "hasPurchased": has_purchased(session, slug, user_id)}


admin_product_router = APIRouter(prefix="/api/admin/products", tags=["admin-products"])


@admin_product_router.get("")
async def get_admin_products(session: Session = Depends(get_session), staff: Principal = Depends(require_admin)):
    return {"success": True, **list_products(session, include_all=True)}


@admin_product_router.post("", status_code=201)
async def add_product(
    body: CreateProductRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    product = create_product(session, body.model_dump())
    return {"success": True, "product_id": product.id, "product": product.to_dict()}


@admin_product_router.get("/{product_id}")
async def get_admin_product(
    product_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    return {"success": True, "product": get_product_by_id(session, product_id).to_dict()}


@admin_product_router.put("/{product_id}")
async def edit_product(
    product_id: str,
    body: UpdateProductRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    product = update_product(session, product_id, body.model_dump(exclude_unset=True))
    return {"success": True, "product": product.to_dict()}


@admin_product_router.delete("/{product_id}")
async def remove_product(
    product_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    delete_product(session, product_id)
    return {"success": True, "message": "Product deleted successfully"}


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
category_router = APIRouter(prefix="/api/categories", tags=["categories"])


@category_router.get("")
async def get_categories(session: Session = Depends(get_session)):
    return {"success": True, "categories": list_categories(session)}


admin_category_router = APIRouter(prefix="/api/admin/categories", tags=["admin-categories"])


@admin_category_router.get("")
async def get_admin_categories(session: Session = Depends(get_session), staff: Principal = Depends(require_admin)):
    return {"success": True, "categories": list_categories(session)}


@admin_category_router.post("", status_code=201)
async def create_category(
    body: CategoryRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    return {"success": True, "categories": add_category(session, body.name)}


@admin_category_router.put("/{name}")
async def edit_category(
    name: str,
    body: CategoryRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    return {"success": True, "categories": rename_category(session, name, body.name)}


@admin_category_router.delete("/{name}")
async def remove_category(
    name: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    return {"success": True, "categories": delete_category(session, name)}


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------
collection_router = APIRouter(prefix="/api/collections", tags=["collections"])


@collection_router.get("")
async def get_collections(featured: bool = False, session: Session = Depends(get_session)):
    return {"success": True, "collections": list_public_collections(session, featured_only=featured)}


admin_collection_router = APIRouter(prefix="/api/admin/collections", tags=["admin-collections"])


@admin_collection_router.get("")
async def get_admin_collections(session: Session = Depends(get_session), staff: Principal = Depends(require_admin)):
    return {"success": True, "collections": [c.to_dict() for c in list_all_collections(session)]}


@admin_collection_router.post("", status_code=201)
async def add_collection(
    body: CreateCollectionRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    collection = create_collection(session, body.model_dump())
    return {"success": True, "collection": collection.to_dict()}


@admin_collection_router.put("/{collection_id}")
async def edit_collection(
    collection_id: str,
    body: UpdateCollectionRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    collection = update_collection(session, collection_id, body.model_dump(exclude_unset=True))
    return {"success": True, "collection": collection.to_dict()}


@admin_collection_router.delete("/{collection_id}")
async def remove_collection(
    collection_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    delete_collection(session, collection_id)
    return {"success": True, "message": "Collection deleted successfully"}


# ---------------------------------------------------------------------------
# Carousel
# ---------------------------------------------------------------------------
carousel_router = APIRouter(prefix="/api/carousel", tags=["carousel"])


@carousel_router.get("")
async def get_slides(all: bool = False, session: Session = Depends(get_session)):
    return {"success": True, "slides": list_slides(session, active_only=not all)}


admin_carousel_router = APIRouter(prefix="/api/admin/carousel", tags=["admin-carousel"])


@admin_carousel_router.get("")
async def get_admin_slides(session: Session = Depends(get_session), staff: Principal = Depends(require_admin)):
    return {"success": True, "slides": list_slides(session, active_only=False)}


@admin_carousel_router.post("", status_code=201)
async def add_slide(
    body: CreateSlideRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    slide = create_slide(session, body.model_dump())
    return {"success": True, "slide": slide.to_dict()}


@admin_carousel_router.put("/reorder")
async def reorder(
    body: ReorderSlidesRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    if not body.slides:
        raise ValidationError({"slides": ["Invalid action or missing parameters"]})
    reorder_slides(session, [entry.model_dump() for entry in body.slides])
    return {"success": True, "message": "Slides reordered successfully"}


@admin_carousel_router.put("/{slide_id}")
async def edit_slide(
    slide_id: str,
    body: UpdateSlideRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    slide = update_slide(session, slide_id, body.model_dump(exclude_unset=True))
    return {"success": True, "slide": slide.to_dict()}


@admin_carousel_router.delete("/{slide_id}")
async def remove_slide(
    slide_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    delete_slide(session, slide_id)
    return {"success": True, "message": "Slide deleted successfully"}


# ---------------------------------------------------------------------------
# Site settings
# ---------------------------------------------------------------------------
settings_router = APIRouter(prefix="/api/settings", tags=["settings"])


@settings_router.get("")
async def get_settings_view(session: Session = Depends(get_session)):
    return {"success": True, "settings": get_site_settings(session)}


admin_settings_router = APIRouter(prefix="/api/admin/settings", tags=["admin-settings"])


@admin_settings_router.put("")
async def edit_settings(
    body: UpdateSiteSettingsRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    settings = update_site_settings(session, body.model_dump(exclude_unset=True), staff.subject)
    return {"success": True, "settings": settings.to_dict()}

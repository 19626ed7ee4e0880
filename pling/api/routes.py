# pling/api/routes.py
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Query, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import crud, schemas, seo, services, settings, storage
from ..auth import require_admin
from ..db import get_db
from ..utils import logger, split_csv

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
site_router = APIRouter()


def _parse_enum(enum_cls, value: Optional[str], default, loc: str):
    if value is None or not value.strip():
        return default
    try:
        return enum_cls(value.strip())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise RequestValidationError([{
            "type": "enum",
            "loc": ("query", loc),
            "msg": f"Input should be one of: {allowed}",
            "input": value,
        }])


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _get_listing_or_404(db: Session, listing_id: int):
    obj = crud.get_listing(db, listing_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    return obj


@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/bicycles", response_model=List[schemas.ListingOut])
def listings(
    brand: str | None = Query(None),
    year_of_purchase: str | None = Query(None, alias="yearOfPurchase"),
    condition: str | None = Query(None),
    gear_transmission: str | None = Query(None, alias="gearTransmission"),
    frame_material: str | None = Query(None, alias="frameMaterial"),
    suspension: str | None = Query(None),
    wheel_size: str | None = Query(None, alias="wheelSize"),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    category: str | None = Query(None),
    is_premium: str | None = Query(None, alias="isPremium"),
    seller_id: str | None = Query(None, alias="sellerId"),
    ids: str | None = Query(None),
    status: str | None = Query(None),
    city: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=500),
    db: Session = Depends(get_db)
):
    try:
        filters = schemas.ListingFilter(
            brand=brand,
            purchase_year=year_of_purchase,
            condition=condition,
            gear_transmission=gear_transmission,
            frame_material=frame_material,
            suspension=suspension,
            wheel_size=wheel_size,
            min_price=min_price,
            max_price=max_price,
            category=category,
            is_premium=is_premium,
            seller_id=seller_id,
            ids=split_csv(ids),
            status=status,
            city=city,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))
    order = _parse_enum(schemas.SortBy, sort_by, schemas.SortBy.RELEVANT, "sortBy")
    return crud.list_listings(db, filters=filters, sort_by=order, skip=skip, limit=limit)


@router.post("/bicycles", response_model=schemas.ListingOut, status_code=201)
def create_listing(payload: schemas.ListingCreate, db: Session = Depends(get_db)):
    if not crud.get_user(db, payload.seller_id):
        raise HTTPException(status_code=400, detail="Unknown seller")
    return services.publish_listing(db, payload)


@router.get("/bicycles/{listing_id}", response_model=schemas.ListingOut)
def get_listing(listing_id: int, db: Session = Depends(get_db)):
    obj = crud.increment_views(db, listing_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    return obj


@router.patch("/bicycles/{listing_id}/status", response_model=schemas.ListingOut)
def update_listing_status(listing_id: int, payload: schemas.ListingStatusUpdate, db: Session = Depends(get_db)):
    obj = crud.update_listing_status(db, listing_id, payload.status)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    logger.info("Listing %s status -> %s", listing_id, payload.status)
    return obj


@router.post("/bicycles/{listing_id}/inquiries")
def create_inquiry(listing_id: int, payload: schemas.InquiryCreate, background_tasks: BackgroundTasks,
                   db: Session = Depends(get_db)):
    obj = crud.record_inquiry(db, listing_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    seller = crud.get_user(db, obj.seller_id)
    background_tasks.add_task(services.notify_inquiry, obj, seller, payload)
    return {"inquiries": obj.inquiries}


@router.get("/bicycles/{listing_id}/seo", response_model=schemas.SeoMeta)
def listing_seo(listing_id: int, db: Session = Depends(get_db)):
    obj = _get_listing_or_404(db, listing_id)
    return seo.listing_meta(obj, settings.SITE_URL)


@router.post("/upload")
async def upload_image(file: UploadFile = File(...)):
    try:
        url = await storage.save_image(file)
    except ValueError as e:
        logger.warning("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"url": url}


@router.post("/visits", response_model=schemas.VisitOut, status_code=201)
def record_visit(payload: schemas.VisitCreate, db: Session = Depends(get_db)):
    return crud.record_visit(db, payload.model_dump())


@router.get("/faqs", response_model=List[schemas.FAQOut])
def list_faqs(category: str | None = Query(None), db: Session = Depends(get_db)):
    return crud.list_faqs(db, category=category)


@admin_router.get("/analytics/visits", response_model=List[schemas.VisitCount])
def visit_analytics(
    group_by: str | None = Query(None, alias="groupBy"),
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db)
):
    # naive bounds are taken as UTC
    start_date, end_date = _as_utc(start_date), _as_utc(end_date)
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=422, detail="startDate must not be after endDate")
    dimension = _parse_enum(schemas.GroupBy, group_by, schemas.GroupBy.DEVICE, "groupBy")
    return crud.visit_analytics(db, start=start_date, end=end_date, group_by=dimension)


@admin_router.get("/faqs", response_model=List[schemas.FAQOut])
def list_all_faqs(category: str | None = Query(None), db: Session = Depends(get_db)):
    return crud.list_faqs(db, category=category, include_inactive=True)


@admin_router.post("/faqs", response_model=schemas.FAQOut, status_code=201)
def create_faq(payload: schemas.FAQCreate, db: Session = Depends(get_db)):
    obj = crud.create_faq(db, payload.model_dump())
    logger.info("Created FAQ %s", obj.id)
    return obj


@admin_router.patch("/faqs/{faq_id}", response_model=schemas.FAQOut)
def update_faq(faq_id: int, payload: schemas.FAQUpdate, db: Session = Depends(get_db)):
    # null fields are ignored, every FAQ column is required
    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    obj = crud.update_faq(db, faq_id, updates=updates)
    if not obj:
        raise HTTPException(status_code=404, detail="FAQ not found")
    logger.info("Updated FAQ %s", faq_id)
    return obj


@admin_router.delete("/faqs/{faq_id}")
def delete_faq(faq_id: int, db: Session = Depends(get_db)):
    ok = crud.delete_faq(db, faq_id)
    if not ok:
        raise HTTPException(status_code=404, detail="FAQ not found")
    logger.info("Deactivated FAQ %s", faq_id)
    return {"status": "deleted"}


router.include_router(admin_router)


@site_router.get("/sitemap.xml")
def sitemap(db: Session = Depends(get_db)):
    available = schemas.ListingFilter(status="available")
    listings = crud.list_listings(db, filters=available, sort_by=schemas.SortBy.NEWEST)
    return Response(content=seo.generate_sitemap(settings.SITE_URL, listings), media_type="application/xml")

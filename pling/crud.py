# pling/crud.py
"""Persistence helpers for listings, visits and FAQs.

Every function takes the request-scoped `Session` explicitly. Single-entity
lookups return `None` (or `False`) when the row does not exist; database
errors propagate to the caller untouched.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func, update
from sqlalchemy.orm import Session

from .models import FAQ, Listing, User, Visit
from .schemas import GroupBy, ListingCreate, ListingFilter, SortBy

UNKNOWN_DIMENSION = "Unknown"

# relevance has no scoring of its own and orders exactly like newest
_SORT_ORDER = {
    SortBy.RELEVANT: (Listing.created_at.desc(), Listing.id.desc()),
    SortBy.NEWEST: (Listing.created_at.desc(), Listing.id.desc()),
    SortBy.PRICE_ASC: (Listing.price.asc(), Listing.id.desc()),
    SortBy.PRICE_DESC: (Listing.price.desc(), Listing.id.desc()),
}

_GROUP_COLUMN = {
    GroupBy.DEVICE: Visit.device_type,
    GroupBy.PLATFORM: Visit.platform,
    GroupBy.BROWSER: Visit.browser,
    GroupBy.PATH: Visit.path,
}

# filter field -> listing column compared for equality
_EQUALITY_FILTERS = {
    "brand": Listing.brand,
    "purchase_year": Listing.purchase_year,
    "condition": Listing.condition,
    "gear_transmission": Listing.gear_transmission,
    "frame_material": Listing.frame_material,
    "suspension": Listing.suspension,
    "wheel_size": Listing.wheel_size,
    "category": Listing.category,
    "is_premium": Listing.is_premium,
    "seller_id": Listing.seller_id,
    "status": Listing.status,
}


# --- listings ---

def listing_query(db: Session, filters: Optional[ListingFilter] = None, sort_by: SortBy = SortBy.RELEVANT):
    """Build the listing query for a filter set and sort directive.

    Filters are ANDed together; fields left as None add no condition.
    """
    q = db.query(Listing)
    if filters is not None:
        conds = []
        for field, column in _EQUALITY_FILTERS.items():
            value = getattr(filters, field)
            if value is not None:
                conds.append(column == value)
        if filters.min_price is not None:
            conds.append(Listing.price >= filters.min_price)
        if filters.max_price is not None:
            conds.append(Listing.price <= filters.max_price)
        if filters.ids:
            conds.append(Listing.id.in_(filters.ids))
        if filters.city is not None:
            q = q.join(User, Listing.seller_id == User.id)
            conds.append(func.lower(User.city) == filters.city.strip().lower())
        if conds:
            q = q.filter(and_(*conds))
    return q.order_by(*_SORT_ORDER[sort_by])


def list_listings(db: Session, filters: Optional[ListingFilter] = None, sort_by: SortBy = SortBy.RELEVANT,
                  skip: int = 0, limit: Optional[int] = None) -> List[Listing]:
    q = listing_query(db, filters, sort_by)
    if skip:
        q = q.offset(skip)
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def create_listing(db: Session, data: ListingCreate) -> Listing:
    obj = Listing(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def get_listing(db: Session, listing_id: int) -> Optional[Listing]:
    return db.get(Listing, listing_id)


def update_listing_status(db: Session, listing_id: int, status: str) -> Optional[Listing]:
    obj = db.get(Listing, listing_id)
    if not obj:
        return None
    obj.status = status
    db.commit()
    db.refresh(obj)
    return obj


def _increment(db: Session, listing_id: int, column) -> Optional[Listing]:
    result = db.execute(
        update(Listing)
        .where(Listing.id == listing_id)
        .values({column: column + 1})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if not result.rowcount:
        return None
    obj = db.get(Listing, listing_id)
    db.refresh(obj)
    return obj


def increment_views(db: Session, listing_id: int) -> Optional[Listing]:
    return _increment(db, listing_id, Listing.views)


def record_inquiry(db: Session, listing_id: int) -> Optional[Listing]:
    return _increment(db, listing_id, Listing.inquiries)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


# --- visits ---

def record_visit(db: Session, data: Dict[str, Any]) -> Visit:
    obj = Visit(**data)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def visit_analytics(db: Session, start: Optional[datetime] = None, end: Optional[datetime] = None,
                    group_by: GroupBy = GroupBy.DEVICE) -> List[Dict[str, Any]]:
    """Count visits per value of `group_by` inside the inclusive [start, end] window."""
    column = _GROUP_COLUMN[group_by]
    q = db.query(column, func.count(Visit.id))
    if start is not None:
        q = q.filter(Visit.timestamp >= start)
    if end is not None:
        q = q.filter(Visit.timestamp <= end)
    # NULL, empty and a literal "Unknown" value share one bucket
    totals: Dict[str, int] = {}
    for value, count in q.group_by(column).all():
        label = value or UNKNOWN_DIMENSION
        totals[label] = totals.get(label, 0) + int(count)
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [{"dimension": label, "count": count} for label, count in ordered]


# --- faqs ---

def list_faqs(db: Session, category: Optional[str] = None, include_inactive: bool = False) -> List[FAQ]:
    q = db.query(FAQ)
    if category:
        q = q.filter(FAQ.category == category)
    if not include_inactive:
        q = q.filter(FAQ.is_active.is_(True))
    return q.order_by(FAQ.order, FAQ.id).all()


def create_faq(db: Session, data: Dict[str, Any]) -> FAQ:
    obj = FAQ(**data)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update_faq(db: Session, faq_id: int, updates: Dict[str, Any]) -> Optional[FAQ]:
    obj = db.get(FAQ, faq_id)
    if not obj:
        return None
    for k, v in updates.items():
        setattr(obj, k, v)
    obj.updated_at = func.now()
    db.commit()
    db.refresh(obj)
    return obj


def delete_faq(db: Session, faq_id: int) -> bool:
    obj = db.get(FAQ, faq_id)
    if not obj:
        return False
    obj.is_active = False
    obj.updated_at = func.now()
    db.commit()
    return True

# pling/services.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from . import crud, schemas, settings
from .mailer import EmailParams, send_email
from .models import Listing, User
from .utils import logger

def publish_listing(db: Session, payload: schemas.ListingCreate) -> Listing:
    # Basic normalization before the row is written
    data: Dict[str, Any] = payload.model_dump()
    for key in ("brand", "model"):
        data[key] = " ".join(data[key].split())
    details = (data.get("additional_details") or "").strip()
    data["additional_details"] = details or None
    seen = set()
    images = []
    for url in data.get("images") or []:
        url = url.strip()
        if url and url not in seen:
            seen.add(url)
            images.append(url)
    data["images"] = images
    obj = crud.create_listing(db, schemas.ListingCreate(**data))
    logger.info("Published listing %s (%s %s) for seller %s", obj.id, obj.brand, obj.model, obj.seller_id)
    return obj


def notify_inquiry(listing: Listing, seller: Optional[User], inquiry: schemas.InquiryCreate) -> bool:
    """Email the seller about a buyer's inquiry; False when it could not be sent."""
    if seller is None or not seller.email:
        logger.warning("Listing %s has no seller email, inquiry not forwarded", listing.id)
        return False
    url = f"{settings.SITE_URL}/bicycles/{listing.id}"
    text = (
        f"Hello {seller.first_name},\n\n"
        f"{inquiry.name} ({inquiry.email}) is interested in your {listing.brand} {listing.model}:\n\n"
        f"{inquiry.message}\n\n"
        f"View the listing: {url}"
    )
    return send_email(EmailParams(
        to=seller.email,
        subject=f"New inquiry for your {listing.brand} {listing.model} - Pling Bicycle Marketplace",
        text=text,
        template_id=settings.INQUIRY_TEMPLATE_ID,
        dynamic_template_data={"name": seller.first_name, "listingUrl": url},
    ))

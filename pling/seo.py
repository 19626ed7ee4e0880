# pling/seo.py
"""SEO metadata for listing pages and the sitemap."""
import re
import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from .models import Listing

SITE_NAME = "Pling"
CURRENCY = "INR"
DESCRIPTION_LIMIT = 160
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
STATIC_PAGES = ("/", "/kids-bicycles", "/premium-bicycles", "/faq")

_AVAILABILITY = {
    "available": "https://schema.org/InStock",
    "reserved": "https://schema.org/LimitedAvailability",
    "sold": "https://schema.org/SoldOut",
    "unlisted": "https://schema.org/Discontinued",
}


def plain_text(html: Optional[str]) -> str:
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ", strip=True)
    return re.sub(r"\s+", " ", text).strip()


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    cut = text[: limit - 1].rsplit(" ", 1)[0].rstrip(" ,.")
    return cut + "…"


def absolute_url(base_url: str, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def product_schema(listing: Listing, base_url: str) -> dict:
    canonical = absolute_url(base_url, f"/bicycles/{listing.id}")
    return {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": f"{listing.brand} {listing.model}",
        "brand": {"@type": "Brand", "name": listing.brand},
        "model": listing.model,
        "sku": str(listing.id),
        "category": f"{listing.category} {listing.cycle_type} Bicycle",
        "description": plain_text(listing.additional_details),
        "image": [absolute_url(base_url, img) for img in listing.images or []],
        "itemCondition": "https://schema.org/UsedCondition",
        "offers": {
            "@type": "Offer",
            "price": listing.price,
            "priceCurrency": CURRENCY,
            "availability": _AVAILABILITY.get(listing.status, _AVAILABILITY["available"]),
            "url": canonical,
        },
    }


def listing_meta(listing: Listing, base_url: str) -> dict:
    details = plain_text(listing.additional_details)
    description = (
        f"{listing.condition} {listing.cycle_type} bicycle. "
        f"{listing.brand} {listing.model}, {listing.purchase_year}. {details}"
    ).strip()
    images = listing.images or []
    return {
        "title": f"{listing.brand} {listing.model} - {listing.condition} {listing.cycle_type} Bicycle | {SITE_NAME}",
        "description": truncate(description),
        "canonical_url": absolute_url(base_url, f"/bicycles/{listing.id}"),
        "image_url": absolute_url(base_url, images[0]) if images else None,
        "type": "product",
        "schema": product_schema(listing, base_url),
    }


def generate_sitemap(base_url: str, listings: Iterable[Listing]) -> str:
    """Render a sitemaps.org document for the static pages and the given listings."""
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for page in STATIC_PAGES:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = absolute_url(base_url, page)
        ET.SubElement(url, "changefreq").text = "daily"
        ET.SubElement(url, "priority").text = "1.0" if page == "/" else "0.8"
    for listing in listings:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = absolute_url(base_url, f"/bicycles/{listing.id}")
        if listing.created_at is not None:
            ET.SubElement(url, "lastmod").text = listing.created_at.date().isoformat()
        ET.SubElement(url, "changefreq").text = "weekly"
        ET.SubElement(url, "priority").text = "0.9" if listing.is_premium else "0.6"
    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body

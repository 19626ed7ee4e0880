# pling/seed.py
"""Reset the database and load sample sellers, bicycles and FAQs.

Run from the project root with ``python -m pling.seed``.
"""
from sqlalchemy.orm import Session

from . import crud, schemas
from .db import Base, SessionLocal, engine
from .models import FAQ, Listing, User, Visit
from .services import publish_listing
from .utils import logger

USERS = [
    {
        "username": "certified_seller",
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@example.com",
        "mobile": "9876543210",
        "city": "Mumbai",
        "sub_city": "Andheri",
        "type": "certified",
    },
    {
        "username": "casual_seller",
        "first_name": "Jane",
        "last_name": "Smith",
        "email": "jane@example.com",
        "mobile": "9876543211",
        "city": "Mumbai",
        "sub_city": "Bandra",
        "type": "individual",
    },
]

BICYCLES = [
    ("certified_seller", {
        "category": "Adult", "brand": "Trek", "model": "Marlin 7", "purchase_year": 2022,
        "price": 85000, "gear_transmission": "Multi-Speed", "frame_material": "Aluminum",
        "suspension": "Front", "condition": "Like New", "cycle_type": "Mountain", "wheel_size": "29",
        "has_receipt": True, "is_premium": True,
        "additional_details": "Serviced last month, new tyres.",
        "images": ["https://images.unsplash.com/photo-1576435728678-68d0fbf94e91"],
    }),
    ("certified_seller", {
        "category": "Adult", "brand": "Specialized", "model": "Allez", "purchase_year": 2021,
        "price": 65000, "gear_transmission": "Multi-Speed", "frame_material": "Aluminum",
        "suspension": "None", "condition": "Good", "cycle_type": "Road", "wheel_size": "27.5",
        "has_receipt": True, "is_premium": True,
        "images": ["https://images.unsplash.com/photo-1485965120184-e220f721d03e"],
    }),
    ("casual_seller", {
        "category": "Adult", "brand": "Giant", "model": "Escape 3", "purchase_year": 2020,
        "price": 40000, "gear_transmission": "Multi-Speed", "frame_material": "Aluminum",
        "suspension": "None", "condition": "Good", "cycle_type": "Hybrid", "wheel_size": "27.5",
        "has_receipt": False,
        "images": ["https://images.unsplash.com/photo-1532298229144-0ec0c57515c7"],
    }),
    ("casual_seller", {
        "category": "Kids", "brand": "Other", "model": "Hero Blast", "purchase_year": 2023,
        "price": 8000, "gear_transmission": "Non-Geared", "frame_material": "Steel",
        "suspension": "None", "condition": "Fair", "cycle_type": "BMX", "wheel_size": "20",
        "has_receipt": False,
        "additional_details": "<p>Outgrown, minor <b>scratches</b>.</p>",
        "images": ["https://images.unsplash.com/photo-1558981806-ec527fa84c39"],
    }),
]

FAQS = [
    ("Buying", "How do I contact a seller?",
     "Open the bicycle page and send an inquiry; the seller receives it by email."),
    ("Buying", "Are bicycles inspected?",
     "Listings from certified sellers are checked before they are marked premium."),
    ("Selling", "How do I mark my bicycle as sold?",
     "Go to your profile, find the listing and change its status to sold."),
]


def seed(db: Session):
    # clear existing data, children first
    for model in (Visit, Listing, FAQ, User):
        db.query(model).delete()
    db.commit()
    logger.info("Cleared existing data")

    sellers = {}
    for data in USERS:
        user = User(**data)
        db.add(user)
        db.flush()
        sellers[user.username] = user.id
    db.commit()
    logger.info("Inserted %d sample users", len(sellers))

    for username, data in BICYCLES:
        publish_listing(db, schemas.ListingCreate(seller_id=sellers[username], **data))
    logger.info("Inserted %d sample bicycles", len(BICYCLES))

    for order, (category, question, answer) in enumerate(FAQS, start=1):
        crud.create_faq(db, {"category": category, "question": question, "answer": answer, "order": order})
    logger.info("Inserted %d FAQs", len(FAQS))


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()

"""Database seeding helpers."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from scoop_pos.core.config import settings
from scoop_pos.models.menu import MenuItem

logger = logging.getLogger(__name__)

DEFAULT_MENU: list[tuple[str, str, str, str]] = [
    ("Classic Vanilla Bean", "Ice Cream Scoops", "3.50", "Creamy vanilla ice cream, a timeless favorite"),
    ("Chocolate Fudge Blast", "Ice Cream Scoops", "6.25", "Rich chocolate ice cream with fudge chunks"),
    ("Strawberry Swirl Sundae", "Sundaes", "8.50", "Fresh strawberry ice cream with syrup swirls"),
    ("Mint Chip Delight", "Ice Cream Scoops", "3.75", "Refreshing mint ice cream with chocolate chips"),
    ("Caramel Crunch Cone", "Ice Cream Scoops", "4.50", "Caramel ice cream in a waffle cone with nuts"),
    ("Rocky Road Supreme", "Ice Cream Scoops", "7.25", "Chocolate ice cream with marshmallows and nuts"),
    ("Vanilla Milkshake", "Shakes", "5.25", "Creamy vanilla milkshake"),
    ("Chocolate Milkshake", "Shakes", "5.50", "Rich chocolate milkshake"),
    ("Hot Fudge Sundae", "Sundaes", "8.25", "Hot fudge over vanilla ice cream"),
    ("Banana Split", "Sundaes", "9.50", "Classic banana split with three scoops"),
    ("Chocolate Chips", "Toppings", "0.75", "Premium chocolate chips"),
    ("Whipped Cream", "Toppings", "0.50", "Fresh whipped cream"),
    ("Cherry", "Toppings", "0.25", "Maraschino cherry"),
    ("Nuts", "Toppings", "1.00", "Mixed nuts"),
    ("Hot Chocolate", "Beverages", "3.50", "Rich hot chocolate"),
    ("Cold Coffee", "Beverages", "4.00", "Iced coffee"),
    ("Fresh Juice", "Beverages", "3.25", "Fresh fruit juice"),
]


def ensure_default_menu(session: Session) -> int:
    """Seed the parlor menu into an empty catalog; return number of rows added."""
    if not settings.seed_menu:
        return 0
    if session.query(MenuItem.id).first() is not None:
        return 0

    for name, category, price, description in DEFAULT_MENU:
        session.add(
            MenuItem(
                name=name,
                category=category,
                price=Decimal(price),
                description=description,
                in_stock=True,
                stock_quantity=0,
            )
        )
    session.commit()
    logger.info("[BOOTSTRAP] Seeded %s default menu items", len(DEFAULT_MENU))
    return len(DEFAULT_MENU)

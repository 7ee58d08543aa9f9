from __future__ import annotations

"""Seed a few sample Albay restaurants.

Run:
  python -m restaurant_admin.seed
"""

import logging

from sqlmodel import Session, select

from .db import init_db, make_engine
from .form import FormBuffer
from .models import Restaurant

logger = logging.getLogger(__name__)

SAMPLES = [
    FormBuffer(
        name="1st Colonial Grill",
        food_type=["Filipino", "Desserts"],
        location="Sagpon",
        municipality="City of Legazpi",
        description="Home of the sili ice cream.",
    ),
    FormBuffer(
        name="Small Talk Cafe",
        food_type=["Filipino", "Cafe"],
        location="Dap-dap",
        municipality="City of Legazpi",
        description="Pasta and pinangat near Legazpi boulevard.",
    ),
    FormBuffer(
        name="Daraga Lechon House",
        food_type=["Filipino", "Casual"],
        location="Poblacion",
        municipality="Daraga",
    ),
    FormBuffer(
        name="Tabaco Seaside Eats",
        food_type=["Sea Food"],
        location="Poblacion",
        municipality="City of Tabaco",
    ),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    engine = make_engine()
    init_db(engine)

    with Session(engine) as session:
        existing = session.exec(select(Restaurant)).first()
        if existing:
            logger.info("DB already has restaurants; skipping seed.")
            return

        for sample in SAMPLES:
            session.add(Restaurant(**sample.to_record()))
        session.commit()
    logger.info("Seeded %d restaurants", len(SAMPLES))


if __name__ == "__main__":
    main()

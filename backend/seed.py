# backend/seed.py
"""One-off bootstrap: the first admin account plus the default interview rounds.

Usage (from backend/):
    SEED_ADMIN_EMAIL=admin@example.com SEED_ADMIN_PASSWORD=secret python seed.py
"""
import logging
import os

from hrm import models, security
from hrm.crud import get_user_by_email
from hrm.database import Base, SessionLocal, engine
from hrm.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = [
    ("HR Screening", "Initial call with HR"),
    ("Technical Assessment", "Hands-on technical interview"),
    ("Managerial Round", "Discussion with the hiring manager"),
    ("Final Round", "Culture fit and offer discussion"),
]


def seed_database(session_factory=SessionLocal, bind=engine):
    """Idempotent: existing admins and rounds are left alone."""
    Base.metadata.create_all(bind=bind)
    email = os.getenv("SEED_ADMIN_EMAIL")
    password = os.getenv("SEED_ADMIN_PASSWORD")

    with session_factory() as db:
        if email and password:
            if get_user_by_email(db, email):
                logger.info("Admin %s already exists, skipping", email)
            else:
                db.add(
                    models.User(
                        name=os.getenv("SEED_ADMIN_NAME", "Administrator"),
                        email=email.lower(),
                        hashed_password=security.hash_password(password),
                        role="admin",
                    )
                )
                logger.info("Created admin %s", email)
        else:
            logger.warning("SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD not set; no admin created")

        existing = {name for (name,) in db.query(models.InterviewRound.name).all()}
        for name, description in DEFAULT_ROUNDS:
            if name not in existing:
                db.add(models.InterviewRound(name=name, description=description))
                logger.info("Added interview round %s", name)
        db.commit()


if __name__ == "__main__":
    configure_logging()
    seed_database()

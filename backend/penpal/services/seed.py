"""
Celebrity Penpal - Directory Seeding

Curated, verified public celebrities inserted when the directory is empty.
"""
import logging

from sqlalchemy.orm import Session

from ..models.db_models import CelebrityDB

logger = logging.getLogger(__name__)


SEED_CELEBRITIES = [
    {"name": "Taylor Swift", "category": "musicians", "popularity": 100,
     "address": "Taylor Swift\n13 Management\n718 Thompson Lane\nSuite 108256\nNashville, TN 37204-3923"},
    {"name": "Tom Hanks", "category": "actors", "popularity": 95,
     "address": "Tom Hanks\nPlaytone\n11812 W. Olympic Blvd.\nSuite 300\nLos Angeles, CA 90064"},
    {"name": "Leonardo DiCaprio", "category": "actors", "popularity": 90,
     "address": "Leonardo DiCaprio\nAppian Way Productions\n9601 Wilshire Blvd.\n3rd Floor\nBeverly Hills, CA 90210"},
    {"name": "Oprah Winfrey", "category": "influencers", "popularity": 88,
     "address": "Oprah Winfrey\nHarpo Productions\n1041 N. Formosa Ave.\nWest Hollywood, CA 90046"},
    {"name": "Dwayne Johnson", "category": "actors", "popularity": 92,
     "address": "Dwayne Johnson\nSeven Bucks Productions\n9601 Wilshire Blvd.\n3rd Floor\nBeverly Hills, CA 90210"},
    {"name": "Beyoncé", "category": "musicians", "popularity": 98,
     "address": "Beyoncé\nParkwood Entertainment\n1230 Avenue of the Americas\nSuite 2400\nNew York, NY 10020"},
    {"name": "Robert Downey Jr.", "category": "actors", "popularity": 85,
     "address": "Robert Downey Jr.\nTeam Downey\n9601 Wilshire Blvd.\n3rd Floor\nBeverly Hills, CA 90210"},
    {"name": "Serena Williams", "category": "athletes", "popularity": 80,
     "address": "Serena Williams\nWilliam Morris Endeavor\n9601 Wilshire Blvd.\nBeverly Hills, CA 90210"},
    {"name": "Elon Musk", "category": "influencers", "popularity": 95,
     "address": "Elon Musk\nc/o Tesla, Inc.\n3500 Deer Creek Road\nPalo Alto, CA 94304"},
    {"name": "Emma Watson", "category": "actors", "popularity": 82,
     "address": "Emma Watson\nWilliam Morris Endeavor\n9601 Wilshire Blvd.\nBeverly Hills, CA 90210"},
    {"name": "Drake", "category": "musicians", "popularity": 88,
     "address": "Drake\nOVO Sound\n1815 Ironstone Manor\nPickering, ON L1W 3J9\nCanada"},
    {"name": "Stephen King", "category": "authors", "popularity": 85,
     "address": "Stephen King\nP.O. Box 772\nBangor, ME 04402"},
    {"name": "LeBron James", "category": "athletes", "popularity": 90,
     "address": "LeBron James\nKlutch Sports Group\n8228 Sunset Blvd.\nLos Angeles, CA 90046"},
    {"name": "MrBeast", "category": "influencers", "popularity": 87,
     "address": "MrBeast\nMrBeast LLC\nP.O. Box 1058\nGreenville, NC 27835"},
    {"name": "JK Rowling", "category": "authors", "popularity": 86,
     "address": "J.K. Rowling\nc/o Blair Partnership\nP.O. Box 77\nHaymarket House\nLondon SW1Y 4SP\nUnited Kingdom"},
]


def seed_celebrities(db: Session) -> int:
    """Insert the curated set if the directory is empty. Returns rows added."""
    existing = db.query(CelebrityDB).count()
    if existing > 0:
        logger.info(f"Database already has {existing} celebrities")
        return 0

    for entry in SEED_CELEBRITIES:
        db.add(CelebrityDB(
            name=entry["name"],
            category=entry["category"],
            fanmail_address=entry["address"],
            verified=True,
            popularity_score=entry["popularity"],
            is_public=True,
            created_by_user_id=None,
            relationship_type=None,
        ))
    db.commit()

    logger.info(f"Database seeded with {len(SEED_CELEBRITIES)} celebrities")
    return len(SEED_CELEBRITIES)

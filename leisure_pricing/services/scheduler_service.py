import asyncio
import logging
from datetime import datetime, timedelta
from threading import Lock
from typing import List, Optional

from sqlalchemy.orm import Session

from leisure_pricing.core.config import settings
from leisure_pricing.database.connection import SessionLocal
from leisure_pricing.schemas.price_calculation import FlashOffer
from leisure_pricing.services.promotion_service.flash_offers import build_flash_offers
from leisure_pricing.stores.sqlalchemy_store import SqlAlchemyPricingStore
from leisure_pricing.utils.schedule import local_now

logger = logging.getLogger(__name__)


def get_db_session() -> Session:
    return SessionLocal()


# ---------- FLASH OFFER CACHE ----------

class FlashOfferCache:
    """Latest flash offer feed, replaced wholesale on every refresh."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._offers: List[FlashOffer] = []
        self._refreshed_at: Optional[datetime] = None

    def store(self, offers: List[FlashOffer], refreshed_at: datetime) -> None:
        with self._lock:
            self._offers = list(offers)
            self._refreshed_at = refreshed_at

    def get(self, now: datetime, max_age_seconds: int) -> Optional[List[FlashOffer]]:
        """Cached feed, or None when empty or older than ``max_age_seconds``."""
        with self._lock:
            if self._refreshed_at is None:
                return None
            if now - self._refreshed_at > timedelta(seconds=max_age_seconds):
                return None
            return list(self._offers)

    def size(self) -> int:
        with self._lock:
            return len(self._offers)


flash_offer_cache = FlashOfferCache()


def load_flash_offers(db: Session, now: Optional[datetime] = None) -> List[FlashOffer]:
    now = now or local_now()
    store = SqlAlchemyPricingStore(db)
    return build_flash_offers(
        offers=store.list_active_offers(),
        recurring_promotions=store.list_recurring_promotions(),
        promotions=store.list_promotions_ending_after(now),
        now=now,
    )


def refresh_flash_offers(db: Session, now: Optional[datetime] = None) -> List[FlashOffer]:
    now = now or local_now()
    offers = load_flash_offers(db, now)
    flash_offer_cache.store(offers, now)
    logger.debug("Flash offer feed refreshed: %d offers", len(offers))
    return offers


# ---------- FLASH OFFER SCHEDULER ----------

async def flash_offer_refresh_loop():
    """
    Loop that rebuilds the flash offer feed every FLASH_OFFER_REFRESH_SECONDS,
    so recurring promotions appear and disappear with their time windows.
    """
    while True:
        db = get_db_session()
        try:
            refresh_flash_offers(db)
        except Exception:
            logger.exception("Flash offer refresh failed")
        finally:
            db.close()
        await asyncio.sleep(settings.FLASH_OFFER_REFRESH_SECONDS)

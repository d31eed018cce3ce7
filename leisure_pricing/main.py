import asyncio
import logging
from datetime import datetime

from fastapi import FastAPI

import leisure_pricing.models  # noqa: F401  registers tables on Base
from leisure_pricing.core.config import settings
from leisure_pricing.database.connection import Base, engine
from leisure_pricing.middleware.metrics import MetricsMiddleware, get_metrics
from leisure_pricing.routes import system
from leisure_pricing.routes.offers import router as offers_router
from leisure_pricing.routes.pricing.calculate_price import router as calculate_price_router
from leisure_pricing.routes.pricing.pricing_route import router as pricing_router
from leisure_pricing.routes.promotions import router as promotions_router
from leisure_pricing.services.scheduler_service import flash_offer_refresh_loop

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Leisure Offer Pricing & Promotions")

app.add_middleware(MetricsMiddleware)


app.include_router(calculate_price_router)
app.include_router(offers_router)
app.include_router(pricing_router)
app.include_router(promotions_router)
app.include_router(system.router)


@app.on_event("startup")
async def startup_event():
    app.state.start_time = datetime.utcnow()
    get_metrics(app)
    app.state.flash_offer_task = asyncio.create_task(flash_offer_refresh_loop())
    logger.info("Leisure pricing service started")


@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "flash_offer_task", None)
    if task is not None:
        task.cancel()

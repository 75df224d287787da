from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.exceptions import register_exception_handlers
from core.request_logging import RequestLoggingMiddleware
from app.startup import run_startup_checks, configure_startup_logging

# ========== Authentication & Access PINs ==========
from modules.auth.routes import auth_router, pin_router

# ========== Reservations ==========
from modules.reservations.routes import router as reservation_router

# ========== Announcement Bar ==========
from modules.announcements.routes import router as announcement_router

# ========== Loyalty & Rewards ==========
from modules.loyalty.routes.loyalty_routes import router as loyalty_router
from modules.loyalty.routers.rewards_router import router as rewards_router

# ========== Health Monitoring ==========
from modules.health.routes import router as health_router

# ========== Realtime ==========
from modules.realtime.routes.websocket_routes import router as realtime_router

configure_startup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_checks()
    yield


app = FastAPI(
    title="Milkshake Bar API",
    description="""
    Backend for the Milkshake Bar customer app, staff view and admin panel.

    ## Features

    * **Reservations** - Table bookings from the website and the customer app
    * **Announcement Bar** - Scrolling "happy hour" text with an edit log
    * **Accounts** - Email and password accounts with a 6-digit Milk ID
    * **MilkPoints** - 10 PLN = 1 point, credited by staff
    * **Rewards** - Points exchanged for single-use reward codes
    * **Realtime** - WebSocket event stream at `/ws/events`

    ## Authentication

    The admin panel and the staff view are guarded by static PINs
    (`ADMIN_PIN`, `CLIENTS_PIN`).
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=settings.cors_origin_list != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Include all routers ==========

app.include_router(health_router)
app.include_router(pin_router)
app.include_router(auth_router)
app.include_router(reservation_router)
app.include_router(announcement_router)
app.include_router(loyalty_router)
app.include_router(rewards_router)
app.include_router(realtime_router)


@app.get("/")
def read_root():
    return {"ok": True, "message": "Milkshake Bar API"}

# src/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from auth.routes import router as auth_router
from preferences.routes import router as settings_router
from vpn.routes import router as vpn_router
from browse.routes import router as browse_router
from chat.routes import router as chat_router
from analytics.routes import router as analytics_router
from subscription.routes import router as subscription_router
from admin.routes import router as admin_router
from scheduler.tasks import start_scheduler, sweep_expired_sessions
from database import Database
from config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SafeSurf Backend",
    description="Disposable secure browsing: simulated VPN, URL threat scan, session nuking",
    version="0.1.0",
)
app.state.database = Database(settings.DATABASE_URL)
app.state.scheduler = None

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(settings_router)
app.include_router(vpn_router)
app.include_router(browse_router)
app.include_router(chat_router)
app.include_router(analytics_router)
app.include_router(subscription_router)
app.include_router(admin_router)


@app.on_event("startup")
async def startup_event():
    """Connect the database and run initial tasks."""
    database: Database = app.state.database
    if not database.available:
        database.connect()
    if database.available:
        sweep_expired_sessions(database)
    if settings.SCHEDULER_ENABLED:
        app.state.scheduler = start_scheduler(database)


@app.on_event("shutdown")
async def shutdown_event():
    if app.state.scheduler is not None:
        app.state.scheduler.shutdown(wait=False)
    app.state.database.dispose()


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Welcome to SafeSurf Backend!", "storage": "ok" if app.state.database.available else "unavailable"}

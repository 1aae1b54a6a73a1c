from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reservation_ledger.bookings.router import router as bookings_router
from reservation_ledger.config import settings
from reservation_ledger.exception_handlers import register_exception_handlers
from reservation_ledger.ledger import Ledger, get_ledger
from reservation_ledger.logger_config import logger
from reservation_ledger.notifications.websocket import WebSocketManager, websocket_endpoint
from reservation_ledger.trains.router import router as trains_router

def create_app(ledger: Optional[Ledger] = None) -> FastAPI:
    """Build the API; pass ``ledger`` to serve a specific store instead of the configured one"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = ledger or get_ledger()
        app.state.ws_manager.attach(active.bus)
        logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
        yield
        app.state.ws_manager.detach()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Train seat reservation ledger API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.ws_manager = WebSocketManager()

    if ledger is not None:
        app.dependency_overrides[get_ledger] = lambda: ledger

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(
        trains_router,
        prefix=f"{settings.API_V1_STR}/trains",
        tags=["Trains"]
    )

    app.include_router(
        bookings_router,
        prefix=f"{settings.API_V1_STR}/bookings",
        tags=["Bookings"]
    )

    app.add_api_websocket_route("/ws/events", websocket_endpoint)

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

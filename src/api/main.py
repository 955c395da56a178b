"""
FastAPI application factory.
Creates the app with CORS, request logging, and router registration.
Swagger UI available at /docs, ReDoc at /redoc.
"""
import sys
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Ensure src/ is on the path
_src_dir = str(Path(__file__).parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic for the FastAPI app."""
    import config
    from utils.logger import get_logger

    logger = get_logger(log_level=config.LOG_LEVEL, log_dir=config.LOG_DIR)
    app.state.logger = logger

    logger.info(f"Initializing {config.SERVICE_NAME} on port {config.API_PORT}", component="API")
    logger.info(f"Swagger UI: http://localhost:{config.API_PORT}/docs", component="API")

    yield

    logger.info("Shutting down API server", component="API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    import config

    app = FastAPI(
        title=config.SERVICE_NAME,
        description=(
            "GST tax & totals engine for Indian invoices: line totals, "
            "CGST/SGST/IGST split, round-off, discount and payment reconciliation, "
            "amount in words, and invoice numbering.\n\n"
            "Nothing is stored server-side; callers pass invoices and counters in."
        ),
        version=config.SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.API_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    from api.routes.invoice_routes import router as invoice_router
    from api.routes.report_routes import router as report_router
    from api.routes.health_routes import router as health_router

    app.include_router(invoice_router, prefix="/invoices", tags=["Invoices"])
    app.include_router(report_router, prefix="/reports", tags=["Reports"])
    app.include_router(health_router, prefix="/health", tags=["Health"])

    # Request logging middleware
    from api.middleware.request_logger import RequestLoggingMiddleware
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/", tags=["Root"])
    async def root():
        """API root - redirect to docs."""
        return {
            "service": config.SERVICE_NAME,
            "version": config.SERVICE_VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/health",
        }

    return app

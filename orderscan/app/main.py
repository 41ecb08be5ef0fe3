import logging
import os
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from orderscan.services.extraction import OrderExtractionAdapter, OrderExtractionError

# Configure logging
def setup_logging():
    """Configure logging for the application."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("orderscan.infrastructure.clients.genai_client").setLevel(log_level)
    logging.getLogger("orderscan.services.extraction").setLevel(log_level)
    logging.getLogger("orderscan.app.api.routes").setLevel(log_level)

    # Reduce noise from some third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logging.getLogger("orderscan")

logger = setup_logging()

logger.info("Orderscan application starting up")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A missing API key stops startup instead of failing each request
    app.state.adapter = OrderExtractionAdapter.from_api_key()
    logger.info(f"Order extraction adapter ready - Model: {app.state.adapter.model}")
    yield


app = FastAPI(title="Orderscan API", version="0.1.0", lifespan=lifespan)
app.add_exception_handler(
    OrderExtractionError, lambda request, exc: JSONResponse({"detail": str(exc)}, status_code=422)
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)"
    )
    return response


from orderscan.app.api.routes import router  # noqa: E402

app.include_router(router)


@app.get("/health")
def health():
    return {"status": "ok"}

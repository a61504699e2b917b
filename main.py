from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from routers import explorer, solana
from services.common import envelope, gateway_error_response
from services.config.config import load_settings
from services.config.log import setup_logging
from services.exceptions import GatewayError
from dotenv import load_dotenv
import logging
import os
import uvicorn

load_dotenv()
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="Chain Transaction Gateway")


@app.on_event("startup")
async def startup_event():
    # Fails startup on missing API keys so no request is served half-configured
    app.state.settings = load_settings()
    logger.info(f"Settings loaded: explorers={list(app.state.settings.explorers)}, solana_rpc={app.state.settings.solana_rpc_url}")


@app.exception_handler(GatewayError)
async def gateway_exception_handler(request: Request, exc: GatewayError):
    logger.warning(f"{request.method} {request.url.path} failed ({exc.status_code}): {exc.message}")
    return gateway_error_response(exc)


# Add exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors in the response envelope"""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })
    return envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", errors)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or type(exc).__name__)


# Include Routers
app.include_router(explorer.router, tags=["EVM Explorers"])
app.include_router(solana.router, tags=["Solana"])


@app.get("/")
def root():
    return {"message": "Chain transaction gateway is running"}


@app.get("/health")
def health_check():
    """Health check endpoint for load balancers"""
    return {"status": "healthy", "service": "chain-tx-gateway"}


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8080")))

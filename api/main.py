from contextlib import asynccontextmanager
from fastapi import FastAPI
from adapters.registry import ADAPTER_REGISTRY
from api.routers.webhooks import router as webhook_router
from core.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):

    logger.info(f"Starting Status Embed Relay. Providers: {', '.join(sorted(ADAPTER_REGISTRY))}.")

    yield

    logger.info("Shutting down Status Embed Relay.")

app = FastAPI(
    title="Status Embed Relay",
    lifespan=lifespan
)

app.include_router(webhook_router)

@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

from __future__ import annotations  # FastAPI server exposing interview sessions

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router

logger = logging.getLogger(__name__)

app = FastAPI(title="Interview Session API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"]
)
app.include_router(router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":  # pragma: no cover - manual entry point
    import uvicorn

    logger.info("starting interview session API on port 8000")
    uvicorn.run("api_server:app", host="0.0.0.0", port=8000, reload=False)

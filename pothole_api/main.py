# pothole_api/main.py
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env before anything reads os.getenv
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from starlette.responses import RedirectResponse  # noqa: E402

from pothole_api import __version__  # noqa: E402
from pothole_api.routes.leaderboard import router as leaderboard_router  # noqa: E402
from pothole_api.routes.reports import router as reports_router  # noqa: E402

log = logging.getLogger("uvicorn.error")

# Optional global API prefix (e.g., "/api")
_API_PREFIX = os.getenv("API_PREFIX", "").strip()
if _API_PREFIX:
    if not _API_PREFIX.startswith("/"):
        _API_PREFIX = "/" + _API_PREFIX
    _API_PREFIX = _API_PREFIX.rstrip("/")

app = FastAPI(
    title="Pothole Reporter API",
    version=__version__,
    description="Backend for the pothole reporting app (reports, map, list, leaderboard).",
)

# ---------------- CORS (browser front end) ----------------
# CORS_ORIGINS="https://potholes.example.com,https://staging.example.com"
# Without it, any localhost/127.0.0.1 port is allowed for local dev.
cors_env = os.getenv("CORS_ORIGINS")
cors_kwargs = dict(allow_methods=["*"], allow_headers=["*"])

if cors_env:
    cors_kwargs.update(
        allow_origins=[o.strip() for o in cors_env.split(",") if o.strip()],
        allow_credentials=True,
    )
else:
    cors_kwargs.update(
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
    )

app.add_middleware(CORSMiddleware, **cors_kwargs)
log.info("CORS configured: %s", cors_kwargs)

# ---------------- Routers ----------------
app.include_router(reports_router, prefix=_API_PREFIX)
app.include_router(leaderboard_router, prefix=_API_PREFIX)


# ---------------- Meta/utility ----------------
@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get(f"{_API_PREFIX or ''}/health", tags=["meta"])
def health():
    return {"status": "ok", "prefix": _API_PREFIX or ""}


def run() -> None:
    import uvicorn
    uvicorn.run(
        "pothole_api.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "").lower() in ("1", "true", "yes"),
    )


if __name__ == "__main__":
    run()

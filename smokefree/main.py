import logging

from fastapi import FastAPI

from smokefree.config import settings
from smokefree.recovery.profile_router import router as profile_router
from smokefree.recovery.router import router as recovery_router


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


configure_logging()

app = FastAPI(title="Smoke-Free Lungs", version="0.2.0")
app.include_router(recovery_router)
app.include_router(profile_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "recovery": {
            "brands": "/recovery/brands",
            "badges": "/recovery/badges",
            "stages": "/recovery/stages?quit_date={date}",
            "validate": "/recovery/validate",
            "sanitize": "/recovery/sanitize",
            "full_recovery_day": "/recovery/full-recovery-day",
            "state": "/recovery/state",
            "profile": "/recovery/profiles/{id}",
            "profile_state": "/recovery/profiles/{id}/state",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}

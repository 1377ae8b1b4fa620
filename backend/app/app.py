"""FastAPI application."""

import argparse
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict

parser = argparse.ArgumentParser()
parser.add_argument("--docker", action="store_true", help="Running with docker")
parser.add_argument("--host", required=True, help="Application host.")
parser.add_argument("--port", required=True, help="Application port.")
parser.add_argument(
    "--reload",
    required=False,
    help="Enable auto-reload for development purposes.",
)
args = parser.parse_args()
if not args.docker:
    from dotenv import load_dotenv

    load_dotenv("../../.env")

from configs import get_settings  # noqa: E402
from src.controllers.leads_controllers import leads_router  # noqa: E402
from src.repositories.interactions.database import Base, engine  # noqa: E402
from src.repositories.interactions.models import leads_model  # noqa: E402,F401

from startup import create_mock_data  # noqa: E402

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

logger.info("Creating database tables...")
Base.metadata.create_all(bind=engine)
logger.info("Database tables created successfully!")

if settings.SEED_DEMO_LEADS:
    logger.info("Populating mocked data!")
    create_mock_data()

logger.info("Starting FastAPI application...")
app = FastAPI(
    title="Brokerage CRM API - Leads",
    root_path=settings.ROOT_PATH_BACKEND,
    description="Pipeline leads, priority ordering and follow-up actions.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(leads_router)


@app.get("/", response_description="Api healthcheck")  # type: ignore[misc]
async def index() -> Dict[str, str]:
    """Define a route for handling HTTP GET requests to the root URL ("/")."""
    return {"0": "0"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app", host=args.host, port=int(args.port), reload=(args.reload or False)
    )

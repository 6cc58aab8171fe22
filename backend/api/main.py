import logging
from contextlib import asynccontextmanager

import numpy as np
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(levelname)s:%(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from .routes import router
from engine.finetune import DatasetFormatError, FineTuningStore
from engine.generator import ObjectGenerator


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    store = FineTuningStore()
    if settings.dataset_path:
        try:
            store.load_from_file(settings.dataset_path)
        except (DatasetFormatError, OSError) as e:
            logger.warning("Fine-tuning dataset not restored from %s: %s", settings.dataset_path, e)

    rng = np.random.default_rng(settings.random_seed)
    app.state.engine = ObjectGenerator(store=store, rng=rng)
    logger.info(
        "Engine ready: %d templates, %d themes",
        len(app.state.engine.get_available_templates()),
        len(app.state.engine.get_available_themes()),
    )

    yield

    # --- Shutdown ---
    if settings.dataset_path:
        try:
            store.save_to_file(settings.dataset_path)
        except OSError as e:
            logger.error("Failed to save fine-tuning dataset to %s: %s", settings.dataset_path, e)


app = FastAPI(
    title="Cubesmith",
    description="Keyword-driven procedural object generator",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix=settings.api_prefix)

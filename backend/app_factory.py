from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from minirecord import DatabaseEngine

from models import ShelterRecord, MODELS
from endpoints.cats_endpoints import router as cats_router
from endpoints.humans_endpoints import router as humans_router
from endpoints.houses_endpoints import router as houses_router

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def create_app(db_path="minirecord.sqlite"):
    # FastAPI runs sync endpoints in a worker thread pool
    engine = DatabaseEngine(db_path, check_same_thread=False)
    engine.execute_script(SCHEMA_PATH.read_text())

    ShelterRecord.bind(engine)
    for model in MODELS:
        model.finalize()

    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.engine = engine

    app.include_router(cats_router)
    app.include_router(humans_router)
    app.include_router(houses_router)
    return app

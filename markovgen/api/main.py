from contextlib import asynccontextmanager

from fastapi import FastAPI

from markovgen.api.routes import router
from markovgen.services import load_configured_model


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_configured_model()
    yield

app = FastAPI(title="Markov Text Generator", lifespan=lifespan)
app.include_router(router)


@app.get("/")
def home():
    return {"ok": True, "app": "markovgen"}

from fastapi import APIRouter, Depends, HTTPException, Header, Response

from markovgen.analytics.generator import RandomSource
from markovgen.api.schemas import GenerateIn, GenerateOut, StatsOut, TrainIn
from markovgen.config import settings
from markovgen.core.errors import ConfigurationError
from markovgen.services import current_model, generate_text, get_stats, set_model, train
from markovgen.store.codec import serialize

router = APIRouter()


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def _model():
    table = current_model()
    if table is None:
        raise HTTPException(409, detail="no model loaded")
    return table


@router.get('/stats', response_model=StatsOut)
async def stats(ok=Depends(_auth)):
    return get_stats(_model())


@router.post('/generate', response_model=GenerateOut)
async def generate(data: GenerateIn, ok=Depends(_auth)):
    table = _model()
    try:
        res = generate_text(
            table, data.seed, data.output_size,
            rng=RandomSource(data.random_seed), short_seed=data.short_seed,
        )
    except ConfigurationError as e:
        raise HTTPException(400, detail=str(e))
    return {
        'tokens': res.tokens, 'text': res.text, 'requested': res.requested,
        'produced': res.produced, 'truncated': res.truncated,
    }


@router.post('/train', response_model=StatsOut)
async def train_model(data: TrainIn, ok=Depends(_auth)):
    table = train(data.text, data.state_size)
    set_model(table)
    return get_stats(table)


@router.get('/model')
async def download_model(ok=Depends(_auth)):
    return Response(content=serialize(_model()), media_type="application/octet-stream")

import logging

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.encoders import jsonable_encoder

from .configurator import Configurator, ConfigurationError
from .loader import ConfigSourceError, configure_from_bytes
from .models import ConfigureRequest, ConfigureResponse, HealthResponse
from .rules import CONFIG_EXTENSIONS

logger = logging.getLogger(__name__)

app = FastAPI(
    title="nombus",
    description="Column and separator validation for delimited-text processing",
    version="0.1.0",
)


def _invalid(e: ConfigurationError) -> HTTPException:
    logger.info("Rejected configuration: %s", e)
    return HTTPException(
        status_code=422,
        detail={"field": e.field, "value": jsonable_encoder(e.value), "message": str(e)},
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/configure", response_model=ConfigureResponse)
def configure(body: ConfigureRequest):
    try:
        config = Configurator(body.model_dump(exclude_unset=True))
    except ConfigurationError as e:
        raise _invalid(e) from e
    return {"settings": config.as_dict()}


@app.post("/configure/file", response_model=ConfigureResponse)
async def configure_file(file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(CONFIG_EXTENSIONS):
        raise HTTPException(status_code=422, detail="Only YAML files are supported")

    raw = await file.read()
    try:
        return configure_from_bytes(raw)
    except ConfigurationError as e:
        raise _invalid(e) from e
    except ConfigSourceError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

"""
HTTP transport for the daily-care service.

Routes:
- GET  /api/status           -> alert status of every pet
- GET  /api/pet?animal=<id>  -> one pet's record
- POST /api/pet              -> apply feed / medicate / annotate
- GET  /api/pets?q=<term>    -> roster search with age and status

Handlers are plain ``def`` functions so FastAPI runs them in its thread
pool; the service's registry lock serializes the mutations.
"""

from datetime import date

import structlog
import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from petcare.adapters.http.presentation import format_age, matches_search, pet_payload
from petcare.config import AppConfig, get_config
from petcare.domain.models import PetNotFoundError
from petcare.observability import configure_logging
from petcare.services.care_service import PetCareService

logger = structlog.get_logger(__name__)


class ActionRequest(BaseModel):
    """Body of POST /api/pet."""

    animal: str = Field(min_length=1, description="Animal identifier, e.g. 'tutu'")
    kind: str = Field(description="feed, medicate or annotate")
    text: str | None = Field(default=None, description="Note text for annotate")


def _not_found(error: PetNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(error), "animal": error.pet_id})


def create_app(
    config: AppConfig | None = None, service: PetCareService | None = None
) -> FastAPI:
    """Application factory; builds the service over the default roster unless given one."""
    config = config or get_config()
    service = service or PetCareService.from_config(config)
    timezone = config.care.tzinfo

    app = FastAPI(title="PetCare Hub API", debug=config.debug)
    app.state.care_service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    def today() -> date:
        return service.clock().astimezone(timezone).date()

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("invalid_request", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "detail": [e["msg"] for e in exc.errors()]},
        )

    @app.get("/api/status")
    def get_statuses() -> dict[str, dict[str, str]]:
        statuses = service.get_all_statuses()
        return {
            pet_id: {"kind": status.kind.value, "message": status.message}
            for pet_id, status in statuses.items()
        }

    @app.get("/api/pet")
    def get_pet(animal: str | None = Query(default=None)):
        if not animal:
            return JSONResponse(status_code=400, content={"error": "Missing animal parameter"})
        result = service.get_pet(animal)
        if result.is_err():
            return _not_found(result.unwrap_err())
        return pet_payload(result.unwrap(), today())

    @app.post("/api/pet")
    def post_action(body: ActionRequest):
        result = service.apply_action(body.animal, body.kind, body.text)
        if result.is_err():
            return _not_found(result.unwrap_err())
        return pet_payload(result.unwrap(), today())

    @app.get("/api/pets")
    def search_pets(q: str = Query(default="")) -> list[dict]:
        statuses = service.get_all_statuses()
        current_day = today()
        summaries = []
        for pet_id, status in statuses.items():
            record = service.get_pet(pet_id).unwrap()
            if not matches_search(record, q, current_day):
                continue
            summaries.append(
                {
                    "id": pet_id,
                    "name": record.profile.name,
                    "species": record.profile.species,
                    "breed": record.profile.breed,
                    "gender": record.profile.gender,
                    "age": format_age(record.profile.birth_date, current_day),
                    "status": {"kind": status.kind.value, "message": status.message},
                }
            )
        return summaries

    return app


def serve(config: AppConfig | None = None) -> None:
    """Run the API under uvicorn with the configured host, port and reload flag."""
    config = config or get_config()
    configure_logging(config.logging)
    logger.info(
        "api_starting",
        host=config.api.host,
        port=config.api.port,
        environment=config.environment,
    )
    # One worker: all care state lives in this process.
    uvicorn.run(
        "petcare.adapters.http.api:create_app",
        factory=True,
        host=config.api.host,
        port=config.api.port,
        reload=config.api.reload,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    serve()

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from fridgy.api.inventory import router as inventory_router
from fridgy.app_logging import configure_logging
from fridgy.containers import AppContainer
from fridgy.domain.nutrition import FoodRecord
from fridgy.errors import (
    InvalidBarcodeLengthError,
    LookupTimeoutError,
    MissingCredentialError,
    NetworkError,
    NotFoundError,
    ParseError,
    ProviderError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(inventory_router)

    @app.exception_handler(InvalidBarcodeLengthError)
    async def invalid_barcode(
        request: Request, exc: InvalidBarcodeLengthError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "length": exc.length},
        )

    @app.exception_handler(ProviderError)
    async def provider_error(request: Request, exc: ProviderError) -> JSONResponse:
        logger.warning("FatSecret rejected request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": exc.message, "code": exc.code},
        )

    @app.exception_handler(NetworkError)
    async def network_error(request: Request, exc: NetworkError) -> JSONResponse:
        logger.warning("FatSecret lookup failed: %s", exc)
        status_code = (
            status.HTTP_504_GATEWAY_TIMEOUT
            if isinstance(exc, LookupTimeoutError)
            else status.HTTP_502_BAD_GATEWAY
        )
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(ParseError)
    async def parse_error(request: Request, exc: ParseError) -> JSONResponse:
        logger.warning("Unexpected FatSecret response: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "Lookup failed"},
        )

    @app.exception_handler(MissingCredentialError)
    async def missing_credential(
        request: Request, exc: MissingCredentialError
    ) -> JSONResponse:
        logger.error("Refusing to sign request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Nutrition lookups are not configured"},
        )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def invalid_value(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/barcodes/{barcode}")
    async def scan_barcode(
        barcode: str,
        request: Request,
        region: str | None = None,
        language: str | None = None,
    ) -> dict[str, object]:
        """Resolve a barcode to food details."""
        state_container: AppContainer = request.app.state.container
        record = await state_container.nutrition_service.scan(
            barcode, region, language
        )
        if record is None:
            raise _no_match()
        return {"food": record}

    @app.get("/barcodes/{barcode}/food-id")
    async def barcode_food_id(
        barcode: str,
        request: Request,
        region: str | None = None,
        language: str | None = None,
    ) -> dict[str, str]:
        """Return the FatSecret food id for a barcode."""
        state_container: AppContainer = request.app.state.container
        food_id = await state_container.nutrition_service.lookup_food_identifier(
            barcode, region, language
        )
        if food_id is None:
            raise _no_match()
        return {"food_id": food_id}

    @app.get("/foods/{food_id}")
    async def food_details(
        food_id: str,
        request: Request,
        region: str | None = None,
        language: str | None = None,
    ) -> dict[str, object]:
        """Return food details by FatSecret id."""
        state_container: AppContainer = request.app.state.container
        record = await state_container.nutrition_service.lookup_food_details(
            food_id, region, language
        )
        return {"food": record}

    @app.get("/fatsecret/food")
    async def fatsecret_macros(
        request: Request, barcode: str | None = None
    ) -> dict[str, float]:
        """Return first-serving macros for a barcode."""
        if not barcode:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="barcode query param required",
            )
        state_container: AppContainer = request.app.state.container
        record = await state_container.nutrition_service.scan(barcode)
        if record is None:
            raise _no_match()
        return _macro_summary(record)

    return app


def _no_match() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="No match for this barcode"
    )


def _macro_summary(record: FoodRecord) -> dict[str, float]:
    """Summarize the first serving the way the scan screen displays it."""
    if record.serving is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Serving data not found",
        )
    return {
        "calories": record.serving.calories,
        "protein": record.serving.protein,
        "fat": record.serving.fat,
        "carbohydrate": record.serving.carbohydrate,
    }

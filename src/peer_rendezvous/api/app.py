"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from peer_rendezvous.api.models import (
    AnswerRequest,
    ErrorResponse,
    OfferRequest,
    SuccessResponse,
)
from peer_rendezvous.app_logging import configure_logging
from peer_rendezvous.containers import AppContainer
from peer_rendezvous.domain.errors import (
    AnswerNotFoundError,
    ConnectionDoesNotExistError,
    ConnectionNotFoundError,
    InvalidConnectionNameError,
    InvalidOfferError,
    OfferNotFoundError,
    PasswordMismatchError,
    SignalingError,
    StorageFailureError,
)
from peer_rendezvous.services.signaling import SignalingService

_ERROR_STATUS: dict[type[SignalingError], int] = {
    InvalidConnectionNameError: status.HTTP_403_FORBIDDEN,
    InvalidOfferError: status.HTTP_403_FORBIDDEN,
    PasswordMismatchError: status.HTTP_403_FORBIDDEN,
    OfferNotFoundError: status.HTTP_403_FORBIDDEN,
    ConnectionNotFoundError: status.HTTP_404_NOT_FOUND,
    AnswerNotFoundError: status.HTTP_404_NOT_FOUND,
    # Kept at 403 to match existing clients, unlike the 404 on /getOffer.
    ConnectionDoesNotExistError: status.HTTP_403_FORBIDDEN,
    StorageFailureError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Signaling API starting (region=%s, store=%s)",
            container.settings.region,
            container.settings.connection_store,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(SignalingError)
    async def signaling_error_handler(
        request: Request, exc: SignalingError
    ) -> JSONResponse:
        if isinstance(exc, StorageFailureError):
            logger.error(
                "Connection store failure",
                exc_info=exc.cause,
                extra={"path": request.url.path},
            )
        return _error_response(
            _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR),
            exc.message,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected malformed request to %s", request.url.path)
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/connectionOffer")
    def connection_offer(
        request: Request, payload: OfferRequest | None = None
    ) -> SuccessResponse:
        """Publish an offer, creating the connection if needed."""
        body = payload or OfferRequest()
        _signaling(request).publish_offer(
            body.connection_name or "", body.password, body.offer
        )
        return SuccessResponse(data="Success")

    @app.get("/getOffer")
    def get_offer(
        request: Request,
        connection_name: str = Query(default="", alias="connectionName"),
        password: str = Query(default=""),
    ) -> SuccessResponse:
        """Return the offer for a connection."""
        offer = _signaling(request).get_offer(connection_name, password)
        return SuccessResponse(data=offer)

    @app.post("/connectionAnswer")
    def connection_answer(
        request: Request, payload: AnswerRequest | None = None
    ) -> SuccessResponse:
        """Publish an answer for an existing offer."""
        body = payload or AnswerRequest()
        _signaling(request).publish_answer(
            body.connection_name or "", body.password, body.answer
        )
        return SuccessResponse(data="Success")

    @app.get("/getAnswer")
    def get_answer(
        request: Request,
        connection_name: str = Query(default="", alias="connectionName"),
    ) -> SuccessResponse:
        """Return the answer for a connection."""
        answer = _signaling(request).get_answer(connection_name)
        return SuccessResponse(data=answer)

    return app


def _signaling(request: Request) -> SignalingService:
    state_container: AppContainer = request.app.state.container
    return state_container.signaling_service


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from dishka.integrations.fastapi import setup_dishka

from core.container import build_container
from core.exception_handler import (
    validation_exception_handler,
    http_exception_handler,
    starlette_exception_handler,
    custom_exception_handler
)
from core.exceptions import BaseCustomException
from erc20.router import router as erc20_router

VERSION = "1.0.0"


def create_app() -> FastAPI:
    """
    Create the application with its DI container and routes.

    Returns
    -------
    FastAPI
        Configured application
    """
    app = FastAPI(
        title="ERC-20 Token Service",
        version=VERSION,
        description="Token balances and Transfer event scans over JSON-RPC",
    )

    setup_dishka(build_container(), app)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_exception_handler)
    app.add_exception_handler(BaseCustomException, custom_exception_handler)
    app.add_exception_handler(Exception, custom_exception_handler)

    app.include_router(erc20_router)

    @app.get("/")
    async def root():
        """
        Root endpoint.

        Returns
        -------
        dict
            Application information
        """
        return {
            "name": "ERC-20 Token Service",
            "version": VERSION,
            "endpoints": {
                "balance": "/api/token/balance",
                "transfers": "/api/token/transfers",
                "transfers_csv": "/api/token/transfers/csv",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health():
        """
        Health check endpoint.

        Returns
        -------
        dict
            Health status
        """
        return {"status": "healthy", "version": VERSION}

    return app


app = create_app()

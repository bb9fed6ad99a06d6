import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from httpx import AsyncClient, ASGITransport

from service.middleware import CORSDebugMiddleware

FRONTEND = "http://localhost:3000"
LOGGER = "menu.service.middleware.cors"


def build_app(allow_credentials: bool = True) -> FastAPI:
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND],
        allow_credentials=allow_credentials,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(CORSDebugMiddleware, cors_allowed_origins=[FRONTEND])
    return app


async def get(app: FastAPI, origin: str | None):
    headers = {"origin": origin} if origin else {}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        return await client.get("/ping", headers=headers)


class TestCORSDebugMiddleware:

    @pytest.mark.asyncio
    async def test_credentialed_allowed_origin_is_quiet(self, caplog):
        with caplog.at_level("WARNING", logger=LOGGER):
            response = await get(build_app(), FRONTEND)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == FRONTEND
        assert [r for r in caplog.records if r.name == LOGGER] == []

    @pytest.mark.asyncio
    async def test_non_allowed_origin_is_reported(self, caplog):
        with caplog.at_level("WARNING", logger=LOGGER):
            response = await get(build_app(), "http://evil.example.com")

        assert response.status_code == 200
        assert "non-allowed origin: http://evil.example.com" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_credentials_is_reported(self, caplog):
        with caplog.at_level("WARNING", logger=LOGGER):
            await get(build_app(allow_credentials=False), FRONTEND)

        assert "will not carry the session cookie" in caplog.text

    @pytest.mark.asyncio
    async def test_requests_without_origin_are_not_logged(self, caplog):
        with caplog.at_level("DEBUG", logger=LOGGER):
            response = await get(build_app(), None)

        assert response.json() == {"ok": True}
        assert [r for r in caplog.records if r.name == LOGGER] == []

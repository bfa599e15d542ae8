import pytest
from httpx import AsyncClient, ASGITransport

from dataBase import get_db_session


@pytest.mark.asyncio
async def test_root_and_health(app_with_overrides, session_factory):
    def override_get_db_session():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app_with_overrides.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app_with_overrides)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/")
        assert response.status_code == 200
        assert "message" in response.json()

        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "success"

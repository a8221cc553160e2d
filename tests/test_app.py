import pytest
from httpx import ASGITransport, AsyncClient

from quizdeck.core.config import Settings


@pytest.fixture
def frontend(tmp_path):
    www = tmp_path / "www"
    www.mkdir()
    (www / "index.html").write_text("<html>quiz</html>")
    (www / "script.js").write_text("console.log('quiz');")
    (tmp_path / "secret.txt").write_text("outside")
    return www


@pytest.fixture
async def frontend_client(db, frontend):
    from main import make_app

    app = make_app(frontend_dir=str(frontend))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


class TestFrontend:
    @pytest.mark.asyncio
    async def test_static_file(self, frontend_client):
        response = await frontend_client.get("/script.js")

        assert response.status_code == 200
        assert "console.log" in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "/high-scores", "/admin/upload"])
    async def test_unknown_paths_fall_back_to_index(self, frontend_client, path):
        response = await frontend_client.get(path)

        assert response.status_code == 200
        assert response.text == "<html>quiz</html>"

    @pytest.mark.asyncio
    async def test_files_outside_frontend_are_not_served(self, frontend_client):
        response = await frontend_client.get("/..%2Fsecret.txt")

        assert "outside" not in response.text

    @pytest.mark.asyncio
    async def test_api_routes_win_over_fallback(self, frontend_client):
        response = await frontend_client.get("/api/modules")

        assert response.json() == {"modules": []}

    @pytest.mark.asyncio
    async def test_unknown_api_path_is_json_404(self, frontend_client):
        response = await frontend_client.get("/api/nope")

        assert response.status_code == 404
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_without_frontend_unknown_path_is_404(self, client):
        response = await client.get("/anything")

        assert response.status_code == 404
        assert "message" in response.json()


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("MONGODB_URI", "PORT", "HOST", "LOG_LEVEL", "FRONTEND_DIR", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.mongodb_uri == "mongodb://localhost:27017/quizdb"
        assert settings.port == 3000
        assert settings.cors_origins == ["*"]
        assert settings.log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017/quiz")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        settings = Settings.from_env()

        assert settings.mongodb_uri == "mongodb://db:27017/quiz"
        assert settings.port == 8080
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

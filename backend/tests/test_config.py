"""Tests for environment-driven settings and the health route."""

from searchchat.config import AZURE_API_VERSION, DEFAULT_DB_PATH, Settings


class TestSettingsFromEnv:
    def test_reads_provider_values(self, monkeypatch):
        monkeypatch.setenv("DATAFORSEO_LOGIN", "me@example.com")
        monkeypatch.setenv("DATAFORSEO_PASSWORD", "pw")
        monkeypatch.setenv("AZURE_OPENAI_KEY", "k")
        monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://example.openai.azure.com/")
        monkeypatch.setenv("AZURE_OPENAI_DEPLOYMENT", "gpt45")
        settings = Settings.from_env()
        assert settings.dataforseo_login == "me@example.com"
        assert settings.dataforseo_password == "pw"
        assert settings.azure_openai_endpoint == "https://example.openai.azure.com"
        assert settings.azure_openai_deployment == "gpt45"
        assert settings.azure_api_version == AZURE_API_VERSION

    def test_missing_values_are_not_rejected(self, monkeypatch):
        for name in (
            "DATAFORSEO_LOGIN", "DATAFORSEO_PASSWORD", "AZURE_OPENAI_KEY",
            "AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_DEPLOYMENT",
            "SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "SEARCHCHAT_DB_PATH",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.azure_openai_key == ""
        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.uses_supabase is False

    def test_supabase_needs_both_values(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        assert Settings.from_env().uses_supabase is False
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role")
        assert Settings.from_env().uses_supabase is True

    def test_db_path_override(self, monkeypatch):
        monkeypatch.setenv("SEARCHCHAT_DB_PATH", "/tmp/chats.db")
        assert Settings.from_env().db_path == "/tmp/chats.db"

    def test_construct_by_field_name(self, monkeypatch):
        monkeypatch.delenv("AZURE_OPENAI_ENDPOINT", raising=False)
        settings = Settings(
            azure_openai_endpoint="https://e.openai.azure.com//",
            supabase_url="",
        )
        assert settings.azure_openai_endpoint == "https://e.openai.azure.com"
        assert settings.supabase_url is None


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

"""SearchChat FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from supabase import create_client

from searchchat.chat.router import get_web_search_service
from searchchat.chat.router import router as chat_router
from searchchat.chat.service import WebSearchChatService
from searchchat.config import Settings
from searchchat.db.connection import Database
from searchchat.messages.persistence import BestEffortWriter
from searchchat.messages.store import MessageStore, SQLiteMessageStore, SupabaseMessageStore
from searchchat.providers.azure import AzureOpenAIProvider
from searchchat.search.client import DataForSEOClient

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage client lifecycles and service wiring."""
    # Load .env from backend/ directory (secrets stay out of shell profile)
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")
    settings = Settings.from_env()

    # Message store: hosted when service-role credentials exist, local otherwise
    db: Database | None = None
    store: MessageStore
    if settings.uses_supabase:
        store = SupabaseMessageStore(
            create_client(settings.supabase_url, settings.supabase_service_role_key)
        )
    else:
        db = await Database.connect(settings.db_path)
        store = SQLiteMessageStore(db)

    search_client = DataForSEOClient(
        login=settings.dataforseo_login,
        password=settings.dataforseo_password,
        base_url=settings.dataforseo_base_url,
    )
    provider = AzureOpenAIProvider(
        deployment=settings.azure_openai_deployment,
        api_key=settings.azure_openai_key,
        endpoint=settings.azure_openai_endpoint,
        api_version=settings.azure_api_version,
    )

    service = WebSearchChatService(search_client, provider, BestEffortWriter(store))
    app.dependency_overrides[get_web_search_service] = lambda: service

    app.state.settings = settings
    yield

    await search_client.aclose()
    await provider.aclose()
    if db is not None:
        await db.close()


app = FastAPI(
    title="SearchChat",
    description="Chat completions augmented with live web-search results",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "version": VERSION}

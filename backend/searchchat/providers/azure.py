"""Azure OpenAI LLM provider: thin subclass of OpenAICompatibleProvider.

Azure routes by deployment rather than model name, so the client is pointed
at the deployment path and authenticated with the static ``api-key`` header.
"""

from openai import AsyncOpenAI

from searchchat.config import AZURE_API_VERSION
from searchchat.providers.openai_compat import OpenAICompatibleProvider


class AzureOpenAIProvider(OpenAICompatibleProvider):
    """LLM provider backed by a hosted Azure OpenAI deployment."""

    def __init__(
        self,
        *,
        deployment: str,
        client: AsyncOpenAI | None = None,
        api_key: str = "",
        endpoint: str = "",
        api_version: str = AZURE_API_VERSION,
    ) -> None:
        self._deployment = deployment
        if client is not None:
            super().__init__(client)
        else:
            super().__init__(
                AsyncOpenAI(
                    api_key=api_key,
                    base_url=f"{endpoint}/openai/deployments/{deployment}",
                    default_headers={"api-key": api_key},
                    default_query={"api-version": api_version},
                )
            )

    @property
    def name(self) -> str:
        return "azure"

    @property
    def default_model(self) -> str:
        return self._deployment

    async def aclose(self) -> None:
        await self._client.close()

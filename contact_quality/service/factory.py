from collections.abc import Callable
from typing import ClassVar

from contact_quality.config.settings import Settings
from contact_quality.service.client_base import BaseAnalysisClient
from contact_quality.service.example_client_adapter import ExampleClientAdapter
from contact_quality.service.http_client_adapter import HttpAnalysisClient


class AnalysisClientFactory:
    """Creates the analysis service client named by ``settings.analysis_provider``."""

    PROVIDERS: ClassVar[dict[str, Callable[[Settings], BaseAnalysisClient]]] = {
        "http": lambda settings: HttpAnalysisClient(
            base_url=settings.analysis_api_base_url,
            api_token=settings.analysis_api_token,
            timeout_seconds=settings.analysis_timeout_seconds,
        ),
        "example": lambda settings: ExampleClientAdapter(),
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisClient:
        provider = settings.analysis_provider.strip().lower()
        builder = cls.PROVIDERS.get(provider)
        if builder is None:
            raise ValueError(
                f"Unknown analysis provider '{provider}'. Choose from: {sorted(cls.PROVIDERS)}"
            )
        return builder(settings)

"""Cliente HTTP com retry, timeout e logging para o provedor SMS.

- Retry com backoff exponencial (429 e 5xx, timeout, erro de conexão)
- Timeouts configuráveis
- Logging estruturado sem corpo de requisição (contém telefone/código)
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from internpath_assistant.observability.logging import get_logger

if TYPE_CHECKING:
    from internpath_assistant.config.settings import Settings

logger: logging.Logger = get_logger(__name__)

_TOKEN_QUERY_PATTERN = re.compile(r"(access_token|token|api_key)=[^&]+")


def _sanitize_url(url: str) -> str:
    """Remove credenciais de query string para logging seguro."""
    return _TOKEN_QUERY_PATTERN.sub(r"\1=***", url)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 10.0
    max_retries: int = 2
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)


class HttpError(Exception):
    """Erro de requisição HTTP sem expor informações sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def _is_retryable_status(status_code: int) -> bool:
    """429 ou 5xx permitem retry."""
    return status_code == 429 or 500 <= status_code < 600


def _calculate_backoff(attempt: int, base_seconds: float, max_seconds: float) -> float:
    """Backoff exponencial limitado a max_seconds."""
    return min((2**attempt) * base_seconds, max_seconds)


class HttpClient:
    """Cliente HTTP assíncrono com retry.

    Uso típico:
        async with HttpClient(config) as client:
            response = await client.post(url, json=payload)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=self._config.default_headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Fecha o cliente e libera recursos."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Executa requisição com retry automático.

        Raises:
            HttpError: status não retentável ou tentativas esgotadas
        """
        client = await self._get_client()
        cfg = self._config
        safe_url = _sanitize_url(url)
        last_error: HttpError | None = None

        for attempt in range(cfg.max_retries + 1):
            logger.debug(
                "http_request_started",
                extra={"method": method, "url": safe_url, "attempt": attempt + 1},
            )
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.TimeoutException as e:
                logger.warning(
                    "http_request_timeout",
                    extra={"method": method, "url": safe_url, "attempt": attempt + 1},
                )
                last_error = HttpError("Timeout", is_retryable=True)
                last_error.__cause__ = e
            except httpx.TransportError as e:
                logger.warning(
                    "http_connection_error",
                    extra={"method": method, "url": safe_url, "error_type": type(e).__name__},
                )
                last_error = HttpError("Erro de conexão", is_retryable=True)
                last_error.__cause__ = e
            else:
                if response.is_success:
                    logger.debug(
                        "http_request_succeeded",
                        extra={
                            "method": method,
                            "url": safe_url,
                            "status_code": response.status_code,
                        },
                    )
                    return response
                if not _is_retryable_status(response.status_code):
                    logger.warning(
                        "http_request_failed",
                        extra={
                            "method": method,
                            "url": safe_url,
                            "status_code": response.status_code,
                        },
                    )
                    raise HttpError(
                        f"HTTP {response.status_code}",
                        status_code=response.status_code,
                        is_retryable=False,
                    )
                last_error = HttpError(
                    f"HTTP {response.status_code}",
                    status_code=response.status_code,
                    is_retryable=True,
                )

            if attempt < cfg.max_retries:
                backoff = _calculate_backoff(
                    attempt, cfg.backoff_base_seconds, cfg.backoff_max_seconds
                )
                logger.info(
                    "http_retry_backoff",
                    extra={"backoff_seconds": backoff, "next_attempt": attempt + 2},
                )
                await asyncio.sleep(backoff)

        logger.error(
            "http_retries_exhausted",
            extra={"method": method, "url": safe_url, "total_attempts": cfg.max_retries + 1},
        )
        raise last_error or HttpError("Falha após todos os retries")

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Executa POST com retry."""
        return await self.request("POST", url, json=json, **kwargs)


def create_http_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClient:
    """Cliente HTTP configurado para o provedor SMS."""
    headers = {"User-Agent": f"{settings.service_name}/{settings.version}"}
    if settings.sms_api_token:
        headers["Authorization"] = f"Bearer {settings.sms_api_token}"

    config = HttpClientConfig(
        timeout_seconds=float(settings.sms_request_timeout_seconds),
        max_retries=settings.sms_max_retries,
        backoff_base_seconds=float(settings.sms_retry_backoff_seconds),
        default_headers=headers,
    )
    logger.info(
        "http_client_created",
        extra={"timeout_seconds": config.timeout_seconds, "max_retries": config.max_retries},
    )
    return HttpClient(config, transport=transport)

"""Chat-completion client.

A single ``CompletionClient`` is shared across requests. It receives an
httpx.AsyncClient via constructor injection; the lifespan owns the client
lifecycle.

Retry policy: a model may reject the value of an optional parameter (for
example a custom ``temperature``) with error code ``unsupported_value``. When
that happens for a parameter listed in ``optional_parameters`` that the
request actually carried, the request is sent exactly once more without it.
Every other failure is raised as ``CompletionError`` straight away.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from sitefaq.errors import CompletionError, ErrorCode

if TYPE_CHECKING:
    from sitefaq.config import CompletionSettings

log = structlog.get_logger()


def build_http_client(settings: CompletionSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        # No timeout unless one is configured
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"Content-Type": "application/json"},
    )


def _parse_error(response: httpx.Response) -> CompletionError:
    code: str = ErrorCode.COMPLETION_HTTP_ERROR
    message = f"HTTP {response.status_code} from completion endpoint"
    param: str | None = None
    try:
        data = response.json()
    except ValueError:
        data = None
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        code = error.get("code") or code
        message = error.get("message") or message
        param = error.get("param")
    return CompletionError(code, message, param=param, status_code=response.status_code)


def _message_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content or ""


class CompletionClient:
    """Calls ``POST {base_url}/chat/completions``."""

    def __init__(self, client: httpx.AsyncClient, settings: CompletionSettings) -> None:
        self._client = client
        self._settings = settings

    def build_request(self, messages: list[dict[str, Any]]) -> dict[str, Any]:
        """Build the request body for the configured model."""
        body: dict[str, Any] = {
            "model": self._settings.model,
            "messages": messages,
            "max_completion_tokens": self._settings.max_completion_tokens,
        }
        temperature_supported = not any(
            self._settings.model.startswith(prefix)
            for prefix in self._settings.temperature_unsupported_prefixes
        )
        if self._settings.temperature is not None and temperature_supported:
            body["temperature"] = self._settings.temperature
        return body

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        """Send one completion request and return the first choice's text.

        Raises CompletionError on provider errors, network errors, and
        unparseable responses.
        """
        if not self._settings.api_key:
            raise CompletionError(
                ErrorCode.COMPLETION_NOT_CONFIGURED,
                "No API key configured for the completion endpoint",
            )

        body = self.build_request(messages)
        try:
            return await self._post(body)
        except CompletionError as exc:
            if not self._should_retry_without(exc, body):
                raise
            log.warning(
                "completion_retry_without_parameter",
                param=exc.param,
                model=body["model"],
            )
            retry_body = {k: v for k, v in body.items() if k != exc.param}
            return await self._post(retry_body)

    def _should_retry_without(self, exc: CompletionError, body: dict[str, Any]) -> bool:
        return (
            exc.is_unsupported_value
            and exc.param in self._settings.optional_parameters
            and exc.param in body
        )

    async def _post(self, body: dict[str, Any]) -> str:
        url = self._settings.base_url.rstrip("/") + "/chat/completions"
        try:
            response = await self._client.post(
                url,
                json=body,
                headers={"Authorization": f"Bearer {self._settings.api_key}"},
            )
        except httpx.HTTPError as exc:
            raise CompletionError(
                ErrorCode.COMPLETION_NETWORK_ERROR,
                f"Network error calling completion endpoint: {exc}",
            ) from exc

        if not response.is_success:
            raise _parse_error(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise CompletionError(
                ErrorCode.COMPLETION_BAD_RESPONSE,
                "Completion endpoint returned a non-JSON body",
                status_code=response.status_code,
            ) from exc

        content = _message_content(data)
        log.info("completion_complete", model=body["model"], answer_length=len(content))
        return content

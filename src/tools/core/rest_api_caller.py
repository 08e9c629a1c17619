# tools/core/rest_api_caller.py

import json
import time
from typing import Any, Dict, Optional

import httpx

from core.base_tool import BaseTool
from core.exceptions import RequestExecutionError
from schemas.tools.rest_api_caller import (
    RestApiCallerInput,
    RestApiCallerOutput,
    RestRequest,
    RestResponse,
)

DEFAULT_REQUEST_TIMEOUT = 30.0

_BODYLESS_METHODS = ("GET", "HEAD")


def _has_header(headers: Dict[str, Any], name: str) -> bool:
    return any(str(key).lower() == name.lower() for key in headers)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def _query_params(query: Dict[str, Any]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (dict, bool)):
            params[key] = json.dumps(value, ensure_ascii=False)
        else:
            params[key] = value
    return params


class RestApiCallerTool(BaseTool):
    """
    Issues exactly one HTTP call per execution through httpx.

    Non-2xx responses are returned like any other; only transport failures
    (DNS, refused connection, timeout) raise :class:`RequestExecutionError`.
    """

    def __init__(
        self,
        *,
        name: str = "rest_api_caller",
        description: str = "Calls RESTful endpoints using httpx.AsyncClient",
        config: Optional[dict] = None,
        verbose: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            name=name,
            description=description,
            input_schema=RestApiCallerInput,
            output_schema=RestApiCallerOutput,
            config=config,
            verbose=verbose,
        )
        self._timeout = float(self.config.get("timeout", DEFAULT_REQUEST_TIMEOUT))
        self._transport = transport

    async def _execute(self, inp: RestApiCallerInput) -> RestApiCallerOutput:
        req: RestRequest = inp.request
        method = req.method.upper()
        timeout = inp.timeout or self._timeout

        headers = {str(k): str(v) for k, v in (req.headers or {}).items()}
        if not _has_header(headers, "content-type"):
            headers["Content-Type"] = "application/json"

        content = None
        payload = None
        if method not in _BODYLESS_METHODS and req.body not in (None, "", {}, []):
            if isinstance(req.body, (dict, list)):
                payload = req.body
            elif isinstance(req.body, (bytes, str)):
                content = req.body
            else:
                payload = req.body

        self.logger.info(f"Making {method} request to {req.url}")
        start = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method=method,
                    url=req.url,
                    headers=headers,
                    params=_query_params(req.query or {}),
                    json=payload,
                    content=content,
                )
        except httpx.TimeoutException as e:
            self.logger.error(f"Request timed out after {timeout:g}s", url=req.url)
            raise RequestExecutionError(
                method, req.url, f"timed out after {timeout:g}s"
            ) from e
        except httpx.RequestError as e:
            self.logger.error(f"Request error: {e}", url=req.url)
            raise RequestExecutionError(method, req.url, str(e) or type(e).__name__) from e

        duration = (time.perf_counter() - start) * 1000
        self.logger.info(
            f"Request completed: {response.status_code} in {duration:.1f}ms",
            response_size=len(response.content),
        )

        return RestApiCallerOutput(
            request=RestRequest(
                method=method,
                url=str(response.request.url),
                headers=headers,
                query=req.query or {},
                body=req.body,
            ),
            response=RestResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=_parse_body(response),
                duration=duration,
            ),
        )

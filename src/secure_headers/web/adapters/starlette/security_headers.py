# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Security headers middleware for Starlette — pure ASGI."""

from __future__ import annotations

import dataclasses
from enum import StrEnum
from typing import Any

import structlog
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from secure_headers.kernel.exceptions import NonceGenerationError
from secure_headers.web.composer import HeaderComposer, RequestContext
from secure_headers.web.security_headers import SecureHeadersConfig

logger = structlog.get_logger("secure_headers.web")

NONCE_STATE_KEY = "csp_nonce"


class NonceFailureMode(StrEnum):
    """What to do with a request whose CSP nonce cannot be generated."""

    FAIL = "fail"
    OMIT_CSP = "omit-csp"


class SecurityHeadersMiddleware:
    """Adds the composed security headers to every HTTP response.

    The request's nonce is exposed as ``request.state.csp_nonce`` so
    templates can echo it into ``<script nonce=...>``. Headers already set by
    the application under the same names are replaced.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so the nonce is
    available before the endpoint runs and streaming responses are untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: SecureHeadersConfig | None = None,
        composer: HeaderComposer | None = None,
        nonce_failure: NonceFailureMode = NonceFailureMode.FAIL,
    ) -> None:
        self.app = app
        self._composer = composer or HeaderComposer(config)
        self._nonce_failure = nonce_failure
        config = self._composer.config
        self._without_csp = self._composer.with_config(
            dataclasses.replace(config, csp=dataclasses.replace(config.csp, enabled=False))
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        composer = self._composer
        try:
            context = composer.new_context()
        except NonceGenerationError as exc:
            logger.error(
                "csp_nonce_generation_failed",
                path=scope.get("path"),
                error=str(exc),
                mode=self._nonce_failure.value,
            )
            if self._nonce_failure is NonceFailureMode.FAIL:
                raise
            composer = self._without_csp
            context = RequestContext()

        if context.nonce is not None:
            scope.setdefault("state", {})[NONCE_STATE_KEY] = context.nonce
        entries = composer.compose(context)

        async def send_with_headers(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in entries:
                    headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_headers)

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
"""HeaderComposer — builds the full security header set for one request."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from secure_headers.web.builders import (
    HeaderEntry,
    ReportToFormatter,
    build_cross_origin,
    build_csp,
    build_framing,
    build_hsts,
    build_misc,
    build_permissions_policy,
    decide_framing,
    format_report_to,
)
from secure_headers.web.nonce import NonceProvider, SecretsNonceProvider, validate_nonce
from secure_headers.web.security_headers import SecureHeadersConfig

logger = structlog.get_logger("secure_headers.web")


@dataclass(frozen=True)
class RequestContext:
    """Per-request input to composition.

    ``nonce`` is ``None`` only for requests composed without a CSP.
    """

    nonce: str | None = None


def compose_headers(
    config: SecureHeadersConfig,
    context: RequestContext,
    report_to_formatter: ReportToFormatter = format_report_to,
) -> list[HeaderEntry]:
    """Compose the ordered header list for *config* and *context*.

    Order: HSTS, X-Frame-Options, CSP (+ Report-To), Cross-Origin-*,
    X-Content-Type-Options, Referrer-Policy, Permissions-Policy. The framing
    decision is taken before the CSP so its ``frame-ancestors`` value can be
    merged in.

    Raises:
        NonceGenerationError: if CSP is enabled and the context carries no
            usable nonce. Nothing is returned in that case.
    """
    headers: list[HeaderEntry] = []

    hsts = build_hsts(config.hsts)
    if hsts is not None:
        headers.append(hsts)

    framing = decide_framing(config.framing)
    headers.append(build_framing(framing))

    if config.csp.enabled:
        nonce = validate_nonce(context.nonce)
        headers.extend(build_csp(config.csp, framing, nonce, report_to_formatter))

    headers.extend(build_cross_origin(config.cross_origin))
    headers.extend(build_misc(config))

    permissions = build_permissions_policy(config.permissions_policy)
    if permissions is not None:
        headers.append(permissions)

    return headers


class HeaderComposer:
    """Composes security headers for requests sharing one configuration.

    The configuration is immutable and may be shared by every concurrent
    request; the only per-request state lives in :class:`RequestContext`.
    """

    def __init__(
        self,
        config: SecureHeadersConfig | None = None,
        nonce_provider: NonceProvider | None = None,
        report_to_formatter: ReportToFormatter = format_report_to,
    ) -> None:
        self._config = config or SecureHeadersConfig()
        self._nonce_provider = nonce_provider or SecretsNonceProvider()
        self._report_to_formatter = report_to_formatter

    @property
    def config(self) -> SecureHeadersConfig:
        return self._config

    @property
    def report_to_formatter(self) -> ReportToFormatter:
        return self._report_to_formatter

    def with_config(self, config: SecureHeadersConfig) -> HeaderComposer:
        """Return a composer for *config* sharing this one's nonce provider and formatter."""
        return HeaderComposer(config, self._nonce_provider, self._report_to_formatter)

    def new_context(self) -> RequestContext:
        """Create the context for a new request.

        A nonce is generated, exactly once, only when CSP is enabled.

        Raises:
            NonceGenerationError: if the provider cannot produce a usable nonce.
        """
        if not self._config.csp.enabled:
            return RequestContext()
        return RequestContext(nonce=validate_nonce(self._nonce_provider.generate()))

    def compose(self, context: RequestContext | None = None) -> list[HeaderEntry]:
        """Compose headers for one request, creating its context if not given."""
        if context is None:
            context = self.new_context()
        headers = compose_headers(self._config, context, self._report_to_formatter)
        logger.debug("security_headers_composed", count=len(headers))
        return headers

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
"""Policy builders — one per header family.

Each builder reads its slice of :class:`SecureHeadersConfig` and returns the
headers it owns (possibly none). Builders never raise for configuration
problems; those were settled by the resolver.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

import structlog

from secure_headers.kernel.exceptions import DirectiveMergeError
from secure_headers.web.directives import (
    ensure_directive,
    parse_with_nonce,
    require_well_formed,
    serialize_directives,
)
from secure_headers.web.security_headers import (
    CrossOriginSettings,
    CspSettings,
    FramingPolicy,
    FramingSettings,
    HstsSettings,
    PermissionsPolicySettings,
    SecureHeadersConfig,
)

logger = structlog.get_logger("secure_headers.web")

STRICT_TRANSPORT_SECURITY = "Strict-Transport-Security"
CONTENT_SECURITY_POLICY = "Content-Security-Policy"
CONTENT_SECURITY_POLICY_REPORT_ONLY = "Content-Security-Policy-Report-Only"
REPORT_TO = "Report-To"
X_FRAME_OPTIONS = "X-Frame-Options"
CROSS_ORIGIN_OPENER_POLICY = "Cross-Origin-Opener-Policy"
CROSS_ORIGIN_EMBEDDER_POLICY = "Cross-Origin-Embedder-Policy"
CROSS_ORIGIN_RESOURCE_POLICY = "Cross-Origin-Resource-Policy"
X_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
REFERRER_POLICY = "Referrer-Policy"
PERMISSIONS_POLICY = "Permissions-Policy"

REPORT_TO_GROUP = "csp-endpoint"
REPORT_TO_MAX_AGE = 10_886_400  # 126 days


class HeaderEntry(NamedTuple):
    name: str
    value: str


ReportToFormatter = Callable[[str, str], str]


def format_report_to(group: str, url: str) -> str:
    """Default ``Report-To`` value: one endpoint group with a single URL."""
    return json.dumps(
        {"group": group, "max_age": REPORT_TO_MAX_AGE, "endpoints": [{"url": url}]},
        separators=(",", ":"),
    )


# -- HSTS ----------------------------------------------------------------


def build_hsts(settings: HstsSettings) -> HeaderEntry | None:
    if not settings.enabled:
        return None
    value = f"max-age={settings.max_age}"
    if settings.include_subdomains:
        value += "; includeSubDomains"
    if settings.preload:
        value += "; preload"
    return HeaderEntry(STRICT_TRANSPORT_SECURITY, value)


# -- Framing -------------------------------------------------------------


@dataclass(frozen=True)
class FramingDecision:
    """The legacy header value plus the ``frame-ancestors`` source list."""

    x_frame_options: str
    frame_ancestors: str


def decide_framing(settings: FramingSettings) -> FramingDecision:
    if settings.policy is FramingPolicy.SELF:
        return FramingDecision("SAMEORIGIN", "'self'")
    if settings.policy is FramingPolicy.CUSTOM and settings.custom_origins:
        # X-Frame-Options cannot express an allow-list.
        return FramingDecision("DENY", " ".join(settings.custom_origins))
    return FramingDecision("DENY", "'none'")


def build_framing(decision: FramingDecision) -> HeaderEntry:
    return HeaderEntry(X_FRAME_OPTIONS, decision.x_frame_options)


# -- CSP -----------------------------------------------------------------


def build_csp(
    settings: CspSettings,
    framing: FramingDecision,
    nonce: str,
    report_to_formatter: ReportToFormatter = format_report_to,
) -> list[HeaderEntry]:
    """Build the CSP header and, when a report endpoint is set, ``Report-To``.

    *nonce* must already be validated. A policy with unparsable clauses is
    passed through with the nonce substituted but nothing merged into it.
    """
    if not settings.enabled:
        return []

    directives = parse_with_nonce(settings.policy, nonce)
    try:
        require_well_formed(directives)
    except DirectiveMergeError as exc:
        logger.warning(
            "csp_policy_malformed",
            clauses=exc.context.get("clauses"),
            skipped=["frame-ancestors", "report-to"],
        )
    else:
        directives = ensure_directive(directives, "frame-ancestors", framing.frame_ancestors)
        if settings.report_to:
            directives = ensure_directive(directives, "report-to", REPORT_TO_GROUP)

    name = CONTENT_SECURITY_POLICY_REPORT_ONLY if settings.report_only else CONTENT_SECURITY_POLICY
    headers = [HeaderEntry(name, serialize_directives(directives))]
    if settings.report_to:
        headers.append(HeaderEntry(REPORT_TO, report_to_formatter(REPORT_TO_GROUP, settings.report_to)))
    return headers


# -- Cross-Origin --------------------------------------------------------


def build_cross_origin(settings: CrossOriginSettings) -> list[HeaderEntry]:
    pairs = (
        (CROSS_ORIGIN_OPENER_POLICY, settings.opener_policy),
        (CROSS_ORIGIN_EMBEDDER_POLICY, settings.embedder_policy),
        (CROSS_ORIGIN_RESOURCE_POLICY, settings.resource_policy),
    )
    return [HeaderEntry(name, value.value) for name, value in pairs if value is not None]


# -- Misc ----------------------------------------------------------------


def build_misc(config: SecureHeadersConfig) -> list[HeaderEntry]:
    headers = []
    if config.x_content_type_options:
        headers.append(HeaderEntry(X_CONTENT_TYPE_OPTIONS, "nosniff"))
    headers.append(HeaderEntry(REFERRER_POLICY, config.referrer_policy.value))
    return headers


# -- Permissions-Policy --------------------------------------------------


def build_permissions_policy(settings: PermissionsPolicySettings) -> HeaderEntry | None:
    if not settings.enabled:
        return None
    # Line breaks from multi-line input are not legal in a header value.
    return HeaderEntry(PERMISSIONS_POLICY, " ".join(settings.policy.split()))

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
"""Security headers configuration — the typed view consumed by the composer.

Every value here is already validated. Raw operator input goes through
:mod:`secure_headers.web.validation` first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

DEFAULT_HSTS_MAX_AGE = 31_536_000  # 1 year

DEFAULT_CSP_POLICY = (
    "default-src 'self' nonce-proxy; img-src 'self' data:; connect-src 'self'; "
    "form-action 'self'; upgrade-insecure-requests; block-all-mixed-content;"
)

DEFAULT_PERMISSIONS_POLICY = "geolocation=(), camera=(), microphone=(), usb=()"


class FramingPolicy(StrEnum):
    NONE = "none"
    SELF = "self"
    CUSTOM = "custom"


class CrossOriginOpenerPolicy(StrEnum):
    UNSAFE_NONE = "unsafe-none"
    SAME_ORIGIN_ALLOW_POPUPS = "same-origin-allow-popups"
    SAME_ORIGIN = "same-origin"


class CrossOriginEmbedderPolicy(StrEnum):
    UNSAFE_NONE = "unsafe-none"
    REQUIRE_CORP = "require-corp"


class CrossOriginResourcePolicy(StrEnum):
    SAME_SITE = "same-site"
    SAME_ORIGIN = "same-origin"
    CROSS_ORIGIN = "cross-origin"


class ReferrerPolicy(StrEnum):
    NO_REFERRER = "no-referrer"
    NO_REFERRER_WHEN_DOWNGRADE = "no-referrer-when-downgrade"
    ORIGIN = "origin"
    ORIGIN_WHEN_CROSS_ORIGIN = "origin-when-cross-origin"
    SAME_ORIGIN = "same-origin"
    STRICT_ORIGIN = "strict-origin"
    STRICT_ORIGIN_WHEN_CROSS_ORIGIN = "strict-origin-when-cross-origin"
    UNSAFE_URL = "unsafe-url"


@dataclass(frozen=True)
class HstsSettings:
    """Strict-Transport-Security.

    ``preload`` is only honoured by the preload lists together with
    ``include_subdomains`` and a long max-age; that is left to the operator.
    """

    enabled: bool = False
    max_age: int = DEFAULT_HSTS_MAX_AGE
    include_subdomains: bool = False
    preload: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_age, bool) or not isinstance(self.max_age, int) or self.max_age < 0:
            raise ValueError(f"HSTS max_age must be a non-negative integer, got {self.max_age!r}")


@dataclass(frozen=True)
class CspSettings:
    """Content-Security-Policy.

    ``policy`` is the raw directive list and may contain the ``nonce-proxy``
    placeholder. ``report_to`` is an endpoint URL, empty for none.
    """

    enabled: bool = False
    report_only: bool = False
    policy: str = DEFAULT_CSP_POLICY
    report_to: str = ""


@dataclass(frozen=True)
class FramingSettings:
    policy: FramingPolicy = FramingPolicy.SELF
    custom_origins: tuple[str, ...] = ()


@dataclass(frozen=True)
class CrossOriginSettings:
    """COOP / COEP / CORP. ``None`` means the header is not sent."""

    opener_policy: CrossOriginOpenerPolicy | None = CrossOriginOpenerPolicy.SAME_ORIGIN_ALLOW_POPUPS
    embedder_policy: CrossOriginEmbedderPolicy | None = None
    resource_policy: CrossOriginResourcePolicy | None = CrossOriginResourcePolicy.SAME_ORIGIN


@dataclass(frozen=True)
class PermissionsPolicySettings:
    enabled: bool = False
    policy: str = DEFAULT_PERMISSIONS_POLICY


@dataclass(frozen=True)
class SecureHeadersConfig:
    """Configuration for security response headers.

    Defaults are the operator-facing security defaults: HSTS off, CSP off,
    framing ``self``, COOP ``same-origin-allow-popups``, COEP unset, CORP
    ``same-origin``, nosniff on, ``strict-origin-when-cross-origin`` referrer
    policy, Permissions-Policy off.
    """

    hsts: HstsSettings = field(default_factory=HstsSettings)
    csp: CspSettings = field(default_factory=CspSettings)
    framing: FramingSettings = field(default_factory=FramingSettings)
    cross_origin: CrossOriginSettings = field(default_factory=CrossOriginSettings)
    x_content_type_options: bool = True
    referrer_policy: ReferrerPolicy = ReferrerPolicy.STRICT_ORIGIN_WHEN_CROSS_ORIGIN
    permissions_policy: PermissionsPolicySettings = field(default_factory=PermissionsPolicySettings)

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
"""Security headers configuration properties (secure_headers.*)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from secure_headers.core.config import config_properties
from secure_headers.web.security_headers import (
    DEFAULT_CSP_POLICY,
    DEFAULT_HSTS_MAX_AGE,
    DEFAULT_PERMISSIONS_POLICY,
    SecureHeadersConfig,
)
from secure_headers.web.validation import ConfigResolver


@config_properties(prefix="secure_headers")
class SecureHeadersProperties(BaseModel):
    """Operator-facing security header settings, as stored.

    Values are stored exactly as loaded (``"1"`` for a checkbox, ``2`` or
    ``1.5`` from a YAML typo) and only interpreted by :meth:`to_config`,
    which reports unusable ones and falls back to their defaults.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    # HSTS
    hsts_enabled: Any = False
    hsts_max_age: Any = str(DEFAULT_HSTS_MAX_AGE)
    hsts_include_subdomains: Any = False
    hsts_preload: Any = False

    # Content-Security-Policy
    csp_enabled: Any = False
    csp_report_only: Any = False
    csp_policy: Any = DEFAULT_CSP_POLICY
    csp_report_to: Any = ""

    # Framing
    framing_policy: Any = "self"
    framing_custom_origins: Any = ""

    # Cross-Origin
    coop_policy: Any = "same-origin-allow-popups"
    coep_policy: Any = ""
    corp_policy: Any = "same-origin"

    # Other headers
    x_content_type_options_enabled: Any = True
    referrer_policy: Any = "strict-origin-when-cross-origin"

    # Permissions-Policy
    permissions_policy_enabled: Any = False
    permissions_policy: Any = DEFAULT_PERMISSIONS_POLICY

    def to_config(self, resolver: ConfigResolver | None = None) -> SecureHeadersConfig:
        """Validate and default these values into the typed view."""
        return (resolver or ConfigResolver()).resolve(self.model_dump())

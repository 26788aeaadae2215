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
"""Raw configuration → :class:`SecureHeadersConfig`.

A malformed value never disables a protection silently and never aborts
startup: it is replaced by its documented fallback, recorded as a
:class:`ConfigParseError` and logged.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from typing import Any, TypeVar

import structlog

from secure_headers.kernel.exceptions import ConfigParseError
from secure_headers.web.security_headers import (
    DEFAULT_CSP_POLICY,
    DEFAULT_HSTS_MAX_AGE,
    DEFAULT_PERMISSIONS_POLICY,
    CrossOriginEmbedderPolicy,
    CrossOriginOpenerPolicy,
    CrossOriginResourcePolicy,
    CrossOriginSettings,
    CspSettings,
    FramingPolicy,
    FramingSettings,
    HstsSettings,
    PermissionsPolicySettings,
    ReferrerPolicy,
    SecureHeadersConfig,
)

logger = structlog.get_logger("secure_headers.config")

E = TypeVar("E", bound=StrEnum)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})
_DIGITS_RE = re.compile(r"[0-9]+")


class ConfigResolver:
    """Validates and defaults one raw configuration mapping.

    Field names are the operator-facing ones (``hsts_enabled``,
    ``framing_policy``, ...). Missing fields take their defaults without
    being reported; present but unusable fields are reported on
    :attr:`issues`.
    """

    def __init__(self) -> None:
        self.issues: list[ConfigParseError] = []

    def resolve(self, raw: Mapping[str, Any]) -> SecureHeadersConfig:
        self.issues = []

        hsts = HstsSettings(
            enabled=self._bool(raw, "hsts_enabled", False),
            max_age=self._max_age(raw, "hsts_max_age"),
            include_subdomains=self._bool(raw, "hsts_include_subdomains", False),
            preload=self._bool(raw, "hsts_preload", False),
        )
        csp = CspSettings(
            enabled=self._bool(raw, "csp_enabled", False),
            report_only=self._bool(raw, "csp_report_only", False),
            policy=self._text(raw, "csp_policy", DEFAULT_CSP_POLICY),
            report_to=self._text(raw, "csp_report_to", "").strip(),
        )
        cross_origin = CrossOriginSettings(
            opener_policy=self._optional_choice(
                raw, "coop_policy", CrossOriginOpenerPolicy, CrossOriginOpenerPolicy.SAME_ORIGIN_ALLOW_POPUPS
            ),
            embedder_policy=self._optional_choice(raw, "coep_policy", CrossOriginEmbedderPolicy, None),
            resource_policy=self._optional_choice(
                raw, "corp_policy", CrossOriginResourcePolicy, CrossOriginResourcePolicy.SAME_ORIGIN
            ),
        )
        permissions = PermissionsPolicySettings(
            enabled=self._bool(raw, "permissions_policy_enabled", False),
            policy=self._text(raw, "permissions_policy", DEFAULT_PERMISSIONS_POLICY),
        )

        return SecureHeadersConfig(
            hsts=hsts,
            csp=csp,
            framing=self._framing(raw),
            cross_origin=cross_origin,
            x_content_type_options=self._bool(raw, "x_content_type_options_enabled", True),
            referrer_policy=self._choice(
                raw, "referrer_policy", ReferrerPolicy, ReferrerPolicy.STRICT_ORIGIN_WHEN_CROSS_ORIGIN
            ),
            permissions_policy=permissions,
        )

    # -- field parsers ---------------------------------------------------

    def _report(self, field: str, value: Any, fallback: Any, reason: str) -> None:
        issue = ConfigParseError(field, value, fallback, reason)
        self.issues.append(issue)
        logger.warning(
            "security_header_config_invalid",
            field=field,
            value=value,
            fallback=fallback,
            reason=reason,
        )

    def _bool(self, raw: Mapping[str, Any], field: str, default: bool) -> bool:
        value = raw.get(field)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            token = value.strip().lower()
            if token in _TRUE:
                return True
            if token in _FALSE:
                return False
        self._report(field, value, default, "not a boolean")
        return default

    def _max_age(self, raw: Mapping[str, Any], field: str) -> int:
        value = raw.get(field)
        if value is None:
            return DEFAULT_HSTS_MAX_AGE
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        if isinstance(value, str) and _DIGITS_RE.fullmatch(value.strip()):
            try:
                return int(value.strip())
            except ValueError:
                # past the interpreter's int-string digit limit
                pass
        self._report(field, value, DEFAULT_HSTS_MAX_AGE, "not a non-negative integer")
        return DEFAULT_HSTS_MAX_AGE

    def _text(self, raw: Mapping[str, Any], field: str, default: str) -> str:
        value = raw.get(field)
        if value is None:
            return default
        if isinstance(value, str):
            return value
        self._report(field, value, default, "not a string")
        return default

    def _choice(self, raw: Mapping[str, Any], field: str, enum_cls: type[E], default: E) -> E:
        value = raw.get(field)
        if value is None:
            return default
        member = _lookup(enum_cls, value)
        if member is None:
            self._report(field, value, default.value, "unrecognized value")
            return default
        return member

    def _optional_choice(
        self, raw: Mapping[str, Any], field: str, enum_cls: type[E], default: E | None
    ) -> E | None:
        value = raw.get(field)
        if value is None:
            return default
        if isinstance(value, str) and not value.strip():
            return None
        member = _lookup(enum_cls, value)
        if member is None:
            self._report(field, value, "", "unrecognized value")
        return member

    def _framing(self, raw: Mapping[str, Any]) -> FramingSettings:
        policy = self._choice(raw, "framing_policy", FramingPolicy, FramingPolicy.SELF)
        if policy is not FramingPolicy.CUSTOM:
            return FramingSettings(policy=policy)

        value = raw.get("framing_custom_origins")
        if isinstance(value, str):
            origins = tuple(value.split())
        elif isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            origins = tuple(token for item in value for token in item.split())
        else:
            origins = ()
            if value is not None:
                self._report("framing_custom_origins", value, "", "not a string or list of strings")

        if not origins:
            self._report("framing_custom_origins", value, "'none'", "custom framing needs at least one origin")
        return FramingSettings(policy=policy, custom_origins=origins)


def _lookup(enum_cls: type[E], value: Any) -> E | None:
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return None


def resolve_config(raw: Mapping[str, Any]) -> SecureHeadersConfig:
    """Resolve a raw mapping, logging and discarding any issues."""
    return ConfigResolver().resolve(raw)

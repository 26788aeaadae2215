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
"""Web layer — security header configuration, composition and adapters."""

from secure_headers.web.builders import HeaderEntry, format_report_to
from secure_headers.web.composer import HeaderComposer, RequestContext, compose_headers
from secure_headers.web.nonce import NonceProvider, SecretsNonceProvider
from secure_headers.web.security_headers import (
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
from secure_headers.web.validation import ConfigResolver, resolve_config

__all__ = [
    "ConfigResolver",
    "CrossOriginEmbedderPolicy",
    "CrossOriginOpenerPolicy",
    "CrossOriginResourcePolicy",
    "CrossOriginSettings",
    "CspSettings",
    "FramingPolicy",
    "FramingSettings",
    "HeaderComposer",
    "HeaderEntry",
    "HstsSettings",
    "NonceProvider",
    "PermissionsPolicySettings",
    "ReferrerPolicy",
    "RequestContext",
    "SecretsNonceProvider",
    "SecureHeadersConfig",
    "compose_headers",
    "format_report_to",
    "resolve_config",
]

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
"""CSP nonce generation."""

from __future__ import annotations

import re
import secrets
from typing import Protocol, runtime_checkable

from secure_headers.kernel.exceptions import NonceGenerationError

MIN_NONCE_BYTES = 16

# base64url and standard base64 alphabets, the only characters allowed in a
# CSP nonce-source.
_NONCE_RE = re.compile(r"[A-Za-z0-9+/_-]+={0,2}")


@runtime_checkable
class NonceProvider(Protocol):
    """Produces one fresh, unpredictable token per request."""

    def generate(self) -> str: ...


class SecretsNonceProvider:
    """Default provider backed by the OS CSPRNG via :mod:`secrets`.

    ``secrets`` draws from ``os.urandom`` and is safe to call from any number
    of concurrent requests without locking.
    """

    def __init__(self, num_bytes: int = MIN_NONCE_BYTES) -> None:
        if num_bytes < MIN_NONCE_BYTES:
            raise ValueError(f"Nonces need at least {MIN_NONCE_BYTES} random bytes, got {num_bytes}")
        self._num_bytes = num_bytes

    def generate(self) -> str:
        """Return a URL-safe base64 token (22 characters for 16 bytes)."""
        try:
            return secrets.token_urlsafe(self._num_bytes)
        except (OSError, NotImplementedError) as exc:
            raise NonceGenerationError(
                "Randomness source unavailable; cannot generate CSP nonce",
                code="NONCE_RANDOMNESS",
            ) from exc


def validate_nonce(nonce: str | None) -> str:
    """Return *nonce* unchanged if it is usable inside ``'nonce-...'``.

    Raises:
        NonceGenerationError: if the nonce is missing, empty, or contains
            characters that could break out of the nonce-source.
    """
    if not nonce:
        raise NonceGenerationError("CSP nonce is missing", code="NONCE_MISSING")
    if not isinstance(nonce, str) or not _NONCE_RE.fullmatch(nonce):
        raise NonceGenerationError("CSP nonce contains invalid characters", code="NONCE_INVALID")
    return nonce

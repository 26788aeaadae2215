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
"""Tests for CSP nonce generation and validation."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from secure_headers.kernel.exceptions import NonceGenerationError
from secure_headers.web.nonce import NonceProvider, SecretsNonceProvider, validate_nonce


class TestSecretsNonceProvider:
    def test_implements_provider_protocol(self):
        assert isinstance(SecretsNonceProvider(), NonceProvider)

    def test_token_is_url_safe(self):
        nonce = SecretsNonceProvider().generate()
        assert len(nonce) == 22  # 16 bytes, base64url without padding
        assert validate_nonce(nonce) == nonce
        assert "+" not in nonce and "/" not in nonce

    def test_nonces_are_unique(self):
        provider = SecretsNonceProvider()
        nonces = {provider.generate() for _ in range(2000)}
        assert len(nonces) == 2000

    def test_rejects_too_few_bytes(self):
        with pytest.raises(ValueError):
            SecretsNonceProvider(num_bytes=8)

    def test_more_bytes_longer_token(self):
        assert len(SecretsNonceProvider(num_bytes=32).generate()) == 43

    def test_randomness_failure_raises_nonce_error(self):
        with patch("secure_headers.web.nonce.secrets.token_urlsafe", side_effect=OSError("no entropy")):
            with pytest.raises(NonceGenerationError) as exc_info:
                SecretsNonceProvider().generate()
        assert exc_info.value.code == "NONCE_RANDOMNESS"
        assert isinstance(exc_info.value.__cause__, OSError)


class TestValidateNonce:
    @pytest.mark.parametrize("nonce", ["abcDEF123", "a-b_c", "YWJj+/==", "deadbeef"])
    def test_accepts_base64_and_hex(self, nonce):
        assert validate_nonce(nonce) == nonce

    @pytest.mark.parametrize("nonce", [None, ""])
    def test_missing(self, nonce):
        with pytest.raises(NonceGenerationError) as exc_info:
            validate_nonce(nonce)
        assert exc_info.value.code == "NONCE_MISSING"

    @pytest.mark.parametrize("nonce", ["abc'; script-src *", "abc def", "abc\r\nX-Evil: 1", "a=b"])
    def test_rejects_injection(self, nonce):
        with pytest.raises(NonceGenerationError) as exc_info:
            validate_nonce(nonce)
        assert exc_info.value.code == "NONCE_INVALID"

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
"""Tests for the secure-headers exception hierarchy."""

from secure_headers.kernel.exceptions import (
    CompositionException,
    ConfigParseError,
    ConfigurationException,
    DirectiveMergeError,
    NonceGenerationError,
    SecureHeadersException,
)


class TestSecureHeadersException:
    def test_basic_creation(self):
        exc = SecureHeadersException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_context_not_shared(self):
        exc = SecureHeadersException("a")
        exc.context["key"] = "value"
        assert SecureHeadersException("b").context == {}


class TestConfigParseError:
    def test_carries_field_value_fallback(self):
        exc = ConfigParseError("hsts_max_age", "abc", 31536000, "not a non-negative integer")
        assert exc.field == "hsts_max_age"
        assert exc.value == "abc"
        assert exc.fallback == 31536000
        assert exc.code == "CONFIG_PARSE"
        assert "hsts_max_age" in str(exc) and "31536000" in str(exc)


class TestExceptionHierarchy:
    def test_config_parse_is_configuration(self):
        assert issubclass(ConfigParseError, ConfigurationException)
        assert issubclass(ConfigurationException, SecureHeadersException)

    def test_nonce_error_is_composition(self):
        assert issubclass(NonceGenerationError, CompositionException)
        assert issubclass(DirectiveMergeError, CompositionException)
        assert issubclass(CompositionException, SecureHeadersException)

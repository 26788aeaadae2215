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
"""Tests for ConfigResolver — raw configuration defaulting and validation."""

from __future__ import annotations

import pytest

from secure_headers.web.security_headers import (
    DEFAULT_CSP_POLICY,
    DEFAULT_PERMISSIONS_POLICY,
    CrossOriginEmbedderPolicy,
    CrossOriginOpenerPolicy,
    CrossOriginResourcePolicy,
    FramingPolicy,
    ReferrerPolicy,
    SecureHeadersConfig,
)
from secure_headers.web.validation import ConfigResolver, resolve_config


@pytest.fixture()
def resolver():
    return ConfigResolver()


class TestDefaults:
    def test_empty_mapping_gives_documented_defaults(self, resolver):
        config = resolver.resolve({})
        assert config == SecureHeadersConfig()
        assert resolver.issues == []

    def test_defaults_bit_for_bit(self):
        config = resolve_config({})
        assert config.hsts.enabled is False
        assert config.hsts.max_age == 31536000
        assert config.csp.enabled is False
        assert config.csp.policy == DEFAULT_CSP_POLICY
        assert config.framing.policy is FramingPolicy.SELF
        assert config.cross_origin.opener_policy is CrossOriginOpenerPolicy.SAME_ORIGIN_ALLOW_POPUPS
        assert config.cross_origin.embedder_policy is None
        assert config.cross_origin.resource_policy is CrossOriginResourcePolicy.SAME_ORIGIN
        assert config.x_content_type_options is True
        assert config.referrer_policy is ReferrerPolicy.STRICT_ORIGIN_WHEN_CROSS_ORIGIN
        assert config.permissions_policy.enabled is False
        assert config.permissions_policy.policy == DEFAULT_PERMISSIONS_POLICY


class TestBooleans:
    @pytest.mark.parametrize("value", [True, 1, "1", "true", "TRUE", " yes ", "on"])
    def test_truthy(self, resolver, value):
        assert resolver.resolve({"hsts_enabled": value}).hsts.enabled is True
        assert resolver.issues == []

    @pytest.mark.parametrize("value", [False, 0, "0", "false", "no", "off", ""])
    def test_falsy(self, resolver, value):
        assert resolver.resolve({"x_content_type_options_enabled": value}).x_content_type_options is False
        assert resolver.issues == []

    def test_garbage_falls_back_to_default(self, resolver):
        config = resolver.resolve({"x_content_type_options_enabled": "maybe"})
        assert config.x_content_type_options is True
        (issue,) = resolver.issues
        assert issue.field == "x_content_type_options_enabled"
        assert issue.fallback is True


class TestMaxAge:
    @pytest.mark.parametrize(("value", "expected"), [("86400", 86400), (" 600 ", 600), (0, 0), ("0", 0), (42, 42)])
    def test_valid(self, resolver, value, expected):
        assert resolver.resolve({"hsts_max_age": value}).hsts.max_age == expected
        assert resolver.issues == []

    @pytest.mark.parametrize("value", ["abc", "-1", -5, "1e6", "12.5", "", True, "+10"])
    def test_invalid_uses_default(self, resolver, value):
        config = resolver.resolve({"hsts_max_age": value})
        assert config.hsts.max_age == 31536000
        assert len(resolver.issues) == 1
        assert resolver.issues[0].field == "hsts_max_age"

    def test_oversized_digit_string_uses_default(self, resolver):
        config = resolver.resolve({"hsts_enabled": True, "hsts_max_age": "9" * 5000})
        assert config.hsts.enabled is True
        assert config.hsts.max_age == 31536000
        assert [issue.field for issue in resolver.issues] == ["hsts_max_age"]


class TestEnums:
    def test_referrer_policy_member(self, resolver):
        config = resolver.resolve({"referrer_policy": "no-referrer"})
        assert config.referrer_policy is ReferrerPolicy.NO_REFERRER

    def test_referrer_policy_normalized(self, resolver):
        config = resolver.resolve({"referrer_policy": "  Same-Origin "})
        assert config.referrer_policy is ReferrerPolicy.SAME_ORIGIN
        assert resolver.issues == []

    def test_referrer_policy_unrecognized_falls_back_to_default(self, resolver):
        config = resolver.resolve({"referrer_policy": "everything"})
        assert config.referrer_policy is ReferrerPolicy.STRICT_ORIGIN_WHEN_CROSS_ORIGIN
        assert resolver.issues[0].field == "referrer_policy"

    def test_cross_origin_empty_means_not_set(self, resolver):
        config = resolver.resolve({"coop_policy": "", "coep_policy": "", "corp_policy": "  "})
        assert config.cross_origin.opener_policy is None
        assert config.cross_origin.embedder_policy is None
        assert config.cross_origin.resource_policy is None
        assert resolver.issues == []

    def test_cross_origin_unrecognized_is_not_set(self, resolver):
        config = resolver.resolve({"coop_policy": "same-origin-plus", "coep_policy": "credentialless"})
        assert config.cross_origin.opener_policy is None
        assert config.cross_origin.embedder_policy is None
        assert {i.field for i in resolver.issues} == {"coop_policy", "coep_policy"}

    def test_cross_origin_members(self, resolver):
        config = resolver.resolve({"coop_policy": "same-origin", "coep_policy": "require-corp", "corp_policy": "cross-origin"})
        assert config.cross_origin.opener_policy is CrossOriginOpenerPolicy.SAME_ORIGIN
        assert config.cross_origin.embedder_policy is CrossOriginEmbedderPolicy.REQUIRE_CORP
        assert config.cross_origin.resource_policy is CrossOriginResourcePolicy.CROSS_ORIGIN

    def test_non_string_enum_value(self, resolver):
        config = resolver.resolve({"corp_policy": 3})
        assert config.cross_origin.resource_policy is None
        assert len(resolver.issues) == 1


class TestFraming:
    def test_unrecognized_policy_defaults_to_self(self, resolver):
        config = resolver.resolve({"framing_policy": "sometimes"})
        assert config.framing.policy is FramingPolicy.SELF
        assert resolver.issues[0].field == "framing_policy"

    def test_custom_origins_ignored_unless_custom(self, resolver):
        config = resolver.resolve({"framing_policy": "none", "framing_custom_origins": "https://a.example"})
        assert config.framing.custom_origins == ()
        assert resolver.issues == []

    def test_custom_origins_split_on_whitespace(self, resolver):
        config = resolver.resolve(
            {"framing_policy": "custom", "framing_custom_origins": "https://a.example\nhttps://b.example  https://c.example"}
        )
        assert config.framing.custom_origins == ("https://a.example", "https://b.example", "https://c.example")

    def test_custom_origins_from_list(self, resolver):
        config = resolver.resolve({"framing_policy": "custom", "framing_custom_origins": ["https://a.example"]})
        assert config.framing.custom_origins == ("https://a.example",)

    def test_custom_without_origins_reported(self, resolver):
        config = resolver.resolve({"framing_policy": "custom", "framing_custom_origins": "   "})
        assert config.framing.policy is FramingPolicy.CUSTOM
        assert config.framing.custom_origins == ()
        assert resolver.issues[0].field == "framing_custom_origins"


class TestText:
    def test_report_to_is_stripped(self, resolver):
        config = resolver.resolve({"csp_report_to": "  https://r.example/csp  "})
        assert config.csp.report_to == "https://r.example/csp"

    def test_non_string_policy_falls_back(self, resolver):
        config = resolver.resolve({"csp_policy": 12})
        assert config.csp.policy == DEFAULT_CSP_POLICY
        assert resolver.issues[0].field == "csp_policy"

    def test_issues_reset_between_resolves(self, resolver):
        resolver.resolve({"hsts_max_age": "x"})
        resolver.resolve({})
        assert resolver.issues == []

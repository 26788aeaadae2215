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
"""Tests for StructlogAdapter."""

import logging

from secure_headers.core.config import Config
from secure_headers.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_level_and_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"secure_headers": {"logging": {"level": "debug", "format": "JSON"}}}))
        assert adapter._root_level == "DEBUG"
        assert adapter._format == "json"

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"secure_headers": {"logging": {"levels": {"secure_headers.config": "error"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"secure_headers.config": "ERROR"}
        assert logging.getLogger("secure_headers.config").level == logging.ERROR

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SECURE_HEADERS_LOGGING_FORMAT", "json")
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._format == "json"


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("secure_headers.test")
        assert callable(getattr(logger, "warning", None))

    def test_set_level_unknown_level_defaults_to_info(self):
        adapter = StructlogAdapter()
        adapter.set_level("secure_headers.test", "LOUD")
        assert logging.getLogger("secure_headers.test").level == logging.INFO

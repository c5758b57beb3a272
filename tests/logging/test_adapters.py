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
"""Tests for StructlogAdapter and configure_logging."""

import logging

import pytest
import structlog

from cacheman.core.config import Config
from cacheman.logging import StructlogAdapter, configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.root_level == "INFO"
        assert adapter.format == "console"
        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

    def test_configure_reads_levels_and_format(self):
        adapter = StructlogAdapter()
        config = Config(
            {"cacheman": {"logging": {"format": "JSON", "level": {"root": "debug", "cacheman.cache": "warning"}}}}
        )
        adapter.configure(config)
        assert adapter.root_level == "DEBUG"
        assert adapter.format == "json"
        assert adapter.logger_levels == {"cacheman.cache": "WARNING"}
        assert logging.getLogger("cacheman.cache").level == logging.WARNING
        assert logging.getLogger().level == logging.DEBUG
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

    def test_unknown_level_falls_back_to_info(self):
        adapter = StructlogAdapter()
        adapter.set_level("cacheman.test.unknown", "chatty")
        assert logging.getLogger("cacheman.test.unknown").level == logging.INFO

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("cacheman.test.level", "ERROR")
        assert logging.getLogger("cacheman.test.level").level == logging.ERROR


class TestConfigureLogging:
    def test_returns_configured_adapter(self):
        adapter = configure_logging(Config({"cacheman": {"logging": {"format": "json"}}}))
        assert isinstance(adapter, StructlogAdapter)
        assert adapter.format == "json"

    def test_env_override_selects_format(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CACHEMAN_LOGGING_FORMAT", "json")
        adapter = configure_logging(Config({}))
        assert adapter.format == "json"

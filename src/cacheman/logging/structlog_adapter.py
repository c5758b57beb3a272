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
"""Route cacheman's structlog events to stdout as console lines or JSON."""

from __future__ import annotations

import logging
import sys

import structlog

from cacheman.config.properties.logging import LoggingProperties
from cacheman.core.config import Config

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
)


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


class StructlogAdapter:
    """Applies a cacheman.logging section to structlog and the stdlib root.

    level.root sets the root level; every other level entry names a
    logger (cacheman.cache: DEBUG) and overrides it.
    """

    def __init__(self) -> None:
        self.format = "console"
        self.root_level = "INFO"
        self.logger_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        props = config.bind(LoggingProperties)
        levels = {str(name): str(level).upper() for name, level in props.level.items()}
        self.root_level = levels.pop("root", "INFO")
        self.logger_levels = levels
        self.format = props.format.lower()

        structlog.configure(
            processors=[*_SHARED_PROCESSORS, _renderer(self.format)],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level(self.root_level), force=True)
        for name, level in self.logger_levels.items():
            self.set_level(name, level)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))

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
"""cacheman logging setup."""

from __future__ import annotations

from cacheman.core.config import Config
from cacheman.logging.structlog_adapter import StructlogAdapter


def configure_logging(config: Config) -> StructlogAdapter:
    """Configure structlog from the cacheman.logging section of *config*."""
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter


__all__ = ["StructlogAdapter", "configure_logging"]

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
"""Cache configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from cacheman.core.config import config_properties


@config_properties(prefix="cacheman.cache")
@dataclass
class CacheProperties:
    """Configuration for a cache facade and its engine (cacheman.cache.*).

    ``ttl`` is the engine default in seconds; zero or less disables expiry.
    ``background_writes`` makes the population writes of ``wrap`` and the
    delete of ``pull`` fire-and-forget instead of awaited.
    """

    engine: str = "memory"
    prefix: str = "cacheman"
    delimiter: str = ":"
    ttl: int = 60
    background_writes: bool = False
    redis: dict = field(default_factory=lambda: {"url": "redis://localhost:6379/0"})
    mongo: dict = field(
        default_factory=lambda: {
            "url": "mongodb://localhost:27017",
            "database": "cacheman",
            "collection": "cacheman",
        }
    )

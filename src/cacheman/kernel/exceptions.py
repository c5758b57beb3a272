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
"""Unified exception hierarchy for cacheman.

All library exceptions inherit from CachemanException, enabling unified
error handling across modules.

Categories:
- BusinessException: caller mistakes such as invalid cache keys
- InfrastructureException: cache engine and configuration failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CachemanException(Exception):
    """Base exception for all cacheman errors.

    Carries an optional error code and context dict for structured error data.
    Catch CachemanException to handle every library error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_ENGINE_ERROR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(CachemanException):
    """Errors caused by how the cache is being called."""


class ValidationException(BusinessException):
    """Input validation failures."""


class InvalidCacheKeyException(ValidationException):
    """A cache key is not a non-empty string."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CachemanException):
    """Infrastructure failures: cache engines, connections, configuration."""


class CacheEngineException(InfrastructureException):
    """The underlying cache engine reported an error.

    The original engine error is always chained as ``__cause__``.
    """


class InvalidConfigurationException(InfrastructureException):
    """Cache options cannot be turned into a working engine."""

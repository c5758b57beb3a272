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
"""Declarative caching decorators built on :class:`Cacheman`."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from cacheman.cache.facade import TTL, Cacheman

F = TypeVar("F", bound=Callable[..., Any])


def _resolve_key(sig: inspect.Signature, template: str, args: tuple, kwargs: dict) -> str:
    bound = sig.bind(*args, **kwargs)
    bound.apply_defaults()
    return template.format(**bound.arguments)


def cached(cache: Cacheman, key: str, ttl: TTL = None) -> Callable[[F], F]:
    """Memoize a function through ``cache.wrap``.

    The `key` parameter supports format-string interpolation with function
    argument names: `key="user:{user_id}"` expands `{user_id}` from the call.
    The decorated function may be sync or async; the wrapper is always async.

    Args:
        cache: Facade to store results in.
        key: Key template with {param} placeholders.
        ttl: Optional time-to-live for stored results.
    """

    def decorator(func: F) -> F:
        sig = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            resolved_key = _resolve_key(sig, key, args, kwargs)
            return await cache.wrap(resolved_key, lambda: func(*args, **kwargs), ttl)

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_evict(cache: Cacheman, key: str = "", all_entries: bool = False) -> Callable[[F], F]:
    """Delete a cache entry (or the whole namespace) after the function runs.

    Args:
        cache: Facade to evict from.
        key: Key template with {param} placeholders. Ignored when *all_entries* is ``True``.
        all_entries: When ``True``, clear the namespace instead.
    """

    def decorator(func: F) -> F:
        sig = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            if all_entries:
                await cache.clear()
            else:
                await cache.delete(_resolve_key(sig, key, args, kwargs))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator

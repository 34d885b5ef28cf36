"""
Adapters Package

External service integrations.

Contents:
=========
- redis_adapter: Redis client used by the session store

Usage:
======
    from ocwiki.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
"""

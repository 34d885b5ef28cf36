"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Constant-time compare, session tokens, password hashing
- randomization: Day-seeded deterministic shuffles
- text: Slug generation

Usage:
======
    from ocwiki.shared.utils.security import SecurityUtils
    from ocwiki.shared.utils.randomization import get_random_items
"""

from ocwiki.shared.utils.security import SecurityUtils
from ocwiki.shared.utils.randomization import (
    get_day_seed,
    seeded_random,
    seeded_shuffle,
    get_random_items,
)
from ocwiki.shared.utils.text import slugify

__all__ = [
    "SecurityUtils",
    "get_day_seed",
    "seeded_random",
    "seeded_shuffle",
    "get_random_items",
    "slugify",
]

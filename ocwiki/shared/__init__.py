"""
Shared Module

Code shared by the API layer and any scripts:
- Core: Logging, exceptions
- Utils: Security, deterministic randomization, slugs
- Services: Auth flow, session store, rate limiter
- Schemas: Pydantic request/response models
- Adapters: External service integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── utils/          ← Security, randomization, text helpers
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    └── adapters/       ← Redis

Usage:
======
    from ocwiki.shared.utils.security import SecurityUtils
    from ocwiki.shared.utils.randomization import get_random_items
    from ocwiki.shared.core import logger, WikiException
"""

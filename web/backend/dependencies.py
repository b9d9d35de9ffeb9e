#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from fastapi import Depends

from servicematch.app_context import AppContext
from servicematch.directory import ProviderDirectory
from .config import get_config


@lru_cache()
def get_app_context() -> AppContext:
    """
    FastAPI dependency returning the process-wide AppContext.

    Built on first use from get_config(); tests override it through
    app.dependency_overrides.

    Usage:
        @router.post("/endpoint")
        async def my_endpoint(ctx: AppContext = Depends(get_app_context)):
            ...
    """
    return AppContext.build(get_config())


def get_provider_directory(ctx: AppContext = Depends(get_app_context)) -> ProviderDirectory:
    """Provider pool the matching routes read from."""
    return ctx.directory

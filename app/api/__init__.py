"""API layer package: application factory, routers, middleware and error handlers."""

from .application import create_api_application

__all__ = ["create_api_application"]

"""Persistence handles wired into the application at construction time."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from .base import PersistenceError
from .products import ProductRepository
from .users import UserRepository

EXTENSION_KEY = "repositories"


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    products: ProductRepository


def init_app(app: Flask, session) -> Repositories:
    """Build the repositories on ``session`` and attach them to ``app``."""

    repositories = Repositories(
        users=UserRepository(session),
        products=ProductRepository(session),
    )
    app.extensions[EXTENSION_KEY] = repositories
    return repositories


def get_repositories() -> Repositories:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "PersistenceError",
    "ProductRepository",
    "Repositories",
    "UserRepository",
    "get_repositories",
    "init_app",
]

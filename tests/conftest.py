"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from sketchparse import IdentifierManager, SyntaxManager
from sketchparse.nodes import NodeRegistry

LOGIN_FLOW = "\n".join(
    [
        "start->login",
        "login-Yes->dashboard",
        "login-No->retry",
        "retry->login",
        "=rename(login, Login Page)",
        "=layout(decision)",
    ]
)


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def login_flow() -> str:
    """The sign-in decision flow used by the end-to-end checks."""
    return LOGIN_FLOW


@pytest.fixture
def identifiers() -> IdentifierManager:
    return IdentifierManager()


@pytest.fixture
def registry(identifiers: IdentifierManager) -> NodeRegistry:
    return NodeRegistry(identifiers)


@pytest.fixture
def manager() -> SyntaxManager:
    return SyntaxManager()

"""Pytest configuration and shared fixtures for all tests."""

import sys
from pathlib import Path

# Добавить корень проекта в PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from qrpay.capacity import Ecc
from qrpay.qr_generator import encode_text


@pytest.fixture
def hello_world_symbol():
    """'HELLO WORLD' at QUARTILE: the classic version 1 alphanumeric example."""
    return encode_text("HELLO WORLD", Ecc.QUARTILE)


@pytest.fixture
def client():
    """Flask test client for the web application."""
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client

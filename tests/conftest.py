from __future__ import annotations

import pytest

from unistore import ErrorHandler


@pytest.fixture
def error_handler() -> ErrorHandler:
    return ErrorHandler(log_to_console=False)


@pytest.fixture
def reported(error_handler: ErrorHandler) -> list:
    received: list = []
    error_handler.register_handler(received.append)
    return received

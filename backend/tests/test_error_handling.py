"""
Tests for the route error decorator.
"""

import asyncio
import inspect

import pytest

from core.error_handling import handle_api_errors
from core.exceptions import InternalError, NotFoundError
from modules.auth.routes.auth_routes import register, login


class FakeSession:
    def __init__(self):
        self.rolled_back = False

    def rollback(self):
        self.rolled_back = True


class TestHandleApiErrors:

    def test_sync_handler_stays_sync(self):
        @handle_api_errors("Błąd")
        def handler(db=None):
            return {"ok": True}

        assert not inspect.iscoroutinefunction(handler)
        assert handler(db=FakeSession()) == {"ok": True}

    def test_sync_handler_failure_rolls_back(self):
        session = FakeSession()

        @handle_api_errors("Błąd rejestracji")
        def handler(db=None):
            raise RuntimeError("boom")

        with pytest.raises(InternalError) as exc_info:
            handler(db=session)
        assert exc_info.value.detail == "Błąd rejestracji"
        assert session.rolled_back

    def test_async_handler_passes_api_errors_through(self):
        @handle_api_errors("Błąd")
        async def handler(db=None):
            raise NotFoundError("Nie znaleziono kodu.")

        assert inspect.iscoroutinefunction(handler)
        with pytest.raises(NotFoundError):
            asyncio.run(handler(db=FakeSession()))

    def test_password_hashing_routes_run_in_threadpool(self):
        assert not inspect.iscoroutinefunction(register)
        assert not inspect.iscoroutinefunction(login)

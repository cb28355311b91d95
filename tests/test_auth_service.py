"""Integration tests for app.services.auth: login, token refresh and the generic login failure."""

import unittest
from datetime import timedelta
from unittest.mock import patch

from app.core.exceptions import NotFoundError, UnauthorizedError
from app.core.security import TokenService
from app.models import User, UserRole
from app.services.auth import (
    INCORRECT_PASSWORD_MESSAGE,
    INVALID_TOKEN_MESSAGE,
    LOGIN_FAILED_MESSAGE,
)
from tests._support import (
    MOCK_CREATE_USER,
    create_user,
    make_engine,
    make_services,
    make_session_factory,
    make_token_service,
)


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.db = make_session_factory(self.engine)()
        self.users, self.auth = make_services(self.db)
        self.tokens = make_token_service()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class TestLogin(AuthServiceTestCase):
    def test_login_returns_token_and_user_without_password(self) -> None:
        created = create_user(self.users)

        result = self.auth.login(created.email, MOCK_CREATE_USER["password"])

        self.assertTrue(result.token)
        self.assertEqual(result.user["id"], created.id)
        self.assertEqual(result.user["email"], created.email)
        self.assertEqual(result.user["name"], created.name)
        self.assertNotIn("password", result.user)

        decoded = self.tokens.verify(result.token)
        self.assertEqual(decoded["email"], "joao@email.com")
        self.assertEqual(decoded["id"], created.id)
        self.assertEqual(decoded["role"], UserRole.USER.value)

    def test_unknown_email_raises_not_found(self) -> None:
        self.assertEqual(self.db.query(User).count(), 0)
        with self.assertRaises(NotFoundError) as ctx:
            self.auth.login("fakeMockedUser@mail.com", "123123")
        self.assertEqual(ctx.exception.message, "Usuário não encontrado")

    def test_wrong_password_raises_unauthorized(self) -> None:
        created = create_user(self.users)
        with self.assertRaises(UnauthorizedError) as ctx:
            self.auth.login(created.email, "wrongpassword")
        self.assertEqual(ctx.exception.message, INCORRECT_PASSWORD_MESSAGE)
        self.assertEqual(ctx.exception.message, "Senha incorreta.")

    def test_unexpected_error_is_narrowed_to_generic_unauthorized(self) -> None:
        with patch.object(
            self.users, "find_one_by_email", side_effect=RuntimeError("Erro inesperado")
        ), self.assertLogs("app.services.auth", level="ERROR"):
            with self.assertRaises(UnauthorizedError) as ctx:
                self.auth.login("qualquer@email.com", "qualquer")
        self.assertEqual(ctx.exception.message, LOGIN_FAILED_MESSAGE)
        self.assertNotIn("inesperado", ctx.exception.message)


class TestLoginWithJwt(AuthServiceTestCase):
    def test_refresh_returns_fresh_token_and_user(self) -> None:
        created = create_user(self.users)
        login = self.auth.login(created.email, MOCK_CREATE_USER["password"])

        result = self.auth.login_with_jwt(login.token)

        self.assertTrue(result.token)
        self.assertEqual(result.user["id"], created.id)
        self.assertEqual(result.user["email"], created.email)
        self.assertNotIn("password", result.user)
        self.assertEqual(self.tokens.verify(result.token)["id"], created.id)

    def test_refresh_reloads_current_role(self) -> None:
        created = create_user(self.users)
        login = self.auth.login(created.email, MOCK_CREATE_USER["password"])
        self.users.update(created.id, {"role": UserRole.ADMIN})

        result = self.auth.login_with_jwt(login.token)

        self.assertEqual(result.user["role"], UserRole.ADMIN)
        self.assertEqual(self.tokens.verify(result.token)["role"], "admin")

    def test_garbage_token_raises_unauthorized(self) -> None:
        with self.assertRaises(UnauthorizedError) as ctx:
            self.auth.login_with_jwt("invalidToken")
        self.assertEqual(ctx.exception.message, INVALID_TOKEN_MESSAGE)

    def test_token_signed_with_other_secret_raises_unauthorized(self) -> None:
        created = create_user(self.users)

        forged = TokenService("another-secret").issue({"id": created.id, "email": created.email})
        with self.assertRaises(UnauthorizedError) as ctx:
            self.auth.login_with_jwt(forged)
        self.assertEqual(ctx.exception.message, INVALID_TOKEN_MESSAGE)

    def test_expired_token_raises_unauthorized(self) -> None:
        created = create_user(self.users)
        expired = self.tokens.issue(
            {"email": created.email, "id": created.id},
            expires_delta=timedelta(seconds=-10),
        )
        with self.assertRaises(UnauthorizedError) as ctx:
            self.auth.login_with_jwt(expired)
        self.assertEqual(ctx.exception.message, "Token inválido ou expirado")

    def test_token_without_email_raises_unauthorized(self) -> None:
        token = self.tokens.issue({"id": 1})
        with self.assertRaises(UnauthorizedError):
            self.auth.login_with_jwt(token)

    def test_deleted_user_raises_not_found(self) -> None:
        created = create_user(self.users)
        login = self.auth.login(created.email, MOCK_CREATE_USER["password"])
        self.users.remove(created.id)

        with self.assertRaises(NotFoundError) as ctx:
            self.auth.login_with_jwt(login.token)
        self.assertEqual(ctx.exception.message, "Usuário não encontrado")


class TestAuthenticate(AuthServiceTestCase):
    def test_returns_principal(self) -> None:
        created = create_user(self.users, role=UserRole.ADMIN)
        login = self.auth.login(created.email, MOCK_CREATE_USER["password"])

        principal = self.auth.authenticate(login.token)

        self.assertEqual(principal.id, created.id)
        self.assertEqual(principal.role, UserRole.ADMIN)


if __name__ == "__main__":
    unittest.main()

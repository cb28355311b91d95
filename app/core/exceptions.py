"""Domain errors raised by services. The HTTP layer maps each kind to a status code."""


class AppError(Exception):
    """Base for errors carrying a fixed, user-facing message."""

    code = "APP_ERROR"
    default_message = "Erro inesperado"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmailError(AppError):
    """Another user already has this email."""

    code = "DUPLICATE_EMAIL"
    default_message = "Já existe um usuário com esse e-mail"


class NotFoundError(AppError):
    code = "NOT_FOUND"
    default_message = "Usuário não encontrado"


class EmptyUpdateError(AppError):
    """Update payload carried no recognised field."""

    code = "EMPTY_UPDATE"
    default_message = "Nenhum campo válido para atualizar"


class InvalidCredentialError(AppError):
    """Current password did not match on a password change."""

    code = "INVALID_CREDENTIAL"
    default_message = "Senha atual incorreta"


class UnauthorizedError(AppError):
    """Bad password, bad or expired token, or a failed login."""

    code = "UNAUTHORIZED"
    default_message = "Não autenticado"


class ForbiddenError(AppError):
    code = "FORBIDDEN"
    default_message = "Acesso negado"

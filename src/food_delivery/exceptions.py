"""
Доменные исключения. Обработчики в main.py превращают их в ответы
вида {"message": ...} с соответствующим HTTP-статусом.
"""


class AuthenticationError(Exception):
    status_code = 401


class AccessDeniedError(Exception):
    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotFoundError(LookupError):
    status_code = 404


class BusinessRuleError(ValueError):
    status_code = 400

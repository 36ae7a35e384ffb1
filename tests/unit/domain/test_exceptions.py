"""Unit tests for the shared exception taxonomy."""

from tollgate.domain.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainException,
    ErrorCode,
    InternalError,
    NotFoundError,
    ValidationError,
)


class TestDomainExceptions:
    def test_default_codes(self):
        assert ValidationError("bad").code == ErrorCode.VALIDATION_ERROR
        assert ConflictError("dup").code == ErrorCode.EMAIL_ALREADY_REGISTERED
        assert AuthenticationError().code == ErrorCode.AUTHENTICATION_FAILED
        assert AuthorizationError().code == ErrorCode.ACCESS_DENIED
        assert NotFoundError("gone").code == ErrorCode.ENTITY_NOT_FOUND
        assert InternalError().code == ErrorCode.INTERNAL_ERROR

    def test_all_inherit_domain_exception(self):
        for exc in (
            ValidationError("x"),
            ConflictError("x"),
            AuthenticationError(),
            AuthorizationError(),
            NotFoundError("x"),
            InternalError(),
        ):
            assert isinstance(exc, DomainException)

    def test_str_is_message_and_details_default_empty(self):
        exc = AuthenticationError("Invalid email or password")

        assert str(exc) == "Invalid email or password"
        assert exc.details == {}

    def test_repr_includes_code(self):
        exc = NotFoundError("User not found", ErrorCode.USER_NOT_FOUND, {"id": 1})

        assert "USER_NOT_FOUND" in repr(exc)
        assert "'id': 1" in repr(exc)

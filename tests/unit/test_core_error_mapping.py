"""Unit tests for backend error mapping (database, auth, validation)."""

import pytest
from pydantic import BaseModel, EmailStr, Field, ValidationError, model_validator

from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors import (
    ROOT_FIELD_KEY,
    AuthProviderError,
    DatabaseErrorInfo,
    map_auth_error,
    map_database_error,
    map_validation_error,
)


def _db_error(code: str, message: str = "error", details: str | None = None):
    return DatabaseErrorInfo(code=code, message=message, details=details)


@pytest.mark.unit
class TestMapDatabaseError:
    def test_unique_violation_names_the_field(self):
        error = map_database_error(
            _db_error(
                "23505",
                "duplicate key value violates unique constraint \"uq_clients_email\"",
                "Key (email)=(contact@acme.com) already exists.",
            )
        )

        assert error.code is ErrorCode.DUPLICATE_ENTRY
        assert error.message == "A record with this email already exists"
        assert error.details["field"] == "email"

    def test_unique_violation_field_with_underscores(self):
        error = map_database_error(
            _db_error("23505", details="Key (tax_number)=(123) already exists.")
        )

        assert error.message == "A record with this tax number already exists"

    def test_unique_violation_uses_field_label(self):
        error = map_database_error(
            _db_error("23505", details="Key (phone)=(555-0100) already exists.")
        )

        assert error.message == "A record with this phone number already exists"
        assert error.details["field"] == "phone"

    def test_unique_violation_without_details_uses_generic_message(self):
        error = map_database_error(_db_error("23505"))

        assert error.code is ErrorCode.DUPLICATE_ENTRY
        assert error.message == "A record with this value already exists"
        assert "field" not in error.details

    def test_foreign_key_violation(self):
        error = map_database_error(_db_error("23503"))

        assert error.code is ErrorCode.HAS_DEPENDENCIES

    def test_not_null_violation_extracts_column(self):
        error = map_database_error(
            _db_error("23502", 'null value in column "name" violates not-null constraint')
        )

        assert error.code is ErrorCode.VALIDATION_ERROR
        assert error.details == {"field": "name"}

    def test_check_violation(self):
        assert map_database_error(_db_error("23514")).code is ErrorCode.VALIDATION_ERROR

    def test_insufficient_privilege(self):
        assert map_database_error(_db_error("42501")).code is ErrorCode.FORBIDDEN

    def test_no_rows(self):
        assert map_database_error(_db_error("PGRST116")).code is ErrorCode.NOT_FOUND

    @pytest.mark.parametrize("code", ["PGRST301", "PGRST302"])
    def test_jwt_errors_expire_the_session(self, code):
        assert map_database_error(_db_error(code)).code is ErrorCode.SESSION_EXPIRED

    def test_unknown_code_keeps_original(self):
        error = map_database_error(_db_error("XX000", "internal error"))

        assert error.code is ErrorCode.DATABASE_ERROR
        assert error.details == {"originalCode": "XX000", "originalMessage": "internal error"}


@pytest.mark.unit
class TestMapAuthError:
    @pytest.mark.parametrize(
        ("provider_code", "expected"),
        [
            ("invalid_credentials", ErrorCode.INVALID_CREDENTIALS),
            ("email_not_confirmed", ErrorCode.FORBIDDEN),
            ("session_expired", ErrorCode.SESSION_EXPIRED),
            ("refresh_token_not_found", ErrorCode.SESSION_EXPIRED),
            ("bad_jwt", ErrorCode.SESSION_EXPIRED),
            ("same_password", ErrorCode.VALIDATION_ERROR),
            ("over_request_rate_limit", ErrorCode.FORBIDDEN),
            ("user_not_found", ErrorCode.NOT_FOUND),
            ("user_already_exists", ErrorCode.DUPLICATE_ENTRY),
            ("email_exists", ErrorCode.DUPLICATE_ENTRY),
            ("signup_disabled", ErrorCode.FORBIDDEN),
            ("user_banned", ErrorCode.FORBIDDEN),
        ],
    )
    def test_known_codes(self, provider_code, expected):
        error = map_auth_error(AuthProviderError("provider says no", code=provider_code))

        assert error.code is expected

    def test_invalid_credentials_message(self):
        error = map_auth_error(
            AuthProviderError("Invalid login credentials", code="invalid_credentials")
        )

        assert error.message == "Invalid email or password"
        assert error.details is None

    def test_weak_password_keeps_provider_message(self):
        error = map_auth_error(
            AuthProviderError("Password should contain a digit", code="weak_password")
        )

        assert error.code is ErrorCode.VALIDATION_ERROR
        assert error.details == {"originalMessage": "Password should contain a digit"}

    def test_unknown_code_is_not_authenticated(self):
        error = map_auth_error(AuthProviderError("Something odd", code="mystery_code"))

        assert error.code is ErrorCode.NOT_AUTHENTICATED
        assert error.details == {"code": "mystery_code", "originalMessage": "Something odd"}

    def test_missing_code_is_not_authenticated(self):
        error = map_auth_error(AuthProviderError("Gateway down"))

        assert error.code is ErrorCode.NOT_AUTHENTICATED
        assert error.details["code"] is None


class _Signup(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1)
    password: str = Field(min_length=8)
    confirm: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm:
            raise ValueError("Passwords do not match")
        return self


@pytest.mark.unit
class TestMapValidationError:
    def _error(self, data) -> ValidationError:
        with pytest.raises(ValidationError) as exc_info:
            _Signup.model_validate(data)
        return exc_info.value

    def test_groups_messages_by_field(self):
        error = map_validation_error(
            self._error({"email": "not-an-email", "name": "", "password": "x", "confirm": "x"})
        )

        assert error.code is ErrorCode.VALIDATION_ERROR
        assert set(error.details["fieldErrors"]) == {"email", "name", "password"}
        assert error.message == "Invalid input: email, name, password"

    def test_issues_keep_path_and_type(self):
        error = map_validation_error(
            self._error({"email": "a@b.com", "name": "A", "password": "x", "confirm": "x"})
        )

        [issue] = error.details["issues"]
        assert issue["path"] == ["password"]
        assert issue["type"] == "string_too_short"

    def test_root_issue_uses_root_key(self):
        error = map_validation_error(
            self._error(
                {"email": "a@b.com", "name": "A", "password": "password1", "confirm": "other123"}
            )
        )

        assert list(error.details["fieldErrors"]) == [ROOT_FIELD_KEY]
        assert error.message.startswith("Invalid input: ")
        assert "Passwords do not match" in error.message

"""Unit tests for the API key check."""

import pytest

from product_catalog.api.auth import check_api_key
from product_catalog.core.exceptions import (
    ErrorCode,
    ForbiddenError,
    UnauthorizedError,
)

SECRET = "s3cret-key"


@pytest.mark.unit
class TestCheckApiKey:
    """Test admission decisions for presented keys."""

    def test_matching_key_is_admitted(self) -> None:
        assert check_api_key(SECRET, SECRET) is None

    @pytest.mark.parametrize("presented", [None, ""])
    def test_missing_key_is_unauthorized(self, presented: str | None) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            check_api_key(presented, SECRET)

        assert exc_info.value.status_code == 401
        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED.value
        assert exc_info.value.message == "API key is required in x-api-key header"

    @pytest.mark.parametrize("presented", ["wrong", SECRET.upper(), SECRET + " "])
    def test_wrong_key_is_forbidden(self, presented: str) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            check_api_key(presented, SECRET)

        assert exc_info.value.status_code == 403
        assert exc_info.value.error_code == ErrorCode.FORBIDDEN.value
        assert exc_info.value.message == "Invalid API key"

    def test_non_ascii_key_is_compared(self) -> None:
        with pytest.raises(ForbiddenError):
            check_api_key("clé", SECRET)

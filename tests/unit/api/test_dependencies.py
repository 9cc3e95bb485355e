"""
Unit tests for src/api/dependencies.py and src/middleware/cors.py
"""

import pytest
from fastapi import HTTPException

from src.api.dependencies import parse_bearer
from src.middleware.cors import parse_origins


class TestParseBearer:
    """Tests for parse_bearer function."""

    def test_valid(self):
        assert parse_bearer("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_case_insensitive_scheme(self):
        assert parse_bearer("bearer token") == "token"

    @pytest.mark.parametrize(
        "header",
        [None, "", "token", "Basic abc", "Bearer", "Bearer a b", "Bearer null", "Bearer undefined"],
    )
    def test_rejected(self, header):
        with pytest.raises(HTTPException) as exc_info:
            parse_bearer(header)

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


class TestParseOrigins:
    """Tests for parse_origins function."""

    def test_list(self):
        assert parse_origins("https://a.example, https://b.example") == [
            "https://a.example",
            "https://b.example",
        ]

    def test_blank_is_wildcard(self):
        assert parse_origins(" , ") == ["*"]

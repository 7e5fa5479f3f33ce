"""Tests for identifier normalization."""

import pytest

from modelgen.codegen.core.naming import (
    avoid_reserved,
    lower_first,
    normalize_identifier,
)


class TestNormalizeIdentifier:
    """Raw database names to Go identifiers."""

    def test_snake_case_capitalized(self):
        assert normalize_identifier("created_at", True) == "CreatedAt"

    def test_snake_case_lower_first(self):
        assert normalize_identifier("created_at", False) == "createdAt"

    def test_id(self):
        assert normalize_identifier("id", True) == "Id"

    def test_upper_run_is_lowered(self):
        assert normalize_identifier("ID", True) == "Id"
        assert normalize_identifier("ID", False) == "id"
        assert normalize_identifier("USER_NAME", True) == "UserName"
        assert normalize_identifier("USER_ID", True) == "UserId"
        assert normalize_identifier("USER_ID", False) == "userId"

    def test_upper_run_after_hump_is_lowered(self):
        assert normalize_identifier("userID", True) == "UserId"
        assert normalize_identifier("HTTPServer", False) == "httpserver"

    def test_digit_after_letters_keeps_no_separator(self):
        assert normalize_identifier("user2_id", True) == "User2Id"

    def test_digit_after_separator_gets_underscore(self):
        assert normalize_identifier("user_2", True) == "User_2"
        assert normalize_identifier("address_line_1", True) == "AddressLine_1"

    def test_letter_after_digit_starts_segment(self):
        assert normalize_identifier("v2beta", True) == "V2Beta"

    def test_leading_digits_are_kept(self):
        assert normalize_identifier("2fa_secret", True) == "2FaSecret"

    def test_other_characters_only_separate(self):
        assert normalize_identifier("user-name.first name", True) == "UserNameFirstName"

    def test_leading_separator_does_not_capitalize(self):
        assert normalize_identifier("_id", False) == "id"

    def test_camel_humps_are_segments(self):
        assert normalize_identifier("userName", True) == "UserName"
        assert normalize_identifier("UserName", False) == "userName"

    def test_empty(self):
        assert normalize_identifier("", True) == ""
        assert normalize_identifier("", False) == ""

    def test_only_separators(self):
        assert normalize_identifier("__--", True) == ""

    @pytest.mark.parametrize(
        "name",
        [
            "created_at",
            "user2_id",
            "user_2",
            "ID",
            "USER_ID",
            "USER_NAME",
            "HTTPServer",
            "_private",
            "2fa_secret",
            "order__line__3",
            "mixedCase_ID_99x",
            "",
        ],
    )
    @pytest.mark.parametrize("capitalize_first", [True, False])
    def test_idempotent(self, name, capitalize_first):
        once = normalize_identifier(name, capitalize_first)
        assert normalize_identifier(once, capitalize_first) == once


class TestHelpers:
    def test_lower_first(self):
        assert lower_first("user_profile") == "userProfile"

    def test_avoid_reserved(self):
        assert avoid_reserved("type", {"type"}) == "type_"
        assert avoid_reserved("kind", {"type"}) == "kind"

    def test_avoid_reserved_skips_taken_suffixes(self):
        assert avoid_reserved("db", {"db", "db_"}) == "db__"

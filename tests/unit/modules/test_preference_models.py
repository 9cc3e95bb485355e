"""
Unit tests for src/modules/preferences/models.py
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.modules.preferences import Gender, PreferenceUpsert
from tests.fixtures.preferences import make_preference

# Import fixtures
pytest_plugins = ["tests.fixtures.preferences"]


class TestPreferenceUpsert:
    """Tests for preference validation."""

    def test_parses_request_body(self, preference_payload):
        """String budgets and gender are coerced."""
        pref = PreferenceUpsert(**preference_payload)

        assert pref.gender == Gender.MALE
        assert pref.min_budget == Decimal("150")
        assert pref.completed is True

    def test_equal_budget_bounds_allowed(self):
        pref = make_preference(min_budget=200, max_budget=200)
        assert pref.min_budget == pref.max_budget

    def test_inverted_budget_rejected(self):
        with pytest.raises(ValidationError):
            make_preference(min_budget=500, max_budget=100)

    def test_negative_budget_rejected(self):
        with pytest.raises(ValidationError):
            make_preference(min_budget=-1)

    @pytest.mark.parametrize("age", [15, 121])
    def test_age_out_of_range(self, age):
        with pytest.raises(ValidationError):
            make_preference(age=age)

    def test_unknown_gender_rejected(self):
        with pytest.raises(ValidationError):
            make_preference(gender="robot")

    def test_blank_location_rejected(self):
        with pytest.raises(ValidationError):
            make_preference(location="")

    def test_tags_deduplicated(self):
        """Tags are stripped and deduplicated in order."""
        pref = make_preference(interests=[" cooking", "hiking", "cooking", ""])
        assert pref.interests == ["cooking", "hiking"]

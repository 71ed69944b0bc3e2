"""
Tests de los modelos de datos.
"""

import pytest
from pydantic import ValidationError

from inmo.models import (
    Favorite,
    PreferenceProfile,
    Property,
    PropertyFilters,
    PropertyPage,
    SavedSearch,
    SearchCriteria,
    UserActivity,
    Viewing,
)

from conftest import make_property


class TestProperty:
    def test_ignores_unknown_columns(self):
        prop = Property.model_validate({"id": "p1", "search_vector": "'pune':1", "rera_id": "X"})
        assert prop.id == "p1"
        assert prop.status == "active"
        assert prop.images == []

    def test_primary_image_falls_back_to_first(self):
        prop = Property.model_validate(
            {
                "id": "p1",
                "property_images": [
                    {"url": "https://cdn/1.jpg", "is_primary": False},
                    {"url": "https://cdn/2.jpg", "is_primary": False},
                ],
            }
        )
        assert prop.primary_image == "https://cdn/1.jpg"

    def test_primary_image_none_without_images(self):
        assert make_property().primary_image is None


class TestSearchCriteria:
    def test_accepts_camel_case_keys(self):
        criteria = SearchCriteria.model_validate(
            {"propertyType": "villa", "listingType": "rent", "maxPrice": 50000}
        )
        assert criteria.property_type == "villa"
        assert criteria.listing_type == "rent"
        assert criteria.max_price == 50000

    def test_ignores_unrecognized_keys(self):
        criteria = SearchCriteria.model_validate({"city": "Pune", "furnishing": "semi-furnished"})
        assert criteria.to_db_dict() == {"city": "Pune"}

    def test_blank_values_are_dropped(self):
        criteria = SearchCriteria.model_validate({"city": "", "bedrooms": " ", "min_price": "100"})
        assert criteria.city is None
        assert criteria.bedrooms is None
        assert criteria.min_price == 100

    def test_open_ended_bedrooms_from_url(self):
        criteria = SearchCriteria.model_validate({"city": "Pune", "bedrooms": "4+"})
        assert criteria.bedrooms == 4

    def test_unparseable_numbers_become_none(self):
        criteria = SearchCriteria.model_validate(
            {"city": "Pune", "bedrooms": "many", "minPrice": "cheap", "maxPrice": "90,00,000"}
        )
        assert criteria.city == "Pune"
        assert criteria.bedrooms is None
        assert criteria.min_price is None
        assert criteria.max_price == 9_000_000

    def test_saved_search_with_url_params_still_parses(self):
        search = SavedSearch.model_validate(
            {"user_id": "u1", "search_criteria": {"bedrooms": "4+", "minPrice": "abc"}}
        )
        assert search.search_criteria.to_db_dict() == {"bedrooms": 4}


class TestPropertyFilters:
    def test_rejects_unknown_furnishing(self):
        with pytest.raises(ValidationError):
            PropertyFilters(furnishing="luxury")

    def test_accepts_known_furnishing(self):
        assert PropertyFilters(furnishing="semi-furnished").furnishing == "semi-furnished"


class TestUserActivity:
    def test_seen_ids_are_unique_and_ordered(self):
        a, b, c = make_property("a"), make_property("b"), make_property("c")
        activity = UserActivity(
            viewings=[Viewing(property=a), Viewing(property=b), Viewing(property=None)],
            favorites=[Favorite(property=b), Favorite(property=c)],
        )
        assert activity.seen_property_ids == ["a", "b", "c"]

    def test_empty_activity(self):
        assert UserActivity().seen_property_ids == []


class TestPreferenceProfile:
    def test_empty_lists_count_as_empty(self):
        assert PreferenceProfile(preferred_cities=[], preferred_types=[]).is_empty

    def test_budget_makes_profile_non_empty(self):
        assert not PreferenceProfile(budget_max=100).is_empty


class TestPropertyPage:
    def test_total_pages_rounds_up(self):
        assert PropertyPage(total=13, limit=12).total_pages == 2
        assert PropertyPage(total=12, limit=12).total_pages == 1
        assert PropertyPage(total=0, limit=12).total_pages == 0

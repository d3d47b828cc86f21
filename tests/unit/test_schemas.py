"""Unit tests for wire schemas."""

from search_analytics.schemas import DashboardResponse, SearchFilters, SearchPattern


def test_unknown_fields_are_ignored() -> None:
    pattern = SearchPattern.model_validate({"totalSearches": 3, "userId": "u1", "_v": 0})
    assert pattern.total_searches == 3
    assert not hasattr(pattern, "userId")


def test_ranked_materials_accept_plain_names() -> None:
    pattern = SearchPattern.model_validate({"topMaterials": ["cotton", {"material": "hemp", "count": 2}]})
    assert [(m.material, m.count) for m in pattern.top_materials] == [("cotton", 0), ("hemp", 2)]


def test_filters_behave_as_sets() -> None:
    filters = SearchFilters(materials=["cotton", "hemp", "cotton"], brands=None)
    assert filters.materials == ["cotton", "hemp"]
    assert filters.brands == []


def test_dashboard_pairs_and_nulls() -> None:
    response = DashboardResponse.model_validate(
        {"insights": {"mostSearchedCategory": ["Fashion", 4], "preferredSustainabilityGrade": None}}
    )
    assert response.insights.most_searched_category == ("Fashion", 4)
    assert response.insights.preferred_sustainability_grade is None
    assert response.trending_searches == []


def test_ranked_items_tolerate_other_shapes() -> None:
    pattern = SearchPattern.model_validate(
        {
            "topMaterials": [None, 7, {"material": 3, "count": "many"}],
            "topBrands": [{"name": "Patagonia", "count": 3}, {"brand": "Acme", "count": True}],
        }
    )
    assert [(m.material, m.count) for m in pattern.top_materials] == [(None, 0), (None, 0), (None, 0)]
    assert [(b.brand, b.count) for b in pattern.top_brands] == [(None, 0), ("Acme", 0)]


def test_null_collections_become_empty() -> None:
    pattern = SearchPattern.model_validate({"topMaterials": None, "categoryFrequency": None, "allBrands": None})
    assert pattern.top_materials == []
    assert pattern.category_frequency == {}
    assert pattern.all_brands == []

"""Tests for catalog duplicate review."""

import pytest

from bakehouse.review import find_similar_groups, review_catalog, similarity_label


class TestSimilarityLabel:
    """Test similarity bands."""

    @pytest.mark.parametrize(
        "score,label",
        [
            (1.0, "Very Similar"),
            (0.9, "Very Similar"),
            (0.89, "Similar"),
            (0.8, "Similar"),
            (0.79, "Somewhat Similar"),
            (0.7, "Somewhat Similar"),
        ],
    )
    def test_bands(self, score, label):
        assert similarity_label(score) == label


class TestFindSimilarGroups:
    """Test grouping of similar catalog entries."""

    def test_groups_near_duplicates(self, sample_catalog):
        groups = find_similar_groups(sample_catalog["ingredients"])

        assert len(groups) == 1
        assert groups[0].main_item.id == "i1"
        assert [s.id for s in groups[0].similar_items] == ["i2"]
        assert groups[0].size == 2

    def test_grouped_items_do_not_start_new_groups(self):
        items = [
            {"id": 1, "name": "Flour"},
            {"id": 2, "name": "Flout"},
            {"id": 3, "name": "Bread"},
        ]
        groups = find_similar_groups(items)
        assert [g.main_item.id for g in groups] == [1]

    def test_grouped_items_can_match_later_groups(self):
        """An already grouped item still shows up as a match of a later item."""
        items = [
            {"id": 1, "name": "abcdefghij"},
            {"id": 2, "name": "abcdefghXY"},
            {"id": 3, "name": "abcdefZWXY"},
        ]
        # 1~2 and 2~3 score 0.8, 1~3 only 0.6
        groups = find_similar_groups(items)

        assert [g.main_item.id for g in groups] == [1, 3]
        assert [s.id for s in groups[0].similar_items] == [2]
        assert [s.id for s in groups[1].similar_items] == [2]

    def test_no_groups(self):
        items = [{"id": 1, "name": "Butter"}, {"id": 2, "name": "Croissant"}]
        assert find_similar_groups(items) == []

    def test_item_not_compared_with_itself(self):
        assert find_similar_groups([{"id": 1, "name": "Butter"}]) == []

    def test_empty(self):
        assert find_similar_groups([]) == []

    def test_to_dict(self, sample_catalog):
        group = find_similar_groups(sample_catalog["recipes"])[0]
        data = group.to_dict()
        assert data["main_item"] == {"id": "r1", "name": "Basic Bread Dough", "code": None}
        assert data["similar_items"][0]["id"] == "r2"
        assert data["similar_items"][0]["similarity"] == pytest.approx(1 - 2 / 19)


class TestReviewCatalog:
    """Test whole-catalog review."""

    def test_groups_per_kind(self, sample_catalog):
        catalog = {
            "ingredient": sample_catalog["ingredients"],
            "product": sample_catalog["products"],
            "recipe": sample_catalog["recipes"],
        }
        report = review_catalog(catalog)

        assert len(report["groups"]["ingredient"]) == 1
        assert report["groups"]["product"] == []
        assert len(report["groups"]["recipe"]) == 1
        assert report["total_groups"] == 2

    def test_missing_kinds_are_empty(self):
        report = review_catalog({"product": [{"id": 1, "name": "Bagel"}, {"id": 2, "name": "Bagels"}]})
        assert report["groups"]["ingredient"] == []
        assert report["groups"]["recipe"] == []
        assert report["total_groups"] == 1

    def test_threshold_passed_through(self, sample_catalog):
        report = review_catalog({"ingredient": sample_catalog["ingredients"]}, threshold=0.9)
        assert report["total_groups"] == 0

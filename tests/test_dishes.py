"""Tests for same-named dish matching."""

import pytest

from pizza_standings import build_leaderboard, build_standings
from pizza_standings.models.standings import LeaderboardEntry
from pizza_standings.services.standings import (
    build_same_named_leaderboards,
    dish_category,
    dish_display_name,
    dish_identity,
)


def dish_entry(restaurant_id: str, rating: float, order: str) -> LeaderboardEntry:
    key = dish_identity(order)
    return LeaderboardEntry(
        restaurant_id=restaurant_id,
        restaurant_name=f"Restaurant {restaurant_id}",
        rating=rating,
        category=dish_category(key),
        item_name=order,
    )


class TestDishIdentity:
    """Tests for order text normalization."""

    @pytest.mark.parametrize(
        "order",
        [
            '14" pepperoni, sausage',
            "sausage, pepperoni",
            "Sausage & Pepperoni",
            "Pepperoni and Sausage",
            "12 inch  Sausage,Pepperoni",
            "large sausage & pepperoni - toppings: extra cheese",
        ],
    )
    def test_equivalent_orders(self, order):
        """Test size, case, separators and topping order are ignored."""
        assert dish_identity(order) == ("pepperoni", "sausage")

    def test_single_topping(self):
        """Test a one-topping order."""
        assert dish_identity('16" Large Cheese') == ("cheese",)
        assert dish_identity("Margherita") == ("margherita",)

    def test_duplicates_collapse(self):
        """Test repeated toppings count once."""
        assert dish_identity("sausage, Sausage, mushroom") == ("mushroom", "sausage")

    def test_multiword_topping_kept_whole(self):
        """Test spaces inside a topping do not split it."""
        assert dish_identity("Green Pepper, Sausage") == ("green pepper", "sausage")

    def test_hyphens_read_as_spaces(self):
        """Test joiner punctuation inside a topping does not make a new dish."""
        assert dish_identity("BBQ-Chicken") == ("bbq chicken",)
        assert dish_identity("bbq chicken") == ("bbq chicken",)
        assert dish_identity("pepperoni/sausage") == dish_identity("Pepperoni Sausage")

    def test_near_matches_stay_distinct(self):
        """Test similar but different topping names are not merged."""
        assert dish_identity("garlic") != dish_identity("roasted garlic")

    @pytest.mark.parametrize("order", ["", "   ", '14"', "large", ", &"])
    def test_empty_identity(self, order):
        """Test orders with nothing left after stripping have no identity."""
        assert dish_identity(order) == ()


class TestDishNames:
    """Tests for dish display names and category keys."""

    def test_display_names(self):
        """Test names for one, two and many toppings."""
        assert dish_display_name(("cheese",)) == "Cheese"
        assert dish_display_name(("pepperoni", "sausage")) == "Pepperoni & Sausage"
        assert dish_display_name(("green pepper", "sausage")) == "Green Pepper & Sausage"
        assert dish_display_name(("bacon", "onion", "sausage")) == "Bacon Special"
        assert dish_display_name(()) == "Unknown"
        assert dish_display_name(("bbq-chicken",)) == "Bbq-Chicken"

    def test_category_key(self):
        """Test dish category keys are slugged and joined."""
        assert dish_category(("pepperoni", "sausage")) == "pizza:pepperoni+sausage"
        assert dish_category(("green pepper",)) == "pizza:green-pepper"

    def test_category_keys_distinct(self):
        """Test keys that slug alike still get different category keys."""
        keys = [
            ("bbq chicken",),
            ("bbq-chicken",),
            ("lou s special",),
            ("lou's special",),
            ("jalape o",),
            ("jalapeño",),
            ("pepperoni", "sausage"),
            ("pepperoni+sausage",),
        ]
        categories = [dish_category(key) for key in keys]

        assert len(set(categories)) == len(categories)
        assert dish_category(("lou's special",)).startswith("pizza:lou-s-special~")


class TestSameNamedLeaderboards:
    """Tests for grouping dishes across restaurants."""

    def test_dish_at_two_restaurants(self):
        """Test a dish served at two restaurants gets a leaderboard."""
        key = ("pepperoni", "sausage")
        leaderboards = build_same_named_leaderboards(
            {
                key: [
                    dish_entry("1", 4.6, "sausage, pepperoni"),
                    dish_entry("2", 4.8, '14" pepperoni, sausage'),
                ]
            }
        )

        (lb,) = leaderboards
        assert lb.title == "Pepperoni & Sausage"
        assert lb.category == "pizza:pepperoni+sausage"
        assert lb.description == "Best Pepperoni & Sausage across 2 restaurants"
        assert [e.restaurant_id for e in lb.entries] == ["2", "1"]
        assert lb.entries[0].item_name == '14" pepperoni, sausage'

    def test_single_restaurant_excluded(self):
        """Test a dish only one restaurant serves is not compared."""
        key = ("anchovy",)
        assert build_same_named_leaderboards({key: [dish_entry("1", 5.0, "Anchovy")]}) == ()

    def test_distinct_restaurants_counted(self):
        """Test two entries from the same restaurant do not qualify a dish."""
        key = ("cheese",)
        entries = [dish_entry("1", 4.0, "cheese"), dish_entry("1", 3.0, "Cheese")]
        assert build_same_named_leaderboards({key: entries}) == ()

    def test_threshold(self):
        """Test a higher minimum restaurant count."""
        key = ("cheese",)
        entries = [dish_entry("1", 4.0, "cheese"), dish_entry("2", 3.0, "cheese")]
        assert build_same_named_leaderboards({key: entries}, min_restaurants=3) == ()

    def test_order_most_served_first(self):
        """Test leaderboards sort by restaurant count, then title."""
        dishes = {
            ("sausage",): [dish_entry(r, 4.0, "sausage") for r in ("1", "2")],
            ("cheese",): [dish_entry(r, 4.0, "cheese") for r in ("1", "2")],
            ("pepperoni",): [dish_entry(r, 4.0, "pepperoni") for r in ("1", "2", "3")],
        }
        titles = [lb.title for lb in build_same_named_leaderboards(dishes)]
        assert titles == ["Pepperoni", "Cheese", "Sausage"]

    def test_spelling_variants_share_one_leaderboard(self):
        """Test hyphenated and spaced spellings are compared as one dish."""
        data = [
            {
                "id": rid,
                "name": f"Restaurant {rid}",
                "visits": [
                    {
                        "date": "2024-01-01",
                        "ratings": {"pizzas": [{"order": order, "rating": rating}]},
                    }
                ],
            }
            for rid, order, rating in (("1", "BBQ chicken", 4.0), ("2", "bbq-chicken", 4.5))
        ]

        (lb,) = build_standings(data).same_named_pizzas
        assert lb.category == "pizza:bbq-chicken"
        assert lb.title == "Bbq Chicken"
        assert [e.restaurant_id for e in lb.entries] == ["2", "1"]

    def test_colliding_slugs_keep_separate_leaderboards(self):
        """Test dishes whose slugs coincide each get their own category."""
        data = [
            {
                "id": rid,
                "name": f"Restaurant {rid}",
                "visits": [
                    {
                        "date": "2024-01-01",
                        "ratings": {
                            "pizzas": [
                                {"order": "Lou's Special", "rating": 4.0 + i},
                                {"order": "lou s special", "rating": 3.0},
                            ]
                        },
                    }
                ],
            }
            for i, rid in enumerate(("1", "2"))
        ]
        standings = build_standings(data)
        categories = [lb.category for lb in standings.same_named_pizzas]

        assert len(categories) == 2
        assert len(set(categories)) == 2
        for category in categories:
            assert build_leaderboard(data, category).category == category

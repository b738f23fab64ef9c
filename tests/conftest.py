"""Shared fixtures: a small club snapshot mixing both rating shapes."""

import json

import pytest


@pytest.fixture
def club_snapshot():
    """Four restaurants: two nested, one legacy flat, one never visited."""
    return [
        {
            "id": 1,
            "name": "Pequod's",
            "slug": "pequods",
            "address": "2207 N Clybourn Ave",
            "visits": [
                {
                    "date": "2024-01-10",
                    "attendees": ["m1", "m2"],
                    "ratings": {
                        "overall": 4.5,
                        "pizzas": [{"order": '14" pepperoni, sausage', "rating": 4.8}],
                        "pizza-components": {"crust": 5, "sauce": 4},
                        "the-other-stuff": {"service": 4},
                    },
                },
                {
                    "date": "2024-06-01",
                    "attendees": ["m1"],
                    "ratings": {
                        "overall": 4.0,
                        "pizzas": [
                            {"order": "Sausage & Pepperoni", "rating": 4.2},
                            {"order": "Cheese", "rating": 3.9},
                        ],
                        "pizza-components": {"crust": 4.5},
                    },
                },
            ],
        },
        {
            "id": 2,
            "name": "Lou Malnati's",
            "visits": [
                {
                    "date": "2024-02-01",
                    "attendees": ["m2", "m3"],
                    "notes": "Butter crust",
                    "ratings": {
                        "overall": 4.5,
                        "pizzas": [
                            {"order": "sausage, pepperoni", "rating": 4.6},
                            {"order": "cheese", "rating": 4.0},
                        ],
                        "pizza-components": {"crust": 4},
                        "the-other-stuff": {"atmosphere": 5},
                    },
                }
            ],
        },
        {
            "id": 3,
            "name": "Giordano's",
            "visits": [
                {
                    "date": "2019-08-15",
                    "attendees": ["m1"],
                    "ratings": {"overall": 3, "crust": 3.5, "vibes": 4},
                }
            ],
        },
        {"id": 4, "name": "Empty Place", "visits": []},
    ]


@pytest.fixture
def snapshot_file(tmp_path, club_snapshot):
    """The club snapshot written as a JSON export."""
    path = tmp_path / "restaurants.json"
    path.write_text(json.dumps(club_snapshot), encoding="utf-8")
    return path

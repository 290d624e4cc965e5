"""Catalog records for the woodcutter demo."""
from __future__ import annotations

RESOURCES = [
    {"id": "wood", "locked": False, "group": "materials", "tags": "lumber", "sortOrder": 1},
    {"id": "gold", "group": "coin", "sortOrder": 2},
    {"id": "planks", "group": "materials", "tags": "lumber", "sortOrder": 3},
    {"id": "hp", "name": "health", "max": 10, "group": "vitals", "sortOrder": 710},
    {"id": "stamina", "max": 10, "group": "vitals", "sortOrder": 711},
]

TASKS = [
    {
        "id": "chop",
        "locked": False,
        "group": "forest",
        "desc": "Swing an axe at the nearest tree.",
        "cost": {"stamina": 2},
        "result": {"wood": 1},
        "at": {"5": {"result.wood": 2}},
        "every": {"10": {"result.wood": "1:6"}},
    },
    {
        "id": "rest",
        "verb": "resting",
        "locked": False,
        "group": "camp",
        "perpetual": True,
        "fill": ["hp", "stamina"],
        "effect": {"hp": 1, "stamina": 2},
    },
    {
        "id": "saw",
        "verb": "sawing",
        "group": "workshop",
        "length": 3000,
        "cost": {"wood": 4, "stamina": 1},
        "result": {"planks": 1},
        "at": {"3": {"length": "-1000:1000"}},
    },
    {
        "id": "market",
        "verb": "trading",
        "group": "town",
        "perpetual": True,
        "require": "resources.planks>=1",
        "run": {"planks": 1},
        "effect": {"gold": 3},
    },
]

UPGRADES = [
    {"id": "sawhorse", "cost": {"wood": 10}, "max": 1, "unlock": "planks", "unlockTask": "saw"},
    {
        "id": "cart",
        "require": "upgrades.sawhorse",
        "cost": {"planks": 3},
        "max": 1,
        "mod": {"gold.max": 100},
        "unlockTask": "market",
    },
    {"id": "grove", "require": "resources.gold>=10", "cost": {"gold": 10}, "mod": {"wood.rate": 0.5}},
]

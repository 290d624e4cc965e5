"""Shared catalog fixtures for the vitae_game tests."""

import copy

import pytest
from vitae_game import Catalog, load_catalog

RESOURCES = [
    {"id": "hp", "max": 10, "group": "vitals", "sortOrder": 710},
    {"id": "stamina", "max": 10, "group": "vitals", "sortOrder": 711},
    {"id": "wood", "locked": False, "group": "materials", "tags": "fuel, lumber", "sortOrder": 1},
    {"id": "gold", "group": "coin", "sortOrder": 2},
]

TASKS = [
    {"id": "chop", "locked": False, "group": "labor", "cost": {"stamina": 2}, "result": {"wood": 5}},
    {
        "id": "rest",
        "verb": "resting",
        "locked": False,
        "perpetual": True,
        "fill": ["hp", "stamina"],
        "effect": {"hp": 1, "stamina": {"value": 2}},
    },
    {"id": "haul", "locked": False, "group": "labor", "length": 2000, "result": {"wood": 8}},
    {"id": "sell", "require": "resources.gold>=0", "cost": {"wood": 10}, "result": {"gold": 3}},
]

UPGRADES = [
    {
        "id": "purse",
        "cost": {"wood": 10},
        "max": 1,
        "mod": {"gold.max": 50},
        "unlockTask": "sell",
    },
    {"id": "grove", "require": "upgrades.purse", "cost": {"wood": 5}, "mod": {"wood.rate": 1}},
]


@pytest.fixture
def catalog() -> Catalog:
    # fresh per test: upgrades unlock tasks in the shared task catalog
    return load_catalog(RESOURCES, TASKS, UPGRADES)


@pytest.fixture
def records() -> tuple[list, list, list]:
    return copy.deepcopy(RESOURCES), copy.deepcopy(TASKS), copy.deepcopy(UPGRADES)

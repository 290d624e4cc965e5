"""Tests for vitae_game.catalog - record loading and validation."""

import pytest
from vitae_game import ById, ByTag, CatalogError, RequirementError, load_catalog


class TestLoadCatalog:
    def test_builds_typed_definitions(self, catalog):
        assert [r.id for r in catalog.resources] == ["hp", "stamina", "wood", "gold"]
        assert catalog.resource("wood").tags == ("fuel", "lumber")
        assert catalog.resource("ghost") is None
        rest = catalog.tasks.get("rest")
        assert rest.fill == (ById("hp"), ById("stamina"))
        assert rest.params.effect == {"hp": 1.0, "stamina": 2.0}
        assert catalog.upgrades.get("purse").unlock_task == ("sell",)

    def test_tag_refs(self):
        catalog = load_catalog(tasks=[{"id": "sleep", "perpetual": True, "fill": ["t_vital"]}])
        assert catalog.tasks.get("sleep").fill == (ByTag("vital"),)

    def test_empty(self):
        catalog = load_catalog()
        assert catalog.resources == ()
        assert len(catalog.tasks) == 0
        assert len(catalog.upgrades) == 0

    def test_bad_requirement_names_record(self, records):
        resources, tasks, upgrades = records
        tasks[0]["require"] = "resource.wood>=5"
        with pytest.raises(CatalogError, match="chop") as info:
            load_catalog(resources, tasks, upgrades)
        assert info.value.section == "tasks"
        assert info.value.record_id == "chop"
        assert isinstance(info.value.__cause__, RequirementError)

    def test_unknown_milestone_field(self, records):
        resources, tasks, upgrades = records
        tasks[0]["at"] = {"5": {"reward.wood": 1}}
        with pytest.raises(CatalogError):
            load_catalog(resources, tasks, upgrades)

    def test_negative_task_cost(self, records):
        resources, tasks, upgrades = records
        tasks[0]["cost"] = {"stamina": -5}
        with pytest.raises(CatalogError, match="chop") as info:
            load_catalog(resources, tasks, upgrades)
        assert info.value.section == "tasks"

    def test_bad_resource(self):
        with pytest.raises(CatalogError, match="resources"):
            load_catalog(resources=[{"id": "hp", "max": -1}])

    def test_bad_upgrade_mod(self, records):
        resources, tasks, upgrades = records
        upgrades[0]["mod"] = {"gold.value": 5}
        with pytest.raises(CatalogError, match="purse"):
            load_catalog(resources, tasks, upgrades)

    def test_duplicate_id(self):
        with pytest.raises(CatalogError, match="duplicate"):
            load_catalog(tasks=[{"id": "chop"}, {"id": "chop"}])

    def test_non_mapping_record(self):
        with pytest.raises(CatalogError):
            load_catalog(upgrades=["axe"])

    def test_catalog_error_is_value_error(self):
        assert issubclass(CatalogError, ValueError)

"""Tests for loading commerce catalogs and discovery inventories from disk."""

import json

import pytest

from tastematch.models.catalog import DiscoveryType, ItemCategory
from tastematch.models.profile import TasteDomain
from tastematch.services.catalog.loader import CatalogLoader

from .helpers import CATALOG_DIR


def write_catalog(path, items):
    path.write_text(json.dumps(items), encoding="utf-8")


class TestCommerceCatalog:
    def test_loads_camel_case_records(self, tmp_path):
        write_catalog(
            tmp_path / "commerce_objects.json",
            [
                {
                    "skuId": "OB-1",
                    "title": "Field Watch",
                    "merchant": "Hamilton",
                    "price": 495,
                    "category": "timepiece",
                    "objectAxisWeights": {"utility": 0.8},
                    "imageURL": "https://example.com/ob-1.jpg",
                }
            ],
        )
        items = CatalogLoader(tmp_path).commerce_items(TasteDomain.OBJECTS)
        assert len(items) == 1
        assert items[0].sku_id == "OB-1"
        assert items[0].brand == "Hamilton"
        assert items[0].category == ItemCategory.TIMEPIECE
        assert items[0].image_url.endswith("ob-1.jpg")

    def test_missing_file(self, tmp_path):
        assert CatalogLoader(tmp_path).commerce_items(TasteDomain.ART) == []

    def test_malformed_file(self, tmp_path):
        (tmp_path / "commerce_space.json").write_text("[{not json", encoding="utf-8")
        assert CatalogLoader(tmp_path).commerce_items(TasteDomain.SPACE) == []

    def test_cached_until_reset(self, tmp_path):
        path = tmp_path / "commerce_space.json"
        write_catalog(path, [{"skuId": "SP-1", "title": "Chair"}])
        loader = CatalogLoader(tmp_path)
        assert len(loader.commerce_items(TasteDomain.SPACE)) == 1

        write_catalog(path, [{"skuId": "SP-1", "title": "Chair"}, {"skuId": "SP-2", "title": "Lamp"}])
        assert len(loader.commerce_items(TasteDomain.SPACE)) == 1

        loader.reset_cache()
        assert len(loader.commerce_items(TasteDomain.SPACE)) == 2


class TestDiscoveryInventory:
    def test_skips_malformed_lines(self, tmp_path):
        lines = [
            json.dumps({"id": "d-1", "title": "Perriand", "type": "designer"}),
            "",
            "{broken",
            json.dumps({"id": "d-2", "title": "Unknown kind", "type": "rumour"}),
            json.dumps({"id": "d-3", "title": "Cork", "type": "material", "axisWeights": {"warmCool": 0.4}}),
        ]
        (tmp_path / "discovery_space.ndjson").write_text("\n".join(lines), encoding="utf-8")
        items = CatalogLoader(tmp_path).discovery_items(TasteDomain.SPACE)
        assert [i.id for i in items] == ["d-1", "d-3"]
        assert items[1].axis_weights == {"warmCool": 0.4}

    def test_falls_back_to_json_array(self, tmp_path):
        write_catalog(tmp_path / "discovery_art.json", [{"id": "a-1", "title": "Agnes Martin", "type": "designer"}])
        items = CatalogLoader(tmp_path).discovery_items(TasteDomain.ART)
        assert [i.id for i in items] == ["a-1"]

    def test_missing_inventory(self, tmp_path):
        assert CatalogLoader(tmp_path).discovery_items(TasteDomain.OBJECTS) == []


class TestBundledData:
    @pytest.fixture
    def loader(self):
        return CatalogLoader(CATALOG_DIR)

    @pytest.mark.parametrize(
        "domain, count", [(TasteDomain.SPACE, 10), (TasteDomain.OBJECTS, 10), (TasteDomain.ART, 5)]
    )
    def test_commerce_counts(self, loader, domain, count):
        items = loader.commerce_items(domain)
        assert len(items) == count
        assert len({i.sku_id for i in items}) == count

    @pytest.mark.parametrize(
        "domain, count", [(TasteDomain.SPACE, 8), (TasteDomain.OBJECTS, 4), (TasteDomain.ART, 3)]
    )
    def test_discovery_counts(self, loader, domain, count):
        items = loader.discovery_items(domain)
        assert len(items) == count
        assert all(isinstance(i.type, DiscoveryType) for i in items)

    def test_object_items_carry_axis_weights(self, loader):
        assert all(i.object_axis_weights for i in loader.commerce_items(TasteDomain.OBJECTS))

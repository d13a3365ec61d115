import json
from pathlib import Path

from cachetools import LRUCache
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from tastematch.core.config import settings
from tastematch.core.constants import CATALOG_FILES, DISCOVERY_FILES
from tastematch.models.catalog import CatalogItem, DiscoveryItem
from tastematch.models.profile import TasteDomain

_CATALOG_LIST = TypeAdapter(list[CatalogItem])
_DISCOVERY_LIST = TypeAdapter(list[DiscoveryItem])


class CatalogLoader:
    """
    Loads commerce catalogs (JSON arrays) and discovery inventories (NDJSON,
    one item per line) from ``CATALOG_DIR``.

    Each file is read once and cached for the life of the loader;
    ``reset_cache()`` forces a reload. Missing or malformed files yield an
    empty list, malformed NDJSON lines are skipped.
    """

    def __init__(self, catalog_dir: str | Path | None = None):
        self.catalog_dir = Path(catalog_dir or settings.CATALOG_DIR)
        self._cache: LRUCache = LRUCache(maxsize=32)

    def reset_cache(self) -> None:
        self._cache.clear()
        logger.info("Catalog cache cleared")

    def commerce_items(self, domain: TasteDomain) -> list[CatalogItem]:
        key = ("commerce", domain)
        if key not in self._cache:
            self._cache[key] = self._load_json(self.catalog_dir / CATALOG_FILES[domain.value])
        return self._cache[key]

    def discovery_items(self, domain: TasteDomain) -> list[DiscoveryItem]:
        key = ("discovery", domain)
        if key not in self._cache:
            self._cache[key] = self._load_discovery(self.catalog_dir / DISCOVERY_FILES[domain.value])
        return self._cache[key]

    @staticmethod
    def _load_json(path: Path) -> list[CatalogItem]:
        if not path.exists():
            logger.warning(f"Catalog file not found: {path}")
            return []
        try:
            items = _CATALOG_LIST.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning(f"Failed to load catalog {path}: {e}")
            return []
        logger.info(f"Loaded {len(items)} catalog items from {path.name}")
        return items

    @staticmethod
    def _load_discovery(path: Path) -> list[DiscoveryItem]:
        if not path.exists():
            # Fall back to a JSON array next to the NDJSON file
            array_path = path.with_suffix(".json")
            if not array_path.exists():
                logger.warning(f"Discovery file not found: {path}")
                return []
            try:
                items = _DISCOVERY_LIST.validate_json(array_path.read_bytes())
            except (OSError, ValidationError) as e:
                logger.warning(f"Failed to load discovery items {array_path}: {e}")
                return []
            logger.info(f"Loaded {len(items)} discovery items from {array_path.name}")
            return items

        items = []
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Failed to read discovery file {path}: {e}")
            return []
        for number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                items.append(DiscoveryItem.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning(f"Skipping malformed discovery line {number} in {path.name}: {e}")
        logger.info(f"Loaded {len(items)} discovery items from {path.name}")
        return items


catalog_loader = CatalogLoader()

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from tastematch.models.identity import utcnow


class ItemCategory(str, Enum):
    LIGHTING = "lighting"
    TEXTILE = "textile"
    ART = "art"
    FURNITURE = "furniture"
    DECOR = "decor"
    TIMEPIECE = "timepiece"
    BAG = "bag"
    DESIGN_OBJECT = "designObject"
    ACCESSORY = "accessory"
    PAINTING = "painting"
    SCULPTURE = "sculpture"
    PRINT = "print"
    PHOTOGRAPH = "photograph"
    INSTALLATION = "installation"
    CLOTHING = "clothing"
    FOOTWEAR = "footwear"
    TECH = "tech"
    JEWELRY = "jewelry"
    UNKNOWN = "unknown"


class RarityTier(str, Enum):
    ARCHIVE = "archive"
    CONTEMPORARY = "contemporary"
    EMERGENT = "emergent"


class CatalogModel(BaseModel):
    """Catalog records are camelCase on disk and snake_case in code."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CatalogItem(CatalogModel):
    sku_id: str
    title: str
    merchant: str = ""
    price: float = 0.0
    image_url: str = Field(default="", alias="imageURL")
    product_url: str = Field(default="", alias="productURL")
    tags: list[str] = Field(default_factory=list)
    brand: str = ""
    currency: str = "USD"
    category: ItemCategory = ItemCategory.FURNITURE
    material_tags: list[str] = Field(default_factory=list)
    commerce_axis_weights: dict[str, float] = Field(default_factory=dict)
    object_axis_weights: dict[str, float] = Field(default_factory=dict)
    discovery_clusters: list[str] = Field(default_factory=list)
    affiliate_url: str | None = Field(default=None, alias="affiliateURL")
    rarity_tier: RarityTier | None = None
    movement_cluster: str | None = None
    year_range: str | None = None

    @model_validator(mode="after")
    def _default_brand(self) -> "CatalogItem":
        if not self.brand:
            # frozen model, so bypass __setattr__
            object.__setattr__(self, "brand", self.merchant)
        return self


class DiscoveryType(str, Enum):
    DESIGNER = "designer"
    STUDIO = "studio"
    OBJECT = "object"
    MATERIAL = "material"
    MOVEMENT = "movement"
    PLACE = "place"
    REFERENCE = "reference"


class SourceTier(str, Enum):
    ANCHOR = "anchor"
    CURATED = "curated"
    EMERGING = "emerging"


class DiscoveryLayer(str, Enum):
    CULTURAL_SIGNALS = "culturalSignals"
    OBJECTS_IN_THE_WILD = "objectsInTheWild"
    MATERIAL_INTELLIGENCE = "materialIntelligence"

    @property
    def label(self) -> str:
        return {
            DiscoveryLayer.CULTURAL_SIGNALS: "CULTURAL SIGNALS",
            DiscoveryLayer.OBJECTS_IN_THE_WILD: "OBJECTS IN THE WILD",
            DiscoveryLayer.MATERIAL_INTELLIGENCE: "MATERIAL INTELLIGENCE",
        }[self]


_LAYER_BY_TYPE: dict[DiscoveryType, DiscoveryLayer] = {
    DiscoveryType.DESIGNER: DiscoveryLayer.CULTURAL_SIGNALS,
    DiscoveryType.STUDIO: DiscoveryLayer.CULTURAL_SIGNALS,
    DiscoveryType.MOVEMENT: DiscoveryLayer.CULTURAL_SIGNALS,
    DiscoveryType.OBJECT: DiscoveryLayer.OBJECTS_IN_THE_WILD,
    DiscoveryType.PLACE: DiscoveryLayer.OBJECTS_IN_THE_WILD,
    DiscoveryType.REFERENCE: DiscoveryLayer.OBJECTS_IN_THE_WILD,
    DiscoveryType.MATERIAL: DiscoveryLayer.MATERIAL_INTELLIGENCE,
}


class DiscoveryItem(CatalogModel):
    id: str
    title: str
    type: DiscoveryType
    regions: list[str] = Field(default_factory=list)
    body: str = ""
    clusters: list[str] = Field(default_factory=list)
    axis_weights: dict[str, float] = Field(default_factory=dict)
    rarity: float = Field(default=0.5, ge=0.0, le=1.0)
    year_range: str | None = None
    links: list[str] | None = None
    source_tier: SourceTier = SourceTier.CURATED
    created_at: datetime | None = None
    image_url: str | None = Field(default=None, alias="imageURL")

    @property
    def layer(self) -> DiscoveryLayer:
        return _LAYER_BY_TYPE[self.type]

    @property
    def primary_region(self) -> str:
        return self.regions[0] if self.regions else ""

    @property
    def primary_cluster(self) -> str:
        return self.clusters[0] if self.clusters else ""


class DiscoverySignals(BaseModel):
    """Per-profile discovery interactions."""

    saved_ids: set[str] = Field(default_factory=set)
    dismissed_ids: set[str] = Field(default_factory=set)
    viewed_ids: set[str] = Field(default_factory=set)


class RecommendationItem(BaseModel):
    """A ranked catalog item ready for presentation."""

    sku_id: str
    title: str
    subtitle: str
    reason: str = ""
    attribution_confidence: float = Field(ge=0.0, le=1.0)
    price: float
    image_url: str = ""
    merchant: str = ""
    product_url: str = ""
    brand: str = ""
    category: ItemCategory = ItemCategory.UNKNOWN
    affiliate_url: str | None = None

    @classmethod
    def from_catalog(cls, item: CatalogItem, score: float, reason: str = "") -> "RecommendationItem":
        return cls(
            sku_id=item.sku_id,
            title=item.title,
            subtitle=f"{item.brand} · ${int(item.price)}",
            reason=reason,
            attribution_confidence=min(1.0, max(0.0, score)),
            price=item.price,
            image_url=item.image_url,
            merchant=item.merchant,
            product_url=item.product_url,
            brand=item.brand,
            category=item.category,
            affiliate_url=item.affiliate_url,
        )


class FavoriteItem(BaseModel):
    """A recommendation the user kept."""

    item: RecommendationItem
    added_at: datetime = Field(default_factory=utcnow)

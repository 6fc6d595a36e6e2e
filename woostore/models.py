"""
Domain models for WooCommerce store data.

Input models (Credentials, ProductInput) validate themselves on construction.
Wire models (DistributedProduct, BatchResult) know how to render the exact
JSON shape the store's REST API expects.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, List, Dict, Any, Tuple

from woostore.validators import validate_price, validate_required_text, validate_store_url


# ═══════════════════════════════════════════════════════════════════════════════
# CREDENTIALS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Credentials:
    """
    Access credentials for one store.

    The WooCommerce key pair authorizes catalog calls; the WordPress username
    and application password authorize media uploads.
    """
    store_url: str
    wc_key: str
    wc_secret: str = field(repr=False)
    wp_username: Optional[str] = None
    wp_app_pass: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "store_url", validate_store_url(self.store_url))
        validate_required_text(self.wc_key, "wc_key")
        validate_required_text(self.wc_secret, "wc_secret")

    @property
    def catalog_auth(self) -> Tuple[str, str]:
        return self.wc_key, self.wc_secret

    @property
    def media_auth(self) -> Optional[Tuple[str, str]]:
        """Media upload credentials, or None when not configured."""
        if not self.wp_username or not self.wp_app_pass:
            return None
        return self.wp_username, self.wp_app_pass


# ═══════════════════════════════════════════════════════════════════════════════
# PRODUCTS
# ═══════════════════════════════════════════════════════════════════════════════

def format_price(price) -> str:
    """Render a numeric price as the decimal string the store expects."""
    return format(Decimal(str(price)).normalize(), "f")


@dataclass
class ProductInput:
    """Product description supplied by the caller for bulk creation."""
    name: str
    sku: str
    price: Any
    description: Optional[str] = None
    short_description: Optional[str] = None
    attributes: Optional[List[Dict[str, Any]]] = None
    categories: Optional[List[Dict[str, Any]]] = None
    featured_image: Optional[str] = None
    images: Optional[List[str]] = None

    def __post_init__(self):
        validate_required_text(self.name, "name")
        validate_required_text(self.sku, "sku")
        validate_price(self.price)

    @property
    def gallery_images(self) -> List[str]:
        """Gallery paths in original order, without the featured image."""
        if not self.images:
            return []
        if self.featured_image:
            return [path for path in self.images if path != self.featured_image]
        return list(self.images)


@dataclass
class DistributedProduct:
    """Wire-shape product record for the batch endpoint."""
    name: str
    sku: str
    regular_price: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    attributes: Optional[List[Dict[str, Any]]] = None
    categories: Optional[List[Dict[str, Any]]] = None
    image_ids: List[int] = field(default_factory=list)

    @classmethod
    def from_input(
        cls,
        product: ProductInput,
        featured_image_id: Optional[int] = None,
        gallery_image_ids: Optional[List[int]] = None,
    ) -> "DistributedProduct":
        """
        Build the wire record, placing the featured image first.

        Gallery IDs that duplicate the featured ID are dropped.
        """
        image_ids = []
        if featured_image_id is not None:
            image_ids.append(featured_image_id)
        for image_id in gallery_image_ids or []:
            if image_id != featured_image_id:
                image_ids.append(image_id)

        return cls(
            name=product.name,
            sku=product.sku,
            regular_price=format_price(product.price),
            description=product.description,
            short_description=product.short_description,
            attributes=product.attributes,
            categories=product.categories,
            image_ids=image_ids,
        )

    def to_api(self) -> Dict[str, Any]:
        """Render as JSON, omitting fields that are unset or empty."""
        data: Dict[str, Any] = {
            "name": self.name,
            "sku": self.sku,
            "regular_price": self.regular_price,
        }
        optional = {
            "description": self.description,
            "short_description": self.short_description,
            "attributes": self.attributes,
            "categories": self.categories,
        }
        data.update({key: value for key, value in optional.items() if value})

        if self.image_ids:
            data["images"] = [{"id": image_id} for image_id in self.image_ids]

        return data


@dataclass
class BatchResult:
    """Accumulated outcome of a bulk creation split into batches."""
    create: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.create)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_api(self) -> Dict[str, Any]:
        """Render as ``{"create": [...]}`` plus ``errors`` when any batch failed."""
        data: Dict[str, Any] = {"create": list(self.create)}
        if self.errors:
            data["errors"] = list(self.errors)
        return data


@dataclass(frozen=True)
class SkuLookup:
    """Product ID resolved for a SKU; id is None when the store has no match."""
    sku: str
    id: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.id is not None


# ═══════════════════════════════════════════════════════════════════════════════
# ATTRIBUTE TERMS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class Manufacturer:
    """Term of the manufacturer attribute."""
    id: int
    name: str
    slug: str = ""
    count: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Manufacturer":
        """Create Manufacturer from an attribute term record."""
        return cls(
            id=data.get("id", 0),
            name=data.get("name", ""),
            slug=data.get("slug", ""),
            count=data.get("count", 0),
        )

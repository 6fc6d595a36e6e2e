"""
Catalog operations for a single WooCommerce store.

Store wraps two connections: the catalog connection (WooCommerce key pair)
for products, categories and attributes, and the media connection
(WordPress application password) for image uploads.
"""
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

from woostore.config import StoreConfig, config as default_config
from woostore.connection import Connection
from woostore.exceptions import (
    ImageNotFoundError,
    ManufacturerNotFoundError,
    StoreConfigError,
    StoreDataError,
    StoreError,
)
from woostore.models import (
    BatchResult,
    Credentials,
    DistributedProduct,
    Manufacturer,
    ProductInput,
    SkuLookup,
    format_price,
)
from woostore.observability import correlation_context, get_logger
from woostore.validators import validate_price

logger = get_logger(__name__)

PRODUCTS_PATH = "/wp-json/wc/v3/products"
CATEGORIES_PATH = "/wp-json/wc/v3/products/categories"
ATTRIBUTES_PATH = "/wp-json/wc/v3/products/attributes/"
BATCH_PATH = "/wp-json/wc/v3/products/batch"
MEDIA_PATH = "/wp-json/wp/v2/media"


class Store:
    """
    Client for one store's catalog.

    The manufacturer list is fetched once per instance and then served from
    memory; create a new Store to refresh it.

    Usage:
        async with Store(credentials) as store:
            result = await store.create_products(products)
            if result.has_errors:
                ...
    """

    def __init__(self, credentials: Credentials, config: Optional[StoreConfig] = None):
        self.credentials = credentials
        self.config = config or default_config
        self.catalog = self._connection(*credentials.catalog_auth)
        media_auth = credentials.media_auth
        self.media: Optional[Connection] = self._connection(*media_auth) if media_auth else None
        self.manufacturers_cache: Optional[List[Manufacturer]] = None

    def _connection(self, key: str, secret: str) -> Connection:
        return Connection(
            self.credentials.store_url,
            key,
            secret,
            timeout=self.config.request_timeout,
            retry_config=self.config.retry,
            page_config=self.config.pages,
        )

    async def close(self) -> None:
        await self.catalog.close()
        if self.media:
            await self.media.close()

    async def __aenter__(self) -> "Store":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ═══════════════════════════════════════════════════════════════════════════
    # CATALOG READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_categories(self) -> List[Dict[str, Any]]:
        """Get all product categories."""
        return await self.catalog.get_all(CATEGORIES_PATH)

    async def get_all_products(self) -> List[Dict[str, Any]]:
        """Get all products."""
        return await self.catalog.get_all(PRODUCTS_PATH)

    async def get_attributes(self) -> List[Dict[str, Any]]:
        """Get global product attributes (the endpoint is not paginated)."""
        attributes = await self.catalog.get(ATTRIBUTES_PATH)
        if not isinstance(attributes, list):
            raise StoreDataError(
                f"Expected a list from {ATTRIBUTES_PATH}",
                expected="list",
                got=type(attributes).__name__
            )
        return attributes

    async def get_manufacturers(self) -> List[Manufacturer]:
        """
        Get terms of the manufacturer attribute.

        The first call looks up the attribute by slug and fetches its terms;
        later calls return the same cached list without any request.

        Raises:
            ManufacturerNotFoundError: If the store has no manufacturer attribute
        """
        if self.manufacturers_cache is not None:
            return self.manufacturers_cache

        slug = self.config.manufacturer_slug
        attributes = await self.get_attributes()
        attribute = next(
            (attr for attr in attributes if attr.get("slug") == slug),
            None,
        )
        if attribute is None:
            raise ManufacturerNotFoundError(slug)

        terms = await self.catalog.get_all(f"{ATTRIBUTES_PATH.rstrip('/')}/{attribute['id']}/terms")
        self.manufacturers_cache = [Manufacturer.from_api(term) for term in terms]

        logger.info(
            f"Loaded {len(self.manufacturers_cache)} manufacturers",
            extra={"attribute_id": attribute["id"]}
        )
        return self.manufacturers_cache

    async def get_product_ids_by_skus(self, skus: Sequence[str]) -> List[SkuLookup]:
        """
        Resolve product IDs for SKUs with a single filtered list query.

        Returns one entry per requested SKU in input order; SKUs the store
        does not know map to ``id=None``.
        """
        if not skus:
            return []

        encoded = ",".join(quote(sku, safe="") for sku in skus)
        products = await self.catalog.get_all(f"{PRODUCTS_PATH}?sku={encoded}")

        found = {
            product["sku"]: product.get("id")
            for product in products
            if product.get("sku")
        }
        return [SkuLookup(sku=sku, id=found.get(sku)) for sku in skus]

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_prices(self, price_updates: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Set regular prices by SKU in one batch update.

        SKUs the store does not know are skipped.

        Args:
            price_updates: Mapping of SKU to new price
        """
        for sku, price in price_updates.items():
            validate_price(price, field=f"price[{sku}]")

        lookups = await self.get_product_ids_by_skus(list(price_updates))
        updates = [
            {"id": lookup.id, "regular_price": format_price(price_updates[lookup.sku])}
            for lookup in lookups
            if lookup.found
        ]

        skipped = len(lookups) - len(updates)
        if skipped:
            logger.warning(f"Skipping {skipped} unknown SKUs in price update")

        if not updates:
            return {"update": []}

        return await self.catalog.post(BATCH_PATH, json.dumps({"update": updates}))

    async def upload_images(self, image_paths: Sequence[str]) -> List[int]:
        """
        Upload local image files to the media library, one at a time.

        Returns:
            Media IDs in the order of ``image_paths``

        Raises:
            StoreConfigError: If no media credentials are configured
            ImageNotFoundError: If a file does not exist (checked before upload)
        """
        if self.media is None:
            raise StoreConfigError(
                "Media upload requires wp_username and wp_app_pass",
                details=self.credentials.store_url,
            )

        media_ids = []
        for image_path in image_paths:
            path = Path(image_path)
            if not path.is_file():
                raise ImageNotFoundError(image_path)

            content = await asyncio.to_thread(path.read_bytes)
            data = await self.media.post(MEDIA_PATH, {"file": (path.name or "image.jpg", content)})

            if not isinstance(data, dict) or "id" not in data:
                raise StoreDataError(
                    f"Media upload of {path.name} returned no id",
                    expected="object with id",
                    got=type(data).__name__
                )
            media_ids.append(data["id"])

        return media_ids

    async def create_products(self, products: Sequence[ProductInput]) -> BatchResult:
        """
        Create products in batches, uploading their images first.

        Input is split into consecutive batches of ``batch_size``. Batches run
        one after another with a short pause in between; within a batch the
        image uploads of all products run concurrently. A failed batch is
        recorded in ``errors`` and the remaining batches still run.
        """
        result = BatchResult()
        if not products:
            return result

        size = self.config.batches.batch_size
        batches = [products[i:i + size] for i in range(0, len(products), size)]

        with correlation_context():
            for index, batch in enumerate(batches, start=1):
                if index > 1 and self.config.batches.batch_pause > 0:
                    await asyncio.sleep(self.config.batches.batch_pause)

                logger.info(
                    f"Processing batch {index}/{len(batches)} ({len(batch)} products)",
                    extra={"batch": index}
                )

                records = await asyncio.gather(
                    *(self._distribute(product) for product in batch)
                )
                payload = json.dumps({"create": [record.to_api() for record in records]})

                try:
                    response = await self.catalog.post(BATCH_PATH, payload)
                except StoreError as e:
                    logger.error(f"Batch {index} failed: {e}", extra={"batch": index})
                    result.errors.append(f"Batch {index} failed: {e}")
                    continue

                created = response.get("create", []) if isinstance(response, dict) else []
                result.create.extend(created)
                logger.info(
                    f"Batch {index} completed",
                    extra={"batch": index, "created": len(created)}
                )

        return result

    async def _distribute(self, product: ProductInput) -> DistributedProduct:
        featured_id, gallery_ids = await self._resolve_images(product)
        return DistributedProduct.from_input(product, featured_id, gallery_ids)

    async def _resolve_images(self, product: ProductInput) -> Tuple[Optional[int], List[int]]:
        """Upload the featured image, then the gallery; failures only cost images."""
        featured_id = None
        gallery_ids: List[int] = []

        if product.featured_image:
            try:
                uploaded = await self.upload_images([product.featured_image])
                if uploaded:
                    featured_id = uploaded[0]
            except (StoreError, OSError) as e:
                logger.error(
                    f"Failed to upload featured image for {product.sku}: {e}",
                    extra={"sku": product.sku}
                )

        gallery = product.gallery_images
        if gallery:
            try:
                gallery_ids = await self.upload_images(gallery)
            except (StoreError, OSError) as e:
                logger.error(
                    f"Failed to upload gallery images for {product.sku}: {e}",
                    extra={"sku": product.sku}
                )

        return featured_id, gallery_ids

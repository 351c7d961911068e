"""
Cart lifecycle against the Storefront API.

The remote cart is the only source of truth: every mutation selects the full
cart and the result replaces the caller's view wholesale. Cart operations are
never cached.
"""

from typing import Any

from loguru import logger

from storefront.catalog.mapping import map_cart
from storefront.catalog.models import Cart, ProductSize
from storefront.catalog.products import GLOBAL_ID_PREFIX, ProductCatalog
from storefront.catalog.queries import (
    CART_BUYER_IDENTITY_MUTATION,
    CART_CREATE_MUTATION,
    CART_LINES_ADD_MUTATION,
    CART_LINES_REMOVE_MUTATION,
    CART_LINES_UPDATE_MUTATION,
    CART_QUERY,
)
from storefront.catalog.schemas import Rejected, cart_validator
from storefront.datastore.state import (
    CART_ID_KEY,
    CHECKOUT_URL_KEY,
    CUSTOMER_TOKEN_KEY,
    StateStore,
)
from storefront.exceptions import CartError, ProductNotFoundError
from storefront.services.client import GraphQLClient
from storefront.utils import log_call

NO_CACHE = 0


class CartService:
    """
    Cart operations with a persisted cart id.

    State machine: no cart id -> (create) -> cart id. The id persists until the
    state store is cleared externally; every operation that needs a cart
    creates one lazily.

    Usage:
        carts = CartService(client, catalog, state)

        cart = await carts.add_to_cart(product.id, quantity=2, size=product.sizes[0])
        cart = await carts.update_cart_line(cart.lines[0].id, 3)
        cart = await carts.remove_cart_line(cart.lines[0].id)
    """

    def __init__(
        self,
        client: GraphQLClient,
        catalog: ProductCatalog,
        state: StateStore,
    ):
        self.client = client
        self.catalog = catalog
        self.state = state

    async def get_or_create_cart(self) -> str:
        """Return the persisted cart id, creating a remote cart if there is none."""
        cart_id = await self.state.get(CART_ID_KEY)
        if cart_id:
            return cart_id

        token = await self.state.get(CUSTOMER_TOKEN_KEY)
        cart_input: dict[str, Any] = {}
        if token:
            cart_input["buyerIdentity"] = {"customerAccessToken": token}

        cart = await self._mutate(
            CART_CREATE_MUTATION,
            "cartCreate",
            {"input": cart_input},
            failure_message="Failed to create cart",
        )
        await self.state.set(CART_ID_KEY, cart.id)
        logger.info(f"Created cart {cart.id}")
        return cart.id

    @log_call
    async def add_to_cart(
        self,
        product_id: str,
        quantity: int = 1,
        size: ProductSize | None = None,
    ) -> Cart:
        """
        Add a product (or one of its sizes) to the cart.

        When no purchasable variant id can be resolved the cart is left
        unchanged and its current state is returned.

        Raises:
            CartError: The store rejected the line or could not be reached.
        """
        if quantity < 1:
            raise CartError("Quantity must be at least 1")

        variant_id = await self._resolve_variant_id(product_id, size)
        if variant_id is None:
            logger.warning(
                f"No purchasable variant for {product_id!r}; cart left unchanged"
            )
            return await self.get_cart() or Cart(id="")

        cart_id = await self.get_or_create_cart()
        return await self._mutate(
            CART_LINES_ADD_MUTATION,
            "cartLinesAdd",
            {
                "cartId": cart_id,
                "lines": [{"merchandiseId": variant_id, "quantity": quantity}],
            },
            failure_message="Failed to add to cart",
        )

    @log_call
    async def update_cart_line(self, line_id: str, quantity: int) -> Cart:
        """Set a line's quantity. Raises ``CartError`` on rejection."""
        cart_id = await self.get_or_create_cart()
        return await self._mutate(
            CART_LINES_UPDATE_MUTATION,
            "cartLinesUpdate",
            {"cartId": cart_id, "lines": [{"id": line_id, "quantity": quantity}]},
            failure_message="Failed to update cart",
        )

    @log_call
    async def remove_cart_line(self, line_id: str) -> Cart:
        """Remove a line. Raises ``CartError`` on rejection."""
        cart_id = await self.get_or_create_cart()
        return await self._mutate(
            CART_LINES_REMOVE_MUTATION,
            "cartLinesRemove",
            {"cartId": cart_id, "lineIds": [line_id]},
            failure_message="Failed to remove from cart",
        )

    @log_call
    async def get_cart(self) -> Cart | None:
        """
        Read the current cart.

        Returns None when no cart has been created yet, or when the store
        cannot currently provide an authoritative cart.
        """
        cart_id = await self.state.get(CART_ID_KEY)
        if not cart_id:
            return None

        outcome = await self.client.request(
            CART_QUERY, variables={"cartId": cart_id}, cache_ttl=NO_CACHE
        )
        if not outcome.ok:
            logger.warning(f"Could not read cart {cart_id}: {outcome.first_error}")
            return None

        raw_cart = outcome.data.get("cart")
        if raw_cart is None:
            logger.warning(f"Cart {cart_id} not found in store")
            return None

        try:
            return await self._accept_cart(raw_cart)
        except CartError as e:
            logger.warning(f"Discarding cart read: {e}")
            return None

    async def checkout_url(self) -> str | None:
        """Checkout URL from the most recent cart response."""
        return await self.state.get(CHECKOUT_URL_KEY)

    async def associate_cart_with_user(self, access_token: str) -> bool:
        """
        Attach the current cart to a signed-in customer.

        Best effort: failures are logged and never raised, so login is never
        blocked by cart sync. Returns whether the association succeeded.
        """
        cart_id = await self.state.get(CART_ID_KEY)
        if not cart_id:
            return False

        outcome = await self.client.request(
            CART_BUYER_IDENTITY_MUTATION,
            variables={
                "cartId": cart_id,
                "buyerIdentity": {"customerAccessToken": access_token},
            },
            cache_ttl=NO_CACHE,
        )
        if not outcome.ok:
            logger.error(f"Failed to sync cart {cart_id}: {outcome.first_error}")
            return False

        payload = outcome.data.get("cartBuyerIdentityUpdate") or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            logger.error(
                f"Failed to sync cart {cart_id}: {user_errors[0].get('message')}"
            )
            return False

        logger.info(f"Cart {cart_id} associated with customer")
        return True

    async def _resolve_variant_id(
        self, product_id: str, size: ProductSize | None
    ) -> str | None:
        """A store variant id for the product, or None if none is purchasable."""
        variant_id = size.id if size is not None else None

        if not variant_id:
            try:
                product = await self.catalog.fetch_product(product_id)
            except ProductNotFoundError as e:
                logger.error(f"Variant resolution failed: {e}")
                return None
            variant_id = product.default_variant_id

        # Fallback catalog variants are local placeholders the store cannot sell
        if variant_id and variant_id.startswith(GLOBAL_ID_PREFIX):
            return variant_id
        return None

    async def _mutate(
        self,
        operation: str,
        root: str,
        variables: dict[str, Any],
        failure_message: str,
    ) -> Cart:
        """Run a cart mutation and return the full cart it reports."""
        outcome = await self.client.request(
            operation, variables=variables, cache_ttl=NO_CACHE
        )
        if not outcome.ok:
            raise CartError(outcome.first_error or failure_message)

        payload = outcome.data.get(root) or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            raise CartError(user_errors[0].get("message") or failure_message)

        raw_cart = payload.get("cart")
        if raw_cart is None:
            raise CartError(failure_message)
        return await self._accept_cart(raw_cart)

    async def _accept_cart(self, raw_cart: Any) -> Cart:
        """Validate and map a cart payload; refresh the stored checkout URL."""
        result = cart_validator.validate(raw_cart)
        if isinstance(result, Rejected):
            logger.error(f"[Validation] Invalid cart {result.label!r}: {result.reason}")
            raise CartError("Received an invalid cart from the store")

        cart = map_cart(result.record)
        if cart.checkout_url:
            await self.state.set(CHECKOUT_URL_KEY, cart.checkout_url)
        return cart

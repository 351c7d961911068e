"""
Customer account operations (login, registration, session lookup, logout).
"""

from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from storefront.catalog.cart import NO_CACHE, CartService
from storefront.catalog.queries import (
    CUSTOMER_ACCESS_TOKEN_CREATE_MUTATION,
    CUSTOMER_ACCESS_TOKEN_DELETE_MUTATION,
    CUSTOMER_CREATE_MUTATION,
    CUSTOMER_QUERY,
)
from storefront.datastore.state import CUSTOMER_TOKEN_KEY, StateStore
from storefront.exceptions import AuthenticationError
from storefront.services.client import GraphQLClient
from storefront.utils import log_call


class Customer(BaseModel):
    """Signed-in customer profile."""

    id: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None


class AccessToken(BaseModel):
    """Customer access token issued at login."""

    access_token: str = Field(alias="accessToken")
    expires_at: str | None = Field(default=None, alias="expiresAt")


def _first_user_error(payload: dict[str, Any], key: str) -> str | None:
    errors = payload.get(key) or []
    if not errors:
        return None
    return errors[0].get("message") or "Request rejected"


class CustomerAccounts:
    """
    Customer account operations. The access token is persisted under
    ``customer_token`` so new carts are created for the signed-in customer.
    """

    def __init__(
        self,
        client: GraphQLClient,
        state: StateStore,
        carts: CartService | None = None,
    ):
        self.client = client
        self.state = state
        self.carts = carts

    @log_call
    async def login(self, email: str, password: str) -> AccessToken:
        """Sign in, persist the token and attach the current cart (best effort)."""
        outcome = await self.client.request(
            CUSTOMER_ACCESS_TOKEN_CREATE_MUTATION,
            variables={"input": {"email": email, "password": password}},
            cache_ttl=NO_CACHE,
        )
        if not outcome.ok:
            raise AuthenticationError(outcome.first_error or "Login failed")

        payload = outcome.data.get("customerAccessTokenCreate") or {}
        message = _first_user_error(payload, "customerUserErrors")
        if message:
            raise AuthenticationError(message)

        raw_token = payload.get("customerAccessToken")
        if not raw_token:
            raise AuthenticationError("Login failed")

        try:
            token = AccessToken.model_validate(raw_token)
        except ValidationError as e:
            logger.error(f"[Validation] Invalid access token payload: {e}")
            raise AuthenticationError("Login failed") from e

        await self.state.set(CUSTOMER_TOKEN_KEY, token.access_token)

        if self.carts is not None:
            await self.carts.associate_cart_with_user(token.access_token)

        return token

    @log_call
    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> str:
        """Create a customer account; returns the new customer id."""
        outcome = await self.client.request(
            CUSTOMER_CREATE_MUTATION,
            variables={
                "input": {
                    "email": email,
                    "password": password,
                    "firstName": first_name,
                    "lastName": last_name,
                }
            },
            cache_ttl=NO_CACHE,
        )
        if not outcome.ok:
            raise AuthenticationError(outcome.first_error or "Registration failed")

        payload = outcome.data.get("customerCreate") or {}
        message = _first_user_error(payload, "customerUserErrors")
        if message:
            raise AuthenticationError(message)

        customer = payload.get("customer") or {}
        if not customer.get("id"):
            raise AuthenticationError("Registration failed")
        return customer["id"]

    @log_call
    async def get_customer(self, access_token: str | None = None) -> Customer:
        """
        Look up the customer for a token (the stored one by default).

        An invalid stored token is cleared before ``AuthenticationError`` is raised.
        """
        token = access_token or await self.state.get(CUSTOMER_TOKEN_KEY)
        if not token:
            raise AuthenticationError("Not signed in")

        outcome = await self.client.request(
            CUSTOMER_QUERY,
            variables={"accessToken": token},
            cache_ttl=NO_CACHE,
        )
        if not outcome.ok:
            raise AuthenticationError(outcome.first_error or "Session lookup failed")

        raw_customer = outcome.data.get("customer")
        if not raw_customer:
            if access_token is None:
                logger.info("Session expired; clearing stored customer token")
                await self.state.delete(CUSTOMER_TOKEN_KEY)
            raise AuthenticationError("Invalid access token")

        try:
            return Customer.model_validate(raw_customer)
        except ValidationError as e:
            logger.error(f"[Validation] Invalid customer payload: {e}")
            raise AuthenticationError("Session lookup failed") from e

    @log_call
    async def logout(self) -> None:
        """Revoke the stored token remotely (best effort) and forget it locally."""
        token = await self.state.get(CUSTOMER_TOKEN_KEY)
        if token:
            outcome = await self.client.request(
                CUSTOMER_ACCESS_TOKEN_DELETE_MUTATION,
                variables={"customerAccessToken": token},
                cache_ttl=NO_CACHE,
            )
            if not outcome.ok:
                logger.warning(f"Token revocation failed: {outcome.first_error}")
        await self.state.delete(CUSTOMER_TOKEN_KEY)

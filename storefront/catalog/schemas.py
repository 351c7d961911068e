"""
Structural schemas for Storefront API payloads.

Only types and required-field presence are checked here; business rules
belong to the facade. ``SchemaValidator`` wraps a schema and returns a tagged
``Verified`` / ``Rejected`` result instead of raising for shape mismatches.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Generic, TypeVar
from urllib.parse import urlparse

from loguru import logger
from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from storefront.exceptions import RecordValidationError

N = TypeVar("N")
M = TypeVar("M", bound=BaseModel)


def _check_absolute_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"not an absolute URL: {value!r}")
    return value


def _check_decimal(value: str) -> str:
    try:
        finite = Decimal(value).is_finite()
    except InvalidOperation:
        finite = False
    if not finite:
        raise ValueError(f"not a decimal amount: {value!r}")
    return value


AbsoluteUrl = Annotated[str, AfterValidator(_check_absolute_url)]
DecimalString = Annotated[str, AfterValidator(_check_decimal)]


class RemoteModel(BaseModel):
    """Base for remote payload schemas (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Nodes(RemoteModel, Generic[N]):
    """A GraphQL connection flattened to ``{nodes: [...]}``."""

    nodes: list[N]


class Money(RemoteModel):
    amount: DecimalString
    currency_code: str | None = None


class Image(RemoteModel):
    url: AbsoluteUrl
    alt_text: str | None = None


class Metafield(RemoteModel):
    value: str | None


class PriceRange(RemoteModel):
    min_variant_price: Money


class Variant(RemoteModel):
    id: str
    title: str
    price: Money | None = None
    available_for_sale: bool | None = None


class ProductNode(RemoteModel):
    """A product record as returned by the product fragment."""

    id: str
    title: str
    handle: str
    description: str
    price_range: PriceRange
    images: Nodes[Image]

    # Custom metafields
    ingredients: Metafield | None = None
    usage: Metafield | None = None
    storage: Metafield | None = None
    packaging: Metafield | None = None
    skin_type: Metafield | None = None
    badge: Metafield | None = None
    weight: Metafield | None = None
    volume: Metafield | None = None
    category: Metafield | None = None

    variants: Nodes[Variant] | None = None


class CartProduct(RemoteModel):
    id: str | None = None
    title: str
    handle: str | None = None
    images: Nodes[Image] | None = None


class Merchandise(RemoteModel):
    id: str
    title: str
    price: Money | None = None
    product: CartProduct


class CartLineNode(RemoteModel):
    id: str
    quantity: int
    merchandise: Merchandise


class CartNode(RemoteModel):
    id: str
    checkout_url: AbsoluteUrl
    lines: Nodes[CartLineNode]


@dataclass(frozen=True)
class Verified(Generic[M]):
    """A raw record that passed structural validation."""

    record: M

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Why a raw record was rejected, and which record it was."""

    reason: str
    label: str | None = None

    @property
    def ok(self) -> bool:
        return False


def _record_label(raw: Any) -> str | None:
    if isinstance(raw, dict):
        label = raw.get("title") or raw.get("id")
        return str(label) if label is not None else None
    return None


class SchemaValidator(Generic[M]):
    """
    Validates raw payload records against a pydantic schema.

    Usage:
        validator = SchemaValidator(ProductNode)

        result = validator.validate(raw)
        if result.ok:
            node = result.record

        nodes = validator.filter_valid(raw_nodes)   # drops and logs bad records
        node = validator.validate_strict(raw)       # raises RecordValidationError
    """

    def __init__(self, schema: type[M]):
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(f"schema must be a pydantic model, got {schema!r}")
        self.schema = schema

    def validate(self, raw: Any) -> Verified[M] | Rejected:
        """Validate one record. Never raises for a shape mismatch."""
        label = _record_label(raw)
        if not isinstance(raw, dict):
            return Rejected(
                reason=f"expected an object, got {type(raw).__name__}", label=label
            )
        try:
            return Verified(self.schema.model_validate(raw))
        except ValidationError as e:
            reason = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            return Rejected(reason=reason, label=label)

    def validate_strict(self, raw: Any) -> M:
        """Validate one record, raising ``RecordValidationError`` on mismatch."""
        result = self.validate(raw)
        if isinstance(result, Rejected):
            raise RecordValidationError(
                f"Invalid {self.schema.__name__} {result.label!r}: {result.reason}",
                label=result.label,
            )
        return result.record

    def filter_valid(self, raws: list[Any]) -> list[M]:
        """Validate each record independently; drop and log the invalid ones."""
        valid: list[M] = []
        for raw in raws:
            result = self.validate(raw)
            if isinstance(result, Rejected):
                logger.warning(
                    f"[Validation] Dropped invalid {self.schema.__name__} "
                    f'"{result.label}": {result.reason}'
                )
                continue
            valid.append(result.record)
        return valid


product_validator = SchemaValidator(ProductNode)
cart_validator = SchemaValidator(CartNode)

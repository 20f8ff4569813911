"""Pydantic models for caller-supplied transaction options.

Callers pass options as a plain mapping. Every key a gateway understands is
enumerated here; anything else is ignored rather than rejected, so callers can
share one options dict across providers.
"""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from unified_gateway.models.exceptions import ConfigurationError

# Several providers accept either "1" or 1 for counts and indicators.
StrOrInt = Union[str, int]


class Address(BaseModel):
    """Postal address used for AVS and cardholder details."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    address1: Optional[str] = Field(None, description="Street line 1")
    address2: Optional[str] = Field(None, description="Street line 2")
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = Field(None, description="Postal code")
    country: Optional[str] = Field(None, description="ISO country code")
    phone: Optional[str] = None


class LineItem(BaseModel):
    """Line-item detail for providers that itemize orders."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    reference_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[StrOrInt] = None
    price: Optional[StrOrInt] = None
    discount: Optional[StrOrInt] = None


class Tax(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    type: Optional[str] = None
    amount: Optional[StrOrInt] = None
    rate: Optional[StrOrInt] = None


class AmountDetails(BaseModel):
    """Breakdown of the total (tip/gratuity, tax, discounts)."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    tip_amount: Optional[StrOrInt] = None
    taxed_amount: Optional[StrOrInt] = None
    discount_amount: Optional[StrOrInt] = None
    taxable_amount: Optional[StrOrInt] = None
    tax: Optional[Tax] = None


class TransactionOptions(BaseModel):
    """
    Recognized transaction options.

    Presence of an option decides whether the matching provider field is
    emitted; a missing option never produces an empty field.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # Common
    order_id: Optional[StrOrInt] = Field(None, description="Merchant order identifier")
    description: Optional[str] = None
    customer: Optional[str] = Field(None, description="Merchant customer reference")
    billing_address: Optional[Address] = None
    address: Optional[Address] = Field(None, description="Fallback when billing_address is absent")
    currency: Optional[str] = None
    reference_id: Optional[str] = Field(None, description="Idempotency reference sent to the provider")
    metadata: Optional[dict[str, Any]] = None
    verify_amount: Optional[int] = Field(None, description="Amount used by verify, in minor units", ge=0)

    # Card-present / stored credential indicators
    moto_ecommerce_ind: Optional[StrOrInt] = None
    recurring_pmt_num: Optional[StrOrInt] = None
    recurring_pmt_count: Optional[StrOrInt] = None
    client_reference_number: Optional[str] = None
    card_on_file: Optional[str] = None
    cit_mit_indicator: Optional[str] = None
    account_data_source: Optional[str] = None
    store_card: Optional[str] = None
    expiration_date: Optional[str] = Field(None, description="MMYY expiry for a stored card")

    # 3-D Secure
    xid: Optional[str] = None
    cavv: Optional[str] = None
    ucaf_collection_ind: Optional[StrOrInt] = None
    ucaf_auth_data: Optional[str] = None

    # Cardholder and browser
    email: Optional[str] = None
    ip: Optional[str] = None
    finger_print: Optional[str] = None
    identification_type: Optional[StrOrInt] = None
    identification_value: Optional[str] = None
    cardholder_birthdate: Optional[str] = None

    # Order detail
    items: Optional[list[LineItem]] = None
    amount_details: Optional[AmountDetails] = None
    merchant_id: Optional[StrOrInt] = None
    installments: Optional[StrOrInt] = None
    statement_descriptor: Optional[str] = None
    customer_id: Optional[str] = None
    invoice_number: Optional[str] = None
    capture_method: Optional[str] = None

    # Refund / void
    type: Optional[str] = Field(None, description="Refund type, e.g. 'partial-refund'")
    reason: Optional[str] = None

    @classmethod
    def from_mapping(
        cls, options: Union["TransactionOptions", Mapping[str, Any], None]
    ) -> "TransactionOptions":
        """
        Build options from a caller mapping, ignoring unknown keys.

        Raises:
            ConfigurationError: a recognized option has an unusable value
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid transaction options: {e}") from e

    @property
    def effective_address(self) -> Optional[Address]:
        return self.billing_address or self.address

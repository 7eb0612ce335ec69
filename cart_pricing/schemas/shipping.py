"""
Shipping schemas: the cart's shipping selection and the resolved rate with
its VAT metadata.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ShippingSelection(BaseModel):
    """
    Shipping method chosen for the cart.

    vat_rate and vat_included override the method's configured values when
    given. None means "use the method's value": for vat_rate that falls
    back further to the cart's rate, for vat_included to False.
    """
    model_config = ConfigDict(frozen=True)

    method_id: str = Field(validation_alias=AliasChoices("method_id", "method", "method_name"))
    vat_rate: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("vat_rate", "vatRate"),
    )
    vat_included: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("vat_included", "vatIncluded"),
    )


class ShippingRate(BaseModel):
    """Resolved shipping amount with VAT information."""
    model_config = ConfigDict(frozen=True)

    amount: float
    vat_rate: Optional[float] = None
    vat_included: bool = False

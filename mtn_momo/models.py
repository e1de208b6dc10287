"""
MTN MoMo SDK Data Models
"""

import os
import re
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mtn_momo.exceptions import ConfigurationError

SANDBOX_BASE_URL = "https://sandbox.momodeveloper.mtn.com"
PRODUCTION_BASE_URL = "https://proxy.momoapi.mtn.com"

Environment = Literal["sandbox", "production"]
Product = Literal["collection", "disbursement"]

PLAIN_DECIMAL = re.compile(r"^\d+(\.\d+)?$", re.ASCII)


class MomoCredentials(BaseModel):
    """Credentials for one MoMo product subscription"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    environment: Environment = Field("sandbox", description="sandbox or production")
    product: Product = Field("disbursement", description="collection or disbursement")
    subscription_key: str = Field(..., alias="subscriptionKey", repr=False)
    api_user: str = Field(..., alias="apiUser", description="API user id (UUID)")
    api_key: str = Field(..., alias="apiKey", repr=False)
    target_environment: Optional[str] = Field(
        None,
        alias="targetEnvironment",
        description="X-Target-Environment override (e.g. mtnrwanda, mtnuganda)",
    )

    @field_validator("subscription_key", "api_user", "api_key")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def base_url(self) -> str:
        if self.environment == "sandbox":
            return SANDBOX_BASE_URL
        return PRODUCTION_BASE_URL

    @property
    def x_target_environment(self) -> str:
        return self.target_environment or self.environment

    @classmethod
    def from_env(cls, prefix: str = "MTN_MOMO_") -> "MomoCredentials":
        """
        Build credentials from environment variables.

        Reads ``<prefix>ENVIRONMENT``, ``<prefix>PRODUCT``,
        ``<prefix>SUBSCRIPTION_KEY``, ``<prefix>API_USER``, ``<prefix>API_KEY``
        and ``<prefix>TARGET_ENVIRONMENT``.

        Raises:
            ConfigurationError: If a required variable is missing
        """
        missing = [
            f"{prefix}{name}"
            for name in ("SUBSCRIPTION_KEY", "API_USER", "API_KEY")
            if not os.getenv(f"{prefix}{name}")
        ]
        if missing:
            raise ConfigurationError(
                f"Missing environment variables: {', '.join(missing)}"
            )

        return cls(
            environment=os.getenv(f"{prefix}ENVIRONMENT", "sandbox"),
            product=os.getenv(f"{prefix}PRODUCT", "disbursement"),
            subscription_key=os.environ[f"{prefix}SUBSCRIPTION_KEY"],
            api_user=os.environ[f"{prefix}API_USER"],
            api_key=os.environ[f"{prefix}API_KEY"],
            target_environment=os.getenv(f"{prefix}TARGET_ENVIRONMENT") or None,
        )


class ClientConfig(BaseModel):
    """SDK client configuration"""

    base_url: Optional[str] = Field(
        None, description="Base URL override; derived from the credentials when unset"
    )
    timeout: float = Field(
        10.0, description="Timeout in seconds for token, status, balance and validation calls"
    )
    payment_timeout: float = Field(
        20.0, description="Timeout in seconds for transfer and request-to-pay calls"
    )
    debug: bool = Field(False, description="Enable debug logging")

    @field_validator("timeout", "payment_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class Party(BaseModel):
    """A MoMo account holder identified by MSISDN"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    party_id_type: Literal["MSISDN"] = Field("MSISDN", alias="partyIdType")
    party_id: str = Field(..., alias="partyId", description="Phone number, e.g. 250788123456")

    @field_validator("party_id")
    @classmethod
    def validate_party_id(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone number is required")
        return v.strip()


class _PaymentRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    amount: str = Field(..., description="Amount as a decimal string")
    currency: str = Field(..., description="Currency code (e.g. RWF, UGX, EUR)")
    external_id: str = Field(..., alias="externalId", description="Caller correlation id")
    payer_message: Optional[str] = Field(None, alias="payerMessage")
    payee_note: Optional[str] = Field(None, alias="payeeNote")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str) or not PLAIN_DECIMAL.match(v.strip()):
            raise ValueError("Amount must be a plain decimal number")
        v = v.strip()
        if Decimal(v) <= 0:
            raise ValueError("Amount must be positive")
        return v

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        if len(v) != 3 or not (v.isascii() and v.isalpha()):
            raise ValueError("Currency must be a 3-letter code")
        return v.upper()

    @field_validator("external_id", mode="before")
    @classmethod
    def validate_external_id(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        return v

    def to_payload(self) -> dict:
        """Request body with the API's camelCase keys"""
        return self.model_dump(by_alias=True, exclude_none=True)


class TransferRequest(_PaymentRequest):
    """Disbursement transfer request"""

    payee: Party


class RequestToPayRequest(_PaymentRequest):
    """Collection request-to-pay request"""

    payer: Party

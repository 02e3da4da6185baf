"""SSO client settings.

All defaults are defined here in the schema. Uses Pydantic Settings for
automatic env var loading:

    VATSIM_SSO_BASE_URL=https://cert.vatsim.net/sso/
    VATSIM_SSO_CONSUMER_KEY=SSO_DEMO
    VATSIM_SSO_CONSUMER_SECRET=...
    VATSIM_SSO_SIGNATURE_METHOD=HMAC
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vatsim_sso.core.config.enums import SignatureAlgorithm, WireFormat


class SsoSettings(BaseSettings):
    """Connection and credential settings for one relying application."""

    model_config = SettingsConfigDict(
        env_prefix="VATSIM_SSO_",
        extra="ignore",
    )

    base_url: str = Field(
        description="Location of the SSO provider, e.g. https://cert.vatsim.net/sso/"
    )
    api_path: str = Field("api/", description="Directory path of the OAuth API below base_url")
    login_token_path: str = Field("login_token/", description="API location for request tokens")
    user_data_path: str = Field("login_return/", description="API location for user data queries")
    redirect_path: str = Field(
        "auth/pre_login/?oauth_token=",
        description="Login page below base_url; the request token key is appended",
    )

    consumer_key: str = Field(description="Organization key issued by the provider")
    consumer_secret: Optional[str] = Field(None, description="Shared secret, HMAC signing only")
    signature_method: Optional[str] = Field(
        None, description="HMAC[-SHA1] or RSA[-SHA1]; may also be configured later"
    )
    private_key: Optional[str] = Field(None, description="PEM encoded RSA key, RSA signing only")
    private_key_file: Optional[Path] = Field(
        None, description="Path to a PEM encoded RSA key, read when private_key is unset"
    )

    response_format: WireFormat = Field(WireFormat.JSON, description="Provider response format")
    timeout_seconds: float = Field(15.0, gt=0, description="Per-request transport timeout")

    @field_validator("base_url", "consumer_key")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that required fields are not empty."""
        if not v or not v.strip():
            field_name = info.field_name.replace("_", " ").title()
            raise ValueError(f"{field_name} is required")
        return v.strip()

    @field_validator("response_format", mode="before")
    @classmethod
    def validate_response_format(cls, v):
        """Accept json/xml in any case."""
        if isinstance(v, str):
            parsed = WireFormat.parse(v)
            if parsed is None:
                raise ValueError("Unknown response format. Valid format types: json, xml")
            return parsed
        return v

    @model_validator(mode="after")
    def validate_signature_config(self):
        """Load the key file and make sure the selected algorithm is usable."""
        if self.private_key is None and self.private_key_file is not None:
            try:
                self.private_key = self.private_key_file.read_text()
            except OSError as e:
                raise ValueError(f"Cannot read private_key_file: {e}") from e

        if self.signature_method is None:
            return self

        algorithm = SignatureAlgorithm.from_name(self.signature_method)
        if algorithm is None:
            raise ValueError(
                f"Unknown signature method '{self.signature_method}'. Valid methods: HMAC, RSA"
            )
        if algorithm == SignatureAlgorithm.RSA_SHA1 and not self.private_key:
            raise ValueError("RSA signing requires private_key or private_key_file")
        return self

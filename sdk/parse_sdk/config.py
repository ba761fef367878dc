"""
Configuration for the Parse schema SDK.

Settings are read from environment variables prefixed with PARSE_,
e.g. PARSE_SERVER_URL, PARSE_APPLICATION_ID, PARSE_MASTER_KEY.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ParseSettings(BaseSettings):
    """Connection settings for the default REST transport."""

    # Parse server
    server_url: str = Field(default="http://localhost:1337/parse")
    application_id: str = Field(default="")

    # Keys - master key is only sent when an operation asks for it
    rest_api_key: str | None = Field(default=None)
    master_key: str | None = Field(default=None)

    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    model_config = {"env_prefix": "PARSE_"}

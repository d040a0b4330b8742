"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from iqdb import __version__


class Base(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HttpConfig(Base):
    """HTTP settings for requests to iqdb."""

    timeout: float = 10.0
    user_agent: str = f"iqdb-client/{__version__}"


class Config(Base):
    """Root configuration for the iqdb client."""

    base_url: str = ""  # empty: IQDB_BASE_URL or https://iqdb.org
    http: HttpConfig = Field(default_factory=HttpConfig)
    services: list[str] = Field(default_factory=list)  # service names to search; empty = all

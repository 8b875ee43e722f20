from pydantic import BaseModel
from pydantic.config import ConfigDict


class SiteMetadata(BaseModel):
    """Site-wide metadata, built once at startup and passed to consumers."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    description: str
    site_url: str
    site_repo: str = ""
    language: str = "en-us"
    locale: str = "en-US"
    email: str = ""
    github: str = ""
    x: str = ""
    discord: str = ""
    youtube: str = ""
    linkedin: str = ""

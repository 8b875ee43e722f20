from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from engblog.schemas.site import SiteMetadata


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content source: "couchdb" or "filesystem"
    CONTENT_SOURCE: str = "couchdb"
    CONTENT_DIR: str = "content"
    WATCH_CHANGES: bool = True

    # CouchDB
    COUCHDB_HOST: str = "localhost"
    COUCHDB_PORT: int = 5984
    COUCHDB_USERNAME: str = "admin"
    COUCHDB_PASSWORD: str = ""
    COUCHDB_DATABASE: str = "obsidian_db"

    # Collections
    BLOG_PREFIX: str = "blog/"
    AUTHORS_PREFIX: str = "authors/"
    POSTS_PER_PAGE: int = 5

    # Syndicated RSS feed merged into the blog; empty disables it
    SYNDICATED_FEED_URL: str = ""
    SYNDICATED_BASE_URL: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    ENGBLOG_API_KEY: str = ""

    # Site
    SITE_TITLE: str = "Sentry Engineering"
    SITE_AUTHOR: str = "Sentry"
    SITE_DESCRIPTION: str = "Notes from the engineers building Sentry."
    SITE_URL: str = "https://sentry.engineering"
    SITE_REPO: str = "https://github.com/getsentry/sentry.engineering"
    SITE_LANGUAGE: str = "en-us"
    SITE_LOCALE: str = "en-US"
    SITE_EMAIL: str = ""
    SITE_GITHUB: str = "https://github.com/getsentry"
    SITE_X: str = "https://x.com/sentry"
    SITE_DISCORD: str = "https://discord.gg/sentry"
    SITE_YOUTUBE: str = "https://www.youtube.com/channel/UCP_sweTJ0DQmMlpvNSOpEJg"
    SITE_LINKEDIN: str = "https://www.linkedin.com/company/getsentry/"

    @property
    def couchdb_url(self) -> str:
        return f"http://{self.COUCHDB_USERNAME}:{self.COUCHDB_PASSWORD}@{self.COUCHDB_HOST}:{self.COUCHDB_PORT}"

    def site_metadata(self) -> SiteMetadata:
        return SiteMetadata(
            title=self.SITE_TITLE,
            author=self.SITE_AUTHOR,
            description=self.SITE_DESCRIPTION,
            site_url=self.SITE_URL.rstrip("/"),
            site_repo=self.SITE_REPO,
            language=self.SITE_LANGUAGE,
            locale=self.SITE_LOCALE,
            email=self.SITE_EMAIL,
            github=self.SITE_GITHUB,
            x=self.SITE_X,
            discord=self.SITE_DISCORD,
            youtube=self.SITE_YOUTUBE,
            linkedin=self.SITE_LINKEDIN,
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()

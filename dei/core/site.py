"""Site metadata shared by every page."""
from dei.core.config import Settings
from dei.core.schemas import SiteConfig


def build_site_config(settings: Settings) -> SiteConfig:
    """Site metadata as configured through SITE_* environment variables."""
    return SiteConfig(
        name=settings.site_name,
        description=settings.site_description,
        url=settings.site_url,
        email=settings.site_email,
        linkedin_url=settings.site_linkedin_url,
        telegram_url=settings.site_telegram_url,
        medium_url=settings.site_medium_url,
        founded_year=settings.site_founded_year,
        member_count=settings.site_member_count,
    )

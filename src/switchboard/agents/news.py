"""TLDR News provider: daily tech news digests fetched over HTTP."""

import logging
from datetime import date, timedelta

import httpx
from pydantic import BaseModel, Field

from switchboard.agents.provider import CapabilityProvider
from switchboard.tools.builder import build_tool

logger = logging.getLogger(__name__)

DEFAULT_NEWS_BASE_URL = "https://r.jina.ai/https://tldr.tech/tech/"


class GetNewsArgs(BaseModel):
    """Get TLDR news for a specific date"""

    year: int = Field(ge=2020, le=2030, description="Year between 2020-2030 (e.g., 2025)")
    month: int = Field(ge=1, le=12, description="Month number between 1-12")
    day: int = Field(ge=1, le=31, description="Day of month between 1-31")


def publication_date(requested: date) -> date:
    """TLDR does not publish on weekends; map Saturday and Sunday to Friday."""
    weekday = requested.weekday()  # Monday == 0
    if weekday == 5:
        return requested - timedelta(days=1)
    if weekday == 6:
        return requested - timedelta(days=2)
    return requested


class NewsFetcher:
    """Fetches a day's digest from the TLDR archive.

    Args:
        http_client: Shared httpx.AsyncClient
        base_url: Archive URL the ISO date is appended to
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = DEFAULT_NEWS_BASE_URL) -> None:
        self.http_client = http_client
        self.base_url = base_url

    async def get_news(self, args: GetNewsArgs) -> dict:
        requested = date(args.year, args.month, args.day)
        published = publication_date(requested)
        date_string = published.isoformat()
        unavailable = f"No tech news available for {date_string}"

        try:
            response = await self.http_client.get(f"{self.base_url}{date_string}")
            content = response.text if response.is_success else unavailable
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch TLDR news for {date_string}: {e}")
            content = unavailable

        if published != requested:
            content = (
                f"Note: Showing Friday's ({date_string}) news for "
                f"{requested.isoformat()} due to weekend.\n\n{content}"
            )

        return {"date": date_string, "content": content, "source": "tldr.tech"}


def build_news_provider(
    http_client: httpx.AsyncClient,
    base_url: str = DEFAULT_NEWS_BASE_URL,
) -> CapabilityProvider:
    """Create the TLDR News provider."""
    fetcher = NewsFetcher(http_client, base_url)
    return CapabilityProvider(
        name="TLDR News",
        description=(
            "Provides TLDR tech news summaries from TLDR Tech, handling requests like "
            "\"today's tldr news\" or \"Friday's tldr updates\""
        ),
        system_prompt=(
            "You are a tech news assistant that provides daily summaries from TLDR Tech. "
            "Focus on presenting the news clearly and concisely, highlighting the most "
            "important tech developments."
        ),
        tools=[build_tool("getTLDRNews", GetNewsArgs, fetcher.get_news)],
    )

from mediafetch.providers.fxtwitter import FxTwitterProvider
from mediafetch.providers.html_scrape import HTMLScrapeProvider
from mediafetch.providers.syndication import SyndicationProvider

__all__ = ["FxTwitterProvider", "HTMLScrapeProvider", "SyndicationProvider"]

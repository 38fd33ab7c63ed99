"""In-app content pages and the navigation rule their webview must follow."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

from spotmap.config.settings import ContentSettings, get_settings

IN_PAGE_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ContentPage:
    title: str
    url: str


class NavigationDecision(str, Enum):
    NAVIGATE = "navigate"
    LAUNCH_EXTERNAL = "launch_external"


def route_navigation(url: str) -> NavigationDecision:
    """
    Decide where a webview navigation goes.

    Only http(s) loads in-page; mailto:, tel: and every other scheme are
    handed to the external launcher.
    """
    scheme = urlsplit(url.strip()).scheme.lower()
    if scheme in IN_PAGE_SCHEMES:
        return NavigationDecision.NAVIGATE
    return NavigationDecision.LAUNCH_EXTERNAL


def privacy_page(content: Optional[ContentSettings] = None) -> ContentPage:
    content = content or get_settings().content
    return ContentPage(title="Privacy Policy", url=content.privacy_url)


def contact_page(content: Optional[ContentSettings] = None) -> ContentPage:
    content = content or get_settings().content
    return ContentPage(title="Contact Us", url=content.contact_url)

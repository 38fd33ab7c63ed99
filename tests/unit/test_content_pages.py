import pytest

from spotmap.config.settings import ContentSettings
from spotmap.services.content_pages import (
    NavigationDecision,
    contact_page,
    privacy_page,
    route_navigation,
)


@pytest.mark.parametrize("url", [
    "https://slushi.no/contact.html",
    "http://example.com/a?b=c",
    "HTTPS://EXAMPLE.COM",
])
def test_web_urls_load_in_page(url):
    assert route_navigation(url) == NavigationDecision.NAVIGATE


@pytest.mark.parametrize("url", [
    "mailto:hei@slushi.no",
    "tel:+4712345678",
    "MAILTO:hei@slushi.no",
    "intent://scan/#Intent;scheme=zxing;end",
    "sms:12345",
])
def test_other_schemes_go_external(url):
    assert route_navigation(url) == NavigationDecision.LAUNCH_EXTERNAL


def test_content_pages_from_settings():
    content = ContentSettings(privacy_url="https://p.example", contact_url="https://c.example")
    assert privacy_page(content).title == "Privacy Policy"
    assert privacy_page(content).url == "https://p.example"
    assert contact_page(content).url == "https://c.example"

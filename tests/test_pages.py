from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from peereval.config import get_settings
from peereval.pages import routes


@pytest.fixture
def page_client():
    app = FastAPI()
    app.include_router(routes.router)
    with TestClient(app) as client:
        yield client


def test_contact_page(page_client):
    settings = get_settings()
    response = page_client.get("/contact")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert f"<title>Contact Us - {settings.app_name}</title>" in html
    assert f'href="mailto:{settings.support_email}"' in html
    assert f'href="{settings.issue_tracker_url}" target="_blank"' in html
    assert 'src="/static/images/contact.svg"' in html


@pytest.mark.parametrize(
    ("path", "current_label"),
    [("/", "Home"), ("/about", "About Us"), ("/terms", "Terms of Use"), ("/contact", "Contact")],
)
def test_navigation_marks_current_page(page_client, path, current_label):
    html = page_client.get(path).text

    assert f'<a href="{path}" aria-current="page">{current_label}</a>' in html
    assert html.count('aria-current="page"') == 1
    for _, href, label in routes.NAVIGATION:
        if href != path:
            assert f'<a href="{href}">{label}</a>' in html


def test_static_assets_exist():
    assert (routes.STATIC_DIR / "css" / "main.css").is_file()
    assert (routes.STATIC_DIR / "images" / "logo.svg").is_file()
    assert (routes.STATIC_DIR / "images" / "contact.svg").is_file()

"""Server-rendered static pages sharing the ``page.html`` layout."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..config import get_settings

PAGES_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PAGES_DIR / "templates"
STATIC_DIR = PAGES_DIR / "static"

# (current_page id, path, navigation label)
NAVIGATION: tuple[tuple[str, str, str], ...] = (
    ("home", "/", "Home"),
    ("about", "/about", "About Us"),
    ("terms", "/terms", "Terms of Use"),
    ("contact", "/contact", "Contact"),
)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(default_response_class=HTMLResponse, tags=["pages"])


def render_page(request: Request, template_name: str, current_page: str) -> HTMLResponse:
    """Render ``template_name`` inside the shared layout with ``current_page`` highlighted."""
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        template_name,
        {
            "current_page": current_page,
            "navigation": NAVIGATION,
            "app_name": settings.app_name,
            "support_email": settings.support_email,
            "issue_tracker_url": settings.issue_tracker_url,
        },
    )


@router.get("/")
def home(request: Request) -> HTMLResponse:
    return render_page(request, "index.html", "home")


@router.get("/about")
def about(request: Request) -> HTMLResponse:
    return render_page(request, "about.html", "about")


@router.get("/terms")
def terms(request: Request) -> HTMLResponse:
    return render_page(request, "terms.html", "terms")


@router.get("/contact")
def contact(request: Request) -> HTMLResponse:
    return render_page(request, "contact.html", "contact")

"""
Landing page and crawler resources (sitemap.xml, robots.txt).
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import FileResponse
from datetime import date
import logging

from marketing_site.api.deps import get_settings_dep
from marketing_site.core.config import Settings
from marketing_site.core.errors import SiteError

router = APIRouter()
logger = logging.getLogger(__name__)

# (path, changefreq, priority)
SITEMAP_ENTRIES = [
    ("/", "weekly", "1.0"),
    ("/#about", "monthly", "0.8"),
    ("/#services", "monthly", "0.9"),
    ("/#projects", "weekly", "0.8"),
]


def site_origin(request: Request) -> str:
    host = request.headers.get("host") or request.url.netloc
    return f"{request.url.scheme}://{host}"


def build_sitemap(origin: str, lastmod: date) -> str:
    urls = "".join(
        f"""
  <url>
    <loc>{origin}{path}</loc>
    <lastmod>{lastmod.isoformat()}</lastmod>
    <changefreq>{changefreq}</changefreq>
    <priority>{priority}</priority>
  </url>"""
        for path, changefreq, priority in SITEMAP_ENTRIES
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{urls}\n"
        "</urlset>"
    )


def build_robots(origin: str) -> str:
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /api/\n"
        "Disallow: /health\n"
        "\n"
        f"Sitemap: {origin}/sitemap.xml"
    )


@router.get("/", include_in_schema=False)
async def landing_page(settings: Settings = Depends(get_settings_dep)):
    index_path = settings.static_dir / "index.html"
    if not index_path.is_file():
        logger.error(f"❌ Error serving index.html: {index_path} not found")
        raise SiteError("Internal server error", code="FILE_SERVE_ERROR")
    return FileResponse(index_path, headers={"Cache-Control": "no-cache"})


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap(request: Request):
    return Response(content=build_sitemap(site_origin(request), date.today()), media_type="text/xml")


@router.get("/robots.txt", include_in_schema=False)
async def robots(request: Request):
    return Response(content=build_robots(site_origin(request)), media_type="text/plain")

"""Customer page routes: dashboard and shop"""

import os
from urllib.parse import quote, unquote, urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from ..core.config import settings
from ..core.query_cache import QueryCache
from ..core.session import SessionState
from ..security.session_guard import current_session
from ..services.portal import PortalService
from ..views import CatalogController, DashboardController, Loading, Redirect, ViewResult

router = APIRouter(prefix="/mypage", tags=["Pages"])

templates_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=templates_dir)


def format_price(price: int) -> str:
    """Format a yen amount, e.g. 2800 -> ¥2,800"""
    return f"¥{price:,}"


templates.env.filters["format_price"] = format_price

# One-shot status message carried from the add-to-cart post to the next shop render
FLASH_COOKIE = "shop_message"
FLASH_PATH = "/mypage/shop"


def new_cache() -> QueryCache:
    """Query cache for a single request; pages do not share cached data"""
    return QueryCache(stale_time=settings.query_stale_seconds)


def respond(request: Request, result: ViewResult):
    """Turn a controller result into an HTTP response"""
    if isinstance(result, Redirect):
        return RedirectResponse(url=result.location, status_code=303)
    if isinstance(result, Loading):
        return templates.TemplateResponse(request, result.template, {})
    return templates.TemplateResponse(request, result.template, result.context)


@router.get("")
async def dashboard(request: Request, session: SessionState = Depends(current_session)):
    """Customer dashboard with enrollments"""
    controller = DashboardController(PortalService(session), new_cache())
    return respond(request, await controller.load(session))


@router.get("/shop")
async def shop(
    request: Request,
    search: str = Query(""),
    category: str = Query(""),
    session: SessionState = Depends(current_session),
):
    """Product catalog with filters and cart badge"""
    controller = CatalogController(
        PortalService(session),
        new_cache(),
        search=search,
        category=category,
    )
    flash = request.cookies.get(FLASH_COOKIE)
    if flash:
        controller.message = unquote(flash)

    response = respond(request, await controller.load(session))
    if flash:
        response.delete_cookie(FLASH_COOKIE, path=FLASH_PATH)
    return response


@router.post("/shop/cart")
async def shop_add_to_cart(request: Request, session: SessionState = Depends(current_session)):
    """Form post from a product card; redirects back to the shop with a message"""
    form = await request.form()
    search = str(form.get("search") or "")
    category = str(form.get("category") or "")

    controller = CatalogController(
        PortalService(session),
        new_cache(),
        search=search,
        category=category,
    )
    message = await controller.add_to_cart(
        session,
        str(form.get("product_id") or ""),
        refresh=False,
    )

    query = urlencode({"search": search, "category": category})
    response = RedirectResponse(url=f"{FLASH_PATH}?{query}", status_code=303)
    response.set_cookie(
        FLASH_COOKIE,
        quote(message),
        max_age=60,
        path=FLASH_PATH,
        httponly=True,
        samesite="lax",
    )
    return response

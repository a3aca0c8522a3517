"""
FastAPI Application Entry Point

Foodie Storefront - QR table ordering with an admin menu panel.
Supports both Mock services (development) and Real APIs (production).

Endpoints:
    - GET /: Storefront (menu, cart, checkout)
    - GET /scan: Table QR scanner
    - GET|POST /api/food: Outlet menu from FoodieOS
    - POST /api/qr/resolve, /api/qr/scan: Table QR resolution
    - /api/cart, /api/checkout/*: Diner cart and checkout flow
    - GET /admin, /admin/dashboard: Admin login and menu panel
    - /api/auth/*, /api/menu, /api/sync, /api/upload: Admin API
    - GET /health: System health check

Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, Request, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodie.auth import (
    NOT_AUTHENTICATED,
    admin_redirect_middleware,
    check_password,
    clear_session_cookie,
    create_session_token,
    is_authenticated,
    require_admin,
    set_session_cookie,
)
from foodie.core.config import get_settings, setup_logging
from foodie.database import dispose_engine, init_db
from foodie.exceptions import CartError, FoodieError, QRPayloadError
from foodie.schemas import (
    AuthCheckResponse,
    CartAddRequest,
    CartLineResponse,
    CartQuantityRequest,
    CartResponse,
    CheckoutResponse,
    CheckoutStageEnum,
    DeliveryEstimate,
    ErrorResponse,
    FoodRequest,
    HealthResponse,
    LocationContext,
    LoginRequest,
    MenuItemCreate,
    MenuListResponse,
    MenuResponse,
    PaymentMethodRequest,
    QRResolveRequest,
    QRResolveResponse,
    SaveMenuItemResponse,
    SendOtpRequest,
    SyncRequest,
    SyncResponse,
    UpiAppRequest,
    UploadResponse,
    VerifyOtpRequest,
)
from foodie.services.cart import Cart, filter_menu, format_price, menu_categories
from foodie.services.checkout import CheckoutFlow
from foodie.services.foodieos import BaseFoodieService, OutletLocation, get_foodie_service
from foodie.services.geo import BaseGeoService, get_geo_service
from foodie.services.media import BaseMediaService, get_media_service
from foodie.services.menu import (
    BaseMenuRepository,
    get_menu_repository,
    sync_menu,
    sync_status_message,
)
from foodie.services.qr import BaseQRDecoder, QRResolution, QRResolver, get_qr_decoder
from foodie.services.sessions import (
    SESSION_COOKIE_NAME,
    StorefrontSession,
    get_session_store,
    session_cookie_middleware,
)

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

# Template configuration
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    # The SQL menu store only exists outside development
    if not settings.is_development:
        await init_db()
        logger.info("✅ Database initialized")

    logger.info(f"✅ FoodieOS Service: {get_foodie_service().provider_name}")
    logger.info(f"✅ Geo Service: {get_geo_service().provider_name}")
    logger.info(f"✅ Menu Store: {get_menu_repository().store_name}")

    # Validate production config
    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await dispose_engine()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "QR table ordering storefront backed by FoodieOS, "
        "with an admin panel for editing and syncing the outlet menu."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.middleware("http")(admin_redirect_middleware)
app.middleware("http")(session_cookie_middleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_storefront_session(request: Request) -> StorefrontSession:
    """Current diner's session, created on first use."""
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    session = get_session_store().get_or_create(cookie)
    if cookie != session.id:
        # Picked up by session_cookie_middleware, error responses included
        request.state.new_session_id = session.id
    return session


def find_storefront_session(request: Request) -> Optional[StorefrontSession]:
    """Existing diner session for read-only routes; never creates one."""
    return get_session_store().get(request.cookies.get(SESSION_COOKIE_NAME))


def cart_response(cart: Cart) -> CartResponse:
    total = cart.total_price()
    return CartResponse(
        lines=[
            CartLineResponse(
                key=line.key,
                item_id=line.item_id,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
                image=line.image,
                add_ons=line.add_ons,
                line_total=line.line_total,
            )
            for line in cart
        ],
        total_price=total,
        total_items=cart.total_items(),
        formatted_total=format_price(total),
    )


def checkout_response(flow: CheckoutFlow) -> CheckoutResponse:
    estimate = None
    if flow.stage != CheckoutStageEnum.BROWSING:
        estimate = DeliveryEstimate(**flow.estimate(flow.confirmed_at))

    return CheckoutResponse(
        stage=flow.stage,
        phone=flow.phone,
        otp_sent=flow.otp_sent,
        payment_method=flow.payment_method,
        upi_app=flow.upi_app,
        deep_link=flow.deep_link,
        cart=cart_response(flow.cart),
        delivery_estimate=estimate,
    )


def parse_outlet_id(value: Optional[Any]) -> int:
    if value in (None, ""):
        return settings.default_outlet_id
    try:
        return int(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="outletId must be numeric")


def qr_response(resolution: QRResolution, session: StorefrontSession) -> QRResolveResponse:
    session.qr = resolution.data
    if resolution.location is not None:
        session.location = resolution.location
    return QRResolveResponse(
        data=resolution.data,
        location=resolution.location,
        redirect_url=resolution.redirect_url,
    )


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", response_class=HTMLResponse, tags=["Storefront"])
async def storefront_page(
    request: Request,
    outlet_id: Optional[str] = Query(None, alias="outletId"),
    table_id: Optional[str] = Query(None, alias="tableId"),
    category: str = Query(""),
    lat: Optional[float] = Query(None),
    lon: Optional[float] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    search: str = Query(""),
    veg: bool = Query(False),
    non_veg: bool = Query(False, alias="nonVeg"),
    bestseller: bool = Query(False),
) -> HTMLResponse:
    """Serve the storefront UI; the page loads the menu from /api/food."""
    return templates.TemplateResponse(
        request,
        "storefront.html",
        {
            "app_name": settings.app_name,
            "query": {
                "outletId": outlet_id or str(settings.default_outlet_id),
                "tableId": table_id or "",
                "category": category,
                "lat": lat,
                "lon": lon,
                "city": city or "",
                "state": state or "",
                "search": search,
                "veg": veg,
                "nonVeg": non_veg,
                "bestseller": bestseller,
            },
        },
    )


@app.get("/scan", response_class=HTMLResponse, tags=["Storefront"])
async def scan_page(request: Request) -> HTMLResponse:
    """Serve the table QR scanner."""
    return templates.TemplateResponse(request, "scan.html", {"app_name": settings.app_name})


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    foodie_service: BaseFoodieService = Depends(get_foodie_service),
    geo_service: BaseGeoService = Depends(get_geo_service),
    menu_repository: BaseMenuRepository = Depends(get_menu_repository),
) -> HealthResponse:
    """Verify all system components are operational."""

    foodie_status = "healthy" if await foodie_service.health_check() else "unhealthy"
    geo_status = "healthy" if await geo_service.health_check() else "unhealthy"
    menu_status = "healthy" if await menu_repository.health_check() else "unhealthy"

    media_status = "healthy"
    try:
        if not await get_media_service().health_check():
            media_status = "unhealthy"
    except ValueError as e:
        media_status = f"unhealthy: {e}"
        logger.error(f"Media service health check failed: {e}")

    overall = "operational" if all(
        s == "healthy" for s in [foodie_status, geo_status, media_status, menu_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        environment=settings.env_mode.value,
        foodie_service=foodie_status,
        geo_service=geo_status,
        media_service=media_status,
        menu_store=menu_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# MENU (FOODIEOS) ENDPOINTS
# =============================================================================

async def load_menu(
    food_request: FoodRequest,
    session: StorefrontSession,
    foodie_service: BaseFoodieService,
    geo_service: BaseGeoService,
) -> MenuResponse:
    outlet_id = parse_outlet_id(food_request.outlet_id)

    # Without device coordinates FoodieOS gets the configured outlet location
    location = OutletLocation(
        lat=settings.default_lat,
        lon=settings.default_lon,
        city=food_request.city or settings.default_city,
        state=food_request.state or settings.default_state,
        country=settings.default_country,
    )
    if food_request.lat is not None and food_request.lon is not None:
        city, state = food_request.city, food_request.state
        if not city:
            geo_result = await geo_service.reverse_geocode(food_request.lat, food_request.lon)
            if geo_result.success:
                city, state = geo_result.city, geo_result.state
        location = OutletLocation(
            lat=food_request.lat,
            lon=food_request.lon,
            city=city or "",
            state=state or "",
            country=settings.default_country,
        )
        session.location = LocationContext(
            lat=food_request.lat,
            lon=food_request.lon,
            city=city,
            state=state,
        )

    result = await foodie_service.fetch_outlet_food(outlet_id, location, food_request.category)

    if not result.success:
        if result.error_code == "empty_menu":
            return MenuResponse(success=False, outlet_id=str(outlet_id), error=result.error_message)
        raise HTTPException(status_code=502, detail=result.error_message)

    session.remember_menu(str(outlet_id), result.items)

    items = filter_menu(
        result.items,
        search=food_request.search,
        categories=food_request.categories,
        veg=food_request.veg,
        non_veg=food_request.non_veg,
        bestseller=food_request.bestseller,
    )

    return MenuResponse(
        success=True,
        outlet_id=str(outlet_id),
        items=items,
        categories=menu_categories(result.items),
    )


@app.get(
    "/api/food",
    response_model=MenuResponse,
    responses={502: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def get_food(
    outlet_id: Optional[str] = Query(None, alias="outletId"),
    category: str = Query(""),
    lat: Optional[float] = Query(None),
    lon: Optional[float] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    search: str = Query(""),
    categories: Optional[list[str]] = Query(None),
    veg: bool = Query(False),
    non_veg: bool = Query(False, alias="nonVeg"),
    bestseller: bool = Query(False),
    session: StorefrontSession = Depends(get_storefront_session),
    foodie_service: BaseFoodieService = Depends(get_foodie_service),
    geo_service: BaseGeoService = Depends(get_geo_service),
) -> MenuResponse:
    """Fetch the outlet menu from FoodieOS, optionally filtered."""
    food_request = FoodRequest(
        outletId=outlet_id,
        category=category,
        lat=lat,
        lon=lon,
        city=city,
        state=state,
        search=search,
        categories=categories or [],
        veg=veg,
        nonVeg=non_veg,
        bestseller=bestseller,
    )
    return await load_menu(food_request, session, foodie_service, geo_service)


@app.post(
    "/api/food",
    response_model=MenuResponse,
    responses={502: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def post_food(
    food_request: Optional[FoodRequest] = None,
    session: StorefrontSession = Depends(get_storefront_session),
    foodie_service: BaseFoodieService = Depends(get_foodie_service),
    geo_service: BaseGeoService = Depends(get_geo_service),
) -> MenuResponse:
    return await load_menu(food_request or FoodRequest(), session, foodie_service, geo_service)


@app.options("/api/food", tags=["Menu"])
async def food_preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


# =============================================================================
# QR ENDPOINTS
# =============================================================================

@app.post(
    "/api/qr/resolve",
    response_model=QRResolveResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["QR"],
)
async def resolve_qr(
    body: QRResolveRequest,
    session: StorefrontSession = Depends(get_storefront_session),
    geo_service: BaseGeoService = Depends(get_geo_service),
) -> QRResolveResponse:
    """Resolve decoded QR text to the menu redirect."""
    resolution = await QRResolver(geo_service).resolve(body.payload, body.lat, body.lon)
    return qr_response(resolution, session)


@app.post(
    "/api/qr/scan",
    response_model=QRResolveResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["QR"],
)
async def scan_qr(
    file: Optional[UploadFile] = File(None),
    lat: Optional[float] = Form(None),
    lon: Optional[float] = Form(None),
    session: StorefrontSession = Depends(get_storefront_session),
    geo_service: BaseGeoService = Depends(get_geo_service),
    decoder: BaseQRDecoder = Depends(get_qr_decoder),
) -> QRResolveResponse:
    """Decode an uploaded camera frame and resolve it."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="No file provided")

    text = decoder.decode_image_bytes(data)
    if not text:
        raise QRPayloadError("No QR code found in the image", code="qr_not_found")

    resolution = await QRResolver(geo_service).resolve(text, lat, lon)
    return qr_response(resolution, session)


# =============================================================================
# CART ENDPOINTS
# =============================================================================

@app.get("/api/cart", response_model=CartResponse, tags=["Cart"])
async def get_cart(
    session: Optional[StorefrontSession] = Depends(find_storefront_session),
) -> CartResponse:
    return cart_response(session.cart if session else Cart())


@app.post(
    "/api/cart/items",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Cart"],
)
async def add_cart_item(
    body: CartAddRequest,
    session: StorefrontSession = Depends(get_storefront_session),
) -> CartResponse:
    """Add one unit of a dish from the last loaded menu."""
    item = session.menu.get(body.item_id)
    if item is None:
        raise CartError(
            f"Menu item {body.item_id} not found",
            code="unknown_item",
            status_code=404,
        )

    session.cart.add(item, body.add_ons)
    return cart_response(session.cart)


@app.patch("/api/cart/items/{key}", response_model=CartResponse, tags=["Cart"])
async def update_cart_item(
    key: str,
    body: CartQuantityRequest,
    session: StorefrontSession = Depends(get_storefront_session),
) -> CartResponse:
    """Set a line's quantity; zero removes it."""
    session.cart.update_quantity(key, body.quantity)
    return cart_response(session.cart)


@app.delete("/api/cart", response_model=CartResponse, tags=["Cart"])
async def clear_cart(
    session: StorefrontSession = Depends(get_storefront_session),
) -> CartResponse:
    session.cart.clear()
    return cart_response(session.cart)


# =============================================================================
# CHECKOUT ENDPOINTS
# =============================================================================

@app.get("/api/checkout", response_model=CheckoutResponse, tags=["Checkout"])
async def get_checkout(
    session: Optional[StorefrontSession] = Depends(find_storefront_session),
) -> CheckoutResponse:
    if session is None:
        return CheckoutResponse(stage=CheckoutStageEnum.BROWSING, cart=cart_response(Cart()))
    return checkout_response(session.checkout)


@app.post("/api/checkout/cart", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_open_cart(
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.open_cart()
    return checkout_response(session.checkout)


@app.post("/api/checkout/summary", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_summary(
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.proceed_to_summary()
    return checkout_response(session.checkout)


@app.post("/api/checkout/verification", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_verification(
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.proceed_to_verification()
    return checkout_response(session.checkout)


@app.post("/api/checkout/otp/send", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_send_otp(
    body: SendOtpRequest,
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.send_otp(body.phone)
    return checkout_response(session.checkout)


@app.post("/api/checkout/otp/verify", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_verify_otp(
    body: VerifyOtpRequest,
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    await session.checkout.verify_otp(body.otp)
    return checkout_response(session.checkout)


@app.post("/api/checkout/payment-method", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_payment_method(
    body: PaymentMethodRequest,
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.select_payment_method(body.method)
    return checkout_response(session.checkout)


@app.post("/api/checkout/upi-app", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_upi_app(
    body: UpiAppRequest,
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    """Confirm the order and return the UPI deep link to open."""
    session.checkout.select_upi_app(body.app)
    return checkout_response(session.checkout)


@app.post("/api/checkout/acknowledge", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_acknowledge(
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.acknowledge()
    return checkout_response(session.checkout)


@app.post("/api/checkout/back", response_model=CheckoutResponse, tags=["Checkout"])
async def checkout_back(
    session: StorefrontSession = Depends(get_storefront_session),
) -> CheckoutResponse:
    session.checkout.back()
    return checkout_response(session.checkout)


# =============================================================================
# ADMIN PAGES & AUTH
# =============================================================================

@app.get("/admin", response_class=HTMLResponse, tags=["Admin"])
async def admin_login_page(
    request: Request,
    redirect: str = Query("/admin/dashboard"),
) -> HTMLResponse:
    # Only same-site paths are honoured after login
    if not redirect.startswith("/admin/"):
        redirect = "/admin/dashboard"
    return templates.TemplateResponse(
        request,
        "admin_login.html",
        {"app_name": settings.app_name, "redirect": redirect},
    )


@app.get("/admin/dashboard", response_class=HTMLResponse, tags=["Admin"])
async def admin_dashboard_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "admin_dashboard.html",
        {
            "app_name": settings.app_name,
            "categories": settings.menu_categories_list,
            "outlet_id": settings.default_outlet_id,
        },
    )


@app.post(
    "/api/auth/login",
    responses={401: {"model": ErrorResponse}},
    tags=["Auth"],
)
async def login(body: LoginRequest, response: Response) -> dict[str, bool]:
    if not check_password(body.password):
        logger.warning("Auth: Failed admin login attempt")
        raise HTTPException(status_code=401, detail="Invalid password")

    set_session_cookie(response, create_session_token())
    logger.info("Auth: Admin logged in")
    return {"success": True}


@app.post("/api/auth/logout", tags=["Auth"])
async def logout(response: Response) -> dict[str, bool]:
    clear_session_cookie(response)
    return {"success": True}


@app.get(
    "/api/auth/check",
    response_model=AuthCheckResponse,
    responses={401: {"model": AuthCheckResponse}},
    tags=["Auth"],
)
async def auth_check(request: Request) -> Any:
    if is_authenticated(request):
        return AuthCheckResponse(authenticated=True)
    return JSONResponse(
        status_code=401,
        content=AuthCheckResponse(authenticated=False, error=NOT_AUTHENTICATED).model_dump(),
    )


# =============================================================================
# ADMIN MENU API
# =============================================================================

@app.get("/api/menu", response_model=MenuListResponse, tags=["Admin"])
async def list_menu(
    repository: BaseMenuRepository = Depends(get_menu_repository),
) -> MenuListResponse:
    return MenuListResponse(items=await repository.list_items())


@app.post(
    "/api/menu",
    response_model=SaveMenuItemResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)
async def save_menu_item(
    payload: MenuItemCreate,
    repository: BaseMenuRepository = Depends(get_menu_repository),
) -> SaveMenuItemResponse:
    """Create an item (no id) or replace the item with the given id."""
    item, is_new = await repository.save_item(payload)
    return SaveMenuItemResponse(success=True, id=item.id, is_new=is_new)


@app.delete(
    "/api/menu",
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)
async def delete_menu_item(
    item_id: Optional[str] = Query(None, alias="id"),
    repository: BaseMenuRepository = Depends(get_menu_repository),
) -> dict[str, bool]:
    if not item_id:
        raise HTTPException(status_code=400, detail="Item ID is required")

    removed = await repository.delete_item(item_id)
    logger.info(f"Menu: Delete {item_id} ({'removed' if removed else 'not present'})")
    return {"success": True}


@app.post(
    "/api/sync",
    response_model=SyncResponse,
    responses={401: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)
async def sync(
    body: Optional[SyncRequest] = None,
    repository: BaseMenuRepository = Depends(get_menu_repository),
    foodie_service: BaseFoodieService = Depends(get_foodie_service),
) -> SyncResponse:
    """Push the local menu to FoodieOS."""
    body = body or SyncRequest()
    result = await sync_menu(repository, foodie_service, body.outlet_id, body.cat)

    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message or "Failed to sync")

    return SyncResponse(
        success=True,
        message=sync_status_message(result),
        synced_items=result.synced_items,
    )


@app.post(
    "/api/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)
async def upload(
    file: Optional[UploadFile] = File(None),
    media_service: BaseMediaService = Depends(get_media_service),
) -> UploadResponse:
    """Host a dish photo and return its URL."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    data = await file.read()
    result = await media_service.upload_image(
        data,
        file.filename or "upload",
        file.content_type or "application/octet-stream",
    )

    if not result.success:
        status_code = 400 if result.error_code == "empty_file" else 500
        raise HTTPException(status_code=status_code, detail=result.error_message)

    return UploadResponse(url=result.url, public_id=result.public_id)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(FoodieError)
async def foodie_error_handler(request: Request, exc: FoodieError) -> JSONResponse:
    """Domain errors (QR, cart, checkout, camera)."""
    logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "detail": exc.code},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail), "detail": None},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": message,
            "detail": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
                for error in errors
            ],
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("foodie.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)

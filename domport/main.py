import uuid
from functools import wraps

from flask import Flask, g, request, session

from domport import config

# Sistema de profiling interno
from domport.performance_logger import get_function_stats, init_profiling

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
# Las rutas solo orquestan request → service → response.
# La lógica de negocio vive en services/.
# ═══════════════════════════════════════════════════════════════════════════
from domport.app_container import get_container
from domport.services.api_client import ApiError

app = Flask(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# INICIALIZAR SISTEMA DE PROFILING
# ═══════════════════════════════════════════════════════════════════════════
# Mide rendimiento de rutas y funciones. Logs en /logs/
# Para desactivar: DOMPORT_PROFILING=0
init_profiling(app)

# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
# SECRET_KEY: En producción DEBE definirse via variable de entorno
# Comando: export DOMPORT_SECRET_KEY="tu_clave_secreta_muy_larga_y_aleatoria"
if not config.SECRET_KEY:
    print("[ADVERTENCIA] DOMPORT_SECRET_KEY no definida, usando clave de desarrollo")
    print("[ADVERTENCIA] Define la variable de entorno para mayor seguridad")

app.secret_key = config.SECRET_KEY or config.DEFAULT_SECRET

# Configuración de cookies de sesión
app.config.update(
    SESSION_COOKIE_HTTPONLY=True,      # Protege contra XSS
    SESSION_COOKIE_SECURE=False,       # False para HTTP local (True solo para HTTPS)
    SESSION_COOKIE_SAMESITE='Lax',     # Protección CSRF básica
    PERMANENT_SESSION_LIFETIME=config.SESSION_LIFETIME,
)


# ═══════════════════════════════════════════════════════════════════════════════
# DISPOSITIVO (dueño del local storage)
# ═══════════════════════════════════════════════════════════════════════════════

@app.before_request
def load_device():
    device_id = request.cookies.get(config.DEVICE_COOKIE)
    g.new_device = not device_id
    g.device_id = device_id or uuid.uuid4().hex


@app.after_request
def save_device(response):
    if getattr(g, 'new_device', False):
        response.set_cookie(
            config.DEVICE_COOKIE,
            g.device_id,
            max_age=config.DEVICE_COOKIE_MAX_AGE,
            httponly=True,
            samesite='Lax',
        )
    return response


# ═══════════════════════════════════════════════════════════════════════════════
# DECORADORES
# ═══════════════════════════════════════════════════════════════════════════════

def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not get_container().auth_service.is_authenticated():
            return {"ok": False, "error": "Login required"}, 401
        return f(*args, **kwargs)
    return wrapper


def admin_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth = get_container().auth_service
        if not auth.is_authenticated():
            return {"ok": False, "error": "Login required"}, 401
        if not auth.is_admin():
            return {"ok": False, "error": "Permission denied"}, 403
        return f(*args, **kwargs)
    return wrapper


def generate_csrf_token():
    if 'csrf_token' not in session:
        session['csrf_token'] = uuid.uuid4().hex
    return session['csrf_token']


def verify_csrf(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if request.method in ('POST', 'PUT', 'PATCH', 'DELETE'):
            token = session.get('csrf_token')
            form_token = (
                request.form.get('csrf_token') or
                request.headers.get('X-CSRF-Token') or
                request.headers.get('X-CSRFToken')  # Common JS naming
            )
            if not form_token and request.is_json:
                json_data = request.get_json(silent=True) or {}
                form_token = json_data.get('csrf_token')

            if not token or not form_token or token != form_token:
                return {"ok": False, "error": "Invalid CSRF token"}, 403
        return f(*args, **kwargs)
    return wrapper


@app.after_request
def set_security_headers(response):
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
    response.headers['Permissions-Policy'] = 'geolocation=(), microphone=()'
    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


@app.errorhandler(ApiError)
def handle_api_error(e):
    """Errores del backend sin capturar en la ruta → JSON."""
    status = e.status if e.status and 400 <= e.status < 600 else 502
    return {"ok": False, "error": e.message}, status


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _payload():
    """Cuerpo JSON o formulario como dict."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _respond(result, error_status=400):
    """Convierte el dict {'ok', 'error'} de un servicio en respuesta."""
    if result.get('ok'):
        return result
    status = result.get('status')
    if not isinstance(status, int) or not 400 <= status < 600:
        status = error_status
    return result, status


def _to_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _flag(value):
    return str(value).lower() in ('1', 'true', 'on', 'yes')


# ═══════════════════════════════════════════════════════════════════════════════
# AUTENTICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/csrf", methods=["GET"])
def api_csrf():
    return {"ok": True, "csrf_token": generate_csrf_token()}


@app.route("/auth/login", methods=["POST"])
@verify_csrf
def login():
    data = _payload()
    result = get_container().auth_service.login(
        data.get("username"),
        data.get("password") or "",
        remember_me=_flag(data.get("remember_me")),
    )
    if result.get('ok'):
        session.permanent = True
        session["username"] = result['user'].get('username')
    return _respond(result, 401)


@app.route("/auth/register", methods=["POST"])
@verify_csrf
def register():
    data = _payload()
    result = get_container().auth_service.register(
        data.get("username"),
        data.get("email"),
        data.get("password") or "",
        data.get("confirm_password") or "",
    )
    return _respond(result)


@app.route("/auth/logout", methods=["POST"])
@verify_csrf
def logout():
    get_container().auth_service.logout()
    session.pop("username", None)
    return {"ok": True}


@app.route("/api/me", methods=["GET"])
@login_required
def api_me():
    auth = get_container().auth_service
    user = auth.get_current_user()
    return {
        "ok": True,
        "user": user.to_dict() if user else None,
        "role": auth.get_role(),
    }


@app.route("/api/me/profile", methods=["POST"])
@login_required
@verify_csrf
def api_me_profile():
    return _respond(get_container().auth_service.save_profile(_payload()))


# ═══════════════════════════════════════════════════════════════════════════════
# TEMA
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/theme", methods=["GET", "POST"])
@verify_csrf
def api_theme():
    settings = get_container().settings_repo
    if request.method == "POST":
        data = _payload()
        if data.get("theme"):
            theme = settings.set_theme(data["theme"])
        else:
            theme = settings.toggle_theme()
        return {"ok": True, "theme": theme}
    return {"ok": True, "theme": settings.get_theme()}


# ═══════════════════════════════════════════════════════════════════════════════
# CATÁLOGO
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/products", methods=["GET"])
def api_products():
    products = get_container().catalog_service.search_products(
        query=request.args.get("q"),
        fandom=request.args.get("fandom"),
        category=request.args.get("category"),
    )
    return {"ok": True, "products": [p.to_dict() for p in products]}


@app.route("/api/products/<product_id>", methods=["GET"])
def api_product(product_id):
    product = get_container().catalog_service.get_product(product_id)
    return {"ok": True, "product": product.to_dict()}


@app.route("/api/products/<product_id>/timeline", methods=["GET"])
def api_product_timeline(product_id):
    events = get_container().timeline_service.get_product_timeline(product_id)
    return {"ok": True, "events": [e.to_dict() for e in events]}


@app.route("/api/categories", methods=["GET"])
def api_categories():
    return {"ok": True, "categories": get_container().catalog_service.get_categories()}


@app.route("/api/fandoms", methods=["GET"])
def api_fandoms():
    fandoms = get_container().catalog_service.get_fandoms()
    return {"ok": True, "fandoms": [f.to_dict() for f in fandoms]}


@app.route("/api/fandoms/<fandom_id>", methods=["GET"])
def api_fandom(fandom_id):
    detail = get_container().catalog_service.get_fandom_detail(fandom_id)
    return dict(detail, ok=True)


# ═══════════════════════════════════════════════════════════════════════════════
# PRE-ÓRDENES
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/preorders", methods=["GET"])
def api_preorders():
    products = get_container().preorder_service.list_preorders(
        query=request.args.get("q"),
        fandom=request.args.get("fandom"),
    )
    return {"ok": True, "products": [p.to_dict() for p in products]}


@app.route("/api/preorders/<product_id>", methods=["GET"])
def api_preorder_detail(product_id):
    return _respond(get_container().preorder_service.get_detail(product_id), 404)


@app.route("/api/preorders/<product_id>/reserve", methods=["POST"])
@login_required
@verify_csrf
def api_preorder_reserve(product_id):
    result = get_container().preorder_service.reserve(product_id)
    return _respond(result, 409 if result.get('limit') else 400)


# ═══════════════════════════════════════════════════════════════════════════════
# CARRITO
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/cart", methods=["GET"])
def api_cart():
    container = get_container()
    cart = container.cart_service.get_cart()
    totals = container.payment_service.calculate_totals(cart['total_amount'])
    return dict(cart, ok=True, totals=totals)


@app.route("/api/cart/add", methods=["POST"])
@verify_csrf
def api_cart_add():
    data = _payload()
    product_id = data.get("product_id")
    if not product_id:
        return {"ok": False, "error": "Invalid product id"}, 400

    quantity = _to_int(data.get("quantity"), 1)
    container = get_container()
    product = container.catalog_service.get_product(product_id)
    return _respond(container.cart_service.add_item(product, quantity))


@app.route("/api/cart/update", methods=["POST"])
@verify_csrf
def api_cart_update():
    data = _payload()
    quantity = _to_int(data.get("quantity"))
    if not data.get("product_id") or quantity is None:
        return {"ok": False, "error": "product_id and quantity are required"}, 400
    return _respond(get_container().cart_service.update_quantity(data["product_id"], quantity), 404)


@app.route("/api/cart/remove", methods=["POST"])
@verify_csrf
def api_cart_remove():
    data = _payload()
    if not data.get("product_id"):
        return {"ok": False, "error": "Invalid product id"}, 400
    return get_container().cart_service.remove_item(data["product_id"])


@app.route("/api/cart/clear", methods=["POST"])
@verify_csrf
def api_cart_clear():
    return get_container().cart_service.clear_cart()


# ═══════════════════════════════════════════════════════════════════════════════
# CHECKOUT Y PEDIDOS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/checkout", methods=["GET", "POST"])
@login_required
@verify_csrf
def api_checkout():
    payments = get_container().payment_service
    if request.method == "POST":
        return _respond(payments.checkout(_payload()))
    return {"ok": True, "step": payments.get_step(), "steps": list(payments.PAYMENT_STEPS)}


@app.route("/api/orders", methods=["GET"])
@login_required
def api_orders():
    orders = get_container().payment_service.get_user_orders()
    return {"ok": True, "orders": [o.to_dict() for o in orders]}


@app.route("/api/orders/<order_id>", methods=["GET"])
@login_required
def api_order(order_id):
    container = get_container()
    order = container.api_client.get_order(order_id)
    user = container.auth_service.get_current_user()
    if not container.auth_service.is_admin() and (user is None or order.user_id != user.id):
        return {"ok": False, "error": "Order not found"}, 404
    return {"ok": True, "order": order.to_dict()}


@app.route("/api/orders/<order_id>/timeline", methods=["GET"])
@login_required
def api_order_timeline(order_id):
    events = get_container().timeline_service.get_order_timeline(order_id)
    return {"ok": True, "events": [e.to_dict() for e in events]}


@app.route("/api/orders/<order_id>/payments", methods=["GET"])
@login_required
def api_order_payments(order_id):
    return {"ok": True, "payments": get_container().payment_service.get_order_payments(order_id)}


# ═══════════════════════════════════════════════════════════════════════════════
# SOLICITUDES PERSONALIZADAS (cliente)
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/custom-requests/estimate", methods=["GET"])
def api_custom_request_estimate():
    total = get_container().custom_request_service.estimate_total(
        request.args.get("price"),
        request.args.get("region"),
        request.args.get("quantity", 1),
    )
    if total is None:
        return {"ok": False, "error": "Invalid price or region"}, 400
    return {"ok": True, "estimated_total": total}


@app.route("/api/custom-requests", methods=["GET", "POST"])
@login_required
@verify_csrf
def api_custom_requests():
    container = get_container()
    user = container.auth_service.get_current_user()
    service = container.custom_request_service
    if request.method == "POST":
        return _respond(service.submit(_payload(), user))
    if user is None:
        return {"ok": False, "error": "Login required"}, 401
    requests_ = service.list_requests(user_id=user.owner_key)
    return {"ok": True, "requests": [r.to_dict() for r in requests_]}


@app.route("/api/custom-requests/<request_id>", methods=["GET"])
@login_required
def api_custom_request(request_id):
    container = get_container()
    found = container.custom_request_service.get_request(request_id)
    user = container.auth_service.get_current_user()
    if found is None or (
        not container.auth_service.is_admin()
        and (user is None or not container.custom_request_service.is_owner(found, user))
    ):
        return {"ok": False, "error": "Request not found"}, 404
    return {"ok": True, "request": found.to_dict()}


@app.route("/api/custom-requests/<request_id>/payment", methods=["POST"])
@login_required
@verify_csrf
def api_custom_request_payment(request_id):
    container = get_container()
    user = container.auth_service.get_current_user()
    if user is None:
        return {"ok": False, "error": "Login required"}, 401
    data = _payload()
    result = container.custom_request_service.submit_payment(
        request_id,
        data.get("slip"),
        data.get("payment_date"),
        data.get("payment_time"),
        user,
    )
    return _respond(result)


@app.route("/api/custom-requests/<request_id>/received", methods=["POST"])
@login_required
@verify_csrf
def api_custom_request_received(request_id):
    container = get_container()
    user = container.auth_service.get_current_user()
    if user is None:
        return {"ok": False, "error": "Login required"}, 401
    result = container.custom_request_service.confirm_received(request_id, user)
    return _respond(result)


# ═══════════════════════════════════════════════════════════════════════════════
# SOPORTE (cliente)
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/api/chat", methods=["POST"])
@login_required
@verify_csrf
def api_chat_open():
    container = get_container()
    user = container.auth_service.get_current_user()
    if user is None:
        return {"ok": False, "error": "Login required"}, 401
    return container.chat_service.open_room(user)


@app.route("/api/chat/<room_id>", methods=["GET"])
@login_required
def api_chat_room(room_id):
    container = get_container()
    room = container.chat_service.get_room(room_id)
    user = container.auth_service.get_current_user()
    if room is None or user is None or room.customer_id != user.owner_key:
        return {"ok": False, "error": "Chat room not found"}, 404
    return {"ok": True, "room": room.to_dict()}


@app.route("/api/chat/<room_id>/messages", methods=["POST"])
@login_required
@verify_csrf
def api_chat_message(room_id):
    container = get_container()
    user = container.auth_service.get_current_user()
    if user is None:
        return {"ok": False, "error": "Login required"}, 401
    result = container.chat_service.send_message(room_id, user, _payload().get("message"))
    return _respond(result)


@app.route("/api/chat/<room_id>/close", methods=["POST"])
@login_required
@verify_csrf
def api_chat_close(room_id):
    container = get_container()
    room = container.chat_service.get_room(room_id)
    user = container.auth_service.get_current_user()
    if room is None or user is None or room.customer_id != user.owner_key:
        return {"ok": False, "error": "Chat room not found"}, 404
    return _respond(container.chat_service.close_room(room_id), 404)


@app.route("/api/tickets", methods=["POST"])
@login_required
@verify_csrf
def api_ticket_create():
    container = get_container()
    result = container.ticket_service.create_ticket(
        _payload(), container.auth_service.get_current_user()
    )
    return _respond(result)


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN - Catálogo
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/admin/products", methods=["POST"])
@admin_required
@verify_csrf
def admin_product_create():
    return _respond(get_container().catalog_service.create_product(_payload()))


@app.route("/admin/products/<product_id>", methods=["POST"])
@admin_required
@verify_csrf
def admin_product_update(product_id):
    return _respond(get_container().catalog_service.update_product(product_id, _payload()))


@app.route("/admin/products/<product_id>/delete", methods=["POST"])
@admin_required
@verify_csrf
def admin_product_delete(product_id):
    return _respond(get_container().catalog_service.delete_product(product_id))


@app.route("/admin/fandoms", methods=["POST"])
@admin_required
@verify_csrf
def admin_fandom_create():
    return _respond(get_container().catalog_service.save_fandom(_payload()))


@app.route("/admin/fandoms/<fandom_id>", methods=["POST"])
@admin_required
@verify_csrf
def admin_fandom_update(fandom_id):
    return _respond(get_container().catalog_service.save_fandom(_payload(), fandom_id))


@app.route("/admin/fandoms/<fandom_id>/delete", methods=["POST"])
@admin_required
@verify_csrf
def admin_fandom_delete(fandom_id):
    return _respond(get_container().catalog_service.delete_fandom(fandom_id))


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN - Pedidos y línea de tiempo
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/admin/stats", methods=["GET"])
@admin_required
def admin_stats():
    """Estadísticas de las funciones perfiladas (llamadas al backend)."""
    return {"ok": True, "functions": get_function_stats()}


@app.route("/admin/orders", methods=["GET"])
@admin_required
def admin_orders():
    orders = get_container().api_client.get_orders()
    status = request.args.get("status")
    if status and status != 'all':
        orders = [o for o in orders if o.status == status]
    return {"ok": True, "orders": [o.to_dict() for o in orders]}


@app.route("/admin/orders/<order_id>/status", methods=["POST"])
@admin_required
@verify_csrf
def admin_order_status(order_id):
    status = (_payload().get("status") or "").strip()
    if not status:
        return {"ok": False, "error": "Status is required"}, 400
    order = get_container().api_client.update_order_status(order_id, status)
    return {"ok": True, "order": order.to_dict()}


@app.route("/admin/timeline", methods=["POST"])
@admin_required
@verify_csrf
def admin_timeline_create():
    return _respond(get_container().timeline_service.create_event(_payload()))


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN - Solicitudes personalizadas
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/admin/custom-requests", methods=["GET"])
@admin_required
def admin_custom_requests():
    requests_ = get_container().custom_request_service.list_requests(
        status=request.args.get("status"),
        region=request.args.get("region"),
    )
    return {"ok": True, "requests": [r.to_dict() for r in requests_]}


@app.route("/admin/custom-requests/<request_id>/status", methods=["POST"])
@admin_required
@verify_csrf
def admin_custom_request_status(request_id):
    data = _payload()
    status = (data.get("status") or "").strip()
    if not status:
        return {"ok": False, "error": "Status is required"}, 400
    result = get_container().custom_request_service.update_status(
        request_id,
        status,
        shipping_cost=data.get("shipping_cost"),
        tracking_number=data.get("tracking_number"),
        notes=data.get("notes"),
    )
    return _respond(result)


@app.route("/admin/custom-requests/<request_id>/notes", methods=["POST"])
@admin_required
@verify_csrf
def admin_custom_request_notes(request_id):
    notes = _payload().get("notes") or ""
    return _respond(get_container().custom_request_service.add_admin_notes(request_id, notes), 404)


@app.route("/admin/custom-requests/<request_id>/preorder", methods=["POST"])
@admin_required
@verify_csrf
def admin_custom_request_preorder(request_id):
    return _respond(get_container().custom_request_service.create_preorder(request_id))


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN - Tickets
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/admin/tickets", methods=["GET"])
@admin_required
def admin_tickets():
    tickets = get_container().ticket_service.list_tickets(
        status=request.args.get("status"),
        priority=request.args.get("priority"),
    )
    return {"ok": True, "tickets": [t.to_dict() for t in tickets]}


@app.route("/admin/tickets/<ticket_id>/status", methods=["POST"])
@admin_required
@verify_csrf
def admin_ticket_status(ticket_id):
    status = _payload().get("status") or ""
    return _respond(get_container().ticket_service.update_status(ticket_id, status))


@app.route("/admin/tickets/<ticket_id>/respond", methods=["POST"])
@admin_required
@verify_csrf
def admin_ticket_respond(ticket_id):
    response = _payload().get("response") or ""
    return _respond(get_container().ticket_service.respond(ticket_id, response))


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN - Usuarios
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/admin/users", methods=["GET"])
@admin_required
def admin_users():
    return dict(get_container().user_service.list_users(), ok=True)


@app.route("/admin/users/<user_id>", methods=["GET"])
@admin_required
def admin_user_detail(user_id):
    return _respond(get_container().user_service.get_user_detail(user_id), 404)


@app.route("/admin/users/<user_id>/blacklist", methods=["POST"])
@admin_required
@verify_csrf
def admin_user_blacklist(user_id):
    container = get_container()
    result = container.user_service.toggle_blacklist(
        user_id, container.auth_service.get_current_user()
    )
    return _respond(result)


@app.route("/admin/users/<user_id>/delete", methods=["POST"])
@admin_required
@verify_csrf
def admin_user_delete(user_id):
    container = get_container()
    result = container.user_service.delete_user(
        user_id, container.auth_service.get_current_user()
    )
    return _respond(result)


@app.route("/admin/users/<user_id>/restore", methods=["POST"])
@admin_required
@verify_csrf
def admin_user_restore(user_id):
    return _respond(get_container().user_service.restore_user(user_id))


# ═══════════════════════════════════════════════════════════════════════════════
# STAFF - Call center
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/staff/chats", methods=["GET"])
@admin_required
def staff_chats():
    rooms = get_container().chat_service.list_rooms(request.args.get("status"))
    return {"ok": True, "rooms": [r.to_dict() for r in rooms]}


@app.route("/staff/chats/<room_id>/reply", methods=["POST"])
@admin_required
@verify_csrf
def staff_chat_reply(room_id):
    data = _payload()
    result = get_container().chat_service.staff_reply(
        room_id, str(data.get("staff_id") or ""), data.get("message")
    )
    return _respond(result)


@app.route("/staff/chats/<room_id>/close", methods=["POST"])
@admin_required
@verify_csrf
def staff_chat_close(room_id):
    return _respond(get_container().chat_service.close_room(room_id), 404)


@app.route("/staff/members", methods=["GET", "POST"])
@admin_required
@verify_csrf
def staff_members():
    chat = get_container().chat_service
    if request.method == "POST":
        data = _payload()
        result = chat.add_staff(
            data.get("username"),
            data.get("password") or "",
            data.get("name"),
            data.get("role") or "support",
        )
        return _respond(result)
    return {"ok": True, "staff": chat.list_staff()}


@app.route("/staff/members/<staff_id>/status", methods=["POST"])
@admin_required
@verify_csrf
def staff_member_status(staff_id):
    status = _payload().get("status") or ""
    return _respond(get_container().chat_service.set_staff_status(staff_id, status))


if __name__ == "__main__":
    # Configuración para desarrollo local
    # En producción usar WSGI (gunicorn, waitress, etc.)
    if not config.DEBUG:
        print(f"\n{'='*50}")
        print(f"  Servidor iniciado en http://{config.HOST}:{config.PORT}")
        print(f"  Acceso local: http://localhost:{config.PORT}")
        print(f"  Backend: {config.API_ROOT_URL}")
        print(f"{'='*50}\n")

    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)

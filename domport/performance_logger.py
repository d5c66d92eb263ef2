# ==============================================================================
# PROFILING Y LOGS DE DOMPORT
# ==============================================================================
# Archivos en LOGS_DIR, pensados para leerse a mano:
#   performance.log     → una entrada por ruta atendida
#   slow_routes.log     → rutas por encima de los umbrales
#   slow_functions.log  → llamadas lentas a funciones con @profile_function
#   api_errors.log      → errores del backend, fallos de red y avisos 401
#
# DOMPORT_PROFILING=0 apaga el profiling; api_errors.log se escribe siempre.
# ==============================================================================

import os
import threading
import time
from datetime import datetime
from functools import wraps

# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════

ENABLE_PROFILING = os.environ.get('DOMPORT_PROFILING', '1') != '0'

# Umbrales en milisegundos
THRESHOLD_WARNING = 300
THRESHOLD_CRITICAL = 700

LOGS_DIR = os.environ.get(
    'DOMPORT_LOGS_DIR',
    os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs'),
)
os.makedirs(LOGS_DIR, exist_ok=True)

PERFORMANCE_LOG = os.path.join(LOGS_DIR, 'performance.log')
SLOW_ROUTES_LOG = os.path.join(LOGS_DIR, 'slow_routes.log')
SLOW_FUNCTIONS_LOG = os.path.join(LOGS_DIR, 'slow_functions.log')
API_ERRORS_LOG = os.path.join(LOGS_DIR, 'api_errors.log')

# Mapeo de rutas a nombres legibles
ROUTE_NAMES = {
    # Autenticación
    'POST /auth/login': 'Iniciar sesión',
    'POST /auth/register': 'Registrar cuenta',
    'POST /auth/logout': 'Cerrar sesión',
    'GET /api/me': 'Ver perfil',
    'POST /api/me/profile': 'Guardar perfil',

    # Catálogo
    'GET /api/products': 'Ver catálogo',
    'GET /api/products/<product_id>': 'Ver producto',
    'GET /api/products/<product_id>/timeline': 'Ver producción',
    'GET /api/fandoms': 'Ver fandoms',
    'GET /api/fandoms/<fandom_id>': 'Ver fandom',
    'GET /api/preorders': 'Ver pre-órdenes',
    'GET /api/preorders/<product_id>': 'Ver detalle de pre-orden',
    'POST /api/preorders/<product_id>/reserve': 'Reservar pre-orden',

    # Carrito y pago
    'GET /api/cart': 'Ver carrito',
    'POST /api/cart/add': 'Agregar al carrito',
    'POST /api/cart/update': 'Cambiar cantidad',
    'POST /api/cart/remove': 'Eliminar del carrito',
    'POST /api/cart/clear': 'Vaciar carrito',
    'POST /api/checkout': 'Confirmar pago',

    # Pedidos
    'GET /api/orders': 'Ver pedidos',
    'GET /api/orders/<order_id>': 'Ver pedido',
    'GET /api/orders/<order_id>/timeline': 'Ver línea de tiempo',

    # Solicitudes personalizadas
    'POST /api/custom-requests': 'Enviar solicitud personalizada',
    'POST /api/custom-requests/<request_id>/payment': 'Enviar comprobante',
    'POST /api/custom-requests/<request_id>/received': 'Confirmar recepción',
    'POST /admin/custom-requests/<request_id>/status': 'Cambiar estado de solicitud',
    'POST /admin/custom-requests/<request_id>/preorder': 'Crear pre-orden desde solicitud',

    # Soporte
    'POST /api/chat': 'Abrir chat',
    'POST /api/chat/<room_id>/messages': 'Enviar mensaje',
    'POST /api/tickets': 'Crear ticket',
    'GET /staff/chats': 'Ver chats (staff)',
    'POST /staff/chats/<room_id>/reply': 'Responder chat',

    # Administración
    'GET /admin/users': 'Ver usuarios',
    'GET /admin/users/<user_id>': 'Ver ficha de usuario',
    'POST /admin/users/<user_id>/blacklist': 'Cambiar lista negra',
    'POST /admin/users/<user_id>/restore': 'Restaurar usuario',
    'GET /admin/tickets': 'Ver tickets',
    'GET /admin/stats': 'Ver estadísticas',
}

SEPARATOR = '─' * 40


# ═══════════════════════════════════════════════════════════════════════════
# ESCRITURA
# ═══════════════════════════════════════════════════════════════════════════

_append_lock = threading.Lock()


def _append_entry(filepath, tag, *lines, closing=False):
    """
    Agrega una entrada "[tag] fecha" seguida de sus líneas.

    Un log que no se puede escribir nunca debe tumbar la petición,
    así que los OSError se descartan.
    """
    stamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    body = [f'[{tag}] {stamp}', *lines]
    if closing:
        body.append(SEPARATOR)
    try:
        with _append_lock:
            with open(filepath, 'a', encoding='utf-8') as f:
                f.write('\n' + '\n'.join(body) + '\n')
    except OSError:
        pass


def _slowness(time_ms):
    """
    Returns:
        'CRITICAL', 'WARNING' o None según los umbrales
    """
    if time_ms >= THRESHOLD_CRITICAL:
        return 'CRITICAL'
    if time_ms >= THRESHOLD_WARNING:
        return 'WARNING'
    return None


def route_label(method, path, rule=None):
    """Nombre legible de la ruta; prueba la ruta concreta y luego la regla Flask."""
    for candidate in (path, rule):
        if candidate and f'{method} {candidate}' in ROUTE_NAMES:
            return ROUTE_NAMES[f'{method} {candidate}']
    return f'{method} {path}'


# ═══════════════════════════════════════════════════════════════════════════
# RUTAS
# ═══════════════════════════════════════════════════════════════════════════

def record_route(method, path, rule, time_ms, user=None):
    """
    Anota una ruta atendida y, si fue lenta, también en slow_routes.log.

    Args:
        method: Método HTTP
        path: Ruta pedida (/api/orders/12)
        rule: Regla Flask (/api/orders/<order_id>)
        time_ms: Duración en milisegundos
        user: username de la sesión, si hay
    """
    label = route_label(method, path, rule)
    who = user or 'anónimo'

    _append_entry(
        PERFORMANCE_LOG, 'PERFORMANCE',
        SEPARATOR,
        f'Acción: {label}',
        f'Usuario: {who}',
        f'Ruta: {method} {path}',
        f'Tiempo: {time_ms:.0f} ms',
    )

    level = _slowness(time_ms)
    if level is None:
        return
    limit = THRESHOLD_CRITICAL if level == 'CRITICAL' else THRESHOLD_WARNING
    kind = 'MUY LENTA' if level == 'CRITICAL' else 'LENTA'
    _append_entry(
        SLOW_ROUTES_LOG, level,
        SEPARATOR,
        f'Ruta {kind}: {label}',
        f'Usuario: {who}',
        f'Detalle: {method} {path}',
        f'Tiempo: {time_ms:.0f} ms (umbral: {limit} ms)',
        closing=True,
    )


def init_profiling(app):
    """Cronometra cada petición de `app` (excepto /static) y la anota."""
    if not ENABLE_PROFILING:
        return

    from flask import g, request, session

    @app.before_request
    def _start_clock():
        g.profiling_started = time.perf_counter()

    @app.after_request
    def _stop_clock(response):
        started = g.pop('profiling_started', None)
        if started is None or request.path.startswith('/static'):
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        rule = str(request.url_rule) if request.url_rule else request.path
        record_route(request.method, request.path, rule, elapsed_ms, session.get('username'))
        return response


# ═══════════════════════════════════════════════════════════════════════════
# BACKEND
# ═══════════════════════════════════════════════════════════════════════════

def log_api_error(method, url, status, message):
    """
    Anota una llamada fallida al backend (independiente de ENABLE_PROFILING).

    Args:
        status: Código HTTP, o None cuando no hubo respuesta
    """
    _append_entry(
        API_ERRORS_LOG, 'API ERROR',
        SEPARATOR,
        f'Petición: {method} {url}',
        f'Estado: {"SIN RESPUESTA" if status is None else status}',
        f'Mensaje: {message}',
    )


def log_unauthorized(method, url):
    # Solo se deja constancia; la sesión local no se toca
    _append_entry(API_ERRORS_LOG, 'API 401', f'Petición no autorizada: {method} {url}')


# ═══════════════════════════════════════════════════════════════════════════
# FUNCIONES PERFILADAS
# ═══════════════════════════════════════════════════════════════════════════

class _FunctionStats:
    """Acumulado en memoria por nombre de función."""

    def __init__(self):
        self._lock = threading.Lock()
        self._totals = {}

    def add(self, name, elapsed_ms):
        with self._lock:
            calls, total, peak = self._totals.get(name, (0, 0.0, 0.0))
            self._totals[name] = (calls + 1, total + elapsed_ms, max(peak, elapsed_ms))

    def snapshot(self):
        with self._lock:
            return {
                name: {
                    'calls': calls,
                    'avg_time': round(total / calls, 2) if calls else 0,
                    'max_time': round(peak, 2),
                }
                for name, (calls, total, peak) in self._totals.items()
            }

    def clear(self):
        with self._lock:
            self._totals.clear()


_stats = _FunctionStats()


def profile_function(func=None, name=None):
    """
    Decorador que cuenta llamadas y tiempos de una función.

    Se usa con o sin argumentos:
        @profile_function
        @profile_function(name='Llamada al backend')

    Las llamadas que pasan THRESHOLD_WARNING van a slow_functions.log.
    Con el profiling apagado devuelve la función sin envolver.
    """
    def decorator(fn):
        if not ENABLE_PROFILING:
            return fn
        label = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - started) * 1000
                _stats.add(label, elapsed_ms)
                level = _slowness(elapsed_ms)
                if level:
                    _append_entry(
                        SLOW_FUNCTIONS_LOG,
                        'CRÍTICO' if level == 'CRITICAL' else 'LENTO',
                        f'Función: {label}',
                        f'Tiempo: {elapsed_ms:.0f} ms',
                        closing=True,
                    )

        return wrapper

    return decorator(func) if func is not None else decorator


def get_function_stats():
    """
    Returns:
        {nombre: {'calls', 'avg_time', 'max_time'}} con tiempos en ms
    """
    return _stats.snapshot()


def reset_stats():
    _stats.clear()


__all__ = [
    'ENABLE_PROFILING',
    'init_profiling',
    'profile_function',
    'log_api_error',
    'log_unauthorized',
    'get_function_stats',
    'reset_stats',
]

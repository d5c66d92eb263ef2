# ==============================================================================
# CONFIGURACIÓN GLOBAL - Variables de entorno y constantes
# ==============================================================================
# Todas las constantes configurables de la aplicación viven aquí.
# Se leen de variables de entorno con valores por defecto para desarrollo.
#
# PRODUCCIÓN:
#   export DOMPORT_SECRET_KEY="clave_larga_y_aleatoria"
#   export DOMPORT_API_URL="https://api.domport.example"
# ==============================================================================

import os

BASE = os.path.dirname(os.path.abspath(__file__))

# ═══════════════════════════════════════════════════════════════════════════════
# BACKEND REST
# ═══════════════════════════════════════════════════════════════════════════════
# Raíz del backend. Los recursos cuelgan de /api, la autenticación de /auth.
API_ROOT_URL = os.environ.get('DOMPORT_API_URL', 'http://localhost:3000').rstrip('/')
API_BASE_URL = API_ROOT_URL + '/api'
AUTH_BASE_URL = API_ROOT_URL + '/auth'

# Sin timeout por defecto: cada llamada es un único intento
_timeout = os.environ.get('DOMPORT_API_TIMEOUT')
API_TIMEOUT = float(_timeout) if _timeout else None

# ═══════════════════════════════════════════════════════════════════════════════
# SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
DEFAULT_SECRET = 'domport_dev_secret_key_change_in_production'
SECRET_KEY = os.environ.get('DOMPORT_SECRET_KEY')

SESSION_LIFETIME = 86400  # 24 horas

# Cookie que identifica al "navegador" dueño del local storage
DEVICE_COOKIE = 'domport_device'
DEVICE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

# ═══════════════════════════════════════════════════════════════════════════════
# ALMACENAMIENTO
# ═══════════════════════════════════════════════════════════════════════════════
# Directorio de los JSON (local storage, custom requests, chat)
DATA_DIR = os.environ.get('DOMPORT_DATA_DIR', BASE)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVIDOR DE DESARROLLO
# ═══════════════════════════════════════════════════════════════════════════════
DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
PORT = int(os.environ.get('FLASK_PORT', 5000))

# ==============================================================================
# CONTENEDOR - Instancias compartidas de repositorios y servicios
# ==============================================================================
# Cada repositorio y servicio se construye la primera vez que se pide y
# se reutiliza después. Los tests reemplazan la sesión HTTP por un doble
# y llaman a AppContainer.reset_instance() entre casos.
#
# ═══════════════════════════════════════════════════════════════════════════════
# GRAFO
# ═══════════════════════════════════════════════════════════════════════════════
#
#   local_storage ─┐
#                  ├─► api_client ─► auth / catalog / payment / timeline
#   session_storage┘                  tickets / users
#
#   custom_request_repo ─► custom_request_service
#   chat_repo + staff_repo ─► chat_service
#
# El token del cliente HTTP se lee en cada llamada: local storage primero,
# luego session storage.
# ==============================================================================

from typing import Any, Callable, Dict, Optional

from domport import config

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia local
# ═══════════════════════════════════════════════════════════════════════════════
from domport.repositories import (
    LocalStorage,
    SessionStorage,
    SettingsRepository,
    CustomRequestRepository,
    ChatRepository,
    StaffRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from domport.services import (
    ApiClient,
    AuthService,
    CatalogService,
    CartService,
    PaymentService,
    PreOrderService,
    TimelineService,
    CustomRequestService,
    ChatService,
    TicketService,
    UserService,
)


class AppContainer:
    """
    Registro único (por proceso) de repositorios y servicios.

    Ejemplo:
        container = get_container(base_path='/srv/domport/data')
        container.catalog_service.search_products(query='miku')
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, base_path: str = None, http: Any = None):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._ready = False
            cls._instance = instance
        return cls._instance

    def __init__(self, base_path: str = None, http: Any = None):
        """
        Args:
            base_path: Carpeta de los JSON locales (por defecto config.DATA_DIR)
            http: Sesión HTTP del cliente del backend (None = sesión sin cookies)
        """
        if self._ready:
            return
        self._base_path = base_path or config.DATA_DIR
        self._http = http
        self._built: Dict[str, Any] = {}
        self._ready = True

    def _lazy(self, name: str, factory: Callable[[], Any]) -> Any:
        """Devuelve la instancia `name`, construyéndola con `factory` si falta."""
        if name not in self._built:
            self._built[name] = factory()
        return self._built[name]

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def local_storage(self) -> LocalStorage:
        """Almacenamiento persistente por dispositivo."""
        return self._lazy('local_storage', lambda: LocalStorage(self._base_path))

    @property
    def session_storage(self) -> SessionStorage:
        return self._lazy('session_storage', SessionStorage)

    @property
    def settings_repo(self) -> SettingsRepository:
        return self._lazy('settings_repo', lambda: SettingsRepository(self.local_storage))

    @property
    def custom_request_repo(self) -> CustomRequestRepository:
        return self._lazy('custom_request_repo', lambda: CustomRequestRepository(self._base_path))

    @property
    def chat_repo(self) -> ChatRepository:
        return self._lazy('chat_repo', lambda: ChatRepository(self._base_path))

    @property
    def staff_repo(self) -> StaffRepository:
        return self._lazy('staff_repo', lambda: StaffRepository(self._base_path))

    # =========================================================================
    # CLIENTE HTTP
    # =========================================================================

    @property
    def api_client(self) -> ApiClient:
        """Cliente del backend; el token se resuelve en cada petición."""
        return self._lazy(
            'api_client',
            # auth_service se resuelve en cada llamada: él mismo depende del cliente
            lambda: ApiClient(
                token_provider=lambda: self.auth_service.get_token(),
                http=self._http,
            ),
        )

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def auth_service(self) -> AuthService:
        return self._lazy('auth_service', lambda: AuthService(
            self.api_client, self.local_storage, self.session_storage,
        ))

    @property
    def catalog_service(self) -> CatalogService:
        return self._lazy('catalog_service', lambda: CatalogService(self.api_client))

    @property
    def cart_service(self) -> CartService:
        return self._lazy('cart_service', CartService)

    @property
    def payment_service(self) -> PaymentService:
        return self._lazy('payment_service', lambda: PaymentService(
            self.api_client, self.cart_service, self.auth_service,
        ))

    @property
    def preorder_service(self) -> PreOrderService:
        return self._lazy('preorder_service', lambda: PreOrderService(
            self.catalog_service, self.cart_service, self.payment_service,
        ))

    @property
    def timeline_service(self) -> TimelineService:
        return self._lazy('timeline_service', lambda: TimelineService(self.api_client))

    @property
    def custom_request_service(self) -> CustomRequestService:
        return self._lazy(
            'custom_request_service',
            lambda: CustomRequestService(self.custom_request_repo, self.catalog_service),
        )

    @property
    def chat_service(self) -> ChatService:
        return self._lazy('chat_service', lambda: ChatService(self.chat_repo, self.staff_repo))

    @property
    def ticket_service(self) -> TicketService:
        return self._lazy('ticket_service', lambda: TicketService(self.api_client))

    @property
    def user_service(self) -> UserService:
        return self._lazy('user_service', lambda: UserService(self.api_client))

    # =========================================================================
    # CICLO DE VIDA
    # =========================================================================

    def reset(self) -> None:
        """Descarta todas las instancias construidas; se recrean al pedirlas."""
        self._built.clear()

    @classmethod
    def get_instance(cls, base_path: str = None, http: Any = None) -> 'AppContainer':
        """base_path y http solo cuentan en la primera llamada."""
        return cls._instance if cls._instance is not None else cls(base_path, http)

    @classmethod
    def reset_instance(cls) -> None:
        if cls._instance is not None:
            cls._instance.reset()
        cls._instance = None


def get_container(base_path: str = None, http: Any = None) -> AppContainer:
    """
    Contenedor global de la aplicación.

    Args:
        base_path: Carpeta de datos (solo en la primera llamada)
        http: Sesión HTTP para el backend (solo en la primera llamada)
    """
    return AppContainer.get_instance(base_path, http)

# ==============================================================================
# SESSION STORAGE - Almacenamiento que vive lo que dura la sesión
# ==============================================================================
# Equivalente del sessionStorage del navegador, montado sobre la sesión de
# Flask (cookie firmada). Los datos viven en session['session_storage'].
# ==============================================================================

from typing import Dict, List, Optional

from flask import has_request_context, session


class SessionStorage:
    """
    Almacenamiento clave → string en la sesión de Flask.
    Sin contexto de petición (scripts, tests de servicio) se lee vacía.
    """

    SESSION_KEY = 'session_storage'

    def _get_store(self) -> Dict[str, str]:
        if not has_request_context():
            return {}
        return dict(session.get(self.SESSION_KEY, {}))

    def _save_store(self, store: Dict[str, str]) -> None:
        session[self.SESSION_KEY] = store
        session.modified = True

    def get_item(self, key: str) -> Optional[str]:
        return self._get_store().get(key)

    def set_item(self, key: str, value: str) -> None:
        store = self._get_store()
        store[key] = str(value)
        self._save_store(store)

    def remove_item(self, key: str) -> None:
        store = self._get_store()
        if key in store:
            del store[key]
            self._save_store(store)

    def keys(self) -> List[str]:
        return list(self._get_store().keys())

    def clear(self) -> None:
        session.pop(self.SESSION_KEY, None)

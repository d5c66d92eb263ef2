# ==============================================================================
# REPOSITORIO BASE - Blobs JSON en disco
# ==============================================================================
# Cada archivo guarda un único "blob" (dict o lista) que se lee y se reescribe
# completo en cada operación, como un valor de localStorage.
# No hay versionado de esquema ni coordinación entre procesos escritores.
# ==============================================================================

import json
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional


class BaseRepository(ABC):
    """
    Acceso a un blob JSON protegido por un lock del proceso.

    Las subclases definen la forma vacía del blob (_empty_data) y,
    si hace falta, el contenido sembrado al crear el archivo (_initial_data).
    """

    # Compartido por todos los repositorios del proceso
    _file_lock = threading.RLock()

    # Tipo que debe tener el blob; cualquier otra cosa se lee como vacío
    blob_type: type = object

    def __init__(self, file_path: str):
        """
        Args:
            file_path: Ruta del archivo JSON (se crea si no existe)
        """
        self.file_path = file_path
        if not os.path.exists(file_path):
            folder = os.path.dirname(file_path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            self._store_blob(self._initial_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """Blob sin registros."""

    def _initial_data(self) -> Any:
        return self._empty_data()

    def _load_blob(self) -> Any:
        """
        Lee el blob completo.

        Returns:
            El contenido del archivo, o el blob vacío si falta,
            no es JSON válido o no tiene el tipo esperado
        """
        with self._file_lock:
            try:
                with open(self.file_path, encoding='utf-8') as f:
                    blob = json.load(f)
            except (FileNotFoundError, json.JSONDecodeError):
                return self._empty_data()
        if not isinstance(blob, self.blob_type):
            return self._empty_data()
        return blob

    def _store_blob(self, blob: Any) -> None:
        """
        Reescribe el archivo entero.

        Se escribe primero en <archivo>.tmp y luego se renombra, para que
        un lector nunca vea un JSON a medio escribir.

        Raises:
            OSError: Si no se puede escribir o renombrar
        """
        with self._file_lock:
            staging = f'{self.file_path}.tmp'
            try:
                with open(staging, 'w', encoding='utf-8') as f:
                    json.dump(blob, f, ensure_ascii=False, indent=2)
                os.replace(staging, self.file_path)
            except OSError:
                if os.path.exists(staging):
                    os.remove(staging)
                raise

    def _mutate(self, change: Callable[[Any], Any]) -> Any:
        """
        Lee, aplica `change` sobre el blob y lo guarda, todo bajo el lock.
        `change` devuelve (resultado, debe_guardar).
        """
        with self._file_lock:
            blob = self._load_blob()
            result, dirty = change(blob)
            if dirty:
                self._store_blob(blob)
            return result

    def save_all(self, data: Any) -> None:
        self._store_blob(data)


class DictRepository(BaseRepository):
    """
    Blob con forma {id: registro}. Los IDs siempre se guardan como string.

    Ej.: local_storage.json, staff.json
    """

    blob_type = dict

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Any]:
        return self._load_blob()

    def get_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        return self.get_all().get(str(record_id))

    def update(self, record_id: Any, record_data: Dict[str, Any]) -> None:
        """Crea o reemplaza el registro `record_id`."""
        def change(blob):
            blob[str(record_id)] = record_data
            return None, True

        self._mutate(change)

    def delete(self, record_id: Any) -> Optional[Dict[str, Any]]:
        """
        Returns:
            El registro borrado, o None si no existía
        """
        def change(blob):
            removed = blob.pop(str(record_id), None)
            return removed, removed is not None

        return self._mutate(change)


class ListRepository(BaseRepository):
    """
    Blob con forma [registro, ...] en orden de inserción.

    Ej.: custom_requests.json, chat_rooms.json
    """

    blob_type = list

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        return self._load_blob()

    def append(self, record: Dict[str, Any]) -> None:
        def change(blob):
            blob.append(record)
            return None, True

        self._mutate(change)

    def find_all_by(self, field: str, value: Any) -> List[Dict[str, Any]]:
        return [record for record in self.get_all() if record.get(field) == value]

    def find_by(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        matches = self.find_all_by(field, value)
        return matches[0] if matches else None

    def replace_where(self, field: str, value: Any, new_record: Dict[str, Any]) -> bool:
        """
        Sustituye en su misma posición cada registro con `field == value`.

        Returns:
            True si hubo al menos un reemplazo
        """
        def change(blob):
            hits = [i for i, record in enumerate(blob) if record.get(field) == value]
            for i in hits:
                blob[i] = new_record
            return bool(hits), bool(hits)

        return self._mutate(change)

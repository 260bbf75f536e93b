"""
Error kinds raised by the catalogue.

Each ``CatalogError`` carries the HTTP status it maps to and the
message returned to clients as ``{"error": message}``. Messages are in
Spanish, the language the service speaks to its users.
``PersistenceFailure`` is not a ``CatalogError``: it is
reported by the catch-all handler as a generic internal error.
"""


class CatalogError(Exception):
    status_code = 500
    message = "Error interno del servidor"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidArgument(CatalogError):
    status_code = 400
    message = "Faltan campos obligatorios o datos inválidos"


class NotFound(CatalogError):
    status_code = 404
    message = "Libro no existe"


class Conflict(CatalogError):
    status_code = 409
    message = "Ya existe un libro con el mismo título y año"


class StorageUnavailable(CatalogError):
    status_code = 500
    message = "Error al leer datos"


class PersistenceFailure(RuntimeError):
    """Writing the backing file failed after an in-memory mutation."""


INVALID_ID = "Id inválido"
INVALID_FIELDS = InvalidArgument.message
INVALID_YEAR = "Año inválido"
INTERNAL_ERROR = CatalogError.message
ROUTE_NOT_FOUND = "Ruta no encontrada"
METHOD_NOT_ALLOWED = "Método no permitido"

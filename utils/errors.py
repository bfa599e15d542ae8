"""Excepciones del almacén de credenciales de usuarios."""


class UsuarioStoreError(Exception):
    """Excepción base para los errores del almacén de usuarios."""


class ValidationError(UsuarioStoreError, ValueError):
    """Datos de entrada mal formados; se rechazan antes de acceder a la base de datos."""


class StorageError(UsuarioStoreError):
    """
    Fallo de la capa de almacenamiento (conexión, SQL, restricciones).

    Conserva la excepción original en `__cause__` para poder registrarla.
    """

    def __init__(self, message: str, operation: str = None):
        self.operation = operation
        super().__init__(message)

from enum import IntEnum


class EstadoUsuario(IntEnum):
    """
    Estado de un usuario (columna `estado` de la tabla Usuarios).

    Cualquier código almacenado distinto de 1 o 2 se lee como DESCONOCIDO.
    """
    DESCONOCIDO = 0
    ACTIVO = 1
    INACTIVO = 2

    @classmethod
    def _missing_(cls, value):
        return cls.DESCONOCIDO

    @property
    def etiqueta(self) -> str:
        return etiqueta_estado(self)


_ETIQUETAS = {
    EstadoUsuario.ACTIVO: "ACTIVO",
    EstadoUsuario.INACTIVO: "INACTIVO",
}


def get_status(codigo) -> EstadoUsuario:
    """
    Obtiene el EstadoUsuario correspondiente a un código almacenado.

    Args:
        codigo (int | None): El código leído de la base de datos.

    Returns:
        EstadoUsuario: El estado, o DESCONOCIDO si el código no es 1 ni 2.
    """
    if codigo is None:
        return EstadoUsuario.DESCONOCIDO
    return EstadoUsuario(codigo)


def etiqueta_estado(estado) -> str:
    """
    Devuelve la etiqueta para mostrar de un estado.

    Args:
        estado (EstadoUsuario | int | None): Estado o código a renderizar.

    Returns:
        str: "ACTIVO", "INACTIVO" o cadena vacía si el estado es desconocido.
    """
    return _ETIQUETAS.get(get_status(estado), "")


def es_estado_asignable(estado) -> bool:
    """Indica si el estado puede guardarse (solo ACTIVO o INACTIVO)."""
    return get_status(estado) in _ETIQUETAS

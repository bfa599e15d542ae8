from fastapi.responses import JSONResponse

from typing import Any, Optional
from pydantic import BaseModel

def _serializar(valor: Any) -> Any:
    if isinstance(valor, BaseModel):
        return valor.model_dump(mode="json")
    if isinstance(valor, list):
        return [_serializar(item) for item in valor]
    if isinstance(valor, dict):
        return {key: _serializar(item) for key, item in valor.items()}
    return valor

def create_response(
    status: str,
    message: str,
    data: Optional[Any] = None,  # Permitir cualquier tipo de datos
    status_code: int = 200
) -> JSONResponse:
    """
    Crea una respuesta JSON estructurada para ser devuelta por la API.

    Args:
        status (str): Estado de la respuesta (ej. "success" o "error").
        message (str): Mensaje que describe el estado de la respuesta.
        data (Optional[Any], optional): Datos adicionales a incluir en la respuesta. Los modelos
            Pydantic se serializan con sus exclusiones (el hash de la contraseña nunca se envía).
        status_code (int, optional): Código de estado HTTP a devolver. Por defecto es 200.

    Returns:
        JSONResponse: Respuesta en formato JSON que incluye el estado, mensaje y datos.
    """
    data = _serializar(data)

    # Retornar la respuesta en formato JSON
    return JSONResponse(
        status_code=status_code,
        content={
            "status": status,
            "message": message,
            "data": data if data is not None else {}
        }
    )


def invalid_credentials_response() -> JSONResponse:
    """
    Crea la respuesta para credenciales incorrectas. Es la misma para un correo
    desconocido, un usuario inactivo o una contraseña incorrecta.

    Returns:
        JSONResponse: Respuesta en formato JSON con código 401.
    """
    return create_response(
        status="error",
        message="Credenciales incorrectas",
        data={},
        status_code=401
    )


def not_found_response(id_usuario: int) -> JSONResponse:
    """Respuesta 404 para un usuario inexistente."""
    return create_response("error", f"Usuario {id_usuario} no encontrado", status_code=404)

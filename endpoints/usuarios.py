from fastapi import APIRouter, HTTPException, Depends
from pydantic import AfterValidator, BaseModel
from email_validator import validate_email
from typing import Annotated, Optional
import logging

from models.usuario import CambioPassword, Credenciales, UsuarioCreate, UsuarioUpdate
from persistence.usuario_dao import UsuarioDAO
from utils.errors import StorageError, ValidationError
from utils.response import create_response, invalid_credentials_response, not_found_response
from utils.status import EstadoUsuario

logger = logging.getLogger(__name__)

router = APIRouter()


def _validar_correo(correo: str) -> str:
    # El correo se guarda tal como se escribió; el login lo compara exactamente
    validate_email(correo, check_deliverability=False)
    return correo

CorreoElectronico = Annotated[str, AfterValidator(_validar_correo)]


class UsuarioRequest(BaseModel):
    nombre: str
    correo_electronico: CorreoElectronico
    password: str
    estado: EstadoUsuario = EstadoUsuario.ACTIVO

class UsuarioUpdateRequest(BaseModel):
    nombre: str
    correo_electronico: CorreoElectronico
    estado: EstadoUsuario

class PasswordRequest(BaseModel):
    password: str

class LoginRequest(BaseModel):
    correo_electronico: str
    password: str

class PasswordChange(BaseModel):
    correo_electronico: str
    current_password: str
    new_password: str


def get_usuario_dao() -> UsuarioDAO:
    """
    Dependencia que entrega el DAO de usuarios con el proveedor de conexiones
    por defecto.
    """
    return UsuarioDAO()


def _storage_failure(e: StorageError) -> HTTPException:
    return HTTPException(status_code=500, detail=str(e))


@router.post("/", status_code=201)
def create_usuario(request: UsuarioRequest, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """
    Crea un nuevo usuario.

    - **nombre**: Nombre para mostrar.
    - **correo_electronico**: Correo usado para iniciar sesión.
    - **password**: Contraseña en texto plano; se guarda solo su hash.
    - **estado**: 1 (ACTIVO) o 2 (INACTIVO).
    """
    try:
        usuario = dao.create(UsuarioCreate(**request.model_dump()))
    except ValidationError as e:
        return create_response("error", str(e), status_code=400)
    except StorageError as e:
        raise _storage_failure(e)
    return create_response("success", "Usuario creado exitosamente", usuario, status_code=201)


@router.get("/")
def search_usuarios(nombre: Optional[str] = None, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """
    Busca usuarios por nombre (coincidencia parcial sin distinguir mayúsculas).
    Sin `nombre` devuelve todos los usuarios.
    """
    try:
        usuarios = dao.search(nombre)
    except StorageError as e:
        raise _storage_failure(e)
    return create_response("success", "Usuarios obtenidos correctamente", usuarios)


@router.post("/login")
def login(request: LoginRequest, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """
    Inicio de Sesión

    Autentica al usuario con correo electrónico y contraseña. Solo los usuarios
    ACTIVOS pueden iniciar sesión.

    - **Respuestas**:
      - **200 OK**: Devuelve los datos del usuario (sin el hash de la contraseña).
      - **401 Unauthorized**: "Credenciales incorrectas", sin indicar la causa.
    """
    try:
        usuario = dao.authenticate(Credenciales(**request.model_dump()))
    except ValidationError:
        return invalid_credentials_response()
    except StorageError as e:
        raise _storage_failure(e)

    if usuario is None:
        return invalid_credentials_response()
    return create_response("success", "Inicio de sesión exitoso", usuario)


# Cambiar contraseña
@router.put("/change-password")
def change_password(change: PasswordChange, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """
    Cambio de Contraseña

    Permite a un usuario cambiar su contraseña siempre que proporcione sus
    credenciales actuales correctamente.
    """
    try:
        usuario = dao.authenticate(
            Credenciales(correo_electronico=change.correo_electronico, password=change.current_password)
        )
        if usuario is None:
            return invalid_credentials_response()
        dao.update_password(CambioPassword(id=usuario.id, password=change.new_password))
    except ValidationError as e:
        return create_response("error", str(e), status_code=400)
    except StorageError as e:
        raise _storage_failure(e)

    logger.info("Contraseña cambiada para el usuario %s", usuario.id)
    return create_response("success", "Cambio de contraseña exitoso")


@router.get("/{id_usuario}")
def get_usuario(id_usuario: int, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """Obtiene un usuario por su id."""
    try:
        usuario = dao.get_by_id(id_usuario)
    except StorageError as e:
        raise _storage_failure(e)

    if usuario is None:
        return not_found_response(id_usuario)
    return create_response("success", "Usuario obtenido correctamente", usuario)


@router.put("/{id_usuario}")
def update_usuario(id_usuario: int, request: UsuarioUpdateRequest, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """
    Modifica nombre, correo electrónico y estado de un usuario. La contraseña
    se cambia con `PUT /usuarios/{id_usuario}/password`.
    """
    try:
        actualizado = dao.update(UsuarioUpdate(id=id_usuario, **request.model_dump()))
    except ValidationError as e:
        return create_response("error", str(e), status_code=400)
    except StorageError as e:
        raise _storage_failure(e)

    if not actualizado:
        return not_found_response(id_usuario)
    return create_response("success", "Usuario modificado exitosamente")


@router.put("/{id_usuario}/password")
def update_password(id_usuario: int, request: PasswordRequest, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """Reemplaza la contraseña de un usuario."""
    try:
        actualizado = dao.update_password(CambioPassword(id=id_usuario, password=request.password))
    except ValidationError as e:
        return create_response("error", str(e), status_code=400)
    except StorageError as e:
        raise _storage_failure(e)

    if not actualizado:
        return not_found_response(id_usuario)
    return create_response("success", "Contraseña actualizada exitosamente")


# Eliminar usuario
@router.delete("/{id_usuario}")
def delete_usuario(id_usuario: int, dao: UsuarioDAO = Depends(get_usuario_dao)):
    """Elimina definitivamente un usuario."""
    try:
        eliminado = dao.delete(id_usuario)
    except StorageError as e:
        raise _storage_failure(e)

    if not eliminado:
        return not_found_response(id_usuario)
    return create_response("success", "Usuario eliminado exitosamente")

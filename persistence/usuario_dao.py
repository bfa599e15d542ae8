"""
Acceso a datos de usuarios: CRUD, autenticación y cambio de contraseña.

Cada operación abre su propia sesión, ejecuta su sentencia y la cierra
antes de retornar; el DAO no guarda estado entre llamadas.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete as sql_delete, select, update as sql_update
from sqlalchemy.exc import SQLAlchemyError

from dataBase import open_session
from models.models import Usuario as UsuarioModel
from models.usuario import CambioPassword, Credenciales, Usuario, UsuarioCreate, UsuarioUpdate
from utils.errors import StorageError, ValidationError
from utils.security import dummy_verify, hash_password, verify_password
from utils.status import EstadoUsuario, es_estado_asignable

logger = logging.getLogger(__name__)


def _escape_like(fragmento: str) -> str:
    return fragmento.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _es_vacio(valor) -> bool:
    return valor is None or not str(valor).strip()


class UsuarioDAO:
    """Almacén de credenciales sobre la tabla Usuarios."""

    def __init__(self, session_factory=None):
        """
        Args:
            session_factory (sessionmaker, optional): Proveedor de conexiones.
                Por defecto se usa SessionLocal de dataBase.
        """
        self._session_factory = session_factory

    def _storage_error(self, operacion: str, error) -> StorageError:
        logger.error("Error de base de datos al %s: %s", operacion, error, exc_info=isinstance(error, Exception))
        return StorageError(f"Error al {operacion}: {error}", operation=operacion)

    # --- Validaciones ---

    @staticmethod
    def _validar_datos(usuario) -> None:
        if _es_vacio(usuario.nombre):
            raise ValidationError("El nombre no puede estar vacío")
        if _es_vacio(usuario.correo_electronico):
            raise ValidationError("El correo electrónico no puede estar vacío")
        if not es_estado_asignable(usuario.estado):
            raise ValidationError("El estado debe ser ACTIVO (1) o INACTIVO (2)")

    @staticmethod
    def _validar_id(usuario) -> int:
        if isinstance(usuario, int):
            return usuario
        id_usuario = getattr(usuario, "id", None)
        if id_usuario is None:
            raise ValidationError("El usuario no tiene id")
        return id_usuario

    @staticmethod
    def _validar_password(password) -> None:
        if password is None or password == "":
            raise ValidationError("La contraseña no puede estar vacía")

    # --- Operaciones ---

    def create(self, usuario: UsuarioCreate) -> Usuario:
        """
        Crea un nuevo usuario guardando el hash de la contraseña.

        Args:
            usuario (UsuarioCreate): Datos del usuario con la contraseña en texto plano.

        Returns:
            Usuario: El usuario recién creado, leído de nuevo por su id generado.

        Raises:
            ValidationError: Si los datos están incompletos.
            StorageError: Si la inserción falla o no se obtiene el id generado.
        """
        self._validar_datos(usuario)
        self._validar_password(usuario.password)

        nuevo = UsuarioModel(
            nombre=usuario.nombre,
            password_hash=hash_password(usuario.password),
            correo_electronico=usuario.correo_electronico,
            estado=int(usuario.estado),
        )
        try:
            with open_session(self._session_factory) as db:
                db.add(nuevo)
                db.flush()
                id_generado = nuevo.id
                if id_generado is None:
                    raise self._storage_error("crear el usuario", "no se obtuvo el id generado")
                db.commit()

                creado = db.get(UsuarioModel, id_generado)
                if creado is None:
                    raise self._storage_error("crear el usuario", f"no se encontró el id {id_generado}")
                logger.info("Usuario creado con id %s", id_generado)
                return Usuario.model_validate(creado)
        except SQLAlchemyError as e:
            raise self._storage_error("crear el usuario", e) from e

    def get_by_id(self, id_usuario: int) -> Optional[Usuario]:
        """
        Obtiene un usuario por su id.

        Returns:
            Usuario | None: El usuario, o None si no existe.
        """
        try:
            with open_session(self._session_factory) as db:
                fila = db.get(UsuarioModel, id_usuario)
                return Usuario.model_validate(fila) if fila is not None else None
        except SQLAlchemyError as e:
            raise self._storage_error("obtener el usuario por id", e) from e

    def search(self, nombre: Optional[str]) -> List[Usuario]:
        """
        Busca usuarios cuyo nombre contenga el fragmento indicado, sin
        distinguir mayúsculas. Un fragmento vacío devuelve todos.

        Returns:
            list[Usuario]: Los usuarios encontrados, ordenados por id.
        """
        consulta = select(UsuarioModel).order_by(UsuarioModel.id)
        if nombre:
            patron = f"%{_escape_like(nombre)}%"
            consulta = consulta.where(UsuarioModel.nombre.ilike(patron, escape="\\"))
        try:
            with open_session(self._session_factory) as db:
                return [Usuario.model_validate(fila) for fila in db.scalars(consulta)]
        except SQLAlchemyError as e:
            raise self._storage_error("buscar usuarios", e) from e

    def update(self, usuario: UsuarioUpdate) -> bool:
        """
        Actualiza nombre, correo electrónico y estado. No modifica la contraseña.

        Returns:
            bool: True si se modificó una fila, False si no existe el id.
        """
        id_usuario = self._validar_id(usuario)
        self._validar_datos(usuario)

        sentencia = (
            sql_update(UsuarioModel)
            .where(UsuarioModel.id == id_usuario)
            .values({
                UsuarioModel.nombre: usuario.nombre,
                UsuarioModel.correo_electronico: usuario.correo_electronico,
                UsuarioModel.estado: int(usuario.estado),
            })
        )
        return self._ejecutar_modificacion(sentencia, "modificar el usuario")

    def update_password(self, cambio: CambioPassword) -> bool:
        """
        Recalcula el hash a partir de la contraseña en texto plano y
        sobrescribe únicamente esa columna.

        Returns:
            bool: True si se modificó una fila, False si no existe el id.
        """
        id_usuario = self._validar_id(cambio)
        self._validar_password(cambio.password)

        sentencia = (
            sql_update(UsuarioModel)
            .where(UsuarioModel.id == id_usuario)
            .values({UsuarioModel.password_hash: hash_password(cambio.password)})
        )
        return self._ejecutar_modificacion(sentencia, "cambiar la contraseña")

    def delete(self, usuario) -> bool:
        """
        Elimina definitivamente el usuario por su id.

        Args:
            usuario (Usuario | int): El usuario a eliminar o directamente su id.

        Returns:
            bool: True si se eliminó una fila, False si no existe el id.
        """
        id_usuario = self._validar_id(usuario)
        sentencia = sql_delete(UsuarioModel).where(UsuarioModel.id == id_usuario)
        return self._ejecutar_modificacion(sentencia, "eliminar el usuario")

    def authenticate(self, credenciales: Credenciales) -> Optional[Usuario]:
        """
        Autentica un usuario por correo electrónico y contraseña.

        Un correo inexistente, un usuario inactivo y una contraseña incorrecta
        producen el mismo resultado.

        Returns:
            Usuario | None: El usuario autenticado, o None.

        Raises:
            ValidationError: Si falta el correo o la contraseña.
        """
        if _es_vacio(credenciales.correo_electronico):
            raise ValidationError("El correo electrónico no puede estar vacío")
        if credenciales.password is None:
            raise ValidationError("La contraseña no puede estar vacía")

        consulta = select(UsuarioModel).where(
            UsuarioModel.correo_electronico == credenciales.correo_electronico
        )
        try:
            with open_session(self._session_factory) as db:
                fila = db.scalars(consulta).first()
                usuario = Usuario.model_validate(fila) if fila is not None else None
        except SQLAlchemyError as e:
            raise self._storage_error("autenticar el usuario", e) from e

        if usuario is None:
            dummy_verify()
            logger.warning("Autenticación fallida para: %s", credenciales.correo_electronico)
            return None

        password_ok = verify_password(credenciales.password, usuario.password_hash)
        if not password_ok or usuario.estado != EstadoUsuario.ACTIVO:
            logger.warning("Autenticación fallida para: %s", credenciales.correo_electronico)
            return None

        logger.info("Usuario %s autenticado", usuario.id)
        return usuario

    def _ejecutar_modificacion(self, sentencia, operacion: str) -> bool:
        try:
            with open_session(self._session_factory) as db:
                resultado = db.execute(sentencia)
                db.commit()
                return resultado.rowcount > 0
        except SQLAlchemyError as e:
            raise self._storage_error(operacion, e) from e

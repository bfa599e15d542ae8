from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from utils.status import EstadoUsuario, get_status


class UsuarioBase(BaseModel):
    nombre: str
    correo_electronico: str
    estado: EstadoUsuario = EstadoUsuario.ACTIVO

    @field_validator("estado", mode="before")
    @classmethod
    def normalizar_estado(cls, valor):
        return get_status(valor)


class UsuarioCreate(UsuarioBase):
    """Datos para crear un usuario. `password` es la contraseña en texto plano."""
    password: str


class UsuarioUpdate(UsuarioBase):
    """Datos para modificar un usuario existente. No incluye la contraseña."""
    id: int


class CambioPassword(BaseModel):
    """Nueva contraseña (texto plano) para el usuario identificado por `id`."""
    id: int
    password: str


class Credenciales(BaseModel):
    correo_electronico: Optional[str] = None
    password: Optional[str] = None


class Usuario(UsuarioBase):
    """
    Registro de usuario tal como se lee de la base de datos.

    El hash de la contraseña se conserva en el registro pero no aparece en
    su representación ni se serializa por defecto.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    password_hash: str = Field(repr=False, exclude=True)

    @computed_field
    @property
    def etiqueta_estado(self) -> str:
        return self.estado.etiqueta

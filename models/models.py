from sqlalchemy import Column, Integer, SmallInteger, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


# Definición del modelo Usuario
class Usuario(Base):
    """
    Representa un usuario del sistema de la clínica.

    Atributos:
    ----------
    id : int
        Identificador único del usuario, generado por la base de datos.
    nombre : str
        Nombre para mostrar del usuario (no es único).
    password_hash : str
        Hash con sal de la contraseña. Nunca se guarda la contraseña en texto plano.
    correo_electronico : str
        Correo electrónico, usado como identificador para iniciar sesión (único).
    estado : int
        Código de estado (1 = ACTIVO, 2 = INACTIVO).
    """
    __tablename__ = "Usuarios"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    password_hash = Column("passwordHash", String(255), nullable=False)
    correo_electronico = Column("correoElectronico", String(150), nullable=False, unique=True, index=True)
    estado = Column(SmallInteger, nullable=False)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import sys
import os

# Agrega la ruta raíz del proyecto al sys.path
sys.path.append(os.path.dirname(os.path.abspath(__file__)) + '/../')

# Las pruebas usan SQLite en memoria en lugar de PostgreSQL
os.environ["DATABASE_URL"] = "sqlite://"

from models.models import Base
from persistence.usuario_dao import UsuarioDAO


@pytest.fixture(scope="function")
def session_factory():
    """Crea una base de datos en memoria nueva para cada prueba."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def dao(session_factory):
    return UsuarioDAO(session_factory)


@pytest.fixture(scope="function")
def app_with_overrides(session_factory):
    from main import app
    from endpoints.usuarios import get_usuario_dao

    # Función para sobrescribir la dependencia get_usuario_dao
    def override_get_usuario_dao():
        return UsuarioDAO(session_factory)

    app.dependency_overrides[get_usuario_dao] = override_get_usuario_dao
    yield app
    app.dependency_overrides.clear()

import os
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Función para recargar .env
def reload_env():
    """
    Carga las variables de entorno desde el archivo .env sin sobrescribir
    las que ya están definidas en el proceso.
    """
    load_dotenv()

# Cargar variables de entorno
reload_env()


DB_HOST = os.getenv("PGHOST")
DB_PORT = os.getenv("PGPORT", "5432")
DB_NAME = os.getenv("PGDATABASE")
DB_USER = os.getenv("PGUSER")
DB_PASSWORD = os.getenv("PGPASSWORD")


def build_database_url() -> str:
    """
    Construye la URL de conexión. DATABASE_URL tiene prioridad sobre las
    variables PG*.

    Returns:
        str: URL de conexión para SQLAlchemy.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    missing_vars = {"PGHOST", "PGDATABASE", "PGUSER", "PGPASSWORD"} - set(os.environ)
    if missing_vars:
        logger.error("Faltan variables de entorno para la base de datos: %s", ", ".join(sorted(missing_vars)))
    return f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


def make_engine(url: str):
    """
    Crea el motor de SQLAlchemy para la URL dada.

    Las bases SQLite en memoria usan un único pool estático para que todas
    las sesiones vean la misma base de datos.

    Args:
        url (str): URL de conexión.

    Returns:
        Engine: El motor configurado.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


SQLALCHEMY_DATABASE_URL = build_database_url()

engine = make_engine(SQLALCHEMY_DATABASE_URL)

try:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
        logger.info("Conexión exitosa a la base de datos")
except SQLAlchemyError as e:
    logger.error("Error al conectar a la base de datos: %s", e)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def open_session(session_factory=None):
    """
    Abre una sesión para una única unidad de trabajo y la cierra al
    terminar. Si ocurre un error, la transacción se revierte antes de
    propagarlo.

    Args:
        session_factory (sessionmaker, optional): Fábrica de sesiones.
            Por defecto se usa SessionLocal.

    Yields:
        Session: Una sesión de base de datos.
    """
    factory = session_factory or SessionLocal
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db_session():
    """
    Proporciona una sesión de base de datos, que se puede utilizar
    en las operaciones CRUD. Asegura que la sesión se cierre
    correctamente después de su uso.

    Yields:
        Session: Una sesión de base de datos.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

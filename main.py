from fastapi import FastAPI, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from endpoints import usuarios
from dataBase import engine, get_db_session
from models.models import Base
from utils.response import create_response
import logging


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Crear todas las tablas
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Tablas de la base de datos verificadas/creadas.")
except SQLAlchemyError as e:
    logger.error("Error al inicializar la base de datos: %s", e, exc_info=True)

app = FastAPI(
    title="Clínica - Usuarios",
    description="Gestión de usuarios y credenciales de la clínica.",
    version="1.0.0"
)


# Incluir las rutas de usuarios con prefijo y etiqueta
app.include_router(usuarios.router, prefix="/usuarios", tags=["Usuarios"])


@app.get("/")
def read_root():
    """
    Ruta raíz que retorna un mensaje de bienvenida.

    Returns:
        dict: Un diccionario con un mensaje de bienvenida.
    """
    return {"message": "Welcome to the FastAPI application Clínica!"}


@app.get("/health", tags=["Monitoring"])
def health_check(db: Session = Depends(get_db_session)):
    """
    Comprueba que la base de datos responde.

    Returns:
        JSONResponse: "ok" si la consulta de prueba funciona, 503 en caso contrario.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check fallido: %s", e)
        return create_response("error", "Base de datos no disponible", status_code=503)
    return create_response("success", "ok")

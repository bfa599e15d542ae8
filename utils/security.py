from passlib.context import CryptContext


# Argon2 genera una sal aleatoria por cada hash
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

def hash_password(password: str) -> str:
    """
    Hashea una contraseña utilizando el esquema configurado en CryptContext.

    Args:
        password (str): La contraseña en texto plano a hashear.

    Returns:
        str: La contraseña hasheada.
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica una contraseña en texto plano contra una contraseña hasheada.

    Args:
        plain_password (str): La contraseña en texto plano.
        hashed_password (str): La contraseña hasheada a comparar.

    Returns:
        bool: Verdadero si las contraseñas coinciden, falso en caso contrario.
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Hash almacenado con un formato que ningún esquema reconoce
        return False

def dummy_verify() -> bool:
    """
    Ejecuta una verificación contra un hash ficticio para que el tiempo de
    respuesta no revele si el correo existe.

    Returns:
        bool: Siempre falso.
    """
    pwd_context.dummy_verify()
    return False

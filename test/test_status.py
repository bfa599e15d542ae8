from utils.status import EstadoUsuario, es_estado_asignable, etiqueta_estado, get_status


def test_known_codes():
    assert get_status(1) is EstadoUsuario.ACTIVO
    assert get_status(2) is EstadoUsuario.INACTIVO


def test_unknown_codes_map_to_desconocido():
    assert get_status(0) is EstadoUsuario.DESCONOCIDO
    assert get_status(7) is EstadoUsuario.DESCONOCIDO
    assert get_status(None) is EstadoUsuario.DESCONOCIDO
    assert EstadoUsuario(42) is EstadoUsuario.DESCONOCIDO


def test_labels():
    assert etiqueta_estado(EstadoUsuario.ACTIVO) == "ACTIVO"
    assert etiqueta_estado(2) == "INACTIVO"
    assert etiqueta_estado(5) == ""
    assert EstadoUsuario.DESCONOCIDO.etiqueta == ""


def test_only_active_and_inactive_are_assignable():
    assert es_estado_asignable(EstadoUsuario.ACTIVO)
    assert es_estado_asignable(2)
    assert not es_estado_asignable(EstadoUsuario.DESCONOCIDO)
    assert not es_estado_asignable(3)

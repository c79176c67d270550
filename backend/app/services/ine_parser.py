"""Lectura de credenciales INE/IFE a partir de texto OCR.

Cada extractor es independiente y devuelve ``None`` cuando no encuentra su
campo; ``extract_identity_fields`` los compone, suma la confianza y acumula
advertencias. Nada en este módulo lanza excepciones por texto ruidoso.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from datetime import date

from app.core.legal_constants import CLAVE_NACIDO_EXTRANJERO, ESTADOS_MEXICO
from app.schemas.ine import DatosINE, DatosUsuario, Domicilio, LadoINE, ResultadoValidacion

logger = logging.getLogger(__name__)

NOISE_PATTERN = re.compile(r"[^\w\s.,#/\-]|_")
CURP_PATTERN = re.compile(r"[A-Z]{4}\d{6}[HM][A-Z]{5}[A-Z0-9]\d")
CLAVE_ELECTOR_PATTERN = re.compile(r"[A-Z]{6}\d{8}[A-Z]\d{3}")
NUMERO_INE_PATTERN = re.compile(r"(?<!\d)\d{4}[ ]*\d{4}[ ]*\d{4}[ ]*\d{4}(?!\d)")
NUMERO_INE_FALLBACK_PATTERN = re.compile(r"(?<!\d)\d{13}(?!\d)")
FECHA_PATTERN = re.compile(r"(?<!\d)(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})(?!\d)")
NOMBRE_LABEL_PATTERN = re.compile(r"NOMBRES?:?")
CP_PATTERN = re.compile(r"\b(\d{5})\b")
CALLE_PATTERN = re.compile(
    r"(?:\bCALLE\b|\bCLL?\.|(?<![A-Z])C\.(?!\s*P\.))\s*([^\n#]+?)\s*(?:\bN[UÚ]M\.?|\bNO\.|#)\s*(\d+[A-Z]?)\b"
    r"(?:[ ]*(?:\bINTERIOR\b|\bINT\.?)[ ]*([A-Z0-9]+))?"
)
COLONIA_PATTERN = re.compile(
    r"\b(?:COLONIA|COL\.?)\s+([A-ZÁÉÍÓÚÑÜ ]+?)(?=[ ]*(?:C\.?[ ]?P\.?|\d{5}|,|$))",
    re.MULTILINE,
)
MUNICIPIO_PATTERN = re.compile(
    r"\b(?:MUNICIPIO|MUN\.|DELEGACI[OÓ]N|DELEG\.|ALCALD[IÍ]A)\s+([A-ZÁÉÍÓÚÑÜ ]+?)(?=[ ]*(?:,|\bESTADO\b|\bEDO\b|$))",
    re.MULTILINE,
)
VIGENCIA_PATTERN = re.compile(r"VIGENCIA\s*:?\s*(?:\d{4}\s*-\s*)?(\d{4})")
SECCION_PATTERN = re.compile(r"SECCI[OÓ]N\s*:?\s*(\d{4})")
ANIO_REGISTRO_PATTERN = re.compile(r"A[ÑN]O DE REGISTRO\s*:?\s*(\d{4})")
EMISION_PATTERN = re.compile(r"EMISI[OÓ]N\s*:?\s*(\d{4})")

INDICADORES_FRENTE: tuple[str, ...] = (
    "INSTITUTO NACIONAL ELECTORAL",
    "CREDENCIAL PARA VOTAR",
    "NOMBRE",
    "DOMICILIO",
    "FECHA DE NACIMIENTO",
    "SEXO",
    "INE",
    "IFE",
)
INDICADORES_REVERSO: tuple[str, ...] = (
    "CLAVE DE ELECTOR",
    "CURP",
    "ANO DE REGISTRO",
    "EMISION",
    "VIGENCIA",
    "SECCION",
    "ESTADO",
    "MUNICIPIO",
)

PUNTOS_CURP = 30
PENALIZACION_CURP_INVALIDA = 10
PUNTOS_CLAVE_ELECTOR = 15
PUNTOS_NUMERO_INE = 10
PUNTOS_FECHA_IMPRESA = 15
PUNTOS_FECHA_DE_CURP = 5
PUNTOS_SEXO = 5
PUNTOS_ESTADO_NACIMIENTO = 5
PUNTOS_NOMBRE = 10
PUNTOS_DOMICILIO = 10


def _sin_acentos(texto: str) -> str:
    descompuesto = unicodedata.normalize("NFKD", texto)
    return "".join(ch for ch in descompuesto if not unicodedata.combining(ch))


def _normalizar_lineas(texto: str) -> list[str]:
    lineas = []
    for linea in (texto or "").splitlines():
        limpia = " ".join(NOISE_PATTERN.sub(" ", linea).split()).upper()
        if limpia:
            lineas.append(limpia)
    return lineas


# ---------------------------------------------------------------------------
# CURP
# ---------------------------------------------------------------------------
def fecha_nacimiento_de_curp(curp: str | None) -> date | None:
    """Fecha de nacimiento de las posiciones 5-10 (AAMMDD); 00-30 → 2000s, 31-99 → 1900s."""
    if not curp or len(curp) < 10:
        return None
    digitos = curp[4:10]
    if not digitos.isdigit():
        return None
    anio = int(digitos[0:2])
    anio += 2000 if anio <= 30 else 1900
    try:
        return date(anio, int(digitos[2:4]), int(digitos[4:6]))
    except ValueError:
        return None


def sexo_de_curp(curp: str | None) -> str | None:
    if not curp or len(curp) < 11:
        return None
    sexo = curp[10].upper()
    return sexo if sexo in ("H", "M") else None


def estado_nacimiento_de_curp(curp: str | None) -> str | None:
    if not curp or len(curp) < 13:
        return None
    return ESTADOS_MEXICO.get(curp[11:13].upper())


def validar_curp(curp: str | None) -> bool:
    """Validación estructural: posiciones de letras y dígitos (la fecha y la entidad se leen aparte)."""
    if not curp or len(curp) != 18:
        return False
    return CURP_PATTERN.fullmatch(curp.upper()) is not None


def buscar_curp(texto: str) -> str | None:
    candidatos = CURP_PATTERN.findall(texto)
    if not candidatos:
        return None
    for candidato in candidatos:
        if validar_curp(candidato):
            return candidato
    return candidatos[0]


# ---------------------------------------------------------------------------
# Identificadores de la credencial
# ---------------------------------------------------------------------------
def buscar_clave_elector(texto: str) -> str | None:
    match = CLAVE_ELECTOR_PATTERN.search(texto)
    return match.group(0) if match else None


def buscar_numero_ine(texto: str) -> str | None:
    match = NUMERO_INE_PATTERN.search(texto)
    if match:
        return match.group(0).replace(" ", "")
    match = NUMERO_INE_FALLBACK_PATTERN.search(texto)
    return match.group(0) if match else None


def buscar_fecha(texto: str) -> tuple[date, str] | None:
    for match in FECHA_PATTERN.finditer(texto):
        dia, mes, anio = (int(g) for g in match.groups())
        if not (1 <= dia <= 31 and 1 <= mes <= 12 and 1900 <= anio <= 2100):
            continue
        try:
            return date(anio, mes, dia), match.group(0)
        except ValueError:
            continue
    return None


def _buscar_numero_etiquetado(pattern: re.Pattern[str], texto: str) -> str | None:
    match = pattern.search(texto)
    return match.group(1) if match else None


# ---------------------------------------------------------------------------
# Nombre y domicilio
# ---------------------------------------------------------------------------
def buscar_nombres(lineas: list[str]) -> dict[str, str | None] | None:
    # Heurística: el primer token va a apellido paterno, el segundo a materno;
    # con sólo dos tokens el primero se repite como nombre.
    lineas = [ln for ln in lineas if len(ln) > 2]
    for i, linea in enumerate(lineas):
        if "NOMBRE" not in linea:
            continue
        resto = NOMBRE_LABEL_PATTERN.sub("", linea).strip()
        if not resto and i + 1 < len(lineas):
            resto = lineas[i + 1].strip()
        partes = resto.split()
        if len(partes) >= 2:
            return {
                "apellido_paterno": partes[0],
                "apellido_materno": partes[1],
                "nombre": " ".join(partes[2:]) or partes[0],
                "nombre_completo": " ".join(partes),
            }
    return None


def _estados_por_longitud() -> list[tuple[str, str]]:
    estados = [
        (_sin_acentos(nombre).upper(), nombre)
        for clave, nombre in ESTADOS_MEXICO.items()
        if clave != CLAVE_NACIDO_EXTRANJERO
    ]
    return sorted(estados, key=lambda e: len(e[0]), reverse=True)


ESTADOS_POR_LONGITUD = _estados_por_longitud()


def buscar_estado(texto: str) -> str | None:
    plano = _sin_acentos(texto).upper()
    for buscado, nombre in ESTADOS_POR_LONGITUD:
        if re.search(rf"\b{re.escape(buscado)}\b", plano):
            return nombre
    return None


def buscar_domicilio(texto: str) -> Domicilio | None:
    campos: dict[str, str] = {}

    for cp in CP_PATTERN.findall(texto):
        if not 1900 <= int(cp) <= 2100:
            campos["codigo_postal"] = cp
            break

    calle = CALLE_PATTERN.search(texto)
    if calle:
        campos["calle"] = calle.group(1).strip(" .,-")
        campos["numero_exterior"] = calle.group(2)
        if calle.group(3):
            campos["numero_interior"] = calle.group(3)

    colonia = COLONIA_PATTERN.search(texto)
    if colonia and colonia.group(1).strip():
        campos["colonia"] = colonia.group(1).strip()

    municipio = MUNICIPIO_PATTERN.search(texto)
    if municipio and municipio.group(1).strip():
        campos["municipio"] = municipio.group(1).strip()

    estado = buscar_estado(texto)
    if estado:
        campos["estado"] = estado

    if not campos:
        return None

    numero = None
    if campos.get("numero_exterior"):
        numero = f"#{campos['numero_exterior']}"
        if campos.get("numero_interior"):
            numero += f" Int. {campos['numero_interior']}"
    partes = [
        campos.get("calle"),
        numero,
        f"Col. {campos['colonia']}" if campos.get("colonia") else None,
        f"C.P. {campos['codigo_postal']}" if campos.get("codigo_postal") else None,
        campos.get("municipio"),
        campos.get("estado"),
    ]
    campos["domicilio_completo"] = ", ".join(p for p in partes if p)
    return Domicilio(**campos)


def determinar_lado(texto: str) -> LadoINE:
    plano = _sin_acentos(texto).upper()
    puntos_frente = sum(1 for ind in INDICADORES_FRENTE if re.search(rf"\b{ind}\b", plano))
    puntos_reverso = sum(1 for ind in INDICADORES_REVERSO if re.search(rf"\b{ind}\b", plano))
    if puntos_frente > puntos_reverso:
        return LadoINE.FRENTE
    if puntos_reverso > puntos_frente:
        return LadoINE.REVERSO
    return LadoINE.DESCONOCIDO


# ---------------------------------------------------------------------------
# Operaciones públicas
# ---------------------------------------------------------------------------
def extract_identity_fields(texto_ocr: str) -> DatosINE:
    """
    Extrae los campos de una INE/IFE del texto OCR de una de sus caras.

    Nunca falla: cada campo ausente queda en None con una advertencia.
    """
    lineas = _normalizar_lineas(texto_ocr)
    texto = "\n".join(lineas)
    advertencias: list[str] = []
    confianza = 0

    curp = buscar_curp(texto)
    if curp:
        confianza += PUNTOS_CURP
        if not validar_curp(curp):
            advertencias.append("CURP encontrada pero formato inválido")
            confianza -= PENALIZACION_CURP_INVALIDA
    else:
        advertencias.append("No se encontró CURP")

    clave_elector = buscar_clave_elector(texto)
    if clave_elector:
        confianza += PUNTOS_CLAVE_ELECTOR
    else:
        advertencias.append("No se encontró clave de elector")

    numero_ine = buscar_numero_ine(texto)
    if numero_ine:
        confianza += PUNTOS_NUMERO_INE
    else:
        advertencias.append("No se encontró número de credencial")

    fecha_curp = fecha_nacimiento_de_curp(curp)
    fecha_impresa = buscar_fecha(texto)
    fecha_nacimiento = None
    fecha_texto = None
    if fecha_impresa:
        fecha_nacimiento, fecha_texto = fecha_impresa
        confianza += PUNTOS_FECHA_IMPRESA
        if fecha_curp and fecha_curp != fecha_nacimiento:
            advertencias.append("Fecha de nacimiento impresa no coincide con la CURP")
    elif fecha_curp:
        fecha_nacimiento, fecha_texto = fecha_curp, fecha_curp.isoformat()
        confianza += PUNTOS_FECHA_DE_CURP
    else:
        advertencias.append("No se encontró fecha de nacimiento")

    sexo = sexo_de_curp(curp)
    if sexo:
        confianza += PUNTOS_SEXO
    estado_nacimiento = estado_nacimiento_de_curp(curp)
    if estado_nacimiento:
        confianza += PUNTOS_ESTADO_NACIMIENTO

    nombres = buscar_nombres(lineas) or {}
    if nombres:
        confianza += PUNTOS_NOMBRE
    else:
        advertencias.append("No se encontró nombre")

    domicilio = buscar_domicilio(texto)
    if domicilio:
        confianza += PUNTOS_DOMICILIO
    else:
        advertencias.append("No se encontró domicilio")

    resultado = DatosINE(
        curp=curp,
        clave_elector=clave_elector,
        numero_ine=numero_ine,
        nombre=nombres.get("nombre"),
        apellido_paterno=nombres.get("apellido_paterno"),
        apellido_materno=nombres.get("apellido_materno"),
        nombre_completo=nombres.get("nombre_completo"),
        fecha_nacimiento=fecha_nacimiento,
        fecha_nacimiento_texto=fecha_texto,
        sexo=sexo,
        estado_nacimiento=estado_nacimiento,
        domicilio=domicilio,
        vigencia=_buscar_numero_etiquetado(VIGENCIA_PATTERN, texto),
        seccion=_buscar_numero_etiquetado(SECCION_PATTERN, texto),
        anio_registro=_buscar_numero_etiquetado(ANIO_REGISTRO_PATTERN, texto),
        emision=_buscar_numero_etiquetado(EMISION_PATTERN, texto),
        confianza=min(100, max(0, confianza)),
        advertencias=advertencias,
        lado=determinar_lado(texto),
    )
    logger.info(
        "ine_extracted lado=%s confianza=%s curp=%s advertencias=%s",
        resultado.lado.value,
        resultado.confianza,
        "yes" if curp else "no",
        len(advertencias),
    )
    return resultado


def _prefer(preferido, alterno):
    return preferido if preferido is not None else alterno


def combine_front_and_back(frente: DatosINE, reverso: DatosINE) -> DatosINE:
    """Une ambas caras: el reverso manda en CURP y clave, el frente en nombre y domicilio."""
    return DatosINE(
        nombre=_prefer(frente.nombre, reverso.nombre),
        apellido_paterno=_prefer(frente.apellido_paterno, reverso.apellido_paterno),
        apellido_materno=_prefer(frente.apellido_materno, reverso.apellido_materno),
        nombre_completo=_prefer(frente.nombre_completo, reverso.nombre_completo),
        curp=_prefer(reverso.curp, frente.curp),
        clave_elector=_prefer(reverso.clave_elector, frente.clave_elector),
        numero_ine=_prefer(frente.numero_ine, reverso.numero_ine),
        fecha_nacimiento=_prefer(frente.fecha_nacimiento, reverso.fecha_nacimiento),
        fecha_nacimiento_texto=_prefer(frente.fecha_nacimiento_texto, reverso.fecha_nacimiento_texto),
        sexo=_prefer(frente.sexo, reverso.sexo),
        estado_nacimiento=_prefer(frente.estado_nacimiento, reverso.estado_nacimiento),
        domicilio=_prefer(frente.domicilio, reverso.domicilio),
        vigencia=_prefer(reverso.vigencia, frente.vigencia),
        seccion=_prefer(reverso.seccion, frente.seccion),
        anio_registro=_prefer(reverso.anio_registro, frente.anio_registro),
        emision=_prefer(reverso.emision, frente.emision),
        confianza=(frente.confianza + reverso.confianza + 1) // 2,
        advertencias=[*frente.advertencias, *reverso.advertencias],
        lado=LadoINE.FRENTE,
    )


def _tokens(texto: str) -> list[str]:
    return _sin_acentos(texto).lower().split()


def validate_against_user_input(datos: DatosINE, reclamados: DatosUsuario) -> ResultadoValidacion:
    coincidencias: list[str] = []
    discrepancias: list[str] = []

    if datos.curp and reclamados.curp:
        if datos.curp.upper() == reclamados.curp.strip().upper():
            coincidencias.append("CURP coincide")
        else:
            discrepancias.append(f"CURP no coincide: INE={datos.curp}, Usuario={reclamados.curp}")

    if datos.nombre_completo and reclamados.nombre:
        partes_usuario = _tokens(reclamados.nombre)
        comunes = [
            p for p in _tokens(datos.nombre_completo) if any(pu in p or p in pu for pu in partes_usuario)
        ]
        if len(comunes) >= 2:
            coincidencias.append("Nombre coincide")
        elif len(comunes) == 1:
            coincidencias.append("Nombre parcialmente coincide")
        else:
            discrepancias.append("Nombre no coincide")

    if datos.fecha_nacimiento and reclamados.fecha_nacimiento:
        if datos.fecha_nacimiento == reclamados.fecha_nacimiento:
            coincidencias.append("Fecha de nacimiento coincide")
        else:
            discrepancias.append("Fecha de nacimiento no coincide")

    return ResultadoValidacion(
        es_valido=not discrepancias and bool(coincidencias),
        coincidencias=coincidencias,
        discrepancias=discrepancias,
    )

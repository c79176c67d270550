import io
import logging
import os
import re
from dataclasses import dataclass

import pdfplumber
import pytesseract
from PIL import Image

logger = logging.getLogger(__name__)

GARBAGE_PATTERNS = (
    re.compile(r"^[^a-zA-ZáéíóúñÁÉÍÓÚÑ0-9]+$"),
    re.compile(r"^[|lI1]{3,}$"),
    re.compile(r"^[-_=]{3,}$"),
    re.compile(r"^[.,:;]{3,}$"),
    re.compile(r"^[0-9]$"),
    re.compile(r"^.{1,2}$"),
)

PALABRAS_CORTAS_VALIDAS = frozenset(
    {
        "a", "y", "o", "u", "e", "el", "la", "de", "en", "no", "si", "al", "del", "un",
        "una", "por", "con", "sin", "que", "se", "su", "le", "lo", "me", "te", "mi",
        "tu", "es", "ha", "he",
    }
)

PATRONES_DOCUMENTO = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"contrato", r"trabajador", r"empresa", r"fecha", r"firma", r"salario", r"pago",
        r"prestacion", r"despido", r"renuncia", r"finiquito", r"liquidacion", r"jornada",
        r"horario", r"conciliacion", r"demanda", r"audiencia", r"citatorio", r"nombre",
        r"domicilio", r"telefono", r"curp", r"rfc",
    )
)

ALFANUMERICO = re.compile(r"[a-zA-ZáéíóúñÁÉÍÓÚÑ0-9]")
PALABRA_VALIDA = re.compile(r"^[a-zA-ZáéíóúñÁÉÍÓÚÑ0-9]+$")


@dataclass(frozen=True)
class CalidadOCR:
    valido: bool
    puntaje: int
    motivo: str


class OCRService:

    @staticmethod
    def _is_garbage(palabra: str) -> bool:
        for pattern in GARBAGE_PATTERNS:
            if pattern.match(palabra):
                return not (len(palabra) <= 3 and palabra.lower() in PALABRAS_CORTAS_VALIDAS)
        return False

    @staticmethod
    def clean_ocr_text(texto: str) -> str:
        """
        Elimina basura típica del OCR (símbolos sueltos, líneas, letras aisladas).
        Conserva líneas con al menos dos palabras o una palabra de 4+ caracteres.
        """
        if not texto:
            return ""
        lineas_limpias: list[str] = []
        for linea in texto.split("\n"):
            palabras = [p for p in linea.split() if not OCRService._is_garbage(p)]
            if len(palabras) >= 2 or (len(palabras) == 1 and len(palabras[0]) >= 4):
                lineas_limpias.append(" ".join(palabras))
        return "\n".join(lineas_limpias)

    @staticmethod
    def assess_ocr_text(texto: str) -> CalidadOCR:
        if not texto or len(texto) < 10:
            return CalidadOCR(valido=False, puntaje=0, motivo="Texto muy corto")

        alpha_ratio = len(ALFANUMERICO.findall(texto)) / len(texto)
        palabras = [p for p in texto.split() if len(p) >= 3]
        validas = [p for p in palabras if PALABRA_VALIDA.match(p)]
        word_ratio = len(validas) / len(palabras) if palabras else 0
        coincidencias = sum(1 for p in PATRONES_DOCUMENTO if p.search(texto))
        pattern_score = min(1, coincidencias / 3)

        puntaje = round(alpha_ratio * 30 + word_ratio * 40 + pattern_score * 30)
        if puntaje >= 50:
            return CalidadOCR(valido=True, puntaje=puntaje, motivo="Texto legible")
        if puntaje >= 30:
            return CalidadOCR(valido=True, puntaje=puntaje, motivo="Texto parcialmente legible")
        return CalidadOCR(
            valido=False,
            puntaje=puntaje,
            motivo="Calidad insuficiente - intenta mejorar la imagen",
        )

    @staticmethod
    def image_to_text(imagen: Image.Image) -> str:
        """OCR de una imagen descartando palabras bajo el umbral de confianza."""
        lang = os.getenv("OCR_LANG", "spa")
        min_conf = float(os.getenv("OCR_MIN_WORD_CONFIDENCE", "40"))
        try:
            data = pytesseract.image_to_data(imagen, lang=lang, output_type=pytesseract.Output.DICT)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            logger.warning("ocr_failed lang=%s error=%s", lang, exc)
            return ""

        lineas: dict[tuple[int, int, int], list[str]] = {}
        descartadas = 0
        for i, palabra in enumerate(data.get("text", [])):
            palabra = (palabra or "").strip()
            if not palabra:
                continue
            if float(data["conf"][i]) < min_conf:
                descartadas += 1
                continue
            clave = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lineas.setdefault(clave, []).append(palabra)

        logger.debug("ocr_words kept=%s dropped=%s", sum(len(v) for v in lineas.values()), descartadas)
        return "\n".join(" ".join(lineas[k]) for k in sorted(lineas))

    @staticmethod
    def read_document(contenido: bytes, filename: str | None = None) -> tuple[str, str]:
        """
        Devuelve (texto, estrategia). Los PDF con texto embebido se leen como
        NATIVO; los escaneados y las imágenes pasan por OCR (ESCANEADO).
        Lanza ValueError si el archivo está vacío o no es PDF ni imagen.
        """
        if not contenido:
            raise ValueError("Archivo vacío")

        nombre = (filename or "").lower()
        if contenido[:5] == b"%PDF-" or nombre.endswith(".pdf"):
            return OCRService._read_pdf(contenido, nombre)

        try:
            imagen = Image.open(io.BytesIO(contenido))
            imagen.load()
        except OSError as exc:
            raise ValueError(f"Formato de archivo no soportado: {filename or 'sin nombre'}") from exc

        texto = OCRService.image_to_text(imagen)
        logger.info("document_read filename=%s strategy=ESCANEADO chars=%s", filename, len(texto))
        return texto, "ESCANEADO"

    @staticmethod
    def _read_pdf(contenido: bytes, nombre: str) -> tuple[str, str]:
        resolution = int(os.getenv("OCR_PDF_RESOLUTION", "200"))
        try:
            with pdfplumber.open(io.BytesIO(contenido)) as pdf:
                if not pdf.pages:
                    raise ValueError("PDF sin páginas")
                strategy = "ESCANEADO"
                if len((pdf.pages[0].extract_text() or "").strip()) > 50:
                    strategy = "NATIVO"

                partes: list[str] = []
                for page in pdf.pages:
                    if strategy == "NATIVO":
                        partes.append(page.extract_text() or "")
                    else:
                        pil_image = page.to_image(resolution=resolution).original
                        partes.append(OCRService.image_to_text(pil_image))
        except ValueError:
            raise
        except Exception as exc:
            raise ValueError(f"PDF ilegible: {nombre or 'sin nombre'}") from exc

        texto = "\n".join(p for p in partes if p)
        logger.info("document_read filename=%s strategy=%s chars=%s", nombre, strategy, len(texto))
        return texto, strategy

from __future__ import annotations


MOCK_INE_FRENTE_TEXT = """
INSTITUTO NACIONAL ELECTORAL
MÉXICO CREDENCIAL PARA VOTAR
NOMBRE GOMEZ MARTINEZ JUAN CARLOS
DOMICILIO
CALLE REFORMA NO. 123 INT 4
COL. CENTRO C.P. 06000
ALCALDIA CUAUHTEMOC, CIUDAD DE MEXICO
FECHA DE NACIMIENTO 01/01/1985
SEXO H
"""

MOCK_INE_REVERSO_TEXT = """
CLAVE DE ELECTOR GMMRJN85010109H100
CURP GOMJ850101HDFXYZ09
AÑO DE REGISTRO 2003 01
ESTADO 09 MUNICIPIO 015 SECCION 4321
EMISION 2020 VIGENCIA 2020-2030
1234 5678 9012 3456
"""

MOCK_INE_NOMBRE_Y_CURP_TEXT = """
NOMBRE JUAN PEREZ LOPEZ
CURP GOMJ850101HDFXYZ09
"""

MOCK_INE_CURP_FECHA_IMPOSIBLE_TEXT = """
CURP GOMJ851301HDFXYZ09
"""

MOCK_OCR_BASURA_TEXT = """
NOMBRE JUAN PEREZ
|||| ---- ...
x
DE LA
CURP
"""

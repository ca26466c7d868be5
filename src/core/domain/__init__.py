"""Dominio: identificadores GS1, enlaces de resolver y contexto de publicación.

Por qué aparte:
- Modelos Pydantic v2 con alias camelCase del wire; sin HTTP ni CLI.
- La tabla de tipos de credencial (`kinds`) parametriza el orquestador.
"""

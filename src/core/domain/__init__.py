"""Modelos y entidades del dominio.

Por qué:
- Aquí viven la sesión, las wallets, los intents y la taxonomía de errores.
- El dominio no conoce HTTP ni CLI: solo conceptos del problema.
"""

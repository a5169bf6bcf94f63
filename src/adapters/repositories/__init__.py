"""Repositorios REST del backend.

Cada repositorio conoce un endpoint y traduce entre JSON del backend y los
modelos del dominio (vía `adapters.normalizers`).
"""

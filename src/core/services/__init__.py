"""Servicios de aplicación (casos de uso sobre los repositorios)."""

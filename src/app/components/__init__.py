"""Reusable UI components for the squad builder application."""

from .athlete_table import render_athlete_table
from .squad_status import render_squad_status
from .validation_display import render_validation

__all__ = ["render_athlete_table", "render_squad_status", "render_validation"]

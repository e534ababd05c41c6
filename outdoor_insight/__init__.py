"""Outdoor-activity suitability scoring from Open-Meteo forecasts."""

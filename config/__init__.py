"""Конфигурация проекта Book Scout."""

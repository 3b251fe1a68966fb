"""SQLAlchemy persistence adapters: tables, mappers, repositories, unit of work."""

from .orm import start_mappers

start_mappers()

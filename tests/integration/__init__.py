"""
Tests de integración.

- Repositorios SQL sobre SQLite (aiosqlite), incluida la creación concurrente
- Reintento ante deadlocks
- Health checks
"""

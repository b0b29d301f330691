"""
Routers module - API endpoint handlers.

- instructions: POST /api (natural language control), GET /api/stats
"""

"""
API Routes - HTTP endpoint handlers

Each area (clock, system) gets its own router, included by create_app()
under /api/v1.
"""

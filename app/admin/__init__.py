"""
Admin gate and admin-only actions.

Import the router from app.admin.router directly; auth is imported by
every admin-gated router and must stay free of router imports.
"""

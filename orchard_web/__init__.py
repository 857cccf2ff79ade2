"""
HTTP layer for Orchard.

create_app() in orchard_web.main wires the core services into a FastAPI
application; routers read them from app.state through orchard_web.deps.
"""

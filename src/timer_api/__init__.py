"""
FastAPI Timer Backend package.

The ASGI application lives in ``timer_api.main`` (``timer_api.main:app``);
``timer_api.main.create_app`` builds one with explicit settings or storage.
"""

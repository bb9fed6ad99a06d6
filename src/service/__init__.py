"""HTTP service: FastAPI app, middleware and routers."""

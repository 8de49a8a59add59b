"""
dyscorrect API Server.

Run: uvicorn dyscorrect.server.main:app --port 8000
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from dyscorrect.logging_utils import setup_logger
from dyscorrect.server.routes import analysis, essays, patch, sessions


def print_routes(app: FastAPI):
    print("\n" + "=" * 60)
    print("dyscorrect API Routes")
    print("=" * 60)

    routes = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ", ".join(route.methods - {"HEAD", "OPTIONS"})
            routes.append((methods, route.path, route.name))

    routes.sort(key=lambda r: (r[1], r[0]))

    for methods, path, name in routes:
        print(f"  {methods:8} {path:40} → {name}")

    print("=" * 60 + "\n")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger()
    print_routes(app)
    yield


app = FastAPI(title="dyscorrect API", lifespan=lifespan)

# Expo dev server (web) and local tooling
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8081", "http://localhost:19006", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(essays.router)
app.include_router(sessions.router)
app.include_router(patch.router)
app.include_router(analysis.router)


@app.get("/")
async def root():
    return {"name": "dyscorrect API", "version": "0.1.0"}

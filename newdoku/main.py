"""Main FastAPI application for the Sudoku solver."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import _get_puzzle_store, router


@asynccontextmanager
async def _app_lifespan(_: FastAPI):
    """Open the puzzle store eagerly so misconfiguration fails at startup."""
    store, error = _get_puzzle_store()
    if store is None:
        raise RuntimeError(f"Failed to open puzzle store at startup: {error}")
    yield


app = FastAPI(
    title="Sudoku Solver API",
    description="API for solving Sudoku puzzles from JSON grids or stored puzzles",
    version="1.0.0",
    lifespan=_app_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Sudoku Solver API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("newdoku.main:app", host="0.0.0.0", port=8000, reload=True)

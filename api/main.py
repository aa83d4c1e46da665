from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from categories import router as categories_router
from core import errors, settings
from core.db import Database
from products import router as products_router

settings.configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, handed to repositories through app.state.
    database = Database()
    await database.connect()
    app.state.db = database
    try:
        yield
    finally:
        await database.close()


app = FastAPI(lifespan=lifespan)

# Allow the frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install_exception_handlers(app)

app.include_router(products_router.router, tags=["products"])
app.include_router(categories_router.router, tags=["categories"])
app.include_router(auth_router.router, tags=["users"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "Welcome to the catalog API."}

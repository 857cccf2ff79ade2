"""Plain HTML landing pages"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index() -> str:
    return "<h1>Hello World! 🐳</h1><p>CRUD /api/fruits</p>"


@router.get("/home", response_class=HTMLResponse)
async def home() -> str:
    return "<h1>Homepage!</h1>"

import asyncio
import logging
import os
import shutil
import uuid
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from card_reader import CardSourceError, parse_cards
from grid_mapper import FONT_SIZES, GridSpec
from page_composer import CellBorder, Page, compose
from pdf_builder import DocumentWriteFailed, build_pdf

load_dotenv()

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
JOBS_DIR = Path(os.getenv("JOBS_DIR", "jobs"))
ACCESS_CODE = os.getenv("ACCESS_CODE", "flashcards")
MAX_CARDS = int(os.getenv("MAX_CARDS", "1600"))
JOB_TTL = timedelta(hours=1)

jobs: dict[str, dict] = {}


async def cleanup_old_jobs():
    while True:
        await asyncio.sleep(300)
        remove_expired_jobs(datetime.now() - JOB_TTL)


def remove_expired_jobs(cutoff: datetime) -> list[str]:
    to_remove = [job_id for job_id, info in jobs.items() if info["created_at"] < cutoff]
    for job_id in to_remove:
        job_dir = JOBS_DIR / job_id
        if job_dir.exists():
            shutil.rmtree(job_dir, ignore_errors=True)
        jobs.pop(job_id, None)
    if to_remove:
        logger.info("removed %d expired jobs", len(to_remove))
    return to_remove


@asynccontextmanager
async def lifespan(app: FastAPI):
    task = asyncio.create_task(cleanup_old_jobs())
    yield
    task.cancel()


app = FastAPI(lifespan=lifespan)
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return templates.TemplateResponse(
        request, "index.html", {"font_sizes": FONT_SIZES, "max_cards": MAX_CARDS}
    )


def _load_request(data: dict) -> tuple[list, GridSpec] | str:
    """Validate a generate/preview body. Returns (cards, spec) or an error message."""
    code = str(data.get("code", "")).strip()
    if code != ACCESS_CODE:
        return "Invalid access code"

    try:
        font_size = float(data.get("fontSize", FONT_SIZES[0]))
    except (TypeError, ValueError):
        return "Invalid font size"
    if font_size not in FONT_SIZES:
        return f"Font size must be one of {', '.join(f'{s:g}' for s in FONT_SIZES)}"

    records = str(data.get("records", ""))
    try:
        cards = parse_cards(records.splitlines())
    except CardSourceError as e:
        return str(e)

    if not cards:
        return "No cards provided"
    if len(cards) > MAX_CARDS:
        return f"Maximum {MAX_CARDS} cards allowed"
    return cards, GridSpec(font_size=font_size)


def _page_json(page: Page) -> dict:
    instructions = []
    for instruction in page.instructions:
        kind = "border" if isinstance(instruction, CellBorder) else "text"
        instructions.append({"kind": kind, **asdict(instruction)})
    return {
        "side": page.side.value,
        "sheet": page.sheet_index,
        "cards": len(page.cards),
        "instructions": instructions,
    }


@app.post("/preview")
async def preview(request: Request):
    loaded = _load_request(await request.json())
    if isinstance(loaded, str):
        return {"error": loaded}
    cards, spec = loaded
    return {"pages": [_page_json(p) for p in compose(cards, spec)]}


@app.post("/generate")
async def generate(request: Request):
    loaded = _load_request(await request.json())
    if isinstance(loaded, str):
        return {"error": loaded}
    cards, spec = loaded

    job_id = uuid.uuid4().hex
    job_dir = JOBS_DIR / job_id
    job_dir.mkdir(parents=True)
    pdf_path = job_dir / "flash_cards.pdf"

    pages = compose(cards, spec)
    try:
        build_pdf(pages, pdf_path, spec)
    except DocumentWriteFailed as e:
        logger.error("job %s: %s", job_id, e)
        shutil.rmtree(job_dir, ignore_errors=True)
        return {"error": str(e)}

    jobs[job_id] = {
        "created_at": datetime.now(),
        "pdf_path": str(pdf_path),
        "cards": len(cards),
        "pages": len(pages),
    }
    logger.info("job %s: %d cards, %d pages", job_id, len(cards), len(pages))
    return {"job_id": job_id, "cards": len(cards), "pages": len(pages)}


@app.get("/download/{job_id}")
async def download(job_id: str):
    info = jobs.get(job_id)
    if not info:
        return {"error": "PDF not ready"}
    pdf_path = Path(info["pdf_path"])
    if not pdf_path.exists():
        return {"error": "PDF file not found"}
    return FileResponse(pdf_path, filename="flash_cards.pdf", media_type="application/pdf")

"""
Menu parsing API router.
"""
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, HTTPException, UploadFile, File, Form

from backend.api.models import ParseMenuRequest, ParseMenuResponse, ParserStatusResponse
from backend.core import llm
from backend.core.config import settings
from backend.core.menu_parsing import MenuParseError, LLMResponseError, PARSER_NAMES, get_parser
from backend.core.menu_parsing.pdf import extract_text_from_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/parse-menu", tags=["Menu Parsing"])

TEXT_EXTENSIONS = {".txt", ".text", ".md"}


def _run_parser(text: str, parser_name: Optional[str]) -> ParseMenuResponse:
    try:
        menu_parser = get_parser(parser_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        menu = menu_parser.parse(text)
    except MenuParseError as e:
        logger.error(f"Menu parsing failed with {menu_parser.name}: {e}")
        raise HTTPException(
            status_code=502,
            detail={
                "error": "Failed to parse menu",
                "details": str(e),
                "raw_response": e.raw_response if isinstance(e, LLMResponseError) else None,
            },
        )

    logger.info(f"Menu parsing completed: {len(menu)} days via {menu_parser.name}")
    return ParseMenuResponse(
        parser=menu_parser.name,
        data=menu.to_dict(),
        skipped=[b.to_dict() for b in menu.skipped],
    )


def _upload_text(upload: UploadFile) -> str:
    """Raw text of an uploaded PDF or plain-text file."""
    filename = upload.filename or ""
    suffix = Path(filename).suffix.lower()
    content_type = upload.content_type or ""
    content = upload.file.read()

    if suffix == ".pdf" or "pdf" in content_type:
        try:
            return extract_text_from_pdf(content)
        except Exception as e:
            raise HTTPException(status_code=400, detail=f"Could not read PDF {filename}: {e}")

    if suffix in TEXT_EXTENSIONS or content_type.startswith("text/"):
        return content.decode("utf-8", errors="replace")

    raise HTTPException(
        status_code=400,
        detail=f"Unsupported file type for {filename} (only PDF and plain text are supported)",
    )


@router.get("/status", response_model=ParserStatusResponse)
def parser_status():
    """Report the configured parser and whether the LLM parser can run."""
    return ParserStatusResponse(
        backend=settings.MENU_PARSER_BACKEND,
        fallback=settings.MENU_PARSER_FALLBACK,
        llm_available=llm.check_available(),
        llm_model=settings.XAI_MODEL,
        parsers=list(PARSER_NAMES),
    )


@router.post("", response_model=ParseMenuResponse)
def parse_menu(request: ParseMenuRequest):
    """Parse menu text into the day-indexed weekly menu shape."""
    if not request.text or not request.text.strip():
        raise HTTPException(status_code=400, detail="Invalid request: text field is required")

    logger.info("Received menu parsing request")
    return _run_parser(request.text, request.parser)


@router.post("/upload", response_model=ParseMenuResponse)
def parse_menu_upload(
    files: List[UploadFile] = File(...),
    parser: Optional[str] = Form(None),
):
    """Extract text from uploaded PDFs/text files, in upload order, and parse it."""
    texts = []
    for upload in files:
        text = _upload_text(upload)
        if text.strip():
            texts.append(text)
        else:
            logger.warning(f"No text extracted from {upload.filename}")

    if not texts:
        raise HTTPException(status_code=400, detail="No text could be extracted from the uploaded files")

    return _run_parser("\n\n".join(texts), parser)

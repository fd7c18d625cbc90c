"""
Pydantic request/response models for the API.
"""
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


# ============== Menu Parsing ==============

class ParseMenuRequest(BaseModel):
    text: Optional[str] = None
    parser: Optional[str] = None  # "rules" or "llm"; server default when omitted


class SkippedBlockResponse(BaseModel):
    blockIndex: int
    header: str
    reason: str


class ParseMenuResponse(BaseModel):
    success: bool = True
    parser: str
    data: Dict[str, Any]
    skipped: List[SkippedBlockResponse] = []


class ParserStatusResponse(BaseModel):
    backend: str
    fallback: bool
    llm_available: bool
    llm_model: str
    parsers: List[str]

"""BOM API — spreadsheet import and per-line batch matching."""

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from ..config import get_settings
from ..schemas.bom import BomMatchRequest, BomMatchResponse, BomParseResponse
from ..schemas.matching import MatchOptions
from ..services.bom_import import BOM_TEMPLATE_CSV, match_bom, parse_bom

router = APIRouter(tags=["bom"])


@router.get("/api/bom/template", response_class=PlainTextResponse)
def bom_template():
    return PlainTextResponse(
        BOM_TEMPLATE_CSV,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="bom_template.csv"'},
    )


@router.post("/api/bom/parse", response_model=BomParseResponse)
async def parse_bom_upload(file: UploadFile = File(...)):
    content = await file.read()
    max_bytes = get_settings().max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(413, f"File too large (max {get_settings().max_upload_size_mb} MB)")
    lines = parse_bom(content, file.filename or "")
    if not lines:
        raise HTTPException(400, "No BOM rows found; expected a header row and at least one data row")
    return BomParseResponse(count=len(lines), lines=lines)


@router.post("/api/bom/match", response_model=BomMatchResponse)
def match_bom_lines(payload: BomMatchRequest):
    options = payload.options or MatchOptions(max_results=get_settings().bom_max_results)
    items = match_bom(payload.lines, payload.suppliers, options)
    return BomMatchResponse(processed=len(items), items=items)
